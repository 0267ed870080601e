"""Hand-written exported trees used by the tests.

The trees follow the shape ``verible-verilog-syntax -export_json``
produces.  Token offsets are computed from the source text by
:class:`TokenCursor`, which searches every token after the previous one,
so the fixtures must create tokens in source order.
"""

DESIGN_SOURCE = """\
module top #(parameter int WIDTH = 8) (input logic clk, output logic q);
  import pkg::*;
  mid #(.W(WIDTH)) u_mid (.clk(clk), .q(q));
  leaf u_leaf (.clk(clk));
endmodule

module mid (input logic clk, output logic q);
  leaf u_leaf0 (.clk(clk));
  NOT_FOUND u_ext ();
endmodule

module leaf (input logic clk);
endmodule
"""


class TokenCursor:
    """Create token objects with offsets taken from ``source``."""

    def __init__(self, source):
        self.source = source
        self.pos = 0

    def __call__(self, tag, text, inline=False):
        start = self.source.index(text, self.pos)
        end = start + len(text)
        self.pos = end
        token = {"tag": tag, "start": start, "end": end}
        if inline:
            token["text"] = text
        return token


def node(tag, *children):
    return {"tag": tag, "children": list(children)}


def _port(t, direction, name):
    return node(
        "kPortDeclaration",
        t(direction, direction),
        node("kDataType", node("kDataTypePrimitive", t("logic", "logic"))),
        node("kUnqualifiedId", t("SymbolIdentifier", name)),
        None,
    )


def _instance(t, type_name, inst_name, param=None):
    type_children = [t("SymbolIdentifier", type_name)]
    if param is not None:
        type_children.append(node("kActualParameterList", t("#", "#"), t("SymbolIdentifier", param)))
    return node(
        "kDataDeclaration",
        None,
        node("kInstantiationType", node("kUnqualifiedId", *type_children)),
        node(
            "kGateInstanceRegisterVariableList",
            node("kGateInstance", t("SymbolIdentifier", inst_name), node("kParenGroup", t("(", "("), t(")", ")"))),
        ),
        t(";", ";"),
    )


def design_tree():
    """Return the exported tree of :data:`DESIGN_SOURCE`."""
    t = TokenCursor(DESIGN_SOURCE)
    top = node(
        "kModuleDeclaration",
        node(
            "kModuleHeader",
            t("module", "module"),
            None,
            t("SymbolIdentifier", "top"),
            None,
            node(
                "kFormalParameterListDeclaration",
                t("#", "#"),
                node(
                    "kParenGroup",
                    t("(", "("),
                    node(
                        "kFormalParameterList",
                        node(
                            "kParamDeclaration",
                            t("parameter", "parameter"),
                            node("kParamType", t("int", "int"), t("SymbolIdentifier", "WIDTH")),
                            t("=", "="),
                            t("TK_DecNumber", "8"),
                        ),
                    ),
                    t(")", ")"),
                ),
            ),
            node(
                "kParenGroup",
                t("(", "("),
                node(
                    "kPortDeclarationList",
                    _port(t, "input", "clk"),
                    t(",", ","),
                    _port(t, "output", "q"),
                ),
                t(")", ")"),
            ),
            t(";", ";"),
        ),
        node(
            "kModuleItemList",
            node(
                "kPackageImportDeclaration",
                t("import", "import"),
                node(
                    "kPackageImportList",
                    node("kPackageImportItem", t("SymbolIdentifier", "pkg"), t("::", "::"), t("*", "*")),
                ),
                t(";", ";"),
            ),
            _instance(t, "mid", "u_mid", param="WIDTH"),
            _instance(t, "leaf", "u_leaf"),
        ),
        t("endmodule", "endmodule"),
    )
    mid = node(
        "kModuleDeclaration",
        node(
            "kModuleHeader",
            t("module", "module"),
            None,
            t("SymbolIdentifier", "mid"),
            None,
            None,
            node(
                "kParenGroup",
                t("(", "("),
                node(
                    "kPortDeclarationList",
                    _port(t, "input", "clk"),
                    t(",", ","),
                    _port(t, "output", "q"),
                ),
                t(")", ")"),
            ),
            t(";", ";"),
        ),
        node(
            "kModuleItemList",
            _instance(t, "leaf", "u_leaf0"),
            _instance(t, "NOT_FOUND", "u_ext"),
        ),
        t("endmodule", "endmodule"),
    )
    leaf = node(
        "kModuleDeclaration",
        node(
            "kModuleHeader",
            t("module", "module"),
            None,
            t("SymbolIdentifier", "leaf"),
            None,
            None,
            node(
                "kParenGroup",
                t("(", "("),
                node("kPortDeclarationList", _port(t, "input", "clk")),
                t(")", ")"),
            ),
            t(";", ";"),
        ),
        None,
        t("endmodule", "endmodule"),
    )
    return node("kDescriptionList", top, mid, leaf)


def tiny_tree():
    """``module m; endmodule`` with a null child between the two tokens."""
    source = "module m; endmodule\n"
    t = TokenCursor(source)
    tree = node(
        "kDescriptionList",
        node(
            "kModuleDeclaration",
            node("kModuleHeader", t("module", "module"), None, t("SymbolIdentifier", "m"), t(";", ";")),
            None,
            t("endmodule", "endmodule"),
        ),
    )
    return source, tree
