import json
import os
import subprocess
import tempfile
import unittest
from unittest.mock import patch

from svhier.extractor import extract_modules
from svhier.frontend import FrontendError, frontend_registry, read_source
from svhier.verible_backend import (
    DEFAULT_EXECUTABLE,
    VERIBLE_PATH_ENV,
    VeribleVerilogSyntax,
    default_executable,
)
from svhier.vocabulary import VERIBLE

from tree_fixtures import DESIGN_SOURCE, design_tree, tiny_tree


def completed(stdout, returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestExecutable(unittest.TestCase):
    def test_default_executable(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(default_executable(), DEFAULT_EXECUTABLE)

    def test_environment_override(self):
        with patch.dict(os.environ, {VERIBLE_PATH_ENV: "/opt/verible/bin/verible-verilog-syntax"}):
            self.assertEqual(VeribleVerilogSyntax().executable, "/opt/verible/bin/verible-verilog-syntax")

    def test_explicit_executable_wins(self):
        with patch.dict(os.environ, {VERIBLE_PATH_ENV: "/env/path"}):
            self.assertEqual(VeribleVerilogSyntax("/my/verible").executable, "/my/verible")

    def test_registered(self):
        frontend = frontend_registry.create("verible")
        self.assertIsInstance(frontend, VeribleVerilogSyntax)
        self.assertIs(frontend.vocabulary, VERIBLE)


@patch("svhier.verible_backend.subprocess.run")
class TestParseFiles(unittest.TestCase):
    def setUp(self):
        self.frontend = VeribleVerilogSyntax("verible-verilog-syntax")

    def test_command_line(self, mock_run):
        mock_run.return_value = completed(json.dumps({}))
        self.frontend.parse_files(["a.sv", "b.sv"])
        args = mock_run.call_args[0][0]
        self.assertEqual(args, ["verible-verilog-syntax", "-export_json", "-printtree", "a.sv", "b.sv"])

    @patch("svhier.verible_backend.read_source", return_value=DESIGN_SOURCE)
    def test_tree_built_per_file(self, mock_read, mock_run):
        mock_run.return_value = completed(json.dumps({"design.sv": {"tree": design_tree()}}))
        data = self.frontend.parse_files(["design.sv"])
        mock_read.assert_called_once_with("design.sv")
        file_data = data["design.sv"]
        self.assertEqual(file_data.errors, [])
        self.assertEqual(file_data.tree.tag, "kDescriptionList")
        self.assertEqual(len(file_data.tree.find_all("kModuleDeclaration")), 3)

    @patch("svhier.verible_backend.read_source", return_value="module m(; endmodule\n")
    def test_syntax_errors_collected(self, mock_read, mock_run):
        output = {"bad.sv": {"errors": [{"line": 0, "column": 9, "phase": "parse", "text": ";"}]}}
        mock_run.return_value = completed(json.dumps(output), returncode=1)
        data = self.frontend.parse_files(["bad.sv"])
        self.assertIsNone(data["bad.sv"].tree)
        self.assertEqual(data["bad.sv"].errors, ["0:9: parse error at ';'"])

    @patch("svhier.verible_backend.read_source")
    def test_malformed_tree_fails_only_that_file(self, mock_read, mock_run):
        source, good = tiny_tree()
        mock_read.return_value = source
        output = {
            "good.sv": {"tree": good},
            "bad.sv": {"tree": {"tag": "root", "children": [{"tag": "SymbolIdentifier"}]}},
        }
        mock_run.return_value = completed(json.dumps(output))
        with self.assertLogs("svhier.frontend", level="WARNING"):
            data = self.frontend.parse_files(["good.sv", "bad.sv"])
        self.assertIsNotNone(data["good.sv"].tree)
        self.assertIsNone(data["bad.sv"].tree)
        self.assertEqual(len(data["bad.sv"].errors), 1)

    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError("verible-verilog-syntax")
        with self.assertRaises(FrontendError):
            self.frontend.parse_files(["a.sv"])

    def test_no_output(self, mock_run):
        mock_run.return_value = completed("", returncode=2, stderr="bad flag")
        with self.assertRaises(FrontendError) as ctx:
            self.frontend.parse_files(["a.sv"])
        self.assertIn("bad flag", str(ctx.exception))

    def test_invalid_json(self, mock_run):
        mock_run.return_value = completed("{not json")
        with self.assertRaises(FrontendError):
            self.frontend.parse_files(["a.sv"])

    @patch("svhier.verible_backend.json.loads", side_effect=RecursionError("maximum recursion depth exceeded"))
    def test_json_nested_too_deeply(self, mock_loads, mock_run):
        mock_run.return_value = completed("[[[[]]]]")
        with self.assertRaises(FrontendError) as ctx:
            self.frontend.parse_files(["a.sv"])
        self.assertIn("nested too deeply", str(ctx.exception))


@patch("svhier.verible_backend.subprocess.run")
class TestSourceOffsets(unittest.TestCase):
    """Token offsets index the file's bytes exactly as stored on disk."""

    def _parse_module_name(self, mock_run, content):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "top.sv")
            with open(path, "wb") as fh:
                fh.write(content)
            start = content.index(b"top;")
            tree = {"tag": "kDescriptionList", "children": [
                {"tag": "kModuleDeclaration", "children": [
                    {"tag": "kModuleHeader", "children": [
                        {"tag": "module", "start": start - 7, "end": start - 1},
                        {"tag": "SymbolIdentifier", "start": start, "end": start + 3},
                        {"tag": ";", "start": start + 3, "end": start + 4},
                    ]},
                ]},
            ]}
            mock_run.return_value = completed(json.dumps({path: {"tree": tree}}))
            data = VeribleVerilogSyntax("verible").parse_files([path])
        return extract_modules(data[path].tree, path)[0].name

    def test_crlf_line_endings(self, mock_run):
        content = b"// header\r\n// more\r\nmodule top;\r\nendmodule\r\n"
        self.assertEqual(self._parse_module_name(mock_run, content), "top")

    def test_invalid_utf8_before_token(self, mock_run):
        content = b"// caf\xe9 \xff\xfe\nmodule top;\nendmodule\n"
        self.assertEqual(self._parse_module_name(mock_run, content), "top")

    def test_read_source_keeps_bytes(self, mock_run):
        content = b"module m;\r\nendmodule\r\n"
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "m.sv")
            with open(path, "wb") as fh:
                fh.write(content)
            self.assertEqual(read_source(path), content)
            with self.assertLogs("svhier.frontend", level="WARNING"):
                self.assertIsNone(read_source(os.path.join(tmp, "missing.sv")))


@patch("svhier.verible_backend.subprocess.run")
class TestParseString(unittest.TestCase):
    def test_source_passed_on_stdin(self, mock_run):
        source, tree = tiny_tree()
        mock_run.return_value = completed(json.dumps({"-": {"tree": tree}}))
        data = VeribleVerilogSyntax("verible").parse_string(source)
        self.assertEqual(mock_run.call_args[0][0][-1], "-")
        self.assertEqual(mock_run.call_args[1]["input"], source)
        header = data["-"].tree.find("kModuleHeader")
        self.assertEqual(header.find("SymbolIdentifier").text, "m")


if __name__ == '__main__':
    unittest.main()
