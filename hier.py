import argparse
import logging
import os
import sys

from svhier.analysis import DesignAnalysis
from svhier.frontend import FrontendError, frontend_registry
from svhier.hierarchy import DuplicateModuleError
from svhier.renderers import renderer_registry
from svhier.verible_backend import default_executable


def _check_files(files) -> None:
    if not files:
        sys.exit("Error: No file provided.")
    for path in files:
        if not os.path.isfile(path):
            sys.exit(f"Error: File not found: {path}")


def _create_frontend(args: argparse.Namespace):
    if args.frontend == "verible":
        return frontend_registry.create("verible", executable=args.verible_path)
    return frontend_registry.create(args.frontend)


def _create_renderer(args: argparse.Namespace):
    if args.format == "text":
        return renderer_registry.create("text", color=not args.no_color and sys.stdout.isatty())
    return renderer_registry.create(args.format)


def _load(args: argparse.Namespace) -> DesignAnalysis:
    """Parse the files named on the command line and extract their modules."""
    _check_files(args.files)
    analysis = DesignAnalysis(_create_frontend(args), strict=args.strict)
    try:
        analysis.load_design(args.files)
    except (FrontendError, DuplicateModuleError, ImportError) as exc:
        sys.exit(f"Error: {exc}")
    for path in analysis.failed_files:
        print(f"Warning: no syntax tree for {path}, skipped", file=sys.stderr)
    return analysis


def cmd_modules(args: argparse.Namespace) -> int:
    """Print name, ports, parameters, imports and instances of every module."""
    analysis = _load(args)
    renderer = _create_renderer(args)
    print(renderer.render_modules(analysis.records))
    return 0


def cmd_top(args: argparse.Namespace) -> int:
    """Print the modules no other module instantiates."""
    analysis = _load(args)
    renderer = _create_renderer(args)
    print(renderer.render_top_modules(analysis.top_modules()))
    return 0


def cmd_hierarchy(args: argparse.Namespace) -> int:
    """Print the design hierarchy below each top module.

    Top modules can be given with ``--top``; by default every module
    that nothing instantiates is used.
    """
    analysis = _load(args)
    renderer = _create_renderer(args)
    tops = args.top or analysis.top_modules()
    missing = [name for name in tops if name not in analysis.modules]
    if missing:
        sys.exit(f"Error: Unknown top module(s): {', '.join(missing)}")
    entries = analysis.hierarchy(tops, include_unresolved=args.show_unresolved)
    print(renderer.render_hierarchy(entries))
    for cycle in analysis.cycles():
        print(f"Warning: recursive instantiation: {' -> '.join(cycle)}", file=sys.stderr)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hier.py",
        description="Module and design hierarchy explorer for SystemVerilog.",
    )

    # Global options
    parser.add_argument(
        "--format",
        choices=renderer_registry.keys(),
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--frontend",
        choices=frontend_registry.keys(),
        default="verible",
        help="Syntax front-end (default: verible).",
    )
    parser.add_argument(
        "--verible-path",
        default=default_executable(),
        help="verible-verilog-syntax executable "
             "(default: $SVHIER_VERIBLE_PATH or verible-verilog-syntax).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when two modules share a name instead of keeping the last one.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colours in text output.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output.",
    )

    subparsers = parser.add_subparsers(dest="command")

    modules = subparsers.add_parser(
        "modules",
        help="List modules with their ports, parameters, imports and instances.",
    )
    modules.set_defaults(func=cmd_modules)

    top = subparsers.add_parser(
        "top",
        help="List top modules.",
    )
    top.set_defaults(func=cmd_top)

    hier = subparsers.add_parser(
        "hierarchy",
        help="Print the instantiation hierarchy.",
    )
    hier.add_argument(
        "--top",
        action="append",
        metavar="MODULE",
        help="Start from MODULE instead of the detected top modules (repeatable).",
    )
    hier.add_argument(
        "--show-unresolved",
        action="store_true",
        help="Also show instances of modules without a declaration.",
    )
    hier.set_defaults(func=cmd_hierarchy)

    for sub in (modules, top, hier):
        sub.add_argument(
            "files",
            nargs="+",
            metavar="FILE",
            help="SystemVerilog files to parse.",
        )

    return parser


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("svhier").setLevel(logging.DEBUG)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
