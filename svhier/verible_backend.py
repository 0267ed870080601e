"""``verible-verilog-syntax`` front-end.

Runs the Verible syntax checker with ``-export_json -printtree`` and
converts its output into :class:`svhier.builder.SyntaxData` objects.
The tool prints one JSON object mapping every input path (``-`` for
standard input) to its results::

    {"top.sv": {"tree": {...}, "errors": [{"line": 3, "column": 7,
                                           "phase": "parse", "text": "..."}]}}

The tool exits with a non-zero status when a file has syntax errors but
still reports the other files, so only a run that produced no output at
all is treated as a failure.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from typing import Any, Dict, List, Optional

from .builder import SyntaxData
from .frontend import FrontendError, SyntaxFrontend, frontend_registry, read_source

logger = logging.getLogger(__name__)

#: Environment variable overriding the default executable.
VERIBLE_PATH_ENV = "SVHIER_VERIBLE_PATH"
DEFAULT_EXECUTABLE = "verible-verilog-syntax"


def default_executable() -> str:
    return os.environ.get(VERIBLE_PATH_ENV) or DEFAULT_EXECUTABLE


@frontend_registry.register("verible")
class VeribleVerilogSyntax(SyntaxFrontend):
    """``verible-verilog-syntax`` wrapper.

    Args:
        executable: Path to the ``verible-verilog-syntax`` binary;
            defaults to ``$SVHIER_VERIBLE_PATH`` or the binary on ``PATH``.
        skip_null: Drop null children from the trees.
    """

    vocabulary_name = "verible"

    def __init__(self, executable: Optional[str] = None, skip_null: bool = True) -> None:
        super().__init__(skip_null=skip_null)
        self.executable = executable or default_executable()

    def parse_files(self, paths: List[str]) -> Dict[str, SyntaxData]:
        return self._parse(list(paths))

    def parse_string(self, text: str) -> Dict[str, SyntaxData]:
        return self._parse(["-"], input_=text)

    # ------------------------------------------------------------------
    # Internal helpers

    def _run(self, paths: List[str], input_: Optional[str]) -> str:
        args = [self.executable, "-export_json", "-printtree", *paths]
        logger.debug("running %s", " ".join(args))
        try:
            proc = subprocess.run(
                args,
                input=input_,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise FrontendError(f"{self.executable} not found") from exc
        if not proc.stdout.strip():
            raise FrontendError(
                f"{self.executable} exited with status {proc.returncode}: "
                f"{proc.stderr.strip() or 'no output'}"
            )
        return proc.stdout

    def _parse(self, paths: List[str], input_: Optional[str] = None) -> Dict[str, SyntaxData]:
        output = self._run(paths, input_)
        try:
            json_data = json.loads(output)
        except json.JSONDecodeError as exc:
            raise FrontendError(f"{self.executable} produced invalid JSON: {exc}") from exc
        except RecursionError as exc:
            raise FrontendError(f"{self.executable} produced JSON nested too deeply to decode") from exc
        if not isinstance(json_data, dict):
            raise FrontendError(f"{self.executable} produced unexpected JSON output")

        data: Dict[str, SyntaxData] = {}
        for file_path, file_json in json_data.items():
            source = input_ if file_path == "-" else read_source(file_path)
            file_data = SyntaxData(source_code=source)
            if not isinstance(file_json, dict):
                file_data.errors.append("unexpected per-file result")
                data[file_path] = file_data
                continue
            file_data.errors.extend(_format_error(err) for err in file_json.get("errors", []))
            if file_json.get("tree") is not None:
                self._attach_tree(file_path, file_json["tree"], file_data)
            data[file_path] = file_data
        return data


def _format_error(err: Any) -> str:
    if not isinstance(err, dict):
        return str(err)
    line = err.get("line")
    column = err.get("column")
    phase = err.get("phase", "")
    text = err.get("text", "")
    location = f"{line}:{column}" if line is not None else "?"
    return f"{location}: {phase} error at {text!r}".strip()
