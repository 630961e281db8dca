"""Formatting of command results as text, JSON or SARIF."""

from __future__ import annotations

import json
import os
import sys
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, TextIO

from skilo.diagnostics import Diagnostic, ValidationResult
from skilo.lang import OutputFormat

VERSION = "0.4.0"
SARIF_SCHEMA = (
    "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/"
    "sarif-2.1/schema/sarif-schema-2.1.0.json"
)
SARIF_VERSION = "2.1.0"
INFORMATION_URI = "https://github.com/example/skilo"

Results = Iterable[tuple[str, ValidationResult]]

_BOLD = "1"
_DIM = "2"
_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_CYAN = "36"


def _color_enabled(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    force = os.environ.get("CLICOLOR_FORCE")
    if force and force != "0":
        return True
    if os.environ.get("CLICOLOR") == "0":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _totals(results: list[tuple[str, ValidationResult]]) -> tuple[int, int]:
    errors = sum(len(result.errors) for _, result in results)
    warnings = sum(len(result.warnings) for _, result in results)
    return errors, warnings


def _level(diagnostic: Diagnostic) -> str:
    return "error" if diagnostic.code.is_error() else "warning"


class OutputFormatter(ABC):
    """Writes validation results and messages in one output format."""

    def __init__(self, quiet: bool = False, color: bool | None = None) -> None:
        self.quiet = quiet
        self.color = color

    def _paint(self, text: str, stream: TextIO, *codes: str) -> str:
        enabled = self.color if self.color is not None else _color_enabled(stream)
        if not enabled or not codes:
            return text
        return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"

    @abstractmethod
    def format_validation(self, results: Results) -> str:
        """Render (path, result) pairs as a single string."""

    @abstractmethod
    def format_message(self, message: str) -> None:
        """Report an informational message."""

    @abstractmethod
    def format_error(self, message: str) -> None:
        """Report an error message; shown even when quiet."""

    @abstractmethod
    def format_success(self, message: str) -> None:
        """Report a success message."""


class TextFormatter(OutputFormatter):
    """Human-readable text output."""

    def _diagnostic_lines(
        self, label: str, label_color: str, diagnostics: list[Diagnostic]
    ) -> list[str]:
        out = sys.stdout
        lines = []
        for diag in diagnostics:
            if diag.line is not None and diag.column is not None:
                location = f"{diag.line}:{diag.column}"
            elif diag.line is not None:
                location = f"{diag.line}:"
            else:
                location = ""
            lines.append(
                f"  {self._paint(label, out, _BOLD, label_color)} "
                f"{self._paint(f'[{diag.code}]', out, _DIM)} "
                f"{self._paint(location, out, _DIM)}: {diag.message}\n"
            )
            if diag.fix_hint is not None:
                lines.append(f"    {self._paint('hint:', out, _CYAN)} {diag.fix_hint}\n")
        return lines

    def format_validation(self, results: Results) -> str:
        results = list(results)
        out = sys.stdout
        parts: list[str] = []

        for skill_path, result in results:
            if not result.errors and not result.warnings:
                continue
            parts.append(f"\n{self._paint(skill_path, out, _BOLD)}\n")
            parts.extend(self._diagnostic_lines("error", _RED, result.errors))
            parts.extend(self._diagnostic_lines("warning", _YELLOW, result.warnings))

        total_errors, total_warnings = _totals(results)
        parts.append("\n")
        if total_errors == 0 and total_warnings == 0:
            mark = self._paint("✓", out, _BOLD, _GREEN)
            parts.append(f"{mark} {len(results)} skill(s) checked, no issues found\n")
        else:
            mark = (
                self._paint("✗", out, _RED)
                if total_errors > 0
                else self._paint("!", out, _YELLOW)
            )
            parts.append(
                f"{mark} {len(results)} skill(s) checked: "
                f"{total_errors} error(s), {total_warnings} warning(s)\n"
            )
        return "".join(parts)

    def format_message(self, message: str) -> None:
        if not self.quiet:
            print(message)

    def format_error(self, message: str) -> None:
        label = self._paint("error:", sys.stderr, _BOLD, _RED)
        print(f"{label} {message}", file=sys.stderr)

    def format_success(self, message: str) -> None:
        if not self.quiet:
            mark = self._paint("✓", sys.stdout, _BOLD, _GREEN)
            print(f"{mark} {message}")


def _json_diagnostic(diag: Diagnostic) -> dict[str, Any]:
    entry: dict[str, Any] = {"code": str(diag.code), "message": diag.message}
    if diag.line is not None:
        entry["line"] = diag.line
    if diag.column is not None:
        entry["column"] = diag.column
    if diag.fix_hint is not None:
        entry["fix_hint"] = diag.fix_hint
    return entry


def _compact(obj: dict[str, Any]) -> str:
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


class JsonFormatter(OutputFormatter):
    """Machine-readable JSON output."""

    def format_validation(self, results: Results) -> str:
        results = list(results)
        total_errors, total_warnings = _totals(results)
        document = {
            "skills": [
                {
                    "path": path,
                    "errors": [_json_diagnostic(d) for d in result.errors],
                    "warnings": [_json_diagnostic(d) for d in result.warnings],
                }
                for path, result in results
            ],
            "summary": {
                "skills_checked": len(results),
                "total_errors": total_errors,
                "total_warnings": total_warnings,
                "success": total_errors == 0,
            },
        }
        return json.dumps(document, indent=2, ensure_ascii=False)

    def format_message(self, message: str) -> None:
        if not self.quiet:
            print(_compact({"message": message}))

    def format_error(self, message: str) -> None:
        print(_compact({"error": message}), file=sys.stderr)

    def format_success(self, message: str) -> None:
        if not self.quiet:
            print(_compact({"success": True, "message": message}))


class SarifFormatter(OutputFormatter):
    """SARIF 2.1.0 output for code scanning tools."""

    def format_validation(self, results: Results) -> str:
        results = list(results)
        rules: list[dict[str, Any]] = []
        seen: set[str] = set()
        sarif_results: list[dict[str, Any]] = []

        for path, result in results:
            for diag in [*result.errors, *result.warnings]:
                code = str(diag.code)
                if code not in seen:
                    seen.add(code)
                    rules.append(
                        {
                            "id": code,
                            "shortDescription": {"text": diag.code.description()},
                            "defaultConfiguration": {"level": _level(diag)},
                        }
                    )
                physical: dict[str, Any] = {"artifactLocation": {"uri": path}}
                if diag.line is not None:
                    region: dict[str, Any] = {"startLine": diag.line}
                    if diag.column is not None:
                        region["startColumn"] = diag.column
                    physical["region"] = region
                sarif_results.append(
                    {
                        "ruleId": code,
                        "level": _level(diag),
                        "message": {"text": diag.message},
                        "locations": [{"physicalLocation": physical}],
                    }
                )

        log = {
            "$schema": SARIF_SCHEMA,
            "version": SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": "skilo",
                            "version": VERSION,
                            "informationUri": INFORMATION_URI,
                            "rules": rules,
                        }
                    },
                    "results": sarif_results,
                }
            ],
        }
        return json.dumps(log, indent=2, ensure_ascii=False)

    def format_message(self, message: str) -> None:
        if not self.quiet:
            print(message, file=sys.stderr)

    def format_error(self, message: str) -> None:
        print(f"error: {message}", file=sys.stderr)

    def format_success(self, message: str) -> None:
        if not self.quiet:
            print(message, file=sys.stderr)


_FORMATTERS: dict[OutputFormat, type[OutputFormatter]] = {
    OutputFormat.TEXT: TextFormatter,
    OutputFormat.JSON: JsonFormatter,
    OutputFormat.SARIF: SarifFormatter,
}


def get_formatter(output_format: OutputFormat | str, quiet: bool) -> OutputFormatter:
    """Return the formatter for the given output format."""
    return _FORMATTERS[OutputFormat(output_format)](quiet)