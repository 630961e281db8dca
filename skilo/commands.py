"""Commands that inspect existing skills: lint, fmt, check, read-properties, to-prompt."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

import yaml

from skilo.config import Config
from skilo.diagnostics import ValidationResult
from skilo.discovery import find_skills
from skilo.errors import NoSkillsFoundError
from skilo.formatter import Formatter, FormatterConfig
from skilo.manifest import Manifest, ManifestError
from skilo.output import OutputFormatter
from skilo.validator import Validator

_DIM = "2"
_RED = "31"
_GREEN = "32"
_YELLOW = "33"

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def _paint(text: str, code: str) -> str:
    isatty = getattr(sys.stdout, "isatty", None)
    if os.environ.get("NO_COLOR") or not (isatty and isatty()):
        return text
    return f"\x1b[{code}m{text}\x1b[0m"


@dataclass
class LintArgs:
    """Options for the lint command."""

    path: Path = Path(".")
    strict: bool = False
    fix: bool = False


@dataclass
class FmtArgs:
    """Options for the fmt command."""

    path: Path = Path(".")
    check: bool = False
    diff: bool = False


def run_lint(args: LintArgs, config: Config, formatter: OutputFormatter) -> int:
    """Validate every skill under args.path; returns the exit code."""
    strict = args.strict or config.lint.strict
    skill_paths = find_skills(args.path)
    if not skill_paths:
        raise NoSkillsFoundError(str(args.path))

    validator = Validator(config.lint)
    results: list[tuple[str, ValidationResult]] = []
    parse_errors = 0

    for path in skill_paths:
        try:
            manifest = Manifest.parse(path)
        except ManifestError as exc:
            parse_errors += 1
            formatter.format_error(f"{path}: {exc}")
            continue
        results.append((str(path), validator.validate(manifest)))

    output = formatter.format_validation(results)
    if output:
        print(output, end="")

    total_errors = sum(len(result.errors) for _, result in results)
    total_warnings = sum(len(result.warnings) for _, result in results)
    has_errors = parse_errors > 0 or total_errors > 0
    has_strict_warnings = strict and total_warnings > 0
    return 1 if has_errors or has_strict_warnings else 0


def diff_lines(old: str, new: str) -> list[str]:
    """A line-by-line diff: ' ' for equal lines, '-' for old, '+' for new."""
    old_lines = old.splitlines()
    new_lines = new.splitlines()
    lines: list[str] = []
    for i in range(max(len(old_lines), len(new_lines))):
        old_line = old_lines[i] if i < len(old_lines) else None
        new_line = new_lines[i] if i < len(new_lines) else None
        if old_line is not None and old_line == new_line:
            lines.append(f" {old_line}")
            continue
        if old_line is not None:
            lines.append(f"-{old_line}")
        if new_line is not None:
            lines.append(f"+{new_line}")
    return lines


def _print_diff(path: Path, old: str, new: str) -> None:
    print(_paint(f"--- {path}", _DIM))
    print(_paint(f"+++ {path}", _DIM))
    for line in diff_lines(old, new):
        if line.startswith("-"):
            print(_paint(line, _RED))
        elif line.startswith("+"):
            print(_paint(line, _GREEN))
        else:
            print(line)


def run_fmt(args: FmtArgs, config: Config, formatter: OutputFormatter) -> int:
    """Format, diff or check every SKILL.md under args.path; returns the exit code."""
    skill_formatter = Formatter(FormatterConfig.from_fmt_config(config.fmt))
    skill_paths = find_skills(args.path)
    if not skill_paths:
        raise NoSkillsFoundError(str(args.path))

    files_changed = 0
    files_checked = 0

    for path in skill_paths:
        try:
            manifest = Manifest.parse(path)
        except ManifestError as exc:
            formatter.format_error(f"{path}: {exc}")
            continue
        files_checked += 1

        try:
            formatted = skill_formatter.format(manifest)
        except yaml.YAMLError as exc:
            formatter.format_error(f"{path}: {exc}")
            continue

        with path.open(encoding="utf-8", newline="") as handle:
            current = handle.read()
        if formatted == current:
            continue
        files_changed += 1

        if args.check:
            formatter.format_message(f"{_paint('!', _YELLOW)} {path} needs formatting")
        elif args.diff:
            _print_diff(path, current, formatted)
        else:
            path.write_text(formatted, encoding="utf-8", newline="")
            formatter.format_message(f"{_paint('✓', _GREEN)} Formatted {path}")

    if args.check:
        if files_changed > 0:
            formatter.format_message(
                f"\n{_paint('!', _YELLOW)} {files_changed} file(s) need formatting"
            )
            return 1
        formatter.format_success(
            f"{files_checked} file(s) checked, all formatted correctly"
        )
        return 0

    if files_changed > 0:
        formatter.format_success(f"Formatted {files_changed} file(s)")
    else:
        formatter.format_success(f"{files_checked} file(s) already formatted correctly")
    return 0


def run_check(path: str | Path, config: Config, formatter: OutputFormatter) -> int:
    """Run strict lint then a format check; returns 1 if either fails."""
    path = Path(path)
    formatter.format_message("Running lint...")
    lint_result = run_lint(LintArgs(path=path, strict=True), config, formatter)

    formatter.format_message("\nRunning format check...")
    fmt_result = run_fmt(FmtArgs(path=path, check=True), config, formatter)

    if lint_result != 0 or fmt_result != 0:
        return 1
    formatter.format_success("\nAll checks passed!")
    return 0


def _collect_skill_paths(paths: Iterable[str | Path]) -> list[Path]:
    paths = [Path(p) for p in paths]
    found = [skill for path in paths for skill in find_skills(path)]
    if not found:
        raise NoSkillsFoundError(", ".join(str(p) for p in paths))
    return found


def _parse_all(skill_paths: list[Path]) -> tuple[list[Manifest], list[str]]:
    manifests: list[Manifest] = []
    errors: list[str] = []
    for path in skill_paths:
        try:
            manifests.append(Manifest.parse(path))
        except ManifestError as exc:
            errors.append(f"{path}: {exc}")
    for error in errors:
        print(f"Error: {error}", file=sys.stderr)
    return manifests, errors


def skill_properties(manifest: Manifest) -> dict[str, Any]:
    """The JSON-ready properties of a skill, leaving out unset fields."""
    front = manifest.frontmatter
    properties: dict[str, Any] = {
        "name": front.name,
        "description": front.description,
    }
    optional = {
        "license": front.license,
        "compatibility": front.compatibility,
        "metadata": front.metadata,
        "allowed_tools": front.allowed_tools,
    }
    properties.update({key: value for key, value in optional.items() if value is not None})
    properties["path"] = str(manifest.path)
    return properties


def run_read_properties(paths: Iterable[str | Path], quiet: bool = False) -> int:
    """Print skill properties as JSON: one object, or an array for several skills."""
    manifests, errors = _parse_all(_collect_skill_paths(paths))
    properties = [skill_properties(manifest) for manifest in manifests]
    document: Any = properties[0] if len(properties) == 1 else properties
    if not quiet:
        print(json.dumps(document, indent=2, ensure_ascii=False))
    return 1 if errors else 0


def _xml_text(text: str) -> str:
    return escape(text, _XML_ENTITIES)


def render_prompt_xml(manifests: Iterable[Manifest]) -> str:
    """An <available_skills> block listing each skill's name, description and location."""
    entries: list[str] = []
    for manifest in manifests:
        entries.append(
            "  <skill>\n"
            f"    <name>{_xml_text(manifest.frontmatter.name)}</name>\n"
            f"    <description>{_xml_text(manifest.frontmatter.description)}</description>\n"
            f"    <location>{_xml_text(str(manifest.path))}</location>\n"
            "  </skill>"
        )
    if not entries:
        return "<available_skills/>"
    return "<available_skills>\n" + "\n".join(entries) + "\n</available_skills>"


def run_to_prompt(paths: Iterable[str | Path], quiet: bool = False) -> int:
    """Print the <available_skills> XML for the skills found under paths."""
    manifests, errors = _parse_all(_collect_skill_paths(paths))
    if not quiet:
        print(render_prompt_xml(manifests))
    return 1 if errors else 0