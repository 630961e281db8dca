"""Command-line entry point."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from skilo.commands import (
    FmtArgs,
    LintArgs,
    run_check,
    run_fmt,
    run_lint,
    run_read_properties,
    run_to_prompt,
)
from skilo.config import Config
from skilo.create import NewArgs, run_new
from skilo.errors import SkiloError
from skilo.lang import OutputFormat, ScriptLang, Template
from skilo.output import VERSION, OutputFormatter, get_formatter

_LINT_HELP = """\
Validate skills against the specification

Skills must be directories containing a SKILL.md file with valid frontmatter.
Example structure:
  my-skill/
    SKILL.md      # Required: contains name, description in YAML frontmatter
    scripts/      # Optional: executable scripts
    tests/        # Optional: test files"""

_READ_PROPERTIES_HELP = """\
Read skill properties as JSON

Outputs skill metadata including name, description, license,
compatibility, metadata, and allowed_tools for one or more skills."""

_TO_PROMPT_HELP = """\
Generate XML prompt for available skills

Outputs an <available_skills> XML block suitable for use in
agent system prompts, containing skill names, descriptions,
and file locations."""


def _add_global_options(parser: argparse.ArgumentParser, *, top_level: bool) -> None:
    def default(value):
        return value if top_level else argparse.SUPPRESS

    parser.add_argument(
        "--config",
        type=Path,
        default=default(os.environ.get("SKILO_CONFIG")),
        help="Configuration file path [env: SKILO_CONFIG]",
    )
    parser.add_argument(
        "--format",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=default(OutputFormat.TEXT),
        help="Output format",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default(False),
        help="Suppress non-error output",
    )


def _add_lint_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path", nargs="?", type=Path, default=Path("."),
        help="Path to skill or directory containing skills",
    )
    parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")
    parser.add_argument("--fix", action="store_true", help="Auto-fix simple issues")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the skilo command."""
    parser = argparse.ArgumentParser(
        prog="skilo", description="CLI tool for Agent Skills development"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    _add_global_options(parser, top_level=True)
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    def add(name: str, help_text: str) -> argparse.ArgumentParser:
        summary = help_text.splitlines()[0]
        sub = subparsers.add_parser(
            name,
            help=summary,
            description=help_text,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _add_global_options(sub, top_level=False)
        return sub

    new = add("new", "Create a new skill from a template")
    new.add_argument("name", help="Name of the skill to create")
    new.add_argument(
        "-t", "--template", type=Template, choices=list(Template),
        default=Template.HELLO_WORLD, help="Template to use",
    )
    new.add_argument(
        "--lang", type=ScriptLang, choices=list(ScriptLang),
        default=ScriptLang.PYTHON, help="Preferred script language",
    )
    new.add_argument("--license", help="License for the skill (SPDX identifier)")
    new.add_argument("-d", "--description", help="Skill description")
    new.add_argument(
        "--no-optional-dirs", action="store_true", help="Skip creating optional directories"
    )
    new.add_argument(
        "--no-scripts", action="store_true", help="Skip creating scripts directory"
    )
    new.add_argument(
        "-o", "--output", type=Path,
        help="Output directory (defaults to current directory)",
    )

    _add_lint_arguments(add("lint", _LINT_HELP))

    fmt = add("fmt", "Format SKILL.md files")
    fmt.add_argument(
        "path", nargs="?", type=Path, default=Path("."),
        help="Path to skill or directory containing skills",
    )
    fmt.add_argument("--check", action="store_true", help="Check formatting without modifying")
    fmt.add_argument("--diff", action="store_true", help="Show diff of changes")

    check = add("check", "Run all validations (lint + format check)")
    check.add_argument(
        "path", nargs="?", type=Path, default=Path("."),
        help="Path to skill or directory containing skills",
    )

    _add_lint_arguments(add("validate", "Alias for lint --strict"))

    for name, help_text in (
        ("read-properties", _READ_PROPERTIES_HELP),
        ("to-prompt", _TO_PROMPT_HELP),
    ):
        sub = add(name, help_text)
        sub.add_argument(
            "paths", nargs="*", type=Path, default=[Path(".")],
            help="Paths to skills or directories containing skills",
        )

    return parser


def _dispatch(args: argparse.Namespace, config: Config, formatter: OutputFormatter) -> int:
    match args.command:
        case "new":
            new_args = NewArgs(
                name=args.name,
                template=args.template,
                lang=args.lang,
                license=args.license,
                description=args.description,
                no_optional_dirs=args.no_optional_dirs,
                no_scripts=args.no_scripts,
                output=args.output,
            )
            return run_new(new_args, config, formatter)
        case "lint" | "validate":
            strict = args.strict or args.command == "validate"
            lint_args = LintArgs(path=args.path, strict=strict, fix=args.fix)
            return run_lint(lint_args, config, formatter)
        case "fmt":
            fmt_args = FmtArgs(path=args.path, check=args.check, diff=args.diff)
            return run_fmt(fmt_args, config, formatter)
        case "check":
            return run_check(args.path, config, formatter)
        case "read-properties":
            return run_read_properties(args.paths, args.quiet)
        case "to-prompt":
            return run_to_prompt(args.paths, args.quiet)
    raise SkiloError(f"unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the skilo command line and return its exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.load(args.config)
    except (SkiloError, OSError) as exc:
        print(f"Error: Failed to load config: {exc}", file=sys.stderr)
        return 1

    formatter = get_formatter(args.format, args.quiet)
    try:
        return _dispatch(args, config, formatter)
    except (SkiloError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())