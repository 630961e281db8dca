"""Lint rules that check a parsed skill manifest."""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from skilo.diagnostics import Diagnostic, DiagnosticCode
from skilo.manifest import Manifest

_NAME_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")
_REFERENCE_PATTERN = re.compile(r"`((?:scripts|references|assets)/[^`]+)`")


def is_valid_name(name: str) -> bool:
    """True when name is lowercase alphanumeric with single inner hyphens."""
    return _NAME_PATTERN.fullmatch(name) is not None


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _count_lines(text: str) -> int:
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def _script_files(manifest: Manifest) -> list[Path]:
    scripts_dir = manifest.path.parent / "scripts"
    if not scripts_dir.exists():
        return []
    try:
        entries = sorted(scripts_dir.iterdir())
    except OSError:
        return []
    return [entry for entry in entries if entry.is_file()]


class Rule(ABC):
    """A lint rule that inspects a manifest and reports findings."""

    name: ClassVar[str] = ""

    @abstractmethod
    def check(self, manifest: Manifest) -> list[Diagnostic]:
        """Return the diagnostics this rule finds in the manifest."""


class NameFormatRule(Rule):
    """E001: the name must be lowercase alphanumeric with single hyphens."""

    name = "name-format"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        skill_name = manifest.frontmatter.name
        if is_valid_name(skill_name):
            return []
        return [
            Diagnostic(
                path=str(manifest.path),
                code=DiagnosticCode.E001,
                message=(
                    f"Invalid name '{skill_name}': must be lowercase "
                    "alphanumeric with single hyphens"
                ),
                line=2,
                column=7,
                fix_hint="Use only lowercase letters, numbers, and single hyphens",
            )
        ]


@dataclass(frozen=True)
class NameLengthRule(Rule):
    """E002: the name must not exceed max_length bytes."""

    name: ClassVar[str] = "name-length"
    max_length: int = 64

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        length = _byte_len(manifest.frontmatter.name)
        if length <= self.max_length:
            return []
        return [
            Diagnostic(
                path=str(manifest.path),
                code=DiagnosticCode.E002,
                message=f"Name too long ({length} chars, max {self.max_length})",
                line=2,
                column=7,
            )
        ]


class NameDirectoryRule(Rule):
    """E003: the name must match the directory holding SKILL.md."""

    name = "name-directory"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        skill_name = manifest.frontmatter.name
        dir_name = manifest.path.parent.name
        if not dir_name or dir_name == skill_name:
            return []
        return [
            Diagnostic(
                path=str(manifest.path),
                code=DiagnosticCode.E003,
                message=(
                    f"Name '{skill_name}' does not match directory name '{dir_name}'"
                ),
                line=2,
                column=7,
                fix_hint=f"Rename to '{dir_name}' or move to '{skill_name}/SKILL.md'",
            )
        ]


class DescriptionRequiredRule(Rule):
    """E004: the description must not be empty."""

    name = "description-required"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        if manifest.frontmatter.description:
            return []
        return [
            Diagnostic(
                path=str(manifest.path),
                code=DiagnosticCode.E004,
                message="Description cannot be empty",
                line=3,
                column=14,
            )
        ]


@dataclass(frozen=True)
class DescriptionLengthRule(Rule):
    """E005: the description must not exceed max_length bytes."""

    name: ClassVar[str] = "description-length"
    max_length: int = 1024

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        length = _byte_len(manifest.frontmatter.description)
        if length <= self.max_length:
            return []
        return [
            Diagnostic(
                path=str(manifest.path),
                code=DiagnosticCode.E005,
                message=f"Description too long ({length} chars, max {self.max_length})",
                line=3,
                column=14,
            )
        ]


@dataclass(frozen=True)
class CompatibilityLengthRule(Rule):
    """E006: the compatibility field must not exceed max_length bytes."""

    name: ClassVar[str] = "compatibility-length"
    max_length: int = 500

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        compatibility = manifest.frontmatter.compatibility
        if compatibility is None:
            return []
        length = _byte_len(compatibility)
        if length <= self.max_length:
            return []
        return [
            Diagnostic(
                path=str(manifest.path),
                code=DiagnosticCode.E006,
                message=(
                    f"Compatibility too long ({length} chars, max {self.max_length})"
                ),
            )
        ]


class ReferencesExistRule(Rule):
    """E009: files referenced in backticks in the body must exist."""

    name = "references-exist"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        skill_dir = manifest.path.parent
        diagnostics = []
        for match in _REFERENCE_PATTERN.finditer(manifest.body):
            ref_path = match.group(1)
            if (skill_dir / ref_path).exists():
                continue
            diagnostics.append(
                Diagnostic(
                    path=str(manifest.path),
                    code=DiagnosticCode.E009,
                    message=f"Referenced file not found: {ref_path}",
                    fix_hint=f"Create {ref_path} or remove the reference",
                )
            )
        return diagnostics


@dataclass(frozen=True)
class BodyLengthRule(Rule):
    """W001: the body should not exceed max_lines lines."""

    name: ClassVar[str] = "body-length"
    max_lines: int = 500

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        line_count = _count_lines(manifest.body)
        if line_count <= self.max_lines:
            return []
        return [
            Diagnostic(
                path=str(manifest.path),
                code=DiagnosticCode.W001,
                message=(
                    f"Body exceeds recommended {self.max_lines} lines "
                    f"({line_count} lines). Consider using references/"
                ),
                line=manifest.body_start_line + self.max_lines,
                fix_hint="Move detailed content to references/ directory",
            )
        ]


class ScriptExecutableRule(Rule):
    """W002: files in scripts/ should be executable (POSIX only)."""

    name = "script-executable"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        if os.name != "posix":
            return []
        diagnostics = []
        for script in _script_files(manifest):
            try:
                mode = script.stat().st_mode
            except OSError:
                continue
            if mode & 0o111:
                continue
            diagnostics.append(
                Diagnostic(
                    path=str(script),
                    code=DiagnosticCode.W002,
                    message="Script is not executable",
                    fix_hint=f"Run: chmod +x {script}",
                )
            )
        return diagnostics


class ScriptShebangRule(Rule):
    """W003: text files in scripts/ should start with a shebang."""

    name = "script-shebang"

    def check(self, manifest: Manifest) -> list[Diagnostic]:
        diagnostics = []
        for script in _script_files(manifest):
            try:
                content = script.read_bytes().decode("utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            if content.startswith("#!"):
                continue
            diagnostics.append(
                Diagnostic(
                    path=str(script),
                    code=DiagnosticCode.W003,
                    message="Script missing shebang line",
                    line=1,
                    column=1,
                    fix_hint="Add #!/usr/bin/env <interpreter> as first line",
                )
            )
        return diagnostics