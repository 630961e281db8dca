"""Diagnostics produced by validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

_DESCRIPTIONS = {
    "E001": "Invalid skill name format",
    "E002": "Skill name exceeds maximum length",
    "E003": "Skill name does not match directory name",
    "E004": "Missing skill description",
    "E005": "Skill description exceeds maximum length",
    "E006": "Compatibility field exceeds maximum length",
    "E007": "Invalid YAML in frontmatter",
    "E008": "Missing SKILL.md file",
    "E009": "Referenced file not found",
    "W001": "Skill body exceeds recommended length",
    "W002": "Script is not executable",
    "W003": "Script missing shebang line",
    "W004": "Empty optional directory",
}


class DiagnosticCode(StrEnum):
    """Codes for validation issues; E codes are errors, W codes warnings."""

    E001 = "E001"
    E002 = "E002"
    E003 = "E003"
    E004 = "E004"
    E005 = "E005"
    E006 = "E006"
    E007 = "E007"
    E008 = "E008"
    E009 = "E009"
    W001 = "W001"
    W002 = "W002"
    W003 = "W003"
    W004 = "W004"

    def is_error(self) -> bool:
        """True for errors, False for warnings."""
        return self.value.startswith("E")

    def description(self) -> str:
        """Short description of the rule behind this code."""
        return _DESCRIPTIONS[self.value]


@dataclass
class Diagnostic:
    """A single validation finding."""

    path: str
    code: DiagnosticCode
    message: str
    line: int | None = None
    column: int | None = None
    fix_hint: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings found for one skill."""

    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    def is_ok(self) -> bool:
        """True when there are no errors."""
        return not self.errors

    def is_ok_strict(self) -> bool:
        """True when there are neither errors nor warnings."""
        return not self.errors and not self.warnings

    def merge(self, other: "ValidationResult") -> None:
        """Append the findings of another result to this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)