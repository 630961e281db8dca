"""Skill validation with configurable rules."""

from __future__ import annotations

from skilo.config import LintConfig
from skilo.diagnostics import ValidationResult
from skilo.manifest import Manifest
from skilo.rules import (
    BodyLengthRule,
    CompatibilityLengthRule,
    DescriptionLengthRule,
    DescriptionRequiredRule,
    NameDirectoryRule,
    NameFormatRule,
    NameLengthRule,
    ReferencesExistRule,
    Rule,
    ScriptExecutableRule,
    ScriptShebangRule,
)


def _build_rules(config: LintConfig) -> list[Rule]:
    settings = config.rules
    rules: list[Rule] = []
    if settings.name_format:
        rules.append(NameFormatRule())
    if (limit := settings.name_length.resolve(64)) is not None:
        rules.append(NameLengthRule(limit))
    if settings.name_directory:
        rules.append(NameDirectoryRule())
    if settings.description_required:
        rules.append(DescriptionRequiredRule())
    if (limit := settings.description_length.resolve(1024)) is not None:
        rules.append(DescriptionLengthRule(limit))
    if (limit := settings.compatibility_length.resolve(500)) is not None:
        rules.append(CompatibilityLengthRule(limit))
    if settings.references_exist:
        rules.append(ReferencesExistRule())
    if (limit := settings.body_length.resolve(500)) is not None:
        rules.append(BodyLengthRule(limit))
    if settings.script_executable:
        rules.append(ScriptExecutableRule())
    if settings.script_shebang:
        rules.append(ScriptShebangRule())
    return rules


class Validator:
    """Runs the enabled lint rules against manifests."""

    def __init__(self, config: LintConfig | None = None) -> None:
        self.rules: tuple[Rule, ...] = tuple(_build_rules(config or LintConfig()))

    def validate(self, manifest: Manifest) -> ValidationResult:
        """Check a manifest, sorting findings into errors and warnings."""
        result = ValidationResult()
        for rule in self.rules:
            for diagnostic in rule.check(manifest):
                if diagnostic.code.is_error():
                    result.errors.append(diagnostic)
                else:
                    result.warnings.append(diagnostic)
        return result