"""Error types raised by skilo operations."""

from __future__ import annotations


class SkiloError(Exception):
    """Base class for every error skilo reports."""


class SkillExistsError(SkiloError):
    """A skill with the given name already exists."""

    def __init__(self, name: str, path: str) -> None:
        self.name = name
        self.path = path
        super().__init__(f"Skill '{name}' already exists at {path}")


class InvalidNameError(SkiloError):
    """The skill name is not a valid skill identifier."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Invalid skill name '{name}': must be 1-64 lowercase "
            "alphanumeric chars with single hyphens"
        )


class NoSkillsFoundError(SkiloError):
    """No skills were found at the searched path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No skills found in {path}")


class ConfigError(SkiloError):
    """A configuration problem."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Configuration error: {detail}")


class ValidationFailedError(SkiloError):
    """Validation finished with errors."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Validation failed with {count} error(s)")


class FormatCheckFailedError(SkiloError):
    """Some files are not formatted."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Format check failed: {count} file(s) need formatting")