"""Configuration file handling."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skilo.errors import ConfigError

CONFIG_CANDIDATES = (".skilorc.toml", "skilo.toml", ".skilo/config.toml")


@dataclass(frozen=True)
class Threshold:
    """A limit that may use the rule default, be disabled, or carry a value."""

    limit: int | None = None
    enabled: bool = True

    def resolve(self, default: int) -> int | None:
        """Return the effective limit, or None when the rule is disabled."""
        if not self.enabled:
            return None
        return default if self.limit is None else self.limit

    @classmethod
    def from_value(cls, value: Any) -> "Threshold":
        """Build a threshold from a config value: true, false or a count."""
        if isinstance(value, bool):
            return cls() if value else cls(enabled=False)
        if isinstance(value, int) and value >= 0:
            return cls(limit=value)
        raise ConfigError(
            f"invalid threshold {value!r}: expected a boolean or a non-negative integer"
        )


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"invalid type for `{key}`: expected a table")
    return value


def _bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"invalid type for `{key}`: expected a boolean")
    return value


def _count(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"invalid type for `{key}`: expected a non-negative integer")
    return value


def _string(data: dict[str, Any], key: str, default: str | None) -> str | None:
    value = data.get(key, default)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"invalid type for `{key}`: expected a string")
    return value


def _threshold(data: dict[str, Any], key: str) -> Threshold:
    if key not in data:
        return Threshold()
    return Threshold.from_value(data[key])


@dataclass
class RulesConfig:
    """Per-rule lint settings."""

    name_format: bool = True
    name_length: Threshold = field(default_factory=Threshold)
    name_directory: bool = True
    description_required: bool = True
    description_length: Threshold = field(default_factory=Threshold)
    compatibility_length: Threshold = field(default_factory=Threshold)
    references_exist: bool = True
    body_length: Threshold = field(default_factory=Threshold)
    script_executable: bool = True
    script_shebang: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RulesConfig":
        """Build rule settings from a parsed table."""
        return cls(
            name_format=_bool(data, "name_format", True),
            name_length=_threshold(data, "name_length"),
            name_directory=_bool(data, "name_directory", True),
            description_required=_bool(data, "description_required", True),
            description_length=_threshold(data, "description_length"),
            compatibility_length=_threshold(data, "compatibility_length"),
            references_exist=_bool(data, "references_exist", True),
            body_length=_threshold(data, "body_length"),
            script_executable=_bool(data, "script_executable", True),
            script_shebang=_bool(data, "script_shebang", True),
        )


@dataclass
class LintConfig:
    """Settings for the lint command."""

    strict: bool = False
    rules: RulesConfig = field(default_factory=RulesConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LintConfig":
        """Build lint settings from a parsed table."""
        return cls(
            strict=_bool(data, "strict", False),
            rules=RulesConfig.from_dict(_section(data, "rules")),
        )


@dataclass
class FmtConfig:
    """Settings for the fmt command."""

    sort_frontmatter: bool = True
    indent_size: int = 2
    format_tables: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FmtConfig":
        """Build format settings from a parsed table."""
        return cls(
            sort_frontmatter=_bool(data, "sort_frontmatter", True),
            indent_size=_count(data, "indent_size", 2),
            format_tables=_bool(data, "format_tables", True),
        )


@dataclass
class NewConfig:
    """Settings for the new command."""

    default_license: str | None = None
    default_template: str = "hello-world"
    default_lang: str = "python"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NewConfig":
        """Build new-skill settings from a parsed table."""
        template = _string(data, "default_template", "hello-world")
        lang = _string(data, "default_lang", "python")
        if template is None or lang is None:
            raise ConfigError("default_template and default_lang must be strings")
        return cls(
            default_license=_string(data, "default_license", None),
            default_template=template,
            default_lang=lang,
        )


@dataclass
class Config:
    """Top-level configuration."""

    lint: LintConfig = field(default_factory=LintConfig)
    fmt: FmtConfig = field(default_factory=FmtConfig)
    new: NewConfig = field(default_factory=NewConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a configuration from a parsed TOML document."""
        return cls(
            lint=LintConfig.from_dict(_section(data, "lint")),
            fmt=FmtConfig.from_dict(_section(data, "fmt")),
            new=NewConfig.from_dict(_section(data, "new")),
        )

    @classmethod
    def load(cls, path: str | Path | None = None) -> "Config":
        """Load from the given file, or a file found in the current directory.

        A missing file yields the defaults.
        """
        config_path = Path(path) if path is not None else find_config()
        if config_path is None or not config_path.exists():
            return cls()
        text = config_path.read_text(encoding="utf-8")
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(str(exc)) from exc
        return cls.from_dict(data)


def find_config() -> Path | None:
    """Return the first known config file present in the current directory."""
    for name in CONFIG_CANDIDATES:
        candidate = Path(name)
        if candidate.exists():
            return candidate
    return None