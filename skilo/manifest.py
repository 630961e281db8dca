"""SKILL.md parsing: YAML frontmatter plus markdown body."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from skilo.errors import SkiloError

KEY_ORDER = (
    "name",
    "description",
    "license",
    "compatibility",
    "metadata",
    "allowed-tools",
)


class ManifestError(SkiloError):
    """A SKILL.md file could not be parsed."""


class MissingFrontmatterError(ManifestError):
    """The file does not start with a frontmatter delimiter."""

    def __init__(self) -> None:
        super().__init__("SKILL.md must start with YAML frontmatter (---)")


class UnclosedFrontmatterError(ManifestError):
    """The frontmatter has no closing delimiter."""

    def __init__(self) -> None:
        super().__init__("Frontmatter is not closed (missing closing ---)")


class InvalidYamlError(ManifestError):
    """The frontmatter is not valid YAML for a skill."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid YAML in frontmatter: {detail}")


class ManifestIOError(ManifestError):
    """The file could not be read."""

    def __init__(self, path: Path, source: OSError) -> None:
        self.path = path
        self.source = source
        super().__init__(f"IO error reading {path}: {source}")


def _as_string(key: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, datetime.date)):
        return str(value)
    kind = "null" if value is None else type(value).__name__
    raise InvalidYamlError(f"{key}: invalid type: {kind}, expected a string")


def _optional_string(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return None if value is None else _as_string(key, value)


@dataclass
class Frontmatter:
    """Skill metadata from the YAML header of SKILL.md."""

    name: str
    description: str
    license: str | None = None
    compatibility: str | None = None
    metadata: dict[str, str] | None = None
    allowed_tools: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Frontmatter":
        """Build frontmatter from a loaded YAML mapping."""
        if not isinstance(data, dict):
            raise InvalidYamlError("expected a mapping of skill properties")
        for required in ("name", "description"):
            if required not in data:
                raise InvalidYamlError(f"missing field `{required}`")

        metadata_raw = data.get("metadata")
        metadata: dict[str, str] | None = None
        if metadata_raw is not None:
            if not isinstance(metadata_raw, dict):
                raise InvalidYamlError("metadata: invalid type, expected a map")
            metadata = {
                _as_string("metadata key", k): _as_string(f"metadata.{k}", v)
                for k, v in metadata_raw.items()
            }

        return cls(
            name=_as_string("name", data["name"]),
            description=_as_string("description", data["description"]),
            license=_optional_string(data, "license"),
            compatibility=_optional_string(data, "compatibility"),
            metadata=metadata,
            allowed_tools=_optional_string(data, "allowed-tools"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Mapping in canonical key order, leaving out unset fields."""
        values = {
            "name": self.name,
            "description": self.description,
            "license": self.license,
            "compatibility": self.compatibility,
            "metadata": self.metadata,
            "allowed-tools": self.allowed_tools,
        }
        return {key: values[key] for key in KEY_ORDER if values[key] is not None}

    def to_yaml(self) -> str:
        """Serialize to YAML with canonical key ordering."""
        return yaml.safe_dump(
            self.to_dict(),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=1_000_000,
        )


def _line_count(text: str) -> int:
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def split_content(content: str) -> tuple[str, str, int]:
    """Split a SKILL.md text into (frontmatter, body, body start line)."""
    content = content.lstrip()
    if not content.startswith("---"):
        raise MissingFrontmatterError()

    after_open = content[3:]
    close_pos = after_open.find("\n---")
    if close_pos < 0:
        raise UnclosedFrontmatterError()

    frontmatter = after_open[:close_pos].strip()
    body_start = 3 + close_pos + 4
    body = content[body_start:].lstrip() if body_start < len(content) else ""
    body_start_line = _line_count(content[:body_start]) + 1
    return frontmatter, body, body_start_line


@dataclass
class Manifest:
    """A parsed SKILL.md file."""

    path: Path
    frontmatter: Frontmatter
    frontmatter_raw: str
    body: str
    body_start_line: int

    @classmethod
    def parse(cls, path: str | Path) -> "Manifest":
        """Read and parse a SKILL.md file."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestIOError(path, exc) from exc
        return cls.parse_content(path, content)

    @classmethod
    def parse_content(cls, path: str | Path, content: str) -> "Manifest":
        """Parse SKILL.md text that claims to live at path."""
        frontmatter_raw, body, body_start_line = split_content(content)
        try:
            data = yaml.safe_load(frontmatter_raw)
        except yaml.YAMLError as exc:
            raise InvalidYamlError(str(exc)) from exc
        return cls(
            path=Path(path),
            frontmatter=Frontmatter.from_dict(data),
            frontmatter_raw=frontmatter_raw,
            body=body,
            body_start_line=body_start_line,
        )

    def __str__(self) -> str:
        return f"---\n{self.frontmatter_raw.strip()}\n---\n\n{self.body}"