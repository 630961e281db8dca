"""Consistent formatting of SKILL.md files: canonical frontmatter and aligned tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from markdown_it import MarkdownIt
from markdown_it.token import Token

from skilo.config import FmtConfig
from skilo.manifest import Manifest


class _Alignment(StrEnum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


_STYLE_ALIGNMENTS = {
    "text-align:left": _Alignment.LEFT,
    "text-align:right": _Alignment.RIGHT,
    "text-align:center": _Alignment.CENTER,
}


@dataclass
class FormatterConfig:
    """Options that control formatting."""

    format_tables: bool = True

    @classmethod
    def from_fmt_config(cls, config: FmtConfig) -> "FormatterConfig":
        """Take the relevant settings from the fmt section of the configuration."""
        return cls(format_tables=config.format_tables)


class Formatter:
    """Formats SKILL.md manifests for consistent presentation."""

    def __init__(self, config: FormatterConfig | None = None) -> None:
        self.config = config or FormatterConfig()

    def format(self, manifest: Manifest) -> str:
        """Return the formatted text of the manifest."""
        yaml_text = manifest.frontmatter.to_yaml()
        body = format_tables(manifest.body) if self.config.format_tables else manifest.body
        return f"---\n{yaml_text}---\n\n{body}"


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _split_lines(text: str) -> list[str]:
    if not text:
        return []
    parts = text.split("\n")
    if text.endswith("\n"):
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


@dataclass
class _Table:
    alignments: list[_Alignment] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def alignment(self, index: int) -> _Alignment:
        return self.alignments[index] if index < len(self.alignments) else _Alignment.NONE

    def format(self) -> str:
        if not self.rows:
            return ""
        col_count = max(len(row) for row in self.rows)
        if col_count == 0:
            return ""

        widths = [3] * col_count
        for row in self.rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], _byte_len(cell))

        header, *data = self.rows
        separator = "|" + "".join(
            self._separator(width, self.alignment(i)) + "|"
            for i, width in enumerate(widths)
        )
        lines = [self._row(header, widths), separator]
        lines.extend(self._row(row, widths) for row in data)
        return "\n".join(lines)

    def _row(self, row: list[str], widths: list[int]) -> str:
        cells = (
            " " + self._pad(row[i] if i < len(row) else "", width, self.alignment(i)) + " |"
            for i, width in enumerate(widths)
        )
        return "|" + "".join(cells)

    @staticmethod
    def _pad(content: str, width: int, alignment: _Alignment) -> str:
        if alignment is _Alignment.RIGHT:
            return content.rjust(width)
        if alignment is _Alignment.CENTER:
            padding = max(width - _byte_len(content), 0)
            left = padding // 2
            return " " * left + content + " " * (padding - left)
        return content.ljust(width)

    @staticmethod
    def _separator(width: int, alignment: _Alignment) -> str:
        total = width + 2
        if alignment is _Alignment.LEFT:
            return ":" + "-" * (total - 1)
        if alignment is _Alignment.RIGHT:
            return "-" * (total - 1) + ":"
        if alignment is _Alignment.CENTER:
            return ":" + "-" * max(total - 2, 0) + ":"
        return "-" * total


def _inline_text(tokens: list[Token]) -> str:
    pieces: list[str] = []
    for token in tokens:
        if token.type in ("text", "text_special"):
            pieces.append(token.content)
        elif token.type == "code_inline":
            pieces.append(f"`{token.content}`")
        elif token.type == "softbreak":
            pieces.append(" ")
        elif token.children:
            pieces.append(_inline_text(token.children))
    return "".join(pieces)


def _cell_alignment(token: Token) -> _Alignment:
    style = token.attrs.get("style") if token.attrs else None
    return _STYLE_ALIGNMENTS.get(str(style), _Alignment.NONE) if style else _Alignment.NONE


def _extract_tables(markdown: str) -> list[tuple[int, int, _Table]]:
    parser = MarkdownIt("commonmark").enable("table")
    tables: list[tuple[int, int, _Table]] = []
    current: _Table | None = None
    row: list[str] | None = None
    in_header = False

    for token in parser.parse(markdown):
        if token.type == "table_open":
            start, end = token.map if token.map else (0, 0)
            current = _Table()
            tables.append((start + 1, end, current))
        elif current is None:
            continue
        elif token.type == "table_close":
            current = None
        elif token.type == "thead_open":
            in_header = True
        elif token.type == "thead_close":
            in_header = False
        elif token.type == "tr_open":
            row = []
        elif token.type == "tr_close":
            if row is not None:
                current.rows.append(row)
            row = None
        elif token.type in ("th_open", "td_open") and in_header:
            current.alignments.append(_cell_alignment(token))
        elif token.type == "inline" and row is not None:
            row.append(_inline_text(token.children or []).strip())
    return tables


def format_tables(markdown: str) -> str:
    """Rewrite every markdown table with aligned columns, leaving other lines alone."""
    replacements = [
        (start, end, table.format()) for start, end, table in _extract_tables(markdown)
    ]
    if not replacements:
        return markdown

    lines = _split_lines(markdown)
    parts: list[str] = []
    current_line = 1

    for start_line, end_line, formatted in replacements:
        for line_num in range(current_line, start_line):
            if line_num > 1:
                parts.append("\n")
            if line_num - 1 < len(lines):
                parts.append(lines[line_num - 1])
        if start_line > 1:
            parts.append("\n")
        parts.append(formatted)
        current_line = end_line + 1

    for line_num in range(current_line, len(lines) + 1):
        parts.append("\n")
        parts.append(lines[line_num - 1])

    result = "".join(parts)
    if markdown.endswith("\n") and not result.endswith("\n"):
        result += "\n"
    return result