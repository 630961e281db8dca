"""Command choices and script language details."""

from __future__ import annotations

from enum import StrEnum


class OutputFormat(StrEnum):
    """How command results are written."""

    TEXT = "text"
    JSON = "json"
    SARIF = "sarif"


class Template(StrEnum):
    """Skill templates available to the new command."""

    HELLO_WORLD = "hello-world"
    MINIMAL = "minimal"
    FULL = "full"
    SCRIPT_BASED = "script-based"


_EXTENSIONS = {
    "python": "py",
    "bash": "sh",
    "javascript": "js",
    "typescript": "ts",
}

_SHEBANGS = {
    "python": "#!/usr/bin/env python3",
    "bash": "#!/usr/bin/env bash",
    "javascript": "#!/usr/bin/env node",
    "typescript": "#!/usr/bin/env -S npx ts-node",
}

_COMMENT_PREFIXES = {
    "python": "#",
    "bash": "#",
    "javascript": "//",
    "typescript": "//",
}


class ScriptLang(StrEnum):
    """Languages generated scripts can be written in."""

    PYTHON = "python"
    BASH = "bash"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"

    def extension(self) -> str:
        """File extension, without the dot."""
        return _EXTENSIONS[self.value]

    def shebang(self) -> str:
        """Interpreter line for scripts in this language."""
        return _SHEBANGS[self.value]

    def comment_prefix(self) -> str:
        """Line comment marker."""
        return _COMMENT_PREFIXES[self.value]

    def file_name(self, name: str) -> str:
        """The name with this language's extension appended."""
        return f"{name}.{self.extension()}"