"""Templates for scaffolding new skills."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from skilo.lang import ScriptLang


@dataclass
class TemplateContext:
    """Everything a template needs to generate a new skill."""

    name: str
    description: str
    license: str | None = None
    lang: ScriptLang = ScriptLang.PYTHON
    include_optional_dirs: bool = True
    include_scripts: bool = True


class SkillTemplate(ABC):
    """A template that writes a new skill directory."""

    @abstractmethod
    def render(self, ctx: TemplateContext, output_dir: str | Path) -> None:
        """Create the skill named by ctx inside output_dir."""


def to_title_case(name: str) -> str:
    """Turn a kebab-case name into space-separated Title Case."""
    return " ".join(part[:1].upper() + part[1:] for part in name.split("-"))


def render_frontmatter(ctx: TemplateContext) -> str:
    """The YAML frontmatter block for a new SKILL.md, with trailing blank line."""
    description = ctx.description.replace("\n", " ")
    text = f"---\nname: {ctx.name}\ndescription: {description}\n"
    if ctx.license is not None:
        text += f"license: {ctx.license}\n"
    return text + "---\n\n"


def _make_executable(path: Path) -> None:
    if os.name == "posix":
        path.chmod(0o755)


def _skill_dir(ctx: TemplateContext, output_dir: str | Path) -> Path:
    skill_dir = Path(output_dir) / ctx.name
    skill_dir.mkdir(parents=True, exist_ok=True)
    return skill_dir


class MinimalTemplate(SkillTemplate):
    """A skill with only a SKILL.md file."""

    def render(self, ctx: TemplateContext, output_dir: str | Path) -> None:
        skill_dir = _skill_dir(ctx, output_dir)
        (skill_dir / "SKILL.md").write_text(self.render_skill_md(ctx), encoding="utf-8")

    def render_skill_md(self, ctx: TemplateContext) -> str:
        """Text of SKILL.md for a minimal skill."""
        title = to_title_case(ctx.name)
        return render_frontmatter(ctx) + f"# {title}\n\n{ctx.description}\n"


_GREET_SCRIPTS = {
    ScriptLang.PYTHON: '''
"""A simple greeting script."""

import sys


def main():
    name = sys.argv[1] if len(sys.argv) > 1 else "World"
    print(f"Hello, {name}!")


if __name__ == "__main__":
    main()
''',
    ScriptLang.BASH: '''
# A simple greeting script.

set -euo pipefail

name="${1:-World}"
echo "Hello, ${name}!"
''',
    ScriptLang.JAVASCRIPT: '''
// A simple greeting script.

const name = process.argv[2] || "World";
console.log(`Hello, ${name}!`);
''',
    ScriptLang.TYPESCRIPT: '''
// A simple greeting script.

const name: string = process.argv[2] || "World";
console.log(`Hello, ${name}!`);
''',
}


class HelloWorldTemplate(SkillTemplate):
    """A skill with a small greeting script."""

    def render(self, ctx: TemplateContext, output_dir: str | Path) -> None:
        skill_dir = _skill_dir(ctx, output_dir)
        (skill_dir / "SKILL.md").write_text(self.render_skill_md(ctx), encoding="utf-8")

        if ctx.include_scripts:
            scripts_dir = skill_dir / "scripts"
            scripts_dir.mkdir(parents=True, exist_ok=True)
            script_path = scripts_dir / ctx.lang.file_name("greet")
            script_path.write_text(self.render_script(ctx), encoding="utf-8")
            _make_executable(script_path)

    def render_skill_md(self, ctx: TemplateContext) -> str:
        """Text of SKILL.md for a hello-world skill."""
        title = to_title_case(ctx.name)
        ext = ctx.lang.extension()
        body = f"""# {title}

This skill provides a simple greeting functionality.

## Usage

Run the greeting script to display a personalized message.

## Scripts

- `scripts/greet.{ext}` - Outputs a greeting message

## Example

```bash
./scripts/greet.{ext} World
# Output: Hello, World!
```
"""
        return render_frontmatter(ctx) + body

    def render_script(self, ctx: TemplateContext) -> str:
        """Text of the greeting script in the context's language."""
        return ctx.lang.shebang() + _GREET_SCRIPTS[ctx.lang]