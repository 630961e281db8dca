"""Feature-rich skill templates: a full layout and a script-focused one."""

from __future__ import annotations

import os
from pathlib import Path

from skilo.lang import ScriptLang
from skilo.templates import (
    SkillTemplate,
    TemplateContext,
    render_frontmatter,
    to_title_case,
)


def _prepare_skill_dir(ctx: TemplateContext, output_dir: str | Path) -> Path:
    skill_dir = Path(output_dir) / ctx.name
    skill_dir.mkdir(parents=True, exist_ok=True)
    return skill_dir


def _write_script(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
    if os.name == "posix":
        path.chmod(0o755)


class FullTemplate(SkillTemplate):
    """A skill with scripts, references and assets directories."""

    def render(self, ctx: TemplateContext, output_dir: str | Path) -> None:
        skill_dir = _prepare_skill_dir(ctx, output_dir)
        (skill_dir / "SKILL.md").write_text(self.render_skill_md(ctx), encoding="utf-8")

        scripts_dir = skill_dir / "scripts"
        references_dir = skill_dir / "references"
        assets_dir = skill_dir / "assets"
        for directory in (scripts_dir, references_dir, assets_dir):
            directory.mkdir(parents=True, exist_ok=True)

        _write_script(scripts_dir / ctx.lang.file_name("main"), self.render_script(ctx))
        (references_dir / "REFERENCE.md").write_text(
            self.render_reference(ctx), encoding="utf-8"
        )
        (assets_dir / ".gitkeep").write_text("", encoding="utf-8")

    def render_skill_md(self, ctx: TemplateContext) -> str:
        """Text of SKILL.md for a full skill."""
        title = to_title_case(ctx.name)
        ext = ctx.lang.extension()
        body = f"""# {title}

{ctx.description}

## Usage

See `references/REFERENCE.md` for detailed documentation.

## Scripts

- `scripts/main.{ext}` - Main entry point

## References

- `references/REFERENCE.md` - Detailed documentation

## Assets

Static assets are stored in the `assets/` directory.
"""
        return render_frontmatter(ctx) + body

    def render_script(self, ctx: TemplateContext) -> str:
        """Text of the main script in the context's language."""
        shebang = ctx.lang.shebang()
        name = ctx.name
        if ctx.lang is ScriptLang.PYTHON:
            return f'''{shebang}
"""Main entry point for {name}."""

import argparse
import sys


def main():
    parser = argparse.ArgumentParser(description="{ctx.description}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    args = parser.parse_args()

    if args.verbose:
        print("Verbose mode enabled")

    print("Hello from {name}!")


if __name__ == "__main__":
    main()
'''
        if ctx.lang is ScriptLang.BASH:
            return f'''{shebang}
# Main entry point for {name}.

set -euo pipefail

VERBOSE=false

while [[ $# -gt 0 ]]; do
    case $1 in
        -v|--verbose)
            VERBOSE=true
            shift
            ;;
        *)
            echo "Unknown option: $1" >&2
            exit 1
            ;;
    esac
done

if [ "$VERBOSE" = true ]; then
    echo "Verbose mode enabled"
fi

echo "Hello from {name}!"
'''
        if ctx.lang is ScriptLang.JAVASCRIPT:
            return f'''{shebang}
// Main entry point for {name}.

const args = process.argv.slice(2);
const verbose = args.includes("-v") || args.includes("--verbose");

if (verbose) {{
    console.log("Verbose mode enabled");
}}

console.log("Hello from {name}!");
'''
        return f'''{shebang}
// Main entry point for {name}.

const args: string[] = process.argv.slice(2);
const verbose: boolean = args.includes("-v") || args.includes("--verbose");

if (verbose) {{
    console.log("Verbose mode enabled");
}}

console.log("Hello from {name}!");
'''

    def render_reference(self, ctx: TemplateContext) -> str:
        """Text of references/REFERENCE.md."""
        title = to_title_case(ctx.name)
        ext = ctx.lang.extension()
        return f"""# {title} Reference

## Overview

{ctx.description}

## Configuration

This skill does not require any configuration.

## API

### Scripts

#### `scripts/main.{ext}`

Main entry point for the skill.

**Arguments:**

- `--verbose`, `-v`: Enable verbose output

**Exit codes:**

- `0`: Success
- `1`: Error

## Examples

```bash
./scripts/main.{ext}
./scripts/main.{ext} --verbose
```
"""


class ScriptBasedTemplate(SkillTemplate):
    """A skill built around setup, run and cleanup scripts."""

    def render(self, ctx: TemplateContext, output_dir: str | Path) -> None:
        skill_dir = _prepare_skill_dir(ctx, output_dir)
        (skill_dir / "SKILL.md").write_text(self.render_skill_md(ctx), encoding="utf-8")

        scripts_dir = skill_dir / "scripts"
        scripts_dir.mkdir(parents=True, exist_ok=True)
        for file_name, content in self.render_scripts(ctx):
            _write_script(scripts_dir / file_name, content)

    def render_skill_md(self, ctx: TemplateContext) -> str:
        """Text of SKILL.md for a script-based skill."""
        title = to_title_case(ctx.name)
        ext = ctx.lang.extension()
        body = f"""# {title}

{ctx.description}

## Scripts

This skill provides the following scripts:

- `scripts/setup.{ext}` - Initialize and configure
- `scripts/run.{ext}` - Execute the main functionality
- `scripts/cleanup.{ext}` - Clean up resources

## Usage

1. Run setup first:
   ```bash
   ./scripts/setup.{ext}
   ```

2. Execute the main script:
   ```bash
   ./scripts/run.{ext} [args]
   ```

3. Clean up when done:
   ```bash
   ./scripts/cleanup.{ext}
   ```
"""
        return render_frontmatter(ctx) + body

    def render_scripts(self, ctx: TemplateContext) -> list[tuple[str, str]]:
        """(file name, content) for the setup, run and cleanup scripts."""
        shebang = ctx.lang.shebang()
        name = ctx.name
        lang = ctx.lang

        if lang is ScriptLang.PYTHON:
            setup = f'''{shebang}
"""Setup script for {name}."""

import os
import sys


def main():
    print("Setting up {name}...")
    # Add setup logic here
    print("Setup complete!")


if __name__ == "__main__":
    main()
'''
            run = f'''{shebang}
"""Main execution script for {name}."""

import sys


def main():
    args = sys.argv[1:]
    print(f"Running {name} with args: {{args}}")
    # Add main logic here


if __name__ == "__main__":
    main()
'''
            cleanup = f'''{shebang}
"""Cleanup script for {name}."""


def main():
    print("Cleaning up {name}...")
    # Add cleanup logic here
    print("Cleanup complete!")


if __name__ == "__main__":
    main()
'''
        elif lang is ScriptLang.BASH:
            setup = f"""{shebang}
# Setup script for {name}.

set -euo pipefail

echo "Setting up {name}..."
# Add setup logic here
echo "Setup complete!"
"""
            run = f"""{shebang}
# Main execution script for {name}.

set -euo pipefail

echo "Running {name} with args: $@"
# Add main logic here
"""
            cleanup = f"""{shebang}
# Cleanup script for {name}.

set -euo pipefail

echo "Cleaning up {name}..."
# Add cleanup logic here
echo "Cleanup complete!"
"""
        else:
            args_decl = (
                "const args: string[] = process.argv.slice(2);"
                if lang is ScriptLang.TYPESCRIPT
                else "const args = process.argv.slice(2);"
            )
            setup = f"""{shebang}
// Setup script for {name}.

console.log("Setting up {name}...");
// Add setup logic here
console.log("Setup complete!");
"""
            run = f"""{shebang}
// Main execution script for {name}.

{args_decl}
console.log(`Running {name} with args: ${{args.join(" ")}}`);
// Add main logic here
"""
            cleanup = f"""{shebang}
// Cleanup script for {name}.

console.log("Cleaning up {name}...");
// Add cleanup logic here
console.log("Cleanup complete!");
"""

        return [
            (lang.file_name("setup"), setup),
            (lang.file_name("run"), run),
            (lang.file_name("cleanup"), cleanup),
        ]