"""The new command: scaffold a skill from a template."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from skilo.config import Config
from skilo.errors import InvalidNameError, SkillExistsError
from skilo.extra_templates import FullTemplate, ScriptBasedTemplate
from skilo.lang import ScriptLang, Template
from skilo.output import OutputFormatter
from skilo.rules import is_valid_name
from skilo.templates import (
    HelloWorldTemplate,
    MinimalTemplate,
    SkillTemplate,
    TemplateContext,
)

MAX_NAME_LENGTH = 64

_TEMPLATES: dict[Template, type[SkillTemplate]] = {
    Template.HELLO_WORLD: HelloWorldTemplate,
    Template.MINIMAL: MinimalTemplate,
    Template.FULL: FullTemplate,
    Template.SCRIPT_BASED: ScriptBasedTemplate,
}


@dataclass
class NewArgs:
    """Options for creating a skill."""

    name: str
    template: Template = Template.HELLO_WORLD
    lang: ScriptLang = ScriptLang.PYTHON
    license: str | None = None
    description: str | None = None
    no_optional_dirs: bool = False
    no_scripts: bool = False
    output: Path | None = None


def get_template(template: Template | str) -> SkillTemplate:
    """Return the template implementation for a template choice."""
    return _TEMPLATES[Template(template)]()


def run_new(args: NewArgs, config: Config, formatter: OutputFormatter) -> int:
    """Create a new skill from a template; returns the exit code."""
    name = args.name
    if not is_valid_name(name):
        raise InvalidNameError(name)
    if len(name.encode("utf-8")) > MAX_NAME_LENGTH:
        raise InvalidNameError(f"{name} (name too long, max {MAX_NAME_LENGTH} chars)")

    output_dir = Path(args.output) if args.output is not None else Path.cwd()
    skill_dir = output_dir / name
    if skill_dir.exists():
        raise SkillExistsError(name, str(skill_dir))

    license = args.license if args.license is not None else config.new.default_license
    description = (
        args.description
        if args.description is not None
        else f"A {name.replace('-', ' ')} skill."
    )
    ctx = TemplateContext(
        name=name,
        description=description,
        license=license,
        lang=ScriptLang(args.lang),
        include_optional_dirs=not args.no_optional_dirs,
        include_scripts=not args.no_scripts,
    )

    get_template(args.template).render(ctx, output_dir)
    formatter.format_success(f"Created skill '{name}' at {skill_dir}")
    return 0