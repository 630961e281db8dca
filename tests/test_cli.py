import json
import os
from pathlib import Path

import pytest

from skilo.cli import build_parser, main
from skilo.lang import OutputFormat, ScriptLang, Template
from skilo.manifest import Manifest

VALID = "---\nname: {name}\ndescription: test\n---\n\n# Hi\n"


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.delenv("SKILO_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


def write_skill(root: Path, name: str, content: str | None = None) -> Path:
    skill_dir = root / name
    skill_dir.mkdir(parents=True)
    path = skill_dir / "SKILL.md"
    path.write_text(VALID.format(name=name) if content is None else content, encoding="utf-8")
    return path


def add_script_without_shebang(skill_md: Path) -> None:
    scripts = skill_md.parent / "scripts"
    scripts.mkdir()
    script = scripts / "run.sh"
    script.write_text("echo hi\n", encoding="utf-8")
    if os.name == "posix":
        script.chmod(0o755)


def test_parser_defaults():
    args = build_parser().parse_args(["fmt"])
    assert args.command == "fmt"
    assert args.path == Path(".")
    assert args.format is OutputFormat.TEXT
    assert args.quiet is False
    assert args.check is False


def test_parser_global_options_after_subcommand():
    args = build_parser().parse_args(["lint", "skills", "--format", "json", "-q"])
    assert args.format is OutputFormat.JSON
    assert args.quiet is True
    assert args.path == Path("skills")


def test_parser_new_choices():
    args = build_parser().parse_args(
        ["new", "my-skill", "-t", "script-based", "--lang", "bash"]
    )
    assert args.template is Template.SCRIPT_BASED
    assert args.lang is ScriptLang.BASH


def test_parser_rejects_unknown_format():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["lint", "--format", "xml"])


def test_parser_read_properties_default_paths():
    args = build_parser().parse_args(["read-properties"])
    assert args.paths == [Path(".")]


def test_lint_command_json_output(tmp_path, capsys):
    write_skill(tmp_path, "my-skill")
    assert main(["--format", "json", "lint", str(tmp_path)]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["summary"]["skills_checked"] == 1
    assert report["summary"]["success"] is True


def test_validate_is_strict_lint(tmp_path):
    skill = write_skill(tmp_path, "my-skill")
    add_script_without_shebang(skill)
    assert main(["lint", str(tmp_path)]) == 0
    assert main(["validate", str(tmp_path)]) == 1


def test_config_file_enables_strict(tmp_path):
    skill = write_skill(tmp_path, "my-skill")
    add_script_without_shebang(skill)
    config = tmp_path / "custom.toml"
    config.write_text("[lint]\nstrict = true\n", encoding="utf-8")
    assert main(["--config", str(config), "lint", str(tmp_path)]) == 1


def test_invalid_config_reports_error(tmp_path, capsys):
    config = tmp_path / "broken.toml"
    config.write_text("[lint\n", encoding="utf-8")
    assert main(["--config", str(config), "lint", str(tmp_path)]) == 1
    assert "Failed to load config" in capsys.readouterr().err


def test_new_creates_skill(tmp_path):
    rc = main(["new", "my-skill", "-o", str(tmp_path), "--template", "minimal", "-q"])
    assert rc == 0
    manifest = Manifest.parse(tmp_path / "my-skill" / "SKILL.md")
    assert manifest.frontmatter.name == "my-skill"


def test_new_rejects_invalid_name(tmp_path, capsys):
    assert main(["new", "Bad_Name", "-o", str(tmp_path)]) == 1
    assert "Invalid skill name" in capsys.readouterr().err
    assert not (tmp_path / "Bad_Name").exists()


def test_new_then_check_passes(tmp_path):
    assert main(["new", "fresh-skill", "-o", str(tmp_path), "-q"]) == 0
    assert main(["-q", "check", str(tmp_path / "fresh-skill")]) == 0


def test_missing_skills_is_an_error(tmp_path, capsys):
    empty = tmp_path / "empty"
    empty.mkdir()
    assert main(["lint", str(empty)]) == 1
    assert "No skills found" in capsys.readouterr().err


def test_read_properties_command(tmp_path, capsys):
    write_skill(tmp_path, "my-skill")
    assert main(["read-properties", str(tmp_path)]) == 0
    assert json.loads(capsys.readouterr().out)["name"] == "my-skill"


def test_to_prompt_command(tmp_path, capsys):
    write_skill(tmp_path, "my-skill")
    assert main(["to-prompt", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("<available_skills>")
    assert "<name>my-skill</name>" in out