import pytest

from skilo.diagnostics import DiagnosticCode
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
    ScriptExecutableRule,
    ScriptShebangRule,
    is_valid_name,
)


def make_manifest(tmp_path, name="my-skill", description="A skill", body="",
                  dir_name=None, extra=""):
    skill_dir = tmp_path / (dir_name or name)
    skill_dir.mkdir(parents=True, exist_ok=True)
    path = skill_dir / "SKILL.md"
    path.write_text(
        f'---\nname: "{name}"\ndescription: "{description}"\n{extra}---\n\n{body}'
    )
    return Manifest.parse(path)


@pytest.mark.parametrize("name", ["my-skill", "skill123", "a", "my-cool-skill"])
def test_valid_names(name):
    assert is_valid_name(name) is True


@pytest.mark.parametrize(
    "name", ["My-Skill", "-skill", "skill-", "my--skill", "my_skill", "", "skill\n"]
)
def test_invalid_names(name):
    assert is_valid_name(name) is False


def test_name_format_rule_reports_bad_name(tmp_path):
    manifest = make_manifest(tmp_path, name="My_Skill", dir_name="x")
    diags = NameFormatRule().check(manifest)
    assert [d.code for d in diags] == [DiagnosticCode.E001]
    assert diags[0].message == (
        "Invalid name 'My_Skill': must be lowercase alphanumeric with single hyphens"
    )
    assert (diags[0].line, diags[0].column) == (2, 7)


def test_name_format_rule_accepts_good_name(tmp_path):
    assert NameFormatRule().check(make_manifest(tmp_path)) == []


def test_name_length_rule(tmp_path):
    manifest = make_manifest(tmp_path, name="abcdef")
    assert NameLengthRule(6).check(manifest) == []
    diags = NameLengthRule(5).check(manifest)
    assert [d.code for d in diags] == [DiagnosticCode.E002]
    assert diags[0].message == "Name too long (6 chars, max 5)"


def test_name_directory_rule_mismatch(tmp_path):
    manifest = make_manifest(tmp_path, name="alpha", dir_name="beta")
    diags = NameDirectoryRule().check(manifest)
    assert [d.code for d in diags] == [DiagnosticCode.E003]
    assert diags[0].message == "Name 'alpha' does not match directory name 'beta'"
    assert diags[0].fix_hint == "Rename to 'beta' or move to 'alpha/SKILL.md'"


def test_name_directory_rule_match(tmp_path):
    assert NameDirectoryRule().check(make_manifest(tmp_path, name="alpha")) == []


def test_name_directory_rule_without_parent_directory():
    manifest = Manifest.parse_content("SKILL.md", "---\nname: a\ndescription: b\n---\n")
    assert NameDirectoryRule().check(manifest) == []


def test_description_required(tmp_path):
    diags = DescriptionRequiredRule().check(make_manifest(tmp_path, description=""))
    assert [d.code for d in diags] == [DiagnosticCode.E004]
    assert diags[0].message == "Description cannot be empty"
    assert DescriptionRequiredRule().check(make_manifest(tmp_path / "b")) == []


def test_description_length(tmp_path):
    manifest = make_manifest(tmp_path, description="abcdefghij")
    assert DescriptionLengthRule(10).check(manifest) == []
    diags = DescriptionLengthRule(4).check(manifest)
    assert [d.code for d in diags] == [DiagnosticCode.E005]
    assert diags[0].message == "Description too long (10 chars, max 4)"


def test_description_length_defaults_to_1024(tmp_path):
    assert DescriptionLengthRule().max_length == 1024
    manifest = make_manifest(tmp_path, description="x" * 1025)
    assert [d.code for d in DescriptionLengthRule().check(manifest)] == [
        DiagnosticCode.E005
    ]


def test_compatibility_length(tmp_path):
    manifest = make_manifest(tmp_path, extra='compatibility: "abcdef"\n')
    assert CompatibilityLengthRule(6).check(manifest) == []
    diags = CompatibilityLengthRule(3).check(manifest)
    assert [d.code for d in diags] == [DiagnosticCode.E006]
    assert diags[0].message == "Compatibility too long (6 chars, max 3)"
    assert diags[0].line is None


def test_compatibility_absent(tmp_path):
    assert CompatibilityLengthRule(0).check(make_manifest(tmp_path)) == []


def test_references_missing(tmp_path):
    body = "See `scripts/run.py` and `references/REFERENCE.md` and `other/x.md`.\n"
    manifest = make_manifest(tmp_path, body=body)
    (manifest.path.parent / "scripts").mkdir()
    (manifest.path.parent / "scripts" / "run.py").write_text("#!/bin/sh\n")
    diags = ReferencesExistRule().check(manifest)
    assert [d.message for d in diags] == [
        "Referenced file not found: references/REFERENCE.md"
    ]
    assert diags[0].code is DiagnosticCode.E009
    assert diags[0].fix_hint == (
        "Create references/REFERENCE.md or remove the reference"
    )


def test_body_length(tmp_path):
    manifest = make_manifest(tmp_path, body="a\nb\nc\nd\ne\n")
    assert BodyLengthRule(5).check(manifest) == []
    diags = BodyLengthRule(3).check(manifest)
    assert [d.code for d in diags] == [DiagnosticCode.W001]
    assert diags[0].message == (
        "Body exceeds recommended 3 lines (5 lines). Consider using references/"
    )
    assert diags[0].line == manifest.body_start_line + 3
    assert diags[0].fix_hint == "Move detailed content to references/ directory"


def test_script_executable(tmp_path):
    manifest = make_manifest(tmp_path)
    scripts = manifest.path.parent / "scripts"
    scripts.mkdir()
    script = scripts / "run.py"
    script.write_text("#!/usr/bin/env python3\n")
    script.chmod(0o644)
    diags = ScriptExecutableRule().check(manifest)
    assert [d.code for d in diags] == [DiagnosticCode.W002]
    assert diags[0].path == str(script)
    assert diags[0].fix_hint == f"Run: chmod +x {script}"
    script.chmod(0o755)
    assert ScriptExecutableRule().check(manifest) == []


def test_script_shebang(tmp_path):
    manifest = make_manifest(tmp_path)
    scripts = manifest.path.parent / "scripts"
    scripts.mkdir()
    (scripts / "good.sh").write_text("#!/usr/bin/env bash\necho hi\n")
    (scripts / "bad.sh").write_text("echo hi\n")
    (scripts / "binary.bin").write_bytes(b"\xff\xfe\x00")
    (scripts / "nested").mkdir()
    diags = ScriptShebangRule().check(manifest)
    assert [d.path for d in diags] == [str(scripts / "bad.sh")]
    assert diags[0].code is DiagnosticCode.W003
    assert diags[0].message == "Script missing shebang line"


def test_script_rules_without_scripts_dir(tmp_path):
    manifest = make_manifest(tmp_path)
    assert ScriptShebangRule().check(manifest) == []
    assert ScriptExecutableRule().check(manifest) == []