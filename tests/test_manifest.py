from pathlib import Path

import pytest
import yaml

from skilo.errors import SkiloError
from skilo.manifest import (
    KEY_ORDER,
    Frontmatter,
    InvalidYamlError,
    Manifest,
    ManifestError,
    ManifestIOError,
    MissingFrontmatterError,
    UnclosedFrontmatterError,
    split_content,
)

VALID = """---
name: test-skill
description: A test skill
---

# Test Skill

Some content here.
"""


def test_parse_valid_manifest():
    manifest = Manifest.parse_content(Path("test-skill/SKILL.md"), VALID)
    assert manifest.frontmatter.name == "test-skill"
    assert manifest.frontmatter.description == "A test skill"
    assert "# Test Skill" in manifest.body
    assert manifest.path == Path("test-skill/SKILL.md")


def test_parse_missing_frontmatter():
    with pytest.raises(MissingFrontmatterError):
        Manifest.parse_content(Path("test/SKILL.md"), "# No frontmatter here")


def test_parse_unclosed_frontmatter():
    with pytest.raises(UnclosedFrontmatterError):
        Manifest.parse_content(Path("test/SKILL.md"), "---\nname: test\n# No closing")


def test_split_content_parts():
    raw, body, start = split_content(VALID)
    assert raw == "name: test-skill\ndescription: A test skill"
    assert body.startswith("# Test Skill")
    assert start == 5


def test_split_content_no_body():
    raw, body, _ = split_content("---\nname: a\ndescription: b\n---")
    assert raw == "name: a\ndescription: b"
    assert body == ""


def test_leading_whitespace_allowed():
    manifest = Manifest.parse_content("x/SKILL.md", "\n\n" + VALID)
    assert manifest.frontmatter.name == "test-skill"


def test_missing_required_field():
    with pytest.raises(InvalidYamlError):
        Manifest.parse_content("x/SKILL.md", "---\nname: a\n---\nbody")


def test_invalid_yaml():
    with pytest.raises(InvalidYamlError):
        Manifest.parse_content("x/SKILL.md", "---\nname: [unclosed\n---\n")


def test_errors_share_base():
    with pytest.raises(ManifestError):
        Manifest.parse_content("x/SKILL.md", "nothing")
    with pytest.raises(SkiloError):
        Manifest.parse_content("x/SKILL.md", "nothing")


def test_optional_fields_and_allowed_tools():
    content = (
        "---\nname: s\ndescription: d\nlicense: MIT\ncompatibility: any\n"
        "metadata:\n  author: someone\nallowed-tools: Bash Read\n---\nbody\n"
    )
    fm = Manifest.parse_content("s/SKILL.md", content).frontmatter
    assert fm.license == "MIT"
    assert fm.compatibility == "any"
    assert fm.metadata == {"author": "someone"}
    assert fm.allowed_tools == "Bash Read"


def test_to_dict_key_order_and_skips_none():
    fm = Frontmatter(name="a", description="b", allowed_tools="Read", license="MIT")
    keys = list(fm.to_dict())
    assert keys == [k for k in KEY_ORDER if k in keys]
    assert "compatibility" not in keys
    assert "allowed-tools" in keys


def test_to_yaml_round_trip():
    fm = Frontmatter(
        name="my-skill",
        description="Does things: many of them",
        license="MIT",
        metadata={"version": "1.0"},
        allowed_tools="Bash",
    )
    text = fm.to_yaml()
    assert text.startswith("name: my-skill\n")
    assert Frontmatter.from_dict(yaml.safe_load(text)) == fm


def test_parse_reads_file(tmp_path):
    skill = tmp_path / "test-skill"
    skill.mkdir()
    path = skill / "SKILL.md"
    path.write_text(VALID)
    manifest = Manifest.parse(path)
    assert manifest.path == path
    assert manifest.frontmatter.name == "test-skill"


def test_parse_missing_file(tmp_path):
    with pytest.raises(ManifestIOError) as info:
        Manifest.parse(tmp_path / "SKILL.md")
    assert info.value.path == tmp_path / "SKILL.md"


def test_str_reassembles():
    manifest = Manifest.parse_content("x/SKILL.md", VALID)
    again = Manifest.parse_content("x/SKILL.md", str(manifest))
    assert again.frontmatter == manifest.frontmatter
    assert again.body == manifest.body