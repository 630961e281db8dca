import pytest

from skilo.errors import (
    ConfigError,
    FormatCheckFailedError,
    InvalidNameError,
    NoSkillsFoundError,
    SkillExistsError,
    SkiloError,
    ValidationFailedError,
)


def test_skill_exists_message_and_fields():
    err = SkillExistsError("my-skill", "/tmp/my-skill")
    assert err.name == "my-skill"
    assert err.path == "/tmp/my-skill"
    assert str(err) == "Skill 'my-skill' already exists at /tmp/my-skill"


def test_invalid_name_message_mentions_name():
    err = InvalidNameError("Bad_Name")
    assert err.name == "Bad_Name"
    assert str(err).startswith("Invalid skill name 'Bad_Name'")
    assert "lowercase alphanumeric chars with single hyphens" in str(err)


def test_no_skills_found_message():
    err = NoSkillsFoundError("some/dir")
    assert str(err).startswith("No skills found in")
    assert str(err).endswith("some/dir")


def test_config_error_prefix():
    err = ConfigError("bad value")
    assert err.detail == "bad value"
    assert str(err).startswith("Configuration error: ")
    assert str(err).endswith("bad value")


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (ValidationFailedError, "Validation failed with 3"),
        (FormatCheckFailedError, "Format check failed: 3"),
    ],
)
def test_count_errors(cls, prefix):
    err = cls(3)
    assert err.count == 3
    assert str(err).startswith(prefix)


@pytest.mark.parametrize(
    "cls, args, prefix",
    [
        (SkillExistsError, ("a", "b"), "Skill 'a' already exists"),
        (InvalidNameError, ("x",), "Invalid skill name 'x'"),
        (NoSkillsFoundError, ("p",), "No skills found in"),
        (ConfigError, ("c",), "Configuration error: "),
        (ValidationFailedError, (1,), "Validation failed with 1"),
        (FormatCheckFailedError, (1,), "Format check failed: 1"),
    ],
)
def test_all_errors_are_skilo_errors(cls, args, prefix):
    err = cls(*args)
    with pytest.raises(SkiloError) as info:
        raise err
    assert info.value is err
    assert str(info.value).startswith(prefix)