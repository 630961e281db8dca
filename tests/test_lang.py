import pytest

from skilo.lang import OutputFormat, ScriptLang, Template


@pytest.mark.parametrize(
    "lang, ext",
    [
        (ScriptLang.PYTHON, "py"),
        (ScriptLang.BASH, "sh"),
        (ScriptLang.JAVASCRIPT, "js"),
        (ScriptLang.TYPESCRIPT, "ts"),
    ],
)
def test_extension(lang, ext):
    assert lang.extension() == ext


@pytest.mark.parametrize(
    "lang, shebang",
    [
        (ScriptLang.PYTHON, "#!/usr/bin/env python3"),
        (ScriptLang.BASH, "#!/usr/bin/env bash"),
        (ScriptLang.JAVASCRIPT, "#!/usr/bin/env node"),
        (ScriptLang.TYPESCRIPT, "#!/usr/bin/env -S npx ts-node"),
    ],
)
def test_shebang(lang, shebang):
    assert lang.shebang() == shebang


@pytest.mark.parametrize(
    "lang, prefix",
    [
        (ScriptLang.PYTHON, "#"),
        (ScriptLang.BASH, "#"),
        (ScriptLang.JAVASCRIPT, "//"),
        (ScriptLang.TYPESCRIPT, "//"),
    ],
)
def test_comment_prefix(lang, prefix):
    assert lang.comment_prefix() == prefix


def test_file_name_uses_extension():
    assert ScriptLang.PYTHON.file_name("greet") == "greet.py"
    assert ScriptLang.BASH.file_name("greet") == "greet.sh"
    assert ScriptLang.JAVASCRIPT.file_name("main") == "main.js"
    assert ScriptLang.TYPESCRIPT.file_name("run") == "run.ts"


def test_enum_lookup_from_cli_values():
    assert Template("hello-world") is Template.HELLO_WORLD
    assert Template("script-based") is Template.SCRIPT_BASED
    assert OutputFormat("sarif") is OutputFormat.SARIF
    assert ScriptLang("python") is ScriptLang.PYTHON


def test_unknown_value_rejected():
    with pytest.raises(ValueError):
        Template("huge")