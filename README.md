# skilo

A command-line tool for developing Agent Skills. An Agent Skill is a directory
that holds a `SKILL.md` file. The file starts with YAML frontmatter (`name`,
`description`, and the optional `license`, `compatibility`, `metadata` and
`allowed-tools`), and a Markdown body follows it.

## Installation

```bash
pip install .
```

This installs the `skilo` command.

## Usage

### Creating a skill

```bash
skilo new my-skill
skilo new my-skill --template minimal --description "Summarises reports."
skilo new my-skill --template full --lang bash --license MIT --output ./skills
```

The skill is created in `<output>/<name>`. Without `--output`, it goes in the
current directory. The name must be lowercase alphanumeric with single inner
hyphens and at most 64 characters long. Creation fails if the directory
already exists. The default description is `A <name with spaces> skill.`

Templates:

- `hello-world` (the default): `SKILL.md` and `scripts/greet.<ext>`. Pass
  `--no-scripts` to leave out the script.
- `minimal`: only `SKILL.md`.
- `full`: `SKILL.md`, `scripts/main.<ext>`, `references/REFERENCE.md` and
  `assets/.gitkeep`.
- `script-based`: `SKILL.md` and `scripts/setup`, `run` and `cleanup`.

Languages are `python` (the default), `bash`, `javascript` and `typescript`.
On POSIX systems, generated scripts are made executable.

### Linting

```bash
skilo lint path/to/skills
skilo lint path/to/skills --strict   # warnings also fail
skilo validate path/to/skills        # same as lint --strict
```

A path may be a `SKILL.md` file or a directory that contains one. For any
other directory, skilo searches it recursively and follows symlinks. The
exit code is 1 in these cases:

- a file could not be parsed;
- any error was reported;
- `--strict` is set or `[lint] strict = true` in the configuration, and any
  warning was reported.

Otherwise the exit code is 0.

### Formatting

```bash
skilo fmt path/to/skills           # rewrite files in place
skilo fmt path/to/skills --check   # exit 1 if any file needs formatting
skilo fmt path/to/skills --diff    # print a line-by-line diff instead
```

Formatting writes the frontmatter again in canonical key order: `name`,
`description`, `license`, `compatibility`, `metadata`, `allowed-tools`. Keys
outside that list are dropped. Formatting also aligns the columns of
Markdown tables in the body and keeps their alignment markers.

### Lint and format check together

```bash
skilo check path/to/skills
```

This runs a strict lint followed by `fmt --check`. It exits 1 if either one
fails.

### Properties and prompt XML

```bash
skilo read-properties skill-a skill-b
skilo to-prompt path/to/skills
```

`read-properties` prints JSON. For a single skill it prints one object, and
for several skills an array. `to-prompt` prints an `<available_skills>` block
with the `name`, `description` and `location` of each skill. Both commands
always print their own format and ignore `--format`. Both exit 1 if any skill
failed to parse.

### Global options

- `--format text|json|sarif`: sets the output format of lint results and
  messages.
- `-q` / `--quiet`: suppresses non-error output.
- `--config PATH`: sets the configuration file. The path can also be given in
  the `SKILO_CONFIG` environment variable.
- `--version`: prints the version.

Colour is used in text output only when writing to a terminal, and never when
`NO_COLOR` is set.

## Configuration

Without `--config`, skilo uses the first of these files it finds in the
current directory:

- `.skilorc.toml`
- `skilo.toml`
- `.skilo/config.toml`

If no file is found, the defaults apply.

```toml
[lint]
strict = false

[lint.rules]
name_format = true
name_length = 64          # a number sets the limit, false disables, true keeps the default
name_directory = true
description_required = true
description_length = 1024
compatibility_length = 500
references_exist = true
body_length = 500
script_executable = true
script_shebang = true

[fmt]
format_tables = true

[new]
default_license = "MIT"
```

`[fmt] sort_frontmatter` and `indent_size`, and `[new] default_template` and
`default_lang`, are read and type-checked but have no effect.

## Diagnostics

Errors:

- `E001`: invalid name format.
- `E002`: name too long.
- `E003`: the name does not match the skill's directory.
- `E004`: empty description.
- `E005`: description too long.
- `E006`: compatibility text too long.
- `E009`: a `scripts/`, `references/` or `assets/` path in backticks in the
  body does not exist.

Warnings:

- `W001`: the body is longer than the line limit.
- `W002`: a file in `scripts/` is not executable. This is checked on POSIX
  only.
- `W003`: a file in `scripts/` has no shebang line.

Invalid YAML and unreadable files are reported as parse errors, not as
diagnostics.

## Using it from Python

```python
from skilo.discovery import find_skills
from skilo.manifest import Manifest
from skilo.validator import Validator
from skilo.formatter import Formatter, format_tables

for path in find_skills("skills"):
    manifest = Manifest.parse(path)
    result = Validator().validate(manifest)
    print(path, [d.code for d in result.errors], [d.code for d in result.warnings])
    print(Formatter().format(manifest))
```

## What it does not do

- `lint --fix` is accepted but applies no fixes.
- No check produces `E007`, `E008` or `W004`. These codes exist only for
  SARIF rule descriptions.

## Running the tests

```bash
pip install ".[test]"
pytest
```