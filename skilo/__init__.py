"""Create, lint and format Agent Skills (SKILL.md directories) from the command line."""

__version__ = "0.4.0"