"""Finding and loading skills on disk."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from skilo.manifest import Manifest, ManifestError

SKILL_FILE = "SKILL.md"


def _walk_skill_files(root: Path) -> Iterator[Path]:
    seen: set[str] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        real = os.path.realpath(dirpath)
        if real in seen:
            dirnames.clear()
            continue
        seen.add(real)
        dirnames.sort()
        if SKILL_FILE in filenames:
            yield Path(dirpath) / SKILL_FILE


def find_skills(root: str | Path) -> list[Path]:
    """Return SKILL.md paths for root: itself, its own SKILL.md, or all below it."""
    root = Path(root)
    if root.is_file() and root.name == SKILL_FILE:
        return [root]
    skill_md = root / SKILL_FILE
    if skill_md.exists():
        return [skill_md]
    return list(_walk_skill_files(root))


def load_skills(
    paths: Iterable[str | Path],
) -> list[Manifest | tuple[Path, ManifestError]]:
    """Parse each path, giving a manifest or a (path, error) pair."""
    loaded: list[Manifest | tuple[Path, ManifestError]] = []
    for raw in paths:
        path = Path(raw)
        try:
            loaded.append(Manifest.parse(path))
        except ManifestError as exc:
            loaded.append((path, exc))
    return loaded


def discover(root: str | Path) -> list[Manifest | tuple[Path, ManifestError]]:
    """Find and load every skill under root."""
    return load_skills(find_skills(root))