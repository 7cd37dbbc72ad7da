"""Turn CLI file arguments (files, directories, globs) into a file list."""

from __future__ import annotations

import fnmatch
import glob
from pathlib import Path
from typing import Iterable, Sequence

from ..domain.models import CSS, JAVASCRIPT
from .analyzer import STYLESHEET_SUFFIXES, file_type_for
from .script_extractor import SCRIPT_SUFFIXES

DEFAULT_IGNORES: tuple[str, ...] = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
    "coverage/**",
    "*.min.js",
    "*.min.css",
    ".next/**",
    ".nuxt/**",
    ".vscode/**",
    ".idea/**",
)

LINTABLE_SUFFIXES = SCRIPT_SUFFIXES | STYLESHEET_SUFFIXES


def _is_ignored(path: Path, patterns: Sequence[str]) -> bool:
    posix = path.as_posix()
    for pattern in patterns:
        if pattern.endswith("/**"):
            if pattern[:-3] in path.parts:
                return True
            continue
        if fnmatch.fnmatch(posix, pattern) or fnmatch.fnmatch(path.name, pattern):
            return True
    return False


def _expand_directory(directory: Path, ignores: Sequence[str]) -> Iterable[Path]:
    # Ignore rules apply below the requested directory, not to its own path.
    for candidate in directory.rglob("*"):
        if candidate.suffix.lower() not in LINTABLE_SUFFIXES or not candidate.is_file():
            continue
        if not _is_ignored(candidate.relative_to(directory), ignores):
            yield candidate


def resolve_files(
    patterns: Sequence[str],
    ignore_pattern: str | None = None,
    extra_ignores: Sequence[str] = (),
) -> list[str]:
    """
    Return the sorted, de-duplicated files named by ``patterns``.

    Directories expand recursively to script and stylesheet files, existing
    files are kept as given, and anything else is treated as a glob. An empty
    pattern list means the current directory.
    """

    ignores = list(DEFAULT_IGNORES) + list(extra_ignores)
    if ignore_pattern:
        ignores.append(ignore_pattern)

    resolved: set[str] = set()
    for pattern in patterns or ["."]:
        path = Path(pattern)
        if path.is_dir():
            resolved.update(str(candidate) for candidate in _expand_directory(path, ignores))
        elif path.is_file():
            resolved.add(str(path))
        else:
            for match in glob.glob(pattern, recursive=True):
                candidate = Path(match)
                if candidate.is_file() and not _is_ignored(candidate, ignores):
                    resolved.add(str(candidate))
    return sorted(resolved)


def partition_files(
    files: Iterable[str], *, js_only: bool = False, css_only: bool = False
) -> dict[str, list[str]]:
    """Split files into script and stylesheet lists, honouring the only-flags."""

    partitions: dict[str, list[str]] = {JAVASCRIPT: [], CSS: []}
    for file in files:
        file_type = file_type_for(file)
        if file_type == JAVASCRIPT and not css_only:
            partitions[JAVASCRIPT].append(file)
        elif file_type == CSS and not js_only:
            partitions[CSS].append(file)
    return partitions
