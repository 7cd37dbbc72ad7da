"""Expansion of files, directories and globs into a lint list."""

from __future__ import annotations

from pathlib import Path

import pytest

from mcp_unilint.services.file_resolver import partition_files, resolve_files


@pytest.fixture
def project(tmp_path: Path) -> Path:
    for relative in (
        "src/app.js",
        "src/widget.tsx",
        "src/styles/site.css",
        "src/styles/theme.scss",
        "src/vendor.min.js",
        "src/readme.md",
        "node_modules/lib/index.js",
        "dist/bundle.js",
        "legacy/old.js",
    ):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
    return tmp_path


def _relative(files: list[str], root: Path) -> list[str]:
    return [Path(file).relative_to(root).as_posix() for file in files]


def test_directory_expansion_applies_default_ignores(project: Path) -> None:
    files = resolve_files([str(project)])

    assert _relative(files, project) == [
        "legacy/old.js",
        "src/app.js",
        "src/styles/site.css",
        "src/styles/theme.scss",
        "src/widget.tsx",
    ]


def test_custom_ignore_pattern(project: Path) -> None:
    files = resolve_files([str(project)], ignore_pattern="legacy/**")

    assert "legacy/old.js" not in _relative(files, project)


def test_extra_ignores_from_config(project: Path) -> None:
    files = resolve_files([str(project)], extra_ignores=["*.scss"])

    assert "src/styles/theme.scss" not in _relative(files, project)


def test_explicit_files_and_globs(project: Path) -> None:
    explicit = str(project / "src" / "app.js")
    pattern = str(project / "src" / "**" / "*.css")

    files = resolve_files([explicit, pattern, explicit])

    assert _relative(files, project) == ["src/app.js", "src/styles/site.css"]


def test_default_pattern_is_current_directory(
    project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(project / "src")

    assert resolve_files([]) == sorted(
        ["app.js", "widget.tsx", str(Path("styles") / "site.css"), str(Path("styles") / "theme.scss")]
    )


def test_unmatched_glob_yields_nothing(project: Path) -> None:
    assert resolve_files([str(project / "nothing" / "*.js")]) == []


def test_partition_files_respects_only_flags() -> None:
    files = ["a.js", "b.css", "c.ts", "d.less", "e.txt"]

    assert partition_files(files) == {"javascript": ["a.js", "c.ts"], "css": ["b.css", "d.less"]}
    assert partition_files(files, js_only=True)["css"] == []
    assert partition_files(files, css_only=True)["javascript"] == []
