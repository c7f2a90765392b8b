"""Tests for directory enumeration."""

import threading

import pytest

from core.discovery import walk_files


@pytest.mark.unit
def test_walk_files_filters_by_extension(tmp_path, make_tree):
    root = make_tree(
        tmp_path / "repo",
        {"main.tf": "", "app.py": "", "README.md": "", "nested/vars.TF": ""},
    )

    found = list(walk_files(root, {".tf"}))

    assert found == [root / "main.tf", root / "nested" / "vars.TF"]


@pytest.mark.unit
def test_walk_files_is_sorted_and_stable(tmp_path, make_tree):
    root = make_tree(
        tmp_path / "repo",
        {"b.py": "", "a.py": "", "z/c.py": "", "m/d.py": ""},
    )

    first = list(walk_files(root, {".py"}))
    second = list(walk_files(root, {".py"}))

    assert first == second
    assert first == [root / "a.py", root / "b.py", root / "m" / "d.py", root / "z" / "c.py"]


@pytest.mark.unit
def test_walk_files_skips_git_and_excluded_dirs(tmp_path, make_tree):
    root = make_tree(
        tmp_path / "repo",
        {
            ".git/hooks/pre-commit.sh": "",
            "pkg/__pycache__/mod.py": "",
            "pkg/mod.py": "",
        },
    )

    found = list(walk_files(root, {".py", ".sh"}, exclude_dirs={"__pycache__"}))

    assert found == [root / "pkg" / "mod.py"]


@pytest.mark.unit
def test_walk_files_without_extensions_yields_everything(tmp_path, make_tree):
    root = make_tree(tmp_path / "repo", {"Makefile": "", "a.txt": ""})
    assert list(walk_files(root)) == [root / "Makefile", root / "a.txt"]


@pytest.mark.unit
def test_walk_files_empty_directory(tmp_path):
    assert list(walk_files(tmp_path)) == []


@pytest.mark.unit
def test_walk_files_stops_when_cancelled(tmp_path, make_tree):
    root = make_tree(tmp_path / "repo", {f"f{i}.py": "" for i in range(5)})
    cancel = threading.Event()

    found = []
    for path in walk_files(root, {".py"}, cancel=cancel):
        found.append(path)
        if len(found) == 2:
            cancel.set()

    assert found == [root / "f0.py", root / "f1.py"]
