"""Tests for RepositoryScanner and repository detection."""

import errno
import logging
import os
from pathlib import Path

import pytest

from pygit_pullall import (
    RepositoryScanner,
    ScanError,
    find_ancestor_repository,
    is_repository_root,
)


def _scan(path: Path, **kwargs) -> list[Path]:
    kwargs.setdefault('include_ancestor', False)
    return RepositoryScanner(**kwargs).discover(path)


def _denied(path) -> PermissionError:
    return PermissionError(errno.EACCES, "Permission denied", str(path))


def _deny_listing(monkeypatch, locked: Path) -> None:
    """Make os.scandir fail for one directory, as for a chmod 000 folder."""
    real_scandir = os.scandir

    def scandir(path):
        if Path(path) == locked:
            raise _denied(path)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)


def _deny_stat(monkeypatch, locked: Path) -> None:
    """Make Path.is_dir fail below locked, as for an untraversable parent."""
    real_is_dir = Path.is_dir

    def is_dir(self, *args, **kwargs):
        if self == locked or locked in self.parents:
            raise _denied(self)
        return real_is_dir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "is_dir", is_dir)


class TestIsRepositoryRoot:
    def test_git_directory(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        assert is_repository_root(tmp_path) is True

    def test_plain_directory(self, tmp_path: Path):
        assert is_repository_root(tmp_path) is False

    def test_missing_path_is_false(self, tmp_path: Path):
        assert is_repository_root(tmp_path / "does" / "not" / "exist") is False

    def test_git_file_is_false(self, tmp_path: Path):
        (tmp_path / ".git").write_text("gitdir: ../somewhere")
        assert is_repository_root(tmp_path) is False


class TestRepositoryScanner:
    def test_find_repositories(self, tmp_path: Path):
        (tmp_path / "repo1" / ".git").mkdir(parents=True)
        (tmp_path / "repo2" / ".git").mkdir(parents=True)
        (tmp_path / "not-a-repo").mkdir(parents=True)

        repo_names = {r.name for r in _scan(tmp_path)}
        assert repo_names == {"repo1", "repo2"}

    def test_find_nested_repositories(self, tmp_path: Path):
        (tmp_path / "parent" / "child" / ".git").mkdir(parents=True)
        repos = _scan(tmp_path)
        assert len(repos) == 1
        assert repos[0].name == "child"

    def test_does_not_descend_into_repository(self, tmp_path: Path):
        (tmp_path / "outer" / ".git").mkdir(parents=True)
        (tmp_path / "outer" / "vendor" / "inner" / ".git").mkdir(parents=True)
        repos = _scan(tmp_path)
        assert [r.name for r in repos] == ["outer"]

    def test_no_nested_duplicates(self, tmp_path: Path):
        for rel in ("a", "a/b", "c/d", "c/d/e/f", "g"):
            (tmp_path / rel / ".git").mkdir(parents=True)
        repos = _scan(tmp_path)
        assert len(repos) == len(set(repos))
        for repo in repos:
            for other in repos:
                if repo != other:
                    assert other not in repo.parents

    def test_hidden_directories_skipped(self, tmp_path: Path):
        (tmp_path / ".cache" / "repo" / ".git").mkdir(parents=True)
        (tmp_path / ".hidden" / ".git").mkdir(parents=True)
        (tmp_path / "visible" / ".git").mkdir(parents=True)
        repos = _scan(tmp_path)
        assert [r.name for r in repos] == ["visible"]

    def test_exclude_patterns(self, tmp_path: Path):
        (tmp_path / "repo1" / ".git").mkdir(parents=True)
        (tmp_path / "node_modules" / "dep" / ".git").mkdir(parents=True)
        repos = _scan(tmp_path, exclude_patterns=["node_modules"])
        assert [r.name for r in repos] == ["repo1"]

    def test_no_repos_found(self, tmp_path: Path):
        (tmp_path / "empty" / "deeper").mkdir(parents=True)
        assert _scan(tmp_path) == []

    def test_scan_root_is_repository(self, tmp_path: Path):
        (tmp_path / ".git").mkdir()
        (tmp_path / "sub" / ".git").mkdir(parents=True)
        assert _scan(tmp_path) == [tmp_path]

    def test_symlink_not_followed(self, tmp_path: Path):
        (tmp_path / "real_repo" / ".git").mkdir(parents=True)
        link_dir = tmp_path / "linked"
        link_dir.mkdir()
        (link_dir / "symlinked_repo").symlink_to(tmp_path / "real_repo")
        (link_dir / "loop").symlink_to(tmp_path)

        repos = _scan(tmp_path)
        assert [r.name for r in repos] == ["real_repo"]

    def test_deep_tree(self, tmp_path: Path):
        deep = tmp_path
        for i in range(200):
            deep = deep / f"d{i}"
        (deep / ".git").mkdir(parents=True)
        assert _scan(tmp_path) == [deep]

    def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(ScanError):
            _scan(tmp_path / "missing")

    def test_unreadable_root_raises(self, tmp_path: Path, monkeypatch):
        root = tmp_path / "locked"
        (root / "repo" / ".git").mkdir(parents=True)
        _deny_listing(monkeypatch, root)
        with pytest.raises(ScanError) as exc:
            _scan(root)
        assert exc.value.path == root

    def test_unreadable_subdirectory_is_skipped(self, tmp_path: Path, monkeypatch, caplog):
        (tmp_path / "ok" / ".git").mkdir(parents=True)
        locked = tmp_path / "locked"
        (locked / "hidden_repo" / ".git").mkdir(parents=True)
        _deny_listing(monkeypatch, locked)
        with caplog.at_level(logging.WARNING):
            repos = _scan(tmp_path)
        assert [r.name for r in repos] == ["ok"]
        assert "Failed to enumerate" in caplog.text

    def test_untraversable_parent_raises_scan_error(self, tmp_path: Path, monkeypatch):
        locked = tmp_path / "locked"
        (locked / "Assets").mkdir(parents=True)
        _deny_stat(monkeypatch, locked)
        with pytest.raises(ScanError):
            RepositoryScanner().discover(locked / "Assets")

    def test_is_repository_root_swallows_permission_error(self, tmp_path: Path, monkeypatch):
        (tmp_path / "locked" / ".git").mkdir(parents=True)
        _deny_stat(monkeypatch, tmp_path / "locked")
        assert is_repository_root(tmp_path / "locked") is False


class TestAncestorRepository:
    def test_find_ancestor(self, tmp_path: Path):
        (tmp_path / "project" / ".git").mkdir(parents=True)
        start = tmp_path / "project" / "Assets" / "Plugins"
        start.mkdir(parents=True)
        assert find_ancestor_repository(start) == tmp_path / "project"

    def test_ancestor_appended_last(self, tmp_path: Path):
        project = tmp_path / "project"
        (project / ".git").mkdir(parents=True)
        assets = project / "Assets"
        (assets / "pkg-a" / ".git").mkdir(parents=True)
        (assets / "nested" / "pkg-b" / ".git").mkdir(parents=True)

        repos = RepositoryScanner().discover(assets)
        assert repos[-1] == project
        assert repos.count(project) == 1
        assert {r.name for r in repos[:-1]} == {"pkg-a", "pkg-b"}

    def test_ancestor_not_duplicated_when_scan_root_is_repo(self, tmp_path: Path):
        (tmp_path / "project" / ".git").mkdir(parents=True)
        repos = RepositoryScanner().discover(tmp_path / "project")
        assert repos == [tmp_path / "project"]

    def test_ancestor_only(self, tmp_path: Path):
        (tmp_path / "project" / ".git").mkdir(parents=True)
        (tmp_path / "project" / "Assets").mkdir()
        repos = RepositoryScanner().discover(tmp_path / "project" / "Assets")
        assert repos == [tmp_path / "project"]

    def test_include_ancestor_disabled(self, tmp_path: Path):
        (tmp_path / "project" / ".git").mkdir(parents=True)
        (tmp_path / "project" / "Assets").mkdir()
        repos = RepositoryScanner(include_ancestor=False).discover(tmp_path / "project" / "Assets")
        assert repos == []
