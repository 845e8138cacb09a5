"""Repository scanner: finds git repos under a directory and above it."""

from __future__ import annotations

import logging
import os
from pathlib import Path

GIT_DIR = '.git'

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """The scan root itself could not be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to scan {path}: {reason}")
        self.path = path
        self.reason = reason


def is_repository_root(path: Path) -> bool:
    """Return True if path holds a .git directory. Never raises."""
    try:
        return (Path(path) / GIT_DIR).is_dir()
    except (OSError, ValueError):
        return False


def find_ancestor_repository(start: Path) -> Path | None:
    """Walk from start up to the filesystem root; return the first repository root found."""
    current = Path(os.path.abspath(start))
    while True:
        if is_repository_root(current):
            return current
        if current.parent == current:
            return None
        current = current.parent


def _same_path(a: Path, b: Path) -> bool:
    return os.path.abspath(a).casefold() == os.path.abspath(b).casefold()


class RepositoryScanner:
    """Responsible for finding git repositories"""

    def __init__(self, exclude_patterns: list[str] = None, include_ancestor: bool = True):
        """Create a scanner with optional substring-based exclude patterns."""
        self.exclude_patterns = exclude_patterns or []
        self.include_ancestor = include_ancestor

    def discover(self, search_dir: Path) -> list[Path]:
        """Return nested repositories under search_dir, then the ancestor repository (if any).

        Raises ScanError if search_dir itself cannot be listed.
        """
        root = Path(os.path.abspath(search_dir))
        try:
            is_dir = root.is_dir()
        except OSError as e:
            raise ScanError(root, e.strerror or str(e)) from e
        if not is_dir:
            raise ScanError(root, "not a directory")
        repos = self.find_repositories(root)

        if self.include_ancestor:
            ancestor = find_ancestor_repository(root)
            if ancestor is not None and not any(_same_path(ancestor, r) for r in repos):
                # Nested repositories settle before the repository containing them.
                repos.append(ancestor)
        return repos

    def find_repositories(self, root: Path) -> list[Path]:
        """Depth-first walk with an explicit stack; never descends into a repository."""
        repos: list[Path] = []
        stack: list[Path] = [root]
        while stack:
            current = stack.pop()

            if current.name == GIT_DIR or self._should_exclude(current):
                continue

            if is_repository_root(current):
                repos.append(current)
                continue

            try:
                children = self._list_subdirectories(current)
            except OSError as e:
                if current == root:
                    raise ScanError(root, e.strerror or str(e)) from e
                logger.warning("Failed to enumerate '%s': %s", current, e)
                continue
            stack.extend(reversed(children))
        return repos

    def _list_subdirectories(self, directory: Path) -> list[Path]:
        """Immediate, non-hidden, non-symlinked subdirectories in name order."""
        children = []
        with os.scandir(directory) as it:
            for entry in it:
                if entry.name.startswith('.'):
                    continue
                try:
                    if entry.is_dir(follow_symlinks=False):
                        children.append(Path(entry.path))
                except OSError as e:
                    logger.warning("Failed to stat '%s': %s", entry.path, e)
        children.sort(key=lambda p: p.name)
        return children

    def _should_exclude(self, path: Path) -> bool:
        """Return True if any exclude pattern is a substring of the path."""
        path_str = str(path)
        return any(pattern in path_str for pattern in self.exclude_patterns)
