"""Concrete GitPython-based command runner."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from git import Git
from git.exc import CommandError

from pygit_pullall.models import CommandResult


class GitCommandRunner:
    """Runs git through GitPython, returning exit code and captured output"""

    def __init__(self, timeout: float | None = None):
        """Create a runner. A timeout (seconds) kills commands that hang."""
        self.timeout = timeout
        self._logger = logging.getLogger(__name__)

    def run(self, working_dir: Path, args: Sequence[str]) -> CommandResult:
        """Run `git <args>` in working_dir. Non-zero exits are returned, not raised."""
        git = Git(str(working_dir))
        try:
            status, stdout, stderr = git.execute(
                ['git', *args],
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=self.timeout,
            )
        except (CommandError, OSError) as e:
            self._logger.debug("git %s could not run in %s: %s", args[0] if args else '', working_dir, e)
            return CommandResult(-1, '', str(e))
        return CommandResult(status, stdout or '', stderr or '')
