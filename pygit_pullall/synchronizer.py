"""RepositorySynchronizer: fetch, behind-check, dirty-check and pull for one repository."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from pygit_pullall.models import (
    BehindState,
    CommandResult,
    RepoReport,
    SyncOutcome,
)
from pygit_pullall.protocols import CommandRunner, OutputHandler
from pygit_pullall.status import first_line, has_uncommitted_changes, parse_behind_state

logger = logging.getLogger(__name__)

FETCH_ARGS = ('fetch',)
BRANCH_STATUS_ARGS = ('status', '--porcelain', '-b')
DIRTY_STATUS_ARGS = ('status', '--porcelain')

UNKNOWN_STATE_DETAIL = "unable to determine upstream/behind state"
DIRTY_DETAIL = "has uncommitted changes"

# Sub-step positions within one repository, as (step, steps)
STEP_FETCH = (1, 6)
STEP_STATUS = (3, 6)
STEP_PULL = (5, 6)


def pull_args(token: str | None = None) -> tuple[str, ...]:
    """Arguments for `git pull`, sending the token as an HTTP bearer header when given."""
    if token:
        return ('-c', f'http.extraHeader=Authorization: Bearer {token}', 'pull')
    return ('pull',)


class RepositorySynchronizer:
    """Responsible for bringing a single repository up to date"""

    def __init__(
        self,
        runner: CommandRunner,
        output: OutputHandler,
        token: str | None = None,
    ):
        """Create a synchronizer that issues commands through runner."""
        self.runner = runner
        self.output = output
        self.token = token

    def sync(
        self,
        repo_path: Path,
        progress: Callable[[str, tuple[int, int]], None] | None = None,
    ) -> RepoReport:
        """Run fetch -> behind-check -> dirty-check -> pull. Always returns exactly one report."""
        name = repo_path.name or str(repo_path)

        def step(label: str, position: tuple[int, int]) -> None:
            if progress is not None:
                progress(f"{name}: {label}", position)

        step("fetching\u2026", STEP_FETCH)
        fetch = self._run(repo_path, FETCH_ARGS)
        if not fetch.ok:
            logger.error("%s: fetch failed: %s", name, fetch.stderr)
            self.output.error(f"\u2717 {name}: fetch failed", indent=1)
            return RepoReport(repo_path, SyncOutcome.FETCH_FAILED, first_line(fetch.stderr))

        step("checking tracking status\u2026", STEP_STATUS)
        behind = self.get_behind_state(repo_path)
        if behind is BehindState.UNKNOWN:
            self.output.warning(f"\u26a0 {name}: {UNKNOWN_STATE_DETAIL}", indent=1)
            return RepoReport(repo_path, SyncOutcome.SKIPPED_UNKNOWN_STATE, UNKNOWN_STATE_DETAIL)
        if behind is BehindState.NOT_BEHIND:
            self.output.info(f"\u2713 {name}: already up to date", indent=1)
            return RepoReport(repo_path, SyncOutcome.UP_TO_DATE)

        step("pulling\u2026", STEP_PULL)
        if self.has_uncommitted_changes(repo_path):
            self.output.warning(f"\u26a0 {name}: skipping pull, {DIRTY_DETAIL}", indent=1)
            return RepoReport(repo_path, SyncOutcome.SKIPPED_DIRTY, DIRTY_DETAIL)

        pull = self._run(repo_path, pull_args(self.token))
        if not pull.ok:
            logger.error("%s: pull failed\nSTDERR: %s\nSTDOUT: %s", name, pull.stderr, pull.stdout)
            self.output.error(f"\u2717 {name}: pull failed", indent=1)
            return RepoReport(repo_path, SyncOutcome.PULL_FAILED, first_line(pull.stderr))

        self.output.success(f"\u2713 {name}: pulled", indent=1)
        return RepoReport(repo_path, SyncOutcome.PULLED)

    def get_behind_state(self, repo_path: Path) -> BehindState:
        """Query the branch tracking line and classify it."""
        result = self._run(repo_path, BRANCH_STATUS_ARGS)
        if not result.ok:
            logger.error("Status check failed in %s: %s", repo_path, result.stderr)
            return BehindState.UNKNOWN
        return parse_behind_state(result.stdout)

    def has_uncommitted_changes(self, repo_path: Path) -> bool:
        """Return True if the working tree is dirty. A failed query counts as dirty."""
        result = self._run(repo_path, DIRTY_STATUS_ARGS)
        if not result.ok:
            logger.error("Working tree check failed in %s: %s", repo_path, result.stderr)
            return True
        return has_uncommitted_changes(result.stdout)

    def _run(self, repo_path: Path, args: Sequence[str]) -> CommandResult:
        """Run a command; unexpected runner errors become a failed result."""
        try:
            return self.runner.run(repo_path, args)
        except Exception as e:
            logger.exception("Unexpected error running git in %s", repo_path)
            return CommandResult(-1, '', f"Unexpected error: {e}")
