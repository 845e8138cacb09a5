"""Domain models: enums, dataclasses, and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class BehindState(Enum):
    """Relationship of the local branch to its upstream after a fetch"""
    UNKNOWN = auto()
    NOT_BEHIND = auto()
    BEHIND = auto()


class SyncOutcome(Enum):
    """Terminal outcome of one repository in one run"""
    FETCH_FAILED = auto()
    SKIPPED_UNKNOWN_STATE = auto()
    UP_TO_DATE = auto()
    SKIPPED_DIRTY = auto()
    PULL_FAILED = auto()
    PULLED = auto()

    @property
    def tag(self) -> str:
        """Label used in the per-repository report line."""
        return _OUTCOME_TAGS[self]

    @property
    def is_skip(self) -> bool:
        """True for outcomes counted as skipped in the summary."""
        return self in _SKIPPED_OUTCOMES

    @property
    def is_failure(self) -> bool:
        """True for outcomes caused by a failing git command."""
        return self in (SyncOutcome.FETCH_FAILED, SyncOutcome.PULL_FAILED)


_OUTCOME_TAGS = {
    SyncOutcome.FETCH_FAILED: 'Fetch Failed',
    SyncOutcome.SKIPPED_UNKNOWN_STATE: 'Skipped',
    SyncOutcome.UP_TO_DATE: 'Up To Date',
    SyncOutcome.SKIPPED_DIRTY: 'Skipped',
    SyncOutcome.PULL_FAILED: 'Pull Failed',
    SyncOutcome.PULLED: 'Pulled',
}

_SKIPPED_OUTCOMES = frozenset({
    SyncOutcome.SKIPPED_UNKNOWN_STATE,
    SyncOutcome.UP_TO_DATE,
    SyncOutcome.SKIPPED_DIRTY,
})


@dataclass(frozen=True)
class CommandResult:
    """Captured result of a single git invocation"""
    exit_code: int
    stdout: str = ''
    stderr: str = ''

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class RepoReport:
    """One repository's outcome, as shown in the final report"""
    repo_path: Path
    outcome: SyncOutcome
    detail: str = ''

    @property
    def name(self) -> str:
        """Folder name of the repository, or the full path for a filesystem root."""
        return self.repo_path.name or str(self.repo_path)

    @property
    def line(self) -> str:
        text = f"- [{self.outcome.tag}] {self.name}"
        if self.detail:
            text += f": {self.detail}"
        return text


@dataclass
class RunSummary:
    """Mutable result accumulator for one run"""
    repositories_found: int = 0
    processed: int = 0
    fetched: int = 0
    pulled: int = 0
    skipped: int = 0
    reports: list[RepoReport] = field(default_factory=list)

    def add_report(self, report: RepoReport) -> None:
        """Record a repository's outcome and update the counters."""
        self.reports.append(report)
        self.processed += 1
        if report.outcome is not SyncOutcome.FETCH_FAILED:
            self.fetched += 1
        if report.outcome is SyncOutcome.PULLED:
            self.pulled += 1
        if report.outcome.is_skip:
            self.skipped += 1

    @property
    def nothing_found(self) -> bool:
        """True when discovery produced no repositories at all."""
        return self.repositories_found == 0

    @property
    def summary_line(self) -> str:
        return (
            f"Processed: {self.processed}, Repositories Found: {self.repositories_found}, "
            f"Fetched: {self.fetched}, Pulled: {self.pulled}, Skipped: {self.skipped}"
        )

    def get_reports_by_outcome(self, outcome: SyncOutcome) -> list[RepoReport]:
        """Filter reports by outcome (e.g. PULLED, SKIPPED_DIRTY)."""
        return [r for r in self.reports if r.outcome is outcome]

    def has_failures(self) -> bool:
        """Return True if any fetch or pull failed."""
        return any(r.outcome.is_failure for r in self.reports)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            'repositories_found': self.repositories_found,
            'processed': self.processed,
            'fetched': self.fetched,
            'pulled': self.pulled,
            'skipped': self.skipped,
            'repositories': [
                {
                    'path': str(r.repo_path),
                    'outcome': r.outcome.name,
                    'tag': r.outcome.tag,
                    'detail': r.detail,
                }
                for r in self.reports
            ],
            'has_failures': self.has_failures(),
        }


@dataclass(frozen=True)
class BumpResult:
    """Result of a package.json patch version bump"""
    bumped: bool
    old_version: str | None = None
    new_version: str | None = None


@dataclass(frozen=True)
class SyncConfig:
    """Configuration for a fetch-and-pull run"""
    exclude_patterns: list[str] = field(default_factory=list)
    include_ancestor: bool = True
    token: str | None = field(default=None, repr=False)
    command_timeout: float | None = None
    verbose: bool = False
    json_output: bool = False

    def with_updates(self, **kwargs) -> SyncConfig:
        """Return a new SyncConfig with the given fields replaced."""
        current = {f.name: getattr(self, f.name) for f in self.__dataclass_fields__.values()}
        current.update(kwargs)
        return SyncConfig(**current)
