"""SyncOrchestrator: discovers repositories and brings each up to date, one at a time."""

from __future__ import annotations

import logging
from pathlib import Path

from pygit_pullall.models import RunSummary, SyncConfig
from pygit_pullall.output import TqdmProgress
from pygit_pullall.protocols import CommandRunner, OutputHandler, ProgressSink, SummarySink
from pygit_pullall.runner import GitCommandRunner
from pygit_pullall.scanner import RepositoryScanner
from pygit_pullall.synchronizer import RepositorySynchronizer

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """Main orchestrator - coordinates discovery and sequential sync"""

    def __init__(
        self,
        config: SyncConfig,
        output: OutputHandler,
        runner: CommandRunner = None,
        progress: ProgressSink = None,
        sinks: list[SummarySink] = None,
    ):
        """Create an orchestrator. Runner and progress default to GitPython and tqdm."""
        self.config = config
        self.output = output
        self.runner = runner or GitCommandRunner(timeout=config.command_timeout)
        self.progress = progress
        self.sinks = sinks or []
        self.scanner = RepositoryScanner(config.exclude_patterns, config.include_ancestor)

    def sync_all(self, search_dir: Path) -> RunSummary:
        """Discover repositories under (and above) search_dir and sync them all.

        Raises ScanError if search_dir cannot be read; no repository is touched then.
        """
        repos = self.scanner.discover(search_dir)

        if not repos:
            self.output.warning(f"No git repositories found in {search_dir}")
            summary = RunSummary()
            self._emit(summary)
            return summary

        self.output.info(f"Found {len(repos)} repositories")
        return self.run_all(repos, self.config.token)

    def run_all(self, repos: list[Path], token: str | None = None) -> RunSummary:
        """Sync each repository in order and hand the summary to every sink."""
        summary = RunSummary(repositories_found=len(repos))
        if not repos:
            self._emit(summary)
            return summary

        synchronizer = RepositorySynchronizer(self.runner, self.output, token)
        owns_progress = self.progress is None
        progress = TqdmProgress(disable=self.config.json_output) if owns_progress else self.progress
        total = len(repos)
        last_fraction = 0.0

        def report(index: int, label: str, step: int, steps: int) -> None:
            nonlocal last_fraction
            fraction = min(max((index + step / steps) / max(1, total), 0.0), 1.0)
            last_fraction = max(last_fraction, fraction)
            progress.update(label, last_fraction)

        try:
            for index, repo_path in enumerate(repos):
                self.output.debug(f"Processing {repo_path}")
                repo_report = synchronizer.sync(
                    repo_path,
                    lambda label, position, i=index: report(i, label, *position),
                )
                summary.add_report(repo_report)
                report(index, f"{repo_report.name}: {repo_report.outcome.tag.lower()}", 1, 1)
        finally:
            # Injected sinks belong to the caller and may span several runs
            if owns_progress:
                progress.close()

        logger.debug(summary.summary_line)
        self._emit(summary)
        return summary

    def _emit(self, summary: RunSummary) -> None:
        for sink in self.sinks:
            sink.report(summary)
