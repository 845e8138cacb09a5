"""SummaryReporter: displays the final report."""

from __future__ import annotations

from pygit_pullall.models import RepoReport, RunSummary, SyncOutcome
from pygit_pullall.output import SECTION_WIDTH
from pygit_pullall.protocols import OutputHandler

REPORT_SECTION_TITLE = "Per-Repository Summary:"


class SummaryReporter:
    """Prints the summary line and one line per repository"""

    def __init__(self, output: OutputHandler):
        """Create a reporter that writes to the given output handler."""
        self.output = output

    def report(self, summary: RunSummary) -> None:
        """Print the final summary report."""
        self.output.section("\u2554" + "=" * SECTION_WIDTH + "\u2557")
        self.output.info("\u2551" + "FETCH & PULL SUMMARY".center(SECTION_WIDTH) + "\u2551")
        self.output.info("\u255a" + "=" * SECTION_WIDTH + "\u255d")
        self.output.info("")

        if summary.nothing_found:
            self.output.warning("No git repositories found.")
            self.output.info("=" * SECTION_WIDTH)
            return

        self.output.info(summary.summary_line)
        self.output.info("")
        self.output.info(REPORT_SECTION_TITLE)
        for repo_report in summary.reports:
            self._print_line(repo_report)

        self.output.info("")
        if summary.has_failures():
            self.output.error("\u26a0 Some repositories failed - see the log for full git output")
        elif summary.get_reports_by_outcome(SyncOutcome.SKIPPED_DIRTY):
            self.output.warning("\u2022 Commit or stash local changes, then run again to pull skipped repositories")
        else:
            self.output.success("\u2705 All repositories processed")
        self.output.info("=" * SECTION_WIDTH)

    def _print_line(self, repo_report: RepoReport) -> None:
        outcome = repo_report.outcome
        if outcome.is_failure:
            self.output.error(repo_report.line)
        elif outcome is SyncOutcome.PULLED:
            self.output.success(repo_report.line)
        elif outcome is SyncOutcome.UP_TO_DATE:
            self.output.info(repo_report.line)
        else:
            self.output.warning(repo_report.line)
