"""Protocols for dependency injection."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from pygit_pullall.models import CommandResult, RunSummary


class CommandRunner(Protocol):
    """Protocol for running a git command in a working directory"""

    def run(self, working_dir: Path, args: Sequence[str]) -> CommandResult: ...


class OutputHandler(Protocol):
    """Protocol for handling output"""

    def info(self, message: str, indent: int = 0) -> None: ...
    def success(self, message: str, indent: int = 0) -> None: ...
    def warning(self, message: str, indent: int = 0) -> None: ...
    def error(self, message: str, indent: int = 0) -> None: ...
    def section(self, title: str) -> None: ...
    def debug(self, message: str) -> None: ...


class ProgressSink(Protocol):
    """Receives incremental progress: a label and a fraction in [0, 1]"""

    def update(self, label: str, fraction: float) -> None: ...
    def close(self) -> None: ...


class SummarySink(Protocol):
    """Receives the finished RunSummary once per run"""

    def report(self, summary: RunSummary) -> None: ...
