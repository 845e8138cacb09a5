"""Shared fakes for the unit tests."""

from pathlib import Path

import pytest

from pygit_pullall import CommandResult


def command_key(args) -> str:
    """Map git arguments to a short key: fetch, branch_status, dirty_status or pull."""
    args = list(args)
    if 'pull' in args:
        return 'pull'
    if args[:1] == ['fetch']:
        return 'fetch'
    if args[:1] == ['status']:
        return 'branch_status' if '-b' in args else 'dirty_status'
    return ' '.join(args)


class FakeCommandRunner:
    """Returns canned results per (repository name, command key) and records every call."""

    def __init__(self, responses: dict = None):
        self.responses = responses or {}
        self.calls: list[tuple[Path, tuple[str, ...]]] = []

    def set(self, repo: str, key: str, exit_code: int = 0, stdout: str = '', stderr: str = ''):
        self.responses[(repo, key)] = CommandResult(exit_code, stdout, stderr)

    def run(self, working_dir: Path, args) -> CommandResult:
        self.calls.append((Path(working_dir), tuple(args)))
        key = command_key(args)
        result = self.responses.get((Path(working_dir).name, key))
        if isinstance(result, Exception):
            raise result
        return result or CommandResult(0)

    def keys_for(self, repo: str) -> list[str]:
        return [command_key(args) for path, args in self.calls if path.name == repo]


class RecordingProgress:
    """Progress sink that keeps every update."""

    def __init__(self):
        self.updates: list[tuple[str, float]] = []
        self.closed = False

    def update(self, label: str, fraction: float) -> None:
        self.updates.append((label, fraction))

    def close(self) -> None:
        self.closed = True


class RecordingSink:
    """Summary sink that keeps every summary it receives."""

    def __init__(self):
        self.summaries = []

    def report(self, summary) -> None:
        self.summaries.append(summary)


def behind_repo(runner: FakeCommandRunner, name: str, dirty: bool = False):
    runner.set(name, 'branch_status', stdout='## main...origin/main [behind 2]\n')
    runner.set(name, 'dirty_status', stdout=' M file.txt\n' if dirty else '')


def up_to_date_repo(runner: FakeCommandRunner, name: str):
    runner.set(name, 'branch_status', stdout='## main...origin/main\n')


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner()
