"""
pygit-pullall: Fetch & Pull All Changes

Discovers every git repository under a directory (plus the repository that
contains it) and brings each one up to date with its remote, one at a time.
"""

from colorama import init as colorama_init

colorama_init(autoreset=True)

__version__ = "1.0.0"

# Re-export public API so `from pygit_pullall import X` keeps working.
from pygit_pullall.bump import bump_patch_version, bump_version_text  # noqa: E402
from pygit_pullall.cli import bump_main, main  # noqa: E402
from pygit_pullall.config import (  # noqa: E402
    apply_cli_overrides,
    config_from_file,
    create_argument_parser,
    create_bump_argument_parser,
    explicit_cli_dests,
    load_config_file,
    resolve_token,
)
from pygit_pullall.models import (  # noqa: E402
    BehindState,
    BumpResult,
    CommandResult,
    RepoReport,
    RunSummary,
    SyncConfig,
    SyncOutcome,
)
from pygit_pullall.orchestrator import SyncOrchestrator  # noqa: E402
from pygit_pullall.output import (  # noqa: E402
    SECTION_WIDTH,
    ConsoleOutputHandler,
    NullOutputHandler,
    NullProgress,
    TqdmProgress,
)
from pygit_pullall.protocols import (  # noqa: E402
    CommandRunner,
    OutputHandler,
    ProgressSink,
    SummarySink,
)
from pygit_pullall.reporter import SummaryReporter  # noqa: E402
from pygit_pullall.runner import GitCommandRunner  # noqa: E402
from pygit_pullall.scanner import (  # noqa: E402
    RepositoryScanner,
    ScanError,
    find_ancestor_repository,
    is_repository_root,
)
from pygit_pullall.status import parse_behind_state  # noqa: E402
from pygit_pullall.synchronizer import RepositorySynchronizer, pull_args  # noqa: E402

__all__ = [
    "__version__",
    # Models
    "BehindState",
    "BumpResult",
    "CommandResult",
    "RepoReport",
    "RunSummary",
    "SyncConfig",
    "SyncOutcome",
    # Protocols
    "CommandRunner",
    "OutputHandler",
    "ProgressSink",
    "SummarySink",
    # Implementations
    "GitCommandRunner",
    "ConsoleOutputHandler",
    "NullOutputHandler",
    "NullProgress",
    "TqdmProgress",
    "SECTION_WIDTH",
    # Services
    "RepositoryScanner",
    "RepositorySynchronizer",
    "SyncOrchestrator",
    "SummaryReporter",
    "ScanError",
    "find_ancestor_repository",
    "is_repository_root",
    "parse_behind_state",
    "pull_args",
    "bump_patch_version",
    "bump_version_text",
    # Config / CLI
    "apply_cli_overrides",
    "config_from_file",
    "create_argument_parser",
    "explicit_cli_dests",
    "create_bump_argument_parser",
    "load_config_file",
    "resolve_token",
    "main",
    "bump_main",
]
