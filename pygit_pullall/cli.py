"""CLI entry points: main() and bump_main()."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from colorama import Fore, Style

from pygit_pullall.bump import MANIFEST_NAME, bump_patch_version
from pygit_pullall.config import (
    apply_cli_overrides,
    config_from_file,
    create_argument_parser,
    create_bump_argument_parser,
    explicit_cli_dests,
    load_config_file,
)
from pygit_pullall.orchestrator import SyncOrchestrator
from pygit_pullall.output import ConsoleOutputHandler, NullOutputHandler
from pygit_pullall.reporter import SummaryReporter
from pygit_pullall.scanner import ScanError


def main():
    """Fetch & Pull All Changes"""
    parser = create_argument_parser()
    args = parser.parse_args()

    search_dir = Path(args.directory).resolve()
    try:
        is_dir = search_dir.is_dir()
    except OSError as e:
        print(f"{Fore.RED}Error: Cannot access '{search_dir}': {e.strerror or e}{Style.RESET_ALL}")
        sys.exit(2)
    if not is_dir:
        print(f"{Fore.RED}Error: Invalid directory '{search_dir}'{Style.RESET_ALL}")
        sys.exit(1)

    file_config = load_config_file(search_dir, args.config)

    explicit = explicit_cli_dests(parser, sys.argv[1:])
    config = apply_cli_overrides(config_from_file(file_config), args, explicit)

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    output = NullOutputHandler() if config.json_output else ConsoleOutputHandler(verbose=config.verbose)
    sinks = [] if config.json_output else [SummaryReporter(output)]

    orchestrator = SyncOrchestrator(config, output, sinks=sinks)

    try:
        summary = orchestrator.sync_all(search_dir)

        if config.json_output:
            print(json.dumps(summary.to_dict(), indent=2))

        sys.exit(1 if summary.has_failures() else 0)

    except ScanError as e:
        if config.json_output:
            print(json.dumps({'error': str(e)}, indent=2))
        else:
            output.error(f"{e}. No repositories were touched.")
        sys.exit(2)
    except KeyboardInterrupt:
        if not config.json_output:
            output.warning("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        if config.json_output:
            print(json.dumps({'error': str(e)}, indent=2))
        else:
            output.error(f"\nUnexpected error: {e}")
            if config.verbose:
                import traceback
                traceback.print_exc()
        sys.exit(1)


def bump_main():
    """Bump the package.json patch version in each given repository root."""
    parser = create_bump_argument_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    output = ConsoleOutputHandler(verbose=args.verbose)
    for root in args.roots:
        repo_root = Path(root).resolve()
        result = bump_patch_version(repo_root)
        if result.bumped:
            output.success(f"\u2713 {repo_root.name}: {result.old_version} -> {result.new_version}")
        else:
            output.warning(f"\u26a0 {repo_root.name}: {MANIFEST_NAME} not bumped")
    sys.exit(0)
