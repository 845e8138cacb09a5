"""Configuration: argument parsers, config file loader, and token lookup."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any

from pygit_pullall.models import SyncConfig

try:
    import tomllib
except ModuleNotFoundError:
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

CONFIG_FILE_NAME = '.pullallrc.toml'
TOKEN_ENV_VAR = 'PYGIT_PULLALL_TOKEN'


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser for pygit-pullall."""
    # Lazy import to avoid circular dependency with __init__.py
    from pygit_pullall import __version__

    parser = argparse.ArgumentParser(
        description="Fetch and pull every git repository under a directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s ~/projects                          # Fetch & pull all repositories
  %(prog)s ~/projects --exclude node_modules   # Exclude patterns
  %(prog)s ~/projects --json                   # Machine-readable summary

The optional credential token is read from ${TOKEN_ENV_VAR} or the
'token' key of {CONFIG_FILE_NAME}.
        """
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('directory', nargs='?', default='.',
                        help='Directory to search (default: current)')
    parser.add_argument('--exclude', action='append', default=[],
                        help='Exclude pattern (can specify multiple)')
    parser.add_argument('--no-ancestor', dest='include_ancestor', action='store_false',
                        help='Do not sync the repository that contains the directory')
    parser.add_argument('--timeout', dest='command_timeout', type=float, default=None,
                        help='Kill git commands that run longer than N seconds (default: no limit)')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')
    parser.add_argument('--json', dest='json_output', action='store_true',
                        help='Output results as JSON (suppresses normal output)')
    parser.add_argument('--config', type=str, default=None,
                        help=f'Path to config file (default: {CONFIG_FILE_NAME} in search dir or home)')

    return parser


def create_bump_argument_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the package.json version bump command."""
    from pygit_pullall import __version__

    parser = argparse.ArgumentParser(
        description="Increment the patch version in package.json of each repository root",
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('roots', nargs='*', default=['.'],
                        help='Repository roots (default: current directory)')
    parser.add_argument('--verbose', action='store_true',
                        help='Verbose output')
    return parser


def load_config_file(search_dir: Path, config_path: str | None = None) -> dict[str, Any]:
    """Load .pullallrc.toml from explicit path, search dir, or home dir.

    Returns empty dict if not found or tomllib is unavailable.
    """
    candidates = [Path(config_path)] if config_path else [search_dir / CONFIG_FILE_NAME, Path.home() / CONFIG_FILE_NAME]
    for path in candidates:
        if path.is_file():
            if tomllib is None:
                print(f"Warning: Found {path} but tomllib/tomli not available (Python 3.11+ or pip install tomli). Ignoring.")
                return {}
            try:
                with open(path, 'rb') as f:
                    return tomllib.load(f)
            except Exception as e:
                print(f"Warning: Failed to parse {path}: {e}")
                return {}
    if config_path:
        print(f"Warning: Config file '{config_path}' not found. Ignoring.")
    return {}


def resolve_token(file_config: dict[str, Any], environ: dict[str, str] | None = None) -> str | None:
    """Return the credential token from the environment or config file, or None."""
    environ = os.environ if environ is None else environ
    token = environ.get(TOKEN_ENV_VAR) or file_config.get('token') or ''
    token = str(token).strip()
    return token or None


# Config file keys that map one-to-one onto SyncConfig fields
CONFIG_FILE_KEYS = ('exclude_patterns', 'include_ancestor', 'command_timeout', 'verbose', 'json_output')

# argparse dest -> SyncConfig field
CLI_FIELDS = {
    'exclude': 'exclude_patterns',
    'include_ancestor': 'include_ancestor',
    'command_timeout': 'command_timeout',
    'verbose': 'verbose',
    'json_output': 'json_output',
}


def config_from_file(file_config: dict[str, Any], environ: dict[str, str] | None = None) -> SyncConfig:
    """Build a SyncConfig from loaded config file values and the token lookup."""
    values = {key: file_config[key] for key in CONFIG_FILE_KEYS if key in file_config}
    if 'exclude_patterns' in values:
        values['exclude_patterns'] = list(values['exclude_patterns'] or [])
    return SyncConfig().with_updates(token=resolve_token(file_config, environ), **values)


def explicit_cli_dests(parser: argparse.ArgumentParser, argv: list[str]) -> set[str]:
    """Return dests whose option appears in argv, as `--opt value` or `--opt=value`."""
    explicit = set()
    for action in parser._actions:
        if action.dest in ('help', 'version'):
            continue
        for opt_string in action.option_strings:
            if any(arg == opt_string or arg.startswith(opt_string + '=') for arg in argv):
                explicit.add(action.dest)
                break
    return explicit


def apply_cli_overrides(config: SyncConfig, args: argparse.Namespace, explicit: set[str]) -> SyncConfig:
    """Return config with every explicitly given CLI flag taking precedence."""
    overrides = {field: getattr(args, dest) for dest, field in CLI_FIELDS.items() if dest in explicit}
    if 'exclude_patterns' in overrides:
        overrides['exclude_patterns'] = list(overrides['exclude_patterns'])
    return config.with_updates(**overrides)
