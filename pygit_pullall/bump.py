"""Patch-version bump for a repository's package.json."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pygit_pullall.models import BumpResult

MANIFEST_NAME = 'package.json'

# Strict X.Y.Z only; pre-release and build suffixes never match
_VERSION_RE = re.compile(r'"version"\s*:\s*"(?P<ver>(?P<maj>\d+)\.(?P<min>\d+)\.(?P<pat>\d+))"')

logger = logging.getLogger(__name__)


def bump_version_text(text: str) -> tuple[str, str, str] | None:
    """Return (new_text, old_version, new_version), or None if no strict version field exists."""
    match = _VERSION_RE.search(text)
    if match is None:
        return None
    old_version = match.group('ver')
    new_version = f"{int(match.group('maj'))}.{int(match.group('min'))}.{int(match.group('pat')) + 1}"
    start, end = match.span('ver')
    return text[:start] + new_version + text[end:], old_version, new_version


def bump_patch_version(repo_root: Path) -> BumpResult:
    """Increment the patch component of package.json's version in repo_root.

    Only the version substring is rewritten. Missing manifests, non X.Y.Z
    versions and I/O failures are reported as not bumped; this never raises.
    """
    if not repo_root:
        return BumpResult(False)
    manifest = Path(repo_root) / MANIFEST_NAME

    try:
        if not manifest.is_file():
            return BumpResult(False)
        raw = manifest.read_bytes()
        text = raw.decode('utf-8')
        bumped = bump_version_text(text)
        if bumped is None:
            logger.warning(
                "%s found but no simple semver 'version' field (X.Y.Z). Skipping bump at: %s",
                MANIFEST_NAME, manifest,
            )
            return BumpResult(False)

        new_text, old_version, new_version = bumped
        if new_text == text:
            return BumpResult(False, old_version, new_version)
        manifest.write_bytes(new_text.encode('utf-8'))
        logger.debug("Bumped %s version %s -> %s", manifest, old_version, new_version)
        return BumpResult(True, old_version, new_version)
    except (OSError, ValueError) as e:
        logger.warning("Failed to bump %s version at '%s': %s", MANIFEST_NAME, manifest, e)
        return BumpResult(False)
