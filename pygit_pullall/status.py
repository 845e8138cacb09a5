"""Parsing of `git status --porcelain` output."""

from __future__ import annotations

import re

from pygit_pullall.models import BehindState

UPSTREAM_MARKER = '...'

# Trailing "[behind 2]", "[ahead 1, behind 2]" or "[gone]" annotation
_ANNOTATION_RE = re.compile(r'\[([^\]]*)\]\s*$')


def parse_behind_state(output: str) -> BehindState:
    """Classify the branch line of `git status --porcelain -b`.

    Only the first line is read. ``## main...origin/main [behind 2]`` is
    BEHIND, ``## main...origin/main`` is NOT_BEHIND, and anything without an
    upstream (``## main``, empty output, an upstream marked ``[gone]``) is
    UNKNOWN.
    """
    if not output or not output.strip():
        return BehindState.UNKNOWN
    first = output.splitlines()[0]
    if UPSTREAM_MARKER not in first:
        return BehindState.UNKNOWN

    match = _ANNOTATION_RE.search(first)
    if match is None:
        return BehindState.NOT_BEHIND
    parts = [p.strip() for p in match.group(1).split(',')]
    if 'gone' in parts:
        return BehindState.UNKNOWN
    if any(p.startswith('behind') for p in parts):
        return BehindState.BEHIND
    return BehindState.NOT_BEHIND


def has_uncommitted_changes(output: str) -> bool:
    """True if `git status --porcelain` reported any entry."""
    return bool(output and output.strip())


def first_line(text: str) -> str:
    """First non-empty line of text, stripped."""
    for line in (text or '').splitlines():
        if line.strip():
            return line.strip()
    return ''
