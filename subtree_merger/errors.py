from __future__ import annotations


class SubtreeMergerError(Exception):
    """Base exception for subtree-merger failures."""

    exit_code = 1


class UsageError(SubtreeMergerError):
    """A required argument was missing or empty."""
