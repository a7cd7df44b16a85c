"""Gerrit integration for gerrit-changes."""

from gerrit_changes.gerrit.client import ApiError, GerritClient

__all__ = [
    "ApiError",
    "GerritClient",
]
