"""List open changes for the project of the current checkout."""

import logging
from collections.abc import Callable, Iterable
from enum import Enum

from rich.console import Console

from gerrit_changes.config import DEFAULT_LIMIT
from gerrit_changes.gerrit.client import GerritClient
from gerrit_changes.models.change import Change
from gerrit_changes.project import detect_project, get_origin_url
from gerrit_changes.render import render_json, render_pretty, render_xml

logger = logging.getLogger(__name__)


class OutputFormat(Enum):
    """Output formats for the change list."""

    PRETTY = "pretty"
    JSON = "json"
    XML = "xml"

    @classmethod
    def from_flags(cls, json: bool = False, xml: bool = False) -> "OutputFormat":
        """Pick a format from CLI flags. JSON wins over XML."""
        if json:
            return cls.JSON
        if xml:
            return cls.XML
        return cls.PRETTY


def build_query(project: str, limit: int = DEFAULT_LIMIT) -> str:
    """Build the Gerrit query for open changes of a project."""
    return f"project:{project} status:open limit:{limit}"


def sort_changes(changes: Iterable[Change]) -> list[Change]:
    """Sort changes by last update, most recent first. Undated changes go last."""
    return sorted(changes, key=lambda c: c.updated_at, reverse=True)


def open_changes(
    client: GerritClient,
    limit: int | None = None,
    output_format: OutputFormat = OutputFormat.PRETTY,
    console: Console | None = None,
    get_url: Callable[[], str] | None = None,
    project: str | None = None,
) -> list[Change]:
    """Query and render the open changes of the current project.

    Args:
        client: Gerrit client used for the query
        limit: Maximum number of changes (default: 20)
        output_format: How to render the result
        console: Console for pretty output (default: a new stdout console)
        get_url: Callable returning the origin remote URL (default: git)
        project: Already detected project name; skips detection when given

    Returns:
        The rendered changes, most recently updated first

    Raises:
        DetectionError: If the project cannot be detected
        ApiError: If the Gerrit query fails
    """
    if limit is None:
        limit = DEFAULT_LIMIT

    if project is None:
        project = detect_project(get_url or get_origin_url)
    query = build_query(project, limit)
    changes = sort_changes(client.list_changes(query))
    logger.info(f"Found {len(changes)} open changes for {project}")

    if output_format is OutputFormat.JSON:
        render_json(changes, project)
    elif output_format is OutputFormat.XML:
        render_xml(changes, project)
    else:
        render_pretty(changes, project, console or Console(highlight=False))

    return changes
