"""Renderers for the open changes list: pretty terminal text, JSON and XML."""

import json
from collections.abc import Callable, Sequence
from typing import Any
from xml.sax.saxutils import escape

import click
from rich.console import Console
from rich.text import Text

from gerrit_changes.indicators import compute_indicators
from gerrit_changes.models.change import Change
from gerrit_changes.models.votes import CODE_REVIEW, VERIFIED
from gerrit_changes.votes import (
    UNKNOWN_REVIEWER,
    extract_reviewer_votes,
    format_reviewer_votes,
    format_vote_value,
)

INDENT = " " * 6
STATUS_WIDTH = 6

Echo = Callable[[str], Any]


def _owner(change: Change) -> str:
    return change.owner_name or UNKNOWN_REVIEWER


def render_pretty(changes: Sequence[Change], project: str, console: Console) -> None:
    """Render changes for the terminal, most recent first."""
    if not changes:
        console.print(Text(f"✓ No open changes for {project}", style="green"), soft_wrap=True)
        return

    console.print(Text(f"Open Changes for {project} ({len(changes)})", style="blue"), soft_wrap=True)
    console.print()

    for change in changes:
        indicators = compute_indicators(change)
        status = " ".join(indicators).ljust(STATUS_WIDTH)

        # Line 1: indicators, number and subject
        line = Text(status)
        line.append(str(change.number), style="yellow")
        line.append(f"  {change.subject}")
        console.print(line, soft_wrap=True)

        # Line 2: reviewer votes
        console.print(Text(INDENT) + format_reviewer_votes(extract_reviewer_votes(change)), soft_wrap=True)

        # Line 3: owner and status
        console.print(
            Text(f"{INDENT}by {_owner(change)} • {change.status}", style="dim"), soft_wrap=True
        )
        console.print()


def changes_as_json(changes: Sequence[Change], project: str) -> dict[str, Any]:
    """Build the JSON document for a list of changes."""
    entries = []
    for change in changes:
        entry: dict[str, Any] = {
            "number": change.number,
            "subject": change.subject,
            "status": change.status,
            "owner": _owner(change),
        }
        if change.updated is not None:
            entry["updated"] = change.updated
        entry["reviewers"] = extract_reviewer_votes(change).to_dict()
        entries.append(entry)

    return {"project": project, "count": len(changes), "changes": entries}


def render_json(changes: Sequence[Change], project: str, echo: Echo = click.echo) -> None:
    """Render changes as a JSON document."""
    echo(json.dumps(changes_as_json(changes, project), indent=2, ensure_ascii=False))


def _attr(value: Any) -> str:
    return escape(str(value), {'"': "&quot;"})


def _cdata(value: str) -> str:
    # "]]>" would close the section early, so split it across two sections
    return "<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def changes_as_xml(changes: Sequence[Change], project: str) -> list[str]:
    """Build the XML document for a list of changes, one line per entry."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<open_changes project="{_attr(project)}" count="{len(changes)}">',
    ]

    for change in changes:
        votes = extract_reviewer_votes(change)
        lines.append("  <change>")
        lines.append(f"    <number>{change.number}</number>")
        lines.append(f"    <subject>{_cdata(change.subject)}</subject>")
        lines.append(f"    <status>{escape(change.status)}</status>")
        lines.append(f"    <owner>{escape(_owner(change))}</owner>")
        if change.updated:
            lines.append(f"    <updated>{escape(change.updated)}</updated>")
        lines.append("    <reviewers>")

        lines.append(f'      <label name="{CODE_REVIEW}">')
        for vote in votes.code_review:
            pending = ' pending="true"' if vote.pending else ""
            lines.append(
                f'        <vote name="{_attr(vote.name)}" '
                f'value="{format_vote_value(vote.value)}"{pending}/>'
            )
        lines.append("      </label>")

        lines.append(f'      <label name="{VERIFIED}">')
        for vote in votes.verified:
            lines.append(
                f'        <vote name="{_attr(vote.name)}" value="{format_vote_value(vote.value)}"/>'
            )
        lines.append("      </label>")

        lines.append("    </reviewers>")
        lines.append("  </change>")

    lines.append("</open_changes>")
    return lines


def render_xml(changes: Sequence[Change], project: str, echo: Echo = click.echo) -> None:
    """Render changes as an XML document."""
    for line in changes_as_xml(changes, project):
        echo(line)
