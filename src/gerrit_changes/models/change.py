"""Change models built from Gerrit REST responses."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Gerrit sends "yyyy-mm-dd hh:mm:ss.fffffffff" in UTC; ISO-8601 with "T" and a zone is also accepted
_TIMESTAMP_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[ T](\d{2}:\d{2}:\d{2})(?:\.(\d+))?\s*(Z|[+-]\d{2}:?\d{2})?$"
)


@dataclass
class Approval:
    """A single reviewer entry on a label."""

    name: str | None
    value: int | None = None

    @classmethod
    def from_rest(cls, raw: Any) -> "Approval":
        """Build from an ApprovalInfo/AccountInfo mapping."""
        if not isinstance(raw, dict):
            return cls(name=None)
        value = raw.get("value")
        return cls(name=raw.get("name"), value=value if isinstance(value, int) else None)


@dataclass
class DetailedLabel:
    """Label carrying the full ``all`` reviewer list, pending reviewers included."""

    approvals: list[Approval] = field(default_factory=list)


@dataclass
class SummaryLabel:
    """Label carrying only the highest-priority vote states."""

    approved: Approval | None = None
    recommended: Approval | None = None
    disliked: Approval | None = None
    rejected: Approval | None = None


LabelData = DetailedLabel | SummaryLabel


def parse_label(raw: Any) -> LabelData:
    """Parse a LabelInfo mapping into one of the two label shapes."""
    if not isinstance(raw, dict):
        return SummaryLabel()

    approvals = raw.get("all")
    if isinstance(approvals, list):
        return DetailedLabel(approvals=[Approval.from_rest(a) for a in approvals])

    def _field(key: str) -> Approval | None:
        if key not in raw or raw[key] is None:
            return None
        return Approval.from_rest(raw[key])

    return SummaryLabel(
        approved=_field("approved"),
        recommended=_field("recommended"),
        disliked=_field("disliked"),
        rejected=_field("rejected"),
    )


def parse_timestamp(value: str | None) -> datetime:
    """Parse a Gerrit timestamp into an aware UTC datetime, falling back to the epoch.

    Fractions are kept to microseconds. Timestamps without a zone are UTC.
    """
    match = _TIMESTAMP_RE.match(value.strip()) if value else None
    if not match:
        return EPOCH

    date, time, fraction, zone = match.groups()
    fraction = (fraction or "")[:6].ljust(6, "0")
    if zone is None or zone == "Z":
        zone = "+00:00"
    elif ":" not in zone:
        zone = f"{zone[:3]}:{zone[3:]}"

    try:
        parsed = datetime.fromisoformat(f"{date}T{time}.{fraction}{zone}")
    except ValueError:
        return EPOCH
    return parsed.astimezone(timezone.utc)


@dataclass
class Change:
    """An open change as returned by the Gerrit query API."""

    number: int
    subject: str
    status: str
    project: str = ""
    owner_name: str | None = None
    updated: str | None = None
    labels: dict[str, LabelData] = field(default_factory=dict)
    work_in_progress: bool = False

    @classmethod
    def from_rest(cls, raw: dict[str, Any]) -> "Change":
        """Build a change from a ChangeInfo mapping.

        See https://gerrit-review.googlesource.com/Documentation/rest-api-changes.html#change-info
        """
        owner = raw.get("owner") or {}
        labels = raw.get("labels") or {}
        return cls(
            number=raw["_number"],
            subject=raw.get("subject", ""),
            status=raw.get("status", ""),
            project=raw.get("project", ""),
            owner_name=owner.get("name") if isinstance(owner, dict) else None,
            updated=raw.get("updated"),
            labels={name: parse_label(data) for name, data in labels.items()}
            if isinstance(labels, dict)
            else {},
            work_in_progress=bool(raw.get("work_in_progress", False)),
        )

    @property
    def updated_at(self) -> datetime:
        """Last update time, or the epoch when unknown."""
        return parse_timestamp(self.updated)
