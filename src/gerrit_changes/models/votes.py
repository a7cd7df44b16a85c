"""Normalized reviewer vote models."""

from dataclasses import dataclass, field
from typing import Any

CODE_REVIEW = "Code-Review"
VERIFIED = "Verified"


@dataclass(frozen=True)
class ReviewerVote:
    """A single reviewer's vote on a label.

    A vote is pending when the reviewer is assigned but has not scored yet.
    """

    name: str
    value: int
    pending: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "pending": self.pending}


@dataclass
class LabelVotes:
    """Votes for the labels shown to the user."""

    LABELS = (CODE_REVIEW, VERIFIED)

    code_review: list[ReviewerVote] = field(default_factory=list)
    verified: list[ReviewerVote] = field(default_factory=list)

    def __getitem__(self, label: str) -> list[ReviewerVote]:
        if label == CODE_REVIEW:
            return self.code_review
        if label == VERIFIED:
            return self.verified
        raise KeyError(label)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {label: [v.to_dict() for v in self[label]] for label in self.LABELS}
