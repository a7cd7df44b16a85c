"""Data models for Gerrit changes and reviewer votes."""

from gerrit_changes.models.change import (
    Approval,
    Change,
    DetailedLabel,
    LabelData,
    SummaryLabel,
    parse_label,
)
from gerrit_changes.models.votes import CODE_REVIEW, VERIFIED, LabelVotes, ReviewerVote

__all__ = [
    "Approval",
    "CODE_REVIEW",
    "Change",
    "DetailedLabel",
    "LabelData",
    "LabelVotes",
    "ReviewerVote",
    "SummaryLabel",
    "VERIFIED",
    "parse_label",
]
