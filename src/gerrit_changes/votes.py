"""Reviewer vote extraction and formatting."""

from rich.text import Text

from gerrit_changes.models.change import Change, DetailedLabel, LabelData, SummaryLabel
from gerrit_changes.models.votes import CODE_REVIEW, VERIFIED, LabelVotes, ReviewerVote

UNKNOWN_REVIEWER = "Unknown"
PENDING_MARKER = "⏳"

# Discrete vote fields in emission order, with the score each one stands for
CODE_REVIEW_FIELDS = (("approved", 2), ("recommended", 1), ("disliked", -1), ("rejected", -2))
VERIFIED_FIELDS = (("approved", 1), ("rejected", -1))

POSITIVE_STYLE = "green"
NEGATIVE_STYLE = "red"
MUTED_STYLE = "dim"


def _summary_votes(label: SummaryLabel, fields: tuple[tuple[str, int], ...]) -> list[ReviewerVote]:
    votes = []
    for attr, value in fields:
        approval = getattr(label, attr)
        if approval is not None:
            votes.append(ReviewerVote(name=approval.name or UNKNOWN_REVIEWER, value=value))
    return votes


def _label_votes(
    label: LabelData | None,
    fields: tuple[tuple[str, int], ...],
    include_pending: bool,
) -> list[ReviewerVote]:
    if isinstance(label, DetailedLabel):
        votes = []
        for approval in label.approvals:
            value = approval.value or 0
            if value == 0 and not include_pending:
                continue
            votes.append(
                ReviewerVote(
                    name=approval.name or UNKNOWN_REVIEWER,
                    value=value,
                    pending=value == 0,
                )
            )
        return votes
    if isinstance(label, SummaryLabel):
        return _summary_votes(label, fields)
    return []


def extract_reviewer_votes(change: Change) -> LabelVotes:
    """Extract Code-Review and Verified votes from a change.

    Code-Review keeps reviewers who have not voted yet as pending entries.
    Verified only keeps actual votes, since it is normally set by CI.
    """
    labels = change.labels or {}
    return LabelVotes(
        code_review=_label_votes(labels.get(CODE_REVIEW), CODE_REVIEW_FIELDS, include_pending=True),
        verified=_label_votes(labels.get(VERIFIED), VERIFIED_FIELDS, include_pending=False),
    )


def format_vote_value(value: int) -> str:
    """Format a score with an explicit sign for positive values."""
    return f"+{value}" if value > 0 else str(value)


def _append_vote(text: Text, vote: ReviewerVote) -> None:
    if vote.pending:
        text.append(f"{PENDING_MARKER} {vote.name}", style=MUTED_STYLE)
        return
    style = POSITIVE_STYLE if vote.value > 0 else NEGATIVE_STYLE
    text.append(format_vote_value(vote.value), style=style)
    text.append(f" {vote.name}")


def _join_votes(votes: list[ReviewerVote], placeholder: str) -> Text:
    if not votes:
        return Text(placeholder, style=MUTED_STYLE)
    text = Text()
    for i, vote in enumerate(votes):
        if i:
            text.append(", ")
        _append_vote(text, vote)
    return text


def format_reviewer_votes(votes: LabelVotes) -> Text:
    """Format votes for terminal display.

    e.g. "CR: +2 Alice, +1 Bob, ⏳ Carol  V: +1 Jenkins"
    """
    # sorted() is stable, so equal votes keep their server order
    code_review = sorted(votes.code_review, key=lambda v: (v.pending, -v.value))
    verified = sorted(votes.verified, key=lambda v: -v.value)

    text = Text("CR: ")
    text.append_text(_join_votes(code_review, "no reviewers"))
    text.append("  V: ")
    text.append_text(_join_votes(verified, "--"))
    return text
