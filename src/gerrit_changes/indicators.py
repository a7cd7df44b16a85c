"""Compact status glyphs for the pretty change list."""

from gerrit_changes.models.change import Change
from gerrit_changes.votes import extract_reviewer_votes

REJECTED = "✗"
APPROVED = "✓"
DISLIKED = "↓"
RECOMMENDED = "↑"
VERIFY_FAILED = "✘"
VERIFIED = "✔"
WORK_IN_PROGRESS = "W"


def compute_indicators(change: Change) -> list[str]:
    """Return up to three glyphs summarizing review state.

    The Code-Review glyph reflects the strongest vote, negative votes first.
    """
    votes = extract_reviewer_votes(change)
    indicators = []

    scores = {v.value for v in votes.code_review if not v.pending}
    if -2 in scores:
        indicators.append(REJECTED)
    elif 2 in scores:
        indicators.append(APPROVED)
    elif -1 in scores:
        indicators.append(DISLIKED)
    elif 1 in scores:
        indicators.append(RECOMMENDED)

    if any(v.value < 0 for v in votes.verified):
        indicators.append(VERIFY_FAILED)
    elif any(v.value > 0 for v in votes.verified):
        indicators.append(VERIFIED)

    if change.work_in_progress:
        indicators.append(WORK_IN_PROGRESS)

    return indicators
