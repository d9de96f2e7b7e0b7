"""Poll voting: vote transitions, tallies and submission."""

from .voting import InvalidOption, PollClosed, VoteRejected, cast_vote, tally, validate_vote

__all__ = [
    "InvalidOption",
    "PollClosed",
    "VoteRejected",
    "cast_vote",
    "tally",
    "validate_vote",
]
