"""Vote transitions and tallies for polls.

``cast_vote`` is the single transition used both when a vote is applied
optimistically on the client and when it is applied authoritatively on the
server, so both sides agree given the same starting votes.
"""

from datetime import datetime, timezone

from standings.models import OptionTally, Poll, Vote


class VoteRejected(ValueError):
    """A vote was rejected before any change was made."""
    pass


class PollClosed(VoteRejected):
    """The poll stopped accepting votes."""
    pass


class InvalidOption(VoteRejected):
    """The chosen option is not one of the poll's options."""
    pass


def validate_vote(poll: Poll, option: str, now: datetime) -> None:
    """Check that ``option`` may be voted for on ``poll`` at ``now``.

    Raises:
        InvalidOption: If ``option`` is not one of ``poll.options``
        PollClosed: If the poll closed before ``now``
    """
    if option not in poll.options:
        raise InvalidOption(f"{option!r} is not an option of poll {poll.id}")
    if poll.is_closed(now):
        raise PollClosed(f"Poll {poll.id} closed at {poll.closes_at.isoformat()}")


def cast_vote(
    poll: Poll, user_id: str, option: str, now: datetime | None = None
) -> list[Vote]:
    """Return the poll's votes after ``user_id`` votes for ``option``.

    - Voting again for an option the user already voted for withdraws that
      vote, on single- and multiple-choice polls alike.
    - On a single-choice poll, a vote for a new option replaces the user's
      previous vote.
    - On a multiple-choice poll, a vote for a new option is added.

    The poll itself is not modified.
    """
    if now is None:
        now = datetime.now(timezone.utc)

    votes = list(poll.votes)
    existing = next(
        (i for i, v in enumerate(votes) if v.user_id == user_id and v.option == option),
        None,
    )
    if existing is not None:
        del votes[existing]
        return votes

    if not poll.multiple_choice:
        votes = [v for v in votes if v.user_id != user_id]
    votes.append(Vote(option=option, user_id=user_id, created_at=now))
    return votes


def tally(votes: list[Vote], options: list[str]) -> list[OptionTally]:
    """Count votes per option, in the order of ``options``.

    Percentages are taken over the total number of votes, not of voters, so
    on a multiple-choice poll a user counts once per option they chose.
    """
    total = len(votes)
    counts = {option: 0 for option in options}
    for vote in votes:
        if vote.option in counts:
            counts[vote.option] += 1

    return [
        OptionTally(
            option=option,
            count=counts[option],
            percent=(counts[option] / total * 100) if total > 0 else 0.0,
        )
        for option in options
    ]
