"""Server-side vote submission against a poll store."""

import logging
from datetime import datetime, timezone

from standings.models import Poll
from standings.polls.voting import cast_vote, validate_vote
from standings.stores.base import PollStore, VersionConflict

logger = logging.getLogger(__name__)

DEFAULT_RETRIES = 3


class PollNotFound(LookupError):
    """No poll exists with the given id."""
    pass


class ConcurrentVoteConflict(Exception):
    """The poll kept changing under us; the vote was not recorded."""

    def __init__(self, poll_id: str, attempts: int):
        super().__init__(
            f"Poll {poll_id} was modified concurrently {attempts} times in a row"
        )
        self.poll_id = poll_id
        self.attempts = attempts


def submit_vote(
    store: PollStore,
    poll_id: str,
    user_id: str,
    option: str,
    now: datetime | None = None,
    retries: int = DEFAULT_RETRIES,
) -> Poll:
    """Record a vote and return the poll as stored afterwards.

    The read-modify-write is guarded by the poll's version: if another vote
    lands between our read and our write, the poll is re-read and the vote
    re-applied to the fresh votes. Validation is repeated on every attempt.

    Args:
        store: Poll store to read from and write to
        poll_id: Poll being voted on
        user_id: Voting user
        option: Chosen option
        now: Time of the vote (defaults to the current UTC time)
        retries: Extra attempts after a version conflict

    Raises:
        PollNotFound: If the poll does not exist
        InvalidOption: If ``option`` is not one of the poll's options
        PollClosed: If the poll has closed
        ConcurrentVoteConflict: If every attempt hit a version conflict
    """
    if now is None:
        now = datetime.now(timezone.utc)

    attempts = 0
    while True:
        poll = store.find_by_id(poll_id)
        if poll is None:
            raise PollNotFound(f"No poll with id {poll_id}")
        validate_vote(poll, option, now)

        votes = cast_vote(poll, user_id, option, now)
        attempts += 1
        try:
            return store.save_votes(poll_id, votes, expected_version=poll.version)
        except VersionConflict as e:
            if attempts > retries:
                raise ConcurrentVoteConflict(poll_id, attempts) from e
            logger.warning("Version conflict voting on poll %s, retrying (%d)", poll_id, attempts)
