"""Client-side optimistic voting with exact rollback."""

from dataclasses import replace
from datetime import datetime
from typing import Callable

from standings.models import OptionTally, Poll, Vote
from standings.polls.voting import cast_vote, tally


class VoteInFlight(RuntimeError):
    """A vote was cast while another one was still being submitted."""
    pass


class OptimisticVoteSession:
    """One user's view of a poll while voting on it.

    A vote is shown immediately by applying ``cast_vote`` to the local
    votes. The server's answer then replaces the local votes; if the
    submission fails, the votes held before the vote are restored as they
    were. Only one vote may be in flight at a time.

    Args:
        poll: The poll as last received from the server
        user_id: The voting user
        submit: Sends the new full vote list to the server and returns the
            stored poll (or its votes). Any exception counts as a failure.
    """

    def __init__(
        self,
        poll: Poll,
        user_id: str,
        submit: Callable[[list[Vote]], Poll | list[Vote]] | None = None,
    ):
        self.poll = poll
        self.user_id = user_id
        self.submit = submit
        self._votes: list[Vote] = list(poll.votes)
        self._snapshot: list[Vote] | None = None

    @property
    def votes(self) -> list[Vote]:
        return list(self._votes)

    @property
    def pending(self) -> bool:
        return self._snapshot is not None

    def tally(self) -> list[OptionTally]:
        return tally(self._votes, self.poll.options)

    def begin(self, option: str, now: datetime | None = None) -> list[Vote]:
        """Apply a vote locally and return the votes to submit."""
        if self.pending:
            raise VoteInFlight("A vote is already being submitted")
        self._snapshot = self._votes
        local_poll = replace(self.poll, votes=self._votes)
        self._votes = cast_vote(local_poll, self.user_id, option, now)
        return list(self._votes)

    def confirm(self, server_state: Poll | list[Vote]) -> None:
        """Replace local votes with what the server stored."""
        if isinstance(server_state, Poll):
            self.poll = server_state
            self._votes = list(server_state.votes)
        else:
            self._votes = list(server_state)
        self._snapshot = None

    def rollback(self) -> None:
        """Restore the votes held before the pending vote."""
        if self._snapshot is not None:
            self._votes = self._snapshot
            self._snapshot = None

    def vote(self, option: str, now: datetime | None = None) -> list[Vote]:
        """Vote, submit synchronously, and return the reconciled votes."""
        if self.submit is None:
            raise RuntimeError("No submit function configured")
        updated = self.begin(option, now)
        try:
            server_state = self.submit(updated)
        except Exception:
            self.rollback()
            raise
        self.confirm(server_state)
        return self.votes
