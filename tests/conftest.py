"""Shared test helpers."""

from datetime import datetime, timedelta, timezone

from standings.models import Poll, Semester, StudentResult, Vote

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_result(
    roll_no: str,
    cgpis: list[float],
    batch: int = 2021,
    branch: str = "CSE",
) -> StudentResult:
    """Build a StudentResult with one semester per CGPI in ``cgpis``.

    The record id is the roll number.
    """
    semesters = [
        Semester(semester=i + 1, sgpi=cgpi, cgpi=cgpi)
        for i, cgpi in enumerate(cgpis)
    ]
    return StudentResult(
        id=roll_no,
        roll_no=roll_no,
        batch=batch,
        branch=branch,
        programme="B.Tech",
        semesters=semesters,
    )


def make_poll(
    options: list[str],
    multiple_choice: bool = False,
    votes: list[tuple[str, str]] | None = None,
    closes_at: datetime | None = None,
    poll_id: str = "poll1",
) -> Poll:
    """Build a Poll; ``votes`` is a list of (user_id, option) pairs."""
    return Poll(
        id=poll_id,
        question="Which one?",
        options=options,
        multiple_choice=multiple_choice,
        closes_at=closes_at or NOW + timedelta(days=1),
        created_by="creator",
        votes=[Vote(option=o, user_id=u, created_at=NOW) for u, o in votes or []],
    )


def vote_pairs(votes: list[Vote]) -> list[tuple[str, str]]:
    """Reduce votes to (user_id, option) pairs for comparison."""
    return [(v.user_id, v.option) for v in votes]
