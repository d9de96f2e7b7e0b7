"""Client for triggering rank assignment on a remote results server."""

from typing import Any
from urllib.parse import urlparse

import httpx

ASSIGN_RANKS_PATH = "/api/results/assign-ranks"


class RemoteTriggerError(Exception):
    """The remote rank assignment could not be triggered."""
    pass


def trigger_rank_assignment(base_url: str, timeout: float = 120.0) -> dict[str, Any]:
    """Ask the results server to recompute every rank.

    The server answers with ``{"error": bool, "message": str, "data": {...}}``;
    the ``data`` payload (counts, timings) is returned.

    Raises:
        RemoteTriggerError: On a bad URL, transport error, HTTP error status,
            or a response that reports an error
    """
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https"):
        raise RemoteTriggerError(f"Invalid URL scheme: {parsed.scheme}")

    url = base_url.rstrip("/") + ASSIGN_RANKS_PATH
    try:
        with httpx.Client(follow_redirects=True, timeout=timeout) as client:
            response = client.post(url)
            response.raise_for_status()
            body = response.json()
    except httpx.HTTPStatusError as e:
        raise RemoteTriggerError(f"HTTP error triggering rank assignment: {e.response.status_code}") from e
    except httpx.RequestError as e:
        raise RemoteTriggerError(f"Error triggering rank assignment: {e}") from e
    except ValueError as e:
        raise RemoteTriggerError(f"Invalid response from results server: {e}") from e

    if not isinstance(body, dict) or body.get("error"):
        message = body.get("message") if isinstance(body, dict) else None
        raise RemoteTriggerError(f"Rank assignment failed: {message or 'unknown error'}")

    return body.get("data") or {}
