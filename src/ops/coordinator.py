"""Generation tokens that decide which holiday lookup is authoritative."""

from __future__ import annotations

from typing import NewType

RequestToken = NewType("RequestToken", int)


class RequestCoordinator:
    """Issues strictly increasing tokens; only the latest one is current.

    Superseded lookups are not cancelled. Their results are simply not
    honored once a newer token has been issued.
    """

    def __init__(self) -> None:
        self._latest = RequestToken(0)

    @property
    def latest(self) -> RequestToken:
        return self._latest

    def issue(self) -> RequestToken:
        self._latest = RequestToken(self._latest + 1)
        return self._latest

    def is_current(self, token: RequestToken) -> bool:
        return token == self._latest


__all__ = ["RequestCoordinator", "RequestToken"]
