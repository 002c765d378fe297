from __future__ import annotations

from typing import Optional, Protocol


class SessionStore(Protocol):
    """Server-side session storage keyed by the cookie-carried session id.

    Values are opaque serialized blobs; expired records are never returned.
    """

    def get(self, sid: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, sid: str, data: str, ttl_seconds: int) -> None:
        raise NotImplementedError

    def destroy(self, sid: str) -> None:
        raise NotImplementedError

    def purge_expired(self) -> int:
        raise NotImplementedError
