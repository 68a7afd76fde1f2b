"""Single-slot holder for the active session."""

from ..types import Session


class SessionStore:
    """Holds at most one Session.

    All methods are synchronous so a read never observes a partial write
    under cooperative scheduling.
    """

    def __init__(self) -> None:
        self._session: Session | None = None

    def get(self) -> Session | None:
        return self._session

    def set(self, session: Session) -> None:
        """Replace the slot; any previous session is superseded."""
        self._session = session

    def clear(self) -> None:
        self._session = None

    @property
    def topic(self) -> str | None:
        return self._session.topic if self._session else None

    def matches(self, topic: str) -> bool:
        """Whether ``topic`` names the stored session."""
        return self._session is not None and self._session.topic == topic

    def __bool__(self) -> bool:
        return self._session is not None
