# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
from collections import deque
from enum import Enum
from typing import Callable, List, Optional, Tuple, Deque

from ragequit.models.account import VisitorSession

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

Subscriber = Callable[["SessionStatus", Optional[VisitorSession]], None]


class SessionStatus(Enum):
    UNKNOWN = "unknown"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


# ===== CORE BUSINESS LOGIC =====
class SessionGate:
    """
    Holds the current visitor session and tells subscribers when it changes.

    The gate starts in UNKNOWN until the identity provider answers for the first
    time. UNKNOWN is not ANONYMOUS: consumers that gate features should wait
    for resolution instead of treating an in-flight lookup as "signed out".

    Notifications are delivered one change at a time. A change published from
    inside a subscriber callback is queued and delivered after the current
    round, so every subscriber sees the same ordered sequence of snapshots.
    """

    def __init__(self):
        self._status = SessionStatus.UNKNOWN
        self._session: Optional[VisitorSession] = None
        self._subscribers: List[Subscriber] = []
        self._pending: Deque[Optional[VisitorSession]] = deque()
        self._notifying = False
        self._resolved = asyncio.Event()
        self._detach_provider: Optional[Callable[[], None]] = None

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def session(self) -> Optional[VisitorSession]:
        return self._session

    def snapshot(self) -> Tuple[SessionStatus, Optional[VisitorSession]]:
        return self._status, self._session

    @property
    def is_resolved(self) -> bool:
        return self._status is not SessionStatus.UNKNOWN

    async def wait_resolved(self) -> None:
        await self._resolved.wait()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Registers a change callback and returns the function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, session: Optional[VisitorSession]) -> None:
        """Records a new session (or None for signed out) and notifies subscribers in order."""
        self._pending.append(session)
        if self._notifying:
            return

        self._notifying = True
        try:
            while self._pending:
                next_session = self._pending.popleft()
                self._status = SessionStatus.AUTHENTICATED if next_session else SessionStatus.ANONYMOUS
                self._session = next_session
                self._resolved.set()
                logger.info(f"[{self.__class__.__name__}] Session is now {self._status.value}")
                status, current = self._status, self._session
                for callback in list(self._subscribers):
                    try:
                        callback(status, current)
                    except Exception as e:
                        logger.error(f"[{self.__class__.__name__}] Session subscriber failed: {e}", exc_info=True)
        finally:
            self._notifying = False

    async def attach(self, provider) -> None:
        """
        Follows an identity provider: subscribes to its changes, then resolves the
        initial state. If a change arrives while the initial lookup is in flight,
        the change wins.
        """
        self.detach()
        self._detach_provider = provider.subscribe(self.publish)
        session = await provider.get_session()
        if not self.is_resolved:
            self.publish(session)

    def detach(self) -> None:
        if self._detach_provider is not None:
            self._detach_provider()
            self._detach_provider = None


def describe_session(gate: SessionGate) -> str:
    """Label for the header user button."""
    if gate.status is SessionStatus.UNKNOWN:
        return "Checking session…"
    if gate.session is None:
        return "Log in / Sign up"
    return gate.session.email or "Player"
