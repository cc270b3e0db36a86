# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import hashlib
import hmac
import logging
import secrets
from typing import Callable, List, Optional

from ragequit.core.database import AccountDatabase
from ragequit.errors import AuthenticationError
from ragequit.models.account import VisitorSession

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 200_000

# ===== CORE BUSINESS LOGIC =====
class LocalIdentityProvider:
    """
    Email/password identity provider backed by the account database.

    Anything with the same five methods (get_session, subscribe, sign_in,
    sign_up, sign_out) can be attached to a SessionGate in its place.
    """

    def __init__(self, db: AccountDatabase):
        self.db = db
        self._session: Optional[VisitorSession] = None
        self._listeners: List[Callable[[Optional[VisitorSession]], None]] = []

    @staticmethod
    def _hash_password(password: str, salt: str) -> str:
        return hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt.encode('utf-8'), PBKDF2_ITERATIONS).hex()

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)

    async def get_session(self) -> Optional[VisitorSession]:
        return self._session

    def subscribe(self, callback: Callable[[Optional[VisitorSession]], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def sign_up(self, email: str, password: str) -> None:
        """Creates an account. The visitor still has to sign in afterwards."""
        if await asyncio.to_thread(self.db.get_account, email):
            raise AuthenticationError("User already registered")
        salt = secrets.token_hex(16)
        await asyncio.to_thread(self.db.create_account, email, self._hash_password(password, salt), salt)
        logger.info(f"[{self.__class__.__name__}] Signed up '{email}'")

    async def sign_in(self, email: str, password: str) -> VisitorSession:
        account = await asyncio.to_thread(self.db.get_account, email)
        if not account or not hmac.compare_digest(
            account['password_hash'], self._hash_password(password, account['salt'])
        ):
            logger.warning(f"[{self.__class__.__name__}] Rejected sign-in for '{email}'")
            raise AuthenticationError("Invalid login credentials")

        self._session = VisitorSession(visitor_id=account['visitor_id'], email=account['email'])
        logger.info(f"[{self.__class__.__name__}] Signed in visitor {self._session.visitor_id}")
        self._emit()
        return self._session

    async def sign_out(self) -> None:
        if self._session is None:
            return
        logger.info(f"[{self.__class__.__name__}] Signed out visitor {self._session.visitor_id}")
        self._session = None
        self._emit()
