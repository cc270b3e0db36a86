# ===== IMPORTS & DEPENDENCIES =====
import logging
from dataclasses import dataclass
from typing import Optional

from ragequit.errors import RageQuitError

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

LOGIN = "login"
SIGNUP = "signup"

# ===== TYPES & INTERFACES =====
@dataclass
class AuthOutcome:
    message: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ===== CORE BUSINESS LOGIC =====
class AuthService:
    """Log-in, sign-up and log-out flows on top of an identity provider."""

    def __init__(self, provider):
        self.provider = provider

    async def submit(self, mode: str, email: str, password: str) -> AuthOutcome:
        if mode not in (LOGIN, SIGNUP):
            raise ValueError(f"Unknown auth mode '{mode}'")
        if not email or not password:
            return AuthOutcome(error="Email and password are required.")

        try:
            if mode == LOGIN:
                await self.provider.sign_in(email, password)
                return AuthOutcome(message="Logged in! Redirecting…")
            await self.provider.sign_up(email, password)
            return AuthOutcome(message="Signup successful! Check your email to confirm your account.")
        except RageQuitError as e:
            logger.warning(f"[{self.__class__.__name__}] {mode} failed for '{email}': {e}")
            return AuthOutcome(error=str(e) or "Something went wrong.")

    async def sign_out(self) -> None:
        await self.provider.sign_out()
