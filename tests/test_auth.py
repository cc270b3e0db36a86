import pytest

from ragequit.core.identity import LocalIdentityProvider
from ragequit.core.session import SessionGate, SessionStatus
from ragequit.errors import AuthenticationError
from ragequit.services.auth import LOGIN, SIGNUP, AuthService

pytestmark = pytest.mark.anyio


@pytest.fixture
def provider(db):
    return LocalIdentityProvider(db)


async def test_sign_up_then_sign_in(provider):
    gate = SessionGate()
    await gate.attach(provider)
    assert gate.status is SessionStatus.ANONYMOUS

    auth = AuthService(provider)
    outcome = await auth.submit(SIGNUP, "Rager@Example.com", "hunter22")
    assert outcome.ok
    assert outcome.message == "Signup successful! Check your email to confirm your account."
    assert gate.status is SessionStatus.ANONYMOUS

    outcome = await auth.submit(LOGIN, "rager@example.com", "hunter22")
    assert outcome.message == "Logged in! Redirecting…"
    assert gate.status is SessionStatus.AUTHENTICATED
    assert gate.session.email == "rager@example.com"

    await auth.sign_out()
    assert gate.status is SessionStatus.ANONYMOUS


async def test_missing_credentials_rejected_before_provider(provider):
    class Exploding:
        async def sign_in(self, email, password):
            raise AssertionError("provider must not be called")

        sign_up = sign_in

    auth = AuthService(Exploding())
    assert (await auth.submit(LOGIN, "", "secret")).error == "Email and password are required."
    assert (await auth.submit(SIGNUP, "a@b.c", "")).error == "Email and password are required."


async def test_wrong_password_and_duplicate_signup(provider):
    auth = AuthService(provider)
    await auth.submit(SIGNUP, "a@b.c", "right")

    outcome = await auth.submit(LOGIN, "a@b.c", "wrong")
    assert not outcome.ok
    assert outcome.error == "Invalid login credentials"
    assert await provider.get_session() is None

    outcome = await auth.submit(SIGNUP, "A@B.C", "again")
    assert outcome.error == "User already registered"


async def test_unknown_account_rejected(provider):
    with pytest.raises(AuthenticationError):
        await provider.sign_in("nobody@example.com", "pw")


async def test_unknown_mode(provider):
    with pytest.raises(ValueError):
        await AuthService(provider).submit("magic-link", "a@b.c", "pw")
