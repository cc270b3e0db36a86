# ===== TYPES & INTERFACES =====


class RageQuitError(Exception):
    """Base class for every error raised inside the display layer."""


class TransportFailure(RageQuitError):
    """Network error or timeout while talking to a remote collaborator."""


class RemoteFailure(RageQuitError):
    """A remote collaborator answered with a non-success response."""

    def __init__(self, message: str, status: int = 0):
        super().__init__(message)
        self.status = status


class MandatoryResourceMissing(RageQuitError):
    """The one required fetch of an aggregate failed."""


class ValidationFailure(RageQuitError):
    """Input was rejected before any network call was made."""


class AccountStoreError(RageQuitError):
    """A read or write against the account store failed."""


class AuthenticationError(RageQuitError):
    """The identity provider refused a sign-in or sign-up."""
