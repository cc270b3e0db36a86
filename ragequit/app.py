# ===== IMPORTS & DEPENDENCIES =====
import logging
import aiohttp
from typing import Optional

from ragequit.config import API_URL
from ragequit.core.account_store import AccountStore
from ragequit.core.database import AccountDatabase
from ragequit.core.identity import LocalIdentityProvider
from ragequit.core.session import SessionGate
from ragequit.services.auth import AuthService
from ragequit.sources.catalog import CatalogClient

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class RageQuitApp:
    """
    Holds the collaborators that outlive a single view: the HTTP session, the
    account store, the identity provider and the session gate. Views get a
    fresh catalog client each so cached catalog data lives only as long as
    the view that fetched it.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        db: AccountDatabase,
        provider=None,
        api_url: str = API_URL,
        gate: Optional[SessionGate] = None
    ):
        self.http_session = http_session
        self.api_url = api_url
        self.store = AccountStore(db)
        self.provider = provider or LocalIdentityProvider(db)
        self.gate = gate or SessionGate()
        self.auth = AuthService(self.provider)

    def new_client(self) -> CatalogClient:
        return CatalogClient(self.http_session, base_url=self.api_url)

    async def start(self) -> None:
        await self.gate.attach(self.provider)
        logger.info(f"[{self.__class__.__name__}] Started against {self.api_url}")

    def close(self) -> None:
        self.gate.detach()
