# ===== IMPORTS & DEPENDENCIES =====
import logging
import asyncio
import aiohttp
import time
from urllib.parse import urlencode
from typing import Optional, Any, Dict, Tuple

from ragequit.config import COMMON_HEADERS, DEFAULT_CACHE_TTL, REQUEST_TIMEOUT
from ragequit.errors import TransportFailure, RemoteFailure

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class BaseWebClient:
    """
    A base class for JSON API clients.

    Responses are kept in a read-through cache that lives as long as the client
    instance, which in practice is one view. Every request is a single attempt:
    a failure is reported to the caller and never retried.
    """

    def __init__(
        self,
        base_url: str,
        session: aiohttp.ClientSession,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        timeout: float = REQUEST_TIMEOUT
    ):
        self._base_url = base_url.rstrip('/')
        self._session = session
        self._cache_ttl = cache_ttl
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._cache: Dict[str, Tuple[float, Any]] = {}
        logger.debug(f"[{self.__class__.__name__}] Initialized for {self._base_url} with TTL: {self._cache_ttl}s")

    def _build_url(self, path: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Joins the base URL, path and query parameters into a cache key / request URL."""
        url = f"{self._base_url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _is_cache_valid(self, url: str) -> bool:
        """Checks if a cached body exists for the URL and has not expired."""
        entry = self._cache.get(url)
        if entry is None:
            return False

        stored_at, _ = entry
        if (time.monotonic() - stored_at) > self._cache_ttl:
            logger.debug(f"[{self.__class__.__name__}] Cache entry expired: {url}")
            del self._cache[url]
            return False

        return True

    def clear_cache(self) -> None:
        self._cache.clear()

    async def _fetch(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        GETs a JSON document from the API.

        Raises TransportFailure for network errors and timeouts, RemoteFailure
        for non-success statuses and bodies that are not JSON.
        """
        url = self._build_url(path, params)

        if self._is_cache_valid(url):
            logger.debug(f"[{self.__class__.__name__}] Loading content from cache: {url}")
            return self._cache[url][1]

        logger.info(f"➡️ [{self.__class__.__name__}] Fetching from network: {url}")
        request_headers = headers or COMMON_HEADERS

        try:
            async with self._session.get(url, headers=request_headers, timeout=self._timeout) as response:
                response.raise_for_status()
                # content_type=None handles backends that mislabel JSON
                content = await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] HTTP error on {url}: Status {e.status}")
            raise RemoteFailure(f"{url} answered {e.status}", status=e.status) from e
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            logger.error(f"❌ [{self.__class__.__name__}] Network error on {url}: {type(e).__name__}")
            raise TransportFailure(f"{url}: {type(e).__name__}") from e
        except ValueError as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Invalid JSON from {url}: {e}")
            raise RemoteFailure(f"{url} returned a body that is not JSON") from e

        self._cache[url] = (time.monotonic(), content)
        return content
