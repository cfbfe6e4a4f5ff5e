"""
DOR Address Rates Client

Looks up WA sales tax rates through the DOR address rate URL interface.

Usage:
    import wataxrate

    result = await wataxrate.get("400 Broad St", "Seattle", "98109")
    if result.ok:
        print(result.value.rate)
    elif isinstance(result.error, wataxrate.DorError):
        print(result.error.code)

    # Explicit client with its own config and connection pool
    async with TaxRateClient(TaxRateConfig(timeout=5.0)) as client:
        result = await client.get("400 Broad St", "Seattle", "98109")
"""

import asyncio
import logging
from typing import Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_none,
)

from .config import DEFAULT_TIMEOUT, MAX_ATTEMPTS, TaxRateConfig
from .decoder import decode
from .protocols import (
    DecodeError,
    DorError,
    NoMoreRetriesError,
    TaxInfoFetcherProtocol,
    TaxInfoResult,
    TransportError,
)

logger = logging.getLogger(__name__)


class TaxRateClient:
    """
    Client for the DOR address rate service.

    Owns one httpx.AsyncClient, created on first use and released by
    ``aclose()`` or by leaving ``async with``. A client passed in by the
    caller is used as-is and never closed here.
    """

    def __init__(
        self,
        config: Optional[TaxRateConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.config = config or TaxRateConfig()
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            # No client-level timeout; the retry policy bounds each attempt
            self._http_client = httpx.AsyncClient(
                timeout=None,
                follow_redirects=True,
                headers={"User-Agent": self.config.user_agent},
            )
            logger.debug(f"Created HTTP client for {self.config.base_url}")
        return self._http_client

    async def aclose(self):
        """Close the HTTP client if this instance created it"""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None
            logger.debug("Closed DOR HTTP client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def build_url(self, addr: str, city: str, zip: str) -> httpx.URL:
        """Request URL with percent-encoded address parameters"""
        return httpx.URL(
            self.config.base_url,
            params={
                "output": self.config.response_format.value,
                "addr": addr,
                "city": city,
                "zip": zip,
            },
        )

    # ========================================
    # Lookups
    # ========================================

    async def get_basic(self, addr: str, city: str, zip: str) -> TaxInfoResult:
        """No retries, just one attempt, no timeout"""
        url = self.build_url(addr, city, zip)
        logger.debug(f"URL to GET from DOR {url}")

        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
            raw = response.text
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            error = TransportError(f"DOR responded with HTTP {status}", status_code=status)
            error.__cause__ = e
            return TaxInfoResult.failure(error)
        except httpx.HTTPError as e:
            error = TransportError(f"Request to DOR failed: {e!r}")
            error.__cause__ = e
            return TaxInfoResult.failure(error)

        logger.debug(f"raw string from DOR {raw}")

        try:
            tax_info = decode(raw, self.config.response_format)
        except DecodeError as e:
            logger.debug(f"Error parsing response from DOR: {e}")
            return TaxInfoResult.failure(e)

        if tax_info.code.is_error():
            return TaxInfoResult.failure(DorError(tax_info))
        return TaxInfoResult.success(tax_info)

    async def get(self, addr: str, city: str, zip: str) -> TaxInfoResult:
        """Has retries and a timeout per attempt"""
        return await retry_lookup(
            self, addr, city, zip,
            timeout=self.config.timeout,
            max_attempts=self.config.max_attempts,
        )


# ============================================================================
# Retry policy
# ============================================================================

def _log_retry(retry_state: RetryCallState):
    outcome = retry_state.outcome
    if outcome.failed:
        logger.debug(f"DOR lookup attempt {retry_state.attempt_number} timed out, retrying")
    else:
        logger.debug(
            f"DOR lookup attempt {retry_state.attempt_number} failed with "
            f"{outcome.result().error!r}, retrying"
        )


def _no_more_retries(retry_state: RetryCallState) -> TaxInfoResult:
    logger.debug(f"DOR lookup gave up after {retry_state.attempt_number} attempts")
    return TaxInfoResult.failure(NoMoreRetriesError())


async def retry_lookup(
    fetcher: TaxInfoFetcherProtocol,
    addr: str,
    city: str,
    zip: str,
    timeout: float = DEFAULT_TIMEOUT,
    max_attempts: int = MAX_ATTEMPTS
) -> TaxInfoResult:
    """
    Run ``fetcher.get_basic`` until it succeeds or fails for good.

    Each attempt is cancelled once ``timeout`` seconds elapse. Timeouts and
    retryable failures both use up an attempt and are retried immediately.
    When every attempt is used up the result is NoMoreRetriesError, without
    the last underlying error.
    """
    async def _attempt() -> TaxInfoResult:
        return await asyncio.wait_for(fetcher.get_basic(addr, city, zip), timeout=timeout)

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_none(),
        retry=retry_if_exception_type(asyncio.TimeoutError) | retry_if_result(TaxInfoResult.is_retryable),
        before_sleep=_log_retry,
        retry_error_callback=_no_more_retries,
    )
    return await retrying(_attempt)


# ============================================================================
# Module-level entry points
# ============================================================================

# Shared client, recreated whenever the running event loop changes since
# httpx connections cannot outlive their loop
_default_client: Optional[TaxRateClient] = None
_default_loop: Optional[asyncio.AbstractEventLoop] = None


def _get_default_client() -> TaxRateClient:
    global _default_client, _default_loop
    loop = asyncio.get_running_loop()
    if _default_client is None or _default_loop is not loop:
        _default_client = TaxRateClient()
        _default_loop = loop
    return _default_client


async def close_default_client():
    """Release the connection pool used by ``get`` / ``get_basic``"""
    global _default_client, _default_loop
    if _default_client is not None:
        await _default_client.aclose()
    _default_client = None
    _default_loop = None


async def get(addr: str, city: str, zip: str) -> TaxInfoResult:
    """Has retries, reasonable timeouts, defaults, fully ready to go."""
    return await _get_default_client().get(addr, city, zip)


async def get_basic(addr: str, city: str, zip: str) -> TaxInfoResult:
    """No retries, just one attempt, no timeout, nothing"""
    return await _get_default_client().get_basic(addr, city, zip)
