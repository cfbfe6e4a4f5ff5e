"""
WA Tax Rate Protocols (Interfaces)

Error taxonomy, the lookup result type and the fetcher contract.
NO import-time I/O dependencies - safe to import anywhere.
"""
from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from .models import StatusCode, TaxInfo


# =============================================================================
# Errors (returned as values inside TaxInfoResult)
# =============================================================================


class TaxInfoError(Exception):
    """Base error for a failed tax info lookup"""

    def is_retryable(self) -> bool:
        return False


class TransportError(TaxInfoError):
    """HTTP request to DOR failed"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)

    def is_retryable(self) -> bool:
        # No status means the connection itself failed
        if self.status_code is None:
            return True
        return 500 <= self.status_code < 600


class DorError(TaxInfoError):
    """
    DOR answered with an error code.

    The decoded TaxInfo is kept so callers can inspect it, but its rate
    values should not be trusted.
    """
    def __init__(self, tax_info: TaxInfo):
        self.code = tax_info.code
        self.tax_info = tax_info
        super().__init__(f"DOR returned error code {int(tax_info.code)} ({tax_info.code.name})")

    def is_retryable(self) -> bool:
        return self.code.is_retryable()


class DecodeError(TaxInfoError):
    """Response body from DOR could not be decoded"""
    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class NoMoreRetriesError(TaxInfoError):
    """Every attempt failed or timed out"""
    def __init__(self):
        super().__init__("No more retries")


# =============================================================================
# Result
# =============================================================================


@dataclass(frozen=True)
class TaxInfoResult:
    """
    Outcome of a lookup: either a TaxInfo or a TaxInfoError, never both.

    Lookup failures are returned, not raised; use unwrap() to raise.
    """
    value: Optional[TaxInfo] = None
    error: Optional[TaxInfoError] = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("TaxInfoResult needs exactly one of value or error")

    @classmethod
    def success(cls, tax_info: TaxInfo) -> "TaxInfoResult":
        return cls(value=tax_info)

    @classmethod
    def failure(cls, error: TaxInfoError) -> "TaxInfoResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def is_retryable(self) -> bool:
        """True for a failure worth another attempt"""
        return self.error is not None and self.error.is_retryable()

    def unwrap(self) -> TaxInfo:
        """Return the TaxInfo or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.value

    def __repr__(self) -> str:
        if self.ok:
            return f"TaxInfoResult(ok=True, value={self.value!r})"
        return f"TaxInfoResult(ok=False, error={self.error!r})"


# =============================================================================
# Fetcher Protocol
# =============================================================================


@runtime_checkable
class TaxInfoFetcherProtocol(Protocol):
    """
    Interface for a single-attempt lookup.

    Implementations:
    - TaxRateClient (production - DOR over httpx)
    """

    async def get_basic(self, addr: str, city: str, zip: str) -> TaxInfoResult:
        """
        Perform exactly one lookup with no retries and no timeout.

        Args:
            addr: Street address, e.g. "400 Broad St"
            city: City name
            zip: 5 digit or ZIP+4 postal code

        Returns:
            TaxInfoResult with the decoded TaxInfo or the failure
        """
        ...
