"""
WA Tax Rate Data Models

Typed results decoded from the DOR address rate lookup service.
"""

from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ResponseFormat(str, Enum):
    """Response encoding requested through the ``output`` query parameter"""
    XML = "xml"
    TEXT = "text"


class StatusCode(IntEnum):
    """
    Result codes reported by DOR for every lookup.

    Codes 6, 7 and 9 mean the returned rate values are garbage (the rate can
    be -1). Only 9 is transient.
    """
    ADDR_FOUND = 0
    ADDR_NOT_FOUND_ZIP_FOUND = 1
    ADDR_UPDATED_AND_FOUND_VALIDATE = 2
    ADDR_UPDATED_AND_ZIP_FOUND_VALIDATE = 3
    ADDR_CORRECTED_AND_FOUND_VALIDATE = 4
    ZIP5_FOUND_NO_ADDR_OR_ZIP4 = 5
    NO_ADDR_NO_ZIPS = 6
    INVALID_LONG_LAT = 7
    INTERNAL_ERROR = 9

    def is_error(self) -> bool:
        """True when the values returned alongside this code are not trustworthy"""
        return self in _ERROR_CODES

    def is_retryable(self) -> bool:
        """True when the same request may succeed on another attempt"""
        return self is StatusCode.INTERNAL_ERROR


_ERROR_CODES = frozenset({
    StatusCode.NO_ADDR_NO_ZIPS,
    StatusCode.INVALID_LONG_LAT,
    StatusCode.INTERNAL_ERROR,
})


def classify_code(value: int) -> StatusCode:
    """
    Map a raw numeric code onto StatusCode.

    Raises:
        ValueError: if the value is not one of the documented codes
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("invalid code")
    try:
        return StatusCode(value)
    except ValueError:
        raise ValueError("invalid code") from None


def parse_code(text: str) -> StatusCode:
    """Parse a decimal code as written by the service"""
    try:
        value = int(text.strip())
    except (AttributeError, ValueError):
        raise ValueError("did not use integer as code") from None
    return classify_code(value)


class Address(BaseModel):
    """Address as resolved by DOR (``addressline`` element)"""
    model_config = ConfigDict(frozen=True)

    househigh: Optional[int] = None
    houselow: Optional[int] = None
    evenodd: Optional[str] = None
    street: Optional[str] = None
    zip: Optional[int] = None
    plus4: Optional[int] = None
    period: Optional[str] = None
    rta: Optional[str] = None
    ptba: Optional[str] = None
    cez: Optional[str] = None


class TaxRate(BaseModel):
    """State vs. local breakdown (nested ``rate`` element)"""
    model_config = ConfigDict(frozen=True)

    name: str
    code: str
    localrate: Decimal
    staterate: Decimal


class TaxInfo(BaseModel):
    """Tax info for one address lookup"""
    model_config = ConfigDict(frozen=True)

    loccode: int = Field(..., description="Location code, -1 when unknown")
    rate: Decimal = Field(..., description="Combined state and local rate, e.g. 0.101")
    code: StatusCode
    localrate: Optional[Decimal] = Field(None, description="Local share of the rate (XML only)")
    debughint: Optional[str] = None

    # Children
    address: Optional[Address] = None
    taxrate: Optional[TaxRate] = None
