#!/usr/bin/env python3
"""
WA Sales Tax Rate Lookup
Resolves Washington State addresses to sales tax rates using the DOR
address rate URL interface.

Usage:
    import wataxrate

    # Space Needle
    result = await wataxrate.get("400 Broad St", "Seattle", "98109")
    print(result.unwrap().rate)
"""

import logging

from .client import TaxRateClient, close_default_client, get, get_basic, retry_lookup
from .config import DOR_ADDRESS_RATES_URL, MAX_ATTEMPTS, DEFAULT_TIMEOUT, TaxRateConfig
from .decoder import decode, decode_text, decode_xml
from .models import (
    Address,
    ResponseFormat,
    StatusCode,
    TaxInfo,
    TaxRate,
    classify_code,
    parse_code,
)
from .protocols import (
    DecodeError,
    DorError,
    NoMoreRetriesError,
    TaxInfoError,
    TaxInfoFetcherProtocol,
    TaxInfoResult,
    TransportError,
)

__version__ = "0.1.0"

# Library code only logs at DEBUG; applications decide where it goes
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Entry points
    'get',
    'get_basic',
    'close_default_client',
    'retry_lookup',
    'TaxRateClient',
    # Config
    'TaxRateConfig',
    'DOR_ADDRESS_RATES_URL',
    'MAX_ATTEMPTS',
    'DEFAULT_TIMEOUT',
    # Decoding
    'decode',
    'decode_xml',
    'decode_text',
    # Models
    'Address',
    'ResponseFormat',
    'StatusCode',
    'TaxInfo',
    'TaxRate',
    'classify_code',
    'parse_code',
    # Results and errors
    'TaxInfoResult',
    'TaxInfoError',
    'TransportError',
    'DorError',
    'DecodeError',
    'NoMoreRetriesError',
    'TaxInfoFetcherProtocol',
]
