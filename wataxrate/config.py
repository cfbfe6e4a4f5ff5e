#!/usr/bin/env python3
"""WA tax rate lookup configuration

Defaults are what the module-level ``wataxrate.get`` / ``wataxrate.get_basic``
use. ``TaxRateConfig.from_env()`` is opt-in and only applies to clients built
with the returned config.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .models import ResponseFormat

DOR_ADDRESS_RATES_URL = "https://webgis.dor.wa.gov/webapi/AddressRates.aspx"
MAX_ATTEMPTS = 3
DEFAULT_TIMEOUT = 2.5  # seconds, per attempt
DEFAULT_USER_AGENT = "wataxrate-python/0.1"


def _int(val: Optional[str], default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


def _float(val: Optional[str], default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


def _format(val: Optional[str], default: ResponseFormat) -> ResponseFormat:
    try:
        return ResponseFormat(val.lower()) if val else default
    except ValueError:
        return default


@dataclass
class TaxRateConfig:
    """DOR endpoint and retry policy"""

    # ===========================================
    # DOR endpoint
    # ===========================================
    base_url: str = DOR_ADDRESS_RATES_URL
    response_format: ResponseFormat = ResponseFormat.XML
    user_agent: str = DEFAULT_USER_AGENT

    # ===========================================
    # Retry policy
    # ===========================================
    timeout: float = DEFAULT_TIMEOUT
    max_attempts: int = MAX_ATTEMPTS

    def __post_init__(self):
        self.response_format = ResponseFormat(self.response_format)
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'TaxRateConfig':
        """Load config from WATAXRATE_* environment variables, optionally seeded from a .env file"""
        if env_file:
            load_dotenv(env_file, override=False)
        return cls(
            base_url=os.getenv("WATAXRATE_BASE_URL", DOR_ADDRESS_RATES_URL),
            response_format=_format(os.getenv("WATAXRATE_OUTPUT"), ResponseFormat.XML),
            user_agent=os.getenv("WATAXRATE_USER_AGENT", DEFAULT_USER_AGENT),
            timeout=_float(os.getenv("WATAXRATE_TIMEOUT"), DEFAULT_TIMEOUT),
            max_attempts=_int(os.getenv("WATAXRATE_MAX_ATTEMPTS"), MAX_ATTEMPTS),
        )
