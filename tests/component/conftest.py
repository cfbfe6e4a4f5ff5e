"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── test_fetcher.py        Single attempt against a mocked HTTP client
    ├── test_retry_policy.py   Retry and timeout policy
    └── mocks/                 Mock implementations

Usage:
    pytest tests/component -v
"""
import os
import sys

import pytest

# Add project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from tests.component.mocks import MockHttpClient
from wataxrate import ResponseFormat, TaxRateClient, TaxRateConfig


@pytest.fixture
def mock_http():
    """Create a fresh MockHttpClient"""
    return MockHttpClient()


@pytest.fixture
def xml_client(mock_http):
    """TaxRateClient requesting output=xml through the mock"""
    return TaxRateClient(TaxRateConfig(response_format=ResponseFormat.XML), http_client=mock_http)


@pytest.fixture
def text_client(mock_http):
    """TaxRateClient requesting output=text through the mock"""
    return TaxRateClient(TaxRateConfig(response_format=ResponseFormat.TEXT), http_client=mock_http)
