"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - component/  : Fetcher and retry policy tests (mocked HTTP client)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.fixtures import SPACE_NEEDLE_TEXT, SPACE_NEEDLE_XML


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def space_needle_xml() -> str:
    return SPACE_NEEDLE_XML


@pytest.fixture
def space_needle_text() -> str:
    return SPACE_NEEDLE_TEXT


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")
