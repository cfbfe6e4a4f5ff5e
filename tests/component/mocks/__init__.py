"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (HTTP).
"""

from .http_mock import MockHttpClient

__all__ = [
    'MockHttpClient',
]
