"""
Shared Test Fixtures

Centralized response bodies and factories used across all test layers.

Structure:
    - dor_fixtures.py: DOR response bodies and TaxInfo factories
"""

from .dor_fixtures import (
    SPACE_NEEDLE_XML,
    SPACE_NEEDLE_TEXT,
    INTERNAL_ERROR_XML,
    NOT_FOUND_XML,
    make_xml,
    make_text,
    make_tax_info,
)

__all__ = [
    'SPACE_NEEDLE_XML',
    'SPACE_NEEDLE_TEXT',
    'INTERNAL_ERROR_XML',
    'NOT_FOUND_XML',
    'make_xml',
    'make_text',
    'make_tax_info',
]
