"""
DOR Response Fixtures

Response bodies and TaxInfo factories for the DOR address rate service.
"""
from decimal import Decimal
from typing import Optional

from wataxrate import StatusCode, TaxInfo


# Space Needle, as returned by output=xml
SPACE_NEEDLE_XML = (
    '<?xml version="1.0" encoding="utf-8"?>'
    '<response loccode="1726" localrate=".036" rate=".101" code="0" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
    'xmlns:xsd="http://www.w3.org/2001/XMLSchema">'
    '<addressline houselow="400" househigh="498" evenodd="E" street="BROAD ST" '
    'state="WA" zip="98109" plus4="4611" period="Q42023" code="1726" rta="Y" '
    'ptba="Seattle" cez="" />'
    '<rate name="SEATTLE" code="1726" staterate=".065" localrate=".036" />'
    '</response>'
)

SPACE_NEEDLE_TEXT = "LocationCode=1726 Rate=.101 ResultCode=0"

INTERNAL_ERROR_XML = '<response loccode="-1" localrate="-1" rate="-1" code="9" debughint="timeout" />'

NOT_FOUND_XML = '<response loccode="-1" localrate="-1" rate="-1" code="6" />'


def make_xml(
    code: int = 0,
    loccode: int = 1234,
    rate: str = ".095",
    localrate: str = ".03",
    children: str = ""
) -> str:
    """Minimal valid output=xml body"""
    attrs = f'loccode="{loccode}" localrate="{localrate}" rate="{rate}" code="{code}"'
    if children:
        return f'<response {attrs}>{children}</response>'
    return f'<response {attrs} />'


def make_text(loccode: int = 1234, rate: str = ".095", code: int = 0) -> str:
    """Valid output=text body"""
    return f"LocationCode={loccode} Rate={rate} ResultCode={code}"


def make_tax_info(
    code: StatusCode = StatusCode.ADDR_FOUND,
    loccode: int = 1234,
    rate: str = "0.095",
    localrate: Optional[str] = "0.03"
) -> TaxInfo:
    """TaxInfo as decode_xml would build it from make_xml()"""
    return TaxInfo(
        loccode=loccode,
        rate=Decimal(rate),
        code=code,
        localrate=Decimal(localrate) if localrate is not None else None,
    )
