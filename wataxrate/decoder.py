"""
DOR Response Decoder

Decodes the two response encodings offered by the DOR address rate
interface into TaxInfo:

    output=xml   <response loccode="1726" localrate=".065" rate=".101" code="0" ...>
                     <addressline houselow="400" househigh="498" street="BROAD ST" zip="98109" .../>
                     <rate name="SEATTLE" code="1726" staterate=".065" localrate=".036"/>
                 </response>

    output=text  LocationCode=1726 Rate=.101 ResultCode=0

Every failure raises DecodeError naming the field that could not be read.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Optional

from lxml import etree
from pydantic import ValidationError

from .models import Address, ResponseFormat, StatusCode, TaxInfo, TaxRate, parse_code
from .protocols import DecodeError

# The service never needs DTDs or entities; refuse them outright
_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)

_TEXT_FIELDS = {
    "loccode": re.compile(r"\bLocationCode=(?P<value>\S*)"),
    "rate": re.compile(r"\bRate=(?P<value>\S*)"),
    "code": re.compile(r"\bResultCode=(?P<value>\S*)"),
}


def decode(body: str, response_format: ResponseFormat) -> TaxInfo:
    """Decode a response body according to the encoding that was requested"""
    return _DECODERS[ResponseFormat(response_format)](body)


# ============================================================================
# Field helpers
# ============================================================================

def _to_int(raw: Optional[str], field: str) -> int:
    if raw is None:
        raise DecodeError(f"missing {field} field", field=field)
    try:
        return int(raw.strip())
    except ValueError:
        raise DecodeError(f"{field} field is not an integer: {raw!r}", field=field) from None


def _to_decimal(raw: Optional[str], field: str) -> Decimal:
    if raw is None:
        raise DecodeError(f"missing {field} field", field=field)
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise DecodeError(f"{field} field is not a number: {raw!r}", field=field) from None
    if not value.is_finite():
        raise DecodeError(f"{field} field is not a number: {raw!r}", field=field)
    return value


def _to_code(raw: Optional[str], field: str = "code") -> StatusCode:
    if raw is None:
        raise DecodeError(f"missing {field} field", field=field)
    try:
        return parse_code(raw)
    except ValueError as e:
        raise DecodeError(f"{field} field is not a valid result code: {raw!r} ({e})", field=field) from None


# ============================================================================
# XML
# ============================================================================

def decode_xml(body: str) -> TaxInfo:
    """Decode an ``output=xml`` response"""
    try:
        root = etree.fromstring(body.strip().encode("utf-8"), parser=_XML_PARSER)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise DecodeError(f"response is not well-formed XML: {e}") from None

    if root.tag != "response":
        raise DecodeError(f"unexpected root element <{root.tag}>, expected <response>")

    attrs = root.attrib
    return TaxInfo(
        loccode=_to_int(attrs.get("loccode"), "loccode"),
        rate=_to_decimal(attrs.get("rate"), "rate"),
        code=_to_code(attrs.get("code")),
        localrate=_to_decimal(attrs.get("localrate"), "localrate"),
        debughint=attrs.get("debughint"),
        address=_decode_address(root.find("addressline")),
        taxrate=_decode_taxrate(root.find("rate")),
    )


def _decode_address(element) -> Optional[Address]:
    if element is None:
        return None
    # Blank attributes mean "not known" rather than an empty value
    fields = {
        key: value for key, value in element.attrib.items()
        if key in Address.model_fields and value.strip()
    }
    try:
        return Address(**fields)
    except ValidationError as e:
        field = ".".join(str(part) for part in e.errors()[0]["loc"])
        raise DecodeError(f"addressline.{field} attribute is malformed", field=f"addressline.{field}") from None


def _decode_taxrate(element) -> Optional[TaxRate]:
    if element is None:
        return None
    attrs = element.attrib
    for field in ("name", "code"):
        if attrs.get(field) is None:
            raise DecodeError(f"missing rate.{field} field", field=f"rate.{field}")
    return TaxRate(
        name=attrs["name"],
        code=attrs["code"],
        localrate=_to_decimal(attrs.get("localrate"), "rate.localrate"),
        staterate=_to_decimal(attrs.get("staterate"), "rate.staterate"),
    )


# ============================================================================
# Text
# ============================================================================

def _text_field(body: str, field: str) -> Optional[str]:
    match = _TEXT_FIELDS[field].search(body)
    if match is None or not match.group("value"):
        return None
    return match.group("value")


def decode_text(body: str) -> TaxInfo:
    """
    Decode an ``output=text`` response.

    Fields are located one at a time so that the error names the field that
    is missing or malformed.
    """
    line = body.strip()
    return TaxInfo(
        loccode=_to_int(_text_field(line, "loccode"), "loccode"),
        rate=_to_decimal(_text_field(line, "rate"), "rate"),
        code=_to_code(_text_field(line, "code")),
    )


_DECODERS: Dict[ResponseFormat, Callable[[str], TaxInfo]] = {
    ResponseFormat.XML: decode_xml,
    ResponseFormat.TEXT: decode_text,
}
