"""PromptPay payload encoder on top of the EMV TLV helpers."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable

from .config import BuildConfig
from .crc import CRC_FIELD_PREFIX, append_crc, crc16_ccitt
from .identifiers import MerchantIdentifier, MerchantKind
from .services.errors import err_invalid_merchant_id
from .tlv import TLVItem, build_tlv, parse_tlv

PROMPTPAY_AID = "A000000677010111"
PAYLOAD_FORMAT_INDICATOR = "01"
STATIC_INITIATION = "11"
DYNAMIC_INITIATION = "12"

TAG_FORMAT_INDICATOR = "00"
TAG_INITIATION_METHOD = "01"
TAG_MERCHANT_ACCOUNT = "29"
TAG_CURRENCY = "53"
TAG_AMOUNT = "54"
TAG_COUNTRY = "58"
TAG_CRC = "63"

TAG_AID = "00"

_ACCOUNT_VALUES: dict[MerchantKind, Callable[[str], str]] = {
    MerchantKind.PHONE: lambda sanitized: f"00{sanitized}",
    MerchantKind.TAX_ID: lambda sanitized: sanitized,
    MerchantKind.EWALLET: lambda sanitized: sanitized,
}


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str
    items: tuple[TLVItem, ...] = ()


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly two fractional digits and no separators."""

    return f"{amount:.2f}"


def merchant_account_items(identifier: MerchantIdentifier) -> Iterable[TLVItem]:
    try:
        to_value = _ACCOUNT_VALUES[identifier.kind]
    except KeyError:
        raise err_invalid_merchant_id(f"Cannot encode merchant of kind {identifier.kind.value}") from None
    yield TLVItem(tag=TAG_AID, value=PROMPTPAY_AID)
    yield TLVItem(tag=identifier.kind.account_tag, value=to_value(identifier.sanitized))


def payload_items(identifier: MerchantIdentifier, amount: Decimal | None, config: BuildConfig) -> Iterable[TLVItem]:
    """Root fields in wire order, without the CRC field."""

    yield TLVItem(tag=TAG_FORMAT_INDICATOR, value=PAYLOAD_FORMAT_INDICATOR)
    yield TLVItem(tag=TAG_INITIATION_METHOD, value=DYNAMIC_INITIATION if amount is not None else STATIC_INITIATION)
    yield TLVItem(tag=TAG_MERCHANT_ACCOUNT, value=build_tlv(merchant_account_items(identifier)))
    yield TLVItem(tag=TAG_COUNTRY, value=config.country_code)
    yield TLVItem(tag=TAG_CURRENCY, value=config.currency_code)
    if amount is not None:
        yield TLVItem(tag=TAG_AMOUNT, value=format_amount(amount))


def encode_payload(identifier: MerchantIdentifier, amount: Decimal | None, config: BuildConfig) -> EncodedPayload:
    """Serialize the TLV tree and append CRC16-CCITT."""

    items = tuple(payload_items(identifier, amount, config))
    payload, crc = append_crc(build_tlv(items))
    return EncodedPayload(payload=payload, crc=crc, items=items)


def verify_payload(payload: str) -> bool:
    """Check that the payload ends in a CRC field matching everything before it."""

    if len(payload) < 8:
        return False
    body, crc = payload[:-4], payload[-4:]
    if not body.endswith(CRC_FIELD_PREFIX):
        return False
    try:
        items = list(parse_tlv(payload))
    except ValueError:
        return False
    if not items or items[-1].tag != TAG_CRC:
        return False
    return crc16_ccitt(body) == crc
