"""Per-kind identifier rules and amount validation."""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Union

from .identifiers import MerchantIdentifier, MerchantKind, digits_only, sanitize
from .services.errors import (
    err_invalid_amount,
    err_invalid_ewallet_format,
    err_invalid_merchant_id,
    err_invalid_phone_format,
    err_invalid_tax_id_checksum,
)

AmountInput = Union[Decimal, int, float, str]

MAX_AMOUNT = Decimal("999999999.99")
CENTS = Decimal("0.01")

_PHONE_CHARS = re.compile(r"[0-9\s+\-().]*")
_PHONE_SANITIZED = re.compile(r"66[0-9]{9}")
_TAX_ID = re.compile(r"[0-9]{13}")
_EWALLET = re.compile(r"[0-9]{15}")


def tax_id_check_digit(first_twelve: str) -> int:
    """Check digit for the first 12 digits of a Thai tax ID.

    Digits are weighted 13 down to 2 from the left.
    """

    if len(first_twelve) != 12 or not first_twelve.isascii() or not first_twelve.isdigit():
        raise ValueError("Tax ID check digit needs exactly 12 digits")
    total = sum(int(digit) * (13 - index) for index, digit in enumerate(first_twelve))
    return (11 - total % 11) % 10


def validate_phone(raw: str) -> str:
    """Return the sanitized ``66XXXXXXXXX`` form or raise ``INVALID_PHONE_FORMAT``."""

    if not _PHONE_CHARS.fullmatch(raw):
        raise err_invalid_phone_format(f"Phone number contains unexpected characters: {raw!r}")
    sanitized = sanitize(raw)
    if not _PHONE_SANITIZED.fullmatch(sanitized):
        raise err_invalid_phone_format(f"Phone number must be 0 + 9 digits or 66 + 9 digits, got {len(sanitized)} digits")
    return sanitized


def validate_tax_id(raw: str) -> str:
    tax_id = raw.strip()
    if not _TAX_ID.fullmatch(tax_id):
        raise err_invalid_tax_id_checksum("Tax ID must be exactly 13 digits")
    expected = tax_id_check_digit(tax_id[:12])
    if int(tax_id[12]) != expected:
        raise err_invalid_tax_id_checksum(f"Tax ID check digit should be {expected}, got {tax_id[12]}")
    return tax_id


def validate_ewallet(raw: str) -> str:
    ewallet_id = raw.strip()
    if not _EWALLET.fullmatch(ewallet_id):
        raise err_invalid_ewallet_format(f"E-wallet ID must be exactly 15 digits, got {len(digits_only(ewallet_id))}")
    return ewallet_id


_VALIDATORS: dict[MerchantKind, Callable[[str], str]] = {
    MerchantKind.PHONE: validate_phone,
    MerchantKind.TAX_ID: validate_tax_id,
    MerchantKind.EWALLET: validate_ewallet,
}


def validate_identifier(identifier: MerchantIdentifier) -> MerchantIdentifier:
    """Apply the rules of the identifier's kind; raise on the first violation."""

    if not identifier.raw.strip():
        raise err_invalid_merchant_id("Merchant ID is required")
    validator = _VALIDATORS.get(identifier.kind)
    if validator is None:
        raise err_invalid_merchant_id(f"Merchant ID {identifier.raw!r} is not a phone number, tax ID or e-wallet ID")
    validator(identifier.raw)
    return identifier


def _to_decimal(value: AmountInput) -> Decimal:
    if isinstance(value, bool):
        raise err_invalid_amount("Amount must be numeric")
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, int):
            amount = Decimal(value)
        elif isinstance(value, float):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            raise err_invalid_amount(f"Amount must be numeric, got {type(value).__name__}")
    except InvalidOperation:
        raise err_invalid_amount(f"Amount is not a number: {value!r}") from None
    if not amount.is_finite():
        raise err_invalid_amount("Amount must be finite")
    return amount


def _to_cents(amount: Decimal) -> Decimal:
    try:
        quantized = amount.quantize(CENTS)
    except InvalidOperation:
        raise err_invalid_amount("Amount is too large") from None
    if quantized != amount:
        raise err_invalid_amount(f"Amount {amount} has more than 2 decimal places")
    return quantized


def parse_amount(value: AmountInput) -> Decimal:
    """Convert ``value`` to a positive Decimal with exactly 2 fractional digits, without the upper bound.

    Extra precision is rejected rather than rounded.
    """

    amount = _to_decimal(value)
    if amount <= 0:
        raise err_invalid_amount("Amount must be greater than 0")
    return _to_cents(amount)


def validate_amount(value: AmountInput) -> Decimal:
    """Return the amount scaled to 2 places or raise ``INVALID_AMOUNT``."""

    amount = _to_decimal(value)
    if not Decimal(0) < amount <= MAX_AMOUNT:
        raise err_invalid_amount(f"Amount must be greater than 0 and at most {MAX_AMOUNT}")
    return _to_cents(amount)
