"""Merchant identifier sanitization and classification."""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass

THAI_CALLING_CODE = "66"

_NON_DIGITS = re.compile(r"[^0-9]")
_PHONE_SANITIZED = re.compile(r"66[0-9]{9}")
_TAX_ID_RAW = re.compile(r"[0-9]{13}")
_EWALLET_RAW = re.compile(r"[0-9]{15}")


class MerchantKind(str, enum.Enum):
    PHONE = "PHONE"
    TAX_ID = "TAX_ID"
    EWALLET = "EWALLET"
    UNKNOWN = "UNKNOWN"

    @property
    def account_tag(self) -> str:
        """Sub-tag used inside the merchant account template (tag 29)."""

        try:
            return _ACCOUNT_TAGS[self]
        except KeyError:
            raise ValueError("Unknown merchant kind has no account tag") from None


_ACCOUNT_TAGS = {
    MerchantKind.PHONE: "01",
    MerchantKind.TAX_ID: "02",
    MerchantKind.EWALLET: "03",
}


@dataclass(frozen=True)
class MerchantIdentifier:
    raw: str
    sanitized: str
    kind: MerchantKind

    @property
    def masked(self) -> str:
        """Sanitized value with everything but the last 4 digits hidden, for logs."""

        visible = self.sanitized[-4:]
        return "*" * (len(self.sanitized) - len(visible)) + visible


def digits_only(raw: str) -> str:
    return _NON_DIGITS.sub("", raw)


def sanitize(raw: str) -> str:
    """Strip punctuation and rewrite a domestic ``0XXXXXXXXX`` phone to ``66XXXXXXXXX``.

    Any other digit pattern is returned unchanged and left to classification.
    """

    digits = digits_only(raw)
    if len(digits) == 10 and digits.startswith("0"):
        return THAI_CALLING_CODE + digits[1:]
    return digits


def classify(raw: str) -> MerchantKind:
    """Determine the identifier kind; phone wins over tax ID, tax ID over e-wallet."""

    if _PHONE_SANITIZED.fullmatch(sanitize(raw)):
        return MerchantKind.PHONE
    stripped = raw.strip()
    if _TAX_ID_RAW.fullmatch(stripped):
        return MerchantKind.TAX_ID
    if _EWALLET_RAW.fullmatch(stripped):
        return MerchantKind.EWALLET
    return MerchantKind.UNKNOWN


def identify(raw: str) -> MerchantIdentifier:
    return MerchantIdentifier(raw=raw, sanitized=sanitize(raw), kind=classify(raw))
