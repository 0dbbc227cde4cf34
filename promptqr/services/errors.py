"""Shared encoding error definitions."""
from __future__ import annotations

import enum
from dataclasses import dataclass


class ErrorCode(str, enum.Enum):
    INVALID_MERCHANT_ID = "INVALID_MERCHANT_ID"
    INVALID_PHONE_FORMAT = "INVALID_PHONE_FORMAT"
    INVALID_TAX_ID_CHECKSUM = "INVALID_TAX_ID_CHECKSUM"
    INVALID_EWALLET_FORMAT = "INVALID_EWALLET_FORMAT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    ENCODING_OVERFLOW = "ENCODING_OVERFLOW"


@dataclass(slots=True, eq=False)
class EncodeError(Exception):
    code: ErrorCode
    message: str
    status_code: int = 422

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code.value}: {self.message}"


def err_invalid_merchant_id(message: str | None = None) -> EncodeError:
    return EncodeError(code=ErrorCode.INVALID_MERCHANT_ID, message=message or "Merchant identifier matches no known kind")


def err_invalid_phone_format(message: str | None = None) -> EncodeError:
    return EncodeError(code=ErrorCode.INVALID_PHONE_FORMAT, message=message or "Invalid Thai phone number")


def err_invalid_tax_id_checksum(message: str | None = None) -> EncodeError:
    return EncodeError(code=ErrorCode.INVALID_TAX_ID_CHECKSUM, message=message or "Tax ID check digit mismatch")


def err_invalid_ewallet_format(message: str | None = None) -> EncodeError:
    return EncodeError(code=ErrorCode.INVALID_EWALLET_FORMAT, message=message or "E-wallet ID must be exactly 15 digits")


def err_invalid_amount(message: str | None = None) -> EncodeError:
    return EncodeError(code=ErrorCode.INVALID_AMOUNT, message=message or "Invalid amount")


def err_encoding_overflow(message: str | None = None) -> EncodeError:
    return EncodeError(code=ErrorCode.ENCODING_OVERFLOW, message=message or "TLV value longer than 99 bytes", status_code=500)
