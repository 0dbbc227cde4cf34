"""Pydantic schemas for API contracts."""
from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class BuildOptions(BaseModel):
    country_code: str | None = Field(default=None, pattern=r"^[A-Z]{2}$", description="Overrides PROMPTQR_COUNTRY_CODE")
    currency_code: str | None = Field(default=None, pattern=r"^[0-9]{3}$", description="Overrides PROMPTQR_CURRENCY_CODE")
    validate_input: bool | None = None


class PayloadRequest(BaseModel):
    identifier: str = Field(max_length=64, description="Phone number, tax ID or e-wallet ID")
    # Strings are kept verbatim so precision checks see exactly what the client sent.
    amount: str | int | float | None = None
    config: BuildOptions | None = None


class PayloadResponse(BaseModel):
    payload: str
    crc: str
    kind: str
    sanitized: str
    amount: Decimal | None = None


class QRRequest(PayloadRequest):
    format: Literal["png", "svg", "html"] = "png"


class QRResponse(PayloadResponse):
    format: str
    image: str


class ClassifyRequest(BaseModel):
    identifier: str = Field(max_length=64)


class ClassifyResponse(BaseModel):
    raw: str
    sanitized: str
    kind: str
    valid: bool
    error_code: str | None = None
    error_message: str | None = None


class VerifyRequest(BaseModel):
    payload: str = Field(max_length=512)


class VerifyResponse(BaseModel):
    valid: bool
    crc: str | None = None
