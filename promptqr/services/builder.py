"""Payload building service: identifier + amount + config to PromptPay string."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..config import DEFAULT_BUILD_CONFIG, BuildConfig
from ..identifiers import MerchantIdentifier, MerchantKind, identify
from ..promptpay_encoder import EncodedPayload, encode_payload
from ..validation import AmountInput, parse_amount, validate_amount, validate_identifier
from .errors import EncodeError, err_invalid_merchant_id

logger = logging.getLogger("promptqr.builder")


@dataclass(slots=True)
class BuildResult:
    identifier: MerchantIdentifier
    amount: Decimal | None
    config: BuildConfig
    encoded: EncodedPayload

    @property
    def payload(self) -> str:
        return self.encoded.payload


def _prepare(identifier: MerchantIdentifier, amount: AmountInput | None, config: BuildConfig) -> Decimal | None:
    if config.validate_input:
        validate_identifier(identifier)
        return validate_amount(amount) if amount is not None else None

    # Classification still has to pick a sub-tag even when rules are skipped.
    if identifier.kind is MerchantKind.UNKNOWN:
        raise err_invalid_merchant_id(f"Merchant ID {identifier.raw!r} is not a phone number, tax ID or e-wallet ID")
    return parse_amount(amount) if amount is not None else None


def build_payload(
    identifier: str,
    amount: AmountInput | None = None,
    config: BuildConfig | None = None,
) -> BuildResult:
    """Sanitize, classify, validate and encode; raise EncodeError on the first failed rule."""

    if config is None:
        config = DEFAULT_BUILD_CONFIG
    merchant = identify(identifier)
    try:
        checked_amount = _prepare(merchant, amount, config)
        encoded = encode_payload(merchant, checked_amount, config)
    except EncodeError as exc:
        logger.info(
            "payload rejected",
            extra={"code": exc.code.value, "kind": merchant.kind.value, "merchant": merchant.masked},
        )
        raise

    logger.debug(
        "payload built",
        extra={
            "kind": merchant.kind.value,
            "merchant": merchant.masked,
            "dynamic": checked_amount is not None,
            "crc": encoded.crc,
        },
    )
    return BuildResult(identifier=merchant, amount=checked_amount, config=config, encoded=encoded)


def build(identifier: str, amount: AmountInput | None = None, config: BuildConfig | None = None) -> str:
    """Return the PromptPay payload string for ``identifier``."""

    return build_payload(identifier, amount, config).payload
