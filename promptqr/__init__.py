"""PromptPay (EMVCo merchant-presented) QR payload builder."""
from .config import BuildConfig
from .crc import crc16_ccitt
from .identifiers import MerchantIdentifier, MerchantKind, classify, identify, sanitize
from .promptpay_encoder import EncodedPayload, format_amount, verify_payload
from .services.builder import BuildResult, build, build_payload
from .services.errors import EncodeError, ErrorCode
from .validation import (
    tax_id_check_digit,
    validate_amount,
    validate_ewallet,
    validate_identifier,
    validate_phone,
    validate_tax_id,
)

__all__ = [
    "BuildConfig",
    "BuildResult",
    "EncodeError",
    "EncodedPayload",
    "ErrorCode",
    "MerchantIdentifier",
    "MerchantKind",
    "build",
    "build_payload",
    "classify",
    "crc16_ccitt",
    "format_amount",
    "identify",
    "sanitize",
    "tax_id_check_digit",
    "validate_amount",
    "validate_ewallet",
    "validate_identifier",
    "validate_phone",
    "validate_tax_id",
    "verify_payload",
]
