"""CRC16-CCITT checksum for PromptPay payloads."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF

# Tag 63 with its fixed length; the checksum covers this header too.
CRC_FIELD_PREFIX = "6304"


def crc16_value(data: bytes) -> int:
    """Return the raw 16-bit register (no final XOR) for ``data``."""

    checksum = CRC16_INIT
    for byte in data:
        checksum ^= byte << 8
        for _ in range(8):
            if checksum & 0x8000:
                checksum = (checksum << 1) ^ CRC16_POLY
            else:
                checksum <<= 1
            checksum &= 0xFFFF
    return checksum


def crc16_ccitt(data: str) -> str:
    """Compute CRC16-CCITT (0x1021) for EMV payload strings as 4 uppercase hex digits."""

    return f"{crc16_value(data.encode('utf-8')):04X}"


def append_crc(body: str) -> tuple[str, str]:
    """Append the tag 63 header and checksum to a payload body.

    Returns the completed payload and the 4-digit checksum.
    """

    crc_input = f"{body}{CRC_FIELD_PREFIX}"
    crc = crc16_ccitt(crc_input)
    return f"{crc_input}{crc}", crc
