"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .services.errors import err_encoding_overflow

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def __post_init__(self) -> None:
        if len(self.tag) != 2 or not self.tag.isdigit():
            raise ValueError(f"TLV tag must be two decimal digits, got {self.tag!r}")

    @property
    def length(self) -> int:
        return len(self.value.encode("utf-8"))

    def serialize(self) -> str:
        length = self.length
        if length > MAX_VALUE_LENGTH:
            raise err_encoding_overflow(f"Tag {self.tag} value is {length} bytes, limit is {MAX_VALUE_LENGTH}")
        return f"{self.tag}{length:02d}{self.value}"


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string, preserving order."""

    return "".join(item.serialize() for item in items)


def parse_tlv(payload: str) -> Iterator[TLVItem]:
    """Parse TLV payload string into TLV items."""

    idx = 0
    total = len(payload)
    while idx + 4 <= total:
        tag = payload[idx : idx + 2]
        length_text = payload[idx + 2 : idx + 4]
        if not length_text.isdigit():
            raise ValueError(f"Invalid TLV length {length_text!r} at offset {idx}")
        length = int(length_text)
        value_start = idx + 4
        value_end = value_start + length
        if value_end > total:
            raise ValueError("Invalid TLV length exceeds payload")
        value = payload[value_start:value_end]
        yield TLVItem(tag=tag, value=value)
        idx = value_end
    if idx != total:
        raise ValueError("Dangling TLV data detected")
