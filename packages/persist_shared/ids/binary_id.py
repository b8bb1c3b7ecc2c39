"""Fixed 16-byte entity identifiers.

``BinaryId`` is the canonical in-process identity for persisted entities. The
storage form is 16 big-endian bytes; the canonical text form is the 26-char
Crockford Base32 ULID encoding of the same 128 bits.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from uuid import UUID

BINARY_ID_LENGTH = 16

_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
_DECODE_TABLE = {char: index for index, char in enumerate(_ALPHABET)}
_TEXT_LENGTH = 26
_MAX_VALUE = (1 << 128) - 1


@dataclass(frozen=True, slots=True)
class BinaryId:
    """Value-equality wrapper around exactly 16 identifier bytes."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError("BinaryId value must be bytes-like")
        normalized = bytes(self.value)
        if len(normalized) != BINARY_ID_LENGTH:
            raise ValueError(
                f"BinaryId must be exactly {BINARY_ID_LENGTH} bytes, got {len(normalized)}"
            )
        object.__setattr__(self, "value", normalized)

    @classmethod
    def from_bytes(cls, value: bytes | bytearray | memoryview) -> "BinaryId":
        """Build an identifier from its 16-byte storage form."""
        return cls(value)

    @classmethod
    def parse(cls, text: str) -> "BinaryId":
        """Decode the canonical 26-char Base32 form."""
        candidate = text.strip().upper()
        if len(candidate) != _TEXT_LENGTH:
            raise ValueError(f"BinaryId text must be exactly {_TEXT_LENGTH} characters")

        number = 0
        for char in candidate:
            index = _DECODE_TABLE.get(char)
            if index is None:
                raise ValueError(f"Invalid BinaryId character: {char!r}")
            number = (number << 5) | index

        # 26 Base32 chars carry 130 bits; only the low 128 are meaningful.
        if number > _MAX_VALUE:
            raise ValueError("BinaryId text exceeds 128-bit range")
        return cls(number.to_bytes(BINARY_ID_LENGTH, byteorder="big"))

    @classmethod
    def from_uuid(cls, value: UUID) -> "BinaryId":
        """Build an identifier from a ``UUID`` with the same 128 bits."""
        return cls(value.bytes)

    @classmethod
    def generate(cls, *, timestamp_ms: int | None = None) -> "BinaryId":
        """Generate a new time-ordered identifier.

        The high 48 bits hold milliseconds since the Unix epoch and the low
        80 bits are cryptographically secure random entropy.
        """
        ts_ms = int(time.time() * 1000) if timestamp_ms is None else int(timestamp_ms)
        if ts_ms < 0 or ts_ms >= (1 << 48):
            raise ValueError("timestamp_ms out of 48-bit range")
        entropy = int.from_bytes(secrets.token_bytes(10), byteorder="big")
        return cls(((ts_ms << 80) | entropy).to_bytes(BINARY_ID_LENGTH, byteorder="big"))

    def to_bytes(self) -> bytes:
        """Return the 16-byte storage form."""
        return self.value

    def to_uuid(self) -> UUID:
        """Return the identifier as a ``UUID``."""
        return UUID(bytes=self.value)

    def __str__(self) -> str:
        number = int.from_bytes(self.value, byteorder="big")
        chars: list[str] = []
        for _ in range(_TEXT_LENGTH):
            number, remainder = divmod(number, 32)
            chars.append(_ALPHABET[remainder])
        return "".join(reversed(chars))

    def __repr__(self) -> str:
        return f"BinaryId('{self}')"
