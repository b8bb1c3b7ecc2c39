"""High-resolution timestamps stored as signed 64-bit tick counts.

One tick is 100 nanoseconds; tick zero is 0001-01-01T00:00:00 UTC. Databases
store the raw tick count in a BIGINT column.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

TICKS_PER_MICROSECOND = 10
TICKS_PER_SECOND = 10_000_000
TICKS_PER_DAY = TICKS_PER_SECOND * 86_400

_EPOCH = datetime(1, 1, 1, tzinfo=UTC)
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_SIGN_BIT = 1 << 63


@dataclass(frozen=True, order=True, slots=True)
class PreciseTimestamp:
    """Point in time with 100ns resolution; equality is exact tick equality."""

    ticks: int

    def __post_init__(self) -> None:
        if isinstance(self.ticks, bool) or not isinstance(self.ticks, int):
            raise TypeError("PreciseTimestamp ticks must be an int")
        if not _INT64_MIN <= self.ticks <= _INT64_MAX:
            raise ValueError("PreciseTimestamp ticks must fit in a signed 64-bit integer")

    @classmethod
    def from_datetime(cls, value: datetime) -> "PreciseTimestamp":
        """Convert a datetime; naive values are interpreted as UTC."""
        aware = value.replace(tzinfo=UTC) if value.tzinfo is None else value
        delta = aware - _EPOCH
        return cls(
            delta.days * TICKS_PER_DAY
            + delta.seconds * TICKS_PER_SECOND
            + delta.microseconds * TICKS_PER_MICROSECOND
        )

    @classmethod
    def now(cls) -> "PreciseTimestamp":
        """Return the current UTC time."""
        return cls.from_datetime(datetime.now(UTC))

    @classmethod
    def from_sortable_bytes(cls, value: bytes) -> "PreciseTimestamp":
        """Decode the 8-byte order-preserving form produced by ``to_sortable_bytes``."""
        if len(value) != 8:
            raise ValueError("PreciseTimestamp bytes must be exactly 8 bytes")
        return cls(int.from_bytes(value, byteorder="big") - _SIGN_BIT)

    def to_datetime(self) -> datetime:
        """Return an aware UTC datetime; sub-microsecond ticks are truncated.

        Raises ``OverflowError`` when the tick count falls outside the range
        ``datetime`` can represent.
        """
        return _EPOCH + timedelta(microseconds=self.ticks // TICKS_PER_MICROSECOND)

    def to_sortable_bytes(self) -> bytes:
        """Encode as 8 big-endian bytes whose byte order matches tick order."""
        return (self.ticks + _SIGN_BIT).to_bytes(8, byteorder="big")

    def __int__(self) -> int:
        return self.ticks
