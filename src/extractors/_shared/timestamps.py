"""
Timestamp conversion utilities for extractors.

These are PURE FUNCTIONS with no side effects.
Decoders call these directly - no abstraction layers.

Formats supported:
- Unix: Seconds since 1970-01-01
- Cocoa: Seconds since 2001-01-01 (Safari/macOS), stored as a raw 8-byte
  little-endian IEEE-754 double

Stored instants are not range-checked: dates before 1970 or far in the
future are returned as-is. Only values ``datetime`` cannot represent map
to None.
"""

from __future__ import annotations

import math
import struct
from datetime import datetime, timedelta, timezone
from typing import Optional

# Constants for timestamp epoch calculations
COCOA_EPOCH_DIFF = 978307200     # Seconds between 1970-01-01 and 2001-01-01
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_COCOA_DOUBLE = struct.Struct("<d")


def cocoa_bytes_to_unix(raw: bytes) -> Optional[int]:
    """
    Convert a raw Cocoa timestamp field to Unix seconds.

    The field is 8 bytes holding a little-endian IEEE-754 double with the
    number of seconds since 2001-01-01 00:00:00 UTC. Fractional seconds are
    truncated toward zero before the epoch offset is applied, so the result
    is always a whole second count.

    Args:
        raw: Exactly 8 bytes (bytes, bytearray or memoryview)

    Returns:
        Unix seconds, or None when the stored double is NaN or infinite

    Raises:
        ValueError: if ``raw`` is not 8 bytes long

    Example:
        >>> cocoa_bytes_to_unix(bytes(8))
        978307200
    """
    if len(raw) != _COCOA_DOUBLE.size:
        raise ValueError(f"Cocoa timestamp needs 8 bytes, got {len(raw)}")

    seconds = _COCOA_DOUBLE.unpack(raw)[0]
    if not math.isfinite(seconds):
        return None
    return int(seconds) + COCOA_EPOCH_DIFF


def unix_to_datetime(timestamp: int) -> Optional[datetime]:
    """
    Convert Unix seconds to an aware UTC datetime.

    Zero, negative and far-future values are all valid instants. The
    arithmetic is done on the epoch directly so pre-1970 values work on
    every platform, unlike ``datetime.fromtimestamp``.

    Args:
        timestamp: Unix timestamp (seconds since 1970)

    Returns:
        datetime in UTC, or None if outside years 1..9999
    """
    try:
        return UNIX_EPOCH + timedelta(seconds=timestamp)
    except OverflowError:
        return None
