"""
Layout constants and record types for Safari ``Cookies.binarycookies``.

Container layout (header integers are big-endian, everything inside a page
is little-endian):

    [0:4]                 magic "cook"
    [4:8]                 page count (u32 BE)
    [8:8+4*N]             page sizes (u32 BE each)
    ...                   N page payloads

Page layout:

    [0:4]                 page marker, 00 00 01 00 in every known file
    [4:8]                 cookie count (u32 LE)
    [8:8+4*C]             cookie offsets from page start (u32 LE each)
    ...                   cookie records

Cookie record fixed-field region (56 bytes, all little-endian):

    [0:4]   size          [16:20] domain offset   [40:48] expires (f64)
    [8:12]  flags         [20:24] name offset     [48:56] last accessed (f64)
                          [24:28] path offset
                          [28:32] value offset

Text fields are NUL-terminated strings located by their offsets, which are
relative to the start of the record.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Dict, Optional, Tuple

MAGIC = b"cook"
CONTAINER_PREFIX_SIZE = 8  # magic + page count
PAGE_SIZE_ENTRY = 4
PAGE_PREFIX_SIZE = 8  # marker + cookie count
PAGE_OFFSET_ENTRY = 4
PAGE_MARKER = b"\x00\x00\x01\x00"
MIN_RECORD_SIZE = 56

U32_BE = struct.Struct(">I")
U32_LE = struct.Struct("<I")

# Record field positions: (start, end)
FIELD_SIZE = (0, 4)
FIELD_FLAGS = (8, 12)
FIELD_DOMAIN_OFFSET = (16, 20)
FIELD_NAME_OFFSET = (20, 24)
FIELD_PATH_OFFSET = (24, 28)
FIELD_VALUE_OFFSET = (28, 32)
FIELD_EXPIRES = (40, 48)
FIELD_LAST_ACCESSED = (48, 56)

# Column order used by tabular (CSV) consumers
ROW_FIELDS: Tuple[str, ...] = (
    "name", "value", "domain", "path", "expires", "lastAccessed", "flags",
)


class CookieFlags(StrEnum):
    """Secure/HttpOnly attribute combinations, labelled as the tool prints them."""

    NONE = "None"
    SECURE = "Secure"
    HTTP_ONLY = "HttpOnly"
    SECURE_HTTP_ONLY = "Secure; HttpOnly"
    UNKNOWN = "Unknown"

    @classmethod
    def from_raw(cls, raw: int) -> "CookieFlags":
        """Map the raw flags word; anything unrecognised is UNKNOWN."""
        return _FLAG_VALUES.get(raw, cls.UNKNOWN)


_FLAG_VALUES = {
    0x0: CookieFlags.NONE,
    0x1: CookieFlags.SECURE,
    0x4: CookieFlags.HTTP_ONLY,
    0x5: CookieFlags.SECURE_HTTP_ONLY,
}


@dataclass(frozen=True)
class CookieRecord:
    """
    A decoded cookie.

    Owns all of its data: nothing here references the container buffer, so
    records stay valid after the buffer is released.
    """

    size: int
    name: str
    value: str
    domain: str
    path: str
    flags: CookieFlags
    raw_flags: int
    expires: Optional[datetime]
    last_accessed: Optional[datetime]
    page_index: int = 0
    record_index: int = 0

    @property
    def is_secure(self) -> bool:
        return self.flags in (CookieFlags.SECURE, CookieFlags.SECURE_HTTP_ONLY)

    @property
    def is_httponly(self) -> bool:
        return self.flags in (CookieFlags.HTTP_ONLY, CookieFlags.SECURE_HTTP_ONLY)

    @property
    def expires_utc(self) -> Optional[str]:
        return self.expires.isoformat() if self.expires else None

    @property
    def last_accessed_utc(self) -> Optional[str]:
        return self.last_accessed.isoformat() if self.last_accessed else None

    def to_dict(self) -> Dict[str, Any]:
        """All fields, keyed the way the JSON/XML consumers expect."""
        return {
            "size": self.size,
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "flags": str(self.flags),
            "expires": self.expires_utc,
            "lastAccessed": self.last_accessed_utc,
        }

    def to_row(self) -> Tuple[Any, ...]:
        """Subset of fields in ``ROW_FIELDS`` order (no size)."""
        data = self.to_dict()
        return tuple(data[key] for key in ROW_FIELDS)
