"""Field extraction for a single raw cookie record."""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

from core.enums import ArtifactType
from core.logging import get_logger
from extractors._shared.timestamps import cocoa_bytes_to_unix, unix_to_datetime
from extractors.exceptions import OffsetOutOfRangeError, TruncatedCookieError

from ._pages import RawCookieRecord
from ._schemas import (
    FIELD_DOMAIN_OFFSET,
    FIELD_EXPIRES,
    FIELD_FLAGS,
    FIELD_LAST_ACCESSED,
    FIELD_NAME_OFFSET,
    FIELD_PATH_OFFSET,
    FIELD_SIZE,
    FIELD_VALUE_OFFSET,
    MIN_RECORD_SIZE,
    U32_LE,
    CookieFlags,
    CookieRecord,
)

if TYPE_CHECKING:
    from datetime import datetime

    from extractors._shared.extraction_warnings import ExtractionWarningCollector

LOGGER = get_logger("extractors.browser.safari.cookies.fields")


def _u32(data: memoryview, field: Tuple[int, int]) -> int:
    return U32_LE.unpack_from(data, field[0])[0]


def _timestamp(data: memoryview, field: Tuple[int, int]) -> Optional["datetime"]:
    unix_seconds = cocoa_bytes_to_unix(data[field[0]:field[1]])
    if unix_seconds is None:
        return None
    return unix_to_datetime(unix_seconds)


def read_cstring(data: memoryview, offset: int, encoding: str = "utf-8") -> str:
    """
    Read a NUL-terminated string starting at ``offset``.

    The scan never leaves ``data``: when no terminator is found the rest of
    the record is the value.
    """
    chunk = bytes(data[offset:])
    end = chunk.find(b"\x00")
    if end >= 0:
        chunk = chunk[:end]
    return chunk.decode(encoding, errors="replace")


def decode_record(
    raw: RawCookieRecord,
    encoding: str = "utf-8",
    warning_collector: Optional["ExtractionWarningCollector"] = None,
) -> CookieRecord:
    """Decode the fixed fields and strings of one cookie record."""
    data = raw.data
    length = len(data)
    if length < MIN_RECORD_SIZE:
        raise TruncatedCookieError(
            f"Cookie record is {length} bytes, needs at least {MIN_RECORD_SIZE}",
            page_index=raw.page_index,
            record_index=raw.record_index,
            offset=raw.page_offset,
        )

    text = {}
    for name, field in (
        ("domain", FIELD_DOMAIN_OFFSET),
        ("name", FIELD_NAME_OFFSET),
        ("path", FIELD_PATH_OFFSET),
        ("value", FIELD_VALUE_OFFSET),
    ):
        offset = _u32(data, field)
        if offset >= length:
            raise OffsetOutOfRangeError(
                f"{name} offset {offset} is outside the {length}-byte record",
                page_index=raw.page_index,
                record_index=raw.record_index,
                offset=offset,
            )
        text[name] = read_cstring(data, offset, encoding)

    raw_flags = _u32(data, FIELD_FLAGS)
    flags = CookieFlags.from_raw(raw_flags)
    if flags is CookieFlags.UNKNOWN:
        LOGGER.debug(
            "Unknown flags 0x%x in page %d record %d",
            raw_flags, raw.page_index, raw.record_index,
        )
        if warning_collector:
            warning_collector.add_unknown_enum_value(
                "cookie_flags", raw_flags,
                artifact_type=ArtifactType.COOKIE,
                context={"page_index": raw.page_index, "record_index": raw.record_index},
            )

    return CookieRecord(
        size=_u32(data, FIELD_SIZE),
        name=text["name"],
        value=text["value"],
        domain=text["domain"],
        path=text["path"],
        flags=flags,
        raw_flags=raw_flags,
        expires=_timestamp(data, FIELD_EXPIRES),
        last_accessed=_timestamp(data, FIELD_LAST_ACCESSED),
        page_index=raw.page_index,
        record_index=raw.record_index,
    )
