"""Page-level framing: cookie count, offset table and raw record slices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING

from core.enums import ArtifactType
from core.logging import get_logger
from extractors.exceptions import OffsetOutOfRangeError, TruncatedPageError

from ._container import PageSpan
from ._schemas import PAGE_MARKER, PAGE_OFFSET_ENTRY, PAGE_PREFIX_SIZE, U32_LE

if TYPE_CHECKING:
    from extractors._shared.extraction_warnings import ExtractionWarningCollector

LOGGER = get_logger("extractors.browser.safari.cookies.pages")


@dataclass(frozen=True)
class Page:
    """A page span with its decoded offset table."""

    span: PageSpan
    cookie_count: int
    offsets: Tuple[int, ...]

    @property
    def index(self) -> int:
        return self.span.index


@dataclass(frozen=True)
class RawCookieRecord:
    """Undecoded bytes of one cookie, viewed from its page."""

    page_index: int
    record_index: int
    page_offset: int
    data: memoryview

    def __len__(self) -> int:
        return len(self.data)


def read_page(
    span: PageSpan,
    warning_collector: Optional["ExtractionWarningCollector"] = None,
) -> Page:
    """Decode a page's cookie count and offset table and check the offsets."""
    data = span.data
    size = len(data)
    if size < PAGE_PREFIX_SIZE:
        raise TruncatedPageError(
            f"Page {span.index} is {size} bytes, too small for its header",
            page_index=span.index,
            offset=span.start,
        )

    marker = bytes(data[:4])
    if marker != PAGE_MARKER:
        LOGGER.info("Page %d has unexpected marker %s", span.index, marker.hex())
        if warning_collector:
            warning_collector.add_unknown_enum_value(
                "page_marker", marker.hex(),
                artifact_type=ArtifactType.COOKIE,
                context={"page_index": span.index},
            )

    # Same little-endian u32 decoding as every other field inside a page
    cookie_count = U32_LE.unpack_from(data, 4)[0]
    table_end = PAGE_PREFIX_SIZE + PAGE_OFFSET_ENTRY * cookie_count
    if table_end > size:
        raise TruncatedPageError(
            f"Page {span.index} declares {cookie_count} cookies but the offset "
            f"table would end at byte {table_end} of {size}",
            page_index=span.index,
            offset=span.start + 4,
        )

    offsets = tuple(
        U32_LE.unpack_from(data, PAGE_PREFIX_SIZE + PAGE_OFFSET_ENTRY * i)[0]
        for i in range(cookie_count)
    )

    previous = -1
    for record_index, offset in enumerate(offsets):
        if offset >= size:
            raise OffsetOutOfRangeError(
                f"Cookie offset {offset} is outside page {span.index} ({size} bytes)",
                page_index=span.index,
                record_index=record_index,
                offset=offset,
            )
        if offset <= previous:
            raise OffsetOutOfRangeError(
                f"Cookie offset {offset} does not follow previous offset {previous}",
                page_index=span.index,
                record_index=record_index,
                offset=offset,
            )
        previous = offset

    return Page(span=span, cookie_count=cookie_count, offsets=offsets)


def split_records(page: Page) -> List[RawCookieRecord]:
    """Slice a page into raw records; the last record runs to end of page."""
    data = page.span.data
    bounds = page.offsets + (len(data),)
    return [
        RawCookieRecord(
            page_index=page.index,
            record_index=k,
            page_offset=bounds[k],
            data=data[bounds[k]:bounds[k + 1]],
        )
        for k in range(page.cookie_count)
    ]
