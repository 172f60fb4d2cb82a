"""Container-level framing: magic check, header table and page spans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING

from core.enums import ArtifactType
from core.logging import get_logger
from extractors.exceptions import (
    InvalidFormatError,
    InvalidPageCountError,
    TruncatedHeaderError,
    TruncatedPageError,
)

from ._schemas import CONTAINER_PREFIX_SIZE, MAGIC, PAGE_SIZE_ENTRY, U32_BE

if TYPE_CHECKING:
    from extractors._shared.extraction_warnings import ExtractionWarningCollector

LOGGER = get_logger("extractors.browser.safari.cookies.container")


@dataclass(frozen=True)
class ContainerHeader:
    """Page table read from the start of the container."""

    page_count: int
    page_sizes: Tuple[int, ...]

    @property
    def header_size(self) -> int:
        return CONTAINER_PREFIX_SIZE + PAGE_SIZE_ENTRY * self.page_count

    @property
    def declared_size(self) -> int:
        """Total container length the header claims."""
        return self.header_size + sum(self.page_sizes)


@dataclass(frozen=True)
class PageSpan:
    """A page's byte range, viewed (not copied) from the container buffer."""

    index: int
    start: int
    end: int
    data: memoryview

    def __len__(self) -> int:
        return self.end - self.start


def validate_container(buffer: bytes) -> None:
    """Reject anything that is not a binary cookies container."""
    if len(buffer) < CONTAINER_PREFIX_SIZE:
        raise InvalidFormatError(
            f"Buffer too small for a binary cookies header ({len(buffer)} bytes)",
            offset=0,
        )
    magic = bytes(buffer[:len(MAGIC)])
    if magic != MAGIC:
        raise InvalidFormatError(
            f"Not a binary cookies file: magic {magic!r}, expected {MAGIC!r}",
            offset=0,
        )


def parse_header(buffer: bytes) -> ContainerHeader:
    """Read the page count and page size table."""
    if len(buffer) < CONTAINER_PREFIX_SIZE:
        raise TruncatedHeaderError(
            f"Header needs {CONTAINER_PREFIX_SIZE} bytes, buffer has {len(buffer)}",
            offset=0,
        )

    page_count = U32_BE.unpack_from(buffer, 4)[0]
    header_size = CONTAINER_PREFIX_SIZE + PAGE_SIZE_ENTRY * page_count
    if header_size > len(buffer):
        raise InvalidPageCountError(
            f"Page count {page_count} needs a {header_size}-byte header, "
            f"buffer has {len(buffer)} bytes",
            offset=4,
        )

    page_sizes = tuple(
        U32_BE.unpack_from(buffer, CONTAINER_PREFIX_SIZE + PAGE_SIZE_ENTRY * i)[0]
        for i in range(page_count)
    )
    return ContainerHeader(page_count=page_count, page_sizes=page_sizes)


def split_pages(
    buffer: bytes,
    header: ContainerHeader,
    warning_collector: Optional["ExtractionWarningCollector"] = None,
) -> List[PageSpan]:
    """
    Cut the payload after the header into page spans.

    Every page but the last is exactly its declared size. The last page runs
    to the end of the buffer: real files carry a checksum and footer after
    the pages, so extra bytes are reported as a warning instead of an error.
    """
    view = memoryview(buffer)
    total = len(buffer)
    cursor = header.header_size
    pages: List[PageSpan] = []

    for index, size in enumerate(header.page_sizes):
        is_last = index == header.page_count - 1
        if cursor + size > total:
            raise TruncatedPageError(
                f"Page {index} declares {size} bytes at offset {cursor}, "
                f"only {total - cursor} remain",
                page_index=index,
                offset=cursor,
            )
        end = total if is_last else cursor + size
        pages.append(PageSpan(index=index, start=cursor, end=end, data=view[cursor:end]))
        cursor += size

    extra = total - header.declared_size
    if extra > 0:
        LOGGER.warning(
            "%d bytes beyond the declared container size (%d); "
            "attached to the last page", extra, header.declared_size,
        )
        if warning_collector:
            warning_collector.add_trailing_data("container", extra, artifact_type=ArtifactType.COOKIE)

    return pages
