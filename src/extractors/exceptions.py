"""
Exceptions for extractor modules.
"""

from __future__ import annotations

from typing import Optional


class ExtractorError(Exception):
    """Base exception for extractor errors."""
    pass


class DecodeError(ExtractorError):
    """
    Base exception for binary decoding failures.

    Carries where in the container decoding stopped so callers can report
    it (or skip the offending page/record) without re-parsing the message.
    """

    kind = "DecodeError"

    def __init__(
        self,
        message: str,
        *,
        page_index: Optional[int] = None,
        record_index: Optional[int] = None,
        offset: Optional[int] = None,
    ):
        self.page_index = page_index
        self.record_index = record_index
        self.offset = offset
        super().__init__(message)

    @property
    def location(self) -> str:
        """Human-readable position, e.g. ``page[0].record[3]``."""
        parts = []
        if self.page_index is not None:
            parts.append(f"page[{self.page_index}]")
        if self.record_index is not None:
            parts.append(f"record[{self.record_index}]")
        return ".".join(parts) or "container"

    def context(self) -> dict:
        """Location fields as a dict for structured warnings."""
        return {
            "kind": self.kind,
            "page_index": self.page_index,
            "record_index": self.record_index,
            "offset": self.offset,
        }


class InvalidFormatError(DecodeError):
    """Raised when the buffer does not start with the container magic."""

    kind = "InvalidFormat"


class TruncatedHeaderError(DecodeError):
    """Raised when the buffer ends before the header is fully read."""

    kind = "TruncatedHeader"


class InvalidPageCountError(TruncatedHeaderError):
    """Raised when the page count implies a header longer than the buffer."""

    kind = "InvalidPageCount"


class TruncatedPageError(DecodeError):
    """Raised when a page span or page table runs past the available bytes."""

    kind = "TruncatedPage"


class TruncatedCookieError(DecodeError):
    """Raised when a cookie record is shorter than its fixed-field region."""

    kind = "TruncatedCookie"


class OffsetOutOfRangeError(DecodeError):
    """Raised when an offset points outside (or backwards within) its page or record."""

    kind = "OffsetOutOfRange"
