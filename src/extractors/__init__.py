"""
Artifact decoders for forensic analysis.

Folder Structure:
- browser/         Browser family decoders (safari/)
- _shared/         Shared utilities (timestamps, extraction_warnings)
"""

from .exceptions import (
    ExtractorError,
    DecodeError,
    InvalidFormatError,
    TruncatedHeaderError,
    InvalidPageCountError,
    TruncatedPageError,
    TruncatedCookieError,
    OffsetOutOfRangeError,
)

from . import browser
