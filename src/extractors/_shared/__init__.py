"""
Shared utilities for decoders.

This package provides common functionality used across decoders:
- timestamps: Cocoa timestamp decoding and Unix conversion
- extraction_warnings: Structured warning collection for partial decodes

Design Principle:
    Extractors are self-contained modules, independent from src/core/.
    These utilities are specifically for extractors to maintain modularity.
"""

from .timestamps import (
    cocoa_bytes_to_unix,
    unix_to_datetime,
    COCOA_EPOCH_DIFF,
    UNIX_EPOCH,
)
from .extraction_warnings import (
    ExtractionWarning,
    ExtractionWarningCollector,
)

__all__ = [
    "cocoa_bytes_to_unix",
    "unix_to_datetime",
    "COCOA_EPOCH_DIFF",
    "UNIX_EPOCH",
    "ExtractionWarning",
    "ExtractionWarningCollector",
]
