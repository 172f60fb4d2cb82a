"""
Core Enumerations

Centralized enum definitions for consistent typing across the codebase.
Using StrEnum (Python 3.11+) for string-based enums that serialize naturally.
"""

from enum import StrEnum


class ExtractionStatus(StrEnum):
    """Status values for decode operations."""

    OK = "ok"
    PARTIAL = "partial"  # Some records decoded, some skipped


class ErrorPolicy(StrEnum):
    """What the decoder does with a malformed page or cookie record."""

    ABORT = "abort"  # Raise the first error, no partial output
    SKIP = "skip"    # Drop the malformed unit, keep a warning, continue

    @classmethod
    def parse(cls, value: "str | ErrorPolicy") -> "ErrorPolicy":
        """Parse a policy name case-insensitively."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown error policy {value!r} (expected one of: {allowed})") from None


class ArtifactType(StrEnum):
    """Artifact types reported in warnings and statistics."""

    COOKIE = "cookie"
