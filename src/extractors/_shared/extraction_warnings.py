"""
Extraction warnings utilities for decoders.

This module provides utilities for collecting and reporting unknown values,
parse errors, and other findings during decoding. These warnings help
investigators understand which parts of an artifact were skipped or only
partially understood, instead of silently losing them.

Usage:
    from extractors._shared.extraction_warnings import ExtractionWarningCollector

    collector = ExtractionWarningCollector(extractor_name="safari_cookies")
    try:
        ...
    except DecodeError as exc:
        collector.add_binary_format_error(source, str(exc))
    report_warnings = collector.warnings
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# =============================================================================
# Warning Type Constants
# =============================================================================

WARNING_TYPE_UNKNOWN_ENUM_VALUE = "unknown_enum_value"
WARNING_TYPE_BINARY_FORMAT_ERROR = "binary_format_error"
WARNING_TYPE_TRAILING_DATA = "trailing_data"

# Category Constants
CATEGORY_BINARY = "binary"

# Severity Constants
SEVERITY_INFO = "info"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"


# =============================================================================
# Warning Data Class
# =============================================================================

@dataclass
class ExtractionWarning:
    """A single extraction warning record."""

    warning_type: str
    item_name: str
    severity: str = SEVERITY_WARNING
    category: Optional[str] = None
    artifact_type: Optional[str] = None
    source_file: Optional[str] = None
    item_value: Optional[str] = None
    context_json: Optional[Dict[str, Any]] = None

    def to_dict(self, extractor_name: str) -> Dict[str, Any]:
        """Convert to a plain dict for downstream reporting."""
        return {
            "extractor_name": extractor_name,
            "warning_type": self.warning_type,
            "severity": self.severity,
            "category": self.category,
            "artifact_type": self.artifact_type,
            "source_file": self.source_file,
            "item_name": self.item_name,
            "item_value": self.item_value,
            "context_json": self.context_json,
        }


# =============================================================================
# Warning Collector Class
# =============================================================================

@dataclass
class ExtractionWarningCollector:
    """
    Collects extraction warnings for a single decode run.

    One collector is created per decode. Page workers get their own
    collector and are merged back in page order with :meth:`extend`, so
    the final warning list is deterministic even when pages are decoded
    concurrently.

    Example:
        collector = ExtractionWarningCollector(extractor_name="safari_cookies")
        collector.add_binary_format_error("Cookies.binarycookies", "record 3 truncated")
        rows = collector.to_dicts()
    """

    extractor_name: str
    source_file: Optional[str] = None
    _warnings: List[ExtractionWarning] = field(default_factory=list)

    def add_warning(
        self,
        warning_type: str,
        item_name: str,
        *,
        severity: str = SEVERITY_WARNING,
        category: Optional[str] = None,
        artifact_type: Optional[str] = None,
        source_file: Optional[str] = None,
        item_value: Optional[str] = None,
        context_json: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Add a warning to the collection.

        Args:
            warning_type: Type of warning (use WARNING_TYPE_* constants)
            item_name: Name of the unknown/problematic item
            severity: info/warning/error (default: warning)
            category: Category (use CATEGORY_* constants)
            artifact_type: Artifact type (e.g., "cookie")
            source_file: Source file path, defaults to the collector's
            item_value: Value or additional details
            context_json: Additional context as dict
        """
        self._warnings.append(ExtractionWarning(
            warning_type=warning_type,
            item_name=item_name,
            severity=severity,
            category=category,
            artifact_type=artifact_type,
            source_file=source_file or self.source_file,
            item_value=item_value,
            context_json=context_json,
        ))

    def add_unknown_enum_value(
        self,
        enum_name: str,
        value: Any,
        *,
        artifact_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Convenience method for unknown enum/constant value warnings.

        Args:
            enum_name: Name of the enum field (e.g., "cookie_flags")
            value: The unknown value
            artifact_type: Artifact type being decoded
            context: Additional context
        """
        self.add_warning(
            warning_type=WARNING_TYPE_UNKNOWN_ENUM_VALUE,
            item_name=enum_name,
            item_value=str(value),
            severity=SEVERITY_INFO,
            category=CATEGORY_BINARY,
            artifact_type=artifact_type,
            context_json=context,
        )

    def add_binary_format_error(
        self,
        item_name: str,
        error: str,
        *,
        artifact_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Convenience method for binary format parse error warnings.

        Args:
            item_name: The structure that failed (e.g., "page[0].record[2]")
            error: Error message
            artifact_type: Artifact type being decoded
            context: Offsets and indexes describing where decoding failed
        """
        self.add_warning(
            warning_type=WARNING_TYPE_BINARY_FORMAT_ERROR,
            item_name=item_name,
            item_value=error,
            severity=SEVERITY_ERROR,
            category=CATEGORY_BINARY,
            artifact_type=artifact_type,
            context_json=context,
        )

    def add_trailing_data(
        self,
        item_name: str,
        extra_bytes: int,
        *,
        artifact_type: Optional[str] = None,
    ) -> None:
        """Convenience method for bytes past the declared end of a structure."""
        self.add_warning(
            warning_type=WARNING_TYPE_TRAILING_DATA,
            item_name=item_name,
            item_value=f"{extra_bytes} bytes",
            severity=SEVERITY_WARNING,
            category=CATEGORY_BINARY,
            artifact_type=artifact_type,
            context_json={"extra_bytes": extra_bytes},
        )

    def extend(self, other: "ExtractionWarningCollector") -> None:
        """Append every warning from another collector, keeping its order."""
        self._warnings.extend(other._warnings)

    @property
    def warnings(self) -> List[ExtractionWarning]:
        """Snapshot of the collected warnings."""
        return list(self._warnings)

    def get_counts_by_severity(self) -> Dict[str, int]:
        """Get warning counts by severity level."""
        counts = {SEVERITY_INFO: 0, SEVERITY_WARNING: 0, SEVERITY_ERROR: 0}
        for w in self._warnings:
            counts[w.severity] = counts.get(w.severity, 0) + 1
        return counts

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Serialize all warnings, tagged with the collector's extractor name."""
        return [w.to_dict(self.extractor_name) for w in self._warnings]
