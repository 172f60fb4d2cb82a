"""
Safari ``Cookies.binarycookies`` decoder.

Pipeline: validate magic -> read page table -> cut page spans -> read each
page's offset table -> slice raw records -> decode fields. Each stage only
reads its own byte range; nothing is copied until the final owned
:class:`CookieRecord` is built.

Malformed pages and records are handled according to
``DecoderConfig.error_policy``:

- ``abort`` (default): the first error is raised, nothing is returned.
- ``skip``: the page or record is dropped, an error-severity warning is
  added to the report and decoding continues.

Container-level problems (bad magic, header or page spans) always raise.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.config import DecoderConfig
from core.enums import ArtifactType, ExtractionStatus
from core.logging import get_logger
from extractors._shared.extraction_warnings import (
    ExtractionWarning,
    ExtractionWarningCollector,
)
from extractors.exceptions import DecodeError

from ._container import PageSpan, parse_header, split_pages, validate_container
from ._fields import decode_record
from ._pages import read_page, split_records
from ._schemas import CookieFlags, CookieRecord

LOGGER = get_logger("extractors.browser.safari.cookies.decoder")

EXTRACTOR_NAME = "safari_cookies"


@dataclass
class DecodeReport:
    """Decoded records plus whatever had to be skipped along the way."""

    records: List[CookieRecord]
    warnings: List[ExtractionWarning] = field(default_factory=list)
    warning_rows: List[Dict[str, Any]] = field(default_factory=list)
    warning_counts: Dict[str, int] = field(default_factory=dict)
    page_count: int = 0
    skipped_pages: int = 0
    skipped_records: int = 0

    @property
    def status(self) -> ExtractionStatus:
        if self.skipped_pages or self.skipped_records:
            return ExtractionStatus.PARTIAL
        return ExtractionStatus.OK


@dataclass
class _PageResult:
    records: List[CookieRecord]
    collector: ExtractionWarningCollector
    skipped_page: bool = False
    skipped_records: int = 0


def _skip(collector: ExtractionWarningCollector, exc: DecodeError) -> None:
    LOGGER.warning("Skipping malformed %s: %s", exc.location, exc)
    collector.add_binary_format_error(
        exc.location,
        str(exc),
        artifact_type=ArtifactType.COOKIE,
        context=exc.context(),
    )


def _decode_page(span: PageSpan, config: DecoderConfig, source_file: Optional[str]) -> _PageResult:
    collector = ExtractionWarningCollector(extractor_name=EXTRACTOR_NAME, source_file=source_file)
    result = _PageResult(records=[], collector=collector)

    try:
        page = read_page(span, collector)
    except DecodeError as exc:
        if not config.skip_malformed:
            raise
        _skip(collector, exc)
        result.skipped_page = True
        return result

    if config.debug:
        LOGGER.debug(
            "Page %d: %d bytes at offset %d, %d cookies, offsets %s",
            span.index, len(span), span.start, page.cookie_count, list(page.offsets),
        )

    for raw in split_records(page):
        try:
            record = decode_record(raw, config.text_encoding, collector)
        except DecodeError as exc:
            if not config.skip_malformed:
                raise
            _skip(collector, exc)
            result.skipped_records += 1
            continue
        if config.debug:
            LOGGER.debug(
                "Page %d record %d: %d bytes, %s=%r domain=%r",
                raw.page_index, raw.record_index, len(raw), record.name, record.value, record.domain,
            )
        result.records.append(record)

    return result


def decode_report(
    buffer: bytes,
    config: Optional[DecoderConfig] = None,
    *,
    source_file: Optional[str] = None,
) -> DecodeReport:
    """
    Decode a binary cookies container into records and warnings.

    Args:
        buffer: Entire file contents
        config: Decoder options (defaults to ``DecoderConfig()``)
        source_file: Name recorded on warnings

    Returns:
        DecodeReport with records in page/record order

    Raises:
        DecodeError: on container errors, or any error under ``abort``
    """
    config = config or DecoderConfig()
    collector = ExtractionWarningCollector(extractor_name=EXTRACTOR_NAME, source_file=source_file)

    validate_container(buffer)
    header = parse_header(buffer)
    if config.debug:
        LOGGER.debug(
            "Container: %d pages, header %d bytes, page sizes %s",
            header.page_count, header.header_size, list(header.page_sizes),
        )
    spans = split_pages(buffer, header, collector)

    if config.max_workers > 1 and len(spans) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            # map() yields in submission order, keeping output deterministic
            results = list(executor.map(lambda s: _decode_page(s, config, source_file), spans))
    else:
        results = [_decode_page(span, config, source_file) for span in spans]

    report = DecodeReport(records=[], page_count=header.page_count)
    for result in results:
        report.records.extend(result.records)
        collector.extend(result.collector)
        report.skipped_pages += int(result.skipped_page)
        report.skipped_records += result.skipped_records
    report.warnings = collector.warnings
    report.warning_rows = collector.to_dicts()
    report.warning_counts = collector.get_counts_by_severity()

    LOGGER.info(
        "Decoded %d cookies from %d pages (%d pages, %d records skipped; warnings %s)",
        len(report.records), header.page_count, report.skipped_pages, report.skipped_records,
        report.warning_counts,
    )
    return report


def decode(buffer: bytes, config: Optional[DecoderConfig] = None) -> List[CookieRecord]:
    """Decode a binary cookies container and return only the records."""
    return decode_report(buffer, config).records


def decode_file(path: Path | str, config: Optional[DecoderConfig] = None) -> DecodeReport:
    """Read a ``Cookies.binarycookies`` file and decode it."""
    path = Path(path)
    return decode_report(path.read_bytes(), config, source_file=str(path))


def get_cookie_stats(cookies: List[CookieRecord]) -> Dict[str, Any]:
    """
    Get statistics about decoded cookies.

    Args:
        cookies: List of CookieRecord objects

    Returns:
        Statistics dictionary
    """
    if not cookies:
        return {
            "total_cookies": 0,
            "unique_domains": 0,
            "secure_count": 0,
            "httponly_count": 0,
            "unknown_flags_count": 0,
            "date_range": None,
        }

    domains = {c.domain for c in cookies}
    accessed = [c.last_accessed for c in cookies if c.last_accessed]

    return {
        "total_cookies": len(cookies),
        "unique_domains": len(domains),
        "secure_count": sum(1 for c in cookies if c.is_secure),
        "httponly_count": sum(1 for c in cookies if c.is_httponly),
        "unknown_flags_count": sum(1 for c in cookies if c.flags is CookieFlags.UNKNOWN),
        "date_range": {
            "earliest": min(accessed).isoformat(),
            "latest": max(accessed).isoformat(),
        } if accessed else None,
    }
