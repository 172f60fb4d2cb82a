"""
Tests for binary cookies page framing.

Tests cover:
- Little-endian cookie count and offset table
- Offset validation (range, ordering)
- Raw record slicing
"""

import struct

import pytest

from extractors._shared.extraction_warnings import (
    ExtractionWarningCollector,
    SEVERITY_ERROR,
    WARNING_TYPE_UNKNOWN_ENUM_VALUE,
)
from extractors.browser.safari.cookies import (
    PageSpan,
    read_page,
    split_records,
)
from extractors.exceptions import OffsetOutOfRangeError, TruncatedPageError
from tests.fixtures.binarycookies import build_page, build_record


def _span(page: bytes, index: int = 0) -> PageSpan:
    return PageSpan(index=index, start=0, end=len(page), data=memoryview(page))


class TestReadPage:
    """Test cookie count and offset table decoding."""

    def test_offset_table_matches_count(self):
        records = [build_record(name=f"n{i}") for i in range(3)]
        page = read_page(_span(build_page(records)))

        assert page.cookie_count == 3
        assert len(page.offsets) == page.cookie_count
        assert list(page.offsets) == sorted(set(page.offsets))

    def test_count_with_hex_letters(self):
        """A count of 10 (0x0a) decodes as ten, not as a decimal misread."""
        records = [build_record(name=f"n{i}") for i in range(10)]
        page = read_page(_span(build_page(records)))
        assert page.cookie_count == 10

    def test_empty_page(self):
        page = read_page(_span(build_page([])))
        assert page.cookie_count == 0
        assert split_records(page) == []

    def test_page_too_small_for_header(self):
        with pytest.raises(TruncatedPageError):
            read_page(_span(b"\x00\x00\x01\x00\x01"))

    def test_offset_table_past_page_end(self):
        data = b"\x00\x00\x01\x00" + struct.pack("<I", 50) + b"\x00" * 12
        with pytest.raises(TruncatedPageError):
            read_page(_span(data))

    def test_offset_outside_page(self):
        record = build_record()
        data = build_page([record], offsets=[10_000])
        with pytest.raises(OffsetOutOfRangeError) as excinfo:
            read_page(_span(data, index=2))
        assert excinfo.value.page_index == 2
        assert excinfo.value.record_index == 0
        assert excinfo.value.offset == 10_000

    def test_offsets_not_increasing(self):
        first, second = build_record(name="x"), build_record(name="y")
        start = 8 + 4 * 2 + 4
        data = build_page([first, second], offsets=[start + len(first), start])
        with pytest.raises(OffsetOutOfRangeError) as excinfo:
            read_page(_span(data))
        assert excinfo.value.record_index == 1

    def test_duplicate_offsets(self):
        record = build_record()
        start = 8 + 4 * 2 + 4
        data = build_page([record, record], offsets=[start, start])
        with pytest.raises(OffsetOutOfRangeError):
            read_page(_span(data))

    def test_unexpected_marker_is_only_a_warning(self):
        collector = ExtractionWarningCollector(extractor_name="test")
        data = build_page([build_record()], marker=b"\xde\xad\xbe\xef")

        page = read_page(_span(data), collector)

        assert page.cookie_count == 1
        assert collector.warnings[0].warning_type == WARNING_TYPE_UNKNOWN_ENUM_VALUE
        assert collector.warnings[0].item_value == "deadbeef"
        assert collector.get_counts_by_severity()[SEVERITY_ERROR] == 0


class TestSplitRecords:
    """Test slicing a page into raw records."""

    def test_records_span_consecutive_offsets(self):
        records = [build_record(name="first"), build_record(name="second-longer")]
        page = read_page(_span(build_page(records)))

        raws = split_records(page)

        assert [bytes(raw.data) for raw in raws] == records
        assert [raw.record_index for raw in raws] == [0, 1]
        assert raws[1].page_offset == page.offsets[1]

    def test_last_record_runs_to_end_of_page(self):
        records = [build_record(name="x"), build_record(name="y")]
        tail = b"\xff" * 7
        page = read_page(_span(build_page(records) + tail))

        raws = split_records(page)

        assert bytes(raws[0].data) == records[0]
        assert bytes(raws[-1].data) == records[1] + tail
