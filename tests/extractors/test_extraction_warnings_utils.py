"""
Test suite for Extraction Warnings shared utilities.
"""

import pytest

from extractors._shared.extraction_warnings import (
    ExtractionWarningCollector,
    CATEGORY_BINARY,
    SEVERITY_ERROR,
    SEVERITY_INFO,
    SEVERITY_WARNING,
    WARNING_TYPE_BINARY_FORMAT_ERROR,
    WARNING_TYPE_TRAILING_DATA,
    WARNING_TYPE_UNKNOWN_ENUM_VALUE,
)


@pytest.fixture
def collector():
    return ExtractionWarningCollector(
        extractor_name="safari_cookies",
        source_file="Cookies.binarycookies",
    )


class TestExtractionWarningCollector:
    """Tests for ExtractionWarningCollector dataclass."""

    def test_collector_initialization(self, collector):
        assert collector.extractor_name == "safari_cookies"
        assert collector.warnings == []
        assert collector.to_dicts() == []

    def test_add_binary_format_error(self, collector):
        collector.add_binary_format_error(
            "page[1].record[2]", "record too short",
            artifact_type="cookie",
            context={"page_index": 1},
        )

        warning = collector.warnings[0]
        assert warning.warning_type == WARNING_TYPE_BINARY_FORMAT_ERROR
        assert warning.severity == SEVERITY_ERROR
        assert warning.category == CATEGORY_BINARY
        assert warning.source_file == "Cookies.binarycookies"
        assert warning.context_json == {"page_index": 1}
        assert collector.get_counts_by_severity()[SEVERITY_ERROR] == 1

    def test_add_unknown_enum_value(self, collector):
        collector.add_unknown_enum_value("cookie_flags", 255)

        warning = collector.warnings[0]
        assert warning.warning_type == WARNING_TYPE_UNKNOWN_ENUM_VALUE
        assert warning.item_value == "255"
        assert warning.severity == SEVERITY_INFO
        assert collector.get_counts_by_severity()[SEVERITY_ERROR] == 0

    def test_add_trailing_data(self, collector):
        collector.add_trailing_data("container", 12)
        warning = collector.warnings[0]
        assert warning.warning_type == WARNING_TYPE_TRAILING_DATA
        assert warning.severity == SEVERITY_WARNING

    def test_counts_by_severity(self, collector):
        collector.add_unknown_enum_value("cookie_flags", 2)
        collector.add_trailing_data("container", 4)
        collector.add_binary_format_error("page[0]", "bad")
        collector.add_binary_format_error("page[1]", "bad")

        assert collector.get_counts_by_severity() == {
            SEVERITY_INFO: 1,
            SEVERITY_WARNING: 1,
            SEVERITY_ERROR: 2,
        }

    def test_extend_keeps_order(self, collector):
        other = ExtractionWarningCollector(extractor_name="safari_cookies")
        collector.add_trailing_data("container", 1)
        other.add_binary_format_error("page[0]", "first")
        other.add_binary_format_error("page[1]", "second")

        collector.extend(other)

        assert [w.item_name for w in collector.warnings] == ["container", "page[0]", "page[1]"]

    def test_warnings_is_a_snapshot(self, collector):
        collector.add_trailing_data("container", 1)
        snapshot = collector.warnings
        collector.add_trailing_data("container", 2)
        assert len(snapshot) == 1
        assert len(collector.warnings) == 2

    def test_to_dicts(self, collector):
        collector.add_binary_format_error("page[0]", "bad")
        rows = collector.to_dicts()
        assert rows[0]["extractor_name"] == "safari_cookies"
        assert rows[0]["item_value"] == "bad"
