"""
Safari cookies - decoder for ``Cookies.binarycookies`` containers.

Usage:
    from extractors.browser.safari.cookies import decode, decode_file

    records = decode(buffer)
    report = decode_file("Cookies.binarycookies", DecoderConfig(error_policy="skip"))
"""

from ._container import ContainerHeader, PageSpan, parse_header, split_pages, validate_container
from ._fields import decode_record, read_cstring
from ._pages import Page, RawCookieRecord, read_page, split_records
from ._schemas import CookieFlags, CookieRecord, ROW_FIELDS
from .decoder import DecodeReport, decode, decode_file, decode_report, get_cookie_stats

__all__ = [
    "ContainerHeader",
    "CookieFlags",
    "CookieRecord",
    "DecodeReport",
    "Page",
    "PageSpan",
    "RawCookieRecord",
    "ROW_FIELDS",
    "decode",
    "decode_file",
    "decode_record",
    "decode_report",
    "get_cookie_stats",
    "parse_header",
    "read_cstring",
    "read_page",
    "split_pages",
    "split_records",
    "validate_container",
]
