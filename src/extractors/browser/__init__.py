"""
Browser decoders organized by browser family.

Structure:
    browser/
    └── safari/      # Safari (WebKit engine, macOS / iOS / iPadOS)

Usage:
    from extractors.browser.safari.cookies import decode
"""

from . import safari

__all__ = ['safari']
