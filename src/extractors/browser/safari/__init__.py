"""
Safari Browser Family Decoders.

Safari is Apple's web browser on macOS, iOS and iPadOS.
Uses WebKit engine with Apple-specific data formats:
- Cocoa timestamps (seconds since 2001-01-01)
- Binary cookies format (Cookies.binarycookies)
"""

from . import cookies

__all__ = ["cookies"]
