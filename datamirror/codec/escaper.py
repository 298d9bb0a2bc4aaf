"""
JSON string escaping for the flat JSON encoder.

Quote, backslash and slash get backslash escapes, the common control characters
their short forms. Anything else below 0x20 or above 0x7F becomes ``\\uXXXX``
(upper-case hex, one escape per UTF-16 code unit).
"""

from __future__ import annotations

from typing import Optional

_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
    "\b": "\\b",
    "\n": "\\n",
    "\t": "\\t",
    "\f": "\\f",
    "\r": "\\r",
}


def _unicode_escape(code_unit: int) -> str:
    return "\\u%04X" % code_unit


def escape(text: Optional[str]) -> str:
    if text is None:
        return ""
    out = []
    for ch in text:
        short = _SHORT_ESCAPES.get(ch)
        if short is not None:
            out.append(short)
            continue
        code = ord(ch)
        if code > 0xFFFF:
            code -= 0x10000
            out.append(_unicode_escape(0xD800 + (code >> 10)))
            out.append(_unicode_escape(0xDC00 + (code & 0x3FF)))
        elif code > 0x7F or code < 0x20:
            out.append(_unicode_escape(code))
        else:
            out.append(ch)
    return "".join(out)


__all__ = ["escape"]
