"""Text helpers for composing plain-text probe responses."""

from __future__ import annotations

import re

_LINE_START = re.compile(r"^(?=[^\n])", re.MULTILINE)

_QUOTE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def indent(text: str, prefix: str) -> str:
    """Insert ``prefix`` at the start of every non-empty line of ``text``.

    Lines are split on ``\\n`` only; empty lines are left untouched.
    """

    return _LINE_START.sub(prefix.replace("\\", "\\\\"), text)


def quote_bytes(data: bytes) -> str:
    """Render ``data`` as a double-quoted, backslash-escaped string literal.

    Printable characters are kept as-is, control characters become ``\\xNN``
    (or their short escape), other non-printable code points use ``\\u`` /
    ``\\U`` and bytes that are not valid UTF-8 are written as ``\\xNN``.
    """

    text = data.decode("utf-8", errors="surrogateescape")
    out = ['"']
    for char in text:
        code = ord(char)
        if 0xDC80 <= code <= 0xDCFF:
            out.append(f"\\x{code - 0xDC00:02x}")
        elif char in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[char])
        elif char.isprintable():
            out.append(char)
        elif code < 0x80:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


__all__ = ["indent", "quote_bytes"]
