"""Formatting of option and literal values into schema tokens."""

from __future__ import annotations

import io
import math
from typing import TYPE_CHECKING

from protowrite.models import MessageLiteral

if TYPE_CHECKING:
    from protowrite.indent import IndentContext

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def quote(s: str) -> str:
    """Return `s` as a double-quoted proto string literal."""
    out = []
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\x{ord(ch):02x}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def format_value(value, ctx: IndentContext, owner: str = "") -> str:
    """Render an option or literal value as it appears after `=` or `:`.

    Message literals are rendered recursively at the depth of `ctx`.
    Strings are emitted verbatim; quoting them is up to the caller.
    """
    if isinstance(value, MessageLiteral):
        # Imported lazily: the encoder depends on this module.
        from protowrite.encoder import encode_message_literal

        buf = io.StringIO()
        encode_message_literal(value, ctx, buf, owner)
        return buf.getvalue()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        return repr(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"unsupported value type {type(value).__name__!r}")
