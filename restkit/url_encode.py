"""Percent-encoding of URL components."""

from __future__ import annotations

import string

_UNRESERVED = frozenset(
    (string.ascii_letters + string.digits + "-_.!~*'()/").encode("ascii")
)


def url_encode(src: str | bytes) -> str:
    """Percent-encode every byte outside the unreserved set.

    Text is encoded as UTF-8 first. Hex digits are upper case.
    """
    data = src.encode("utf-8") if isinstance(src, str) else bytes(src)
    return "".join(
        chr(byte) if byte in _UNRESERVED else f"%{byte:02X}" for byte in data
    )