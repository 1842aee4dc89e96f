"""Decoder encodings.

Each supported encoding is a member of :class:`Encoding` with a total
``encode``/``decode`` pair. Names that match nothing resolve to
``Encoding.UNKNOWN``, which passes data through unchanged.
"""

from __future__ import annotations

import base64
import binascii
import enum
import re
from urllib.parse import quote, unquote

from burp_mcp.core.errors import TransformError

# Characters encodeURIComponent leaves alone, besides alphanumerics
_URL_SAFE = "-_.!~*'()"
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_B64_WHITESPACE = re.compile(r"[\t\n\f\r ]+")


class Encoding(enum.Enum):
    BASE64 = "base64"
    URL = "url"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, name: str) -> Encoding:
        """Resolve an encoding name, case-insensitively."""
        key = name.strip().lower()
        for member in cls:
            if member is not cls.UNKNOWN and member.value == key:
                return member
        return cls.UNKNOWN

    def encode(self, data: str) -> str:
        if self is Encoding.BASE64:
            return base64.b64encode(data.encode("utf-8")).decode("ascii")
        if self is Encoding.URL:
            return quote(data, safe=_URL_SAFE)
        return data

    def decode(self, data: str) -> str:
        """Decode *data*.

        Raises:
            TransformError: If *data* is not valid in this encoding.
        """
        if self is Encoding.BASE64:
            return _decode_base64(data)
        if self is Encoding.URL:
            return _decode_url(data)
        return data


def _decode_base64(data: str) -> str:
    compact = _B64_WHITESPACE.sub("", data).rstrip("=")
    if len(compact) % 4 == 1:
        msg = "Invalid base64 input: impossible length"
        raise TransformError(msg)
    padded = compact + "=" * (-len(compact) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as e:
        msg = f"Invalid base64 input: {e}"
        raise TransformError(msg) from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        # Binary payloads come back one character per byte
        return raw.decode("latin-1")


def _decode_url(data: str) -> str:
    if _BAD_PERCENT.search(data):
        msg = "URI malformed"
        raise TransformError(msg)
    try:
        return unquote(data, errors="strict")
    except UnicodeDecodeError as e:
        msg = "URI malformed"
        raise TransformError(msg) from e
