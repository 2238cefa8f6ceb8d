"""Byte-level decoding: BOM-less, NFC-normalized UTF-8 only."""

from __future__ import annotations

import codecs
import unicodedata

from csvx.models.errors import EncodingError


def decode(data: bytes) -> str:
    """Decode ``data`` as csvx text.

    The text is never normalized here; input that is not already in NFC is
    rejected with :class:`EncodingError`.
    """
    if data.startswith(codecs.BOM_UTF8):
        raise EncodingError("Input starts with a UTF-8 byte-order mark")
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(
            f"Invalid UTF-8 sequence at byte {exc.start}: {exc.reason}"
        ) from exc
    if not unicodedata.is_normalized("NFC", text):
        raise EncodingError("Text is not in Unicode Normalization Form C")
    return text
