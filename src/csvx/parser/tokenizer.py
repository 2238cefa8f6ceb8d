"""Quote-aware csvx tokenizer and its minimal-quoting writer."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import StrEnum

from csvx.models.document import RawDocument
from csvx.models.errors import StructuralError

logger = logging.getLogger("csvx.parser")

TERMINATOR = "\r\n"
_SPECIAL_CHARS = (",", '"', "\r", "\n")


class _State(StrEnum):
    FIELD_START = "field_start"
    UNQUOTED = "unquoted"
    QUOTED = "quoted"
    AFTER_QUOTE = "after_quote"


def needs_quoting(text: str, row_width: int) -> bool:
    """Whether minimal quotation requires ``text`` to be quoted.

    A lone empty field must be quoted, otherwise its row reads as a blank line.
    """
    if text == "":
        return row_width == 1
    return any(ch in text for ch in _SPECIAL_CHARS)


class Tokenizer:
    """Splits csvx text into rows of fields.

    Only ``\\r\\n`` terminates a row; bare ``\\r`` or ``\\n`` are allowed
    inside quoted fields only. Malformed quoting raises
    :class:`StructuralError` since later row positions would be meaningless.
    A missing final terminator is recorded on the document instead.
    """

    def tokenize(self, text: str) -> RawDocument:
        if not text:
            raise StructuralError("Document is empty")

        rows: list[tuple[str, ...]] = []
        quoted_rows: list[tuple[bool, ...]] = []
        row: list[str] = []
        row_quoted: list[bool] = []
        buf: list[str] = []
        quoted = False
        state = _State.FIELD_START

        def _emit_field() -> None:
            nonlocal quoted
            row.append("".join(buf))
            row_quoted.append(quoted)
            buf.clear()
            quoted = False

        def _emit_row() -> None:
            rows.append(tuple(row))
            quoted_rows.append(tuple(row_quoted))
            row.clear()
            row_quoted.clear()

        i = 0
        n = len(text)
        while i < n:
            ch = text[i]

            if state is _State.QUOTED:
                if ch == '"':
                    state = _State.AFTER_QUOTE
                else:
                    buf.append(ch)
                i += 1
                continue

            if ch in ("\r", "\n"):
                if not text.startswith(TERMINATOR, i):
                    raise StructuralError(
                        f"Bare {ch!r} outside a quoted field; rows must end with \\r\\n",
                        row=len(rows),
                        column=len(row),
                    )
                # A terminator at the start of a row is a blank line: no fields.
                if state is not _State.FIELD_START or row:
                    _emit_field()
                _emit_row()
                state = _State.FIELD_START
                i += len(TERMINATOR)
                continue

            if state is _State.FIELD_START:
                if ch == '"':
                    quoted = True
                    state = _State.QUOTED
                elif ch == ",":
                    _emit_field()
                else:
                    buf.append(ch)
                    state = _State.UNQUOTED
            elif state is _State.UNQUOTED:
                if ch == ",":
                    _emit_field()
                    state = _State.FIELD_START
                elif ch == '"':
                    raise StructuralError(
                        "Quote character inside an unquoted field",
                        row=len(rows),
                        column=len(row),
                    )
                else:
                    buf.append(ch)
            else:  # AFTER_QUOTE
                if ch == '"':
                    buf.append('"')
                    state = _State.QUOTED
                elif ch == ",":
                    _emit_field()
                    state = _State.FIELD_START
                else:
                    raise StructuralError(
                        f"Unexpected {ch!r} after closing quote",
                        row=len(rows),
                        column=len(row),
                    )
            i += 1

        if state is _State.QUOTED:
            raise StructuralError(
                "Quoted field is not terminated before end of input",
                row=len(rows),
                column=len(row),
            )

        terminated = state is _State.FIELD_START and not row
        if not terminated:
            _emit_field()
            _emit_row()

        logger.debug("Tokenized %d rows (terminated=%s)", len(rows), terminated)
        return RawDocument(rows=tuple(rows), quoted=tuple(quoted_rows), terminated=terminated)


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def write_document(rows: Iterable[Sequence[str]]) -> str:
    """Serialize rows with RFC4180 minimal quoting and ``\\r\\n`` terminators."""
    out: list[str] = []
    for row in rows:
        fields = [_quote(f) if needs_quoting(f, len(row)) else f for f in row]
        out.append(",".join(fields) + TERMINATOR)
    return "".join(out)


def tokenize(text: str) -> RawDocument:
    return Tokenizer().tokenize(text)
