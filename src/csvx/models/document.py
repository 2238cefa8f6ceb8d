"""Tokenized csvx document."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawDocument:
    """Rows of unquoted field text, in file order.

    ``quoted`` mirrors ``rows`` and records which fields were enclosed in
    double quotes in the source. ``terminated`` is false when the last row
    was not followed by ``\\r\\n``.
    """

    rows: tuple[tuple[str, ...], ...]
    quoted: tuple[tuple[bool, ...], ...]
    terminated: bool = True

    @property
    def header(self) -> tuple[str, ...]:
        return self.rows[0]

    @property
    def data_rows(self) -> tuple[tuple[str, ...], ...]:
        return self.rows[1:]

    @property
    def width(self) -> int:
        return len(self.rows[0])

    def __len__(self) -> int:
        return len(self.rows)
