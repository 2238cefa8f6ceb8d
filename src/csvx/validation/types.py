"""Per-type cell validators.

Each :class:`TypeKind` maps to one validator in :class:`TypeRegistry`. A
validator turns non-empty cell text into a typed value or a rejection
reason; it never raises for ordinary rule violations.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from csvx.models.errors import ErrorKind
from csvx.models.schema import ColumnSpec, TypeDescriptor, TypeKind

_INTEGER_RE = re.compile(r"(?:0|-?[1-9][0-9]*)")
_DECIMAL_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?")
_DATE_RE = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})")
_DATETIME_RE = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})([0-9]{2})")
_TIME_RE = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})")


@dataclass(frozen=True)
class CellCheck:
    """Result of checking one cell."""

    value: Any = None
    reason: str | None = None
    kind: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def accept(cls, value: Any) -> CellCheck:
        return cls(value=value)

    @classmethod
    def reject(cls, reason: str, kind: ErrorKind = ErrorKind.TYPE) -> CellCheck:
        return cls(reason=reason, kind=kind)


NULL = CellCheck.accept(None)

Validator = Callable[[TypeDescriptor, str], CellCheck]


class TypeRegistry:
    """Registry of cell validators keyed by type kind."""

    _validators: dict[TypeKind, Validator] = {}

    @classmethod
    def register(cls, kind: TypeKind) -> Callable[[Validator], Validator]:
        """Register a validator for ``kind``. Used as a decorator."""

        def _wrap(func: Validator) -> Validator:
            cls._validators[kind] = func
            return func

        return _wrap

    @classmethod
    def get(cls, kind: TypeKind) -> Validator:
        if kind not in cls._validators:
            raise KeyError(f"No validator registered for type {kind}")
        return cls._validators[kind]

    @classmethod
    def available(cls) -> list[str]:
        return sorted(k.value for k in cls._validators)


def check_value(descriptor: TypeDescriptor, text: str) -> CellCheck:
    """Validate non-empty ``text`` against ``descriptor``."""
    return TypeRegistry.get(descriptor.kind)(descriptor, text)


def check_cell(column: ColumnSpec, text: str) -> CellCheck:
    """Validate one cell, applying the NULL rule before the type validator."""
    if text == "":
        if column.nullable:
            return NULL
        return CellCheck.reject(
            f"missing value in non-nullable column '{column.id}'", ErrorKind.CONSTRAINT
        )
    return check_value(column.type, text)


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


@TypeRegistry.register(TypeKind.STRING)
def _check_string(descriptor: TypeDescriptor, text: str) -> CellCheck:
    return CellCheck.accept(text)


@TypeRegistry.register(TypeKind.BOOL)
def _check_bool(descriptor: TypeDescriptor, text: str) -> CellCheck:
    if text == "TRUE":
        return CellCheck.accept(True)
    if text == "FALSE":
        return CellCheck.accept(False)
    return CellCheck.reject(f"'{text}' is not a BOOL (expected TRUE or FALSE)")


@TypeRegistry.register(TypeKind.INTEGER)
def _check_integer(descriptor: TypeDescriptor, text: str) -> CellCheck:
    if not _INTEGER_RE.fullmatch(text):
        return CellCheck.reject(f"'{text}' is not an INTEGER")
    return CellCheck.accept(int(text))


@TypeRegistry.register(TypeKind.ENUM)
def _check_enum(descriptor: TypeDescriptor, text: str) -> CellCheck:
    if text in descriptor.variants:
        return CellCheck.accept(text)
    return CellCheck.reject(
        f"'{text}' is not one of {', '.join(descriptor.variants)}"
    )


@TypeRegistry.register(TypeKind.DECIMAL)
def _check_decimal(descriptor: TypeDescriptor, text: str) -> CellCheck:
    if not _DECIMAL_RE.fullmatch(text):
        return CellCheck.reject(f"'{text}' is not a DECIMAL")
    return CellCheck.accept(Decimal(text))


def _build_date(year: str, month: str, day: str) -> datetime.date | None:
    try:
        return datetime.date(int(year), int(month), int(day))
    except ValueError:
        return None


def _build_time(hour: str, minute: str, second: str) -> datetime.time | None:
    try:
        return datetime.time(int(hour), int(minute), int(second))
    except ValueError:
        return None


@TypeRegistry.register(TypeKind.DATE)
def _check_date(descriptor: TypeDescriptor, text: str) -> CellCheck:
    match = _DATE_RE.fullmatch(text)
    if match is None:
        return CellCheck.reject(f"'{text}' is not a DATE (expected YYYYMMDD)")
    value = _build_date(*match.groups())
    if value is None:
        return CellCheck.reject(f"'{text}' is not a valid calendar date")
    return CellCheck.accept(value)


@TypeRegistry.register(TypeKind.DATETIME)
def _check_datetime(descriptor: TypeDescriptor, text: str) -> CellCheck:
    match = _DATETIME_RE.fullmatch(text)
    if match is None:
        return CellCheck.reject(f"'{text}' is not a DATETIME (expected YYYYMMDDHHMMSS)")
    parts = match.groups()
    day = _build_date(*parts[:3])
    if day is None:
        return CellCheck.reject(f"'{text}' has an invalid calendar date")
    clock = _build_time(*parts[3:])
    if clock is None:
        return CellCheck.reject(f"'{text}' has an out-of-range time of day")
    return CellCheck.accept(datetime.datetime.combine(day, clock))


@TypeRegistry.register(TypeKind.TIME)
def _check_time(descriptor: TypeDescriptor, text: str) -> CellCheck:
    match = _TIME_RE.fullmatch(text)
    if match is None:
        return CellCheck.reject(f"'{text}' is not a TIME (expected HHMMSS)")
    value = _build_time(*match.groups())
    if value is None:
        return CellCheck.reject(f"'{text}' is not a valid time of day")
    return CellCheck.accept(value)
