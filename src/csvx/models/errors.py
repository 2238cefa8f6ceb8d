"""Diagnostics, validation reports and the fatal error hierarchy."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class ErrorKind(StrEnum):
    ENCODING = "EncodingError"
    NAMING = "NamingError"
    STRUCTURAL = "StructuralError"
    SCHEMA = "SchemaError"
    SCHEMA_MISMATCH = "SchemaMismatchError"
    TYPE = "TypeError"
    CONSTRAINT = "ConstraintError"


class CellLocation(BaseModel):
    """Position of a diagnostic inside a document.

    ``row`` 0 is the header row. ``column`` is ``None`` when the diagnostic
    applies to a whole row.
    """

    model_config = ConfigDict(frozen=True)

    row: int
    column: int | None = None

    def __str__(self) -> str:
        if self.column is None:
            return f"row {self.row}"
        return f"row {self.row}, column {self.column}"


class ValidationDiagnostic(BaseModel):
    """A single rule violation found by any stage of the engine."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    location: CellLocation | None = None

    def __str__(self) -> str:
        if self.location is None:
            return f"{self.kind}: {self.message}"
        return f"{self.kind} at {self.location}: {self.message}"


class ValidationReport(BaseModel):
    """Outcome of one validation run."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    diagnostics: list[ValidationDiagnostic] = []

    @property
    def is_valid(self) -> bool:
        return self.valid

    def kinds(self) -> list[ErrorKind]:
        return [d.kind for d in self.diagnostics]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class CsvxError(Exception):
    """Base class for conditions that abort a stage of the engine."""

    kind: ErrorKind = ErrorKind.STRUCTURAL

    def __init__(
        self,
        message: str,
        row: int | None = None,
        column: int | None = None,
    ) -> None:
        self.message = message
        self.row = row
        self.column = column
        super().__init__(message)

    @property
    def location(self) -> CellLocation | None:
        if self.row is None:
            return None
        return CellLocation(row=self.row, column=self.column)

    def to_diagnostic(self) -> ValidationDiagnostic:
        return ValidationDiagnostic(kind=self.kind, message=self.message, location=self.location)


class EncodingError(CsvxError):
    """Input bytes are not BOM-less, NFC-normalized UTF-8."""

    kind = ErrorKind.ENCODING


class NamingError(CsvxError):
    """A filename segment does not match its grammar."""

    kind = ErrorKind.NAMING

    def __init__(self, message: str, segment: int | None = None) -> None:
        self.segment = segment
        super().__init__(message)


class StructuralError(CsvxError):
    """Malformed quoting or line termination; tokenizing cannot continue."""

    kind = ErrorKind.STRUCTURAL


class SchemaError(CsvxError):
    """A schema document is malformed."""

    kind = ErrorKind.SCHEMA


class SchemaMismatchError(CsvxError):
    """A data document does not line up with the supplied schema."""

    kind = ErrorKind.SCHEMA_MISMATCH


class RowValueError(CsvxError):
    """A cell failed type or nullability checks while reading typed values."""

    def __init__(self, message: str, kind: ErrorKind, column: int | None = None) -> None:
        super().__init__(message, column=column)
        self.kind = kind
