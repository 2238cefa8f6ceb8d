"""Schema model: column types, constraints and schema definitions."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from csvx.models.errors import RowValueError, SchemaMismatchError


class TypeKind(StrEnum):
    STRING = "STRING"
    BOOL = "BOOL"
    INTEGER = "INTEGER"
    ENUM = "ENUM"
    DECIMAL = "DECIMAL"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"


class Constraint(StrEnum):
    UNIQUE = "UNIQUE"
    NULLABLE = "NULLABLE"


class TypeDescriptor(BaseModel):
    """Declared type of a column. ``variants`` is only populated for ENUM."""

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    variants: tuple[str, ...] = ()

    def __str__(self) -> str:
        if self.kind == TypeKind.ENUM:
            return f"ENUM({','.join(self.variants)})"
        return self.kind.value

    def validate_text(self, text: str) -> Any:
        """Check non-empty cell text against this type.

        Returns a :class:`~csvx.validation.types.CellCheck`.
        """
        from csvx.validation.types import check_value

        return check_value(self, text)


class ColumnSpec(BaseModel):
    """One column declared by a schema document."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: TypeDescriptor
    constraints: frozenset[Constraint] = frozenset()
    description: str = ""

    @property
    def nullable(self) -> bool:
        return Constraint.NULLABLE in self.constraints

    @property
    def unique(self) -> bool:
        return Constraint.UNIQUE in self.constraints

    @property
    def constraints_text(self) -> str:
        # Stable spelling regardless of set iteration order
        return " ".join(c.value for c in Constraint if c in self.constraints)

    def check(self, text: str) -> Any:
        """Run nullability and type checks on one cell."""
        from csvx.validation.types import check_cell

        return check_cell(self, text)


class SchemaDefinition(BaseModel):
    """Ordered column declarations; column order equals file column order."""

    model_config = ConfigDict(frozen=True)

    columns: tuple[ColumnSpec, ...]

    @model_validator(mode="after")
    def _ids_unique(self) -> SchemaDefinition:
        seen: set[str] = set()
        for col in self.columns:
            if col.id in seen:
                raise ValueError(f"Duplicate column id '{col.id}'")
            seen.add(col.id)
        return self

    @property
    def ids(self) -> list[str]:
        return [c.id for c in self.columns]

    def __len__(self) -> int:
        return len(self.columns)

    def column_index(self, column_id: str) -> int | None:
        for idx, col in enumerate(self.columns):
            if col.id == column_id:
                return idx
        return None

    def parse_row(self, fields: list[str] | tuple[str, ...]) -> list[Any]:
        """Convert one data row into typed values (``None`` for NULL).

        Raises :class:`RowValueError` at the first failing cell.
        """
        if len(fields) != len(self.columns):
            raise SchemaMismatchError(
                f"Row has {len(fields)} fields, schema declares {len(self.columns)} columns"
            )
        values: list[Any] = []
        for idx, (col, text) in enumerate(zip(self.columns, fields)):
            result = col.check(text)
            if not result.ok:
                raise RowValueError(
                    f"Column '{col.id}': {result.reason}", kind=result.kind, column=idx
                )
            values.append(result.value)
        return values

    def read_field(self, fields: list[str] | tuple[str, ...], index: int) -> Any:
        """Read a single typed value by column position."""
        if index < 0 or index >= len(self.columns) or index >= len(fields):
            raise SchemaMismatchError(f"No column at index {index}")
        col = self.columns[index]
        result = col.check(fields[index])
        if not result.ok:
            raise RowValueError(
                f"Column '{col.id}': {result.reason}", kind=result.kind, column=index
            )
        return result.value

    def read_field_by_name(self, fields: list[str] | tuple[str, ...], column_id: str) -> Any:
        """Read a single typed value by column id."""
        index = self.column_index(column_id)
        if index is None:
            raise SchemaMismatchError(f"Schema has no column '{column_id}'")
        return self.read_field(fields, index)

    def to_rows(self) -> list[tuple[str, str, str, str]]:
        """Render as the rows of a version 4 schema document, header first."""
        rows = [("id", "type", "constraints", "description")]
        for col in self.columns:
            rows.append((col.id, str(col.type), col.constraints_text, col.description))
        return rows
