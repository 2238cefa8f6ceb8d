"""Pydantic domain models for the csvx engine."""

from csvx.models.document import RawDocument
from csvx.models.errors import (
    CellLocation,
    CsvxError,
    EncodingError,
    ErrorKind,
    NamingError,
    RowValueError,
    SchemaError,
    SchemaMismatchError,
    StructuralError,
    ValidationDiagnostic,
    ValidationReport,
)
from csvx.models.metadata import Compression, FileNameMetadata
from csvx.models.schema import ColumnSpec, Constraint, SchemaDefinition, TypeDescriptor, TypeKind

__all__ = [
    "CellLocation",
    "ColumnSpec",
    "Compression",
    "Constraint",
    "CsvxError",
    "EncodingError",
    "ErrorKind",
    "FileNameMetadata",
    "NamingError",
    "RawDocument",
    "RowValueError",
    "SchemaDefinition",
    "SchemaError",
    "SchemaMismatchError",
    "StructuralError",
    "TypeDescriptor",
    "TypeKind",
    "ValidationDiagnostic",
    "ValidationReport",
]
