"""Engine entry points and the schema cache."""

from csvx.service.engine import EngineConfig, ValidationEngine, build_schema, validate_document
from csvx.service.schema_store import SchemaLoadError, SchemaStore, SchemaSummary

__all__ = [
    "EngineConfig",
    "SchemaLoadError",
    "SchemaStore",
    "SchemaSummary",
    "ValidationEngine",
    "build_schema",
    "validate_document",
]
