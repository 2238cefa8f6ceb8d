"""csvx conformance engine: structural, naming and schema validation of csvx files."""

__version__ = "0.4.0"

from csvx.models import (  # noqa: E402
    ColumnSpec,
    ErrorKind,
    FileNameMetadata,
    SchemaDefinition,
    TypeDescriptor,
    ValidationDiagnostic,
    ValidationReport,
)
from csvx.service import (  # noqa: E402
    EngineConfig,
    SchemaStore,
    ValidationEngine,
    build_schema,
    validate_document,
)

__all__ = [
    "ColumnSpec",
    "EngineConfig",
    "ErrorKind",
    "FileNameMetadata",
    "SchemaDefinition",
    "SchemaStore",
    "TypeDescriptor",
    "ValidationDiagnostic",
    "ValidationEngine",
    "ValidationReport",
    "__version__",
    "build_schema",
    "validate_document",
]
