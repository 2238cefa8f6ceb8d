"""Schema documents: type and constraint grammars, schema construction."""

from csvx.schema.builder import SchemaBuilder, parse_constraints, parse_type

__all__ = ["SchemaBuilder", "parse_constraints", "parse_type"]
