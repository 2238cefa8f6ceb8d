"""Tests for schema document parsing."""

from __future__ import annotations

import pytest

from csvx.models.errors import CellLocation, ErrorKind
from csvx.models.schema import Constraint, SchemaDefinition, TypeDescriptor, TypeKind
from csvx.parser.grammar import VERSION_1, VERSION_4
from csvx.parser.tokenizer import tokenize, write_document
from csvx.schema.builder import SchemaBuilder, parse_constraints, parse_type
from tests.conftest import csvx_text

HEADER = "id,type,constraints,description"


def _build(*lines: str, builder: SchemaBuilder | None = None):
    builder = builder or SchemaBuilder(VERSION_4)
    return builder.build(tokenize(csvx_text(*lines)))


class TestParseType:
    @pytest.mark.parametrize("kind", [k for k in TypeKind if k != TypeKind.ENUM])
    def test_simple_types(self, kind: TypeKind) -> None:
        descriptor, reason = parse_type(kind.value)
        assert reason is None
        assert descriptor == TypeDescriptor(kind=kind)

    def test_enum(self) -> None:
        descriptor, _ = parse_type("ENUM(LION,TIGER,BEAR_CUB)")
        assert descriptor is not None
        assert descriptor.kind == TypeKind.ENUM
        assert descriptor.variants == ("LION", "TIGER", "BEAR_CUB")
        assert str(descriptor) == "ENUM(LION,TIGER,BEAR_CUB)"

    @pytest.mark.parametrize(
        "text", ["ENUM()", "ENUM(lion)", "ENUM(A,)", "ENUM(A, B)", "ENUM A,B", "ENUMS(A)"]
    )
    def test_malformed_enum(self, text: str) -> None:
        descriptor, reason = parse_type(text)
        assert descriptor is None
        assert "ENUM" in (reason or "")

    @pytest.mark.parametrize("text", ["FLOAT", "string", "Integer", "", "INTEGER "])
    def test_unknown_type(self, text: str) -> None:
        descriptor, reason = parse_type(text)
        assert descriptor is None
        assert "Unknown type" in (reason or "")

    def test_enum_disallowed(self) -> None:
        descriptor, reason = parse_type("ENUM(A)", allow_enum=False)
        assert descriptor is None
        assert "not available" in (reason or "")


class TestParseConstraints:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("", frozenset()),
            ("UNIQUE", frozenset({Constraint.UNIQUE})),
            ("NULLABLE", frozenset({Constraint.NULLABLE})),
            ("NULLABLE UNIQUE", frozenset({Constraint.UNIQUE, Constraint.NULLABLE})),
            ("UNIQUE NULLABLE", frozenset({Constraint.UNIQUE, Constraint.NULLABLE})),
        ],
    )
    def test_valid(self, text: str, expected: frozenset[Constraint]) -> None:
        assert parse_constraints(text) == (expected, None)

    @pytest.mark.parametrize(
        "text", ["PRIMARY", "UNIQUE,NULLABLE", "unique", "UNIQUE  NULLABLE", " UNIQUE"]
    )
    def test_invalid(self, text: str) -> None:
        constraints, reason = parse_constraints(text)
        assert constraints is None
        assert reason


class TestSchemaBuilder:
    def test_sample_schema(self, sample_schema: SchemaDefinition) -> None:
        assert sample_schema.ids == [
            "id", "name", "species", "weight", "born",
            "fed_at", "feeding_time", "caretaker", "vaccinated",
        ]
        assert sample_schema.columns[0].unique
        assert not sample_schema.columns[0].nullable
        assert sample_schema.columns[2].type.variants == ("LION", "TIGER", "BEAR")
        assert sample_schema.columns[3].nullable
        assert sample_schema.columns[7].description == "Caretaker, if any"

    def test_bad_header(self) -> None:
        schema, errors = _build("id,type,description", "id,INTEGER,Zoo id")
        assert schema is None
        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.SCHEMA
        assert errors[0].location == CellLocation(row=0)

    def test_header_order_matters(self) -> None:
        schema, errors = _build("type,id,constraints,description", "INTEGER,id,,x")
        assert schema is None
        assert errors[0].location == CellLocation(row=0)

    def test_duplicate_id(self) -> None:
        schema, errors = _build(HEADER, "id,INTEGER,,a", "name,STRING,,b", "id,STRING,,c")
        assert schema is None
        assert len(errors) == 1
        assert errors[0].location == CellLocation(row=3, column=0)
        assert "Duplicate" in errors[0].message

    def test_invalid_id(self) -> None:
        _, errors = _build(HEADER, "Name,STRING,,a")
        assert errors[0].location == CellLocation(row=1, column=0)

    def test_unknown_type_names_row(self) -> None:
        _, errors = _build(HEADER, "id,INTEGER,,a", "weight,FLOAT,,b")
        assert len(errors) == 1
        assert errors[0].location == CellLocation(row=2, column=1)
        assert "FLOAT" in errors[0].message

    def test_unknown_constraint(self) -> None:
        _, errors = _build(HEADER, "id,INTEGER,PRIMARY,a")
        assert errors[0].location == CellLocation(row=1, column=2)

    def test_all_errors_reported(self) -> None:
        _, errors = _build(HEADER, "Id,INTEGER,,a", "x,FLOAT,,b", "y,STRING,KEY,c")
        assert [e.location for e in errors] == [
            CellLocation(row=1, column=0),
            CellLocation(row=2, column=1),
            CellLocation(row=3, column=2),
        ]

    def test_row_width_mismatch(self) -> None:
        schema, errors = _build(
            HEADER, "id,INTEGER,UNIQUE,Id", "species,ENUM(LION,TIGER),,Species"
        )
        assert schema is None
        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.SCHEMA
        assert errors[0].location == CellLocation(row=2)
        assert "5 fields, expected 4" in errors[0].message

    def test_no_columns(self) -> None:
        schema, errors = _build(HEADER)
        assert schema is None
        assert "no columns" in errors[0].message

    def test_round_trip_through_rows(self, sample_schema: SchemaDefinition) -> None:
        text = write_document(sample_schema.to_rows())
        rebuilt, errors = SchemaBuilder(VERSION_4).build(tokenize(text))
        assert errors == []
        assert rebuilt == sample_schema


class TestVersion1Schema:
    def test_two_column_header(self) -> None:
        schema, errors = _build(
            "id,type", "id,INTEGER", "name,STRING", builder=SchemaBuilder(VERSION_1)
        )
        assert errors == []
        assert schema is not None
        assert schema.ids == ["id", "name"]
        assert schema.columns[0].constraints == frozenset()
        assert schema.columns[0].description == ""

    def test_enum_rejected(self) -> None:
        _, errors = _build("id,type", 'kind,"ENUM(A,B)"', builder=SchemaBuilder(VERSION_1))
        assert errors[0].location == CellLocation(row=1, column=1)
        assert "ENUM" in errors[0].message

    def test_version4_header_rejected(self) -> None:
        schema, errors = _build(HEADER, "id,INTEGER,,x", builder=SchemaBuilder(VERSION_1))
        assert schema is None
        assert errors[0].location == CellLocation(row=0)
