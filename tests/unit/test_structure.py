"""Tests for csvx structural rules."""

from __future__ import annotations

import pytest

from csvx.models.errors import CellLocation, ErrorKind
from csvx.parser.structure import StructuralValidator
from csvx.parser.tokenizer import tokenize
from tests.conftest import SAMPLE_DATA_LINES, SAMPLE_SCHEMA_LINES, csvx_text


@pytest.fixture
def validator() -> StructuralValidator:
    return StructuralValidator()


class TestStructuralValidator:
    @pytest.mark.parametrize("lines", [SAMPLE_DATA_LINES, SAMPLE_SCHEMA_LINES])
    def test_sample_documents_are_clean(
        self, validator: StructuralValidator, lines: tuple[str, ...]
    ) -> None:
        assert validator.validate(tokenize(csvx_text(*lines))) == []

    def test_blank_line(self, validator: StructuralValidator) -> None:
        errors = validator.validate(tokenize("a,b\r\n1,2\r\n\r\n3,4\r\n"))
        assert len(errors) == 1
        assert errors[0].kind == ErrorKind.STRUCTURAL
        assert errors[0].location == CellLocation(row=2)
        assert "Blank" in errors[0].message

    def test_field_count_mismatch(self, validator: StructuralValidator) -> None:
        errors = validator.validate(tokenize("a,b\r\n1,2,3\r\n4\r\n5,6\r\n"))
        assert [e.location for e in errors] == [CellLocation(row=1), CellLocation(row=2)]

    def test_uppercase_header(self, validator: StructuralValidator) -> None:
        errors = validator.validate(tokenize("id,Caretaker\r\n1,x\r\n"))
        assert len(errors) == 1
        assert errors[0].location == CellLocation(row=0, column=1)
        assert "Caretaker" in errors[0].message

    @pytest.mark.parametrize("name", ["1st", "_id", "first-name", "first name", ""])
    def test_invalid_header_identifiers(self, validator: StructuralValidator, name: str) -> None:
        doc = tokenize(csvx_text(f"id,{name}" if name else "id,", "1,2"))
        errors = validator.validate(doc)
        assert any(e.location == CellLocation(row=0, column=1) for e in errors)

    def test_header_with_underscores_and_digits(self, validator: StructuralValidator) -> None:
        assert validator.validate(tokenize("zoo_id2,name\r\n1,x\r\n")) == []

    def test_unnecessary_quoting(self, validator: StructuralValidator) -> None:
        errors = validator.validate(tokenize('a,b\r\n"plain","x,y"\r\n'))
        assert len(errors) == 1
        assert errors[0].location == CellLocation(row=1, column=0)

    def test_quoted_empty_field_among_others(self, validator: StructuralValidator) -> None:
        errors = validator.validate(tokenize('a,b\r\n"",x\r\n'))
        assert [e.location for e in errors] == [CellLocation(row=1, column=0)]

    def test_quoted_lone_empty_field_is_necessary(self, validator: StructuralValidator) -> None:
        assert validator.validate(tokenize('a\r\n""\r\n')) == []

    def test_quoted_header_field(self, validator: StructuralValidator) -> None:
        errors = validator.validate(tokenize('"a",b\r\n1,2\r\n'))
        assert [e.location for e in errors] == [CellLocation(row=0, column=0)]

    def test_missing_terminator(self, validator: StructuralValidator) -> None:
        errors = validator.validate(tokenize("a,b\r\n1,2"))
        assert len(errors) == 1
        assert errors[0].location == CellLocation(row=1)
        assert "not terminated" in errors[0].message

    def test_all_violations_collected(self, validator: StructuralValidator) -> None:
        doc = tokenize('id,Name\r\n"1",x\r\n\r\n2\r\n3,y')
        errors = validator.validate(doc)
        assert {e.kind for e in errors} == {ErrorKind.STRUCTURAL}
        # header, quoting, blank line, field count, terminator
        assert len(errors) == 5
