"""Tests for custom exception hierarchy."""

import pytest

from cadastro.exceptions import (
    CadastroError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    RecordDecodeError,
    ValidationError,
)
from cadastro.validation.schema import FieldError


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_cadastro_error_is_exception(self) -> None:
        assert isinstance(CadastroError("test"), Exception)

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError([]),
            ConflictError("email", "a@b.com"),
            NotFoundError("1"),
            PersistenceError("disk full"),
            ConfigurationError("bad"),
        ],
    )
    def test_subclasses_are_cadastro_errors(self, error: Exception) -> None:
        assert isinstance(error, CadastroError)

    def test_decode_error_is_persistence_error(self) -> None:
        err = RecordDecodeError("record[0]: missing id")
        assert isinstance(err, PersistenceError)
        assert isinstance(err, CadastroError)


class TestExceptionDetails:
    """Test attributes and messages."""

    def test_validation_error_lists_fields(self) -> None:
        err = ValidationError([FieldError("email", "Invalid email"), FieldError("address.region", "Invalid region")])

        assert [e.path for e in err.errors] == ["email", "address.region"]
        assert str(err) == "Invalid record data (email: Invalid email; address.region: Invalid region)"

    def test_validation_error_without_details(self) -> None:
        assert str(ValidationError([])) == "Invalid record data"

    def test_conflict_error(self) -> None:
        err = ConflictError("taxId", "123.456.789-09")

        assert (err.field, err.value) == ("taxId", "123.456.789-09")
        assert str(err) == "taxId already registered: 123.456.789-09"

    def test_not_found_error(self) -> None:
        err = NotFoundError("abc")

        assert err.record_id == "abc"
        assert str(err) == "Record abc not found"

    def test_catchable_as_base(self) -> None:
        with pytest.raises(CadastroError):
            raise NotFoundError("1")
