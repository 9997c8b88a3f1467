"""
Tests for translate_database_errors.
"""

import pytest
from django.db import DatabaseError, IntegrityError

from core.decorators import translate_database_errors
from core.exceptions import PersistenceError


class TestTranslateDatabaseErrors:
    """Tests for the database error translation decorator."""

    def test_passes_through_results(self):
        @translate_database_errors("add")
        def add(a, b):
            return a + b

        assert add(1, 2) == 3

    def test_wraps_database_errors(self):
        cause = IntegrityError("duplicate key")

        @translate_database_errors("save row", error_code="SAVE_FAILED")
        def save():
            raise cause

        with pytest.raises(PersistenceError) as exc_info:
            save()

        assert exc_info.value.error_code == "SAVE_FAILED"
        assert exc_info.value.message == "Could not save row"
        assert exc_info.value.__cause__ is cause

    def test_other_exceptions_propagate_unchanged(self):
        @translate_database_errors("parse")
        def parse():
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            parse()

    def test_default_code(self):
        @translate_database_errors("load")
        def load():
            raise DatabaseError("gone")

        with pytest.raises(PersistenceError) as exc_info:
            load()

        assert exc_info.value.error_code == "PERSISTENCE_ERROR"
