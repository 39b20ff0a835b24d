"""
Tests for typed column retrieval.
"""

import sqlite3
import pytest
from datetime import date, datetime
from decimal import Decimal

from ai_api_toolkit.tabular import get_column_value, convert_value, ColumnReader
from ai_api_toolkit.exceptions import InvalidInputError


@pytest.fixture
def connection():
    """In-memory database with a small orders table."""
    conn = sqlite3.connect(":memory:")
    conn.execute(
        "CREATE TABLE orders (id INTEGER, customer TEXT, total REAL, paid INTEGER, "
        "created_at TEXT, note TEXT, amount TEXT)"
    )
    conn.executemany(
        "INSERT INTO orders VALUES (?, ?, ?, ?, ?, ?, ?)",
        [
            (1, "Ada", 19.5, 1, "2024-03-01T10:15:00", "gift", "19.50"),
            (2, "Linus", 5.0, 0, "2024-03-02T08:00:00", None, "5.00"),
            (3, "Grace", None, None, None, None, None),
        ],
    )
    yield conn
    conn.close()


class TestGetColumnValue:
    """Test cases for get_column_value."""

    def test_tuple_row_with_description(self, connection):
        cursor = connection.execute("SELECT id, customer FROM orders WHERE id = 1")
        row = cursor.fetchone()

        assert get_column_value(row, "customer", str, description=cursor.description) == "Ada"
        assert get_column_value(row, "id", int, description=cursor.description) == 1

    def test_sqlite_row(self, connection):
        connection.row_factory = sqlite3.Row
        row = connection.execute("SELECT * FROM orders WHERE id = 1").fetchone()

        assert get_column_value(row, "total", float) == 19.5
        assert get_column_value(row, "paid", bool) is True
        assert get_column_value(row, "created_at", datetime) == datetime(2024, 3, 1, 10, 15)
        assert get_column_value(row, "created_at", date) == date(2024, 3, 1)
        assert get_column_value(row, "amount", Decimal) == Decimal("19.50")

    def test_mapping_row(self):
        row = {"name": "Ada", "score": "42"}

        assert get_column_value(row, "score", int) == 42
        assert get_column_value(row, "name") == "Ada"

    def test_null_returns_default(self, connection):
        connection.row_factory = sqlite3.Row
        row = connection.execute("SELECT * FROM orders WHERE id = 3").fetchone()

        assert get_column_value(row, "total", float) is None
        assert get_column_value(row, "total", float, default=0.0) == 0.0
        assert get_column_value(row, "paid", bool, default=False) is False

    def test_unknown_column(self, connection):
        cursor = connection.execute("SELECT id FROM orders")
        row = cursor.fetchone()

        with pytest.raises(InvalidInputError, match="Unknown column 'missing'"):
            get_column_value(row, "missing", description=cursor.description)

        with pytest.raises(InvalidInputError, match="Unknown column"):
            get_column_value({"id": 1}, "missing")

    def test_tuple_row_without_description(self):
        with pytest.raises(InvalidInputError, match="require a cursor description"):
            get_column_value((1, "Ada"), "id")

    def test_empty_column_name(self):
        with pytest.raises(InvalidInputError, match="Column name cannot be empty"):
            get_column_value({"id": 1}, "")

    def test_integer_column_as_bytes_fails(self):
        with pytest.raises(InvalidInputError, match="Cannot convert 5 to bytes"):
            get_column_value({"blob": 5}, "blob", bytes)

    def test_conversion_failure(self):
        with pytest.raises(InvalidInputError, match="Cannot convert 'abc' to int"):
            get_column_value({"id": "abc"}, "id", int)


class TestConvertValue:
    """Test cases for convert_value."""

    @pytest.mark.parametrize("value,expected", [
        (1, True), (0, False), ("true", True), ("No", False), ("Y", True), (b"1", True), (True, True),
    ])
    def test_bool(self, value, expected):
        assert convert_value(value, bool) is expected

    @pytest.mark.parametrize("value", [2, "maybe", 0.5])
    def test_bool_rejects_ambiguous_values(self, value):
        with pytest.raises(InvalidInputError):
            convert_value(value, bool)

    def test_int_rejects_fractions(self):
        assert convert_value(3.0, int) == 3
        assert convert_value(Decimal("7"), int) == 7

        with pytest.raises(InvalidInputError, match="fractional part"):
            convert_value(3.5, int)

    def test_decimal_from_float_avoids_artifacts(self):
        assert convert_value(0.1, Decimal) == Decimal("0.1")

    def test_decimal_rejects_garbage(self):
        with pytest.raises(InvalidInputError):
            convert_value("12,5", Decimal)

    def test_text_and_bytes(self):
        assert convert_value(b"caf\xc3\xa9", str) == "café"
        assert convert_value("café", bytes) == b"caf\xc3\xa9"

    @pytest.mark.parametrize("value", [5, 3.5, Decimal("2")])
    def test_bytes_rejects_numbers(self, value):
        with pytest.raises(InvalidInputError, match="is not binary data"):
            convert_value(value, bytes)

    def test_bytes_from_binary_buffers(self):
        assert convert_value(bytearray(b"ab"), bytes) == b"ab"
        assert convert_value(memoryview(b"ab"), bytes) == b"ab"

    def test_datetime_rejects_bad_strings(self):
        with pytest.raises(InvalidInputError):
            convert_value("yesterday", datetime)

    def test_no_type_returns_value(self):
        marker = object()
        assert convert_value(marker, None) is marker

    def test_unregistered_type_is_called(self):
        assert convert_value("3", complex) == complex(3)


class TestColumnReader:
    """Test cases for ColumnReader."""

    def test_iterates_rows(self, connection):
        reader = ColumnReader(connection.execute("SELECT id, note FROM orders ORDER BY id"))
        notes = []

        for row in reader:
            notes.append((row.get("id", int), row.get("note", str, default="")))

        assert notes == [(1, "gift"), (2, ""), (3, "")]

    def test_read_and_is_null(self, connection):
        reader = ColumnReader(connection.execute("SELECT id, note FROM orders ORDER BY id"))

        assert reader.read()
        assert not reader.is_null("note")
        assert reader.read()
        assert reader.is_null("note")
        assert reader.columns == ["id", "note"]

    def test_fetch_typed(self, connection):
        reader = ColumnReader(connection.execute("SELECT total FROM orders ORDER BY id"))

        assert reader.fetch_typed("total", float, default=0.0) == [19.5, 5.0, 0.0]

    def test_no_current_row(self, connection):
        reader = ColumnReader(connection.execute("SELECT id FROM orders"))

        with pytest.raises(InvalidInputError, match="No current row"):
            reader.get("id")

    def test_exhausted_reader(self, connection):
        reader = ColumnReader(connection.execute("SELECT id FROM orders WHERE id = 1"))

        assert reader.read()
        assert not reader.read()

    def test_cursor_without_result_set(self, connection):
        cursor = connection.cursor()

        with pytest.raises(InvalidInputError, match="execute a query first"):
            ColumnReader(cursor)
