"""
Safe typed column retrieval from DB-API query results.

Reads a named column from a result row, returns a default for NULL, and
converts the value to a requested Python type.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence
from .exceptions import InvalidInputError


logger = logging.getLogger(__name__)


TRUE_STRINGS = {"true", "t", "yes", "y", "1"}
FALSE_STRINGS = {"false", "f", "no", "n", "0"}


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{value!r} is not 0 or 1")
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_STRINGS:
            return True
        if normalized in FALSE_STRINGS:
            return False
    raise ValueError(f"{value!r} is not a boolean")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} has a fractional part")
        return int(value)
    if isinstance(value, Decimal):
        if value != value.to_integral_value():
            raise ValueError(f"{value!r} has a fractional part")
        return int(value)
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    return int(value)


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, float):
        # Go through str to avoid binary float artifacts
        return Decimal(str(value))
    try:
        return Decimal(value.decode("utf-8") if isinstance(value, (bytes, bytearray)) else value)
    except InvalidOperation as e:
        raise ValueError(f"{value!r} is not a decimal") from e


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise ValueError(f"{value!r} is not a datetime")


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return _to_datetime(value).date()
    raise ValueError(f"{value!r} is not a date")


def _to_str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return str(value)


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise ValueError(f"{value!r} is not binary data")


CONVERTERS: Dict[type, Callable[[Any], Any]] = {
    bool: _to_bool,
    int: _to_int,
    float: float,
    str: _to_str,
    Decimal: _to_decimal,
    datetime: _to_datetime,
    date: _to_date,
    bytes: _to_bytes,
}


def convert_value(value: Any, as_type: Optional[type]) -> Any:
    """
    Convert a non-NULL column value to as_type.

    Types without a registered converter are called with the value.

    Raises:
        InvalidInputError: If the conversion fails
    """
    if as_type is None:
        return value
    converter = CONVERTERS.get(as_type, as_type)
    try:
        return converter(value)
    except (TypeError, ValueError, UnicodeDecodeError) as e:
        raise InvalidInputError(f"Cannot convert {value!r} to {getattr(as_type, '__name__', as_type)}: {e}")


def column_names(description: Sequence[Sequence[Any]]) -> List[str]:
    """Column names from a DB-API cursor description."""
    return [column[0] for column in description]


def _raw_value(row: Any, column: str, description: Optional[Sequence[Sequence[Any]]]) -> Any:
    if description is not None:
        names = column_names(description)
        if column not in names:
            raise InvalidInputError(f"Unknown column '{column}', available columns: {names}")
        return row[names.index(column)]

    if isinstance(row, Mapping):
        if column not in row:
            raise InvalidInputError(f"Unknown column '{column}', available columns: {list(row.keys())}")
        return row[column]

    # sqlite3.Row and similar rows expose keys() and name indexing
    if hasattr(row, "keys"):
        keys = list(row.keys())
        if column not in keys:
            raise InvalidInputError(f"Unknown column '{column}', available columns: {keys}")
        return row[column]

    raise InvalidInputError("Tuple rows require a cursor description to look up columns by name")


def get_column_value(
    row: Any,
    column: str,
    as_type: Optional[type] = None,
    default: Any = None,
    description: Optional[Sequence[Sequence[Any]]] = None,
) -> Any:
    """
    Read a named column from a result row.

    Args:
        row: Mapping row, sqlite3.Row, or tuple row
        column: Column name
        as_type: Optional Python type to convert the value to
        default: Returned when the value is NULL
        description: Cursor description, required for tuple rows

    Returns:
        The converted value, or default for NULL

    Raises:
        InvalidInputError: If the column doesn't exist or conversion fails
    """
    if not column:
        raise InvalidInputError("Column name cannot be empty")

    value = _raw_value(row, column, description)
    if value is None:
        return default
    return convert_value(value, as_type)


class ColumnReader:
    """
    Iterates an executed DB-API cursor and reads typed columns by name.

    Usage:
        reader = ColumnReader(cursor.execute("SELECT id, name FROM users"))
        for _ in reader:
            user_id = reader.get("id", int)
    """

    def __init__(self, cursor):
        if cursor.description is None:
            raise InvalidInputError("Cursor has no result set; execute a query first")
        self.cursor = cursor
        self.description = cursor.description
        self.columns = column_names(cursor.description)
        self._row = None

    def __iter__(self) -> Iterator['ColumnReader']:
        return self

    def __next__(self) -> 'ColumnReader':
        if not self.read():
            raise StopIteration
        return self

    def read(self) -> bool:
        """Advance to the next row. Returns False when the result set is exhausted."""
        self._row = self.cursor.fetchone()
        return self._row is not None

    @property
    def current_row(self):
        if self._row is None:
            raise InvalidInputError("No current row; call read() first")
        return self._row

    def is_null(self, column: str) -> bool:
        return get_column_value(self.current_row, column, description=self.description) is None

    def get(self, column: str, as_type: Optional[type] = None, default: Any = None) -> Any:
        """Read a column of the current row."""
        return get_column_value(self.current_row, column, as_type, default, self.description)

    def fetch_typed(self, column: str, as_type: Optional[type] = None, default: Any = None) -> List[Any]:
        """Read one column from every remaining row."""
        values = [self.get(column, as_type, default) for _ in self]
        logger.debug(f"Fetched {len(values)} values from column '{column}'")
        return values
