"""
=====================================
Exception taxonomy for the SQL layer.
=====================================

Every error raised by the builders, the table facade and the executor
derives from QueryBuilderError so callers can catch the whole family at once.

Hierarchy:
    QueryBuilderError
    ├── NotConnectedError            builder requested without a live connection
    ├── EmptyDataError               INSERT without records
    ├── NoColumnsSetError            UPDATE without a SET clause
    ├── InconsistentRecordShapeError INSERT records with diverging columns
    ├── ParameterMismatchError       placeholder / parameter count differs
    ├── UnsupportedTypeError         unknown column type tag
    ├── SchemaError                  DDL failure
    │   ├── MissingReferenceError    referenced table/column does not exist
    │   └── ColumnSpecError          invalid column definitions
    ├── ExecutionError               data statement failed
    ├── DatabaseError                executor-level failure with vendor code
    └── DatabaseConnectionError      connect/disconnect failure

Example:
    >>> from core.exceptions import ExecutionError
    >>> try:
    ...     db.table('users').select().where('id = ?', 1).execute()
    ... except ExecutionError as e:
    ...     print(f"Query failed: {e}")
"""

from typing import Optional


class QueryBuilderError(Exception):
    """Base exception for all SQL layer errors."""
    pass


class NotConnectedError(QueryBuilderError):
    """Raised when a builder is requested before the database is connected."""
    pass


class EmptyDataError(QueryBuilderError):
    """Raised when an INSERT is given no records."""
    pass


class NoColumnsSetError(QueryBuilderError):
    """Raised when an UPDATE is executed without any SET values."""
    pass


class InconsistentRecordShapeError(QueryBuilderError):
    """Raised when INSERT records do not share the first record's columns."""
    pass


class ParameterMismatchError(QueryBuilderError):
    """Raised when a condition's placeholders do not match its parameters."""
    pass


class UnsupportedTypeError(QueryBuilderError):
    """Raised when a column type tag has no SQL type mapping.

    Attributes:
        type_tag: The tag that could not be mapped
    """

    def __init__(self, type_tag):
        self.type_tag = type_tag
        super().__init__(f"Unsupported column type: {type_tag!r}")


class SchemaError(QueryBuilderError):
    """Raised when a DDL statement (CREATE/ALTER/DROP TABLE) fails."""
    pass


class MissingReferenceError(SchemaError):
    """Raised when a foreign key references a table or column that does not exist."""
    pass


class ColumnSpecError(SchemaError):
    """Raised when column definitions are invalid before any SQL is executed."""
    pass


class ExecutionError(QueryBuilderError):
    """Raised when a SELECT/INSERT/UPDATE/DELETE statement fails."""
    pass


class DatabaseError(QueryBuilderError):
    """Failure reported by the executor.

    Attributes:
        code: Vendor error code (e.g. MySQL errno), None if unavailable
    """

    def __init__(self, message: str, code: Optional[int] = None):
        self.code = code
        super().__init__(message)


class DatabaseConnectionError(QueryBuilderError):
    """Raised when opening or closing the database connection fails."""
    pass
