"""
===========================================
Data Manipulation Language (DML) builders.
===========================================

This module provides fluent builders for INSERT, UPDATE and DELETE
statements. All values travel as positional ``?`` parameters.

Builders:
- InsertBuilder: One INSERT template executed once per record
- UpdateBuilder: SET clause plus WHERE clause
- DeleteBuilder: WHERE clause only

Usage:
    from querybuilder.dml import InsertBuilder, UpdateBuilder, DeleteBuilder

    InsertBuilder(connection, 'users').records([
        {'name': 'Alice', 'age': 25},
        {'name': 'Bob', 'age': 30},
    ]).execute()

    UpdateBuilder(connection, 'users').set({'age': 31}).where('name = ?', 'Bob').execute()

    DeleteBuilder(connection, 'users').where('age < ?', 18).execute()
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Sequence, Tuple, Union

from core.exceptions import (
    DatabaseError,
    EmptyDataError,
    ExecutionError,
    InconsistentRecordShapeError,
    NoColumnsSetError,
)
from querybuilder.predicates import PredicateClause, PredicateMixin

logger = logging.getLogger(__name__)

Record = Union[Mapping, Sequence[Tuple[str, Any]]]


def _is_pair(item) -> bool:
    return isinstance(item, (tuple, list)) and len(item) == 2 and isinstance(item[0], str)


def record_pairs(record: Record) -> List[Tuple[str, Any]]:
    """
    Convert a record into an ordered list of (column, value) pairs.

    Args:
        record: Mapping of column to value, or a sequence of pairs
            (tuples or two-item lists)

    Returns:
        List of (column, value) tuples in the record's order

    Raises:
        InconsistentRecordShapeError: If the record is malformed or a column
            appears more than once
    """
    if isinstance(record, Mapping):
        pairs = list(record.items())
    elif isinstance(record, (tuple, list)) and all(_is_pair(item) for item in record):
        pairs = [(column, value) for column, value in record]
    else:
        raise InconsistentRecordShapeError(
            f"Record must be a mapping or a sequence of (column, value) pairs, got {record!r}"
        )

    columns = [column for column, _ in pairs]
    if len(set(columns)) != len(columns):
        raise InconsistentRecordShapeError(f"Duplicate column in record: {columns}")
    return pairs


def normalize_records(data: Union[Record, Iterable[Record]]) -> Tuple[List[str], List[List[Any]]]:
    """
    Validate records and align their values to the first record's columns.

    Args:
        data: A single record or a sequence of records

    Returns:
        Tuple of (column names, one value list per record)

    Raises:
        EmptyDataError: If no record (or an empty first record) is given
        InconsistentRecordShapeError: If a record's columns differ from the first
    """
    if isinstance(data, Mapping):
        records = [data]
    else:
        try:
            records = list(data)
        except TypeError:
            raise InconsistentRecordShapeError(
                f"Expected a record or a sequence of records, got {data!r}"
            ) from None
        # A bare sequence of pairs is one record, not several
        if records and _is_pair(records[0]):
            records = [records]

    if not records:
        raise EmptyDataError("Data array should not be empty.")

    first = dict(record_pairs(records[0]))
    columns = list(first)
    if not columns:
        raise EmptyDataError("Records must contain at least one column.")

    rows = []
    for index, record in enumerate(records):
        values = dict(record_pairs(record))
        if set(values) != set(columns):
            raise InconsistentRecordShapeError(
                f"Record {index} has columns {sorted(values)}, expected {sorted(columns)}"
            )
        rows.append([values[column] for column in columns])

    return columns, rows


class InsertBuilder:
    """
    Builder for INSERT statements.

    The template is derived from the first record and issued once per record,
    sequentially and in order. A failure stops the remaining records; records
    already inserted are not rolled back.
    """

    def __init__(self, connection, table_name: str):
        self.connection = connection
        self.table_name = table_name
        self._columns: List[str] = []
        self._rows: List[List[Any]] = []

    def records(self, data) -> 'InsertBuilder':
        """
        Set the records to insert.

        Args:
            data: A mapping, a sequence of (column, value) pairs, or a
                non-empty sequence of either

        Returns:
            The builder, for chaining

        Raises:
            EmptyDataError: If data is empty
            InconsistentRecordShapeError: If records have different columns
        """
        self._columns, self._rows = normalize_records(data)
        return self

    def render(self) -> Tuple[str, List[List[Any]]]:
        """
        Render the INSERT template and the parameter list of each record.

        Raises:
            EmptyDataError: If records() was never called
        """
        if not self._rows:
            raise EmptyDataError("No records to insert.")

        column_list = ", ".join(self._columns)
        placeholders = ", ".join("?" for _ in self._columns)
        sql = f"INSERT INTO {self.table_name} ({column_list}) VALUES ({placeholders})"
        return sql, [list(row) for row in self._rows]

    def execute(self) -> list:
        """
        Insert every record, one statement per record.

        Returns:
            Executor results, one per record

        Raises:
            EmptyDataError: If records() was never called
            ExecutionError: On the first failing record
        """
        sql, rows = self.render()
        logger.debug(f"Executing: {sql} for {len(rows)} record(s)")

        results = []
        for index, parameters in enumerate(rows):
            try:
                results.append(self.connection.execute(sql, parameters))
            except DatabaseError as e:
                logger.error(
                    f"Error inserting record {index} into {self.table_name} "
                    f"({len(results)} record(s) already inserted): {e}"
                )
                raise ExecutionError(
                    f"Failed to insert record {index} into '{self.table_name}': {e}"
                ) from e

        logger.info(f"Inserted {len(results)} record(s) into {self.table_name}")
        return results


class UpdateBuilder(PredicateMixin):
    """
    Builder for UPDATE statements.

    SET values are bound as parameters ahead of the WHERE parameters:
    ``UPDATE t SET a = ?, b = ? WHERE id = ?`` -> [a, b, id].
    """

    def __init__(self, connection, table_name: str):
        self.connection = connection
        self.table_name = table_name
        self._values: dict = {}
        self._predicate = PredicateClause()

    def set(self, values: Mapping) -> 'UpdateBuilder':
        """
        Add columns to the SET clause; repeated columns keep the latest value.

        Args:
            values: Mapping of column name to new value

        Returns:
            The builder, for chaining
        """
        self._values.update(values)
        return self

    def render(self) -> Tuple[str, List[Any]]:
        """
        Render the UPDATE statement.

        Raises:
            NoColumnsSetError: If set() was never called with values
        """
        if not self._values:
            raise NoColumnsSetError("No columns have been set for update.")

        set_clause = ", ".join(f"{column} = ?" for column in self._values)
        predicate_sql, predicate_params = self._predicate.render()

        sql = f"UPDATE {self.table_name} SET {set_clause}"
        if predicate_sql:
            sql += f" {predicate_sql}"
        return sql, list(self._values.values()) + predicate_params

    def execute(self):
        """
        Execute the UPDATE statement.

        Returns:
            Executor result (affected_rows holds the updated row count)

        Raises:
            NoColumnsSetError: If set() was never called
            ExecutionError: If the executor reports a database failure
        """
        sql, parameters = self.render()
        if self._predicate.is_empty:
            logger.warning(f"UPDATE on {self.table_name} has no WHERE clause; all rows are affected")
        logger.debug(f"Executing: {sql} | params={parameters}")

        try:
            result = self.connection.execute(sql, parameters)
        except DatabaseError as e:
            logger.error(f"Error updating table {self.table_name}: {e}")
            raise ExecutionError(f"Failed to update '{self.table_name}': {e}") from e

        logger.info(f"Updated {getattr(result, 'affected_rows', '?')} row(s) in {self.table_name}")
        return result


class DeleteBuilder(PredicateMixin):
    """Builder for DELETE statements."""

    def __init__(self, connection, table_name: str):
        self.connection = connection
        self.table_name = table_name
        self._predicate = PredicateClause()

    def render(self) -> Tuple[str, List[Any]]:
        predicate_sql, parameters = self._predicate.render()
        sql = f"DELETE FROM {self.table_name}"
        if predicate_sql:
            sql += f" {predicate_sql}"
        return sql, parameters

    def execute(self):
        """
        Execute the DELETE statement.

        Returns:
            Executor result (affected_rows holds the deleted row count)

        Raises:
            ExecutionError: If the executor reports a database failure
        """
        sql, parameters = self.render()
        if self._predicate.is_empty:
            logger.warning(f"DELETE on {self.table_name} has no WHERE clause; all rows are affected")
        logger.debug(f"Executing: {sql} | params={parameters}")

        try:
            result = self.connection.execute(sql, parameters)
        except DatabaseError as e:
            logger.error(f"Error deleting from {self.table_name}: {e}")
            raise ExecutionError(f"Failed to delete from '{self.table_name}': {e}") from e

        logger.info(f"Rows affected: {getattr(result, 'affected_rows', '?')}")
        return result
