"""
============================
SELECT statement builder.
============================

SelectBuilder composes a column or aggregate projection, a WHERE clause,
grouping, ordering and a row limit into one parameterized SELECT statement.

Clause order is fixed regardless of call order:
    SELECT <projection> FROM <table> [WHERE ...] [GROUP BY ...] [ORDER BY ...] [LIMIT n]

When aggregate functions (max/min/avg) are configured they replace the column
list entirely.

Usage:
    from querybuilder.query_builder import SelectBuilder

    rows = (
        SelectBuilder(connection, 'users')
        .columns('name', 'age')
        .where('age > ?', 18)
        .and_('status = ?', 'active')
        .order_by('name ASC')
        .limit(10)
        .execute()
    )

    # Aggregates: SELECT MAX(age) AS max_age, AVG(age) AS avg_age FROM users
    stats = SelectBuilder(connection, 'users').max('age').avg('age').execute()
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from core.exceptions import DatabaseError, ExecutionError
from querybuilder.predicates import PredicateClause, PredicateMixin

logger = logging.getLogger(__name__)


class SelectBuilder(PredicateMixin):
    """
    Fluent builder for SELECT statements.

    Every configuring method returns the builder itself. The builder is meant
    to be executed once.

    Attributes:
        connection: Executor exposing execute(sql, params)
        table_name: Table to select from
    """

    def __init__(self, connection, table_name: str):
        self.connection = connection
        self.table_name = table_name
        self._columns: List[str] = []
        self._aggregates: List[str] = []
        self._predicate = PredicateClause()
        self._group_by: Optional[str] = None
        self._order_by: Optional[str] = None
        self._limit: Optional[int] = None

    def columns(self, *columns: str) -> 'SelectBuilder':
        """
        Set the selected columns (replaces any earlier column list).

        Args:
            *columns: Column names; none means all columns (*)

        Returns:
            The builder, for chaining
        """
        self._columns = list(columns)
        return self

    def max(self, column: str) -> 'SelectBuilder':
        """Add ``MAX(column) AS max_column`` to the projection."""
        return self._aggregate('MAX', column)

    def min(self, column: str) -> 'SelectBuilder':
        """Add ``MIN(column) AS min_column`` to the projection."""
        return self._aggregate('MIN', column)

    def avg(self, column: str) -> 'SelectBuilder':
        """Add ``AVG(column) AS avg_column`` to the projection."""
        return self._aggregate('AVG', column)

    def group_by(self, column: Optional[str]) -> 'SelectBuilder':
        """Set the GROUP BY expression; a falsy value removes it."""
        self._group_by = column or None
        return self

    def order_by(self, expression: Optional[str]) -> 'SelectBuilder':
        """Set the ORDER BY expression (e.g. "name ASC"); a falsy value removes it."""
        self._order_by = expression or None
        return self

    def limit(self, number: Optional[int]) -> 'SelectBuilder':
        """
        Limit the number of returned rows.

        Args:
            number: Maximum row count, or None to remove the limit

        Returns:
            The builder, for chaining

        Raises:
            ValueError: If number is not a non-negative integer
        """
        if number is not None:
            if isinstance(number, bool) or not isinstance(number, int) or number < 0:
                raise ValueError(f"LIMIT must be a non-negative integer, got {number!r}")
        self._limit = number
        return self

    def render(self) -> Tuple[str, List[Any]]:
        """
        Render the SELECT statement.

        Returns:
            Tuple of (SQL text, positional parameters)
        """
        predicate_sql, parameters = self._predicate.render()

        parts = [f"SELECT {self._projection()} FROM {self.table_name}"]
        if predicate_sql:
            parts.append(predicate_sql)
        if self._group_by:
            parts.append(f"GROUP BY {self._group_by}")
        if self._order_by:
            parts.append(f"ORDER BY {self._order_by}")
        if self._limit is not None:
            parts.append(f"LIMIT {self._limit}")

        return " ".join(parts), parameters

    def execute(self) -> List[Dict[str, Any]]:
        """
        Execute the SELECT statement.

        Returns:
            Rows exactly as returned by the executor

        Raises:
            ExecutionError: If the executor reports a database failure
        """
        sql, parameters = self.render()
        logger.debug(f"Executing: {sql} | params={parameters}")

        try:
            rows = self.connection.execute(sql, parameters)
        except DatabaseError as e:
            logger.error(f"Error selecting from {self.table_name}: {e}")
            raise ExecutionError(f"Failed to select from '{self.table_name}': {e}") from e

        return rows

    def _aggregate(self, function: str, column: str) -> 'SelectBuilder':
        self._aggregates.append(f"{function}({column}) AS {function.lower()}_{column}")
        return self

    def _projection(self) -> str:
        if self._aggregates:
            return ", ".join(self._aggregates)
        if self._columns:
            return ", ".join(self._columns)
        return "*"
