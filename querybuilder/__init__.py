"""
====================================================
Fluent SQL statement builders.
====================================================

This package composes parameterized MySQL statements from records, column
maps and chained predicates, and runs them through an executor exposing
``execute(sql, params)``.

The package follows a clear organization:
    - type_mapper.py: Column type tags to SQL types
    - placeholders.py: Quote-aware ``?`` placeholder handling
    - predicates.py: WHERE/AND/OR accumulation shared by data builders
    - query_builder.py: SELECT builder
    - dml.py: INSERT / UPDATE / DELETE builders
    - ddl.py: CREATE / ALTER / DROP TABLE builders and column specs
    - table.py: Table facade handing out the builders

Architecture:
    - Builders render with render() and run with a terminal call
      (execute(), create(), delete())
    - Configuring calls return the builder itself for chaining
    - Parameter order always equals placeholder order

Example:
    >>> from querybuilder import Table
    >>>
    >>> users = Table(db, 'users')
    >>> sql, params = (
    ...     users.select()
    ...     .columns('name', 'age')
    ...     .where('age > ?', 18)
    ...     .and_('status = ?', 'active')
    ...     .render()
    ... )
    >>> sql
    'SELECT name, age FROM users WHERE age > ? AND status = ?'
"""

__version__ = "1.0.0"
__all__ = [
    'map_type', 'TYPE_MAPPING',
    'PredicateClause',
    'SelectBuilder',
    'InsertBuilder', 'UpdateBuilder', 'DeleteBuilder',
    'ColumnSpec', 'ForeignKey',
    'CreateTableBuilder', 'AlterTableBuilder', 'DropTableBuilder',
    'create_table_sql', 'drop_table_sql',
    'Table'
]

from .ddl import (
    AlterTableBuilder,
    ColumnSpec,
    CreateTableBuilder,
    DropTableBuilder,
    ForeignKey,
    create_table_sql,
    drop_table_sql,
)
from .dml import DeleteBuilder, InsertBuilder, UpdateBuilder
from .predicates import PredicateClause
from .query_builder import SelectBuilder
from .table import Table
from .type_mapper import TYPE_MAPPING, map_type
