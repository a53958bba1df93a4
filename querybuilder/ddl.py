"""
=====================================================================
Data Definition Language (DDL) builders for table creation and changes.
=====================================================================

Provides column specifications, pure SQL rendering functions, and builders
that execute CREATE TABLE, ALTER TABLE and DROP TABLE statements.

Column types are given as tags and mapped by querybuilder.type_mapper:
string -> VARCHAR(255), number -> INT, boolean -> TINYINT(1), date -> DATETIME.

Every DDL failure is raised as SchemaError (MissingReferenceError when a
foreign key points at a table or column that does not exist).

Functions:
    column_definition_sql: Render one column definition
    create_table_sql: Render CREATE TABLE with trailing foreign keys
    add_column_sql / drop_column_sql / modify_column_sql: ALTER TABLE statements
    drop_table_sql: Render DROP TABLE

Example:
    >>> from querybuilder.ddl import CreateTableBuilder
    >>>
    >>> CreateTableBuilder(connection, 'users', {
    ...     'id': {'type': 'number', 'primary_key': True, 'auto_increment': True},
    ...     'name': {'type': 'string', 'not_null': True},
    ...     'team_id': {'type': 'number',
    ...                 'foreign_key': {'references': 'teams', 'referenced_column': 'id'}},
    ... }).create()
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Dict, Optional, Union

from core.exceptions import (
    ColumnSpecError,
    DatabaseError,
    MissingReferenceError,
    SchemaError,
)
from querybuilder.type_mapper import map_type

logger = logging.getLogger(__name__)

# MySQL error numbers for foreign keys whose parent table/column is missing.
# 1215 (ER_CANNOT_ADD_FOREIGN) is left out: it also covers type mismatches.
MISSING_REFERENCE_CODES = frozenset({
    1822,  # ER_FK_NO_INDEX_PARENT
    1824,  # ER_FK_CANNOT_OPEN_PARENT
    3734,  # ER_FK_NO_COLUMN_PARENT
})


@dataclass(frozen=True)
class ForeignKey:
    """Foreign key target of a column."""

    references: str
    referenced_column: str


@dataclass(frozen=True)
class ColumnSpec:
    """
    Definition of one table column.

    Attributes:
        type: Type tag (string, number, boolean, date)
        primary_key: Render PRIMARY KEY
        auto_increment: Render AUTO_INCREMENT; only honoured for number primary keys
        not_null: Render NOT NULL
        foreign_key: Optional foreign key target
    """

    type: str
    primary_key: bool = False
    auto_increment: bool = False
    not_null: bool = False
    foreign_key: Optional[ForeignKey] = None

    @classmethod
    def from_value(cls, value: Union['ColumnSpec', str, Mapping]) -> 'ColumnSpec':
        """
        Build a ColumnSpec from a spec, a bare type tag or a mapping.

        Mapping keys may be snake_case (primary_key) or camelCase (primaryKey).

        Raises:
            ColumnSpecError: If the value cannot describe a column
        """
        if isinstance(value, ColumnSpec):
            return value
        if isinstance(value, str):
            return cls(type=value)
        if not isinstance(value, Mapping):
            raise ColumnSpecError(f"Invalid column specification: {value!r}")
        if 'type' not in value:
            raise ColumnSpecError(f"Column specification without type: {value!r}")

        foreign_key = _pick(value, 'foreign_key', 'foreignKey')
        if foreign_key is not None and not isinstance(foreign_key, ForeignKey):
            try:
                foreign_key = ForeignKey(
                    references=foreign_key['references'],
                    referenced_column=_pick(foreign_key, 'referenced_column', 'referencedColumn'),
                )
            except (KeyError, TypeError) as e:
                raise ColumnSpecError(f"Invalid foreign key specification: {foreign_key!r}") from e
            if foreign_key.referenced_column is None:
                raise ColumnSpecError("Foreign key specification without referenced column")

        return cls(
            type=value['type'],
            primary_key=bool(_pick(value, 'primary_key', 'primaryKey')),
            auto_increment=bool(_pick(value, 'auto_increment', 'autoIncrement')),
            not_null=bool(_pick(value, 'not_null', 'notNull')),
            foreign_key=foreign_key,
        )


def _pick(mapping: Mapping, snake: str, camel: str):
    if snake in mapping:
        return mapping[snake]
    return mapping.get(camel)


def normalize_columns(columns: Mapping) -> Dict[str, ColumnSpec]:
    """
    Convert a column mapping to ColumnSpecs and validate it.

    Raises:
        ColumnSpecError: If there are no columns or more than one primary key
    """
    if not columns:
        raise ColumnSpecError("A table needs at least one column.")

    specs = {name: ColumnSpec.from_value(value) for name, value in columns.items()}

    primary_keys = [name for name, spec in specs.items() if spec.primary_key]
    if len(primary_keys) > 1:
        raise ColumnSpecError(f"Only one primary key column is allowed, got {primary_keys}")

    return specs


def column_definition_sql(name: str, spec: ColumnSpec) -> str:
    """
    Render ``<name> <type>[ PRIMARY KEY[ AUTO_INCREMENT]][ NOT NULL]``.

    Raises:
        UnsupportedTypeError: If the type tag has no mapping
    """
    column_def = f"{name} {map_type(spec.type)}"

    if spec.primary_key:
        column_def += " PRIMARY KEY"
        if spec.auto_increment and spec.type == 'number':
            column_def += " AUTO_INCREMENT"

    if spec.auto_increment and not (spec.primary_key and spec.type == 'number'):
        logger.warning(f"AUTO_INCREMENT ignored on column '{name}' (needs a number primary key)")

    if spec.not_null:
        column_def += " NOT NULL"

    return column_def


def create_table_sql(table_name: str, columns: Mapping) -> str:
    """
    Generate CREATE TABLE statement.

    Column definitions keep the caller's order; foreign key constraints
    follow all column definitions.

    Args:
        table_name: Table to create
        columns: Mapping of column name to ColumnSpec, mapping or type tag

    Returns:
        SQL CREATE TABLE statement

    Example:
        >>> create_table_sql('tbl', {'id': {'type': 'number', 'primary_key': True}})
        'CREATE TABLE tbl (id INT PRIMARY KEY)'
    """
    specs = normalize_columns(columns)

    definitions = []
    foreign_keys = []
    for name, spec in specs.items():
        definitions.append(column_definition_sql(name, spec))
        if spec.foreign_key:
            fk = spec.foreign_key
            foreign_keys.append(
                f"FOREIGN KEY ({name}) REFERENCES {fk.references}({fk.referenced_column})"
            )

    return f"CREATE TABLE {table_name} ({', '.join(definitions + foreign_keys)})"


def add_column_sql(table_name: str, column_name: str, data_type: str) -> str:
    return f"ALTER TABLE {table_name} ADD {column_name} {map_type(data_type)}"


def drop_column_sql(table_name: str, column_name: str) -> str:
    return f"ALTER TABLE {table_name} DROP COLUMN {column_name}"


def modify_column_sql(table_name: str, column_name: str, data_type: str) -> str:
    return f"ALTER TABLE {table_name} MODIFY COLUMN {column_name} {map_type(data_type)}"


def drop_table_sql(table_name: str) -> str:
    return f"DROP TABLE {table_name}"


def _execute_ddl(connection, sql: str, action: str):
    """Run one DDL statement, translating executor failures into SchemaError."""
    logger.debug(f"Executing: {sql}")
    try:
        return connection.execute(sql, [])
    except DatabaseError as e:
        if e.code in MISSING_REFERENCE_CODES:
            logger.error(f"Error {action}: referenced table or column does not exist ({e})")
            raise MissingReferenceError(
                f"Failed {action}: referenced table or column does not exist: {e}"
            ) from e
        logger.error(f"Error {action}: {e}")
        raise SchemaError(f"Failed {action}: {e}") from e


class CreateTableBuilder:
    """
    Builder for CREATE TABLE statements.

    Column definitions are validated and rendered before anything is
    executed, so an unsupported type or a second primary key never reaches
    the database.

    Attributes:
        connection: Executor exposing execute(sql, params)
        table_name: Table to create
        columns: Column name to specification mapping, in definition order
    """

    def __init__(self, connection, table_name: str, columns: Mapping):
        self.connection = connection
        self.table_name = table_name
        self.columns = dict(columns)

    def render(self) -> str:
        return create_table_sql(self.table_name, self.columns)

    def create(self):
        """
        Create the table.

        Returns:
            Executor result

        Raises:
            ColumnSpecError: If the column definitions are invalid
            UnsupportedTypeError: If a column type has no mapping
            MissingReferenceError: If a foreign key target does not exist
            SchemaError: For any other failure
        """
        sql = self.render()
        result = _execute_ddl(self.connection, sql, f"creating table '{self.table_name}'")
        logger.info(f"Table {self.table_name} created successfully.")
        return result


class AlterTableBuilder:
    """Runs ADD / DROP / MODIFY COLUMN statements against one table."""

    def __init__(self, connection, table_name: str):
        self.connection = connection
        self.table_name = table_name

    def add_column(self, column_name: str, data_type: str):
        """
        Add a column.

        Args:
            column_name: New column name
            data_type: Type tag (string, number, boolean, date)

        Returns:
            Executor result

        Raises:
            UnsupportedTypeError: If the type tag has no mapping
            SchemaError: If the statement fails
        """
        sql = add_column_sql(self.table_name, column_name, data_type)
        result = _execute_ddl(
            self.connection, sql, f"adding column '{column_name}' to '{self.table_name}'"
        )
        logger.info(f"Column {column_name} added successfully to {self.table_name}.")
        return result

    def drop_column(self, column_name: str):
        """Drop a column; raises SchemaError on failure."""
        sql = drop_column_sql(self.table_name, column_name)
        result = _execute_ddl(
            self.connection, sql, f"dropping column '{column_name}' from '{self.table_name}'"
        )
        logger.info(f"Column {column_name} dropped successfully from {self.table_name}.")
        return result

    def modify_column(self, column_name: str, data_type: str):
        """Change a column's type; raises SchemaError on failure."""
        sql = modify_column_sql(self.table_name, column_name, data_type)
        result = _execute_ddl(
            self.connection, sql, f"modifying column '{column_name}' in '{self.table_name}'"
        )
        logger.info(f"Column {column_name} modified successfully in {self.table_name}.")
        return result


class DropTableBuilder:
    """Builder for DROP TABLE statements."""

    def __init__(self, connection, table_name: str):
        self.connection = connection
        self.table_name = table_name

    def render(self) -> str:
        return drop_table_sql(self.table_name)

    def delete(self):
        """
        Drop the table.

        Raises:
            SchemaError: If the statement fails, so callers never assume a
                table is gone when it is not
        """
        result = _execute_ddl(self.connection, self.render(), f"dropping table '{self.table_name}'")
        logger.info(f"Table {self.table_name} dropped successfully.")
        return result
