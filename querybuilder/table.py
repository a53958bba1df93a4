"""
===================================
Table facade handing out builders.
===================================

Table binds a table name to a database handle and is the single place
builders are created. Every factory checks that the handle holds a live
connection first, so no SQL is rendered against a disconnected database.

Example:
    >>> users = db.table('users')
    >>> users.create_table({'id': {'type': 'number', 'primary_key': True}}).create()
    >>> users.insert().records({'id': 1}).execute()
    >>> users.select().where('id = ?', 1).execute()
    >>> users.drop_table().delete()
"""

from collections.abc import Mapping

from core.exceptions import NotConnectedError
from querybuilder.ddl import AlterTableBuilder, CreateTableBuilder, DropTableBuilder
from querybuilder.dml import DeleteBuilder, InsertBuilder, UpdateBuilder
from querybuilder.query_builder import SelectBuilder


class Table:
    """
    Factory of statement builders for one table.

    Attributes:
        db: Database handle; its ``connection`` attribute is the executor,
            None while disconnected
        table_name: Name of the table every builder targets
    """

    def __init__(self, db, table_name: str):
        self.db = db
        self.table_name = table_name

    def ensure_connection(self):
        """
        Return the live connection of the database handle.

        Raises:
            NotConnectedError: If the handle is not connected
        """
        connection = getattr(self.db, 'connection', None)
        if connection is None:
            raise NotConnectedError("Database connection not established.")
        return connection

    def select(self) -> SelectBuilder:
        return SelectBuilder(self.ensure_connection(), self.table_name)

    def insert(self) -> InsertBuilder:
        return InsertBuilder(self.ensure_connection(), self.table_name)

    def update(self) -> UpdateBuilder:
        return UpdateBuilder(self.ensure_connection(), self.table_name)

    def delete(self) -> DeleteBuilder:
        return DeleteBuilder(self.ensure_connection(), self.table_name)

    def create_table(self, columns: Mapping) -> CreateTableBuilder:
        """Builder creating this table with the given column specifications."""
        return CreateTableBuilder(self.ensure_connection(), self.table_name, columns)

    def alter_table(self) -> AlterTableBuilder:
        return AlterTableBuilder(self.ensure_connection(), self.table_name)

    def drop_table(self) -> DropTableBuilder:
        return DropTableBuilder(self.ensure_connection(), self.table_name)

    def __repr__(self):
        return f"Table({self.table_name!r})"
