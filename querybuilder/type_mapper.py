"""
==========================================
Column type mapping for DDL statements.
==========================================

Maps the abstract column type tags used in column specifications to MySQL
column types. Shared by CREATE TABLE and ALTER TABLE rendering.

    string  -> VARCHAR(255)
    number  -> INT
    boolean -> TINYINT(1)
    date    -> DATETIME
"""

from core.exceptions import UnsupportedTypeError

TYPE_MAPPING = {
    'string': 'VARCHAR(255)',
    'number': 'INT',
    'boolean': 'TINYINT(1)',
    'date': 'DATETIME',
}


def map_type(type_tag: str) -> str:
    """
    Map a column type tag to its SQL type.

    Args:
        type_tag: One of 'string', 'number', 'boolean', 'date'

    Returns:
        SQL column type literal

    Raises:
        UnsupportedTypeError: If the tag has no mapping
    """
    try:
        return TYPE_MAPPING[type_tag]
    except (KeyError, TypeError):
        raise UnsupportedTypeError(type_tag) from None
