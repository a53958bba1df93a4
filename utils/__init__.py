"""
==========================
Utility Functions Package.
==========================

Database connectivity for the SQL layer: the Database handle, the
SQLAlchemy-backed executor, and engine/availability helpers.

Modules:
    database_utils: Connection lifecycle, statement execution, health checks
"""

__version__ = "1.0.0"
__all__ = [
    'Database',
    'SQLAlchemyExecutor',
    'ExecutionResult',
    'get_connection_url',
    'create_sqlalchemy_engine',
    'check_database_available',
    'wait_for_database'
]

from .database_utils import (
    Database,
    ExecutionResult,
    SQLAlchemyExecutor,
    check_database_available,
    create_sqlalchemy_engine,
    get_connection_url,
    wait_for_database,
)
