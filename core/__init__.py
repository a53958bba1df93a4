"""
=========================================
Core infrastructure package for the SQL layer.
=========================================

This package provides configuration management, logging infrastructure and
the exception taxonomy shared by the query builders and the executor.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities
    exceptions: Exception hierarchy rooted at QueryBuilderError

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Connecting to {config.db_host}")
"""

__version__ = "0.1.0"
__all__ = [
    'get_logger', 'setup_logging', 'get_module_logger', 'config', 'Config',
    'QueryBuilderError', 'NotConnectedError', 'EmptyDataError',
    'NoColumnsSetError', 'InconsistentRecordShapeError',
    'ParameterMismatchError', 'UnsupportedTypeError', 'SchemaError',
    'MissingReferenceError', 'ColumnSpecError', 'ExecutionError',
    'DatabaseError', 'DatabaseConnectionError'
]

from core.config import Config, config
from core.exceptions import (
    ColumnSpecError,
    DatabaseConnectionError,
    DatabaseError,
    EmptyDataError,
    ExecutionError,
    InconsistentRecordShapeError,
    MissingReferenceError,
    NoColumnsSetError,
    NotConnectedError,
    ParameterMismatchError,
    QueryBuilderError,
    SchemaError,
    UnsupportedTypeError,
)
from core.logger import get_logger, get_module_logger, setup_logging
