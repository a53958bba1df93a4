"""
===========================================
Configuration management for the SQL layer.
===========================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system ensures:
- Single source of truth for connection and logging settings
- Type conversion for numeric values
- Secure handling of credentials (never logged)

Example:
    >>> from core.config import config
    >>>
    >>> # SQLAlchemy URL for the configured MySQL server
    >>> url = config.get_connection_url()
    >>>
    >>> # Access individual settings
    >>> print(f"Host: {config.db_host}, Port: {config.db_port}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        host: MySQL server hostname or IP address
        port: MySQL server port number
        user: Database username
        password: Database password
        database: Database (schema) name
        driver: SQLAlchemy driver name (dialect+DBAPI)
    """

    host: str
    port: int
    user: str
    password: str
    database: str
    driver: str = 'mysql+mysqlconnector'

    def get_connection_url(self) -> URL:
        """Get SQLAlchemy connection URL.

        Returns:
            URL built with URL.create(), so special characters in the
            password need no manual quoting
        """
        return URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database
        )

    def get_connection_params(self) -> dict:
        """Get connection parameters as dictionary.

        Returns:
            Dictionary with keys: host, port, user, password, database
        """
        return {
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database
        }


@dataclass
class LoggingConfig:
    """Logging configuration settings.

    Attributes:
        level: Root log level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name; console only when None
        log_dir: Directory for the log file
    """

    level: str
    log_file: Optional[str]
    log_dir: Path


class Config:
    """Centralized configuration manager.

    Attributes:
        db: DatabaseConfig instance with connection settings
        logging: LoggingConfig instance with log settings

    Example:
        >>> config = Config()
        >>> url = config.get_connection_url()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            host=os.getenv('MYSQL_HOST', 'localhost'),
            port=int(os.getenv('MYSQL_PORT', '3306')),
            user=os.getenv('MYSQL_USER', 'root'),
            password=os.getenv('MYSQL_PASSWORD', ''),
            database=os.getenv('MYSQL_DATABASE', 'app'),
            driver=os.getenv('DB_DRIVER', 'mysql+mysqlconnector')
        )

        project_root = Path(__file__).parent.parent
        self.logging = LoggingConfig(
            level=os.getenv('LOG_LEVEL', 'INFO'),
            log_file=os.getenv('LOG_FILE') or None,
            log_dir=Path(os.getenv('LOG_DIR', str(project_root / 'logs')))
        )

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_user(self) -> str:
        """Get database username."""
        return self.db.user

    @property
    def db_password(self) -> str:
        """Get database password."""
        return self.db.password

    @property
    def db_name(self) -> str:
        """Get database name."""
        return self.db.database

    @property
    def db_driver(self) -> str:
        return self.db.driver

    def get_connection_url(self) -> URL:
        """Get SQLAlchemy connection URL for the configured database."""
        return self.db.get_connection_url()

    def get_connection_params(self) -> dict:
        """Get database connection parameters.

        Returns:
            Dictionary with keys: host, port, user, password, database
        """
        return self.db.get_connection_params()


# Global configuration instance
config = Config()
