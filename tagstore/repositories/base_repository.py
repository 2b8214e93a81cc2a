"""
Base class for repositories bound to a single connection
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from tagstore.constants import LOGGER_NAME
from tagstore.exceptions import StorageError, StorageStatementError

logger = logging.getLogger(LOGGER_NAME)


class BaseRepository:
    """Holds the connection and the statements built once at construction"""

    def __init__(self, connection, statements):
        self.connection = connection
        self.statements = self.prepare(connection, statements)

    @staticmethod
    def prepare(connection, statements):
        """Compile every statement against the connected dialect"""
        for name, statement in statements.items():
            try:
                statement.compile(dialect=connection.dialect)
            except SQLAlchemyError as e:
                raise StorageStatementError(f"Failed to prepare statement {name}: {e}") from e
        return dict(statements)

    def require_connection(self):
        if self.connection is None:
            raise StorageError("Tag store is closed")
        return self.connection

    def rollback(self):
        try:
            self.connection.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed: {e}")

    def release(self):
        """Forget the statements and the connection; the owner closes it"""
        self.statements.clear()
        self.connection = None
