"""
Decorators for repository operations
"""

import functools

from sqlalchemy.exc import SQLAlchemyError

from tagstore.exceptions import StorageExecutionError, TagStoreException


def storage_operation(action):
    """
    Run a repository method as one unit of work.

    The transaction is committed when the method returns, rolled back when it
    raises. SQLAlchemy and driver parameter errors are re-raised as
    StorageExecutionError naming the failed action.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            connection = self.require_connection()
            try:
                result = func(self, *args, **kwargs)
                connection.commit()
                return result
            except (SQLAlchemyError, OverflowError, TypeError) as e:
                # Driver errors on out of range parameters are not wrapped by SQLAlchemy
                self.rollback()
                raise StorageExecutionError(f"Failed to {action}: {e}") from e
            except TagStoreException:
                self.rollback()
                raise

        return wrapper

    return decorator
