"""
tagstore - Custom Exceptions
"""
import structlog

logger = structlog.get_logger('exceptions')


class TagStoreException(Exception):
    """Base exception for tagstore"""
    def __init__(self, message: str, code: str = "TAGSTORE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'error': True,
            'code': self.code,
            'message': self.message
        }


class ValidationException(TagStoreException):
    """Validation-related exceptions"""
    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")
        logger.warning(f"Validation error: {message}")


class StorageError(TagStoreException):
    """Storage-related exceptions"""
    def __init__(self, message: str, code: str = "STORAGE_ERROR"):
        super().__init__(message, code=code)
        logger.error(f"Storage error: {message}", code=code)


class StorageConnectionError(StorageError):
    """The underlying store could not be opened"""
    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_CONNECTION_ERROR")


class StorageSchemaError(StorageError):
    """Creating or checking the tag tables failed"""
    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_SCHEMA_ERROR")


class StorageStatementError(StorageError):
    """A statement could not be compiled for the connected dialect"""
    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_STATEMENT_ERROR")


class StorageExecutionError(StorageError):
    """A single operation failed while executing"""
    def __init__(self, message: str, code: str = "STORAGE_EXECUTION_ERROR"):
        super().__init__(message, code=code)


class RowConversionError(StorageExecutionError):
    """The caller supplied row factory failed on a result row"""
    def __init__(self, message: str, row_index: int = None):
        self.row_index = row_index
        super().__init__(message, code="ROW_CONVERSION_ERROR")

    def to_dict(self):
        data = super().to_dict()
        data['row_index'] = self.row_index
        return data
