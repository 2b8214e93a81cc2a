"""
tagstore - tags for the rows of any relational table

Attach named tags to objects of a host table and find them again by
tag-membership criteria (has all of these tags, has none of those).
"""

from tagstore.exceptions import (
    RowConversionError,
    StorageConnectionError,
    StorageError,
    StorageExecutionError,
    StorageSchemaError,
    StorageStatementError,
    TagStoreException,
    ValidationException,
)
from tagstore.models import ObjectSchema, Tag, TagCount, Taggable, TagSearch
from tagstore.settings import load_settings, reload_settings
from tagstore.tag_manager import TagManager
from tagstore.utils import configure_logging, configure_logging_from_settings

__version__ = "0.1.0"

__all__ = [
    "TagManager",
    "TagSearch",
    "Tag",
    "TagCount",
    "Taggable",
    "ObjectSchema",
    "TagStoreException",
    "ValidationException",
    "StorageError",
    "StorageConnectionError",
    "StorageSchemaError",
    "StorageStatementError",
    "StorageExecutionError",
    "RowConversionError",
    "load_settings",
    "reload_settings",
    "configure_logging",
    "configure_logging_from_settings",
]
