import logging

from sqlalchemy import MetaData, create_engine, inspect
from sqlalchemy.exc import SQLAlchemyError

from tagstore.constants import LOGGER_NAME, TAGS_TABLE, TAG_ASSIGNMENTS_TABLE
from tagstore.exceptions import StorageConnectionError, StorageSchemaError
from tagstore.models.tag import define_tags_table
from tagstore.models.tagassignment import define_tag_assignments_table

# Retrieve main logger
logger = logging.getLogger(LOGGER_NAME)

# Columns SQLite provides on every table without declaring them
IMPLICIT_COLUMNS = {'rowid', 'oid', '_rowid_'}


def define_tables(tags_table=TAGS_TABLE, assignments_table=TAG_ASSIGNMENTS_TABLE):
    """Build a fresh MetaData holding the tags and assignments tables"""
    metadata = MetaData()
    tags = define_tags_table(metadata, tags_table)
    assignments = define_tag_assignments_table(metadata, assignments_table)
    return metadata, tags, assignments


def create_db_engine(url, echo=False):
    try:
        return create_engine(url, echo=echo)
    except (SQLAlchemyError, ImportError) as e:
        raise StorageConnectionError(f"Failed to create database engine for {url}: {e}") from e


def open_connection(engine):
    try:
        connection = engine.connect()
    except SQLAlchemyError as e:
        raise StorageConnectionError(f"Failed to create connection to database: {e}") from e
    logger.debug(f"Connected to {engine.url.render_as_string(hide_password=True)}")
    return connection


def create_tables(connection, metadata):
    try:
        metadata.create_all(connection, checkfirst=True)
        connection.commit()
    except SQLAlchemyError as e:
        connection.rollback()
        raise StorageSchemaError(f"Failed to create database tables: {e}") from e


def check_object_table(connection, object_schema):
    """Make sure the host's object table has every column the searches select"""
    try:
        inspector = inspect(connection)
        if not inspector.has_table(object_schema.table_name):
            raise StorageSchemaError(f"Object table {object_schema.table_name} does not exist")
        existing = {c["name"].lower() for c in inspector.get_columns(object_schema.table_name)}
        connection.commit()
    except SQLAlchemyError as e:
        connection.rollback()
        raise StorageSchemaError(f"Failed to inspect object table {object_schema.table_name}: {e}") from e

    wanted = set(object_schema.selected_columns)
    wanted.update((object_schema.group_by_column, object_schema.order_by_column))
    # SQLite identifiers are case-insensitive
    missing = sorted(
        c for c in wanted if c.lower() not in existing and c.lower() not in IMPLICIT_COLUMNS
    )
    if missing:
        raise StorageSchemaError(
            f"Object table {object_schema.table_name} is missing columns: {', '.join(missing)}"
        )
