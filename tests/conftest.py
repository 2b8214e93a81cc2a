"""
Pytest fixtures and configuration for tagstore tests
"""
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text

from tagstore import ObjectSchema, TagManager, TagSearch


@dataclass(frozen=True)
class Item:
    id: int
    name: str


def item_from_row(row):
    return Item(row.id, row.name)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.error = MagicMock()
    logger.warning = MagicMock()
    logger.debug = MagicMock()
    return logger


@pytest.fixture
def sample_items():
    """Items stored in the host table, in name order"""
    return [Item(1, 'alpha'), Item(2, 'bravo'), Item(3, 'charlie')]


@pytest.fixture
def engine(tmp_path, sample_items):
    """SQLite file database holding the host's items table"""
    engine = create_engine(f"sqlite:///{tmp_path / 'tags.db'}")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT NOT NULL)"))
        conn.execute(
            text("INSERT INTO items (id, name) VALUES (:id, :name)"),
            [{'id': item.id, 'name': item.name} for item in sample_items],
        )
    yield engine
    engine.dispose()


@pytest.fixture
def item_schema():
    return ObjectSchema(
        table_name='items',
        columns=['name'],
        group_by_column='id',
        order_by_column='name',
        id_column='id',
    )


@pytest.fixture
def store(engine, item_schema):
    """Tag store over the items table, closed on teardown"""
    manager = TagManager(item_schema, item_from_row, engine=engine, settings={})
    yield manager
    manager.close()


@pytest.fixture
def search():
    return TagSearch()


@pytest.fixture
def row_factory():
    return item_from_row
