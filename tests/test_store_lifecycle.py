"""
Tests for store construction, failure handling and teardown
"""
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import CompileError, OperationalError, SQLAlchemyError

from tagstore import (
    ObjectSchema,
    StorageConnectionError,
    StorageError,
    StorageExecutionError,
    StorageSchemaError,
    StorageStatementError,
    TagManager,
    TagSearch,
)
from tagstore.repositories.base_repository import BaseRepository


class TestConstruction:
    """Tests for opening a store"""

    def test_creates_tag_tables(self, store, engine):
        tables = inspect(engine).get_table_names()
        assert 'tags' in tables
        assert 'tag_assignments' in tables

    def test_custom_table_names(self, engine, item_schema, row_factory):
        settings = {'tables': {'tags': 'labels', 'assignments': 'label_links'}}
        with TagManager(item_schema, row_factory, engine=engine, settings=settings) as store:
            tag = store.create_tag('x')
            store.create_tag_assignment(tag, 1)
            assert store.get_tags_for_object(1) == [tag]
        assert {'labels', 'label_links'} <= set(inspect(engine).get_table_names())

    def test_database_url(self, tmp_path, row_factory):
        """Test the store opens and disposes its own engine from a URL"""
        from sqlalchemy import create_engine, text

        url = f"sqlite:///{tmp_path / 'own.db'}"
        setup = create_engine(url)
        with setup.begin() as conn:
            conn.execute(text("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT)"))
        setup.dispose()

        schema = ObjectSchema('items', ['name'], 'id', 'name', id_column='id')
        with TagManager(schema, row_factory, database_url=url, settings={}) as store:
            assert store.create_tag('first').name == 'first'

    def test_unreachable_database(self, tmp_path, item_schema, row_factory):
        url = f"sqlite:///{tmp_path / 'missing' / 'dir' / 'tags.db'}"
        with pytest.raises(StorageConnectionError):
            TagManager(item_schema, row_factory, database_url=url, settings={})

    def test_unknown_dialect(self, item_schema, row_factory):
        with pytest.raises(StorageConnectionError):
            TagManager(item_schema, row_factory, database_url='nosuchdb://localhost/x', settings={})

    def test_missing_object_table(self, engine, row_factory):
        schema = ObjectSchema('widgets', ['name'], 'id', 'name', id_column='id')
        with pytest.raises(StorageSchemaError, match='widgets'):
            TagManager(schema, row_factory, engine=engine, settings={})

    def test_missing_object_column(self, engine, row_factory):
        schema = ObjectSchema('items', ['name', 'colour'], 'id', 'name', id_column='id')
        with pytest.raises(StorageSchemaError, match='colour'):
            TagManager(schema, row_factory, engine=engine, settings={})

    def test_object_columns_match_case_insensitively(self, engine):
        """Test schema column names need not match the declared case"""
        schema = ObjectSchema('items', ['Name'], 'id', 'Name', id_column='id')
        with TagManager(schema, lambda row: row.Name, engine=engine, settings={}) as store:
            assert store.execute_tag_search(TagSearch()) == ['alpha', 'bravo', 'charlie']

    def test_table_creation_failure(self, engine, item_schema, row_factory):
        with patch('tagstore.db.MetaData.create_all', side_effect=OperationalError('CREATE', {}, Exception('disk full'))):
            with pytest.raises(StorageSchemaError, match='disk full'):
                TagManager(item_schema, row_factory, engine=engine, settings={})

    def test_statement_preparation_failure(self, engine, item_schema, row_factory):
        with patch.object(BaseRepository, 'prepare', side_effect=StorageStatementError('bad statement')):
            with pytest.raises(StorageStatementError):
                TagManager(item_schema, row_factory, engine=engine, settings={})

    def test_prepare_wraps_compile_errors(self, store):
        statement = MagicMock()
        statement.compile.side_effect = CompileError('cannot compile')
        with pytest.raises(StorageStatementError, match='broken'):
            BaseRepository.prepare(store.connection, {'broken': statement})

    def test_logs_open(self, engine, item_schema, row_factory, mock_logger):
        with patch('tagstore.tag_manager.logger', mock_logger):
            TagManager(item_schema, row_factory, engine=engine, settings={}).close()
        assert mock_logger.info.call_count == 2


class TestExecutionFailures:
    """Tests for per-operation failures"""

    def test_failed_operation_raises_and_store_survives(self, store):
        error = OperationalError('INSERT', {}, Exception('database is locked'))
        with patch.object(store.connection, 'execute', side_effect=error):
            with pytest.raises(StorageExecutionError, match='Failed to create tag'):
                store.create_tag('locked')
        assert store.create_tag('free').name == 'free'

    def test_failed_search(self, store, search):
        error = OperationalError('SELECT', {}, Exception('no such table'))
        with patch.object(store.connection, 'execute', side_effect=error):
            with pytest.raises(StorageExecutionError, match='search database using tags'):
                store.execute_tag_search(search)

    def test_failed_commit_rolls_back(self, store):
        with patch.object(store.connection, 'commit', side_effect=SQLAlchemyError('commit failed')):
            with pytest.raises(StorageExecutionError):
                store.create_tag('never')
        assert store.tag_exists('never') is False

    def test_out_of_range_id(self, store):
        """Test ids the driver cannot bind fail like any other operation"""
        with pytest.raises(StorageExecutionError, match='get tag by id'):
            store.get_tag_by_id(2 ** 70)
        assert store.create_tag('after').name == 'after'


class TestClose:
    """Tests for releasing the store"""

    def test_close_is_idempotent(self, engine, item_schema, row_factory):
        store = TagManager(item_schema, row_factory, engine=engine, settings={})
        store.close()
        store.close()

    def test_use_after_close(self, engine, item_schema, row_factory):
        store = TagManager(item_schema, row_factory, engine=engine, settings={})
        store.close()
        with pytest.raises(StorageError, match='closed'):
            store.get_all_tags()

    def test_context_manager_closes(self, engine, item_schema, row_factory):
        with TagManager(item_schema, row_factory, engine=engine, settings={}) as store:
            pass
        assert store.connection is None
        assert store.tags.statements == {}

    def test_context_manager_closes_on_error(self, engine, item_schema, row_factory):
        with pytest.raises(RuntimeError):
            with TagManager(item_schema, row_factory, engine=engine, settings={}) as store:
                raise RuntimeError('caller failure')
        assert store.connection is None

    def test_close_reports_failures_after_releasing_everything(self, engine, item_schema, row_factory):
        store = TagManager(item_schema, row_factory, engine=engine, settings={})
        with patch.object(store.connection, 'close', side_effect=SQLAlchemyError('cannot close')):
            with pytest.raises(StorageError, match='cannot close'):
                store.close()
        assert store.connection is None
        assert store.objects.statements == {}

    def test_close_reports_connection_and_engine_failures_together(self, tmp_path, row_factory):
        from sqlalchemy import create_engine, text

        url = f"sqlite:///{tmp_path / 'own.db'}"
        setup = create_engine(url)
        with setup.begin() as conn:
            conn.execute(text("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT)"))
        setup.dispose()

        schema = ObjectSchema('items', ['name'], 'id', 'name', id_column='id')
        store = TagManager(schema, row_factory, database_url=url, settings={})
        engine = store.engine
        with patch.object(store.connection, 'close', side_effect=SQLAlchemyError('cannot close')), \
                patch.object(engine, 'dispose', side_effect=SQLAlchemyError('cannot dispose')):
            with pytest.raises(StorageError) as exc_info:
                store.close()
        assert 'connection: cannot close' in exc_info.value.message
        assert 'engine: cannot dispose' in exc_info.value.message
        assert store.connection is None
        engine.dispose()

    def test_borrowed_engine_not_disposed(self, engine, item_schema, row_factory):
        with TagManager(item_schema, row_factory, engine=engine, settings={}):
            pass
        with engine.connect() as conn:
            assert conn.closed is False
