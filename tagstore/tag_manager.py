"""
Tag manager: tags, tag assignments and tag searches over a host object table
"""

import logging
from typing import Callable, Generic, List, Optional, TypeVar, Union

from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError

from tagstore.constants import LOGGER_NAME
from tagstore.db import check_object_table, create_db_engine, create_tables, define_tables, open_connection
from tagstore.exceptions import StorageError, TagStoreException, ValidationException
from tagstore.models.object_schema import ObjectSchema
from tagstore.models.search import TagSearch
from tagstore.models.tag import Tag, TagCount
from tagstore.models.tagassignment import Taggable, get_object_id
from tagstore.repositories import ObjectRepository, TagAssignmentRepository, TagRepository
from tagstore.services import RowMaterializer, SearchQueryBuilder
from tagstore.settings import load_settings, merge_settings
from tagstore.utils import configure_logging_from_settings

logger = logging.getLogger(LOGGER_NAME)

T = TypeVar("T")


def _require_name(name):
    if not isinstance(name, str):
        raise ValidationException(f"Tag name must be a string, got {name!r}")
    return name


class TagManager(Generic[T]):
    """
    Tags the rows of a host table and finds them again by tag.

    The connection is opened once here and held until close(). Every method
    is one blocking request committed on success; storage failures raise
    StorageExecutionError and leave the store usable. The manager does no
    locking, callers sharing it across threads must serialize access.

    Args:
        object_schema: ObjectSchema describing the host's object table
        row_factory: callable turning one result Row into a T
        database_url: SQLAlchemy URL, defaults to settings database.url
        engine: existing Engine to use instead of a URL (not disposed on close)
        settings: settings mapping merged over the defaults, defaults to
            load_settings()
    """

    def __init__(
        self,
        object_schema: ObjectSchema,
        row_factory: Callable[[Row], T],
        database_url: Optional[str] = None,
        engine=None,
        settings: Optional[dict] = None,
    ):
        self.settings = merge_settings(settings) if settings is not None else load_settings()
        configure_logging_from_settings(self.settings)
        self.object_schema = object_schema
        self.cascade_tag_delete = bool(self.settings["behaviour"]["cascade_tag_delete"])
        materializer = RowMaterializer(row_factory)

        self._owns_engine = engine is None
        if engine is None:
            engine = create_db_engine(
                database_url or self.settings["database"]["url"],
                echo=bool(self.settings["database"]["echo"]),
            )
        self.engine = engine
        self.connection = None
        self._repositories = []
        self._closed = False

        try:
            self.connection = open_connection(self.engine)
            self.metadata, self.tags_table, self.assignments_table = define_tables(
                self.settings["tables"]["tags"], self.settings["tables"]["assignments"]
            )
            if self.settings["tables"]["create"]:
                create_tables(self.connection, self.metadata)
            check_object_table(self.connection, object_schema)

            self.query_builder = SearchQueryBuilder(object_schema, self.assignments_table)
            self.tags = TagRepository(self.connection, self.tags_table, self.assignments_table)
            self.assignments = TagAssignmentRepository(self.connection, self.assignments_table)
            self.objects = ObjectRepository(self.connection, self.query_builder, materializer)
            self._repositories = [self.tags, self.assignments, self.objects]
        except TagStoreException:
            self._closed = True
            for error in self._release_resources():
                logger.warning(f"Cleanup after failed construction: {error}")
            raise

        logger.info(f"Tag store opened on {self.engine.url.render_as_string(hide_password=True)} "
                    f"for objects in {object_schema.table_name}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    # Tags

    def create_tag(self, name: str) -> Tag:
        return self.tags.create(_require_name(name))

    def rename_tag(self, tag: Tag, new_name: str) -> Tag:
        """Rename a tag; the returned Tag replaces the one passed in"""
        self.tags.update(tag.id, _require_name(new_name))
        return Tag(tag.id, new_name)

    def delete_tag(self, tag: Tag) -> None:
        """
        Delete a tag.

        Its assignments are only removed when cascade_tag_delete is enabled,
        otherwise call delete_tag_assignments_by_tag() as well.
        """
        self.tags.delete(tag.id, cascade=self.cascade_tag_delete)

    def tag_exists(self, name: str) -> bool:
        return self.tags.exists(name)

    def get_all_tags(self) -> List[Tag]:
        return self.tags.get_all()

    def get_all_tags_with_counts(self) -> List[TagCount]:
        """Tags with their number of assignments, most used first"""
        return self.tags.get_all_with_counts()

    def get_tags_for_object(self, taggable: Union[Taggable, int]) -> List[Tag]:
        return self.tags.get_for_object(get_object_id(taggable))

    def get_tag_by_id(self, id: int) -> Optional[Tag]:
        return self.tags.get_by_id(id)

    def get_tag_by_name(self, name: str) -> Optional[Tag]:
        return self.tags.get_by_name(name)

    def count_tags(self) -> int:
        return self.tags.count()

    # Assignments

    def create_tag_assignment(self, tag: Tag, taggable: Union[Taggable, int]) -> None:
        self.assignments.create(tag.id, get_object_id(taggable))

    def delete_tag_assignment(self, tag: Tag, taggable: Union[Taggable, int]) -> None:
        self.assignments.delete_by_tag_and_object(tag.id, get_object_id(taggable))

    def delete_tag_assignments_by_tag(self, tag: Tag) -> None:
        self.assignments.delete_by_tag(tag.id)

    def delete_tag_assignments_by_object(self, taggable: Union[Taggable, int]) -> None:
        self.assignments.delete_by_object(get_object_id(taggable))

    def tag_assignment_exists(self, tag: Tag, taggable: Union[Taggable, int]) -> bool:
        return self.assignments.exists(tag.id, get_object_id(taggable))

    # Objects

    def execute_tag_search(self, tag_search: TagSearch) -> List[T]:
        """Objects having every included tag and none of the excluded ones"""
        return self.objects.search(tag_search)

    def get_objects_without_tags(self) -> List[T]:
        return self.objects.get_untagged()

    # Teardown

    def close(self) -> None:
        """
        Release the statements, the connection and the engine when owned.

        Every release is attempted; failures are reported together once the
        rest has been released. Calling close() again does nothing.
        """
        if self._closed:
            return
        self._closed = True
        errors = self._release_resources()
        if errors:
            raise StorageError(f"Failed to close tag store: {'; '.join(errors)}")
        logger.info("Tag store closed")

    def _release_resources(self):
        errors = []
        for repository in self._repositories:
            repository.release()
        if self.connection is not None:
            try:
                self.connection.close()
            except SQLAlchemyError as e:
                errors.append(f"connection: {e}")
            self.connection = None
        if self._owns_engine:
            try:
                self.engine.dispose()
            except SQLAlchemyError as e:
                errors.append(f"engine: {e}")
        return errors
