"""
Repository for reading the host's objects through tag searches
"""

import logging

from tagstore.constants import LOGGER_NAME
from tagstore.decorators import storage_operation
from tagstore.repositories.base_repository import BaseRepository

logger = logging.getLogger(LOGGER_NAME)


class ObjectRepository(BaseRepository):
    """Runs the search queries and materializes their rows"""

    def __init__(self, connection, builder, materializer):
        self.builder = builder
        self.materializer = materializer
        super().__init__(connection, {
            "get_all": builder.build_all_objects(),
            "get_untagged": builder.build_untagged(),
        })

    @storage_operation("search database using tags")
    def search(self, search):
        if search.is_empty():
            statement = self.statements["get_all"]
        else:
            statement = self.builder.build_search(search)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Tag search {search!r}: {self.builder.to_sql(statement, self.connection.dialect)}")
        return self.materializer.materialize(self.connection.execute(statement))

    @storage_operation("get objects without tags")
    def get_untagged(self):
        return self.materializer.materialize(self.connection.execute(self.statements["get_untagged"]))
