"""
Repository for TagAssignment database operations
"""

import logging

from sqlalchemy import and_, bindparam, delete, exists, insert, select

from tagstore.constants import LOGGER_NAME
from tagstore.decorators import storage_operation
from tagstore.repositories.base_repository import BaseRepository

logger = logging.getLogger(LOGGER_NAME)


class TagAssignmentRepository(BaseRepository):
    """Repository for TagAssignment database operations"""

    def __init__(self, connection, assignments):
        self.table = assignments
        match_pair = and_(
            assignments.c.tag_id == bindparam("tag_id"),
            assignments.c.object_id == bindparam("object_id"),
        )
        super().__init__(connection, {
            "create": insert(assignments),
            "delete": delete(assignments).where(match_pair),
            "delete_by_tag": delete(assignments).where(assignments.c.tag_id == bindparam("tag_id")),
            "delete_by_object": delete(assignments).where(assignments.c.object_id == bindparam("object_id")),
            "exists": select(exists().where(match_pair)),
        })

    @storage_operation("create tag assignment")
    def create(self, tag_id, object_id):
        self.connection.execute(self.statements["create"], {"tag_id": tag_id, "object_id": object_id})
        logger.debug(f"Assigned tag {tag_id} to object {object_id}")

    @storage_operation("delete tag assignment")
    def delete_by_tag_and_object(self, tag_id, object_id):
        """Delete a specific tag-object assignment"""
        result = self.connection.execute(self.statements["delete"], {"tag_id": tag_id, "object_id": object_id})
        return result.rowcount

    @storage_operation("delete tag assignments by tag")
    def delete_by_tag(self, tag_id):
        result = self.connection.execute(self.statements["delete_by_tag"], {"tag_id": tag_id})
        return result.rowcount

    @storage_operation("delete tag assignments by object")
    def delete_by_object(self, object_id):
        result = self.connection.execute(self.statements["delete_by_object"], {"object_id": object_id})
        return result.rowcount

    @storage_operation("check if tag assignment exists")
    def exists(self, tag_id, object_id):
        result = self.connection.execute(self.statements["exists"], {"tag_id": tag_id, "object_id": object_id})
        return bool(result.scalar())
