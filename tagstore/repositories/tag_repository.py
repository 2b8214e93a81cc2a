"""
Repository for Tag database operations
"""

import logging

from sqlalchemy import bindparam, delete, exists, func, insert, select, update

from tagstore.constants import LOGGER_NAME
from tagstore.decorators import storage_operation
from tagstore.models.tag import Tag, TagCount
from tagstore.repositories.base_repository import BaseRepository

logger = logging.getLogger(LOGGER_NAME)


class TagRepository(BaseRepository):
    """Repository for Tag database operations"""

    def __init__(self, connection, tags, assignments):
        self.table = tags
        usage_count = func.count(assignments.c.object_id).label("usage_count")
        super().__init__(connection, {
            "create": insert(tags),
            "rename": update(tags).where(tags.c.id == bindparam("tag_id")).values(name=bindparam("new_name")),
            "delete": delete(tags).where(tags.c.id == bindparam("tag_id")),
            "delete_assignments": delete(assignments).where(assignments.c.tag_id == bindparam("tag_id")),
            "get_all": select(tags.c.id, tags.c.name).order_by(tags.c.name, tags.c.id),
            "get_all_with_counts": (
                select(tags.c.id, tags.c.name, usage_count)
                .select_from(tags.outerjoin(assignments, assignments.c.tag_id == tags.c.id))
                .group_by(tags.c.id, tags.c.name)
                .order_by(usage_count.desc(), tags.c.name, tags.c.id)
            ),
            "get_for_object": (
                select(tags.c.id, tags.c.name)
                .join(assignments, assignments.c.tag_id == tags.c.id)
                .where(assignments.c.object_id == bindparam("object_id"))
                .order_by(tags.c.name, tags.c.id)
            ),
            "exists": select(exists().where(tags.c.name == bindparam("tag_name"))),
            "get_by_id": select(tags.c.id, tags.c.name).where(tags.c.id == bindparam("tag_id")),
            "get_by_name": (
                select(tags.c.id, tags.c.name)
                .where(tags.c.name == bindparam("tag_name"))
                .order_by(tags.c.id)
                .limit(1)
            ),
            "count": select(func.count()).select_from(tags),
        })

    @storage_operation("create tag")
    def create(self, name):
        """Insert a tag and return it with its generated id"""
        result = self.connection.execute(self.statements["create"], {"name": name})
        tag = Tag(result.inserted_primary_key[0], name)
        logger.debug(f"Created tag {tag.id} ({name})")
        return tag

    @storage_operation("rename tag")
    def update(self, id, new_name):
        """Rename a tag, returns the number of rows touched"""
        result = self.connection.execute(self.statements["rename"], {"tag_id": id, "new_name": new_name})
        return result.rowcount

    @storage_operation("delete tag")
    def delete(self, id, cascade=False):
        """Delete a tag, and its assignments in the same transaction when cascading"""
        if cascade:
            self.connection.execute(self.statements["delete_assignments"], {"tag_id": id})
        result = self.connection.execute(self.statements["delete"], {"tag_id": id})
        logger.debug(f"Deleted tag {id} (cascade={cascade})")
        return result.rowcount > 0

    @storage_operation("get all tags")
    def get_all(self):
        rows = self.connection.execute(self.statements["get_all"])
        return [Tag(row.id, row.name) for row in rows]

    @storage_operation("get all tags with counts")
    def get_all_with_counts(self):
        rows = self.connection.execute(self.statements["get_all_with_counts"])
        return [TagCount(Tag(row.id, row.name), row.usage_count) for row in rows]

    @storage_operation("get tags for object")
    def get_for_object(self, object_id):
        """Get the tags assigned to an object"""
        rows = self.connection.execute(self.statements["get_for_object"], {"object_id": object_id})
        return [Tag(row.id, row.name) for row in rows]

    @storage_operation("check if tag exists")
    def exists(self, name):
        return bool(self.connection.execute(self.statements["exists"], {"tag_name": name}).scalar())

    @storage_operation("get tag by id")
    def get_by_id(self, id):
        row = self.connection.execute(self.statements["get_by_id"], {"tag_id": id}).first()
        return Tag(row.id, row.name) if row else None

    @storage_operation("get tag by name")
    def get_by_name(self, name):
        """First tag with that name, oldest first"""
        row = self.connection.execute(self.statements["get_by_name"], {"tag_name": name}).first()
        return Tag(row.id, row.name) if row else None

    @storage_operation("count tags")
    def count(self):
        """Count total Tag records"""
        return self.connection.execute(self.statements["count"]).scalar_one()
