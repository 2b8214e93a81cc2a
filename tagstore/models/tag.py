"""
Model: Tag
"""

from dataclasses import dataclass

from sqlalchemy import Column, Index, Integer, MetaData, String, Table


@dataclass(frozen=True)
class Tag:
    id: int
    name: str

    def to_dict(self):
        return {'id': self.id, 'name': self.name}


@dataclass(frozen=True)
class TagCount:
    tag: Tag
    count: int

    def to_dict(self):
        return {**self.tag.to_dict(), 'count': self.count}


def define_tags_table(metadata: MetaData, name: str) -> Table:
    # Names are not unique: callers check tag_exists() before creating
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String, nullable=False),
        Index(f"ix_{name}_name", "name"),
        # Ids are never handed out twice, even after deletes
        sqlite_autoincrement=True,
    )
