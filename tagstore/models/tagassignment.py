"""
Model: TagAssignment
"""

from typing import Protocol, Union, runtime_checkable

from sqlalchemy import Column, Index, Integer, MetaData, Table

from tagstore.exceptions import ValidationException


@runtime_checkable
class Taggable(Protocol):
    """Anything owned by the host application that has an integer id"""

    id: int


def get_object_id(taggable: Union[Taggable, int]) -> int:
    """Return the object id of a taggable or a bare integer id"""
    object_id = taggable if isinstance(taggable, int) else getattr(taggable, "id", None)
    if isinstance(object_id, bool) or not isinstance(object_id, int):
        raise ValidationException(f"Taggable object must expose an integer id, got {taggable!r}")
    return object_id


def define_tag_assignments_table(metadata: MetaData, name: str) -> Table:
    # No primary key: duplicate (tag_id, object_id) pairs are possible
    return Table(
        name,
        metadata,
        Column("tag_id", Integer, nullable=False),
        Column("object_id", Integer, nullable=False),
        Index(f"ix_{name}_tag_id", "tag_id"),
        Index(f"ix_{name}_object_id", "object_id"),
    )
