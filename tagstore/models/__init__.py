"""
Models package

- tag.py: Tag / TagCount values and the tags table
- tagassignment.py: Taggable protocol and the assignments table
- search.py: TagSearch criteria
- object_schema.py: description of the host's object table
"""

from .tag import Tag, TagCount, define_tags_table
from .tagassignment import Taggable, define_tag_assignments_table, get_object_id
from .search import TagSearch
from .object_schema import ObjectSchema
