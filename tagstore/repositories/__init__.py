"""
Repositories package

Each repository wraps the statements for one table, all sharing the store's
connection:
- tag_repository.py
- tagassignment_repository.py
- object_repository.py (the host's object table, read through tag searches)
"""

from .tag_repository import TagRepository
from .tagassignment_repository import TagAssignmentRepository
from .object_repository import ObjectRepository
