"""
Model: TagSearch
"""

from typing import List

from tagstore.models.tag import Tag


class TagSearch:
    """Tags an object must have (all of them) and must not have (any of them)"""

    def __init__(self, included_tags=None, excluded_tags=None):
        self._included_tags: List[Tag] = list(included_tags or [])
        self._excluded_tags: List[Tag] = list(excluded_tags or [])

    def add_included_tag(self, tag: Tag) -> "TagSearch":
        self._included_tags.append(tag)
        return self

    def add_excluded_tag(self, tag: Tag) -> "TagSearch":
        self._excluded_tags.append(tag)
        return self

    @property
    def included_tags(self) -> List[Tag]:
        return list(self._included_tags)

    @property
    def excluded_tags(self) -> List[Tag]:
        return list(self._excluded_tags)

    def is_empty(self) -> bool:
        return not self._included_tags and not self._excluded_tags

    def __repr__(self):
        included = [t.name for t in self._included_tags]
        excluded = [t.name for t in self._excluded_tags]
        return f"TagSearch(included={included!r}, excluded={excluded!r})"
