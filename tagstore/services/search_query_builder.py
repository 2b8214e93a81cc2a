"""Builds the tag search queries against the host's object table.

A search is two separate relational operations:

* inclusion is an intersection: the assignments table is joined to itself
  once per included tag, each copy pinned to one tag id, so an object only
  survives if it has an edge to every included tag;
* exclusion is a single correlated ``NOT EXISTS`` over the assignments table
  with ``tag_id IN (...)``, whatever the number of excluded tags.

The object table is joined last to pull the configured columns, then grouped
so an object reached through several join paths comes out once.
"""

from dataclasses import dataclass

from sqlalchemy import column, exists, select, table

from tagstore.constants import (
    ASSIGNMENTS_ALIAS,
    EXCLUDED_ALIAS,
    INCLUDED_ALIAS_PREFIX,
    OBJECT_ALIAS,
)


@dataclass(frozen=True)
class SearchPlan:
    """Shape of the query generated for a TagSearch"""

    intersection_joins: int
    exclusion_subquery: bool
    grouped: bool


class SearchQueryBuilder:
    def __init__(self, object_schema, assignments):
        self.object_schema = object_schema
        self.assignments = assignments

        names = list(object_schema.selected_columns)
        for extra in (object_schema.group_by_column, object_schema.order_by_column):
            if extra not in names:
                names.append(extra)
        self.objects = table(object_schema.table_name, *[column(name) for name in names])

    def _columns(self, source):
        return [source.c[name] for name in self.object_schema.selected_columns]

    def build_all_objects(self):
        """Every object, no grouping"""
        return select(*self._columns(self.objects)).order_by(self.objects.c[self.object_schema.order_by_column])

    def build_search(self, search):
        """
        Build the query returning the objects matching a TagSearch.

        Args:
            search: TagSearch criteria, an empty one lists every object

        Returns:
            SQLAlchemy Select
        """
        if search.is_empty():
            return self.build_all_objects()

        schema = self.object_schema
        edges = self.assignments.alias(ASSIGNMENTS_ALIAS)
        objects = self.objects.alias(OBJECT_ALIAS)

        from_clause = edges
        conditions = []
        for i, tag in enumerate(search.included_tags):
            required = self.assignments.alias(f"{INCLUDED_ALIAS_PREFIX}{i}")
            from_clause = from_clause.join(required, edges.c.object_id == required.c.object_id)
            conditions.append(required.c.tag_id == tag.id)

        from_clause = from_clause.join(objects, objects.c[schema.id_column] == edges.c.object_id)

        excluded_ids = [tag.id for tag in search.excluded_tags]
        if excluded_ids:
            excluded = self.assignments.alias(EXCLUDED_ALIAS)
            conditions.append(
                ~exists()
                .where(excluded.c.object_id == objects.c[schema.id_column])
                .where(excluded.c.tag_id.in_(excluded_ids))
            )

        return (
            select(*self._columns(objects))
            .select_from(from_clause)
            .where(*conditions)
            .group_by(objects.c[schema.group_by_column])
            .order_by(objects.c[schema.order_by_column])
        )

    def build_untagged(self):
        """Objects that have no assignment at all"""
        schema = self.object_schema
        edges = self.assignments.alias(ASSIGNMENTS_ALIAS)
        objects = self.objects.alias(OBJECT_ALIAS)
        return (
            select(*self._columns(objects))
            .where(~exists().where(edges.c.object_id == objects.c[schema.id_column]))
            .order_by(objects.c[schema.order_by_column])
        )

    @staticmethod
    def describe(search):
        return SearchPlan(
            intersection_joins=len(search.included_tags),
            exclusion_subquery=bool(search.excluded_tags),
            grouped=not search.is_empty(),
        )

    @staticmethod
    def to_sql(statement, dialect=None):
        """Render a statement with its tag ids inlined, for logging and auditing"""
        return str(statement.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))
