"""Turns result rows into caller objects through the caller's row factory"""

from typing import Callable, Generic, Iterable, List, TypeVar

from sqlalchemy.engine import Row

from tagstore.exceptions import RowConversionError

T = TypeVar("T")


class RowMaterializer(Generic[T]):
    def __init__(self, row_factory: Callable[[Row], T]):
        if not callable(row_factory):
            raise TypeError("row_factory must be callable")
        self.row_factory = row_factory

    def materialize(self, rows: Iterable[Row]) -> List[T]:
        """Convert every row in result order; the first failing row aborts the query"""
        objects = []
        for index, row in enumerate(rows):
            try:
                objects.append(self.row_factory(row))
            except Exception as e:
                raise RowConversionError(f"Failed to convert row {index}: {e}", row_index=index) from e
        return objects
