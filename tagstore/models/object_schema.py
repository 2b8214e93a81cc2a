"""
Model: ObjectSchema

Describes the host application's object table so search queries can be
assembled without hardcoding its columns.
"""

import re
from dataclasses import dataclass
from typing import Tuple

from tagstore.constants import DEFAULT_OBJECT_ID_COLUMN
from tagstore.exceptions import ValidationException

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class ObjectSchema:
    table_name: str
    columns: Tuple[str, ...]
    group_by_column: str
    order_by_column: str
    id_column: str = DEFAULT_OBJECT_ID_COLUMN

    def __post_init__(self):
        # Accept any sequence but store a tuple
        object.__setattr__(self, "columns", tuple(self.columns))
        if not self.columns:
            raise ValidationException("Object schema needs at least one column")
        for name in (self.table_name, self.group_by_column, self.order_by_column, self.id_column) + self.columns:
            if not isinstance(name, str) or not _IDENTIFIER.match(name):
                raise ValidationException(f"Invalid identifier in object schema: {name!r}")

    @property
    def selected_columns(self) -> Tuple[str, ...]:
        """The id column followed by the configured columns"""
        return (self.id_column,) + tuple(c for c in self.columns if c != self.id_column)
