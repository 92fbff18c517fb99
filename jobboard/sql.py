"""
Partial-update builder.

Turns a mapping of field names to values into an ordered set of column
assignments, so callers update only the fields they were given.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from .errors import BadRequestError


class PartialUpdate(NamedTuple):
    columns: List[str]
    values: List[Any]

    @property
    def set_cols(self) -> str:
        """Column-assignment fragment with numbered placeholders."""
        return ", ".join(
            f'"{col}"=:p{idx}' for idx, col in enumerate(self.columns, start=1)
        )

    def as_dict(self) -> Dict[str, Any]:
        return dict(zip(self.columns, self.values))


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> PartialUpdate:
    """
    Build the column list and value list for a partial update.

    Args:
        data: Field name -> new value, in the order they should be applied
        js_to_sql: Optional field name -> column name translation table

    Returns:
        PartialUpdate with columns and values in matching order

    Raises:
        BadRequestError: if data is empty
    """
    if not data:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    columns = [js_to_sql.get(field, field) for field in data]
    return PartialUpdate(columns=columns, values=list(data.values()))
