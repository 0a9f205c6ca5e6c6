"""
SQL helpers shared by the services.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from jobly.core.errors import BadRequestError


class PartialUpdate(NamedTuple):
    """SET clause pieces for an UPDATE touching only the given columns."""
    fragments: List[str]
    values: List[Any]

    @property
    def set_cols(self) -> str:
        return ", ".join(self.fragments)


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Dict[str, str]] = None,
) -> PartialUpdate:
    """
    Build the SET clause body for a partial update.

    Args:
        data_to_update: Field name -> new value, e.g. ``{"firstName": "Aliya", "age": 32}``
        js_to_sql: Field name -> column name for fields whose column differs,
            e.g. ``{"firstName": "first_name"}``

    Returns:
        PartialUpdate with ``['"first_name"=$1', '"age"=$2']`` and ``["Aliya", 32]``.
        Callers number any trailing parameters from ``len(values) + 1``.

    Raises:
        BadRequestError: If there is nothing to update
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    fragments = [
        f'"{js_to_sql.get(field, field)}"=${idx}'
        for idx, field in enumerate(keys, start=1)
    ]

    return PartialUpdate(fragments=fragments, values=[data_to_update[k] for k in keys])
