from typing import Any, Mapping, NamedTuple

from jobly.errors import BadRequestError


class PartialUpdate(NamedTuple):
    assignments: list[str]
    values: list[Any]

    @property
    def set_clause(self) -> str:
        return ", ".join(self.assignments)


def sql_for_partial_update(data: Mapping[str, Any], column_names: Mapping[str, str]) -> PartialUpdate:
    """Build the SET assignments and bound values for a partial update.

    ``data`` maps field names to new values, ``column_names`` maps field names to
    storage columns. Fields missing from ``column_names`` are used as the column name
    unchanged, so callers must only pass known fields.

        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        PartialUpdate(assignments=['first_name = $1', 'age = $2'], values=['Aliya', 32])

    Raises BadRequestError when ``data`` is empty.
    """
    if not data:
        raise BadRequestError("No data")

    assignments = [
        f"{column_names.get(field, field)} = ${idx}"
        for idx, field in enumerate(data, start=1)
    ]
    return PartialUpdate(assignments, list(data.values()))
