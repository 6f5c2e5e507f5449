from typing import Union
from uuid import UUID

from app.core.exceptions import NotFoundError


def parse_id(value: Union[str, UUID], kind: str = "User") -> str:
    """Canonical string form of a row id.

    Ids end up inside PostgREST filter strings, so anything that is not a
    UUID is refused before it reaches a query.
    """
    if isinstance(value, UUID):
        return str(value)
    try:
        return str(UUID(str(value)))
    except ValueError:
        raise NotFoundError(f"{kind} not found.")
