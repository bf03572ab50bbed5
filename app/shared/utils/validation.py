from typing import Any, Dict, Iterable

from app.core.exceptions import InvalidInputError


def reject_null_fields(changes: Dict[str, Any], fields: Iterable[str]) -> None:
    """Un PATCH puede omitir estos campos, pero no enviarlos en null"""
    nulls = sorted(field for field in fields if field in changes and changes[field] is None)
    if nulls:
        raise InvalidInputError(
            f"Los siguientes campos no pueden ser nulos: {', '.join(nulls)}",
            fields=nulls
        )
