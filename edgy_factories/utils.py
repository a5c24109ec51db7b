from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_camel_boundary = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """
    Converts a camelCase name into snake_case (`creditCards` -> `credit_cards`).
    Names already in snake_case are returned unchanged.
    """
    return _camel_boundary.sub("_", name).lower()


def is_generator(value: Any) -> bool:
    """
    Checks if a schema value is a generator, meaning a callable producing the
    literal value on each invocation (e.g. `faker.first_name`).

    Classes are callable too but are kept as literal values.
    """
    return callable(value) and not isinstance(value, type)


def read_field(record: Any, name: str) -> Any:
    """
    Reads a field from a record, which is either a model instance or, when no
    database is bound, the plain attribute mapping.
    """
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)
