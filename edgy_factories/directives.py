from __future__ import annotations

import numbers
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias, Union

from edgy_factories.conf import settings
from edgy_factories.exceptions import RelationResolutionError
from edgy_factories.relations import (
    RelationDescriptor,
    RelationKind,
    get_relation,
    relation_name_from_key,
)
from edgy_factories.utils import is_generator

if TYPE_CHECKING:
    from edgy import Model


# Attribute entries


@dataclass(frozen=True)
class LiteralValue:
    key: str
    value: Any


@dataclass(frozen=True)
class GeneratedValue:
    key: str
    generator: Callable[[], Any]


@dataclass(frozen=True)
class BelongsTo:
    key: str
    name: str
    relation: RelationDescriptor
    value: RelationValue


@dataclass(frozen=True)
class HasMany:
    key: str
    name: str
    relation: RelationDescriptor
    count: int


# Accepted belongs-to values


@dataclass(frozen=True)
class ForeignKeyValue:
    """The local key value given as is (a number or a string)."""

    value: numbers.Number | str


@dataclass(frozen=True)
class RelatedInstance:
    """An existing instance of the related model."""

    instance: Model


@dataclass(frozen=True)
class RelatedAttributes:
    """Attributes used to create the related record."""

    attributes: Mapping[str, Any]


@dataclass(frozen=True)
class Autogenerate:
    """Create the related record from its factory schema only."""


RelationValue: TypeAlias = Union[ForeignKeyValue, RelatedInstance, RelatedAttributes, Autogenerate]
AttributeEntry: TypeAlias = Union[LiteralValue, GeneratedValue, BelongsTo, HasMany]


def parse_belongs_to_value(name: str, relation: RelationDescriptor, value: Any) -> RelationValue:
    """
    Classifies the value of a belongs-to directive.

    `bool` is checked before the numbers since `True` is an `int` too.

    Raises:
        RelationResolutionError: If the value has none of the accepted shapes.
    """
    if isinstance(value, bool):
        if value:
            return Autogenerate()
    elif isinstance(value, (numbers.Number, str)):
        return ForeignKeyValue(value)
    elif isinstance(value, relation.model_class):
        return RelatedInstance(value)
    elif isinstance(value, Mapping):
        return RelatedAttributes(value)
    raise RelationResolutionError(
        name,
        detail=f"expected a key value, a {relation.model_class.__name__} instance, "
        f"a mapping or True, got {value!r}",
    )


def parse_has_many_value(name: str, value: Any) -> int:
    """
    Validates the value of a has-many directive, which must be the
    non-negative number of related records to create.
    """
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RelationResolutionError(
            name, detail=f"expected a non-negative number of records, got {value!r}"
        )
    return value


def _directive_relation(
    model_class: type[Model], name: str, key: str, expected: RelationKind
) -> RelationDescriptor:
    relation = get_relation(model_class, name)
    if relation.kind is not expected:
        raise RelationResolutionError(
            name, detail=f"{key} expects a {expected} relation, not {relation.kind}"
        )
    return relation


def parse_attributes(model_class: type[Model], attributes: Mapping[str, Any]) -> list[AttributeEntry]:
    """
    Parses the attribute bag of `model_class` into tagged entries, preserving
    the order of the keys.

    Directive entries carry the relation name derived from their key (`creditCards`
    for `$hasCreditCards`), which is the name used in error messages, next to the
    declared relation (`credit_cards`).

    Args:
        model_class (type[Model]): The model the attributes belong to. Its
            `relation_mappings()` are used to resolve the directives.
        attributes (Mapping[str, Any]): The merged attributes (factory schema
            overlaid with the user attributes).

    Returns:
        list[AttributeEntry]: One entry per key.

    Raises:
        RelationNotDefined: If a directive names an undeclared relation.
        RelationResolutionError: If a directive value has an unsupported shape.
    """
    entries: list[AttributeEntry] = []
    for key, value in attributes.items():
        if key.startswith(settings.belongs_to_prefix):
            name = relation_name_from_key(key)
            relation = _directive_relation(model_class, name, key, RelationKind.BELONGS_TO)
            entries.append(
                BelongsTo(key, name, relation, parse_belongs_to_value(name, relation, value))
            )
        elif key.startswith(settings.has_many_prefix):
            name = relation_name_from_key(key)
            relation = _directive_relation(model_class, name, key, RelationKind.HAS_MANY)
            entries.append(HasMany(key, name, relation, parse_has_many_value(name, value)))
        elif is_generator(value):
            entries.append(GeneratedValue(key, value))
        else:
            entries.append(LiteralValue(key, value))
    return entries
