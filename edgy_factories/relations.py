from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import monkay

import edgy
from edgy.utils.compat import is_class_and_subclass
from edgy_factories.conf import settings
from edgy_factories.exceptions import ImproperlyConfigured, RelationNotDefined
from edgy_factories.utils import to_snake_case

if TYPE_CHECKING:
    from edgy import Model


class RelationKind(str, enum.Enum):
    """
    The relation kinds understood by the factories.
    """

    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Relation:
    """
    Declares a relation of a model for the factories.

    Example:
        ```python
        class CreditCard(factory_mixin(edgy.Model)):
            owner_id: int = edgy.IntegerField(null=True)

            @classmethod
            def relation_mappings(cls) -> dict[str, Relation]:
                return {
                    "owner": Relation(
                        RelationKind.BELONGS_TO,
                        model="Person",
                        join=("credit_cards.owner_id", "people.id"),
                    ),
                }
        ```

    Attributes:
        kind (RelationKind): Belongs-to or has-many.
        model (Any): The related model class, the name of a model registered in
            the same registry, or a dotted import path to the model class.
        join (tuple[str, str]): The `table.column` pair joining the owning model
            (`from`) to the related model (`to`).
    """

    kind: RelationKind
    model: Any
    join: tuple[str, str]


@dataclass(frozen=True)
class RelationDescriptor:
    """
    A relation with its model class and join columns resolved.
    """

    name: str
    kind: RelationKind
    model_class: type[Model]
    local_key: str
    foreign_key: str


def relation_name_from_key(key: str) -> str:
    """
    Given a directive key (e.g. `$forUser` or `$has_team_members`), returns the
    name of the relation (e.g. `user`, `team_members`).

    Both camelCase (`$hasFooBar`) and snake_case (`$has_foo_bar`) keys are
    supported.
    """
    for prefix in (settings.belongs_to_prefix, settings.has_many_prefix):
        if key.startswith(prefix):
            key = key[len(prefix) :]
            break
    key = key.removeprefix("_")
    return key[:1].lower() + key[1:]


def _column_name(value: str, relation_name: str) -> str:
    table, sep, column = value.partition(".")
    if not sep or not table or not column:
        raise ImproperlyConfigured(
            detail=f'Join column "{value}" of the relation "{relation_name}" must be written as "table.column".'
        )
    return column


def _resolve_model(owner: type[Model], reference: Any, relation_name: str) -> type[Model]:
    model_class = reference
    if isinstance(reference, str):
        if "." in reference:
            model_class = monkay.load(reference)
        else:
            model_class = owner.meta.registry.get_model(reference)
    if not is_class_and_subclass(model_class, edgy.Model) or not hasattr(model_class, "create"):
        raise ImproperlyConfigured(
            detail=f'The model of the relation "{relation_name}" must be a model built with factory_mixin().'
        )
    return model_class


def get_relation(model_class: type[Model], relation_name: str) -> RelationDescriptor:
    """
    Returns the resolved relation `relation_name` of `model_class`.

    The name is looked up as given first and then in snake_case, so a
    `$hasCreditCards` directive finds a `credit_cards` relation.

    Raises:
        RelationNotDefined: If the model declares no such relation.
        ImproperlyConfigured: If the relation declaration is malformed.
    """
    mappings = model_class.relation_mappings()
    for name in (relation_name, to_snake_case(relation_name)):
        relation = mappings.get(name)
        if relation is not None:
            break
    else:
        raise RelationNotDefined(relation_name)

    try:
        kind = RelationKind(relation.kind)
    except ValueError:
        raise ImproperlyConfigured(
            detail=f'Unknown kind "{relation.kind}" for the relation "{relation_name}".'
        ) from None

    join_from, join_to = relation.join
    return RelationDescriptor(
        name=name,
        kind=kind,
        model_class=_resolve_model(model_class, relation.model, relation_name),
        local_key=_column_name(join_from, relation_name),
        foreign_key=_column_name(join_to, relation_name),
    )
