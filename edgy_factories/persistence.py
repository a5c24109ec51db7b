from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from loguru import logger

from edgy_factories.relations import RelationDescriptor, RelationKind

if TYPE_CHECKING:
    from edgy import Database, Model


def primary_key_name(model_class: type[Model]) -> str:
    return model_class.pknames[0]


async def insert(model_class: type[Model], database: Database, values: Mapping[str, Any]) -> Model:
    """
    Inserts a new row of `model_class` and returns the created instance with
    its generated primary key.
    """
    logger.debug(f"Inserting a new {model_class.__name__} row with {sorted(values)}.")
    return await model_class.query.using(database=database).create(**values)


async def fetch_with_relations(
    model_class: type[Model],
    database: Database,
    pk: Any,
    relations: Sequence[tuple[RelationDescriptor, Any]],
) -> Model:
    """
    Fetches the row identified by `pk` and eagerly loads the given relations.

    Every relation is attached to the returned instance as an attribute named
    after the relation: the related instance (or `None`) for belongs-to
    relations, the list of related instances ordered by primary key for
    has-many relations.

    Args:
        model_class (type[Model]): The model of the row.
        database (Database): The database the row was written to.
        pk (Any): The primary key of the row.
        relations (Sequence[tuple[RelationDescriptor, Any]]): The resolved
            relations with the value joining them, the local key value for a
            belongs-to relation and the parent primary key for has-many.

    Returns:
        Model: The fetched instance.
    """
    record = await model_class.query.using(database=database).get(
        **{primary_key_name(model_class): pk}
    )
    for relation, join_value in relations:
        related_query = relation.model_class.query.using(database=database).filter(
            **{relation.foreign_key: join_value}
        )
        if relation.kind is RelationKind.BELONGS_TO:
            related: Any = await related_query.first()
        else:
            related = await related_query.order_by(
                primary_key_name(relation.model_class)
            ).all()
        logger.debug(f'Eager loaded the "{relation.name}" relation of {model_class.__name__}.')
        setattr(record, relation.name, related)
    return record


async def delete(model_class: type[Model], database: Database, pk: Any) -> int:
    """
    Deletes the row identified by `pk`, returning the number of removed rows.
    """
    return await (
        model_class.query.using(database=database)
        .filter(**{primary_key_name(model_class): pk})
        .delete()
    )
