from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from faker import Faker
from loguru import logger

from edgy_factories import persistence
from edgy_factories.conf import settings
from edgy_factories.context_vars import factory_depth
from edgy_factories.directives import (
    BelongsTo,
    ForeignKeyValue,
    GeneratedValue,
    HasMany,
    RelatedAttributes,
    RelatedInstance,
    parse_attributes,
)
from edgy_factories.exceptions import RelationResolutionError
from edgy_factories.utils import read_field

if TYPE_CHECKING:
    from edgy import Database, Model

    from edgy_factories.relations import Relation, RelationDescriptor

M = TypeVar("M", bound="Model")


def default_faker() -> Faker:
    """
    Builds the `Faker` instance used when no generator is given to
    `factory_mixin()`, honouring the `faker_locale` and `faker_seed` settings.
    """
    faker = Faker(settings.faker_locale)
    if settings.faker_seed is not None:
        faker.seed_instance(settings.faker_seed)
    return faker


async def create_related(
    name: str,
    relation: RelationDescriptor,
    attributes: Mapping[str, Any] | None,
    database: Database | None,
) -> Any:
    """
    Creates a record of the related model, one level deeper in the nesting.

    Raises:
        RelationResolutionError: If the nesting goes deeper than
            `settings.max_nesting_depth`, which happens with schemas
            autogenerating each other.
    """
    depth = factory_depth.get()
    if depth >= settings.max_nesting_depth:
        raise RelationResolutionError(
            name,
            detail=f"more than {settings.max_nesting_depth} nested relations were created",
        )
    token = factory_depth.set(depth + 1)
    try:
        return await relation.model_class.create(attributes, database=database)
    finally:
        factory_depth.reset(token)


def factory_mixin(
    base: type[M],
    *,
    faker: Any = None,
    database: Database | None = None,
) -> type[M]:
    """
    Extends an Edgy model class with model factories.

    The returned class is an abstract model. Concrete models inherit from it,
    declare their registry as usual and describe their fake data with
    `factory_schema()` and their relations with `relation_mappings()`.

    Example:
        ```python
        class Person(factory_mixin(edgy.Model, database=database)):
            first_name: str = edgy.CharField(max_length=255, null=True)

            class Meta:
                registry = models
                tablename = "people"

            @classmethod
            def factory_schema(cls) -> dict[str, Any]:
                return {"first_name": cls.faker.first_name}

        person = await Person.create({"$hasCreditCards": 3})
        ```

    Args:
        base (type[Model]): The Edgy model class to extend.
        faker (Any): The fake data generator exposed as `faker`. Defaults to a
            `Faker` instance configured from the settings.
        database (Database | None): The database records are written to. Without
            one, `create()` only returns the generated attributes.

    Returns:
        type[Model]: The abstract model class supporting factories.
    """
    generator = faker if faker is not None else default_faker()
    bound_database = database

    class FactoryModel(base):  # type: ignore[valid-type,misc]
        faker: ClassVar[Any] = generator
        factory_database: ClassVar[Database | None] = bound_database

        class Meta:
            abstract = True

        @classmethod
        def factory_schema(cls) -> dict[str, Any]:
            """
            Defines the schema of the model factory: attribute names mapped to
            literal values or to zero-argument callables generating them.
            """
            return {}

        @classmethod
        def relation_mappings(cls) -> dict[str, Relation]:
            """
            Declares the relations usable with the `$for` and `$has` directives.
            """
            return {}

        @classmethod
        def _merge_defaults(cls, attributes: Mapping[str, Any] | None) -> dict[str, Any]:
            defaults = dict(cls.factory_schema())
            if attributes:
                defaults.update(attributes)
            return defaults

        @classmethod
        async def create(
            cls,
            attributes: Mapping[str, Any] | None = None,
            *,
            database: Database | None = None,
        ) -> Any:
            """
            Creates a fake record in accordance with the factory schema.

            The user attributes overwrite the schema key by key. Callable values
            are invoked, `$for<Relation>` keys are replaced by the local key of
            the relation and `$has<Relation>` keys create related records once
            the record has a primary key.

            Args:
                attributes (Mapping[str, Any] | None): Attributes overwriting
                    the factory schema, relation directives included.
                database (Database | None): The database to write to. Defaults
                    to the one given to `factory_mixin()`.

            Returns:
                Any: The persisted model instance, with the resolved relations
                    eagerly loaded, or the attributes dictionary when no
                    database is available.

            Raises:
                RelationNotDefined: If a directive names an undeclared relation.
                RelationResolutionError: If a directive cannot be resolved.
            """
            if database is None:
                database = cls.factory_database

            entries = parse_attributes(cls, cls._merge_defaults(attributes))
            if database is None:
                for entry in entries:
                    if isinstance(entry, HasMany):
                        raise RelationResolutionError(
                            entry.name,
                            detail="has-many relations require a database to link the related records",
                        )

            values: dict[str, Any] = {}
            loaded: list[tuple[RelationDescriptor, Any]] = []
            postponed: list[HasMany] = []

            for entry in entries:
                if isinstance(entry, BelongsTo):
                    local_value = await cls._resolve_belongs_to(entry, database)
                    values[entry.relation.local_key] = local_value
                    loaded.append((entry.relation, local_value))
                elif isinstance(entry, HasMany):
                    # Needs the primary key of the record.
                    postponed.append(entry)
                elif isinstance(entry, GeneratedValue):
                    values[entry.key] = entry.generator()
                else:
                    values[entry.key] = entry.value

            if database is None:
                return values

            record = await persistence.insert(cls, database, values)
            for entry in postponed:
                await cls._resolve_has_many(entry, record.pk, database)
                loaded.append((entry.relation, record.pk))

            record = await persistence.fetch_with_relations(cls, database, record.pk, loaded)
            record.factory_database = database
            return record

        @classmethod
        async def count(
            cls,
            n: int,
            attributes: Mapping[str, Any] | None = None,
            *,
            database: Database | None = None,
        ) -> list[Any]:
            """
            Creates `n` fake records, one after the other.

            `attributes` may hold a `$transform` entry, a callable receiving a
            copy of the other attributes and the index of the record, and
            returning the attributes to create that record with.

            Args:
                n (int): The number of records.
                attributes (Mapping[str, Any] | None): Attributes shared by
                    every record. The mapping is not modified.
                database (Database | None): The database to write to.

            Returns:
                list[Any]: The records, in creation order.
            """
            if isinstance(n, bool) or not isinstance(n, int) or n < 0:
                raise ValueError(f"count() expects a non-negative integer, got {n!r}.")

            attributes = dict(attributes or {})
            transform: Callable[[dict[str, Any], int], Mapping[str, Any]] | None = attributes.pop(
                settings.transform_key, None
            )

            records = []
            for index in range(n):
                current: Mapping[str, Any] = dict(attributes)
                if transform is not None:
                    current = transform(dict(attributes), index)
                records.append(await cls.create(current, database=database))
            return records

        async def destroy(self) -> bool:
            """
            Deletes the row of the record.

            Returns:
                bool: `True` if exactly one row was removed.
            """
            database = self.factory_database
            pk = self.pk
            if database is None or pk is None:
                return False

            removed = await persistence.delete(type(self), database, pk)
            if removed > 1:
                logger.warning(
                    f"Destroying {type(self).__name__} with primary key {pk!r} removed {removed} rows."
                )
            return removed == 1

        @classmethod
        async def _resolve_belongs_to(cls, entry: BelongsTo, database: Database | None) -> Any:
            relation = entry.relation
            value = entry.value

            if isinstance(value, ForeignKeyValue):
                local_value = value.value
            elif isinstance(value, RelatedInstance):
                local_value = read_field(value.instance, relation.foreign_key)
            else:
                related_attributes = value.attributes if isinstance(value, RelatedAttributes) else None
                related = await create_related(entry.name, relation, related_attributes, database)
                local_value = read_field(related, relation.foreign_key)

            if local_value is None:
                raise RelationResolutionError(
                    entry.name, detail=f'no value for the "{relation.foreign_key}" key'
                )
            logger.debug(
                f'Resolved the "{relation.name}" relation of {cls.__name__} to {local_value!r}.'
            )
            return local_value

        @classmethod
        async def _resolve_has_many(cls, entry: HasMany, pk: Any, database: Database) -> list[Any]:
            relation = entry.relation
            records = [
                await create_related(entry.name, relation, {relation.foreign_key: pk}, database)
                for _ in range(entry.count)
            ]
            logger.debug(
                f'Created {len(records)} records for the "{relation.name}" relation of {cls.__name__}.'
            )
            return records

    return FactoryModel
