import inspect

from faker import Faker

import edgy
from edgy_factories import factory_mixin

FactoryModel = factory_mixin(edgy.Model)


def test_factory_schema_defaults_to_empty():
    assert FactoryModel.factory_schema() == {}


def test_relation_mappings_default_to_empty():
    assert FactoryModel.relation_mappings() == {}


def test_faker_defaults_to_faker_instance():
    assert isinstance(FactoryModel.faker, Faker)


def test_defines_create_and_count():
    assert inspect.iscoroutinefunction(FactoryModel.create)
    assert inspect.iscoroutinefunction(FactoryModel.count)


def test_defines_destroy():
    assert inspect.iscoroutinefunction(FactoryModel.destroy)


def test_no_database_bound_by_default():
    assert FactoryModel.factory_database is None


def test_custom_faker():
    def faker():
        return 1337

    CustomFactoryModel = factory_mixin(edgy.Model, faker=faker)

    assert CustomFactoryModel.faker() == 1337


def test_mixin_model_is_abstract():
    assert FactoryModel.meta.abstract
