from decimal import Decimal

import pytest

from edgy_factories.directives import (
    Autogenerate,
    BelongsTo,
    ForeignKeyValue,
    GeneratedValue,
    HasMany,
    LiteralValue,
    RelatedAttributes,
    RelatedInstance,
    parse_attributes,
)
from edgy_factories.exceptions import (
    ImproperlyConfigured,
    RelationNotDefined,
    RelationResolutionError,
)
from edgy_factories.relations import Relation, RelationKind, get_relation, relation_name_from_key
from edgy_factories.utils import is_generator, to_snake_case
from tests.models import CreditCard, Person


@pytest.mark.parametrize(
    "key,name",
    [
        ("$forUser", "user"),
        ("$for_user", "user"),
        ("$forFooBar", "fooBar"),
        ("$for_foo_bar", "foo_bar"),
        ("$hasTeamMembers", "teamMembers"),
        ("$has_team_members", "team_members"),
    ],
)
def test_relation_name_from_key(key, name):
    assert relation_name_from_key(key) == name


def test_to_snake_case():
    assert to_snake_case("creditCards") == "credit_cards"
    assert to_snake_case("credit_cards") == "credit_cards"
    assert to_snake_case("owner") == "owner"


def test_is_generator():
    assert is_generator(lambda: 1)
    assert not is_generator(Person)
    assert not is_generator("value")


def test_get_relation_resolves_join_columns():
    relation = get_relation(CreditCard, "owner")

    assert relation.model_class is Person
    assert relation.kind is RelationKind.BELONGS_TO
    assert relation.local_key == "owner_id"
    assert relation.foreign_key == "id"


def test_get_relation_resolves_model_name_and_snake_case():
    relation = get_relation(Person, "creditCards")

    assert relation.name == "credit_cards"
    assert relation.model_class is CreditCard
    assert relation.local_key == "id"
    assert relation.foreign_key == "owner_id"


def test_get_relation_undefined():
    with pytest.raises(RelationNotDefined) as raised:
        get_relation(CreditCard, "fooBar")

    assert str(raised.value) == 'The relation "fooBar" is not defined'
    assert raised.value.relation_name == "fooBar"


def test_get_relation_bad_join(monkeypatch):
    monkeypatch.setattr(
        CreditCard,
        "relation_mappings",
        classmethod(
            lambda cls: {
                "owner": Relation(RelationKind.BELONGS_TO, model=Person, join=("owner_id", "id"))
            }
        ),
    )

    with pytest.raises(ImproperlyConfigured):
        get_relation(CreditCard, "owner")


def test_parse_attributes_tags_entries():
    generator = Person.faker.first_name
    entries = parse_attributes(
        CreditCard,
        {"number": "4111", "cvv": generator, "$forOwner": 2},
    )

    assert entries[0] == LiteralValue("number", "4111")
    assert entries[1] == GeneratedValue("cvv", generator)
    assert isinstance(entries[2], BelongsTo)
    assert entries[2].value == ForeignKeyValue(2)


def test_parse_belongs_to_shapes():
    person = Person(id=7, first_name="Ivy")

    def value_of(value):
        (entry,) = parse_attributes(CreditCard, {"$for_owner": value})
        return entry.value

    assert value_of("7") == ForeignKeyValue("7")
    assert value_of(2.5) == ForeignKeyValue(2.5)
    assert value_of(Decimal("3")) == ForeignKeyValue(Decimal("3"))
    assert value_of(person) == RelatedInstance(person)
    assert value_of({"first_name": "Ivy"}) == RelatedAttributes({"first_name": "Ivy"})
    assert value_of(True) == Autogenerate()


@pytest.mark.parametrize("value", [False, None, [1], object()])
def test_parse_belongs_to_rejects_other_shapes(value):
    with pytest.raises(RelationResolutionError) as raised:
        parse_attributes(CreditCard, {"$forOwner": value})

    assert str(raised.value).startswith('Unable to resolve the "owner" relation')


def test_parse_has_many():
    (entry,) = parse_attributes(Person, {"$hasCreditCards": 3})

    assert isinstance(entry, HasMany)
    assert entry.count == 3
    assert entry.name == "creditCards"
    assert entry.relation.name == "credit_cards"


@pytest.mark.parametrize("value", [True, -1, "3", 2.0, {"number": "1"}])
def test_parse_has_many_rejects_non_counts(value):
    with pytest.raises(RelationResolutionError):
        parse_attributes(Person, {"$has_credit_cards": value})


def test_directive_against_wrong_relation_kind():
    with pytest.raises(RelationResolutionError):
        parse_attributes(Person, {"$forCreditCards": 1})


@pytest.mark.parametrize(
    "key,name",
    [("$hasCreditCards", "creditCards"), ("$has_credit_cards", "credit_cards")],
)
def test_has_many_errors_name_the_directive_relation(key, name):
    with pytest.raises(RelationResolutionError) as raised:
        parse_attributes(Person, {key: -1})

    assert raised.value.relation_name == name
    assert str(raised.value) == (
        f'Unable to resolve the "{name}" relation: expected a non-negative number of records, got -1'
    )


def test_wrong_relation_kind_names_the_directive_relation():
    with pytest.raises(RelationResolutionError, match='"creditCards" relation'):
        parse_attributes(Person, {"$forCreditCards": 1})
