from edgy_factories import FactorySettings, settings
from edgy_factories.conf import get_factories_monkay
from edgy_factories.conf import settings as forwarded_settings
from edgy_factories.directives import BelongsTo, LiteralValue, parse_attributes
from edgy_factories.mixin import default_faker
from tests.models import CreditCard
from tests.settings import TestSettings


def test_settings_module_from_environment():
    assert isinstance(settings, FactorySettings)
    assert settings.faker_seed == 1337
    assert forwarded_settings.faker_seed == 1337


def test_factories_monkay_evaluates_settings():
    monkay = get_factories_monkay()

    assert monkay is get_factories_monkay()
    assert isinstance(monkay.settings, TestSettings)


def test_default_settings():
    defaults = FactorySettings()

    assert defaults.belongs_to_prefix == "$for"
    assert defaults.has_many_prefix == "$has"
    assert defaults.transform_key == "$transform"
    assert defaults.faker_seed is None


def test_default_faker_is_seeded():
    assert default_faker().name() == default_faker().name()


def test_custom_prefix(monkeypatch):
    monkeypatch.setattr(settings, "belongs_to_prefix", "belongs_to_")

    first, second = parse_attributes(CreditCard, {"belongs_to_owner": 3, "$forOwner": 4})

    assert isinstance(first, BelongsTo)
    assert first.relation.name == "owner"
    assert second == LiteralValue("$forOwner", 4)
