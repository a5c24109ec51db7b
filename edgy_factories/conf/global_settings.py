from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class FactorySettings(BaseSettings):
    """
    Settings for the model factories.

    A custom settings class can be selected with the
    `EDGY_FACTORIES_SETTINGS_MODULE` environment variable, pointing to a
    subclass of this one (for example `myproject.settings.TestSettings`).
    """

    model_config = SettingsConfigDict(extra="allow")

    faker_locale: str | list[str] | None = None
    """
    Locale, or list of locales, used by the default `Faker` instance.

    `None` lets Faker use its own default locale.
    """
    faker_seed: int | None = None
    """
    Seed applied to the default `Faker` instance. Useful to get reproducible
    fixtures.
    """
    belongs_to_prefix: str = "$for"
    """
    Prefix of the attribute keys resolved as belongs-to relations (e.g. `$forOwner`).
    """
    has_many_prefix: str = "$has"
    """
    Prefix of the attribute keys resolved as has-many relations (e.g. `$hasCreditCards`).
    """
    transform_key: str = "$transform"
    """
    Name of the entry holding the per-index transform function passed to `count()`.
    """
    max_nesting_depth: int = 16
    """
    Maximum depth of nested `create()` calls triggered by relation directives.
    """
