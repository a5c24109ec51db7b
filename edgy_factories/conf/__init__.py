from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any, cast

if TYPE_CHECKING:
    from monkay import Monkay

    from edgy_factories.conf.global_settings import FactorySettings


@lru_cache
def get_factories_monkay() -> Monkay[None, FactorySettings]:
    from edgy_factories import monkay

    monkay.evaluate_settings(on_conflict="error", ignore_import_errors=False)
    return monkay


class SettingsForward:
    def __getattribute__(self, name: str) -> Any:
        monkay = get_factories_monkay()
        return getattr(monkay.settings, name)


settings: FactorySettings = cast("FactorySettings", SettingsForward())

__all__ = ["settings", "get_factories_monkay"]
