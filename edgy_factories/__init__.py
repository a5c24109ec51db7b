from __future__ import annotations

__version__ = "0.1.0"

import os
from typing import TYPE_CHECKING

from monkay import Monkay

if TYPE_CHECKING:
    from .conf.global_settings import FactorySettings
    from .exceptions import (
        FactoryException,
        ImproperlyConfigured,
        RelationNotDefined,
        RelationResolutionError,
    )
    from .mixin import factory_mixin
    from .relations import Relation, RelationKind

__all__ = [
    "FactoryException",
    "FactorySettings",
    "ImproperlyConfigured",
    "Relation",
    "RelationKind",
    "RelationNotDefined",
    "RelationResolutionError",
    "factory_mixin",
    "monkay",
    "settings",
]

monkay: Monkay[None, FactorySettings] = Monkay(
    globals(),
    settings_path=lambda: os.environ.get(
        "EDGY_FACTORIES_SETTINGS_MODULE", "edgy_factories.conf.global_settings.FactorySettings"
    )
    or "",
    uncached_imports={"settings"},
    lazy_imports={
        "settings": lambda: monkay.settings,
        "FactorySettings": "edgy_factories.conf.global_settings:FactorySettings",
        "factory_mixin": ".mixin.factory_mixin",
        "Relation": ".relations.Relation",
        "RelationKind": ".relations.RelationKind",
        "FactoryException": ".exceptions.FactoryException",
        "ImproperlyConfigured": ".exceptions.ImproperlyConfigured",
        "RelationNotDefined": ".exceptions.RelationNotDefined",
        "RelationResolutionError": ".exceptions.RelationResolutionError",
    },
)
