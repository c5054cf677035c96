"""Lifecycle events."""

from creatures.events.domain_events import (
    CreatureBorn,
    CreatureDied,
    FoodConsumed,
    LifecycleEvent,
    ReproductionReadyChanged,
)

__all__ = [
    "CreatureBorn",
    "CreatureDied",
    "FoodConsumed",
    "LifecycleEvent",
    "ReproductionReadyChanged",
]
