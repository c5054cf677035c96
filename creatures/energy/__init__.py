"""Metabolism and lifecycle."""

from creatures.energy.metabolism import (
    DEFAULT_METABOLISM_PARAMS,
    MetabolismParams,
    MetabolismState,
    MetabolismTick,
    aging_multiplier,
    basal_cost,
    charge_movement,
    feed,
    movement_cost,
    spend_energy,
    tick_metabolism,
)

__all__ = [
    "MetabolismParams",
    "MetabolismState",
    "MetabolismTick",
    "DEFAULT_METABOLISM_PARAMS",
    "tick_metabolism",
    "charge_movement",
    "spend_energy",
    "feed",
    "aging_multiplier",
    "basal_cost",
    "movement_cost",
]
