"""Metabolism and lifecycle state machine.

A creature is Alive until its age reaches ``max_age``, then Dead for good.
While alive, every tick it:

1. ages, faster when its energy ratio is low
2. pays a basal cost proportional to its segment count
3. pays a movement cost for each segment whose angle changed

Energy is clamped to ``[0, max_energy]`` after every change. Reproduction
readiness (energy at or above the threshold) is derived from energy, and a
``ReproductionReadyChanged`` event is returned only when it flips.

States are immutable; each tick returns a new one together with the events
it produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Sequence

from creatures.config.energy import (
    BASAL_CONSTANT,
    CRITICAL_ENERGY_AGING_MULTIPLIER,
    CRITICAL_ENERGY_RATIO,
    INITIAL_ENERGY_RATIO,
    LOW_ENERGY_AGING_MULTIPLIER,
    LOW_ENERGY_RATIO,
    MAX_AGE,
    MAX_ENERGY,
    MOVEMENT_CONSTANT,
    NORMAL_AGING_RATE,
    POWER_EXPONENT,
    REPRODUCTION_THRESHOLD,
    STARVATION_AGING_MULTIPLIER,
    STARVATION_ENERGY_RATIO,
)
from creatures.events.domain_events import (
    CreatureDied,
    FoodConsumed,
    LifecycleEvent,
    ReproductionReadyChanged,
)
from creatures.exceptions import ConfigurationError
from creatures.math_utils import clamp

logger = logging.getLogger(__name__)


@dataclass
class MetabolismParams:
    """Energy and aging constants for one creature."""

    max_energy: float = MAX_ENERGY
    initial_energy_ratio: float = INITIAL_ENERGY_RATIO
    basal_constant: float = BASAL_CONSTANT
    movement_constant: float = MOVEMENT_CONSTANT
    power_exponent: float = POWER_EXPONENT
    max_age: float = MAX_AGE
    aging_rate: float = NORMAL_AGING_RATE
    reproduction_threshold: float = REPRODUCTION_THRESHOLD

    def validate(self) -> None:
        if self.max_energy <= 0:
            raise ConfigurationError(f"max_energy must be > 0, got {self.max_energy}")
        if not 0.0 <= self.initial_energy_ratio <= 1.0:
            raise ConfigurationError(
                f"initial_energy_ratio must be in [0, 1], got {self.initial_energy_ratio}"
            )
        if self.max_age <= 0:
            raise ConfigurationError(f"max_age must be > 0, got {self.max_age}")
        if self.basal_constant < 0 or self.movement_constant < 0:
            raise ConfigurationError("Energy cost constants must be non-negative")
        if self.aging_rate < 0:
            raise ConfigurationError(f"aging_rate must be >= 0, got {self.aging_rate}")


DEFAULT_METABOLISM_PARAMS = MetabolismParams()


@dataclass(frozen=True)
class MetabolismState:
    current_energy: float
    max_energy: float = MAX_ENERGY
    age: float = 0.0
    alive: bool = True
    reproduction_ready: bool = False

    @property
    def energy_ratio(self) -> float:
        if self.max_energy <= 0:
            return 0.0
        return self.current_energy / self.max_energy

    @classmethod
    def initial(cls, params: MetabolismParams = DEFAULT_METABOLISM_PARAMS) -> "MetabolismState":
        energy = params.max_energy * params.initial_energy_ratio
        return cls(
            current_energy=energy,
            max_energy=params.max_energy,
            reproduction_ready=energy >= params.reproduction_threshold,
        )


@dataclass
class MetabolismTick:
    state: MetabolismState
    events: List[LifecycleEvent] = field(default_factory=list)


def aging_multiplier(energy_ratio: float) -> float:
    """Aging speed-up for an energy ratio.

    ratio >= 0.5 -> 1x, 0.2 <= ratio < 0.5 -> 1.5x, 0 < ratio < 0.2 -> 3x,
    ratio <= 0 -> 5x.
    """
    if energy_ratio <= STARVATION_ENERGY_RATIO:
        return STARVATION_AGING_MULTIPLIER
    if energy_ratio < CRITICAL_ENERGY_RATIO:
        return CRITICAL_ENERGY_AGING_MULTIPLIER
    if energy_ratio < LOW_ENERGY_RATIO:
        return LOW_ENERGY_AGING_MULTIPLIER
    return 1.0


def basal_cost(segment_count: int, dt: float, params: MetabolismParams) -> float:
    return segment_count * params.basal_constant * dt


def movement_cost(
    angular_velocities: Sequence[float], dt: float, params: MetabolismParams
) -> float:
    """Sum of ``(1 + |w|) ** power_exponent * movement_constant * dt`` over moving segments."""
    total = 0.0
    for angular_velocity in angular_velocities:
        if angular_velocity == 0.0:
            continue
        speed = abs(angular_velocity)
        total += (1.0 + speed) ** params.power_exponent * params.movement_constant * dt
    return total


def _with_energy(
    state: MetabolismState,
    energy: float,
    params: MetabolismParams,
    events: List[LifecycleEvent],
) -> MetabolismState:
    """Clamp ``energy`` into the state and record a readiness edge if one occurred."""
    energy = clamp(energy, 0.0, state.max_energy)
    ready = energy >= params.reproduction_threshold
    if ready != state.reproduction_ready:
        events.append(ReproductionReadyChanged(ready=ready, energy=energy))
    return replace(state, current_energy=energy, reproduction_ready=ready)


def tick_metabolism(
    state: MetabolismState,
    segment_count: int,
    angular_velocities: Sequence[float],
    dt: float,
    params: MetabolismParams = DEFAULT_METABOLISM_PARAMS,
) -> MetabolismTick:
    """Advance one creature's metabolism by ``dt`` seconds.

    A dead state is returned unchanged with no events.
    """
    if not state.alive:
        return MetabolismTick(state)

    events: List[LifecycleEvent] = []
    age = state.age + params.aging_rate * aging_multiplier(state.energy_ratio) * dt
    state = replace(state, age=age)

    state = _with_energy(
        state, state.current_energy - basal_cost(segment_count, dt, params), params, events
    )

    if angular_velocities:
        state = _with_energy(
            state,
            state.current_energy - movement_cost(angular_velocities, dt, params),
            params,
            events,
        )

    if state.age >= params.max_age:
        # Dead creatures are inert: readiness is dropped without another edge
        state = replace(state, alive=False, reproduction_ready=False)
        events.append(CreatureDied(reason="old_age", age=state.age))
        logger.info("Creature died of old age at %.1fs", state.age)

    return MetabolismTick(state, events)


def charge_movement(
    state: MetabolismState,
    angular_velocities: Sequence[float],
    dt: float,
    params: MetabolismParams = DEFAULT_METABOLISM_PARAMS,
) -> MetabolismTick:
    """Charge only the movement cost (used after locomotion within a tick)."""
    if not state.alive:
        return MetabolismTick(state)
    events: List[LifecycleEvent] = []
    state = _with_energy(
        state,
        state.current_energy - movement_cost(angular_velocities, dt, params),
        params,
        events,
    )
    return MetabolismTick(state, events)


def spend_energy(
    state: MetabolismState, amount: float, params: MetabolismParams = DEFAULT_METABOLISM_PARAMS
) -> MetabolismTick:
    """Deduct a lump sum (e.g. the reproduction cost)."""
    if not state.alive:
        return MetabolismTick(state)
    events: List[LifecycleEvent] = []
    state = _with_energy(state, state.current_energy - amount, params, events)
    return MetabolismTick(state, events)


def feed(
    state: MetabolismState, amount: float, params: MetabolismParams = DEFAULT_METABOLISM_PARAMS
) -> MetabolismTick:
    """Add food energy. The ``FoodConsumed`` event carries the energy actually gained."""
    if not state.alive:
        return MetabolismTick(state)
    events: List[LifecycleEvent] = []
    before = state.current_energy
    state = _with_energy(state, before + amount, params, events)
    events.insert(0, FoodConsumed(energy_gained=state.current_energy - before))
    return MetabolismTick(state, events)
