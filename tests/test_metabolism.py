"""Tests for the metabolism and lifecycle state machine."""

import pytest

from creatures.energy.metabolism import (
    MetabolismParams,
    MetabolismState,
    aging_multiplier,
    basal_cost,
    charge_movement,
    feed,
    movement_cost,
    spend_energy,
    tick_metabolism,
)
from creatures.events.domain_events import CreatureDied, FoodConsumed, ReproductionReadyChanged
from creatures.exceptions import ConfigurationError

PARAMS = MetabolismParams()


class TestAgingMultiplier:
    @pytest.mark.parametrize(
        "ratio, expected",
        [
            (1.0, 1.0),
            (0.5, 1.0),
            (0.49, 1.5),
            (0.21, 1.5),
            (0.2, 1.5),
            (0.19, 3.0),
            (0.1, 3.0),
            (0.0, 5.0),
        ],
    )
    def test_boundaries(self, ratio, expected):
        assert aging_multiplier(ratio) == expected


class TestCosts:
    def test_basal_cost(self):
        assert basal_cost(4, 0.5, PARAMS) == pytest.approx(0.2)

    def test_movement_cost(self):
        assert movement_cost([0.0, 2.0], 1.0, PARAMS) == pytest.approx(3**1.5 * 0.001)

    def test_movement_cost_uses_magnitude(self):
        assert movement_cost([-2.0], 1.0, PARAMS) == movement_cost([2.0], 1.0, PARAMS)

    def test_only_still_segments_are_free(self):
        assert movement_cost([0.0, 0.0], 1.0, PARAMS) == 0.0
        assert movement_cost([0.0005], 1.0, PARAMS) == pytest.approx(1.0005**1.5 * 0.001)


class TestInitialState:
    def test_defaults(self):
        state = MetabolismState.initial(PARAMS)
        assert state.current_energy == 50.0
        assert state.max_energy == 100.0
        assert state.alive
        assert not state.reproduction_ready

    def test_starting_above_threshold_is_ready(self):
        state = MetabolismState.initial(MetabolismParams(initial_energy_ratio=0.9))
        assert state.reproduction_ready


class TestTick:
    def test_aging_uses_ratio_before_basal_cost(self):
        state = MetabolismState(current_energy=50.0)
        tick = tick_metabolism(state, 1, (), 1.0, PARAMS)
        assert tick.state.age == pytest.approx(1.0)
        assert tick.state.current_energy == pytest.approx(49.9)
        assert tick.events == []

    def test_low_energy_ages_faster(self):
        state = MetabolismState(current_energy=10.0)
        assert tick_metabolism(state, 1, (), 1.0, PARAMS).state.age == pytest.approx(3.0)

    def test_starving_creature_ages_five_times_faster(self):
        state = MetabolismState(current_energy=0.0)
        tick = tick_metabolism(state, 1, (), 1.0, PARAMS)
        assert tick.state.age == pytest.approx(5.0)
        assert tick.state.current_energy == 0.0
        assert tick.state.alive

    def test_movement_charged(self):
        state = MetabolismState(current_energy=50.0)
        tick = tick_metabolism(state, 1, [2.0], 1.0, PARAMS)
        assert tick.state.current_energy == pytest.approx(49.9 - 3**1.5 * 0.001)

    def test_energy_never_negative(self):
        state = MetabolismState(current_energy=0.01)
        tick = tick_metabolism(state, 20, [50.0] * 20, 1.0, PARAMS)
        assert tick.state.current_energy == 0.0

    def test_readiness_drop_emits_event(self):
        state = MetabolismState(current_energy=80.05, reproduction_ready=True)
        tick = tick_metabolism(state, 1, (), 1.0, PARAMS)
        assert not tick.state.reproduction_ready
        assert tick.events == [ReproductionReadyChanged(ready=False, energy=pytest.approx(79.95))]

    def test_death_at_max_age(self):
        state = MetabolismState(current_energy=90.0, age=299.5, reproduction_ready=True)
        tick = tick_metabolism(state, 1, (), 1.0, PARAMS)
        assert not tick.state.alive
        assert not tick.state.reproduction_ready
        died = [event for event in tick.events if isinstance(event, CreatureDied)]
        assert len(died) == 1
        assert died[0].reason == "old_age"
        assert died[0].age == pytest.approx(300.5)

    def test_dead_state_is_inert(self):
        dead = MetabolismState(current_energy=40.0, age=400.0, alive=False)
        for result in (
            tick_metabolism(dead, 3, [5.0], 1.0, PARAMS),
            charge_movement(dead, [5.0], 1.0, PARAMS),
            spend_energy(dead, 10.0, PARAMS),
            feed(dead, 10.0, PARAMS),
        ):
            assert result.state is dead
            assert result.events == []


class TestFeeding:
    def test_feed_crossing_threshold(self):
        state = MetabolismState(current_energy=75.0)
        tick = feed(state, 10.0, PARAMS)
        assert tick.state.current_energy == 85.0
        assert tick.state.reproduction_ready
        assert tick.events == [
            FoodConsumed(energy_gained=10.0),
            ReproductionReadyChanged(ready=True, energy=85.0),
        ]

    def test_feed_clamps_to_max(self):
        tick = feed(MetabolismState(current_energy=95.0, reproduction_ready=True), 10.0, PARAMS)
        assert tick.state.current_energy == 100.0
        assert tick.events == [FoodConsumed(energy_gained=5.0)]

    def test_spend_energy(self):
        state = MetabolismState(current_energy=90.0, reproduction_ready=True)
        tick = spend_energy(state, 80.0, PARAMS)
        assert tick.state.current_energy == pytest.approx(10.0)
        assert tick.events == [ReproductionReadyChanged(ready=False, energy=pytest.approx(10.0))]


class TestReadinessEdges:
    @staticmethod
    def ready_changes(tick):
        return [event for event in tick.events if isinstance(event, ReproductionReadyChanged)]

    def test_one_event_per_crossing(self):
        tick = feed(MetabolismState(current_energy=75.0), 10.0, PARAMS)
        events = self.ready_changes(tick)
        state = tick.state

        # Staying above the threshold for many ticks
        for _ in range(20):
            tick = tick_metabolism(state, 1, [0.5], 1.0, PARAMS)
            events += self.ready_changes(tick)
            state = tick.state
        assert state.current_energy > 80.0
        assert [e.ready for e in events] == [True]

        # Dipping below and climbing back
        for step in (
            lambda s: spend_energy(s, 4.0, PARAMS),
            lambda s: tick_metabolism(s, 1, (), 1.0, PARAMS),
            lambda s: feed(s, 3.0, PARAMS),
            lambda s: tick_metabolism(s, 1, (), 1.0, PARAMS),
            lambda s: tick_metabolism(s, 1, (), 1.0, PARAMS),
            lambda s: spend_energy(s, 5.0, PARAMS),
        ):
            tick = step(state)
            events += self.ready_changes(tick)
            state = tick.state

        assert [e.ready for e in events] == [True, False, True, False]
        assert not state.reproduction_ready


def test_params_validation():
    MetabolismParams().validate()
    with pytest.raises(ConfigurationError):
        MetabolismParams(max_energy=0).validate()
    with pytest.raises(ConfigurationError):
        MetabolismParams(initial_energy_ratio=1.5).validate()
    with pytest.raises(ConfigurationError):
        MetabolismParams(max_age=-1).validate()
