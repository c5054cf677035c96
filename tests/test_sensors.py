"""Tests for sensor encoding and brain output decoding."""

import pytest

from creatures.brain.sensors import (
    ENERGY_RATIO,
    FOOD_DETECTED,
    FOOD_DIRECTION,
    FOOD_DISTANCE,
    NOTHING_SENSED,
    SensorConfig,
    SensorReading,
    TargetSense,
    encode_inputs,
    outputs_to_coefficients,
    relative_direction,
    sense_motion,
    sense_target,
)
from creatures.exceptions import ConfigurationError
from creatures.genetics.neural_genome import NEATGenome
from creatures.math_utils import Vector2


class TestRelativeDirection:
    def test_left_is_positive(self):
        assert relative_direction(0.0, Vector2(0.0, 1.0)) == pytest.approx(0.5)

    def test_right_is_negative(self):
        assert relative_direction(90.0, Vector2(1.0, 0.0)) == pytest.approx(-0.5)

    def test_wraps_around(self):
        assert relative_direction(170.0, Vector2.from_angle(-170.0)) == pytest.approx(20 / 180)


class TestSenseTarget:
    def test_nothing_when_missing(self):
        assert sense_target(Vector2(), 0.0, None, 10.0) is NOTHING_SENSED

    def test_out_of_range(self):
        assert sense_target(Vector2(), 0.0, Vector2(11.0, 0.0), 10.0) is NOTHING_SENSED

    def test_in_range(self):
        sense = sense_target(Vector2(), 0.0, Vector2(5.0, 0.0), 10.0)
        assert sense == TargetSense(distance=0.5, direction=0.0, detected=1.0)

    def test_target_on_top_of_origin(self):
        sense = sense_target(Vector2(1.0, 1.0), 45.0, Vector2(1.0, 1.0), 10.0)
        assert sense.distance == 0.0
        assert sense.direction == 0.0
        assert sense.detected == 1.0


def test_sense_motion_normalises_speed():
    motion = sense_motion(Vector2(0.0, 20.0), 0.0, SensorConfig(max_speed=10.0))
    assert motion["speed"] == 1.0
    assert motion["heading"] == pytest.approx(0.5)


def test_sense_motion_still():
    assert sense_motion(Vector2(), 30.0, SensorConfig()) == {"speed": 0.0, "heading": 0.0}


class TestEncodeInputs:
    def test_all_twelve_inputs(self):
        inputs = encode_inputs(SensorReading(), 0.5)
        assert sorted(inputs) == list(range(12))
        assert inputs[ENERGY_RATIO] == 0.5
        assert inputs[FOOD_DISTANCE] == 1.0
        assert inputs[FOOD_DETECTED] == 0.0

    def test_food_channel(self):
        reading = SensorReading(food=TargetSense(distance=0.2, direction=-0.25, detected=1.0))
        inputs = encode_inputs(reading, 2.0)
        assert inputs[FOOD_DISTANCE] == 0.2
        assert inputs[FOOD_DIRECTION] == -0.25
        assert inputs[ENERGY_RATIO] == 1.0


class TestOutputsToCoefficients:
    def test_maps_sigmoid_range(self):
        brain = NEATGenome.with_io(12, 3)
        coefficients = outputs_to_coefficients(brain, {12: 1.0, 13: 0.5, 14: 0.0})
        assert coefficients == [1.0, 0.0, -1.0]

    def test_missing_output_is_neutral(self):
        brain = NEATGenome.with_io(12, 1)
        assert outputs_to_coefficients(brain, {}) == [0.0]


def test_sensor_config_validation():
    with pytest.raises(ConfigurationError):
        SensorConfig(sensor_radius=0).validate()
