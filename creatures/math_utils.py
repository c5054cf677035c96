"""Centralized math utilities for the simulation.

Pure Python 2D vector maths plus the scalar helpers shared by the genetic
operators and the locomotion model.
"""

from __future__ import annotations

import math


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation with ``t`` clamped to [0, 1]."""
    t = clamp(t, 0.0, 1.0)
    return a + (b - a) * t


def sigmoid(x: float) -> float:
    """Sigmoid activation function."""
    return 1.0 / (1.0 + math.exp(-max(-60.0, min(60.0, x))))  # Clamped to prevent overflow


class Vector2:
    """A 2D vector class for mathematical operations."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x: float = float(x)
        self.y: float = float(y)

    @classmethod
    def from_angle(cls, degrees: float, length: float = 1.0) -> "Vector2":
        """Vector of ``length`` pointing at ``degrees`` (counter-clockwise from +x)."""
        radians = math.radians(degrees)
        return cls(length * math.cos(radians), length * math.sin(radians))

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> "Vector2":
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalize(self) -> "Vector2":
        length = math.sqrt(self.x * self.x + self.y * self.y)
        if length == 0:
            return Vector2(0, 0)
        return Vector2(self.x / length, self.y / length)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def angle_to(self, other: "Vector2") -> float:
        """Unsigned angle in degrees (0-180) between this vector and ``other``."""
        denominator = self.length() * other.length()
        if denominator == 0:
            return 0.0
        cosine = clamp(self.dot(other) / denominator, -1.0, 1.0)
        return math.degrees(math.acos(cosine))

    def heading(self) -> float:
        """Direction of this vector in degrees (-180, 180]."""
        return math.degrees(math.atan2(self.y, self.x))

    def distance_to(self, other: "Vector2") -> float:
        return (self - other).length()

    def update(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def copy(self) -> "Vector2":
        """Return a copy of this vector."""
        return Vector2(self.x, self.y)

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __eq__(self, other: object) -> bool:
        """Check if two vectors are equal."""
        if other.__class__ is not Vector2:
            return False
        return abs(self.x - other.x) < 1e-9 and abs(self.y - other.y) < 1e-9

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __repr__(self) -> str:
        return f"Vector2({self.x}, {self.y})"

    def add_inplace(self, other: "Vector2") -> "Vector2":
        """Add another vector to this one in-place."""
        self.x += other.x
        self.y += other.y
        return self


__all__ = ["Vector2", "clamp", "lerp", "sigmoid"]
