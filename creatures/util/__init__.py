"""Shared utilities for the creature simulation."""

from creatures.util.rng import MissingRNGError, require_rng, require_rng_param

__all__ = ["MissingRNGError", "require_rng", "require_rng_param"]
