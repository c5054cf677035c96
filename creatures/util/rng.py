"""RNG utilities for deterministic simulation.

Every stochastic operation takes a ``random.Random`` explicitly. These helpers
fail loudly when one is missing instead of silently falling back to the
module-level generator, which would make runs unreproducible.
"""

import random
from typing import Any, Optional

from creatures.exceptions import SimulationError


class MissingRNGError(SimulationError):
    """Raised when an RNG is required but not available.

    This indicates a bug in the simulation setup: all genetic operators and
    spawners receive the simulation's RNG.
    """


def require_rng(owner: Any, context: str = "unknown") -> random.Random:
    """Get the RNG from an owner object (e.g. a Simulation), failing loudly.

    Args:
        owner: Object that should expose an ``rng`` attribute
        context: Description of the call site (for error messages)

    Returns:
        The owner's RNG

    Raises:
        MissingRNGError: If owner is None or has no RNG
    """
    if owner is None:
        raise MissingRNGError(
            f"Cannot get RNG: owner is None (context: {context}). "
            "The creature may not have been attached to a simulation."
        )

    rng = getattr(owner, "rng", None)
    if rng is None:
        raise MissingRNGError(
            f"Cannot get RNG: owner has no 'rng' attribute (context: {context})."
        )

    return rng


def require_rng_param(rng: Optional[random.Random], context: str) -> random.Random:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Example:
        def mutate_body(genome, rng=None):
            _rng = require_rng_param(rng, "mutate_body")
    """
    if rng is None:
        raise MissingRNGError(
            f"RNG required: {context}. Pass the simulation RNG explicitly."
        )
    return rng
