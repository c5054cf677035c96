"""Configuration package for the creature simulation.

Constants are grouped by concern (genetics, body, energy, server). The
dataclass configs in ``simulation_config`` bundle them into tunable objects
that are passed explicitly to the systems that need them.
"""
