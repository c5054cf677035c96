"""HTTP service exposing the creature simulation."""
