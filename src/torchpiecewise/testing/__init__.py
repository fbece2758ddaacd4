"""Testing helpers for torchpiecewise."""
