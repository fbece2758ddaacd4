"""Hypothesis strategies for piecewise quadrature testing."""

from ._critical_point_lists import critical_point_lists
from ._intervals import intervals
from ._real_numbers import real_numbers

__all__ = [
    "critical_point_lists",
    "intervals",
    "real_numbers",
]
