"""
Piecewise numerical integration (quadrature) module.

Integration over critical points:
    PiecewiseIntegral, piecewise_quad, CriticalPointSet

Delegate rules (evaluate callable on one clean interval):
    Integrator, GaussLegendreIntegral, TrapezoidIntegral

Node/weight computation for Gaussian quadrature:
    gauss_legendre_nodes_weights

Tolerance-based comparison:
    EPSILON, close, close_enough

Exceptions:
    QuadratureWarning, IntegrationError
"""

from torchpiecewise.quadrature._comparison import (
    EPSILON,
    close,
    close_enough,
)
from torchpiecewise.quadrature._critical_points import CriticalPointSet
from torchpiecewise.quadrature._exceptions import (
    IntegrationError,
    QuadratureWarning,
)
from torchpiecewise.quadrature._gauss_legendre import (
    GaussLegendreIntegral,
    gauss_legendre_nodes_weights,
)
from torchpiecewise.quadrature._integrator import Integrator
from torchpiecewise.quadrature._piecewise_integral import (
    PiecewiseIntegral,
    piecewise_quad,
)
from torchpiecewise.quadrature._trapezoid import TrapezoidIntegral

__all__ = [
    # Piecewise
    "PiecewiseIntegral",
    "piecewise_quad",
    "CriticalPointSet",
    # Delegate rules
    "Integrator",
    "GaussLegendreIntegral",
    "TrapezoidIntegral",
    # Node/weight computation
    "gauss_legendre_nodes_weights",
    # Comparison
    "EPSILON",
    "close",
    "close_enough",
    # Exceptions
    "QuadratureWarning",
    "IntegrationError",
]
