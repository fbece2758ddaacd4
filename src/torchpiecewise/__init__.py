"""torchpiecewise: PyTorch integration of piecewise well-behaved functions."""

from . import quadrature

__all__ = [
    "quadrature",
]

__version__ = "0.1.0"
