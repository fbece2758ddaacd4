"""Integration of piecewise well-behaved functions."""

import warnings
from typing import Callable, Iterable, Optional, Union

import torch
from torch import Tensor

from torchpiecewise.quadrature._comparison import EPSILON, close_enough
from torchpiecewise.quadrature._critical_points import CriticalPointSet
from torchpiecewise.quadrature._exceptions import QuadratureWarning
from torchpiecewise.quadrature._gauss_legendre import GaussLegendreIntegral
from torchpiecewise.quadrature._integrator import Integrator

Delegate = Callable[
    [Callable[[Tensor], Tensor], float, float], Union[Tensor, float]
]


class PiecewiseIntegral(Integrator):
    """
    Integral of a function that is smooth except at known critical points.

    The interval is split at every critical point it contains and each piece
    is handed to ``integrator``. With ``avoid_critical_points`` the pieces
    stop one relative machine epsilon short of each critical point, so the
    delegate never evaluates the integrand exactly there.

    Parameters
    ----------
    integrator : callable
        Delegate rule, called as ``integrator(f, lower, upper)`` on each
        piece. Any :class:`Integrator` qualifies.
    critical_points : iterable of float, Tensor or CriticalPointSet
        Discontinuities, kinks or singularities of the integrand. Normalized
        with :class:`CriticalPointSet`.
    avoid_critical_points : bool
        Nudge piece boundaries away from critical points.

    Warns
    -----
    QuadratureWarning
        If avoidance is enabled and some critical point is not positive.
        The multiplicative nudge does not move zero and moves negative
        points towards the piece instead of away from it.

    Examples
    --------
    >>> rule = GaussLegendreIntegral(16)
    >>> integral = PiecewiseIntegral(rule, [1.0])
    >>> integral(lambda x: torch.abs(x - 1.0), 0.0, 2.0)  # 1.0
    """

    def __init__(
        self,
        integrator: Delegate,
        critical_points: Union[Iterable[float], Tensor, CriticalPointSet] = (),
        avoid_critical_points: bool = True,
    ):
        super().__init__(1.0, 1)

        if not isinstance(critical_points, CriticalPointSet):
            critical_points = CriticalPointSet(critical_points)

        self.integrator = integrator
        self.critical_points = critical_points
        self.avoid_critical_points = avoid_critical_points
        self.epsilon_factor = 1.0 + EPSILON if avoid_critical_points else 1.0

        if avoid_critical_points:
            non_positive = [x for x in critical_points if x <= 0.0]
            if non_positive:
                warnings.warn(
                    f"Critical points {non_positive} are not positive; "
                    f"relative nudges do not move them away from the "
                    f"integration pieces.",
                    QuadratureWarning,
                    stacklevel=2,
                )

    def _integrate_piece(self, f, lower: float, upper: float):
        if close_enough(lower, upper):
            return 0.0
        return self.integrator(f, lower, upper)

    def integrate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        """
        Integrate f over [a, b], assuming ``a <= b``.

        Returns
        -------
        Tensor
            Sum of the delegate results over the pieces. Zero-width pieces
            contribute nothing.
        """
        a = self._as_float(a)
        b = self._as_float(b)
        eps = self.epsilon_factor
        points = self.critical_points

        a0 = points.lower_bound(a)
        b0 = points.lower_bound(b)

        if a0 == len(points):
            # every critical point lies below a
            lower = a
            if len(points) > 0 and close_enough(a, points[-1]):
                lower = a * eps
            return self._as_result(self._integrate_piece(f, lower, b))

        result = 0.0

        if not close_enough(a, points[a0]):
            result = result + self._integrate_piece(
                f, a, min(points[a0] / eps, b)
            )

        trailing = None
        if b0 == len(points):
            b0 -= 1
            if not close_enough(points[b0], b):
                trailing = (points[b0] * eps, b)

        for i in range(a0, b0):
            result = result + self._integrate_piece(
                f, points[i] * eps, min(points[i + 1] / eps, b)
            )

        if trailing is not None:
            result = result + self._integrate_piece(f, *trailing)

        return self._as_result(result)

    @staticmethod
    def _as_result(value) -> Tensor:
        if isinstance(value, Tensor):
            return value
        return torch.tensor(value, dtype=torch.float64)

    def __repr__(self) -> str:
        return (
            f"PiecewiseIntegral({self.integrator!r}, "
            f"{list(self.critical_points)!r}, "
            f"avoid_critical_points={self.avoid_critical_points})"
        )


def piecewise_quad(
    f: Callable[[Tensor], Tensor],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    critical_points: Union[Iterable[float], Tensor, CriticalPointSet] = (),
    *,
    integrator: Optional[Delegate] = None,
    avoid_critical_points: bool = True,
) -> Tensor:
    """
    Compute a definite integral split at critical points.

    Parameters
    ----------
    f : callable
        Integrand. Receives a tensor of abscissae, returns a tensor of the
        same shape.
    a, b : float or Tensor
        Integration bounds (scalars only). ``a > b`` gives the negated
        integral over ``[b, a]``.
    critical_points : iterable of float, Tensor or CriticalPointSet
        Points where f is discontinuous, kinked or singular.
    integrator : callable, optional
        Rule used on each piece. Defaults to ``GaussLegendreIntegral(32)``.
    avoid_critical_points : bool
        Keep piece boundaries one relative epsilon away from critical points.

    Returns
    -------
    Tensor
        Integral approximation.

    Raises
    ------
    IntegrationError
        Propagated from the delegate rule if it fails to converge.

    Notes
    -----
    Differentiable with respect to parameters captured in f's closure.
    Gradients through the bounds are not supported.

    Examples
    --------
    >>> # Step function with a jump at 1
    >>> piecewise_quad(lambda x: (x > 1.0).double(), 0.0, 3.0, [1.0])  # 2.0
    """
    if integrator is None:
        integrator = GaussLegendreIntegral(32)

    integral = PiecewiseIntegral(
        integrator,
        critical_points,
        avoid_critical_points=avoid_critical_points,
    )
    return integral(f, a, b)
