"""Iteratively refined trapezoidal integration rule."""

from typing import Callable, Union

import torch
from torch import Tensor

from torchpiecewise.quadrature._exceptions import IntegrationError
from torchpiecewise.quadrature._integrator import Integrator


class TrapezoidIntegral(Integrator):
    """
    Composite trapezoidal rule with step halving.

    Starts from the single trapezoid on [a, b] and halves the step until two
    successive estimates agree to ``absolute_accuracy``. Each refinement only
    evaluates the new midpoints. The stopping rule is only trusted after more
    than ``min_refinements`` refinements, so the earliest return follows the
    sixth refinement (``2**6 + 1`` evaluations).

    Parameters
    ----------
    absolute_accuracy : float
        Stop once successive estimates differ by at most this much.
    max_iterations : int
        Maximum number of estimates, the initial trapezoid included, so at
        most ``max_iterations - 1`` refinements and
        ``2**(max_iterations - 1) + 1`` evaluations.

    Raises
    ------
    ValueError
        If ``max_iterations < 2``.

    Notes
    -----
    The bounds themselves are evaluated, so an integrand that is singular at
    a bound needs :class:`PiecewiseIntegral` with critical-point avoidance.

    Examples
    --------
    >>> rule = TrapezoidIntegral(1e-10)
    >>> rule(torch.exp, 0.0, 1.0)  # approximately e - 1
    """

    # the stopping rule applies once more than this many refinements are done
    min_refinements = 5

    def __init__(
        self,
        absolute_accuracy: float = 1e-8,
        max_iterations: int = 20,
    ):
        if max_iterations < 2:
            raise ValueError(
                f"max_iterations must be at least 2, got {max_iterations}"
            )
        super().__init__(
            absolute_accuracy, max_evaluations=2 ** (max_iterations - 1) + 1
        )
        self.max_iterations = max_iterations

    def integrate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        dtype, device = self._infer_dtype_device(a, b)

        if not isinstance(a, Tensor):
            a = torch.tensor(a, dtype=dtype, device=device)
        if not isinstance(b, Tensor):
            b = torch.tensor(b, dtype=dtype, device=device)

        width = b - a

        estimate = f(torch.stack([a, b])).sum(dim=-1) * width / 2
        self.number_of_evaluations = 2

        n = 1
        for i in range(1, self.max_iterations):
            dx = width / n
            midpoints = a + dx * (
                torch.arange(n, dtype=dtype, device=device) + 0.5
            )
            refined = (estimate + dx * f(midpoints).sum(dim=-1)) / 2
            self.number_of_evaluations += n
            n *= 2

            self.absolute_error = abs((refined - estimate).item())
            if (
                self.absolute_error <= self.absolute_accuracy
                and i > self.min_refinements
            ):
                return refined

            estimate = refined

        raise IntegrationError(
            f"Trapezoid integration failed to converge after "
            f"{self.max_iterations} iterations. "
            f"Error estimate: {self.absolute_error:.2e}, "
            f"tolerance: {self.absolute_accuracy:.2e}"
        )

    def __repr__(self) -> str:
        return (
            f"TrapezoidIntegral({self.absolute_accuracy!r}, "
            f"max_iterations={self.max_iterations})"
        )
