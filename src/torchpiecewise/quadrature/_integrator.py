"""Base class for one-dimensional integration rules."""

import abc
from typing import Callable, Optional, Union

import torch
from torch import Tensor

from torchpiecewise.quadrature._comparison import EPSILON


class Integrator(abc.ABC):
    """
    Abstract integration rule over a finite interval.

    Subclasses implement :meth:`integrate` for ``a <= b``; calling the
    instance handles argument order.

    Parameters
    ----------
    absolute_accuracy : float
        Target absolute error. Must be greater than machine epsilon.
    max_evaluations : int
        Budget of integrand evaluations. Must be at least 1.

    Attributes
    ----------
    absolute_error : float or None
        Error estimate recorded by the last call, if the rule provides one.
    number_of_evaluations : int
        Integrand evaluations (counted per abscissa) made by the last call.

    Notes
    -----
    The bookkeeping attributes are overwritten on every call, so a rule
    instance should not be shared across threads.
    """

    def __init__(self, absolute_accuracy: float, max_evaluations: int):
        if not absolute_accuracy > EPSILON:
            raise ValueError(
                f"absolute_accuracy must be greater than {EPSILON}, "
                f"got {absolute_accuracy}"
            )
        if max_evaluations < 1:
            raise ValueError(
                f"max_evaluations must be at least 1, got {max_evaluations}"
            )
        self.absolute_accuracy = absolute_accuracy
        self.max_evaluations = max_evaluations
        self.absolute_error: Optional[float] = None
        self.number_of_evaluations = 0

    def __call__(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        """
        Integrate f from a to b.

        Returns zero for ``a == b`` and the negated integral over ``[b, a]``
        when ``a > b``.
        """
        a_val = self._as_float(a)
        b_val = self._as_float(b)

        if a_val == b_val:
            dtype, device = self._infer_dtype_device(a, b)
            return torch.zeros((), dtype=dtype, device=device)
        if b_val > a_val:
            return self.integrate(f, a, b)
        return -self.integrate(f, b, a)

    @abc.abstractmethod
    def integrate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        """Integrate f over [a, b], assuming ``a <= b``."""

    def integration_success(self) -> bool:
        """Whether the last call stayed within budget and accuracy."""
        if self.number_of_evaluations > self.max_evaluations:
            return False
        if self.absolute_error is None:
            return True
        return self.absolute_error <= self.absolute_accuracy

    @staticmethod
    def _as_float(x: Union[float, Tensor]) -> float:
        if isinstance(x, Tensor):
            return x.detach().item()
        return float(x)

    def _infer_dtype_device(self, a, b):
        if isinstance(a, Tensor):
            return a.dtype, a.device
        if isinstance(b, Tensor):
            return b.dtype, b.device
        return torch.float64, torch.device("cpu")
