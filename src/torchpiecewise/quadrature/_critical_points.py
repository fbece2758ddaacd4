"""Normalized, tolerance-aware sets of critical points."""

import math
from typing import Iterable, Iterator, Union

import torch
from torch import Tensor

from torchpiecewise.quadrature._comparison import close_enough


class CriticalPointSet:
    """
    Sorted sequence of critical points with near-duplicates collapsed.

    Two points are duplicates when they are :func:`close_enough`. The input
    is sorted ascending and every point close enough to the last kept point
    is dropped, so the first occurrence of a cluster wins.

    Parameters
    ----------
    points : iterable of float or Tensor
        Abscissae where the integrand is discontinuous, kinked or singular.
        May be empty, unsorted or contain duplicates.

    Raises
    ------
    ValueError
        If any point is NaN or infinite.

    Examples
    --------
    >>> points = CriticalPointSet([5.0, 2.0, 2.0 + 1e-15, 5.0])
    >>> list(points)
    [2.0, 5.0]
    >>> points.lower_bound(3.0)
    1
    >>> 2.0 + 1e-15 in points
    True
    """

    def __init__(self, points: Union[Iterable[float], Tensor] = ()):
        if isinstance(points, Tensor):
            values = points.detach().to(dtype=torch.float64, device="cpu")
        else:
            values = torch.tensor(
                [float(x) for x in points], dtype=torch.float64
            )

        values = values.flatten()

        if values.numel() > 0 and not bool(torch.isfinite(values).all()):
            raise ValueError(
                f"critical points must be finite, got {values.tolist()}"
            )

        values, _ = torch.sort(values, stable=True)

        kept = []
        for x in values.tolist():
            if not kept or not close_enough(kept[-1], x):
                kept.append(x)

        self._points = tuple(kept)
        self._tensor = torch.tensor(kept, dtype=torch.float64)

    @property
    def tensor(self) -> Tensor:
        """The points as a 1-D float64 tensor (a copy)."""
        return self._tensor.clone()

    def lower_bound(self, x: float) -> int:
        """
        Index of the first point ``>= x``.

        Uses exact ordering, not the tolerance test. Returns ``len(self)``
        when every point is below ``x``.
        """
        if math.isnan(x):
            raise ValueError("cannot locate NaN among critical points")
        if not self._points:
            return 0
        target = torch.tensor([x], dtype=torch.float64)
        return int(torch.searchsorted(self._tensor, target, right=False))

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[float]:
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __contains__(self, x) -> bool:
        if not self._points:
            return False
        x = float(x)
        i = self.lower_bound(x)
        # nearest neighbours on either side of the insertion point
        return any(
            close_enough(self._points[j], x)
            for j in (i - 1, i)
            if 0 <= j < len(self._points)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, CriticalPointSet):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"CriticalPointSet({list(self._points)!r})"
