"""Tolerance-based floating-point comparison."""

import torch

EPSILON = torch.finfo(torch.float64).eps


def close(x: float, y: float, n: int = 42) -> bool:
    """
    Strict relative closeness test.

    Parameters
    ----------
    x, y : float
        Values to compare.
    n : int
        Tolerance as a multiple of machine epsilon.

    Returns
    -------
    bool
        True if the difference is within ``n * EPSILON`` relative to both
        ``|x|`` and ``|y|``.

    Notes
    -----
    If either operand is zero a relative test is meaningless, so the
    difference is compared against ``(n * EPSILON) ** 2`` instead.
    """
    if x == y:
        return True

    diff = abs(x - y)
    tolerance = n * EPSILON

    if x * y == 0.0:
        return diff < tolerance * tolerance

    return diff <= tolerance * abs(x) and diff <= tolerance * abs(y)


def close_enough(x: float, y: float, n: int = 42) -> bool:
    """
    Loose relative closeness test.

    Same as :func:`close` but the difference only needs to be within
    ``n * EPSILON`` relative to one of ``|x|`` or ``|y|``. Symmetric in its
    arguments.

    Examples
    --------
    >>> close_enough(1.0, 1.0 + 1e-15)
    True
    >>> close_enough(1.0, 1.0 + 1e-12)
    False
    """
    if x == y:
        return True

    diff = abs(x - y)
    tolerance = n * EPSILON

    if x * y == 0.0:
        return diff < tolerance * tolerance

    return diff <= tolerance * abs(x) or diff <= tolerance * abs(y)
