import math
from typing import List

import hypothesis.strategies

from ._real_numbers import real_numbers


@hypothesis.strategies.composite
def critical_point_lists(
    draw,
    min_value: float = -1e6,
    max_value: float = 1e6,
    max_size: int = 20,
    duplicate_probability: float = 0.3,
) -> List[float]:
    """
    Strategy for unsorted critical point lists with near-duplicates.

    Some drawn points are repeated, either exactly or shifted by a few ulps,
    so that normalization has clusters to collapse.
    """
    points = draw(
        hypothesis.strategies.lists(
            real_numbers(min_value, max_value), max_size=max_size
        )
    )

    duplicates = []
    for x in points:
        if draw(hypothesis.strategies.floats(0.0, 1.0)) < duplicate_probability:
            steps = draw(hypothesis.strategies.integers(0, 3))
            y = x
            for _ in range(steps):
                y = math.nextafter(y, math.inf)
            duplicates.append(y)

    return draw(hypothesis.strategies.permutations(points + duplicates))
