"""
Summation strategies for fixed-dimension vectors.

The strategy is picked once per dimension when a vector type is built, so
`length2()` never decides how to add at call time. For the small dimensions
the additions are written out; D=4 pairs its terms so the two halves do not
depend on each other before the final add.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

    SumFunction = Callable[[npt.NDArray[np.floating]], np.floating]


def _sum_1(data: npt.NDArray[np.floating]) -> np.floating:
    return data[0]


def _sum_2(data: npt.NDArray[np.floating]) -> np.floating:
    return data[0] + data[1]


def _sum_3(data: npt.NDArray[np.floating]) -> np.floating:
    return data[0] + data[1] + data[2]


def _sum_4(data: npt.NDArray[np.floating]) -> np.floating:
    return (data[0] + data[1]) + (data[2] + data[3])


def linear_sum(data: npt.NDArray[np.floating]) -> np.floating:
    """Plain left-to-right accumulation, starting from a zero of the array's dtype."""
    total = data.dtype.type(0)
    for value in data:
        total += value
    return total


_SPECIALIZED: dict[int, SumFunction] = {
    1: _sum_1,
    2: _sum_2,
    3: _sum_3,
    4: _sum_4,
}


class Reducer:
    """
    Dimension-selected summation.

    Attributes:
        dim: The dimension this reducer was built for.
        sum: The summation function for `dim`; takes a 1D array of length `dim`.
    """
    __slots__ = ("dim", "sum")

    def __init__(self, dim: int) -> None:
        if dim < 0:
            raise ValueError(f"Reducer dimension must be non-negative, got {dim}.")
        self.dim = dim
        self.sum: SumFunction = _SPECIALIZED.get(dim, linear_sum)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(dim={self.dim}, strategy={self.sum.__name__})"
