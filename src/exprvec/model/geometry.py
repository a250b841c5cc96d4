"""
Three-dimensional vector operations.

`Geometry3` is mixed into the vector types whose dimension is 3 only, so on
any other dimension `cross`, `orthogonal`, `angle` and `rotate_by` simply do
not exist.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from exprvec.model.vector import GenericVector


class Geometry3:
    """
    Mixin with the 3D-only operations of a vector type.

    Relies on the storage and helpers of `GenericVector`; the other operand
    must have the same dtype and dimension 3 (any storage mode).
    """
    __slots__ = ()

    def cross(self, other: GenericVector) -> GenericVector:
        """Cross product, returned as a new owning vector."""
        x = self._data
        o = self._coerce(other)
        return self._value_type._wrap(np.array([
            x[1] * o[2] - x[2] * o[1],
            x[2] * o[0] - x[0] * o[2],
            x[0] * o[1] - x[1] * o[0],
        ], dtype=self.dtype))

    def orthogonal(self) -> GenericVector:
        """
        Return a vector orthogonal to this one.

        Uses (x1 + x2, x2 - x0, -x0 - x1), whose dot product with (x0, x1, x2)
        cancels term by term. The result is not normalized.
        """
        x = self._data
        return self._value_type._wrap(np.array([
            x[1] + x[2],
            x[2] - x[0],
            -x[0] - x[1],
        ], dtype=self.dtype))

    def angle(self, other: GenericVector) -> np.floating:
        """
        Returns the angle in radians between this vector and another.

        Zero if either vector has zero length. The cosine is clamped to [-1, 1]
        so rounding on (anti)parallel vectors cannot push acos out of its domain.
        """
        self._coerce(other)
        lengths = self.length() * other.length()
        if lengths == 0:
            return self._scalar(0)
        cosine = self.dot(other) / lengths
        return np.arccos(np.clip(cosine, -1.0, 1.0))

    def rotate_by(self, axis: GenericVector, angle: float) -> GenericVector:
        """
        Return this vector rotated by `angle` radians about `axis`.

        Args:
            axis: Rotation axis. Must already be normalized; a non-unit axis
                  is not detected and gives a scaled result.
            angle: Rotation angle in radians (right-handed about `axis`).

        Returns:
            A new owning vector.
        """
        self._coerce(axis)
        c = np.cos(angle)
        s = np.sin(angle)
        return c * self + (1 - c) * self.dot(axis) * axis - s * self.cross(axis)
