"""
exprvec
=======
Fixed-dimension owning and reference vectors for expression evaluation.

Why is this file needed?
------------------------
It re-exports the public vector API so callers can write
`from exprvec import Vec3, Mode, GenericVector` without knowing the module layout.

Note: This package is pure Python/NumPy.
Logging is left to the embedding application; see `exprvec.logging_config`.
"""
from exprvec.model.vector import (
    GenericVector,
    Mode,
    OwningVector,
    ReferenceVector,
    Vec1,
    Vec1Ref,
    Vec2,
    Vec2Ref,
    Vec3,
    Vec3Ref,
    Vec4,
    Vec4Ref,
    vector_type,
)
from exprvec.model.reducer import Reducer

__all__ = [
    "GenericVector",
    "Mode",
    "OwningVector",
    "ReferenceVector",
    "Reducer",
    "Vec1",
    "Vec1Ref",
    "Vec2",
    "Vec2Ref",
    "Vec3",
    "Vec3Ref",
    "Vec4",
    "Vec4Ref",
    "vector_type",
]
