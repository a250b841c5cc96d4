"""
Fixed-Dimension Vectors
=======================
Small numeric vectors used as a value type by the expression evaluator.

Every vector type is parameterized by scalar type T, dimension D and a
storage Mode:

- OWNING vectors hold their own array of D scalars.
- REFERENCE vectors are views over D contiguous scalars owned by someone
  else (a numpy array, an `array.array`, another vector...). Writing through
  a reference vector writes the external buffer; the buffer must outlive it.

The concrete class for a (T, D, Mode) combination is built once and cached,
so what a vector can do is decided by its type:

    >>> Vec3 = GenericVector[np.float64, 3]
    >>> Vec3Ref = GenericVector[np.float64, 3, Mode.REFERENCE]
    >>> buffer = np.array([1.0, 2.0, 3.0])
    >>> ref = Vec3Ref(buffer)
    >>> ref += Vec3(1.0)
    >>> buffer
    array([2., 3., 4.])

Reference types require storage to construct, the 2/3/4-scalar constructors
exist only for the matching dimension, and `cross`/`orthogonal`/`angle`/
`rotate_by` only exist for D == 3 (see `exprvec.model.geometry`). Misuse
raises TypeError at the call, the same way Python rejects a call with the
wrong signature.

Arithmetic results are always new OWNING vectors. Operands must share T and
D; their modes may differ.

Division by a scalar multiplies by the reciprocal (one division, D
multiplications). The result can differ from D separate divisions in the
last bit; this is intentional.
"""
from __future__ import annotations

import logging
import numbers
import operator
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Iterator

import numpy as np

from exprvec.config import DEFAULT_DTYPE, EXPLICIT_COMPONENT_DIMENSIONS, GEOMETRY_DIMENSION
from exprvec.model.geometry import Geometry3
from exprvec.model.reducer import Reducer, linear_sum

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    """Storage mode of a vector type."""
    OWNING = "owning"
    REFERENCE = "reference"


class GenericVector:
    """
    Common base of all vector types.

    Not instantiable by itself: use ``GenericVector[T, D]`` (owning),
    ``GenericVector[T, D, Mode.REFERENCE]`` or `vector_type` to get a
    concrete class.
    """
    __slots__ = ("_data",)

    # numpy scalars on the left of an operator defer to our reflected methods
    __array_ufunc__ = None
    # mutable
    __hash__ = None  # type: ignore[assignment]

    # mode implied by subscripting this base; None means "caller chooses"
    _base_mode: ClassVar[Mode | None] = None

    dim: ClassVar[int]
    dtype: ClassVar[np.dtype]
    mode: ClassVar[Mode]
    _scalar: ClassVar[type[np.floating]]
    _reducer: ClassVar[Reducer]
    _value_type: ClassVar[type[OwningVector]]

    _data: npt.NDArray[np.floating]

    def __class_getitem__(cls, params: Any) -> type[GenericVector]:
        if getattr(cls, "dim", None) is not None:
            raise TypeError(f"{cls.__name__} is already a concrete vector type.")
        if not isinstance(params, tuple):
            params = (params,)
        if len(params) == 2:
            dtype, dim = params
            mode = cls._base_mode or Mode.OWNING
        elif len(params) == 3:
            dtype, dim, mode = params
            mode = Mode(mode)
            if cls._base_mode is not None and mode is not cls._base_mode:
                raise TypeError(f"{cls.__name__} only builds {cls._base_mode} vector types, "
                                f"got mode {mode}.")
        else:
            raise TypeError(f"{cls.__name__}[...] takes (dtype, dim) or (dtype, dim, mode), "
                            f"got {len(params)} parameter(s).")
        return vector_type(dim, dtype=dtype, mode=mode)

    def __new__(cls, *args: Any, **kwargs: Any) -> GenericVector:
        if getattr(cls, "dim", None) is None:
            raise TypeError(f"{cls.__name__} is abstract; build a concrete type with "
                            f"GenericVector[dtype, dim] or vector_type().")
        return super().__new__(cls)

    @classmethod
    def _wrap(cls, data: npt.NDArray[np.floating]) -> GenericVector:
        """Adopt `data` as storage without copying or validating it."""
        vec = object.__new__(cls)
        vec._data = data
        return vec

    @classmethod
    def value_type(cls) -> type[OwningVector]:
        """Owning type with the same dtype and dimension."""
        return cls._value_type

    @classmethod
    def ref_type(cls) -> type[ReferenceVector]:
        """Reference type with the same dtype and dimension."""
        return _build_vector_type(cls.dim, cls.dtype, Mode.REFERENCE)

    def _coerce(self, other: GenericVector) -> npt.NDArray[np.floating]:
        """Return the storage of a compatible vector, or raise TypeError."""
        if not isinstance(other, GenericVector):
            raise TypeError(f"Expected a vector, got {type(other).__name__}.")
        if other.dim != self.dim or other.dtype != self.dtype:
            raise TypeError(f"Incompatible vectors {type(self).__name__} and {type(other).__name__}: "
                            f"dimension and dtype must match.")
        return other._data

    # ------------------------------------------------------------------
    # Element access

    def __getitem__(self, index: int) -> np.floating:
        return self._data[index]

    def __setitem__(self, index: int, value: float) -> None:
        self._data[index] = value

    def __len__(self) -> int:
        return self.dim

    def __iter__(self) -> Iterator[np.floating]:
        return iter(self._data)

    def __array__(self, dtype: Any = None, copy: bool | None = None) -> npt.NDArray[Any]:
        if copy:
            return np.array(self._data, dtype=dtype, copy=True)
        if copy is False and dtype is not None and np.dtype(dtype) != self.dtype:
            raise ValueError(f"Cannot view {type(self).__name__} as {np.dtype(dtype)} without a copy.")
        return np.asarray(self._data, dtype=dtype)

    def assign(self, other: GenericVector) -> GenericVector:
        """Copy the components of `other` into this vector's storage."""
        self._data[:] = self._coerce(other)
        return self

    def copy(self) -> OwningVector:
        """Independent owning copy."""
        return self._value_type._wrap(self._data.copy())

    # ------------------------------------------------------------------
    # In-place arithmetic

    def _scale_by_reciprocal(self, value: float) -> None:
        one_over_value = self._scalar(1) / self._scalar(value)
        self._data *= one_over_value

    def __iadd__(self, other: GenericVector) -> GenericVector:
        if not isinstance(other, GenericVector):
            return NotImplemented
        self._data += self._coerce(other)
        return self

    def __isub__(self, other: GenericVector) -> GenericVector:
        if not isinstance(other, GenericVector):
            return NotImplemented
        self._data -= self._coerce(other)
        return self

    def __imul__(self, other: GenericVector | float) -> GenericVector:
        if isinstance(other, GenericVector):
            self._data *= self._coerce(other)
        elif isinstance(other, numbers.Real):
            self._data *= self._scalar(other)
        else:
            return NotImplemented
        return self

    def __itruediv__(self, other: GenericVector | float) -> GenericVector:
        if isinstance(other, GenericVector):
            self._data /= self._coerce(other)
        elif isinstance(other, numbers.Real):
            self._scale_by_reciprocal(other)
        else:
            return NotImplemented
        return self

    # ------------------------------------------------------------------
    # Arithmetic producing new owning vectors

    def __add__(self, other: GenericVector) -> OwningVector:
        if not isinstance(other, GenericVector):
            return NotImplemented
        return self._value_type._wrap(self._data + self._coerce(other))

    def __sub__(self, other: GenericVector) -> OwningVector:
        if not isinstance(other, GenericVector):
            return NotImplemented
        return self._value_type._wrap(self._data - self._coerce(other))

    def __mul__(self, other: GenericVector | float) -> OwningVector:
        if isinstance(other, GenericVector):
            return self._value_type._wrap(self._data * self._coerce(other))
        if isinstance(other, numbers.Real):
            return self._value_type._wrap(self._data * self._scalar(other))
        return NotImplemented

    def __rmul__(self, other: float) -> OwningVector:
        if isinstance(other, numbers.Real):
            return self._value_type._wrap(self._data * self._scalar(other))
        return NotImplemented

    def __truediv__(self, other: GenericVector | float) -> OwningVector:
        if isinstance(other, GenericVector):
            return self._value_type._wrap(self._data / self._coerce(other))
        if isinstance(other, numbers.Real):
            result = self.copy()
            result._scale_by_reciprocal(other)
            return result
        return NotImplemented

    def __neg__(self) -> OwningVector:
        return self._value_type._wrap(-self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GenericVector) or other.dim != self.dim or other.dtype != self.dtype:
            return NotImplemented
        return bool(np.array_equal(self._data, other._data))

    # ------------------------------------------------------------------
    # Norms

    def length2(self) -> np.floating:
        """Square of the euclidean norm."""
        return self._reducer.sum(self._data * self._data)

    def length(self) -> np.floating:
        """Euclidean norm."""
        return np.sqrt(self.length2())

    def normalize(self) -> np.floating:
        """
        Normalize in place and return the norm before normalization.

        The exact zero vector has no direction; it becomes the unit vector
        along the first axis (1, 0, ..., 0) and 0 is returned.
        """
        length2 = self.length2()
        if length2:
            length = np.sqrt(length2)
            self._scale_by_reciprocal(length)
            return length

        logger.debug(f"Normalizing zero {type(self).__name__}; falling back to the first axis.")
        self._data[:] = 0
        self._data[0] = 1
        return self._scalar(0)

    def normalized(self) -> OwningVector:
        """Normalized owning copy; this vector is left untouched."""
        other = self.copy()
        other.normalize()
        return other

    def dot(self, other: GenericVector) -> np.floating:
        """Inner product, accumulated left to right."""
        return linear_sum(self._data * self._coerce(other))

    # ------------------------------------------------------------------
    # Text

    def __str__(self) -> str:
        return "(" + ",".join(format(value, "g") for value in self._data) + ")"

    def __repr__(self) -> str:
        components = ", ".join(repr(float(value)) for value in self._data)
        return f"{self.__class__.__name__}({components})"


class OwningVector(GenericVector):
    """
    Vector that owns its D components.

    Constructors:
        Vec()                 uninitialized components
        Vec(s)                every component set to scalar s
        Vec(a, b[, c[, d]])   one scalar per component, only when D is 2, 3 or 4
        Vec(other)            copy of any vector with the same dtype and D
    """
    __slots__ = ()
    _base_mode = Mode.OWNING

    def __init__(self, *components: float | GenericVector) -> None:
        count = len(components)
        if count == 0:
            self._data = np.empty(self.dim, dtype=self.dtype)
        elif count == 1 and isinstance(components[0], GenericVector):
            self._data = self._coerce(components[0]).copy()
        elif count == 1:
            _check_scalars(components)
            self._data = np.full(self.dim, components[0], dtype=self.dtype)
        elif count == self.dim and count in EXPLICIT_COMPONENT_DIMENSIONS:
            _check_scalars(components)
            self._data = np.array(components, dtype=self.dtype)
        else:
            raise TypeError(f"{self.__class__.__name__}() takes 0 or 1 arguments"
                            + (f" or {self.dim} components" if self.dim in EXPLICIT_COMPONENT_DIMENSIONS else "")
                            + f", got {count}.")

    def __copy__(self) -> OwningVector:
        return self.copy()


class ReferenceVector(GenericVector):
    """
    Vector viewing D contiguous scalars of external storage.

    Args:
        storage: A C-contiguous numpy array of the vector's dtype, an object
                 exposing a buffer of that dtype (e.g. `array.array`), or
                 another vector of the same type parameters.
        offset: Index of the first component within `storage`.
    """
    __slots__ = ()
    _base_mode = Mode.REFERENCE

    def __init__(self, storage: Any, offset: int = 0) -> None:
        if isinstance(storage, GenericVector):
            flat = self._coerce(storage)
        else:
            flat = _flat_view(storage, self.dtype)

        offset = operator.index(offset)
        end = offset + self.dim
        if offset < 0 or end > flat.size:
            raise ValueError(f"{self.__class__.__name__} needs {self.dim} elements from offset {offset}, "
                             f"but the storage holds {flat.size}.")
        self._data = flat[offset:end]

    def __copy__(self) -> ReferenceVector:
        # another view on the same storage
        return type(self)(self)


def _check_scalars(values: tuple[Any, ...]) -> None:
    for value in values:
        if not isinstance(value, numbers.Real):
            raise TypeError(f"Vector components must be real scalars, got {type(value).__name__}.")


def _flat_view(storage: Any, dtype: np.dtype) -> npt.NDArray[np.floating]:
    """One-dimensional view over `storage`; never copies."""
    if isinstance(storage, np.ndarray):
        if storage.dtype != dtype:
            raise TypeError(f"Storage dtype {storage.dtype} does not match vector dtype {dtype}.")
        if not storage.flags.c_contiguous:
            raise TypeError("Storage array must be C-contiguous.")
        return storage.reshape(-1)

    try:
        view = memoryview(storage)
    except TypeError as e:
        raise TypeError(f"Cannot bind a reference vector to {type(storage).__name__}; "
                        f"a contiguous buffer of {dtype.name} is required.") from e
    if not view.c_contiguous:
        raise TypeError("Storage buffer must be C-contiguous.")
    if np.dtype(view.format) != dtype:
        raise TypeError(f"Storage format '{view.format}' does not match vector dtype {dtype}.")
    return np.frombuffer(view, dtype=dtype)


def _type_name(dim: int, dtype: np.dtype, mode: Mode) -> str:
    name = f"Vec{dim}"
    if mode is Mode.REFERENCE:
        name += "Ref"
    if dtype != np.dtype(DEFAULT_DTYPE):
        name += f"_{dtype.name}"
    return name


@lru_cache(maxsize=None)
def _build_vector_type(dim: int, dtype: np.dtype, mode: Mode) -> type[GenericVector]:
    base = OwningVector if mode is Mode.OWNING else ReferenceVector
    bases = (Geometry3, base) if dim == GEOMETRY_DIMENSION else (base,)
    name = _type_name(dim, dtype, mode)

    cls = type(name, bases, {
        "__slots__": (),
        "__module__": __name__,
        "__qualname__": name,
        "dim": dim,
        "dtype": dtype,
        "mode": mode,
        "_scalar": dtype.type,
        "_reducer": Reducer(dim),
    })
    if mode is Mode.OWNING:
        cls._value_type = cls
    else:
        cls._value_type = _build_vector_type(dim, dtype, Mode.OWNING)

    logger.debug(f"Built vector type {name} (dim={dim}, dtype={dtype.name}, mode={mode}).")
    return cls


def vector_type(
    dim: int,
    dtype: Any = DEFAULT_DTYPE,
    mode: Mode | str = Mode.OWNING,
) -> type[GenericVector]:
    """
    Return the vector class for the given dimension, scalar type and mode.

    Args:
        dim: Number of components (>= 0).
        dtype: A numpy floating dtype or anything `np.dtype` accepts for one.
        mode: Mode.OWNING (default) or Mode.REFERENCE.

    Raises:
        TypeError: If `dim` is not an integer or `dtype` is not floating point.
        ValueError: If `dim` is negative or `mode` is unknown.

    Returns:
        The cached class; repeated calls with equal arguments return the same object.
    """
    if isinstance(dim, bool) or not isinstance(dim, numbers.Integral):
        raise TypeError(f"Vector dimension must be an integer, got {dim!r}.")
    dim = int(dim)
    if dim < 0:
        raise ValueError(f"Vector dimension must be non-negative, got {dim}.")

    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.floating):
        raise TypeError(f"Vector dtype must be floating point, got {dtype}.")

    return _build_vector_type(dim, dtype, Mode(mode))


Vec1 = vector_type(1)
Vec2 = vector_type(2)
Vec3 = vector_type(3)
Vec4 = vector_type(4)

Vec1Ref = vector_type(1, mode=Mode.REFERENCE)
Vec2Ref = vector_type(2, mode=Mode.REFERENCE)
Vec3Ref = vector_type(3, mode=Mode.REFERENCE)
Vec4Ref = vector_type(4, mode=Mode.REFERENCE)
