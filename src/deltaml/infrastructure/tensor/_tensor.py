"""
Concrete Tensor implementation (NumPy backend).

This module provides the concrete `Tensor` that satisfies the domain-level
`ITensor` protocol. Storage is a C-contiguous NumPy ``float32`` array that
the tensor owns exclusively; the shape is kept alongside it as a tuple of
Python ints.

Design notes
------------
- Operations are grouped into mixins (construction, elementwise, layout,
  reduction, linear algebra) that the `Tensor` class composes. Mixins build
  their results through `Tensor._from_numpy`, the single place where the
  ``buffer.size == product(shape)`` invariant is checked.
- No operation returns a tensor that aliases another tensor's storage:
  inputs are copied on construction, results are fresh arrays, and
  `to_numpy` / `to_vec` hand out copies.
- Binary elementwise operations require exact shape matches. Broadcasting is
  only available through the explicit `broadcast` operation.
"""

from __future__ import annotations

import math
import operator
from typing import Any, Iterable, Optional, Sequence, Union

import numpy as np

from ...domain._tensor import ITensor
from ...domain._errors import TensorError, TensorErrorKind
from .mixins import (
    TensorMixinConstruction,
    TensorMixinElementwise,
    TensorMixinLayout,
    TensorMixinReduction,
    TensorMixinLinalg,
)

Number = Union[int, float]


class Tensor(
    TensorMixinConstruction,
    TensorMixinElementwise,
    TensorMixinLayout,
    TensorMixinReduction,
    TensorMixinLinalg,
    ITensor,
):
    """
    Dense, dynamically-ranked float32 tensor.

    Parameters
    ----------
    buffer : Sequence[Number] or numpy.ndarray
        Flat (one-dimensional) values in row-major order. The values are
        copied; later changes to `buffer` do not affect the tensor.
    shape : Sequence[int]
        One non-negative extent per axis. ``()`` describes a scalar tensor
        holding exactly one value.

    Raises
    ------
    TensorError
        ``SHAPE_MISMATCH`` if ``len(buffer) != product(shape)`` or the buffer
        is not one-dimensional; ``INVALID_SHAPE`` if an extent is negative or
        not an integer.

    Examples
    --------
    >>> t = Tensor([1.0, 2.0, 3.0, 4.0], (2, 2))
    >>> t.shape
    (2, 2)
    """

    _dtype = np.dtype(np.float32)

    def __init__(
        self, buffer: Union[Sequence[Number], np.ndarray], shape: Sequence[int]
    ) -> None:
        shape_t = self._normalize_shape(shape, op="new")
        arr = np.array(buffer, dtype=self._dtype, copy=True)
        if arr.ndim != 1:
            raise TensorError(
                TensorErrorKind.SHAPE_MISMATCH,
                "new",
                f"buffer must be one-dimensional, got an array of shape {arr.shape}",
            )
        expected = math.prod(shape_t)
        if arr.size != expected:
            raise TensorError(
                TensorErrorKind.SHAPE_MISMATCH,
                "new",
                f"buffer of length {arr.size} does not fit shape {shape_t} "
                f"({expected} elements)",
            )
        self._data = arr.reshape(shape_t)
        self._shape = shape_t

    # ------------------------------------------------------------------
    # Internal construction
    # ------------------------------------------------------------------
    @classmethod
    def _from_numpy(
        cls, arr: Any, shape: Optional[Sequence[int]] = None, *, copy: bool = False
    ) -> "Tensor":
        """
        Wrap a NumPy result into a new tensor, bypassing `__init__`.

        Parameters
        ----------
        arr : array-like
            Values to wrap. Converted to a C-contiguous float32 array.
        shape : Optional[Sequence[int]]
            Shape to give the result. Defaults to ``arr.shape``.
        copy : bool, optional
            Force a copy even when `arr` is already a contiguous float32
            array. Required whenever `arr` may be referenced elsewhere.

        Returns
        -------
        Tensor
            New tensor owning its storage.

        Raises
        ------
        TensorError
            ``SHAPE_MISMATCH`` if ``arr.size != product(shape)``.
        """
        if copy:
            data = np.array(arr, dtype=cls._dtype, order="C", copy=True)
        else:
            data = np.asarray(arr, dtype=cls._dtype, order="C")

        shape_t = data.shape if shape is None else cls._normalize_shape(shape)
        if data.size != math.prod(shape_t):
            raise TensorError(
                TensorErrorKind.SHAPE_MISMATCH,
                "tensor",
                f"{data.size} values cannot be arranged as shape {shape_t}",
            )

        obj = cls.__new__(cls)  # bypass __init__
        obj._data = data.reshape(shape_t)
        obj._shape = tuple(int(d) for d in shape_t)
        return obj

    @staticmethod
    def _normalize_shape(shape: Iterable[Any], op: str = "tensor") -> tuple[int, ...]:
        """
        Convert a shape-like iterable into a tuple of non-negative ints.

        Raises
        ------
        TensorError
            ``INVALID_SHAPE`` for negative, boolean or non-integer extents.
        """
        try:
            dims = tuple(shape)
        except TypeError:
            raise TensorError(
                TensorErrorKind.INVALID_SHAPE,
                op,
                f"shape must be a sequence of ints, got {shape!r}",
            ) from None

        out = []
        for d in dims:
            if isinstance(d, (bool, np.bool_)):
                raise TensorError(
                    TensorErrorKind.INVALID_SHAPE, op, f"invalid extent {d!r}"
                )
            try:
                n = operator.index(d)
            except TypeError:
                raise TensorError(
                    TensorErrorKind.INVALID_SHAPE,
                    op,
                    f"extent {d!r} in shape {dims} is not an integer",
                ) from None
            if n < 0:
                raise TensorError(
                    TensorErrorKind.INVALID_SHAPE,
                    op,
                    f"extent {n} in shape {dims} is negative",
                )
            out.append(int(n))
        return tuple(out)

    # ------------------------------------------------------------------
    # Validation helpers shared by the mixins
    # ------------------------------------------------------------------
    @staticmethod
    def _binary_op_shape_check(op: str, a: "Tensor", b: "Tensor") -> None:
        """
        Validate shape compatibility for binary elementwise operations.

        The framework enforces strict shape equality; no broadcasting.

        Raises
        ------
        TypeError
            If `b` is not a Tensor.
        TensorError
            ``SHAPE_MISMATCH`` if shapes do not match exactly.
        """
        if not isinstance(b, Tensor):
            raise TypeError(f"{op} expects Tensor, got {type(b)!r}")
        if a.shape != b.shape:
            raise TensorError(
                TensorErrorKind.SHAPE_MISMATCH,
                op,
                f"shape mismatch: {a.shape} vs {b.shape}",
            )

    def _check_axis(self, op: str, axis: int) -> int:
        try:
            ax = operator.index(axis)
        except TypeError:
            raise TypeError(f"{op} axis must be an int, got {type(axis)!r}") from None
        if ax < 0 or ax >= self.rank:
            raise TensorError(
                TensorErrorKind.AXIS_OUT_OF_BOUNDS,
                op,
                f"axis {ax} is out of bounds for tensor with shape {self.shape}",
            )
        return int(ax)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the tensor shape.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape.
        """
        return self._shape

    @property
    def rank(self) -> int:
        """Number of axes (``len(shape)``)."""
        return len(self._shape)

    @property
    def dtype(self) -> np.dtype:
        """Element dtype; always ``float32``."""
        return self._dtype

    def numel(self) -> int:
        """
        Return the total number of elements in the tensor.

        Returns
        -------
        int
            Product of all dimensions in the tensor shape.
        """
        return math.prod(self._shape)

    def to_numpy(self) -> np.ndarray:
        """
        Return a copy of the values as an ndarray shaped like the tensor.

        Returns
        -------
        numpy.ndarray
            Independent float32 array; writing to it leaves the tensor intact.
        """
        return self._data.copy()

    def to_vec(self) -> list[float]:
        """
        Materialize the buffer as a flat list in row-major order.

        Returns
        -------
        list[float]
            Values in last-axis-fastest order.
        """
        return self._data.ravel(order="C").tolist()

    def copy(self) -> "Tensor":
        """Return a deep copy of this tensor."""
        return self._from_numpy(self._data, copy=True)

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Tensor(shape={self._shape}, dtype={self._dtype})"

    def __eq__(self, other: object) -> bool:
        """
        Exact equality of shape and every value (no tolerance).

        Notes
        -----
        Intended for tests; NaN never compares equal, following IEEE 754.
        """
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and bool(
            np.array_equal(self._data, other._data)
        )

    __hash__ = None  # mutable value type

    def __len__(self) -> int:
        if not self._shape:
            raise TypeError("len() of a 0-d tensor")
        return self._shape[0]
