"""
Elementwise tensor operations.

This module declares `TensorMixinElementwise`, which implements value-wise
arithmetic on tensors: tensor-tensor addition and division, scalar
arithmetic, powers and roots, a generic unary `map`, range normalization,
and the two in-place mutations used by optimizers and data augmentation
(`sub_assign`, `add_noise`).

Notes
-----
- Tensor-tensor operations require identical shapes. Callers wanting
  broadcasting call `broadcast` first.
- Arithmetic follows IEEE 754 float32 semantics: dividing by zero or taking
  the square root of a negative number produces inf/NaN, without raising and
  without emitting NumPy runtime warnings.
"""

from __future__ import annotations

import math
from abc import ABC
from typing import Callable, Optional, Union

import numpy as np

from ....domain._tensor import ITensor
from ....domain._errors import TensorError, TensorErrorKind
from .._random import resolve_rng

Number = Union[int, float]
"""Scalar types accepted by Tensor arithmetic operators."""


class TensorMixinElementwise(ABC):
    """
    Mixin implementing elementwise arithmetic for tensors.

    Every out-of-place method returns a new tensor with the receiver's shape.
    `sub_assign` and `add_noise` mutate the receiver and return ``None``;
    they require exclusive access to it.
    """

    # ----------------------------
    # Tensor-tensor
    # ----------------------------
    def add(self: ITensor, other: ITensor) -> ITensor:
        """
        Elementwise addition of two same-shape tensors.

        Raises
        ------
        TensorError
            ``SHAPE_MISMATCH`` if the shapes differ.
        """
        self._binary_op_shape_check("add", self, other)
        return self._from_numpy(self._data + other._data)

    def div(self: ITensor, other: ITensor) -> ITensor:
        """
        Elementwise true division of two same-shape tensors.

        Raises
        ------
        TensorError
            ``SHAPE_MISMATCH`` if the shapes differ.
        """
        self._binary_op_shape_check("div", self, other)
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._from_numpy(self._data / other._data)

    # ----------------------------
    # Scalar
    # ----------------------------
    def mul_scalar(self: ITensor, amount: Number) -> ITensor:
        """Multiply every element by `amount`."""
        with np.errstate(over="ignore", invalid="ignore"):
            return self._from_numpy(self._data * np.float32(amount))

    def div_scalar(self: ITensor, amount: Number) -> ITensor:
        """Divide every element by `amount` (``0`` yields inf/NaN)."""
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return self._from_numpy(self._data / np.float32(amount))

    def add_scalar(self: ITensor, amount: Number) -> ITensor:
        """Add `amount` to every element."""
        return self._from_numpy(self._data + np.float32(amount))

    def pow(self: ITensor, exponent: Number) -> ITensor:
        """
        Raise every element to `exponent`.

        Parameters
        ----------
        exponent : Number
            Real exponent. Fractional powers of negative values yield NaN.
        """
        with np.errstate(all="ignore"):
            return self._from_numpy(np.power(self._data, np.float32(exponent)))

    def sqrt(self: ITensor) -> ITensor:
        """Elementwise square root; negative inputs yield NaN."""
        with np.errstate(invalid="ignore"):
            return self._from_numpy(np.sqrt(self._data))

    def map(self: ITensor, f: Callable[[float], float]) -> ITensor:
        """
        Apply a unary numeric function to every element.

        Parameters
        ----------
        f : Callable[[float], float]
            Called once per element with a Python float, in row-major order.
            Its return value is cast to float32.

        Returns
        -------
        ITensor
            New tensor of identical shape.

        Examples
        --------
        >>> t.map(lambda x: max(x, 0.0))  # ReLU
        """
        flat = self._data.ravel()
        out = np.fromiter(
            (f(float(x)) for x in flat), dtype=np.float32, count=flat.size
        )
        return self._from_numpy(out, self.shape)

    def normalize(self: ITensor, min: Number, max: Number) -> ITensor:
        """
        Rescale values with ``(x - min) / (max - min)``.

        Notes
        -----
        ``max == min`` is not guarded: the division by zero propagates as
        inf/NaN values.
        """
        lo = np.float32(min)
        span = np.float32(max) - lo
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._from_numpy((self._data - lo) / span)

    # ----------------------------
    # In-place
    # ----------------------------
    def sub_assign(self: ITensor, other: ITensor) -> None:
        """
        Subtract `other` from this tensor in place.

        The receiver keeps its shape and storage; each element becomes
        ``self[i] - other[i]``.

        Raises
        ------
        TensorError
            ``SHAPE_MISMATCH`` if the shapes differ. The receiver is left
            unchanged in that case.
        """
        self._binary_op_shape_check("sub_assign", self, other)
        np.subtract(self._data, other._data, out=self._data)

    def add_noise(
        self: ITensor,
        level: Number,
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Add independent uniform noise from ``[-level, level)`` in place.

        Parameters
        ----------
        level : Number
            Noise amplitude. ``0`` leaves the values unchanged.
        rng : Optional[numpy.random.Generator], optional
            Generator to draw from. Defaults to the package generator.

        Raises
        ------
        TensorError
            ``INVALID_ARGUMENT`` if `level` is negative or not finite.
        """
        lvl = float(level)
        if not math.isfinite(lvl) or lvl < 0.0:
            raise TensorError(
                TensorErrorKind.INVALID_ARGUMENT,
                "add_noise",
                f"noise level must be a finite non-negative number, got {level!r}",
            )
        if lvl == 0.0:
            return
        gen = resolve_rng(rng)
        noise = np.asarray(gen.uniform(-lvl, lvl, size=self.shape), dtype=np.float32)
        # float32 rounding may land a sample on +level; keep the bound half-open
        upper = np.nextafter(np.float32(lvl), np.float32(0.0))
        self._data += np.minimum(noise, upper)

    # ----------------------------
    # Operators
    # ----------------------------
    def __add__(self: ITensor, other: Union[ITensor, Number]) -> ITensor:
        if isinstance(other, (int, float, np.number)):
            return self.add_scalar(other)
        if isinstance(other, type(self)):
            return self.add(other)
        return NotImplemented

    def __radd__(self: ITensor, other: Number) -> ITensor:
        # addition is commutative
        return self.__add__(other)

    def __truediv__(self: ITensor, other: Union[ITensor, Number]) -> ITensor:
        if isinstance(other, (int, float, np.number)):
            return self.div_scalar(other)
        if isinstance(other, type(self)):
            return self.div(other)
        return NotImplemented

    def __isub__(self: ITensor, other: ITensor) -> ITensor:
        self.sub_assign(other)
        return self
