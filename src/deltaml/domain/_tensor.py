"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the value-type contract consumed by
the rest of the toolkit (dataset loaders, activations, losses, optimizers)
without importing any numerical backend.

Notes
-----
The protocol mirrors the public surface of the NumPy-backed `Tensor` so that
collaborators can type against `ITensor` instead of the concrete class.
Factories (`zeros`, `random`, `stack`, ...) live on the concrete class and
are not part of the protocol.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, Sequence, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a dense, dynamically-ranked array of 32-bit floats stored
    in row-major order. Every tensor owns its storage: operations return new
    tensors, except the explicitly in-place `sub_assign` and `add_noise`.
    """

    # ---------------------------------------------------------------------
    # Core identity
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            One non-negative extent per axis.
        """
        ...

    @property
    def rank(self) -> int:
        """Number of axes."""
        ...

    def numel(self) -> int:
        """Total number of elements (product of the shape)."""
        ...

    # ---------------------------------------------------------------------
    # Host interop
    # ---------------------------------------------------------------------
    def to_vec(self) -> list[float]:
        """
        Materialize the values as a flat list in row-major order.

        Returns
        -------
        list[float]
            A copy of the buffer; mutating it does not affect the tensor.
        """
        ...

    def to_numpy(self) -> Any:
        """
        Return a backend-native copy of the values, shaped like the tensor.
        """
        ...

    def copy(self) -> "ITensor": ...

    # ---------------------------------------------------------------------
    # Elementwise
    # ---------------------------------------------------------------------
    def add(self, other: "ITensor") -> "ITensor": ...

    def div(self, other: "ITensor") -> "ITensor": ...

    def mul_scalar(self, amount: Number) -> "ITensor": ...

    def div_scalar(self, amount: Number) -> "ITensor": ...

    def add_scalar(self, amount: Number) -> "ITensor": ...

    def pow(self, exponent: Number) -> "ITensor": ...

    def sqrt(self) -> "ITensor": ...

    def map(self, f: Callable[[float], float]) -> "ITensor":
        """
        Apply a unary function to every element.

        Parameters
        ----------
        f : Callable[[float], float]
            Function applied to each value.

        Returns
        -------
        ITensor
            New tensor of identical shape.
        """
        ...

    def normalize(self, min: Number, max: Number) -> "ITensor": ...

    def sub_assign(self, other: "ITensor") -> None:
        """
        Subtract `other` from this tensor in place.

        Notes
        -----
        Requires exclusive access to the receiver; shapes must match exactly.
        """
        ...

    def add_noise(self, level: Number) -> None:
        """
        Add uniform noise from ``[-level, level)`` to every element in place.
        """
        ...

    # ---------------------------------------------------------------------
    # Reductions
    # ---------------------------------------------------------------------
    def max(self) -> float: ...

    def mean(self) -> float: ...

    def sum(self) -> float: ...

    def sum_along_axis(self, axis: int) -> "ITensor": ...

    def reduce_sum(self, axis: int) -> "ITensor": ...

    def mean_axis(self, axis: int) -> "ITensor": ...

    def argmax(self, axis: int) -> "ITensor": ...

    # ---------------------------------------------------------------------
    # Shape / layout
    # ---------------------------------------------------------------------
    def reshape(self, new_shape: Sequence[int]) -> "ITensor": ...

    def flatten(self) -> "ITensor": ...

    def transpose(self) -> "ITensor": ...

    def permute(self, axes: Sequence[int]) -> "ITensor": ...

    def slice(self, ranges: Sequence[Any]) -> "ITensor": ...

    def broadcast(self, target_shape: Sequence[int]) -> "ITensor": ...

    def take(self, indices: Sequence[int]) -> "ITensor": ...

    def split_at(self, index: int) -> tuple["ITensor", "ITensor"]: ...

    # ---------------------------------------------------------------------
    # Linear algebra
    # ---------------------------------------------------------------------
    def matmul(self, other: "ITensor") -> "ITensor":
        """
        2D matrix product.

        Parameters
        ----------
        other : ITensor
            Right operand, rank exactly 2 with ``other.shape[0] ==
            self.shape[1]``.

        Returns
        -------
        ITensor
            Tensor of shape ``(self.shape[0], other.shape[1])``.
        """
        ...
