"""
Linear-algebra mixin: 2D matrix multiplication.

Only rank-2 operands are accepted. Batched (rank > 2) products are out of
scope; callers reshape to 2D first.
"""

from __future__ import annotations

from abc import ABC

import numpy as np

from ....domain._tensor import ITensor
from ....domain._errors import TensorError, TensorErrorKind


class TensorMixinLinalg(ABC):
    """Mixin implementing `matmul` and the ``@`` operator."""

    def matmul(self: ITensor, other: ITensor) -> ITensor:
        """
        Matrix multiplication (2D): ``out = self @ other``.

        Parameters
        ----------
        other : ITensor
            Right operand of shape ``(k, m)`` where ``self.shape == (n, k)``.

        Returns
        -------
        ITensor
            Tensor of shape ``(n, m)``.

        Raises
        ------
        TypeError
            If `other` is not a Tensor.
        TensorError
            ``RANK_MISMATCH`` unless both operands have exactly two axes;
            ``SHAPE_MISMATCH`` if the inner dimensions differ.
        """
        if not isinstance(other, type(self)):
            raise TypeError(f"matmul expects Tensor, got {type(other)!r}")

        if self.rank != 2 or other.rank != 2:
            raise TensorError(
                TensorErrorKind.RANK_MISMATCH,
                "matmul",
                f"matmul requires 2D tensors, got {self.shape} and {other.shape}",
            )

        n, k1 = self.shape
        k2, m = other.shape
        if k1 != k2:
            raise TensorError(
                TensorErrorKind.SHAPE_MISMATCH,
                "matmul",
                f"shape mismatch: {self.shape} @ {other.shape} "
                f"(inner dims {k1} vs {k2})",
            )

        out = np.matmul(self._data, other._data)
        return self._from_numpy(out, (n, m))

    def __matmul__(self: ITensor, other: ITensor) -> ITensor:
        return self.matmul(other)
