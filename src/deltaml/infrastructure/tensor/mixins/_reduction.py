"""
Reduction mixin for tensors.

`TensorMixinReduction` implements whole-tensor reductions returning Python
floats (`max`, `mean`, `sum`) and per-axis reductions returning tensors with
the reduced axis removed (`sum_along_axis` / `reduce_sum`, `mean_axis`,
`argmax`).

Axis arguments are non-negative and must be smaller than the tensor rank;
anything else raises `TensorError` with kind ``AXIS_OUT_OF_BOUNDS``.
"""

from __future__ import annotations

from abc import ABC

import numpy as np

from ....domain._tensor import ITensor
from ....domain._errors import TensorError, TensorErrorKind


class TensorMixinReduction(ABC):
    """
    Mixin implementing reduction operations for tensors.

    Notes
    -----
    - Whole-tensor reductions accumulate in float64 and return a Python float.
    - Per-axis reductions keep the float32 dtype policy.
    - Reductions never keep the reduced axis (no ``keepdims``).
    """

    def max(self: ITensor) -> float:
        """
        Return the maximum over all elements.

        Returns
        -------
        float
            Largest value. NaN propagates if present.

        Raises
        ------
        TensorError
            ``EMPTY_TENSOR`` if the tensor has no elements.
        """
        if self.numel() == 0:
            raise TensorError(
                TensorErrorKind.EMPTY_TENSOR,
                "max",
                f"cannot take the maximum of an empty tensor with shape {self.shape}",
            )
        return float(np.max(self._data))

    def mean(self: ITensor) -> float:
        """
        Return the arithmetic mean of all elements.

        An empty tensor has mean ``0.0`` by convention; this is not an error.
        """
        if self.numel() == 0:
            return 0.0
        return float(np.mean(self._data, dtype=np.float64))

    def sum(self: ITensor) -> float:
        """Return the sum of all elements (``0.0`` for an empty tensor)."""
        return float(np.sum(self._data, dtype=np.float64))

    def sum_along_axis(self: ITensor, axis: int) -> ITensor:
        """
        Collapse `axis` by summation.

        Parameters
        ----------
        axis : int
            Axis to reduce, in ``[0, rank)``.

        Returns
        -------
        ITensor
            Tensor whose shape is ``shape`` with `axis` removed.

        Raises
        ------
        TensorError
            ``AXIS_OUT_OF_BOUNDS`` if ``axis >= rank``.
        """
        ax = self._check_axis("sum_along_axis", axis)
        return self._from_numpy(np.sum(self._data, axis=ax, dtype=np.float32))

    def reduce_sum(self: ITensor, axis: int) -> ITensor:
        """Alias of `sum_along_axis`."""
        return self.sum_along_axis(axis)

    def mean_axis(self: ITensor, axis: int) -> ITensor:
        """
        Collapse `axis` by arithmetic mean.

        Raises
        ------
        TensorError
            ``AXIS_OUT_OF_BOUNDS`` if ``axis >= rank``; ``EMPTY_TENSOR`` if the
            axis has length zero.
        """
        ax = self._check_axis("mean_axis", axis)
        if self.shape[ax] == 0:
            raise TensorError(
                TensorErrorKind.EMPTY_TENSOR,
                "mean_axis",
                f"axis {ax} of shape {self.shape} has no elements",
            )
        return self._from_numpy(np.mean(self._data, axis=ax, dtype=np.float32))

    def argmax(self: ITensor, axis: int) -> ITensor:
        """
        Index of the maximum along `axis`, for every position of the others.

        Parameters
        ----------
        axis : int
            Axis to search, in ``[0, rank)``.

        Returns
        -------
        ITensor
            Tensor with `axis` removed holding the winning indices as floats.

        Raises
        ------
        TensorError
            ``AXIS_OUT_OF_BOUNDS`` if ``axis >= rank``; ``EMPTY_TENSOR`` if the
            axis has length zero.

        Notes
        -----
        - Ties resolve to the lowest index.
        - NaN ranks below every number; a slice holding only NaN yields 0.
        """
        ax = self._check_axis("argmax", axis)
        if self.shape[ax] == 0:
            raise TensorError(
                TensorErrorKind.EMPTY_TENSOR,
                "argmax",
                f"axis {ax} of shape {self.shape} has no elements",
            )
        nan = np.isnan(self._data)
        ranked = np.where(nan, -np.inf, self._data)
        idx = np.argmax(ranked, axis=ax)

        # a NaN tied with -inf must lose to the first real -inf
        picked_nan = np.take_along_axis(nan, np.expand_dims(idx, ax), axis=ax)
        picked_nan = np.squeeze(picked_nan, axis=ax)
        has_number = ~np.all(nan, axis=ax)
        first_number = np.argmax(~nan, axis=ax)
        idx = np.where(picked_nan & has_number, first_number, idx)
        return self._from_numpy(np.asarray(idx, dtype=np.float32))
