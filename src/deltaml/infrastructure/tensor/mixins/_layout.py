"""
Tensor shape, indexing, and structural ops mixin.

This module defines `TensorMixinLayout`, a cohesive mixin implementing the
shape-transforming and indexing-related Tensor methods:

- change the logical shape/axis order (`reshape`, `flatten`, `transpose`,
  `permute`),
- select sub-regions (`slice`, `take`, `split_at`),
- compose tensors structurally (`stack`, `broadcast`).

Design notes
------------
- NumPy's reshape/transpose/slicing return views. Every result here is
  materialized into fresh storage before it is wrapped, so no tensor ever
  aliases another tensor's buffer.
- To avoid circular imports, the implementation does not import `Tensor`
  directly; new tensors are constructed via ``self._from_numpy`` (instance
  methods) or ``cls._from_numpy`` (classmethods).
"""

from __future__ import annotations

import logging
import math
import operator
from abc import ABC
from typing import Any, Sequence, Type

import numpy as np

from ....domain._tensor import ITensor
from ....domain._errors import StackError, TensorError, TensorErrorKind

logger = logging.getLogger(__name__)


class TensorMixinLayout(ABC):
    """
    Shape and indexing operations for the concrete Tensor implementation.

    Notes
    -----
    Methods assume the host class provides:
    - ``.shape``, ``.rank``, ``.numel()``, ``._data``
    - ``._from_numpy(...)`` and ``._normalize_shape(...)``
    """

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------
    def reshape(self: ITensor, new_shape: Sequence[int]) -> ITensor:
        """
        Reinterpret the values under a new shape, keeping row-major order.

        Parameters
        ----------
        new_shape : Sequence[int]
            Target shape. Its product must equal ``numel()``; ``-1`` inference
            is not supported.

        Returns
        -------
        ITensor
            New tensor holding a copy of the values.

        Raises
        ------
        TensorError
            ``SHAPE_MISMATCH`` if the element counts differ.
        """
        shape_t = self._normalize_shape(new_shape, op="reshape")
        if math.prod(shape_t) != self.numel():
            raise TensorError(
                TensorErrorKind.SHAPE_MISMATCH,
                "reshape",
                f"cannot reshape {self.shape} ({self.numel()} elements) "
                f"into {shape_t} ({math.prod(shape_t)} elements)",
            )
        return self._from_numpy(self._data.reshape(shape_t), copy=True)

    def flatten(self: ITensor) -> ITensor:
        """Reshape to a single axis of length ``numel()``."""
        return self.reshape((self.numel(),))

    def transpose(self: ITensor) -> ITensor:
        """
        Reverse the order of the axes.

        For a matrix this is the usual transpose; for higher ranks axis ``i``
        moves to position ``rank - 1 - i``.

        Raises
        ------
        TensorError
            ``RANK_TOO_LOW`` if the tensor has fewer than two axes.
        """
        if self.rank < 2:
            raise TensorError(
                TensorErrorKind.RANK_TOO_LOW,
                "transpose",
                f"cannot transpose a tensor with less than 2 dimensions, got shape {self.shape}",
            )
        return self._from_numpy(np.transpose(self._data), copy=True)

    def permute(self: ITensor, axes: Sequence[int]) -> ITensor:
        """
        Reorder the axes: output axis ``i`` is input axis ``axes[i]``.

        Raises
        ------
        TensorError
            ``INVALID_PERMUTATION`` unless `axes` is a permutation of
            ``0..rank``.
        """
        try:
            perm = tuple(operator.index(a) for a in axes)
        except TypeError:
            raise TensorError(
                TensorErrorKind.INVALID_PERMUTATION,
                "permute",
                f"axes must be a sequence of ints, got {axes!r}",
            ) from None
        if sorted(perm) != list(range(self.rank)):
            raise TensorError(
                TensorErrorKind.INVALID_PERMUTATION,
                "permute",
                f"{perm} is not a permutation of the axes of shape {self.shape}",
            )
        return self._from_numpy(np.transpose(self._data, perm), copy=True)

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------
    @staticmethod
    def _normalize_range(r: Any, axis: int, extent: int) -> tuple[int, int]:
        """
        Turn a ``range``, ``slice`` or ``(start, stop)`` pair into bounds.

        Raises
        ------
        TensorError
            ``INDEX_OUT_OF_BOUNDS`` for a step other than 1, ``start > stop``
            or bounds outside ``[0, extent]``.
        """
        if isinstance(r, range):
            start, stop, step = r.start, r.stop, r.step
        elif isinstance(r, slice):
            start = 0 if r.start is None else r.start
            stop = extent if r.stop is None else r.stop
            step = 1 if r.step is None else r.step
        else:
            try:
                start, stop = r
            except (TypeError, ValueError):
                raise TypeError(
                    f"slice range for axis {axis} must be a range, slice or "
                    f"(start, stop) pair, got {r!r}"
                ) from None
            step = 1

        start, stop, step = (
            operator.index(start),
            operator.index(stop),
            operator.index(step),
        )
        if step != 1:
            raise TensorError(
                TensorErrorKind.INDEX_OUT_OF_BOUNDS,
                "slice",
                f"range for axis {axis} must have step 1, got {step}",
            )
        if not 0 <= start <= stop <= extent:
            raise TensorError(
                TensorErrorKind.INDEX_OUT_OF_BOUNDS,
                "slice",
                f"range {start}..{stop} is out of bounds for axis {axis} "
                f"with extent {extent}",
            )
        return int(start), int(stop)

    def slice(self: ITensor, ranges: Sequence[Any]) -> ITensor:
        """
        Copy out a rectangular region, one half-open range per axis.

        Parameters
        ----------
        ranges : Sequence[range | slice | tuple[int, int]]
            Exactly `rank` ranges, in axis order.

        Returns
        -------
        ITensor
            Deep copy of the region; its shape is each range's length.

        Raises
        ------
        TensorError
            ``RANK_MISMATCH`` if ``len(ranges) != rank``;
            ``INDEX_OUT_OF_BOUNDS`` if a range leaves its axis.

        Examples
        --------
        >>> images.slice([range(0, 32), range(0, 28), range(0, 28), range(0, 1)])
        """
        ranges = list(ranges)
        if len(ranges) != self.rank:
            raise TensorError(
                TensorErrorKind.RANK_MISMATCH,
                "slice",
                f"expected {self.rank} ranges for shape {self.shape}, got {len(ranges)}",
            )
        key = tuple(
            slice(*self._normalize_range(r, i, n))
            for i, (r, n) in enumerate(zip(ranges, self.shape))
        )
        return self._from_numpy(self._data[key], copy=True)

    def take(self: ITensor, indices: Sequence[int]) -> ITensor:
        """
        Gather whole rows (slices along axis 0) in the given order.

        Indices may repeat and need not be sorted.

        Returns
        -------
        ITensor
            Tensor of shape ``(len(indices),) + shape[1:]``.

        Raises
        ------
        TensorError
            ``RANK_TOO_LOW`` for a 0-d tensor; ``INDEX_OUT_OF_BOUNDS`` for an
            index outside ``[0, shape[0])``.
        """
        if self.rank < 1:
            raise TensorError(
                TensorErrorKind.RANK_TOO_LOW,
                "take",
                "cannot take rows from a 0-d tensor",
            )
        idx = [operator.index(i) for i in indices]
        rows = self.shape[0]
        for i in idx:
            if not 0 <= i < rows:
                raise TensorError(
                    TensorErrorKind.INDEX_OUT_OF_BOUNDS,
                    "take",
                    f"index {i} is out of bounds for axis 0 with extent {rows}",
                )
        gathered = np.take(self._data, np.asarray(idx, dtype=np.intp), axis=0)
        return self._from_numpy(gathered, (len(idx),) + self.shape[1:])

    def split_at(self: ITensor, index: int) -> tuple[ITensor, ITensor]:
        """
        Split along axis 0 into ``[0, index)`` and ``[index, shape[0])``.

        Raises
        ------
        TensorError
            ``RANK_TOO_LOW`` if the tensor has fewer than two axes;
            ``INDEX_OUT_OF_BOUNDS`` unless ``0 <= index <= shape[0]``.
        """
        if self.rank < 2:
            raise TensorError(
                TensorErrorKind.RANK_TOO_LOW,
                "split_at",
                f"tensor must have at least two dimensions, got shape {self.shape}",
            )
        i = operator.index(index)
        if not 0 <= i <= self.shape[0]:
            raise TensorError(
                TensorErrorKind.INDEX_OUT_OF_BOUNDS,
                "split_at",
                f"index {i} is out of bounds for axis 0 with extent {self.shape[0]}",
            )
        head = self._from_numpy(self._data[:i], copy=True)
        tail = self._from_numpy(self._data[i:], copy=True)
        return head, tail

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------
    def broadcast(self: ITensor, target_shape: Sequence[int]) -> ITensor:
        """
        Expand the tensor to `target_shape` and materialize the result.

        Trailing axes are aligned, missing leading axes are treated as extent
        1, and each aligned source extent must equal the target extent or be
        1 (then it is repeated).

        Raises
        ------
        TensorError
            ``BROADCAST_INCOMPATIBLE`` if the target has fewer axes than the
            tensor or any aligned pair is incompatible. The message names
            both shapes.
        """
        target = self._normalize_shape(target_shape, op="broadcast")
        src = self.shape
        if len(target) < len(src):
            raise TensorError(
                TensorErrorKind.BROADCAST_INCOMPATIBLE,
                "broadcast",
                f"Cannot broadcast shape {src} to {target}",
            )
        padded = (1,) * (len(target) - len(src)) + src
        for s, t in zip(padded, target):
            if s != t and s != 1:
                raise TensorError(
                    TensorErrorKind.BROADCAST_INCOMPATIBLE,
                    "broadcast",
                    f"Cannot broadcast shape {src} to {target}",
                )
        expanded = np.broadcast_to(self._data.reshape(padded), target)
        return self._from_numpy(expanded, copy=True)

    @classmethod
    def stack(cls: Type[ITensor], tensors: Sequence[ITensor]) -> ITensor:
        """
        Stack same-shape tensors along a new leading axis.

        Parameters
        ----------
        tensors : Sequence[Tensor]
            Non-empty, ordered collection of tensors sharing one shape.

        Returns
        -------
        ITensor
            Tensor of shape ``(len(tensors),) + tensors[0].shape``; entry
            ``i`` along axis 0 is a copy of ``tensors[i]``.

        Raises
        ------
        StackError
            If `tensors` is empty or the shapes disagree. The collection
            usually comes from external data, so this failure is recoverable.
        TypeError
            If an element is not a Tensor.
        """
        tensors = list(tensors)
        if not tensors:
            logger.debug("stack called with an empty collection")
            raise StackError("Cannot stack an empty list of tensors.")

        for i, t in enumerate(tensors):
            if not isinstance(t, cls):
                raise TypeError(
                    f"stack expects Tensor elements, got {type(t)!r} at index {i}"
                )

        first_shape = tensors[0].shape
        for i, t in enumerate(tensors):
            if t.shape != first_shape:
                logger.debug(
                    "stack rejected tensor %d: shape %s vs %s", i, t.shape, first_shape
                )
                raise StackError(
                    f"All tensors must have the same shape. "
                    f"Expected {first_shape}, got {t.shape}"
                )

        stacked = np.stack([t._data for t in tensors], axis=0)
        return cls._from_numpy(stacked, (len(tensors),) + first_shape)
