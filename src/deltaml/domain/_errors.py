"""
Tensor-related exceptions for deltaml.

This module defines the two families of failures a tensor operation can
report:

- :class:`TensorError` signals a caller contract violation (mismatched
  shapes, an axis outside the tensor's rank, an invalid permutation, ...).
  It carries a :class:`TensorErrorKind` so callers and tests can tell the
  conditions apart without parsing messages.
- :class:`TensorInputError` and its subclasses signal that externally
  supplied data could not be turned into a tensor (undecodable image bytes,
  an empty or shape-inconsistent collection passed to ``Tensor.stack``).
  Code working with untrusted input may catch these and skip the record.

Both families derive from ``ValueError`` so that generic ``except
ValueError`` handlers continue to work.
"""

from enum import Enum


class TensorErrorKind(Enum):
    """
    Enumeration of tensor contract violations.

    Members
    -------
    SHAPE_MISMATCH
        Operand shapes (or buffer length and shape) disagree.
    INVALID_SHAPE
        A shape contains a negative or non-integer extent.
    AXIS_OUT_OF_BOUNDS
        An axis argument is not in ``[0, rank)``.
    RANK_TOO_LOW
        The operation needs more axes than the tensor has.
    RANK_MISMATCH
        The operation needs an exact rank (or one argument per axis).
    INVALID_PERMUTATION
        ``permute`` received something that is not a permutation of the axes.
    INDEX_OUT_OF_BOUNDS
        An index or range falls outside an axis extent.
    BROADCAST_INCOMPATIBLE
        The source shape cannot be broadcast to the target shape.
    EMPTY_TENSOR
        The operation is undefined on zero elements.
    INVALID_ARGUMENT
        A scalar argument is outside its accepted domain.
    """

    SHAPE_MISMATCH = "shape_mismatch"
    INVALID_SHAPE = "invalid_shape"
    AXIS_OUT_OF_BOUNDS = "axis_out_of_bounds"
    RANK_TOO_LOW = "rank_too_low"
    RANK_MISMATCH = "rank_mismatch"
    INVALID_PERMUTATION = "invalid_permutation"
    INDEX_OUT_OF_BOUNDS = "index_out_of_bounds"
    BROADCAST_INCOMPATIBLE = "broadcast_incompatible"
    EMPTY_TENSOR = "empty_tensor"
    INVALID_ARGUMENT = "invalid_argument"


class TensorError(ValueError):
    """
    Raised when a tensor operation is called in violation of its contract.

    These errors indicate a bug in the calling code rather than a runtime
    condition worth retrying.

    Attributes
    ----------
    kind : TensorErrorKind
        Which contract was violated.
    op : str
        Name of the operation that rejected its arguments.
    """

    def __init__(self, kind: TensorErrorKind, op: str, message: str) -> None:
        """
        Initialize the TensorError.

        Parameters
        ----------
        kind : TensorErrorKind
            Category of the violation.
        op : str
            Operation name (e.g., "matmul", "reshape").
        message : str
            Human-readable description naming the offending shapes/indices.
        """
        super().__init__(f"{op}: {message}")
        self.kind = kind
        self.op = op


class TensorInputError(ValueError):
    """
    Base class for recoverable failures caused by externally supplied data.
    """


class ImageDecodeError(TensorInputError):
    """
    Raised by ``Tensor.from_image_bytes`` when the bytes cannot be decoded.
    """


class StackError(TensorInputError):
    """
    Raised by ``Tensor.stack`` for an empty or shape-inconsistent collection.
    """
