from ._tensor import ITensor
from ._errors import (
    TensorErrorKind,
    TensorError,
    TensorInputError,
    ImageDecodeError,
    StackError,
)

__all__ = [
    ITensor.__name__,
    TensorErrorKind.__name__,
    TensorError.__name__,
    TensorInputError.__name__,
    ImageDecodeError.__name__,
    StackError.__name__,
]
