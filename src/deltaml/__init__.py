"""
deltaml - dense float32 tensors for a small machine-learning toolkit.

The package exposes a single value type, `Tensor`, together with the errors
its operations raise and `manual_seed` for reproducible random factories.
"""

import logging

from .domain import (
    ITensor,
    TensorErrorKind,
    TensorError,
    TensorInputError,
    ImageDecodeError,
    StackError,
)
from .infrastructure import Tensor, manual_seed, get_rng

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    ITensor.__name__,
    Tensor.__name__,
    TensorErrorKind.__name__,
    TensorError.__name__,
    TensorInputError.__name__,
    ImageDecodeError.__name__,
    StackError.__name__,
    manual_seed.__name__,
    get_rng.__name__,
]
