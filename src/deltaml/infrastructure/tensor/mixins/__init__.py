"""
Tensor operation mixins.

Each module groups one family of operations; the concrete `Tensor` inherits
all of them:

- ``_construction`` : factories (`zeros`, `random`, `from_image_bytes`, ...)
- ``_elementwise``  : value-wise arithmetic and in-place updates
- ``_layout``       : reshape/permute/slice/broadcast/stack/split
- ``_reduction``    : whole-tensor and per-axis reductions
- ``_linalg``       : 2D matrix multiplication
"""

from ._construction import TensorMixinConstruction
from ._elementwise import TensorMixinElementwise
from ._layout import TensorMixinLayout
from ._reduction import TensorMixinReduction
from ._linalg import TensorMixinLinalg

__all__ = [
    TensorMixinConstruction.__name__,
    TensorMixinElementwise.__name__,
    TensorMixinLayout.__name__,
    TensorMixinReduction.__name__,
    TensorMixinLinalg.__name__,
]
