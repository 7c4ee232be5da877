from ._tensor import Tensor
from ._random import manual_seed, get_rng

__all__ = [
    Tensor.__name__,
    manual_seed.__name__,
    get_rng.__name__,
]
