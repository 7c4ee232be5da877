"""
Random-number source shared by the random tensor operations.

`Tensor.random` and `Tensor.add_noise` draw from a single module-level
NumPy `Generator` unless the caller passes its own. `manual_seed` replaces
that generator with a freshly seeded one, making runs reproducible.

The generator is process-wide state and is not synchronized; callers that
draw from several threads should pass a per-thread `rng` instead.
"""

from typing import Optional

import numpy as np

_rng: np.random.Generator = np.random.default_rng()


def manual_seed(seed: Optional[int]) -> None:
    """
    Reseed the package random generator.

    Parameters
    ----------
    seed : Optional[int]
        Seed passed to `numpy.random.default_rng`. ``None`` draws fresh
        entropy from the OS.
    """
    global _rng
    _rng = np.random.default_rng(seed)


def get_rng() -> np.random.Generator:
    """Return the package random generator."""
    return _rng


def resolve_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    # explicit override wins
    return _rng if rng is None else rng
