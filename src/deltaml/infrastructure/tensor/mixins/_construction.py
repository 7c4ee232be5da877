"""
Tensor construction mixin.

This module defines `TensorMixinConstruction`, the group of factory methods
that create tensors from scratch: explicit buffers, zero and random fills,
host arrays, and encoded image bytes.

Design notes
------------
- Factories are classmethods, so they build instances of whichever concrete
  class inherits the mixin without importing it (avoids a circular import).
- `from_image_bytes` is the only construction path that reports failure as
  a recoverable `ImageDecodeError`; its input comes from untrusted external
  data. Every other factory raises `TensorError` on contract violations.
"""

from __future__ import annotations

import io
import logging
from abc import ABC
from typing import Any, Optional, Sequence, Type, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ....domain._tensor import ITensor
from ....domain._errors import ImageDecodeError
from .._random import resolve_rng

logger = logging.getLogger(__name__)

Number = Union[int, float]


class TensorMixinConstruction(ABC):
    """
    Mixin implementing tensor factory constructors.

    Provides:
    - `new`              : explicit flat buffer + shape
    - `zeros`            : zero-filled tensor
    - `random`           : uniform samples in ``[0, 1)``
    - `default`          : ``(1, 1)`` zero tensor
    - `from_numpy`       : copy of an arbitrary host array
    - `from_image_bytes` : decoded RGBA image normalized to ``[0, 1]``
    """

    @classmethod
    def new(
        cls: Type[ITensor],
        buffer: Union[Sequence[Number], np.ndarray],
        shape: Sequence[int],
    ) -> "ITensor":
        """
        Build a tensor from an explicit flat buffer and a shape.

        Equivalent to calling the constructor directly.

        Raises
        ------
        TensorError
            ``SHAPE_MISMATCH`` if ``len(buffer) != product(shape)``.
        """
        return cls(buffer, shape)

    @classmethod
    def zeros(cls: Type[ITensor], shape: Sequence[int]) -> "ITensor":
        """
        Create a tensor filled with zeros.

        Parameters
        ----------
        shape : Sequence[int]
            Shape of the output tensor.

        Returns
        -------
        ITensor
            Newly created tensor filled with ``0.0``.
        """
        shape_t = cls._normalize_shape(shape, op="zeros")
        return cls._from_numpy(np.zeros(shape_t, dtype=np.float32))

    @classmethod
    def random(
        cls: Type[ITensor],
        shape: Sequence[int],
        *,
        rng: Optional[np.random.Generator] = None,
    ) -> "ITensor":
        """
        Create a tensor of independent uniform samples in ``[0, 1)``.

        Parameters
        ----------
        shape : Sequence[int]
            Shape of the output tensor.
        rng : Optional[numpy.random.Generator], optional
            Generator to draw from. Defaults to the package generator
            (see `deltaml.manual_seed`).

        Returns
        -------
        ITensor
            Newly created tensor of random values.
        """
        shape_t = cls._normalize_shape(shape, op="random")
        gen = resolve_rng(rng)
        return cls._from_numpy(gen.random(shape_t, dtype=np.float32))

    @classmethod
    def default(cls: Type[ITensor]) -> "ITensor":
        """Return the default tensor: zeros of shape ``(1, 1)``."""
        return cls.zeros((1, 1))

    @classmethod
    def from_numpy(cls: Type[ITensor], arr: Any) -> "ITensor":
        """
        Copy an array-like of any shape into a new tensor.

        Parameters
        ----------
        arr : Any
            Array-like accepted by `numpy.asarray`, including nested lists
            and NumPy scalars. Values are cast to float32.

        Returns
        -------
        ITensor
            Tensor with ``shape == numpy.shape(arr)`` owning a copy of the data.
        """
        return cls._from_numpy(arr, copy=True)

    @staticmethod
    def _wide_gray_to_rgba(img: Image.Image) -> np.ndarray:
        """
        Expand a single-channel float or 16/32-bit integer image to RGBA.

        Float pixels are taken as already lying in ``[0, 1]``; integer pixels
        are divided by 65535. Both are clipped to ``[0, 1]`` and alpha is 1.
        """
        scale = 1.0 if img.mode == "F" else 65535.0
        gray = np.clip(np.asarray(img, dtype=np.float64) / scale, 0.0, 1.0)
        gray = gray.astype(np.float32)
        return np.stack([gray, gray, gray, np.ones_like(gray)], axis=-1)

    @classmethod
    def from_image_bytes(cls: Type[ITensor], data: bytes) -> "ITensor":
        """
        Decode an encoded image into a ``(height, width, 4)`` tensor.

        The format is detected from the bytes. Pixels are converted to RGBA
        and each channel byte is divided by 255, so values lie in ``[0, 1]``.
        Single-channel float images and 16/32-bit integer images keep their
        precision: float pixels are clipped to ``[0, 1]`` and integer pixels
        are divided by 65535.

        Parameters
        ----------
        data : bytes
            Encoded image (PNG, JPEG, BMP, GIF, TIFF, ... anything Pillow reads).

        Returns
        -------
        ITensor
            Tensor of shape ``(height, width, 4)``.

        Raises
        ------
        ImageDecodeError
            If the format cannot be identified or the header declares an
            oversized image ("Failed to read image: ..."), or the pixel data
            cannot be decoded ("Failed to decode image: ...").
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"from_image_bytes expects bytes-like data, got {type(data)!r}"
            )

        try:
            img = Image.open(io.BytesIO(bytes(data)))
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            logger.debug("rejecting %d image bytes: %s", len(data), e)
            raise ImageDecodeError(f"Failed to read image: {e}") from e

        with img:
            try:
                if img.mode in ("F", "I") or img.mode.startswith("I;16"):
                    values = cls._wide_gray_to_rgba(img)
                else:
                    pixels = np.asarray(img.convert("RGBA"), dtype=np.uint8)
                    values = pixels.astype(np.float32) / np.float32(255.0)
            except Exception as e:
                logger.debug("failed to decode %s image: %s", img.format, e)
                raise ImageDecodeError(f"Failed to decode image: {e}") from e

        height, width = values.shape[:2]
        return cls._from_numpy(values, (height, width, 4))
