"""Immutable RGB bitmap used as the session's base image."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from core.geometry import Size


@dataclass(frozen=True, eq=False)
class BaseImage:
    pixels: np.ndarray

    def __post_init__(self):
        arr = np.asarray(self.pixels)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"expected HxWx3 RGB array, got shape {arr.shape}")
        arr = np.array(arr, dtype=np.uint8, copy=True)
        arr.setflags(write=False)
        object.__setattr__(self, "pixels", arr)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @classmethod
    def from_pil(cls, img: Image.Image) -> "BaseImage":
        return cls(np.asarray(img.convert("RGB")))

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.pixels)
