"""
Filter System for SnapCam
=========================

Whole-image colour filters applied to the base photo.

Features:
- Identity ("none"), sepia tone and monochrome
- Vectorised colour-matrix transforms on NumPy arrays
- Optional strength blending with the source image
- Unknown filter names leave the image unchanged

Performance:
- ~10ms @ 1280x720, no per-pixel Python loops

Author: SnapCam Team
License: MIT
"""

import logging
from enum import Enum, auto
from typing import Dict, List

import numpy as np

from core.photo import BaseImage

logger = logging.getLogger(__name__)


class FilterType(Enum):
    """Filter categories"""
    IDENTITY = auto()
    COLOR = auto()
    MONO = auto()


class BaseFilter:
    """Base class for all filters"""

    def __init__(self, name: str, filter_type: FilterType):
        self.name = name
        self.filter_type = filter_type

    def apply(self, image: np.ndarray, strength: float = 1.0) -> np.ndarray:
        """
        Apply filter to image

        Args:
            image: RGB image (H, W, 3), uint8
            strength: Filter strength 0.0-1.0

        Returns:
            Filtered image (same shape/dtype)
        """
        raise NotImplementedError


class IdentityFilter(BaseFilter):
    """Returns a copy of the input"""

    def __init__(self):
        super().__init__("No Filter", FilterType.IDENTITY)

    def apply(self, image: np.ndarray, strength: float = 1.0) -> np.ndarray:
        return image.copy()


class ColorMatrixFilter(BaseFilter):
    """
    Linear colour transform: out = M @ (r, g, b)

    Performance: one matmul over the flattened image, no LUT quantisation.
    """

    def __init__(self, name: str, matrix, filter_type: FilterType = FilterType.COLOR):
        super().__init__(name, filter_type)
        self.matrix = np.asarray(matrix, dtype=np.float32)
        if self.matrix.shape != (3, 3):
            raise ValueError(f"colour matrix must be 3x3, got {self.matrix.shape}")

    def apply(self, image: np.ndarray, strength: float = 1.0) -> np.ndarray:
        src = image.astype(np.float32)
        filtered = src @ self.matrix.T

        # Blend with original
        if strength < 1.0:
            strength = max(0.0, strength)
            filtered = src * (1 - strength) + filtered * strength

        return np.clip(filtered + 0.5, 0, 255).astype(np.uint8)


# Classic sepia tone matrix
SEPIA_MATRIX = [
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
]

# Rec. 601 luma on every channel
MONO_MATRIX = [[0.299, 0.587, 0.114]] * 3


# ============================================================================
# FILTER MANAGER
# ============================================================================

class FilterManager:
    """
    Manages available filters and provides API

    Filter names double as menu ids: "none", "sepia", "mono".
    """

    def __init__(self):
        """Initialize filter manager"""
        self.filters: Dict[str, BaseFilter] = {}
        self._init_filters()

    def _init_filters(self):
        """Initialize all filters"""
        self.filters['none'] = IdentityFilter()
        self.filters['sepia'] = ColorMatrixFilter('Sepia', SEPIA_MATRIX)
        self.filters['mono'] = ColorMatrixFilter('Black & White', MONO_MATRIX, FilterType.MONO)

        logger.info(f"Filters initialized: {len(self.filters)} filters")

    def apply_filter(self, image: np.ndarray, filter_name: str, strength: float = 1.0) -> np.ndarray:
        """
        Apply single filter

        Args:
            image: Input image
            filter_name: Name of filter
            strength: Filter strength 0.0-1.0

        Returns:
            Filtered image, or the input itself for an unknown name
        """
        if filter_name not in self.filters:
            logger.warning(f"Unknown filter: {filter_name}")
            return image

        filter_obj = self.filters[filter_name]
        return filter_obj.apply(image, strength)

    def apply_to_photo(self, photo: BaseImage, filter_name: str) -> BaseImage:
        """Filtered copy of ``photo``; the same object when the name is unknown."""
        pixels = self.apply_filter(photo.pixels, filter_name)
        if pixels is photo.pixels:
            return photo
        return BaseImage(pixels)

    def get_available_filters(self) -> List[str]:
        """Get list of available filters"""
        return list(self.filters.keys())

    def label(self, filter_name: str) -> str:
        return self.filters[filter_name].name
