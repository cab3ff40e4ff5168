"""
Декодированное изображение, которое передаётся между стадиями.
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from .contracts import SubImageRange


@dataclass(frozen=True, eq=False)
class DecodedImage:
    """
    Пиксельный буфер (BGR, uint8) с метаданными декодирования.

    source_size: натуральный размер (width, height) до даунсэмплинга.
    sample_size: целочисленный коэффициент даунсэмплинга (1 = без уменьшения).
    """
    pixels: np.ndarray
    source_range: Optional[SubImageRange] = None
    source_size: Optional[Tuple[int, int]] = None
    sample_size: int = 1

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def with_pixels(self, pixels: np.ndarray) -> "DecodedImage":
        """Новый экземпляр с другим пиксельным буфером и теми же метаданными."""
        return replace(self, pixels=pixels)
