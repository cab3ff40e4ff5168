"""
Orientation Corrector.

Применяет OrientationTransform к декодированному изображению.
Входное изображение не изменяется.

Повороты на кратные 90 градусов и отражения выполняются без потерь
(перестановкой осей массива). Любой другой угол идёт через cv2.warpAffine
на расширенный холст с билинейной интерполяцией (с потерями).
"""

import math

import cv2
import numpy as np
from loguru import logger

from ..domain.images import DecodedImage
from ..domain.interfaces import IOrientationCorrector
from .transform import OrientationTransform


class OrientationCorrector(IOrientationCorrector):
    """
    ЦКП: новый DecodedImage с правильной ориентацией.
    """

    def correct(self, image: DecodedImage, transform: OrientationTransform) -> DecodedImage:
        if transform.is_identity:
            return image.with_pixels(image.pixels.copy())

        if transform.is_lossless:
            pixels = self._apply_exact(image.pixels, transform)
        else:
            pixels = self._apply_warp(image.pixels, transform)

        logger.debug(
            f"[Orientation] {image.width}x{image.height} -> "
            f"{pixels.shape[1]}x{pixels.shape[0]} ({'lossless' if transform.is_lossless else 'warp'})"
        )
        return image.with_pixels(pixels)

    @staticmethod
    def _apply_exact(pixels: np.ndarray, transform: OrientationTransform) -> np.ndarray:
        m = np.round(transform.matrix).astype(int)
        out = pixels

        if m[0, 0] != 0:
            # x' = sx * x, y' = sy * y
            flip_x, flip_y = m[0, 0] < 0, m[1, 1] < 0
        else:
            # x' = a * y, y' = b * x
            out = np.swapaxes(out, 0, 1)
            flip_x, flip_y = m[0, 1] < 0, m[1, 0] < 0

        if flip_x:
            out = np.flip(out, axis=1)
        if flip_y:
            out = np.flip(out, axis=0)

        return np.ascontiguousarray(out)

    @staticmethod
    def _apply_warp(pixels: np.ndarray, transform: OrientationTransform) -> np.ndarray:
        h, w = pixels.shape[:2]
        m = transform.matrix

        corners = np.array([[0, 0], [w, 0], [0, h], [w, h]], dtype=np.float64).T
        mapped = m @ corners
        min_xy = mapped.min(axis=1)
        max_xy = mapped.max(axis=1)

        affine = np.hstack([m, -min_xy.reshape(2, 1)])
        out_w = int(math.ceil(max_xy[0] - min_xy[0] - 1e-9))
        out_h = int(math.ceil(max_xy[1] - min_xy[1] - 1e-9))

        return cv2.warpAffine(
            pixels, affine, (out_w, out_h),
            flags=cv2.INTER_LINEAR, borderMode=cv2.BORDER_CONSTANT, borderValue=0
        )
