"""
Рендереры страниц.

Каждый рендерер реализует IPageRenderer для своего типа view;
пейджер выбирает рендерер при создании.
"""

from typing import Tuple

import cv2
import numpy as np

from config.settings import VIEW_SIZE
from ..domain.images import DecodedImage
from ..domain.interfaces import IPageRenderer


class FitCenterRenderer(IPageRenderer):
    """
    Вписывает изображение в холст фиксированного размера с сохранением
    пропорций, по центру, остальное заполняется фоном.
    """

    def __init__(self, view_size: Tuple[int, int] = VIEW_SIZE, background: int = 0):
        self.view_size = view_size
        self.background = background

    def create_view(self) -> np.ndarray:
        w, h = self.view_size
        return np.full((h, w, 3), self.background, dtype=np.uint8)

    def render(self, item: DecodedImage, into: np.ndarray) -> np.ndarray:
        view_h, view_w = into.shape[:2]
        scale = min(view_w / item.width, view_h / item.height)
        new_w = max(1, int(round(item.width * scale)))
        new_h = max(1, int(round(item.height * scale)))

        interpolation = cv2.INTER_AREA if scale < 1.0 else cv2.INTER_LINEAR
        resized = cv2.resize(item.pixels, (new_w, new_h), interpolation=interpolation)
        if resized.ndim == 2:
            resized = cv2.cvtColor(resized, cv2.COLOR_GRAY2BGR)

        into[:] = self.background
        x0 = (view_w - new_w) // 2
        y0 = (view_h - new_h) // 2
        into[y0:y0 + new_h, x0:x0 + new_w] = resized
        return into
