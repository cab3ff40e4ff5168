"""
Адаптер для zxing-cpp, реализующий интерфейс IBarcodeDetector.
"""

from typing import List, Optional, Sequence

import cv2
import numpy as np
import zxingcpp
from loguru import logger

from contracts.recognition_dto import DetectedCode
from ..domain.interfaces import IBarcodeDetector


def _to_gray(pixels: np.ndarray) -> np.ndarray:
    if pixels.ndim == 3:
        return cv2.cvtColor(pixels, cv2.COLOR_BGR2GRAY)
    return pixels


class ZXingBarcodeDetector(IBarcodeDetector):
    """
    Поиск штрихкодов через zxingcpp.read_barcodes.

    formats: имена форматов ("QRCode", "Aztec", "EAN13", ...), пусто = все.
    Ошибки библиотеки пробрасываются, их обрабатывает координатор.
    """

    def __init__(self, formats: Optional[Sequence[str]] = None):
        self.formats = list(formats or [])
        self._formats = zxingcpp.barcode_formats_from_str(",".join(self.formats)) if self.formats else None
        logger.debug(f"[ZXingBarcodeDetector] Инициализирован (formats={self.formats or 'all'})")

    def detect(self, pixels: np.ndarray) -> List[DetectedCode]:
        gray = np.ascontiguousarray(_to_gray(pixels))
        if self._formats is not None:
            results = zxingcpp.read_barcodes(gray, formats=self._formats)
        else:
            results = zxingcpp.read_barcodes(gray)

        codes = [
            DetectedCode(value=r.text, format=getattr(r.format, "name", str(r.format)))
            for r in results
            if r.text
        ]
        logger.debug(f"[ZXingBarcodeDetector] Найдено кодов: {len(codes)}")
        return codes
