"""
Bounded Decoder.

Декодирует один диапазон контейнера так, чтобы ни одна сторона
не превышала cap. Коэффициент уменьшения целочисленный и одинаковый
по обеим осям:

    scale = max(w // cap + 1, h // cap + 1)   если max(w, h) > cap
    scale = 1                                  иначе

Итоговый размер: ceil(w / scale) x ceil(h / scale).

ОПТИМИЗАЦИЯ: натуральный размер читается только из заголовка (Pillow),
пиксели декодируются OpenCV сразу в уменьшенном виде (степень двойки
не больше scale), затем доводятся INTER_AREA до точного размера.
Пиковая память ограничена размером уменьшенного изображения.
"""

import io
import math
import threading
import warnings
from typing import Optional, Tuple

import cv2
import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from config.settings import DOWNSAMPLE_SIZE
from ..domain.contracts import DecodeOptions, SubImageRange
from ..domain.exceptions import DecodeError
from ..domain.images import DecodedImage
from ..domain.interfaces import IImageDecoder

# Image.MAX_IMAGE_PIXELS глобальный, чтение заголовка меняет его под блокировкой
_HEADER_READ_LOCK = threading.Lock()

# Уменьшение на этапе декодирования (libjpeg DCT scaling)
_REDUCED_FLAGS = {
    1: cv2.IMREAD_COLOR,
    2: cv2.IMREAD_REDUCED_COLOR_2,
    4: cv2.IMREAD_REDUCED_COLOR_4,
    8: cv2.IMREAD_REDUCED_COLOR_8,
}


def compute_sample_size(width: int, height: int, cap: int) -> int:
    """Целочисленный коэффициент даунсэмплинга для размера width x height."""
    if cap <= 0:
        raise ValueError(f"cap должен быть > 0, получено: {cap}")
    if max(width, height) <= cap:
        return 1
    scale_x = width // cap + 1
    scale_y = height // cap + 1
    return max(scale_x, scale_y)


def scaled_size(width: int, height: int, sample_size: int) -> Tuple[int, int]:
    """Размер после уменьшения в sample_size раз (округление вверх)."""
    return (math.ceil(width / sample_size), math.ceil(height / sample_size))


def _reduced_decode_factor(sample_size: int) -> int:
    """Наибольшая степень двойки из _REDUCED_FLAGS, не превышающая sample_size."""
    return max(f for f in _REDUCED_FLAGS if f <= sample_size)


class BoundedDecoder(IImageDecoder):
    """
    Декодирует изображение с ограничением размера.

    ЦКП: DecodedImage (BGR), max(width, height) <= cap.
    """

    def __init__(self, options: Optional[DecodeOptions] = None):
        self.options = options or DecodeOptions.with_cap(DOWNSAMPLE_SIZE)
        logger.debug(f"[BoundedDecoder] Инициализирован (cap={self.options.cap}px)")

    def read_size(self, data: bytes, image_range: SubImageRange) -> Tuple[int, int]:
        """Натуральный размер (width, height) из заголовка, без декодирования пикселей."""
        # лимит пикселей Pillow не нужен: пиксели здесь не декодируются
        try:
            with _HEADER_READ_LOCK, warnings.catch_warnings():
                warnings.simplefilter("ignore", Image.DecompressionBombWarning)
                max_pixels = Image.MAX_IMAGE_PIXELS
                Image.MAX_IMAGE_PIXELS = None
                try:
                    with Image.open(io.BytesIO(data)) as header:
                        return header.size
                finally:
                    Image.MAX_IMAGE_PIXELS = max_pixels
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            logger.error(f"[BoundedDecoder] Не удалось прочитать заголовок {image_range}: {e}")
            raise DecodeError(image_range, original_error=e)

    def decode(self, buffer: bytes, image_range: SubImageRange, cap: Optional[int] = None) -> DecodedImage:
        """
        Args:
            buffer: Буфер контейнера
            image_range: Диапазон изображения внутри буфера
            cap: Ограничение размера (по умолчанию из DecodeOptions)

        Returns:
            DecodedImage с sample_size и source_size

        Raises:
            DecodeError: диапазон не является корректным изображением
        """
        image_range.validate_against(len(buffer))
        cap = cap if cap is not None else self.options.cap

        data = buffer[image_range.start:image_range.end]
        width, height = self.read_size(data, image_range)

        sample_size = compute_sample_size(width, height, cap)
        target_size = scaled_size(width, height, sample_size)

        flags = _REDUCED_FLAGS[_reduced_decode_factor(sample_size)]
        if self.options.ignore_embedded_orientation:
            flags |= cv2.IMREAD_IGNORE_ORIENTATION

        try:
            pixels = cv2.imdecode(np.frombuffer(data, np.uint8), flags)
        except cv2.error as e:
            logger.error(f"[BoundedDecoder] Ошибка OpenCV для {image_range}: {e}")
            raise DecodeError(image_range, original_error=e)
        if pixels is None:
            logger.error(f"[BoundedDecoder] cv2.imdecode вернул None для {image_range}")
            raise DecodeError(image_range)

        h, w = pixels.shape[:2]
        if (w, h) != target_size:
            pixels = cv2.resize(pixels, target_size, interpolation=cv2.INTER_AREA)

        logger.debug(
            f"[BoundedDecoder] {image_range}: {width}x{height} -> "
            f"{target_size[0]}x{target_size[1]} (sample_size={sample_size})"
        )

        return DecodedImage(
            pixels=pixels,
            source_range=image_range,
            source_size=(width, height),
            sample_size=sample_size,
        )
