"""
Container Scanner.

Делит буфер на изображения, упакованные подряд и разделённые маркером
конца JPEG (FF D9). Поиск побайтовый, без разбора сегментов: маркер внутри
метаданных (например, в превью EXIF) тоже считается границей.
Байты после последнего маркера отбрасываются.
"""

from typing import List

from loguru import logger

from config.settings import JPEG_END_MARKER
from ..domain.contracts import SubImageRange
from ..domain.exceptions import NoDelimiterFoundError
from ..domain.interfaces import IContainerScanner


def find_next_end_marker(buffer: bytes, start: int, marker: bytes = JPEG_END_MARKER) -> int:
    """
    Линейный поиск маркера начиная с позиции start.

    Returns:
        Смещение сразу после маркера (i + 2), либо -1 если маркер не найден.
    """
    if start < 0:
        raise ValueError(f"Invalid start marker: {start}")
    if start >= len(buffer):
        return -1

    i = buffer.find(marker, start)
    return -1 if i < 0 else i + len(marker)


class ContainerScanner(IContainerScanner):
    """
    Находит диапазоны изображений в буфере контейнера.

    ЦКП: упорядоченный список SubImageRange, диапазоны не перекрываются.
    """

    def __init__(self, marker: bytes = JPEG_END_MARKER):
        if len(marker) != 2:
            raise ValueError(f"Маркер должен быть длиной 2 байта, получено: {marker!r}")
        self.marker = marker

    def scan(self, buffer: bytes) -> List[SubImageRange]:
        """
        Args:
            buffer: Содержимое контейнера

        Returns:
            Диапазоны [start, end) в порядке буфера

        Raises:
            NoDelimiterFoundError: буфер короче 2 байт или в нём нет маркера
        """
        ranges: List[SubImageRange] = []
        start = 0

        while True:
            end = find_next_end_marker(buffer, start, self.marker)
            if end < 0:
                break
            ranges.append(SubImageRange.of(start, end))
            start = end

        if not ranges:
            logger.error(f"[ContainerScanner] Маркер не найден ({len(buffer)} байт)")
            raise NoDelimiterFoundError(len(buffer))

        tail = len(buffer) - start
        if tail > 0:
            logger.warning(f"[ContainerScanner] Отброшен хвост без маркера: {tail} байт")

        logger.debug(f"[ContainerScanner] Найдено изображений: {len(ranges)} ({', '.join(map(str, ranges))})")
        return ranges
