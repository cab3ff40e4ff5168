"""
Paged Image Cache.

Упорядоченная коллекция изображений для пейджера: только добавление,
без удаления. Один писатель (сессия), несколько читателей (пейджер).
"""

import threading
from typing import Callable, List

from loguru import logger

from ..domain.images import DecodedImage

Listener = Callable[[int], None]


class PagedImageCache:
    """
    Потокобезопасный append-only список DecodedImage.

    Страницы нумеруются с 1 в порядке добавления.
    """

    def __init__(self):
        self._items: List[DecodedImage] = []
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def append(self, image: DecodedImage) -> int:
        """Добавляет изображение и возвращает его номер страницы."""
        with self._lock:
            self._items.append(image)
            count = len(self._items)
            listeners = list(self._listeners)

        logger.debug(f"[PagedImageCache] Добавлена страница {count} ({image.width}x{image.height})")

        # уведомления вне блокировки: слушатель может читать кеш
        for listener in listeners:
            try:
                listener(count)
            except Exception as e:
                logger.error(f"[PagedImageCache] Ошибка слушателя на странице {count}: {type(e).__name__}: {e}")
        return count

    def page(self, n: int) -> DecodedImage:
        """
        Raises:
            IndexError: нет страницы с номером n
        """
        with self._lock:
            if n < 1 or n > len(self._items):
                raise IndexError(f"Страница {n} вне диапазона 1..{len(self._items)}")
            return self._items[n - 1]

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def snapshot(self) -> List[DecodedImage]:
        """Копия текущего списка, безопасна для итерации."""
        with self._lock:
            return list(self._items)

    def add_listener(self, listener: Listener) -> None:
        """listener(count) вызывается после каждого append."""
        with self._lock:
            self._listeners.append(listener)

    def __len__(self) -> int:
        return self.count()
