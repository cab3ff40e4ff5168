"""
Image Pager.

Пейджер поверх PagedImageCache: держит отрисованными только страницы
в окне current ± offscreen_page_limit.
"""

import threading
from typing import Any, Dict, List, Optional

from loguru import logger

from config.settings import OFFSCREEN_PAGE_LIMIT
from ..domain.interfaces import IPageRenderer
from .image_cache import PagedImageCache


class ImagePager:
    """
    Окно предварительной отрисовки над кешем.

    Страницы нумеруются с 1, как в PagedImageCache.
    """

    def __init__(
        self,
        cache: PagedImageCache,
        renderer: IPageRenderer,
        offscreen_page_limit: int = OFFSCREEN_PAGE_LIMIT
    ):
        if offscreen_page_limit < 1:
            raise ValueError(f"offscreen_page_limit должен быть >= 1, получено: {offscreen_page_limit}")
        self.cache = cache
        self.renderer = renderer
        self.offscreen_page_limit = offscreen_page_limit
        self._current = 1
        self._views: Dict[int, Any] = {}
        self._lock = threading.RLock()
        cache.add_listener(self._on_data_set_changed)

    @property
    def current_page(self) -> int:
        return self._current

    def window(self, current: Optional[int] = None) -> List[int]:
        """Номера страниц, которые должны быть отрисованы вокруг current."""
        current = self._current if current is None else current
        count = self.cache.count()
        if count == 0:
            return []
        first = max(1, current - self.offscreen_page_limit)
        last = min(count, current + self.offscreen_page_limit)
        return list(range(first, last + 1))

    def materialized_pages(self) -> List[int]:
        with self._lock:
            return sorted(self._views)

    def show(self, page: int) -> Any:
        """
        Делает page текущей и возвращает её view.

        Raises:
            IndexError: нет такой страницы в кеше
        """
        self.cache.page(page)
        with self._lock:
            self._current = page
            self._refresh()
            return self._views[page]

    def view_for(self, page: int) -> Optional[Any]:
        with self._lock:
            return self._views.get(page)

    def _on_data_set_changed(self, count: int) -> None:
        with self._lock:
            self._refresh()

    def _refresh(self) -> None:
        wanted = set(self.window())

        for page in [p for p in self._views if p not in wanted]:
            del self._views[page]
            logger.debug(f"[ImagePager] Страница {page} освобождена")

        for page in sorted(wanted - set(self._views)):
            view = self.renderer.create_view()
            self._views[page] = self.renderer.render(self.cache.page(page), view)
            logger.debug(f"[ImagePager] Страница {page} отрисована")
