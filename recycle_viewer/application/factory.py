"""
Фабрика для создания компонентов Recycle Viewer.

Собирает компоненты с настройками из config.settings,
любой компонент можно подменить при создании сессии.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from loguru import logger

from config.settings import (
    BARCODE_FORMATS,
    DOWNSAMPLE_SIZE,
    JPEG_END_MARKER,
    OFFSCREEN_PAGE_LIMIT,
    RECYCLABLE_CODES_FILE,
    REFERENCE_RECYCLABLE_CODE,
)
from ..container.scanner import ContainerScanner
from ..decoding.bounded_decoder import BoundedDecoder
from ..domain.contracts import DecodeOptions
from ..domain.interfaces import (
    IBarcodeDetector,
    IOutcomePresenter,
    IPageRenderer,
    IPresentationDispatcher,
    IRecyclabilityLookup,
)
from ..loading.buffer_loader import BufferLoader
from ..orientation.corrector import OrientationCorrector
from ..orientation.transform import ExifOrientation
from ..paging.image_cache import PagedImageCache
from ..paging.pager import ImagePager
from ..paging.renderers import FitCenterRenderer
from ..presentation.dialogs import DialogPresenter
from ..presentation.dispatchers import ImmediateDispatcher
from ..recognition.coordinator import RecognitionCoordinator
from ..recognition.lookup import ReferenceCodeLookup, YamlCodeLookup
from ..recognition.zxing_detector import ZXingBarcodeDetector
from .session import ViewerSession


class ViewerComponentFactory:
    """
    Фабрика компонентов Viewer.
    """

    @staticmethod
    def create_decoder(cap: int = DOWNSAMPLE_SIZE) -> BoundedDecoder:
        logger.debug(f"[Viewer] Создание декодера (cap={cap})")
        return BoundedDecoder(DecodeOptions.with_cap(cap))

    @staticmethod
    def create_scanner() -> ContainerScanner:
        return ContainerScanner(JPEG_END_MARKER)

    @staticmethod
    def create_lookup(codes_file: Optional[Union[str, Path]] = None) -> IRecyclabilityLookup:
        """YAML со списком кодов, если задан, иначе эталонный код."""
        codes_file = codes_file or RECYCLABLE_CODES_FILE
        if codes_file:
            logger.debug(f"[Viewer] Список кодов из {codes_file}")
            return YamlCodeLookup(codes_file)
        return ReferenceCodeLookup(REFERENCE_RECYCLABLE_CODE)

    @staticmethod
    def create_detector(formats: Optional[Sequence[str]] = None) -> IBarcodeDetector:
        return ZXingBarcodeDetector(formats if formats is not None else BARCODE_FORMATS)

    @staticmethod
    def create_coordinator(
        detector: Optional[IBarcodeDetector] = None,
        lookup: Optional[IRecyclabilityLookup] = None
    ) -> RecognitionCoordinator:
        return RecognitionCoordinator(
            detector=detector or ViewerComponentFactory.create_detector(),
            lookup=lookup or ViewerComponentFactory.create_lookup()
        )

    @staticmethod
    def create_pager(
        cache: PagedImageCache,
        renderer: Optional[IPageRenderer] = None,
        offscreen_page_limit: int = OFFSCREEN_PAGE_LIMIT
    ) -> ImagePager:
        return ImagePager(cache, renderer or FitCenterRenderer(), offscreen_page_limit)

    @staticmethod
    def create_session(
        path: Union[str, Path],
        orientation: Union[int, ExifOrientation] = ExifOrientation.NORMAL,
        has_secondary: bool = False,
        cap: int = DOWNSAMPLE_SIZE,
        cache: Optional[PagedImageCache] = None,
        coordinator: Optional[RecognitionCoordinator] = None,
        dispatcher: Optional[IPresentationDispatcher] = None,
        presenter: Optional[IOutcomePresenter] = None
    ) -> ViewerSession:
        """
        Создает сессию просмотра с компонентами по умолчанию.

        Args:
            path: Путь к файлу контейнера
            orientation: EXIF-код ориентации основного изображения
            has_secondary: В контейнере есть дополнительное изображение (depth)
            cap: Ограничение размера декодированных изображений
        """
        logger.debug(f"[Viewer] Создание сессии: {path}")
        return ViewerSession(
            path,
            orientation,
            has_secondary,
            loader=BufferLoader(),
            scanner=ViewerComponentFactory.create_scanner(),
            decoder=ViewerComponentFactory.create_decoder(cap),
            corrector=OrientationCorrector(),
            cache=cache if cache is not None else PagedImageCache(),
            coordinator=coordinator or ViewerComponentFactory.create_coordinator(),
            dispatcher=dispatcher or ImmediateDispatcher(),
            presenter=presenter or DialogPresenter(),
            cap=cap
        )

    @staticmethod
    def get_viewer_info() -> Dict[str, Any]:
        """Информация о компонентах и их настройках."""
        return {
            "components": {
                "loader": "BufferLoader",
                "scanner": "ContainerScanner",
                "decoder": "BoundedDecoder",
                "corrector": "OrientationCorrector",
                "cache": "PagedImageCache",
                "coordinator": "RecognitionCoordinator",
                "detector": "ZXingBarcodeDetector",
            },
            "settings": {
                "downsample_size": DOWNSAMPLE_SIZE,
                "offscreen_page_limit": OFFSCREEN_PAGE_LIMIT,
                "barcode_formats": BARCODE_FORMATS or "all",
                "codes_file": RECYCLABLE_CODES_FILE or None,
            },
            "dependencies": ["OpenCV", "Pillow", "zxing-cpp"]
        }
