"""
Domain: Интерфейсы и абстракции.

Определяет контракты для всех компонентов пайплайна просмотра:
файл → буфер → диапазоны → декодированные изображения → пейджер,
и параллельно основное изображение → распознавание → диалог.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

import numpy as np

from contracts.recognition_dto import DetectedCode, RecognitionOutcome
from .contracts import SubImageRange
from .images import DecodedImage


class IBufferLoader(ABC):
    """Читает файл целиком в память."""

    @abstractmethod
    def load(self, path: Union[str, Path]) -> bytes:
        """
        Raises:
            BufferReadError: файл не найден или не читается
            EmptyInputError: файл пустой
        """
        pass


class IContainerScanner(ABC):
    """Находит границы изображений внутри буфера."""

    @abstractmethod
    def scan(self, buffer: bytes) -> List[SubImageRange]:
        """
        Raises:
            NoDelimiterFoundError: в буфере нет ни одного маркера
        """
        pass


class IImageDecoder(ABC):
    """Декодирует диапазон байт с ограничением размера."""

    @abstractmethod
    def decode(self, buffer: bytes, image_range: SubImageRange, cap: Optional[int] = None) -> DecodedImage:
        """
        Raises:
            DecodeError: диапазон не является изображением
        """
        pass


class IOrientationCorrector(ABC):
    """Применяет аффинное преобразование ориентации (чистая функция)."""

    @abstractmethod
    def correct(self, image: DecodedImage, transform: Any) -> DecodedImage:
        pass


class IBarcodeDetector(ABC):
    """Внешняя способность: поиск штрихкодов на изображении."""

    @abstractmethod
    def detect(self, pixels: np.ndarray) -> List[DetectedCode]:
        """Может выбросить любое исключение, координатор превращает его в FAILED."""
        pass


class IRecyclabilityLookup(ABC):
    """Решает, относится ли код к перерабатываемым."""

    @abstractmethod
    def lookup(self, code: str) -> bool:
        pass


class IPageRenderer(ABC):
    """Отрисовка одной страницы пейджера в конкретный тип view."""

    @abstractmethod
    def create_view(self) -> Any:
        pass

    @abstractmethod
    def render(self, item: DecodedImage, into: Any) -> Any:
        pass


class IPresentationDispatcher(ABC):
    """Переносит вызов на интерактивный (UI) поток."""

    @abstractmethod
    def post(self, callback: Callable[[], None]) -> None:
        pass


class IOutcomePresenter(ABC):
    """Презентационный слой, показывающий результат распознавания."""

    @abstractmethod
    def show_outcome(self, outcome: RecognitionOutcome) -> None:
        pass
