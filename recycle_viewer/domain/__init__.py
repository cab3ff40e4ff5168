"""
Domain слой Recycle Viewer.

Содержит интерфейсы, контракты и исключения.
"""

from .interfaces import (
    IBufferLoader,
    IContainerScanner,
    IImageDecoder,
    IOrientationCorrector,
    IBarcodeDetector,
    IRecyclabilityLookup,
    IPageRenderer,
    IPresentationDispatcher,
    IOutcomePresenter,
)

from .contracts import SubImageRange, DecodeOptions
from .images import DecodedImage

from .exceptions import (
    ViewerError,
    ContainerLoadError,
    BufferReadError,
    EmptyInputError,
    NoDelimiterFoundError,
    DecodeError,
    ContractValidationError,
)

__all__ = [
    # Интерфейсы
    "IBufferLoader",
    "IContainerScanner",
    "IImageDecoder",
    "IOrientationCorrector",
    "IBarcodeDetector",
    "IRecyclabilityLookup",
    "IPageRenderer",
    "IPresentationDispatcher",
    "IOutcomePresenter",

    # Контракты
    "SubImageRange",
    "DecodeOptions",
    "DecodedImage",

    # Исключения
    "ViewerError",
    "ContainerLoadError",
    "BufferReadError",
    "EmptyInputError",
    "NoDelimiterFoundError",
    "DecodeError",
    "ContractValidationError",
]
