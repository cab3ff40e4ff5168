from .coordinator import RecognitionCoordinator, RecognitionRun, RecognitionState
from .lookup import ReferenceCodeLookup, SetCodeLookup, YamlCodeLookup
from .zxing_detector import ZXingBarcodeDetector

__all__ = [
    "RecognitionCoordinator",
    "RecognitionRun",
    "RecognitionState",
    "ReferenceCodeLookup",
    "SetCodeLookup",
    "YamlCodeLookup",
    "ZXingBarcodeDetector",
]
