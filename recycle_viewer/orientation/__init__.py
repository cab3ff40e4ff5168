from .transform import ExifOrientation, OrientationTransform
from .corrector import OrientationCorrector

__all__ = ["ExifOrientation", "OrientationTransform", "OrientationCorrector"]
