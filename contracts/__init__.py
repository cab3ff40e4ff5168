"""
Контракты DTO между доменами проекта Recycle Viewer.

Контракты:
- Recognition -> Presentation: RecognitionOutcome (recognition_dto.py)
"""

from .recognition_dto import DetectedCode, OutcomeKind, RecognitionOutcome

__all__ = [
    "DetectedCode",
    "OutcomeKind",
    "RecognitionOutcome",
]
