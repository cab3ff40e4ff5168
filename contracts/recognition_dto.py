"""
DTO контракт: Recognition -> Presentation

Результат распознавания штрихкода на основном изображении.
Презентационный слой выбирает диалог только по этому контракту.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class DetectedCode:
    """
    Один найденный штрихкод.
    """
    value: str          # Декодированное значение (displayValue)
    format: str = ""    # Формат (QRCode, EAN13, ...)


class OutcomeKind(str, Enum):
    """Терминальные состояния распознавания."""
    NO_CODE = "no_code"          # Детектор отработал, кодов нет
    MATCH_FOUND = "match_found"  # Найден код из списка перерабатываемых
    NO_MATCH = "no_match"        # Коды есть, но ни один не подходит
    FAILED = "failed"            # Детектор упал, результат недоступен


@dataclass(frozen=True)
class RecognitionOutcome:
    """
    Результат распознавания.

    code: код, определивший исход (совпавший для MATCH_FOUND,
          первый найденный для NO_MATCH), иначе None.
    detected: все найденные коды в порядке детектора.
    error: текст ошибки для FAILED.
    """
    kind: OutcomeKind
    code: Optional[DetectedCode] = None
    detected: List[DetectedCode] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def no_code(cls) -> "RecognitionOutcome":
        return cls(kind=OutcomeKind.NO_CODE)

    @classmethod
    def match_found(cls, code: DetectedCode, detected: List[DetectedCode]) -> "RecognitionOutcome":
        return cls(kind=OutcomeKind.MATCH_FOUND, code=code, detected=list(detected))

    @classmethod
    def no_match(cls, code: DetectedCode, detected: List[DetectedCode]) -> "RecognitionOutcome":
        return cls(kind=OutcomeKind.NO_MATCH, code=code, detected=list(detected))

    @classmethod
    def failed(cls, error: Exception) -> "RecognitionOutcome":
        return cls(kind=OutcomeKind.FAILED, error=f"{type(error).__name__}: {error}")

    @property
    def is_available(self) -> bool:
        """False если распознавание не удалось (FAILED)."""
        return self.kind is not OutcomeKind.FAILED
