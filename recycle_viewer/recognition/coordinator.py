"""
Recognition Coordinator.

Запускает детектор штрихкодов на основном изображении в фоновом потоке
и возвращает ровно один терминальный результат на вызов:

    PENDING -> NO_CODE | MATCH_FOUND | NO_MATCH | FAILED

FAILED (детектор упал) отличается от NO_CODE (детектор отработал, кодов нет).
Таймаута нет: задержка детектора не ограничена.
"""

import asyncio
from enum import Enum
from typing import List, Optional

from loguru import logger

from contracts.recognition_dto import DetectedCode, OutcomeKind, RecognitionOutcome
from ..domain.images import DecodedImage
from ..domain.interfaces import IBarcodeDetector, IRecyclabilityLookup
from .lookup import ReferenceCodeLookup


class RecognitionState(str, Enum):
    PENDING = "pending"
    NO_CODE = OutcomeKind.NO_CODE.value
    MATCH_FOUND = OutcomeKind.MATCH_FOUND.value
    NO_MATCH = OutcomeKind.NO_MATCH.value
    FAILED = OutcomeKind.FAILED.value

    @property
    def is_terminal(self) -> bool:
        return self is not RecognitionState.PENDING


class RecognitionRun:
    """Состояние одного вызова распознавания. Переход из PENDING ровно один."""

    def __init__(self):
        self.state = RecognitionState.PENDING
        self.outcome: Optional[RecognitionOutcome] = None

    def resolve(self, outcome: RecognitionOutcome) -> RecognitionOutcome:
        if self.state.is_terminal:
            raise RuntimeError(f"Распознавание уже завершено: {self.state.value}")
        self.outcome = outcome
        self.state = RecognitionState(outcome.kind.value)
        return outcome


class RecognitionCoordinator:
    """
    ЦКП: RecognitionOutcome для основного изображения.
    """

    def __init__(self, detector: IBarcodeDetector, lookup: Optional[IRecyclabilityLookup] = None):
        self.detector = detector
        self.lookup = lookup or ReferenceCodeLookup()

    def classify(self, codes: List[DetectedCode]) -> RecognitionOutcome:
        """
        MATCH_FOUND если хотя бы один код перерабатываемый,
        NO_MATCH для остальных непустых результатов, NO_CODE для пустого.
        """
        if not codes:
            return RecognitionOutcome.no_code()

        for code in codes:
            logger.debug(f"[Recognition] CODE: val={code.value} fmt={code.format}")
            if self.lookup.lookup(code.value):
                return RecognitionOutcome.match_found(code, codes)

        return RecognitionOutcome.no_match(codes[0], codes)

    async def recognize(self, image: DecodedImage, run: Optional[RecognitionRun] = None) -> RecognitionOutcome:
        """
        Args:
            image: Основное декодированное изображение
            run: Объект состояния (создаётся, если не передан)

        Returns:
            Терминальный RecognitionOutcome. Ошибки детектора и справочника не пробрасываются.
        """
        run = run or RecognitionRun()

        try:
            codes = await asyncio.to_thread(self.detector.detect, image.pixels)
            classified = self.classify(codes)
        except Exception as e:
            logger.warning(f"[Recognition] Распознавание завершилось с ошибкой: {type(e).__name__}: {e}")
            return run.resolve(RecognitionOutcome.failed(e))

        outcome = run.resolve(classified)
        logger.info(f"[Recognition] Результат: {outcome.kind.value} ({len(codes)} кодов)")
        return outcome
