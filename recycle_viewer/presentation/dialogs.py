"""
Выбор диалога по результату распознавания.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from loguru import logger

from contracts.recognition_dto import OutcomeKind, RecognitionOutcome
from ..domain.interfaces import IOutcomePresenter


@dataclass(frozen=True)
class DialogSpec:
    """Описание диалога для презентационного слоя."""
    tag: str
    message: str
    positive: str = "OK"
    negative: Optional[str] = None


NO_UPC_DIALOG = DialogSpec(
    tag="noupc",
    message="No barcode found in the photo.",
    positive="Rescan",
    negative="Cancel",
)
RECYCLE_OK_DIALOG = DialogSpec(tag="recycleok", message="This item can be recycled.")
RECYCLE_NOT_OK_DIALOG = DialogSpec(tag="norecycle", message="This item cannot be recycled.")
SCAN_FAILED_DIALOG = DialogSpec(
    tag="scanfailed",
    message="Barcode recognition is unavailable.",
    positive="Rescan",
    negative="Cancel",
)

_DIALOGS = {
    OutcomeKind.NO_CODE: NO_UPC_DIALOG,
    OutcomeKind.MATCH_FOUND: RECYCLE_OK_DIALOG,
    OutcomeKind.NO_MATCH: RECYCLE_NOT_OK_DIALOG,
    OutcomeKind.FAILED: SCAN_FAILED_DIALOG,
}


def select_dialog(outcome: RecognitionOutcome) -> DialogSpec:
    return _DIALOGS[outcome.kind]


class DialogPresenter(IOutcomePresenter):
    """
    Показывает диалог, соответствующий результату.

    show: функция презентационного слоя (по умолчанию только логирует).
    Все показанные диалоги сохраняются в shown.
    """

    def __init__(self, show: Optional[Callable[[DialogSpec], None]] = None):
        self._show = show
        self.shown: List[DialogSpec] = []

    def show_outcome(self, outcome: RecognitionOutcome) -> None:
        dialog = select_dialog(outcome)
        self.shown.append(dialog)
        logger.info(f"[DialogPresenter] Диалог: {dialog.tag}")
        if self._show is not None:
            self._show(dialog)
