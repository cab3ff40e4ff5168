from .dialogs import (
    DialogSpec,
    DialogPresenter,
    select_dialog,
    NO_UPC_DIALOG,
    RECYCLE_OK_DIALOG,
    RECYCLE_NOT_OK_DIALOG,
    SCAN_FAILED_DIALOG,
)
from .dispatchers import LoopDispatcher, ImmediateDispatcher

__all__ = [
    "DialogSpec",
    "DialogPresenter",
    "select_dialog",
    "NO_UPC_DIALOG",
    "RECYCLE_OK_DIALOG",
    "RECYCLE_NOT_OK_DIALOG",
    "SCAN_FAILED_DIALOG",
    "LoopDispatcher",
    "ImmediateDispatcher",
]
