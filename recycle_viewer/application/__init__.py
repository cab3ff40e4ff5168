"""
Application слой Recycle Viewer.

Содержит фабрику и оркестратор сессии.
"""

from .factory import ViewerComponentFactory
from .session import SessionResult, ViewerSession

__all__ = [
    "ViewerComponentFactory",
    "SessionResult",
    "ViewerSession",
]
