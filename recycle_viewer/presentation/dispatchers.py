"""
Диспетчеры презентационного слоя.

Побочные эффекты, видимые пользователю, выполняются только на
интерактивном потоке. LoopDispatcher переносит вызов в цикл asyncio,
которому принадлежит UI; ImmediateDispatcher вызывает сразу (CLI, тесты).
"""

import asyncio
from typing import Callable, Optional

from ..domain.interfaces import IPresentationDispatcher


class LoopDispatcher(IPresentationDispatcher):
    """Потокобезопасно ставит callback в очередь цикла loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self.loop = loop or asyncio.get_running_loop()

    def post(self, callback: Callable[[], None]) -> None:
        self.loop.call_soon_threadsafe(callback)


class ImmediateDispatcher(IPresentationDispatcher):
    """Вызывает callback в текущем потоке."""

    def post(self, callback: Callable[[], None]) -> None:
        callback()
