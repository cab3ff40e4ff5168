"""
Сессия просмотра контейнера.

Оркестратор одной сессии (одна фоновая задача на сессию):
1. Загрузка файла в буфер
2. Поиск границ изображений
3. Декодирование основного изображения + коррекция ориентации
4. Добавление в кеш пейджера; параллельно запускается распознавание
5. Декодирование дополнительного изображения (depth), если оно есть
6. Результат распознавания отправляется в презентационный слой (один раз)

Ошибки загрузки/поиска прерывают сессию до заполнения кеша.
Любая ошибка дополнительного изображения только логируется (DecodeError в результате).
Если run() прерывается исключением, задача распознавания отменяется.
После close() запись в кеш и показ диалога подавляются.
"""

import asyncio
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from contracts.recognition_dto import RecognitionOutcome
from ..domain.contracts import SubImageRange
from ..domain.exceptions import DecodeError, ViewerError
from ..domain.images import DecodedImage
from ..domain.interfaces import (
    IBufferLoader,
    IContainerScanner,
    IImageDecoder,
    IOrientationCorrector,
    IOutcomePresenter,
    IPresentationDispatcher,
)
from ..orientation.transform import ExifOrientation, OrientationTransform
from ..paging.image_cache import PagedImageCache
from ..recognition.coordinator import RecognitionCoordinator, RecognitionRun


@dataclass
class SessionResult:
    """Итог сессии."""
    ranges: List[SubImageRange]
    pages: int
    outcome: Optional[RecognitionOutcome] = None
    secondary_errors: List[DecodeError] = field(default_factory=list)
    closed: bool = False


class ViewerSession:
    """
    Одна сессия просмотра: файл → страницы пейджера + результат распознавания.
    """

    def __init__(
        self,
        path: Union[str, Path],
        orientation: Union[int, ExifOrientation] = ExifOrientation.NORMAL,
        has_secondary: bool = False,
        *,
        loader: IBufferLoader,
        scanner: IContainerScanner,
        decoder: IImageDecoder,
        corrector: IOrientationCorrector,
        cache: PagedImageCache,
        coordinator: RecognitionCoordinator,
        dispatcher: IPresentationDispatcher,
        presenter: IOutcomePresenter,
        cap: Optional[int] = None
    ):
        self.path = Path(path)
        self.has_secondary = has_secondary
        self.transform = OrientationTransform.from_exif(orientation)
        self.loader = loader
        self.scanner = scanner
        self.decoder = decoder
        self.corrector = corrector
        self.cache = cache
        self.coordinator = coordinator
        self.dispatcher = dispatcher
        self.presenter = presenter
        self.cap = cap

        self.recognition = RecognitionRun()
        self._closed = threading.Event()
        self._dispatch_lock = threading.Lock()
        self._dispatched = False
        self._task: Optional[asyncio.Task] = None
        self._recognition_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Жизненный цикл
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def start(self) -> asyncio.Task:
        """Запускает сессию фоновой задачей в текущем цикле asyncio."""
        if self._task is not None:
            raise RuntimeError("Сессия уже запущена")
        self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def wait(self) -> Optional[SessionResult]:
        """Ждёт завершения фоновой задачи. None если сессия отменена."""
        if self._task is None:
            raise RuntimeError("Сессия не запущена")
        try:
            return await self._task
        except asyncio.CancelledError:
            if not self.closed:
                raise
            return None

    def close(self) -> None:
        """Завершает сессию: дальнейшие записи в кеш и диалоги подавляются."""
        if self.closed:
            return
        self._closed.set()
        logger.info(f"[ViewerSession] Сессия закрыта: {self.path.name}")
        for task in (self._recognition_task, self._task):
            if task is not None and not task.done():
                task.cancel()

    # ------------------------------------------------------------------
    # Пайплайн
    # ------------------------------------------------------------------

    async def run(self) -> SessionResult:
        """
        Raises:
            BufferReadError, EmptyInputError, NoDelimiterFoundError: ошибка файла
            DecodeError: не удалось декодировать основное изображение
        """
        logger.info(f"[ViewerSession] Старт: {self.path.name} (secondary={self.has_secondary})")

        try:
            buffer = await asyncio.to_thread(self.loader.load, self.path)
            ranges = await asyncio.to_thread(self.scanner.scan, buffer)
            selected = ranges if self.has_secondary else ranges[:1]

            primary = await asyncio.to_thread(self._decode_primary, buffer, selected[0])
        except ViewerError as e:
            logger.error(f"[ViewerSession] Сессия прервана: {e}")
            raise

        result = SessionResult(ranges=ranges, pages=0)

        if not self._append(primary):
            result.closed = True
            return result
        self._recognition_task = asyncio.create_task(self._recognize(primary))

        try:
            for image_range in selected[1:]:
                try:
                    image = await asyncio.to_thread(self.decoder.decode, buffer, image_range, self.cap)
                except DecodeError as e:
                    logger.warning(f"[ViewerSession] Дополнительное изображение {image_range} пропущено: {e}")
                    result.secondary_errors.append(e)
                    continue
                except Exception as e:
                    error = DecodeError(image_range, original_error=e)
                    logger.warning(f"[ViewerSession] Дополнительное изображение {image_range} пропущено: {error}")
                    result.secondary_errors.append(error)
                    continue
                if not self._append(image):
                    break

            result.outcome = await self._recognition_task
        except BaseException:
            if not self._recognition_task.done():
                self._recognition_task.cancel()
            raise

        result.pages = self.cache.count()
        result.closed = self.closed
        logger.info(
            f"[ViewerSession] Готово: {self.path.name} "
            f"({result.pages} стр., распознавание: {result.outcome.kind.value if result.outcome else '-'})"
        )
        return result

    def _decode_primary(self, buffer: bytes, image_range: SubImageRange) -> DecodedImage:
        image = self.decoder.decode(buffer, image_range, self.cap)
        if not self.transform.is_identity:
            image = self.corrector.correct(image, self.transform)
        return image

    def _append(self, image: DecodedImage) -> bool:
        if self.closed:
            logger.warning("[ViewerSession] Запись в кеш после закрытия подавлена")
            return False
        self.cache.append(image)
        return True

    async def _recognize(self, image: DecodedImage) -> RecognitionOutcome:
        outcome = await self.coordinator.recognize(image, self.recognition)
        self._dispatch(outcome)
        return outcome

    # ------------------------------------------------------------------
    # Отправка результата в презентационный слой
    # ------------------------------------------------------------------

    def _dispatch(self, outcome: RecognitionOutcome) -> None:
        with self._dispatch_lock:
            if self._dispatched:
                return
            if self.closed:
                logger.warning("[ViewerSession] Диалог после закрытия подавлен")
                return
            self._dispatched = True
        self.dispatcher.post(lambda: self._deliver(outcome))

    def _deliver(self, outcome: RecognitionOutcome) -> None:
        # выполняется на интерактивном потоке, сессия могла закрыться до этого
        if self.closed:
            logger.warning("[ViewerSession] Диалог после закрытия подавлен")
            return
        self.presenter.show_outcome(outcome)
