"""
Buffer Loader.

Читает файл контейнера целиком в память (всё или ничего).
"""

from pathlib import Path
from typing import Union

from loguru import logger

from ..domain.interfaces import IBufferLoader
from ..domain.exceptions import BufferReadError, EmptyInputError


class BufferLoader(IBufferLoader):
    """
    Читает файл и возвращает неизменяемый буфер байт.

    ЦКП: bytes с полным содержимым файла, длина > 0.
    """

    def load(self, path: Union[str, Path]) -> bytes:
        """
        Args:
            path: Путь к файлу контейнера

        Returns:
            Содержимое файла

        Raises:
            BufferReadError: файл не найден или не читается
            EmptyInputError: файл пустой
        """
        path = Path(path)

        try:
            with open(path, "rb") as f:
                buffer = f.read()
        except OSError as e:
            logger.error(f"[BufferLoader] Ошибка чтения {path}: {e}")
            raise BufferReadError(path, original_error=e)

        if not buffer:
            logger.error(f"[BufferLoader] Пустой файл: {path}")
            raise EmptyInputError(path)

        logger.debug(f"[BufferLoader] Прочитано {len(buffer)} байт: {path.name}")
        return buffer
