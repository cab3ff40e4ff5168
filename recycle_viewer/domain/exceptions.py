"""
Исключения для домена Recycle Viewer.

Ошибки уровня файла (чтение, пустой буфер, нет маркеров) фатальны для сессии.
DecodeError относится к одному под-изображению.
"""

from typing import Any, Dict, List, Optional, Union


class ViewerError(Exception):
    """Базовое исключение для ошибок домена Viewer."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Viewer Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class ContainerLoadError(ViewerError):
    """Файл контейнера не может быть использован (фатально для сессии)."""
    pass


class BufferReadError(ContainerLoadError, OSError):
    """Файл не существует или не читается. Ловится и как OSError."""

    def __init__(self, path, original_error: Optional[Exception] = None):
        self.path = path
        super().__init__(
            message=f"Не удалось прочитать файл: {path}",
            component="BufferLoader",
            original_error=original_error
        )
        if isinstance(original_error, OSError):
            self.errno = original_error.errno


class EmptyInputError(ContainerLoadError):
    """Файл прочитан, но буфер пустой."""

    def __init__(self, path):
        self.path = path
        super().__init__(
            message=f"Пустой файл: {path}",
            component="BufferLoader"
        )


class NoDelimiterFoundError(ContainerLoadError):
    """В буфере не найден ни один маркер конца изображения."""

    def __init__(self, scanned_length: int):
        self.scanned_length = scanned_length
        super().__init__(
            message=f"Separator marker not found in buffer ({scanned_length})",
            component="ContainerScanner"
        )


class DecodeError(ViewerError):
    """Диапазон байт не является корректным изображением."""

    def __init__(self, image_range, original_error: Optional[Exception] = None):
        self.image_range = image_range
        super().__init__(
            message=f"Не удалось декодировать диапазон {image_range}",
            component="BoundedDecoder",
            original_error=original_error
        )


class ContractValidationError(ViewerError):
    """Нарушение внутреннего контракта (обёртка над pydantic ValidationError)."""

    def __init__(self, contract_name: str, errors: Union[List[Dict[str, Any]], List[Any]]) -> None:
        self.contract_name = contract_name
        self.errors = errors

        error_messages = []
        for err in errors:
            if isinstance(err, dict):
                loc = err.get('loc', [])[0] if err.get('loc') else 'unknown'
                err_type = err.get('type', 'unknown')
                msg = err.get('msg', 'unknown error')
                error_messages.append(f"  {loc} ({err_type}): {msg}")
            else:
                error_messages.append(f"  {str(err)}")

        super().__init__(
            message=f"Contract violation ({contract_name}):\n" + "\n".join(error_messages),
            component=contract_name
        )
