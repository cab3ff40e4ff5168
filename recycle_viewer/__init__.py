"""
Recycle Viewer: просмотр фото из контейнера + распознавание штрихкода.

1. Контейнер (один файл, одно или несколько JPEG подряд) делится по маркеру FF D9
2. Каждое изображение декодируется с ограничением размера
3. Основное изображение поворачивается по EXIF-ориентации и сканируется на штрихкоды
4. Страницы уходят в пейджер, результат распознавания уходит в диалог
"""

from .application import SessionResult, ViewerComponentFactory, ViewerSession

__all__ = [
    "ViewerComponentFactory",
    "ViewerSession",
    "SessionResult",
]
