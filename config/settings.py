"""
Настройки проекта Recycle Viewer.

Все значения можно переопределить через переменные окружения.
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("RECYCLE_VIEWER_DATA_DIR", str(PROJECT_ROOT / "data")))
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("RECYCLE_VIEWER_LOG_LEVEL", "INFO")

# =============================================================================
# КОНТЕЙНЕР ИЗОБРАЖЕНИЙ
# =============================================================================
# Маркер конца JPEG (EOI), разделяет изображения внутри одного файла
JPEG_END_MARKER = b"\xff\xd9"

# =============================================================================
# ДЕКОДИРОВАНИЕ
# =============================================================================
# Максимальный размер декодированного изображения по любой стороне (~1MP)
DOWNSAMPLE_SIZE = int(os.getenv("RECYCLE_VIEWER_DOWNSAMPLE_SIZE", "1024"))

# =============================================================================
# ПЕЙДЖЕР
# =============================================================================
# Сколько страниц держать отрисованными слева и справа от текущей
OFFSCREEN_PAGE_LIMIT = int(os.getenv("RECYCLE_VIEWER_OFFSCREEN_PAGE_LIMIT", "2"))

# Размер области просмотра (width, height) для FitCenterRenderer
VIEW_SIZE = (1080, 1920)

# =============================================================================
# РАСПОЗНАВАНИЕ ШТРИХКОДОВ
# =============================================================================
# Эталонный код, который считается "можно переработать"
REFERENCE_RECYCLABLE_CODE = os.getenv("RECYCLE_VIEWER_REFERENCE_CODE", "9780078821233")

# YAML со списком перерабатываемых кодов (опционально, иначе эталонный код)
RECYCLABLE_CODES_FILE = os.getenv("RECYCLE_VIEWER_CODES_FILE", "")

# Ограничение форматов детектора (пусто = все форматы)
BARCODE_FORMATS = [
    fmt.strip()
    for fmt in os.getenv("RECYCLE_VIEWER_BARCODE_FORMATS", "").split(",")
    if fmt.strip()
]

# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if DOWNSAMPLE_SIZE <= 0:
        errors.append(f"DOWNSAMPLE_SIZE должен быть > 0, получено: {DOWNSAMPLE_SIZE}")

    if OFFSCREEN_PAGE_LIMIT < 1:
        errors.append(f"OFFSCREEN_PAGE_LIMIT должен быть >= 1, получено: {OFFSCREEN_PAGE_LIMIT}")

    if len(JPEG_END_MARKER) != 2:
        errors.append("JPEG_END_MARKER должен состоять ровно из 2 байт")

    if not REFERENCE_RECYCLABLE_CODE and not RECYCLABLE_CODES_FILE:
        errors.append(
            "Не задан ни REFERENCE_RECYCLABLE_CODE, ни RECYCLABLE_CODES_FILE!\n"
            "Укажите эталонный код или путь к YAML со списком кодов."
        )
    elif RECYCLABLE_CODES_FILE and not Path(RECYCLABLE_CODES_FILE).exists():
        errors.append(f"Файл кодов не найден: {RECYCLABLE_CODES_FILE}")

    if errors:
        raise ValueError("\n".join(errors))

    # Создаём директории если не существуют
    INPUT_DIR.mkdir(parents=True, exist_ok=True)
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    return True
