#!/usr/bin/env python3
"""
Просмотр контейнера изображений из командной строки.

Использование:
    # Один JPEG
    python scripts/view_container.py photo.jpg

    # Основное изображение + depth, поворот по EXIF-коду 6 (90°)
    python scripts/view_container.py capture.jpg --orientation 6 --depth

    # Сохранить страницы в директорию
    python scripts/view_container.py capture.jpg --depth --save data/output
"""

import sys
import asyncio
import argparse
from pathlib import Path

import cv2
from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import DOWNSAMPLE_SIZE, LOG_LEVEL, validate_config
from recycle_viewer.application import ViewerComponentFactory
from recycle_viewer.domain.exceptions import ContainerLoadError, DecodeError
from recycle_viewer.paging import PagedImageCache
from recycle_viewer.presentation import DialogPresenter


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Recycle Viewer: container viewer + barcode check")
    parser.add_argument("path", help="Путь к файлу контейнера")
    parser.add_argument("--orientation", type=int, default=1, help="EXIF-код ориентации (1-8)")
    parser.add_argument("--depth", action="store_true", help="В контейнере есть дополнительное изображение")
    parser.add_argument("--cap", type=int, default=DOWNSAMPLE_SIZE, help="Максимальный размер стороны")
    parser.add_argument("--save", type=Path, help="Директория для сохранения страниц")
    parser.add_argument("--verbose", action="store_true", help="DEBUG логирование")
    return parser.parse_args(argv)


async def run_session(args) -> int:
    cache = PagedImageCache()
    presenter = DialogPresenter()
    session = ViewerComponentFactory.create_session(
        args.path,
        orientation=args.orientation,
        has_secondary=args.depth,
        cap=args.cap,
        cache=cache,
        presenter=presenter,
    )

    try:
        session.start()
        result = await session.wait()
    except ContainerLoadError as e:
        print(f"\n[ERROR] Повреждённый или недоступный файл: {e}")
        return 1
    except DecodeError as e:
        print(f"\n[ERROR] Не удалось декодировать основное изображение: {e}")
        return 1
    finally:
        session.close()

    print(f"\n[OK] Изображений в контейнере: {len(result.ranges)}")
    for n, image in enumerate(cache.snapshot(), start=1):
        print(f"  Страница {n}: {image.width}x{image.height} (sample_size={image.sample_size})")

    for error in result.secondary_errors:
        print(f"  [WARN] {error}")

    if result.outcome is not None:
        for code in result.outcome.detected:
            print(f"  CODE: val={code.value} fmt={code.format}")
    for dialog in presenter.shown:
        print(f"\n[DIALOG] {dialog.tag}: {dialog.message}")

    if args.save:
        args.save.mkdir(parents=True, exist_ok=True)
        stem = Path(args.path).stem
        for n, image in enumerate(cache.snapshot(), start=1):
            out_path = args.save / f"{stem}_page{n}.jpg"
            cv2.imwrite(str(out_path), image.pixels)
            print(f"[OK] Сохранено: {out_path}")

    return 0


def main(argv=None) -> int:
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else LOG_LEVEL)

    try:
        validate_config()
    except ValueError as e:
        print(f"\n[ERROR] {e}")
        return 1

    return asyncio.run(run_session(args))


if __name__ == "__main__":
    sys.exit(main())
