import cv2
import numpy as np
import pytest


def encode_jpeg(width: int, height: int, seed: int = 0, quality: int = 95) -> bytes:
    """Синтетический JPEG: градиент + сдвиг по seed, чтобы изображения различались."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[:, :, 0] = ((xs[None, :] + seed * 40) % 256).astype(np.uint8)
    image[:, :, 1] = ((ys[:, None] + seed * 80) % 256).astype(np.uint8)
    image[:, :, 2] = (seed * 60) % 256

    ok, buffer = cv2.imencode(".jpg", image, [cv2.IMWRITE_JPEG_QUALITY, quality])
    assert ok
    return buffer.tobytes()


@pytest.fixture
def make_jpeg():
    """Fixture: фабрика JPEG байт заданного размера."""
    return encode_jpeg


@pytest.fixture
def write_container(tmp_path):
    """Fixture: записывает части контейнера подряд в один файл."""
    def _write(*chunks: bytes, name: str = "container.jpg"):
        path = tmp_path / name
        path.write_bytes(b"".join(chunks))
        return path
    return _write


@pytest.fixture(scope="session")
def huge_gray_jpeg():
    """Fixture: серый JPEG 13500x13500, больше лимита пикселей Pillow по умолчанию."""
    ok, buffer = cv2.imencode(".jpg", np.zeros((13500, 13500), dtype=np.uint8))
    assert ok
    return buffer.tobytes()
