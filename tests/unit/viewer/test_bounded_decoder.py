import cv2
import numpy as np
import pytest
from PIL import Image

from recycle_viewer.decoding import BoundedDecoder, compute_sample_size, scaled_size
from recycle_viewer.domain.contracts import DecodeOptions, SubImageRange
from recycle_viewer.domain.exceptions import ContractValidationError, DecodeError


@pytest.fixture
def decoder():
    """Fixture: BoundedDecoder с cap=1024."""
    return BoundedDecoder(DecodeOptions.with_cap(1024))


def whole(data: bytes) -> SubImageRange:
    return SubImageRange(start=0, end=len(data))


@pytest.mark.parametrize("width,height,cap,expected", [
    (800, 600, 1024, 1),
    (1024, 1024, 1024, 1),
    (1025, 10, 1024, 2),
    (4000, 3000, 1024, 4),
    (3000, 4000, 1024, 4),
    (2100, 1000, 1024, 3),
    (2048, 2048, 1024, 3),
])
def test_compute_sample_size(width, height, cap, expected):
    """Тест: scale = max(w // cap + 1, h // cap + 1) только выше cap."""
    assert compute_sample_size(width, height, cap) == expected


def test_compute_sample_size_rejects_bad_cap():
    with pytest.raises(ValueError):
        compute_sample_size(100, 100, 0)


def test_scaled_size_rounds_up():
    assert scaled_size(4000, 3000, 4) == (1000, 750)
    assert scaled_size(1001, 10, 2) == (501, 5)


def test_below_cap_keeps_exact_size(decoder, make_jpeg):
    """Тест: изображение <= cap декодируется без уменьшения."""
    data = make_jpeg(800, 600)

    image = decoder.decode(data, whole(data))

    assert image.size == (800, 600)
    assert image.sample_size == 1
    assert image.source_size == (800, 600)
    assert image.pixels.dtype == np.uint8
    assert image.pixels.shape == (600, 800, 3)


def test_large_image_scenario(decoder, make_jpeg):
    """Тест: 4000x3000 при cap=1024 -> sample_size 4, размер 1000x750."""
    data = make_jpeg(4000, 3000)

    image = decoder.decode(data, whole(data))

    assert image.sample_size == 4
    assert image.size == (1000, 750)
    assert image.source_size == (4000, 3000)


def test_non_power_of_two_sample_size(decoder, make_jpeg):
    """Тест: sample_size 3 даёт ceil(w/3) x ceil(h/3), а не ближайшую степень двойки."""
    data = make_jpeg(2100, 1000)

    image = decoder.decode(data, whole(data))

    assert image.sample_size == 3
    assert image.size == (700, 334)


@pytest.mark.parametrize("width,height", [(1500, 400), (400, 1500), (3333, 2222), (1025, 1025)])
def test_larger_side_within_cap_and_aspect_preserved(decoder, make_jpeg, width, height):
    """Тест: большая сторона <= cap, пропорции сохранены с точностью до 1px."""
    data = make_jpeg(width, height)

    image = decoder.decode(data, whole(data))

    assert max(image.size) <= 1024
    assert abs(image.width * height / width - image.height) <= 1


def test_explicit_cap_overrides_options(decoder, make_jpeg):
    """Тест: cap из аргумента важнее DecodeOptions."""
    data = make_jpeg(640, 480)

    image = decoder.decode(data, whole(data), cap=256)

    assert image.sample_size == 3
    assert image.size == (214, 160)


def test_decodes_range_inside_container(decoder, make_jpeg):
    """Тест: декодируется только указанный диапазон."""
    first = make_jpeg(120, 80, seed=1)
    second = make_jpeg(60, 40, seed=2)
    data = first + second

    image = decoder.decode(data, SubImageRange(start=len(first), end=len(data)))

    assert image.size == (60, 40)
    assert image.source_range.start == len(first)


def test_matches_opencv_decode_below_cap(decoder, make_jpeg):
    """Тест: без уменьшения пиксели совпадают с cv2.imdecode."""
    data = make_jpeg(200, 100, seed=3)

    image = decoder.decode(data, whole(data))
    expected = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_COLOR)

    np.testing.assert_array_equal(image.pixels, expected)


def test_garbage_raises_decode_error(decoder):
    """Тест: DecodeError для байт, которые не являются изображением."""
    data = b"This is not a valid image file\xff\xd9"

    with pytest.raises(DecodeError) as exc_info:
        decoder.decode(data, whole(data))

    assert exc_info.value.image_range == whole(data)


def test_image_above_pillow_pixel_limit_is_downsampled(decoder, huge_gray_jpeg):
    """Тест: заголовок больше лимита Pillow читается, изображение уменьшается."""
    max_pixels = Image.MAX_IMAGE_PIXELS

    image = decoder.decode(huge_gray_jpeg, whole(huge_gray_jpeg))

    assert image.source_size == (13500, 13500)
    assert image.sample_size == 14
    assert image.size == (965, 965)
    assert Image.MAX_IMAGE_PIXELS == max_pixels


def test_opencv_error_raises_decode_error(decoder, make_jpeg, monkeypatch):
    """Тест: cv2.error при декодировании становится DecodeError."""
    data = make_jpeg(10, 10)

    def broken_imdecode(buf, flags):
        raise cv2.error("imdecode failed")

    monkeypatch.setattr(cv2, "imdecode", broken_imdecode)

    with pytest.raises(DecodeError) as exc_info:
        decoder.decode(data, whole(data))

    assert isinstance(exc_info.value.original_error, cv2.error)


def test_range_outside_buffer_rejected(decoder, make_jpeg):
    """Тест: диапазон за пределами буфера нарушает контракт."""
    data = make_jpeg(10, 10)

    with pytest.raises(ContractValidationError):
        decoder.decode(data, SubImageRange(start=0, end=len(data) + 5))


def test_default_options_from_settings():
    from config.settings import DOWNSAMPLE_SIZE

    assert BoundedDecoder().options.cap == DOWNSAMPLE_SIZE
