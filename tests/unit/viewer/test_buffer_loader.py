import pytest

from recycle_viewer.loading import BufferLoader
from recycle_viewer.domain.exceptions import (
    BufferReadError,
    ContainerLoadError,
    EmptyInputError,
)


@pytest.fixture
def loader():
    """Fixture для BufferLoader."""
    return BufferLoader()


def test_load_returns_full_content(loader, tmp_path):
    """Тест: файл читается целиком."""
    path = tmp_path / "data.bin"
    payload = bytes(range(256)) * 10
    path.write_bytes(payload)

    buffer = loader.load(path)

    assert isinstance(buffer, bytes)
    assert buffer == payload


def test_load_accepts_str_path(loader, tmp_path):
    """Тест: путь можно передать строкой."""
    path = tmp_path / "data.bin"
    path.write_bytes(b"\xff\xd8\xff\xd9")

    assert loader.load(str(path)) == b"\xff\xd8\xff\xd9"


def test_missing_file_raises_read_error(loader, tmp_path):
    """Тест: BufferReadError для несуществующего файла."""
    missing = tmp_path / "missing.jpg"

    with pytest.raises(BufferReadError) as exc_info:
        loader.load(missing)

    assert exc_info.value.path == missing
    assert isinstance(exc_info.value.original_error, FileNotFoundError)
    assert isinstance(exc_info.value, ContainerLoadError)


def test_directory_raises_read_error(loader, tmp_path):
    """Тест: директория вместо файла тоже ошибка чтения."""
    with pytest.raises(BufferReadError):
        loader.load(tmp_path)


def test_empty_file_raises_empty_input(loader, tmp_path):
    """Тест: пустой файл отличается от нечитаемого."""
    path = tmp_path / "empty.jpg"
    path.write_bytes(b"")

    with pytest.raises(EmptyInputError, match="Пустой файл"):
        loader.load(path)


def test_read_error_is_os_error(loader, tmp_path):
    """Тест: ошибка чтения ловится как OSError, сообщение домена сохраняется."""
    missing = tmp_path / "missing.jpg"

    with pytest.raises(OSError) as exc_info:
        loader.load(missing)

    assert isinstance(exc_info.value, BufferReadError)
    assert exc_info.value.errno == exc_info.value.original_error.errno
    assert "Не удалось прочитать файл" in str(exc_info.value)


def test_empty_input_is_not_os_error(loader, tmp_path):
    """Тест: пустой файл не маскируется под ошибку чтения."""
    path = tmp_path / "empty.jpg"
    path.write_bytes(b"")

    with pytest.raises(EmptyInputError) as exc_info:
        loader.load(path)

    assert not isinstance(exc_info.value, OSError)
