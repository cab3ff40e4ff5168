"""
Orientation Transform.

Линейное 2x2 преобразование (поворот/отражение, без сдвига содержимого),
вычисляется один раз на сессию из EXIF-кода ориентации и дальше только читается.

Координаты экранные: x вправо, y вниз. Поворот на +90 визуально по часовой.
"""

from enum import IntEnum
from typing import Union

import numpy as np


class ExifOrientation(IntEnum):
    """Значения тега EXIF Orientation (0x0112)."""
    UNDEFINED = 0
    NORMAL = 1
    FLIP_HORIZONTAL = 2
    ROTATE_180 = 3
    FLIP_VERTICAL = 4
    TRANSPOSE = 5
    ROTATE_90 = 6
    TRANSVERSE = 7
    ROTATE_270 = 8


def _rotation(degrees: float) -> np.ndarray:
    rad = np.deg2rad(degrees)
    cos, sin = np.cos(rad), np.sin(rad)
    m = np.array([[cos, -sin], [sin, cos]], dtype=np.float64)
    # убираем шум вида 6e-17 для углов кратных 90
    return np.where(np.abs(m - np.round(m)) < 1e-9, np.round(m), m)


def _scale(sx: float, sy: float) -> np.ndarray:
    return np.array([[sx, 0.0], [0.0, sy]], dtype=np.float64)


class OrientationTransform:
    """Неизменяемая матрица 2x2."""

    __slots__ = ("_matrix",)

    def __init__(self, matrix):
        m = np.array(matrix, dtype=np.float64)
        if m.shape != (2, 2):
            raise ValueError(f"Ожидается матрица 2x2, получено: {m.shape}")
        if abs(np.linalg.det(m)) < 1e-9:
            raise ValueError("Вырожденная матрица ориентации")
        m.setflags(write=False)
        self._matrix = m

    @classmethod
    def identity(cls) -> "OrientationTransform":
        return cls(np.eye(2))

    @classmethod
    def from_degrees(cls, degrees: float, flip_horizontal: bool = False) -> "OrientationTransform":
        """Сначала отражение по горизонтали (если задано), затем поворот."""
        m = _rotation(degrees)
        if flip_horizontal:
            m = m @ _scale(-1, 1)
        return cls(m)

    @classmethod
    def from_exif(cls, orientation: Union[int, ExifOrientation]) -> "OrientationTransform":
        """Матрица для EXIF-кода ориентации. Неизвестные коды дают identity."""
        try:
            code = ExifOrientation(int(orientation))
        except ValueError:
            return cls.identity()

        if code is ExifOrientation.ROTATE_90:
            return cls.from_degrees(90)
        if code is ExifOrientation.ROTATE_180:
            return cls.from_degrees(180)
        if code is ExifOrientation.ROTATE_270:
            return cls.from_degrees(270)
        if code is ExifOrientation.FLIP_HORIZONTAL:
            return cls(_scale(-1, 1))
        if code is ExifOrientation.FLIP_VERTICAL:
            return cls(_scale(1, -1))
        if code is ExifOrientation.TRANSPOSE:
            return cls.from_degrees(270, flip_horizontal=True)
        if code is ExifOrientation.TRANSVERSE:
            return cls.from_degrees(90, flip_horizontal=True)
        return cls.identity()

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix

    @property
    def is_identity(self) -> bool:
        return bool(np.allclose(self._matrix, np.eye(2)))

    @property
    def is_lossless(self) -> bool:
        """True для поворотов на кратные 90 градусов и отражений (знаковая перестановка)."""
        m = self._matrix
        if not np.allclose(m, np.round(m)):
            return False
        r = np.round(m)
        return bool(np.all(np.abs(r).sum(axis=0) == 1) and np.all(np.abs(r).sum(axis=1) == 1))

    def inverse(self) -> "OrientationTransform":
        return OrientationTransform(np.linalg.inv(self._matrix))

    def compose(self, other: "OrientationTransform") -> "OrientationTransform":
        """Преобразование: сначала other, затем self."""
        return OrientationTransform(self._matrix @ other.matrix)

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrientationTransform):
            return NotImplemented
        return bool(np.allclose(self._matrix, other.matrix))

    def __hash__(self) -> int:
        return hash(tuple(np.round(self._matrix, 9).ravel()))

    def __repr__(self) -> str:
        return f"OrientationTransform({self._matrix.tolist()})"
