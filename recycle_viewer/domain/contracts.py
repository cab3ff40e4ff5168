"""
Валидационные контракты домена Viewer.

Все модели используют Pydantic v2 и неизменяемы (frozen).
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import ContractValidationError


class SubImageRange(BaseModel):
    """
    Диапазон [start, end) одного изображения внутри буфера контейнера.

    Диапазоны выдаются в порядке буфера и не перекрываются.
    """

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, description="Смещение первого байта")
    end: int = Field(..., gt=0, description="Смещение после последнего байта")

    @model_validator(mode="after")
    def end_after_start(self) -> "SubImageRange":
        if self.end <= self.start:
            raise ValueError(f"end ({self.end}) должен быть больше start ({self.start})")
        return self

    @classmethod
    def of(cls, start: int, end: int) -> "SubImageRange":
        """Создаёт диапазон, переводя ошибки pydantic в ContractValidationError."""
        try:
            return cls(start=start, end=end)
        except ValidationError as e:
            raise ContractValidationError("SubImageRange", e.errors())

    @property
    def length(self) -> int:
        return self.end - self.start

    def validate_against(self, buffer_length: int) -> "SubImageRange":
        """Проверяет, что диапазон лежит внутри буфера длины buffer_length."""
        if self.end > buffer_length:
            raise ContractValidationError(
                "SubImageRange",
                [f"end ({self.end}) выходит за пределы буфера ({buffer_length})"]
            )
        return self

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


class DecodeOptions(BaseModel):
    """
    Параметры декодирования, вычисляются один раз на сессию.

    cap: максимальный размер по любой стороне после даунсэмплинга.
    ignore_embedded_orientation: не применять EXIF-ориентацию при декодировании,
        ориентация приходит отдельным параметром сессии.
    """

    model_config = ConfigDict(frozen=True)

    cap: int = Field(..., gt=0, description="Ограничение размера (pixels)")
    ignore_embedded_orientation: bool = True

    @classmethod
    def with_cap(cls, cap: int) -> "DecodeOptions":
        try:
            return cls(cap=cap)
        except ValidationError as e:
            raise ContractValidationError("DecodeOptions", e.errors())
