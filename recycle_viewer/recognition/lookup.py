"""
Recyclability Lookup.

Решает, относится ли код к перерабатываемым.
ReferenceCodeLookup сравнивает с одним эталонным значением,
YamlCodeLookup берёт список кодов из YAML.
"""

from pathlib import Path
from typing import FrozenSet, Iterable, Union

import yaml
from loguru import logger

from config.settings import REFERENCE_RECYCLABLE_CODE
from ..domain.exceptions import ViewerError
from ..domain.interfaces import IRecyclabilityLookup


class ReferenceCodeLookup(IRecyclabilityLookup):
    """Код перерабатываемый тогда и только тогда, когда равен эталону."""

    def __init__(self, reference: str = REFERENCE_RECYCLABLE_CODE):
        self.reference = reference

    def lookup(self, code: str) -> bool:
        return code == self.reference


class SetCodeLookup(IRecyclabilityLookup):
    """Код перерабатываемый, если входит в заданное множество."""

    def __init__(self, codes: Iterable[str]):
        self.codes: FrozenSet[str] = frozenset(str(c).strip() for c in codes)

    def lookup(self, code: str) -> bool:
        return code in self.codes


class YamlCodeLookup(SetCodeLookup):
    """
    Список кодов из YAML:

        recyclable:
          - "9780078821233"
          - "096619756803"
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ViewerError(
                message=f"Не удалось загрузить список кодов: {self.path}",
                component="YamlCodeLookup",
                original_error=e
            )

        codes = data.get("recyclable", []) if isinstance(data, dict) else []
        if not isinstance(codes, list):
            raise ViewerError(
                message=f"Ключ 'recyclable' должен быть списком: {self.path}",
                component="YamlCodeLookup"
            )

        super().__init__(codes)
        logger.debug(f"[YamlCodeLookup] Загружено {len(self.codes)} кодов из {self.path.name}")
