from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

FIELD_METADATA_KEY = "field"


class DecodeKind(str, Enum):
    """
    Назначение:
        Способ записи значения колонки в поле записи.
        Выбирается один раз при построении плана.
    """

    STRING = "string"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    VALUE = "value"


class _Unsigned:
    """
    Маркер беззнакового целого для Annotated.
    """

    def __repr__(self) -> str:
        return "UNSIGNED"


UNSIGNED = _Unsigned()

UInt = Annotated[int, UNSIGNED]


@dataclass(frozen=True)
class FieldBinding:
    """
    Назначение:
        Элемент плана привязки: поле записи -> колонка заголовка.

    Поля:
        name: имя атрибута записи
        lookup_key: ключ поиска в заголовке (тег или имя с пробелами вместо "_")
        column: индекс колонки (0-based)
        kind: DecodeKind
    """

    name: str
    lookup_key: str
    column: int
    kind: DecodeKind


def column(name: str, **kwargs: Any) -> Any:
    """
    Назначение:
        Объявляет поле dataclass с явным именем колонки.

    Входные данные:
        name: str
            Имя колонки в заголовке (сравнивается без учёта регистра).
        **kwargs:
            Передаются в dataclasses.field (default, default_factory, ...).

    Пример:
        @dataclass
        class Person:
            first_name: str = column("First Name", default="")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[FIELD_METADATA_KEY] = name
    return dataclasses.field(metadata=metadata, **kwargs)


__all__ = ["DecodeKind", "FieldBinding", "UInt", "UNSIGNED", "FIELD_METADATA_KEY", "column"]
