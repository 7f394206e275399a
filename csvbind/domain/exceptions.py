from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from csvbind.domain.error_codes import ErrorCode


class BindError(Exception):
    """
    Назначение:
        Базовая ошибка привязки записи к заголовку и декодирования строк.
    Инварианты/гарантии:
        - code всегда задан (ErrorCode).
        - to_dict() пригоден для записи в report.json.
    """

    @property
    def code(self) -> ErrorCode:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code.value, "message": str(self)}


@dataclass
class HeaderReadError(BindError):
    """
    Назначение:
        Не удалось прочитать строку заголовка (включая пустой источник).
        Сессия при этом не создаётся.
    """

    reason: str

    def __post_init__(self) -> None:
        super().__init__(self.reason)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.HEADER_READ_ERROR

    def __str__(self) -> str:
        return f"cannot read header: {self.reason}"


@dataclass
class RecordTypeError(BindError, TypeError):
    """
    Назначение:
        Целевая запись не является экземпляром dataclass.
    """

    type_name: str
    detail: str = "target record must be a dataclass instance"

    def __post_init__(self) -> None:
        super().__init__(self.type_name)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.RECORD_TYPE_ERROR

    def __str__(self) -> str:
        return f"{self.detail}, got {self.type_name}"


@dataclass
class FieldTypeError(BindError, TypeError):
    """
    Назначение:
        Поле нашлось в заголовке, но его тип нельзя ни разобрать как примитив,
        ни заполнить через Value. Привязка отклоняется целиком.
    """

    field: str
    type_name: str

    def __post_init__(self) -> None:
        super().__init__(self.field)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.FIELD_TYPE_ERROR

    def __str__(self) -> str:
        return f"cannot convert this type: field '{self.field}' has type {self.type_name}"


@dataclass
class NumberParseError(BindError, ValueError):
    """
    Назначение:
        Ошибка разбора числа из текста ячейки.

    Поля:
        func: имя функции разбора (parse_int/parse_uint/parse_float)
        text: исходный текст
        reason: "invalid syntax" | "value out of range"
    """

    func: str
    text: str
    reason: str

    def __post_init__(self) -> None:
        super().__init__(self.text)

    @property
    def code(self) -> ErrorCode:
        if self.reason == OUT_OF_RANGE:
            return ErrorCode.VALUE_OUT_OF_RANGE
        return ErrorCode.INVALID_SYNTAX

    def __str__(self) -> str:
        return f"csvbind.{self.func}: parsing {self.text!r}: {self.reason}"


@dataclass
class ColumnOutOfRangeError(BindError, IndexError):
    """
    Назначение:
        В строке меньше колонок, чем требует план привязки.
    """

    column: int
    row_length: int

    def __post_init__(self) -> None:
        super().__init__(self.column)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.COLUMN_OUT_OF_RANGE

    def __str__(self) -> str:
        return f"column {self.column} out of range: row has {self.row_length} columns"


@dataclass
class ValueRejectedError(BindError, ValueError):
    """
    Назначение:
        Пользовательский Value отказался принять текст (set вернул False
        или выбросил ValueError).
    """

    field: str
    text: str
    detail: str | None = None

    def __post_init__(self) -> None:
        super().__init__(self.text)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.VALUE_REJECTED

    def __str__(self) -> str:
        message = f"field '{self.field}' rejected value {self.text!r}"
        if self.detail:
            message = f"{message}: {self.detail}"
        return message


@dataclass
class NotAValueError(BindError, TypeError):
    """
    Назначение:
        Нарушение согласованности: поле с видом VALUE на момент декодирования
        больше не реализует Value (например, атрибут перезаписан вызывающим кодом).
    """

    field: str

    def __post_init__(self) -> None:
        super().__init__(self.field)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.NOT_A_VALUE

    def __str__(self) -> str:
        return f"Not a Value object: field '{self.field}'"


INVALID_SYNTAX = "invalid syntax"
OUT_OF_RANGE = "value out of range"


__all__ = [
    "BindError",
    "HeaderReadError",
    "RecordTypeError",
    "FieldTypeError",
    "NumberParseError",
    "ColumnOutOfRangeError",
    "ValueRejectedError",
    "NotAValueError",
    "INVALID_SYNTAX",
    "OUT_OF_RANGE",
]
