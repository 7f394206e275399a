from __future__ import annotations

import logging
from typing import Any, Generic, Iterator, Sequence, TypeVar

from csvbind.domain.binding.coerce import parse_float, parse_int, parse_uint
from csvbind.domain.binding.planner import build_plan
from csvbind.domain.exceptions import (
    ColumnOutOfRangeError,
    HeaderReadError,
    NotAValueError,
    ValueRejectedError,
)
from csvbind.domain.models import DecodeKind, FieldBinding
from csvbind.domain.ports.sources import RowReader, Value

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReadIter(Generic[T]):
    """
    Назначение/ответственность:
        Итератор по источнику строк, который на каждом шаге заполняет
        одну и ту же dataclass-запись значениями очередной строки.

    Пример:
        person = Person()
        rows = ReadIter(reader, person)
        while rows.get():
            print(person.first_name, person.age)
        if rows.error is not None:
            print("error", rows.line, rows.column, rows.error)

    Состояние сессии:
        line: номер последней прочитанной строки (заголовок = 1)
        column: 1-based колонка последней ошибки (0, пока ошибок нет)
        error: последняя ошибка или None; конец данных ошибкой не считается

    Ограничения:
        Не потокобезопасен: одна сессия — один читатель.
    """

    def __init__(self, reader: RowReader, record: T) -> None:
        self.reader = reader
        self.record = record
        self.line = 1
        self.column = 0
        self.error: BaseException | None = None
        try:
            headers = reader.read()
        except EOFError as exc:
            raise HeaderReadError("empty input") from exc
        except Exception as exc:
            raise HeaderReadError(str(exc) or type(exc).__name__) from exc
        self._headers = tuple(headers)
        self._plan = build_plan(self._headers, record)

    @property
    def headers(self) -> tuple[str, ...]:
        return self._headers

    @property
    def plan(self) -> tuple[FieldBinding, ...]:
        return self._plan

    def get(self) -> bool:
        """
        Назначение:
            Читает следующую строку и записывает её значения в record.

        Выходные данные:
            bool
                True — строка применена целиком.
                False — конец данных (error is None) либо ошибка (error задан).

        Поведение:
            - line увеличивается при каждом чтении, в том числе неудачном.
            - После первой ошибки сессия завершена: источник больше не читается.
        """
        if self.error is not None:
            return False
        try:
            row = self.reader.read()
        except EOFError:
            self.line += 1
            return False
        except Exception as exc:
            self.line += 1
            self._fail(exc)
            return False
        self.line += 1

        for binding in self._plan:
            try:
                self._apply(binding, row)
            except Exception as exc:
                self.column = binding.column + 1
                self._fail(exc)
                return False
        return True

    def __iter__(self) -> Iterator[T]:
        while self.get():
            yield self.record

    def _apply(self, binding: FieldBinding, row: Sequence[str]) -> None:
        if binding.column >= len(row):
            raise ColumnOutOfRangeError(binding.column + 1, len(row))
        text = row[binding.column]
        kind = binding.kind
        if kind is DecodeKind.STRING:
            setattr(self.record, binding.name, text)
        elif kind is DecodeKind.INT:
            # пустое значение для знаковых целых трактуется как 0
            setattr(self.record, binding.name, parse_int(text) if text != "" else 0)
        elif kind is DecodeKind.UINT:
            setattr(self.record, binding.name, parse_uint(text))
        elif kind is DecodeKind.FLOAT:
            setattr(self.record, binding.name, parse_float(text))
        elif kind is DecodeKind.VALUE:
            _set_value(self.record, binding.name, text)

    def _fail(self, exc: BaseException) -> None:
        self.error = exc
        logger.debug("decode stopped at line %d column %d: %s", self.line, self.column, exc)


def _set_value(record: Any, name: str, text: str) -> None:
    target = getattr(record, name, None)
    if not isinstance(target, Value):
        raise NotAValueError(name)
    try:
        accepted = target.set(text)
    except ValueRejectedError:
        raise
    except ValueError as exc:
        raise ValueRejectedError(name, text, str(exc)) from exc
    if accepted is False:
        raise ValueRejectedError(name, text)


__all__ = ["ReadIter"]
