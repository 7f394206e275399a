from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


class RowReader(Protocol):
    """
    Назначение/ответственность:
        Источник строк: одна операция read(), возвращающая следующую строку
        как последовательность текстовых полей. Заголовок и строки данных
        читаются одной и той же операцией.
    Совместимость:
        csv.reader сюда не подходит напрямую (это итератор); см. IterRowReader.
    """

    def read(self) -> Sequence[str]:
        """
        Контракт:
            Выход: следующая строка.
        Ошибки/исключения:
            EOFError — штатный конец данных.
            Любое другое исключение — сбой источника.
        """
        ...


@runtime_checkable
class Value(Protocol):
    """
    Назначение/ответственность:
        Пользовательский тип поля, который сам разбирает текст ячейки
        (аналог flag.Value): отображение в текст и установка из текста.
    Инварианты/гарантии:
        - v2.set(str(v1)) даёт значение, эквивалентное v1.
        - set() возвращает False (или бросает ValueError), если текст не принят.
    """

    def __str__(self) -> str: ...

    def set(self, text: str) -> bool: ...


__all__ = ["RowReader", "Value"]
