from __future__ import annotations

from datetime import date

_TRUE = ("true", "1", "yes", "y", "on")
_FALSE = ("false", "0", "no", "n", "off")


class BoolValue:
    """
    Назначение:
        Логическое поле: true/false, 1/0, yes/no, on/off (без учёта регистра).
        Пустая ячейка -> False.
    """

    def __init__(self, value: bool = False) -> None:
        self.value = value

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def __bool__(self) -> bool:
        return self.value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BoolValue):
            return self.value == other.value
        return NotImplemented

    __hash__ = None

    def set(self, text: str) -> bool:
        normalized = text.strip().lower()
        if normalized == "" or normalized in _FALSE:
            self.value = False
            return True
        if normalized in _TRUE:
            self.value = True
            return True
        return False


class DateValue:
    """
    Назначение:
        Дата в формате ISO (YYYY-MM-DD). Пустая ячейка -> None.
    """

    def __init__(self, value: date | None = None) -> None:
        self.value = value

    def __str__(self) -> str:
        return self.value.isoformat() if self.value is not None else ""

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DateValue):
            return self.value == other.value
        return NotImplemented

    __hash__ = None

    def set(self, text: str) -> bool:
        if text == "":
            self.value = None
            return True
        # ValueError из fromisoformat превращается декодером в VALUE_REJECTED
        self.value = date.fromisoformat(text)
        return True


class ListValue:
    """
    Назначение:
        Список строк, разделённых ";" внутри одной ячейки.
    """

    separator = ";"

    def __init__(self, items: list[str] | None = None) -> None:
        self.items = list(items or [])

    def __str__(self) -> str:
        return self.separator.join(self.items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ListValue):
            return self.items == other.items
        return NotImplemented

    __hash__ = None

    def set(self, text: str) -> bool:
        self.items = [item.strip() for item in text.split(self.separator) if item.strip()]
        return True


__all__ = ["BoolValue", "DateValue", "ListValue"]
