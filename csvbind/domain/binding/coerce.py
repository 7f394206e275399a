from __future__ import annotations

import math
import re

from csvbind.domain.exceptions import INVALID_SYNTAX, OUT_OF_RANGE, NumberParseError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"\+?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def parse_int(text: str) -> int:
    """
    Назначение:
        Строгий разбор знакового целого в base-10 (диапазон int64).
        Пробелы, "_" и пустая строка не допускаются.
    """
    if _INT_RE.fullmatch(text) is None:
        raise NumberParseError("parse_int", text, INVALID_SYNTAX)
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise NumberParseError("parse_int", text, OUT_OF_RANGE)
    return value


def parse_uint(text: str) -> int:
    """
    Назначение:
        Строгий разбор беззнакового целого в base-10 (диапазон uint64).
    """
    if _UINT_RE.fullmatch(text) is None:
        raise NumberParseError("parse_uint", text, INVALID_SYNTAX)
    value = int(text)
    if value > UINT64_MAX:
        raise NumberParseError("parse_uint", text, OUT_OF_RANGE)
    return value


def parse_float(text: str) -> float:
    """
    Назначение:
        Строгий разбор числа с плавающей точкой в base-10.

    Поведение:
        - допускаются знак, экспонента, inf/infinity/nan (без учёта регистра);
        - конечная запись, переполняющая double, — ошибка диапазона.
    """
    if _FLOAT_RE.fullmatch(text) is None:
        raise NumberParseError("parse_float", text, INVALID_SYNTAX)
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise NumberParseError("parse_float", text, OUT_OF_RANGE)
    return value


def str_to_int64(text: str) -> int:
    """
    Назначение:
        Нестрогий разбор int64: при любой ошибке возвращает 0.
    """
    try:
        return parse_int(text)
    except NumberParseError:
        return 0


__all__ = ["parse_int", "parse_uint", "parse_float", "str_to_int64", "INT64_MIN", "INT64_MAX", "UINT64_MAX"]
