from __future__ import annotations

import dataclasses
import inspect
import logging
import sys
import types
import typing
from typing import Any, Sequence

from csvbind.domain.exceptions import FieldTypeError, RecordTypeError
from csvbind.domain.models import FIELD_METADATA_KEY, UNSIGNED, DecodeKind, FieldBinding
from csvbind.domain.ports.sources import Value

logger = logging.getLogger(__name__)

NOT_FOUND = -1


def lookup_key(field: dataclasses.Field) -> str:
    """
    Назначение:
        Ключ поиска поля в заголовке.

    Алгоритм:
        - если в metadata задан "field" — он используется как есть;
        - иначе имя поля, в котором "_" заменены на пробелы.
    """
    tag = field.metadata.get(FIELD_METADATA_KEY) if field.metadata else None
    if tag:
        return tag
    return field.name.replace("_", " ")


def find_column(headers: Sequence[str], key: str) -> int:
    """
    Назначение:
        Индекс первой колонки, совпадающей с key без учёта регистра, или NOT_FOUND.

    Алгоритм:
        Посимвольное простое сравнение регистра: символы равны, если совпадают
        их lower() или upper(). Многосимвольные свёртки ("ß" -> "ss") не применяются.
    """
    for index, header in enumerate(headers):
        if _equal_fold(header, key):
            return index
    return NOT_FOUND


def build_plan(headers: Sequence[str], record: Any) -> tuple[FieldBinding, ...]:
    """
    Назначение:
        Строит план привязки полей dataclass-записи к колонкам заголовка.

    Входные данные:
        headers: Sequence[str]
            Заголовок, прочитанный из источника.
        record: Any
            Экземпляр dataclass, который будет заполняться на каждой строке.

    Выходные данные:
        tuple[FieldBinding, ...]
            Привязки в порядке объявления полей; поля без колонки пропускаются.

    Ошибки/исключения:
        RecordTypeError — record не экземпляр dataclass или frozen.
        FieldTypeError — поле найдено, но тип не поддерживается.

    Поведение:
        - Поле без колонки в заголовке — не ошибка, оно просто не попадает в план.
        - Для VALUE-полей с неинициализированным атрибутом на запись
          ставится экземпляр по умолчанию (cls()), но только когда весь план
          построен успешно; при ошибке запись остаётся нетронутой.
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise RecordTypeError(type(record).__name__)
    if type(record).__dataclass_params__.frozen:
        raise RecordTypeError(type(record).__name__, "target record must not be frozen")

    hints = _resolve_hints(type(record))
    plan: list[FieldBinding] = []
    defaults: dict[str, Any] = {}
    for field in dataclasses.fields(record):
        key = lookup_key(field)
        index = find_column(headers, key)
        if index == NOT_FOUND:
            logger.debug("field %s skipped: no column %r in header", field.name, key)
            continue

        annotation = hints[field.name] if field.name in hints else _resolve_field_type(type(record), field)
        kind = classify(record, field.name, annotation)
        if kind is DecodeKind.VALUE:
            default = _default_value(record, field.name, annotation)
            if default is not None:
                defaults[field.name] = default
        plan.append(FieldBinding(name=field.name, lookup_key=key, column=index, kind=kind))
        logger.debug("field %s -> column %d (%s)", field.name, index, kind.value)

    for name, default in defaults.items():
        setattr(record, name, default)
    return tuple(plan)


def classify(record: Any, name: str, annotation: Any) -> DecodeKind:
    """
    Назначение:
        Выбор DecodeKind для поля. Запись не изменяется.

    Алгоритм:
        1) объявленный класс реализует Value -> VALUE;
        2) UInt -> UINT, int -> INT, float -> FLOAT, str -> STRING;
        3) текущее значение атрибута реализует Value -> VALUE;
        4) иначе FieldTypeError.
    """
    base, unsigned = _unwrap(annotation)

    if isinstance(base, type) and issubclass(base, Value):
        return DecodeKind.VALUE

    if isinstance(base, type) and not issubclass(base, bool):
        if issubclass(base, int):
            return DecodeKind.UINT if unsigned else DecodeKind.INT
        if issubclass(base, float):
            return DecodeKind.FLOAT
        if issubclass(base, str):
            return DecodeKind.STRING

    if isinstance(getattr(record, name, None), Value):
        return DecodeKind.VALUE

    raise FieldTypeError(name, _type_name(annotation))


def _equal_fold(left: str, right: str) -> bool:
    if len(left) != len(right):
        return False
    for a, b in zip(left, right):
        if a == b or a.lower() == b.lower() or a.upper() == b.upper():
            continue
        return False
    return True


def _resolve_hints(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError):
        # локальные типы в строковых аннотациях: дальше резолвим по одному полю
        logger.debug("type hints of %s are not resolvable at once, resolving per field", record_type.__name__)
        return {}


def _resolve_field_type(record_type: type, field: dataclasses.Field) -> Any:
    """
    Вычисляет строковую аннотацию одного поля в модуле класса, который его объявил.
    Если имя не резолвится, возвращается исходная строка.
    """
    if not isinstance(field.type, str):
        return field.type

    owner = record_type
    for base in record_type.__mro__:
        if field.name in inspect.get_annotations(base):
            owner = base
            break
    module = sys.modules.get(owner.__module__)
    namespace = dict(vars(module)) if module is not None else {}
    try:
        return eval(field.type, namespace)
    except (NameError, AttributeError, SyntaxError, TypeError):
        logger.debug("field %s: annotation %r is not resolvable", field.name, field.type)
        return field.type


def _unwrap(annotation: Any) -> tuple[Any, bool]:
    """
    Снимает Optional[...] и Annotated[...]; возвращает (базовый тип, признак UNSIGNED).
    """
    unsigned = False
    while True:
        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            args = typing.get_args(annotation)
            annotation = args[0]
            unsigned = unsigned or any(meta is UNSIGNED for meta in args[1:])
            continue
        if origin is typing.Union or origin is types.UnionType:
            args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
            if len(args) == 1:
                annotation = args[0]
                continue
        return annotation, unsigned


def _default_value(record: Any, name: str, annotation: Any) -> Any:
    """
    Экземпляр по умолчанию для VALUE-поля, чей атрибут ещё не реализует Value; иначе None.
    """
    if isinstance(getattr(record, name, None), Value):
        return None
    value_type, _ = _unwrap(annotation)
    try:
        return value_type()
    except TypeError as exc:
        raise FieldTypeError(name, value_type.__name__) from exc


def _type_name(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return repr(annotation)


__all__ = ["build_plan", "classify", "find_column", "lookup_key", "NOT_FOUND"]
