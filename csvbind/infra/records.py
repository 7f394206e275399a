from __future__ import annotations

import dataclasses
import importlib
from typing import Any


class RecordLoadError(Exception):
    """
    Назначение:
        Не удалось загрузить/создать целевую запись по пути вида "module:Class".
    """


def load_record(target: str) -> Any:
    """
    Назначение:
        Импортирует dataclass по пути "package.module:ClassName" и создаёт
        экземпляр со значениями по умолчанию.

    Ошибки/исключения:
        RecordLoadError — неверный формат, модуль/класс не найден,
        класс не dataclass или без значений по умолчанию.
    """
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise RecordLoadError(f"record must be given as 'module:Class', got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise RecordLoadError(f"cannot import module {module_name!r}: {exc}") from exc

    record_type = getattr(module, class_name, None)
    if record_type is None:
        raise RecordLoadError(f"module {module_name!r} has no attribute {class_name!r}")
    if not isinstance(record_type, type) or not dataclasses.is_dataclass(record_type):
        raise RecordLoadError(f"{target!r} is not a dataclass")
    try:
        return record_type()
    except TypeError as exc:
        raise RecordLoadError(f"cannot create {class_name} with defaults: {exc}") from exc


__all__ = ["RecordLoadError", "load_record"]
