from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов ошибок привязки и декодирования строк.
    """

    HEADER_READ_ERROR = "HEADER_READ_ERROR"
    RECORD_TYPE_ERROR = "RECORD_TYPE_ERROR"
    FIELD_TYPE_ERROR = "FIELD_TYPE_ERROR"
    READ_ERROR = "READ_ERROR"
    COLUMN_OUT_OF_RANGE = "COLUMN_OUT_OF_RANGE"
    INVALID_SYNTAX = "INVALID_SYNTAX"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    VALUE_REJECTED = "VALUE_REJECTED"
    NOT_A_VALUE = "NOT_A_VALUE"

    @classmethod
    def from_error(cls, error: BaseException | None) -> "ErrorCode | None":
        """
        Назначение:
            Подбор кода по объекту ошибки сессии.
            Ошибки источника строк без собственного кода считаются READ_ERROR.
        """
        if error is None:
            return None
        code = getattr(error, "code", None)
        if isinstance(code, cls):
            return code
        return cls.READ_ERROR


__all__ = ["ErrorCode"]
