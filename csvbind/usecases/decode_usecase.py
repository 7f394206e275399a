from __future__ import annotations

import dataclasses
import logging
from typing import Any

from csvbind.domain.binding.decoder import ReadIter
from csvbind.domain.error_codes import ErrorCode
from csvbind.domain.ports.sources import RowReader, Value
from csvbind.infra.artifacts.report_writer import Report
from csvbind.infra.logging.setup import logEvent


class DecodeUseCase:
    """
    Назначение/ответственность:
        Use-case полного прохода по источнику: строит сессию привязки,
        декодирует все строки и заполняет отчёт.

    Ошибки/исключения:
        Ошибки построения сессии (HeaderReadError, RecordTypeError, FieldTypeError)
        пробрасываются вызывающему коду; ошибки строк попадают в отчёт.
    """

    def __init__(self, report_items_limit: int = 0) -> None:
        self.report_items_limit = report_items_limit

    def run(
        self,
        reader: RowReader,
        record: Any,
        logger: logging.Logger,
        run_id: str,
        report: Report,
    ) -> int:
        """
        Выходные данные:
            int
                0 — дошли до конца данных, 1 — остановились на ошибке.
        """
        session = ReadIter(reader, record)
        report.meta.record_type = type(record).__name__
        report.summary.fields_bound = len(session.plan)
        logEvent(
            logger,
            logging.INFO,
            run_id,
            "plan",
            f"plan built headers={len(session.headers)} fields_bound={len(session.plan)}",
        )

        rows_decoded = 0
        for decoded in session:
            rows_decoded += 1
            if len(report.items) < self.report_items_limit:
                report.items.append({"line": session.line, "values": record_values(decoded)})

        report.summary.rows_decoded = rows_decoded
        report.summary.last_line = session.line
        if session.error is None:
            logEvent(logger, logging.INFO, run_id, "decode", f"decode done rows={rows_decoded}")
            return 0

        code = ErrorCode.from_error(session.error)
        report.summary.error_line = session.line
        report.summary.error_column = session.column
        report.summary.error_code = code.value if code else None
        report.summary.error_message = str(session.error)
        logEvent(
            logger,
            logging.ERROR,
            run_id,
            "decode",
            f"decode failed line={session.line} column={session.column} code={report.summary.error_code} "
            f"error={session.error}",
        )
        return 1


def record_values(record: Any) -> dict[str, Any]:
    """
    Назначение:
        Снимок полей записи для отчёта; Value-поля отображаются через str().
    """
    values: dict[str, Any] = {}
    for field in dataclasses.fields(record):
        value = getattr(record, field.name)
        if isinstance(value, (str, int, float)) or value is None:
            values[field.name] = value
        elif isinstance(value, Value):
            values[field.name] = str(value)
        else:
            values[field.name] = repr(value)
    return values


__all__ = ["DecodeUseCase", "record_values"]
