from __future__ import annotations

import dataclasses
import logging
from typing import Any

from csvbind.domain.binding.decoder import ReadIter
from csvbind.domain.ports.sources import RowReader
from csvbind.infra.artifacts.report_writer import Report
from csvbind.infra.logging.setup import logEvent


class PlanUseCase:
    """
    Назначение/ответственность:
        Показывает, как поля записи привязались к заголовку, не читая строк данных.
    """

    def run(
        self,
        reader: RowReader,
        record: Any,
        logger: logging.Logger,
        run_id: str,
        report: Report,
    ) -> list[str]:
        session = ReadIter(reader, record)
        bound = {binding.name for binding in session.plan}

        lines = [f"headers={list(session.headers)}"]
        for binding in session.plan:
            lines.append(
                f"{binding.name} -> {binding.column + 1} {session.headers[binding.column]!r} ({binding.kind.value})"
            )
            report.items.append(
                {
                    "field": binding.name,
                    "lookup_key": binding.lookup_key,
                    "column": binding.column + 1,
                    "kind": binding.kind.value,
                }
            )
        for field in dataclasses.fields(record):
            if field.name not in bound:
                lines.append(f"{field.name} -> unmatched")

        report.meta.record_type = type(record).__name__
        report.summary.fields_bound = len(session.plan)
        logEvent(
            logger,
            logging.INFO,
            run_id,
            "plan",
            f"plan fields_bound={len(session.plan)} unmatched={len(dataclasses.fields(record)) - len(bound)}",
        )
        return lines


__all__ = ["PlanUseCase"]
