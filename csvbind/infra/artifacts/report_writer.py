from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any


def _now_iso() -> str:
    return datetime.now().astimezone().isoformat()


@dataclass
class ReportMeta:
    """
    Назначение:
        Метаданные отчёта запуска команды.
    """
    run_id: str
    command: str
    started_at: str
    finished_at: str | None = None
    duration_ms: int | None = None
    csv_path: str | None = None
    record_type: str | None = None
    log_file: str | None = None
    report_dir: str | None = None
    config_sources: list[str] = field(default_factory=list)


@dataclass
class ReportSummary:
    """
    Назначение:
        Сводка декодирования.

    Поля:
        rows_decoded: успешно применённые строки
        fields_bound: размер плана привязки
        last_line: значение line сессии на момент остановки
        error_line / error_column / error_code / error_message:
            заполняются только при ошибке
    """
    rows_decoded: int = 0
    fields_bound: int = 0
    last_line: int | None = None
    error_line: int | None = None
    error_column: int | None = None
    error_code: str | None = None
    error_message: str | None = None


@dataclass
class Report:
    meta: ReportMeta
    summary: ReportSummary
    items: list[dict] = field(default_factory=list)


def createEmptyReport(runId: str, command: str, configSources: list[str]) -> Report:
    """
    Назначение:
        Создаёт пустой отчёт-скелет для команды.
    """
    meta = ReportMeta(
        run_id=runId,
        command=command,
        started_at=_now_iso(),
        config_sources=list(configSources or []),
    )
    return Report(meta=meta, summary=ReportSummary())


def finalizeReport(report: Report, durationMs: int, logFile: str | None, reportDir: str) -> None:
    report.meta.finished_at = _now_iso()
    report.meta.duration_ms = durationMs
    report.meta.log_file = logFile
    report.meta.report_dir = reportDir


def writeReportJson(report: Report, reportDir: str, fileBaseName: str) -> str:
    """
    Назначение:
        Записывает отчёт в <reportDir>/<fileBaseName>.json.

    Выходные данные:
        str
            Полный путь к созданному файлу.
    """
    Path(reportDir).mkdir(parents=True, exist_ok=True)
    reportPath = str(Path(reportDir) / f"{fileBaseName}.json")

    data: dict[str, Any] = {
        "meta": asdict(report.meta),
        "summary": asdict(report.summary),
        "items": report.items,
    }
    with open(reportPath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return reportPath


__all__ = ["Report", "ReportMeta", "ReportSummary", "createEmptyReport", "finalizeReport", "writeReportJson"]
