from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

import typer

from csvbind.config.config import Settings, load_settings
from csvbind.domain.exceptions import BindError
from csvbind.infra.artifacts.report_writer import createEmptyReport, finalizeReport, writeReportJson
from csvbind.infra.logging.setup import closeCommandLogger, createCommandLogger, logEvent, mapLogLevel
from csvbind.infra.records import RecordLoadError, load_record
from csvbind.infra.sources.csv_reader import CsvRowReader
from csvbind.usecases.decode_usecase import DecodeUseCase
from csvbind.usecases.plan_usecase import PlanUseCase

app = typer.Typer(no_args_is_help=True, add_completion=False)


def requireCsv(csvPath: str | None) -> None:
    """
    Назначение:
        Проверка наличия CSV-файла; при ошибке завершает процесс с exit code 2.
    """
    if not csvPath:
        typer.echo("ERROR: --csv is required", err=True)
        raise typer.Exit(code=2)

    p = Path(csvPath)
    if not p.exists() or not p.is_file():
        typer.echo(f"ERROR: CSV file not found: {csvPath}", err=True)
        raise typer.Exit(code=2)


def runWithReport(
    ctx: typer.Context,
    commandName: str,
    csvPath: str | None,
    recordSpec: str,
    runner,
) -> None:
    """
    Назначение:
        Унифицированная обвязка выполнения команд:
        - создаёт логгер + файл лога
        - создаёт report.json skeleton
        - проверяет CSV и загружает целевую запись
        - гарантирует запись отчёта в finally

    Поведение:
        - Ошибки входных данных и построения сессии: exit code 2.
    """
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]
    sources = ctx.obj["sources"]

    startMonotonic = time.monotonic()
    logger, logFilePath = createCommandLogger(
        commandName=commandName,
        logDir=settings.log_dir,
        runId=runId,
        logLevel=settings.log_level,
    )
    report = createEmptyReport(runId=runId, command=commandName, configSources=sources)
    report.meta.csv_path = csvPath

    exitCode: int | None = None
    try:
        logEvent(logger, logging.INFO, runId, "core", f"Command started sources={sources}")
        try:
            requireCsv(csvPath)
        except typer.Exit:
            logEvent(logger, logging.ERROR, runId, "csv", "CSV is missing or not accessible")
            exitCode = 2
            return

        try:
            record = load_record(recordSpec)
        except RecordLoadError as exc:
            logEvent(logger, logging.ERROR, runId, "record", str(exc))
            typer.echo(f"ERROR: {exc}", err=True)
            exitCode = 2
            return

        try:
            with CsvRowReader(csvPath, delimiter=settings.delimiter, encoding=settings.encoding) as reader:
                exitCode = runner(reader, record, logger, report)
        except BindError as exc:
            logEvent(logger, logging.ERROR, runId, "plan", f"Binding failed: {exc}")
            typer.echo(f"ERROR: {exc}", err=True)
            exitCode = 2
        except OSError as exc:
            logEvent(logger, logging.ERROR, runId, "csv", f"CSV read error: {exc}")
            typer.echo(f"ERROR: CSV read error: {exc}", err=True)
            exitCode = 2
    finally:
        durationMs = int((time.monotonic() - startMonotonic) * 1000)
        finalizeReport(report=report, durationMs=durationMs, logFile=logFilePath, reportDir=settings.report_dir)
        reportPath = writeReportJson(report, settings.report_dir, f"report_{commandName}_{runId}")
        logEvent(logger, logging.INFO, runId, "report", f"Report written: {reportPath}")
        closeCommandLogger(logger)

        if exitCode:
            raise typer.Exit(code=exitCode)


@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs."),
    reportDir: str | None = typer.Option(None, "--report-dir", help="Directory for reports."),
    delimiter: str | None = typer.Option(None, "--delimiter", help="CSV delimiter (single character, \\t for tab)"),
    encoding: str | None = typer.Option(None, "--encoding", help="CSV file encoding"),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - сохраняет всё в ctx.obj для подкоманд
    """
    if not runId:
        runId = str(uuid.uuid4())

    cliOverrides = {
        "log_level": logLevel,
        "log_dir": logDir,
        "report_dir": reportDir,
        "delimiter": delimiter,
        "encoding": encoding,
    }
    try:
        loaded = load_settings(config_path=config, cli_overrides=cliOverrides)
        mapLogLevel(loaded.settings.log_level)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=2)

    ctx.obj = {
        "runId": runId,
        "settings": loaded.settings,
        "sources": loaded.sources_used,
        "configPath": config,
    }


@app.command()
def plan(
    ctx: typer.Context,
    csv: str | None = typer.Option(None, "--csv", help="Path to input CSV"),
    record: str = typer.Option(..., "--record", help="Target dataclass as module:Class"),
):
    """
    Показать привязку полей записи к колонкам заголовка.
    """

    def execute(reader, target, logger, report) -> int:
        for line in PlanUseCase().run(reader, target, logger, ctx.obj["runId"], report):
            typer.echo(line)
        return 0

    runWithReport(ctx, "plan", csv, record, execute)


@app.command()
def decode(
    ctx: typer.Context,
    csv: str | None = typer.Option(None, "--csv", help="Path to input CSV"),
    record: str = typer.Option(..., "--record", help="Target dataclass as module:Class"),
    reportItemsLimit: int = typer.Option(100, "--report-items-limit", help="Max decoded rows kept in report"),
):
    """
    Декодировать все строки CSV в запись и сообщить о первой ошибке.
    """

    def execute(reader, target, logger, report) -> int:
        code = DecodeUseCase(report_items_limit=reportItemsLimit).run(
            reader, target, logger, ctx.obj["runId"], report
        )
        summary = report.summary
        typer.echo(f"rows={summary.rows_decoded}")
        if code != 0:
            typer.echo(
                f"ERROR: line={summary.error_line} column={summary.error_column}: {summary.error_message}",
                err=True,
            )
        return code

    runWithReport(ctx, "decode", csv, record, execute)


if __name__ == "__main__":
    app()
