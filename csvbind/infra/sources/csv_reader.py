from __future__ import annotations

import csv
from typing import IO, Iterable, Iterator, Sequence


class IterRowReader:
    """
    Назначение/ответственность:
        Адаптер любого итерируемого набора строк (в т.ч. csv.reader) к RowReader:
        исчерпание итератора превращается в EOFError.
    """

    def __init__(self, rows: Iterable[Sequence[str]]) -> None:
        self._rows: Iterator[Sequence[str]] = iter(rows)

    def read(self) -> Sequence[str]:
        try:
            return next(self._rows)
        except StopIteration:
            raise EOFError("end of input") from None


class CsvRowReader(IterRowReader):
    """
    Назначение/ответственность:
        RowReader поверх CSV-файла. Открывает файл сам, закрывается через close()
        или контекстный менеджер.

    Входные данные:
        path: str
        delimiter: str
            Один символ.
        encoding: str
            По умолчанию utf-8-sig (BOM в первой колонке заголовка отбрасывается).
    """

    def __init__(self, path: str, delimiter: str = ",", encoding: str = "utf-8-sig") -> None:
        self.path = path
        self._file: IO[str] = open(path, "r", encoding=encoding, newline="")
        super().__init__(csv.reader(self._file, delimiter=delimiter))

    def read(self) -> Sequence[str]:
        row = super().read()
        # пустые строки csv.reader отдаёт как []
        while not row:
            row = super().read()
        return row

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "CsvRowReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["CsvRowReader", "IterRowReader"]
