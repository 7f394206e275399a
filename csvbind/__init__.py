"""
csvbind: привязка строк CSV (с заголовком) к полям пользовательской dataclass-записи.

    @dataclass
    class Person:
        first_name: str = column("First Name", default="")
        second_name: str = ""
        age: int = 0

    person = Person()
    with CsvRowReader("people.csv") as reader:
        rows = ReadIter(reader, person)
        while rows.get():
            print(person.first_name, person.second_name, person.age)
        if rows.error is not None:
            print("error", rows.line, rows.column, rows.error)

Имя колонки выводится из имени поля ("_" -> пробел) либо задаётся через column().
"""

from csvbind.domain.binding import ReadIter, build_plan, parse_float, parse_int, parse_uint, str_to_int64
from csvbind.domain.error_codes import ErrorCode
from csvbind.domain.exceptions import (
    BindError,
    ColumnOutOfRangeError,
    FieldTypeError,
    HeaderReadError,
    NotAValueError,
    NumberParseError,
    RecordTypeError,
    ValueRejectedError,
)
from csvbind.domain.models import UNSIGNED, DecodeKind, FieldBinding, UInt, column
from csvbind.domain.ports.sources import RowReader, Value
from csvbind.domain.values import BoolValue, DateValue, ListValue
from csvbind.infra.sources.csv_reader import CsvRowReader, IterRowReader

__all__ = [
    "ReadIter",
    "build_plan",
    "parse_int",
    "parse_uint",
    "parse_float",
    "str_to_int64",
    "ErrorCode",
    "BindError",
    "ColumnOutOfRangeError",
    "FieldTypeError",
    "HeaderReadError",
    "NotAValueError",
    "NumberParseError",
    "RecordTypeError",
    "ValueRejectedError",
    "DecodeKind",
    "FieldBinding",
    "UInt",
    "UNSIGNED",
    "column",
    "RowReader",
    "Value",
    "BoolValue",
    "DateValue",
    "ListValue",
    "CsvRowReader",
    "IterRowReader",
]
