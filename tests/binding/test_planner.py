from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from csvbind.domain.binding.decoder import ReadIter
from csvbind.domain.binding.planner import build_plan, find_column, lookup_key
from csvbind.domain.error_codes import ErrorCode
from csvbind.domain.exceptions import FieldTypeError, HeaderReadError, RecordTypeError
from csvbind.domain.models import DecodeKind, UInt, column
from csvbind.domain.values import BoolValue, DateValue
from csvbind.infra.sources.csv_reader import IterRowReader


@dataclass
class Person:
    first_name: str = column("First Name", default="")
    second_name: str = ""
    age: int = 0
    nickname: str = "n/a"


@dataclass
class Kinds:
    name: str = ""
    count: int = 0
    size: UInt = 0
    ratio: float = 0.0
    active: BoolValue = field(default_factory=BoolValue)
    maybe: Optional[int] = None
    born: DateValue | None = None


@dataclass
class Coded:
    code: str = column("Label", default="")


@dataclass
class WithList:
    name: str = ""
    tags: list = field(default_factory=list)


@dataclass
class WithBool:
    flag: bool = False


@dataclass
class Dynamic:
    extra: object = field(default_factory=BoolValue)


@dataclass(frozen=True)
class Frozen:
    name: str = ""


class StrValue(str):
    """str-подтип, который сам умеет разбирать текст."""

    def set(self, text: str) -> bool:
        return True


@dataclass
class WithStrValue:
    label: StrValue = field(default_factory=StrValue)


def test_plan_resolves_matching_subset_in_declaration_order():
    headers = ["Age", "Second Name", "Unknown", "FIRST NAME"]
    plan = build_plan(headers, Person())

    assert [b.name for b in plan] == ["first_name", "second_name", "age"]
    assert [b.column for b in plan] == [3, 1, 0]
    assert [b.kind for b in plan] == [DecodeKind.STRING, DecodeKind.STRING, DecodeKind.INT]


def test_plan_length_never_exceeds_declared_fields():
    plan = build_plan(["age", "age", "age"], Person())

    assert len(plan) == 1
    assert plan[0].column == 0


def test_underscores_become_spaces_in_lookup_key():
    plan = build_plan(["Second_Name", "second name"], Person())

    assert [(b.name, b.column) for b in plan] == [("second_name", 1)]
    assert plan[0].lookup_key == "second name"


def test_explicit_name_overrides_field_name():
    plan = build_plan(["Code", "Label"], Coded())

    assert len(plan) == 1
    assert plan[0].column == 1
    assert plan[0].lookup_key == "Label"


def test_lookup_key_and_find_column_helpers():
    fields = {f.name: f for f in Person.__dataclass_fields__.values()}

    assert lookup_key(fields["first_name"]) == "First Name"
    assert lookup_key(fields["second_name"]) == "second name"
    assert find_column(["a", "B", "b"], "b") == 1
    assert find_column(["a"], "z") == -1


def test_plan_classifies_every_kind():
    record = Kinds()
    headers = ["name", "count", "size", "ratio", "active", "maybe", "born"]
    plan = build_plan(headers, record)

    assert {b.name: b.kind for b in plan} == {
        "name": DecodeKind.STRING,
        "count": DecodeKind.INT,
        "size": DecodeKind.UINT,
        "ratio": DecodeKind.FLOAT,
        "active": DecodeKind.VALUE,
        "maybe": DecodeKind.INT,
        "born": DecodeKind.VALUE,
    }
    assert isinstance(record.born, DateValue)


def test_value_capability_takes_precedence_over_primitive_kind():
    plan = build_plan(["label"], WithStrValue())

    assert plan[0].kind is DecodeKind.VALUE


def test_untyped_field_holding_value_instance_is_value_kind():
    plan = build_plan(["extra"], Dynamic())

    assert plan[0].kind is DecodeKind.VALUE


def test_unsupported_type_fails_only_when_column_matches():
    assert [b.name for b in build_plan(["name"], WithList())] == ["name"]

    with pytest.raises(FieldTypeError) as excinfo:
        build_plan(["name", "tags"], WithList())
    assert excinfo.value.field == "tags"
    assert excinfo.value.code is ErrorCode.FIELD_TYPE_ERROR


def test_bool_annotation_is_not_an_integer_kind():
    with pytest.raises(FieldTypeError):
        build_plan(["flag"], WithBool())


def test_record_must_be_mutable_dataclass_instance():
    with pytest.raises(RecordTypeError):
        build_plan(["name"], {"name": ""})
    with pytest.raises(RecordTypeError):
        build_plan(["name"], Person)
    with pytest.raises(RecordTypeError):
        build_plan(["name"], Frozen())


def test_session_starts_with_clean_cursor():
    rows = ReadIter(IterRowReader([["First Name", "Age"]]), Person())

    assert rows.headers == ("First Name", "Age")
    assert rows.line == 1
    assert rows.column == 0
    assert rows.error is None


def test_empty_source_cannot_build_session():
    with pytest.raises(HeaderReadError) as excinfo:
        ReadIter(IterRowReader([]), Person())

    assert isinstance(excinfo.value.__cause__, EOFError)
    assert excinfo.value.code is ErrorCode.HEADER_READ_ERROR


def test_header_read_fault_is_propagated():
    class BrokenReader:
        def read(self):
            raise OSError("disk gone")

    with pytest.raises(HeaderReadError) as excinfo:
        ReadIter(BrokenReader(), Person())

    assert "disk gone" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, OSError)


def test_local_value_class_does_not_break_other_annotations():
    class Money:
        def __init__(self) -> None:
            self.cents = 0

        def __str__(self) -> str:
            return str(self.cents)

        def set(self, text: str) -> bool:
            self.cents = int(text)
            return True

    @dataclass
    class Row:
        age: int = 0
        price: Money = field(default_factory=Money)

    plan = build_plan(["age", "price"], Row())

    assert [(b.name, b.kind) for b in plan] == [("age", DecodeKind.INT), ("price", DecodeKind.VALUE)]


def test_unresolvable_local_type_fails_only_its_own_field():
    class Opaque:
        pass

    @dataclass
    class Row:
        age: int = 0
        blob: Opaque | None = None

    assert [b.kind for b in build_plan(["age"], Row())] == [DecodeKind.INT]
    with pytest.raises(FieldTypeError) as excinfo:
        build_plan(["age", "blob"], Row())
    assert excinfo.value.field == "blob"


def test_failed_plan_leaves_record_untouched():
    @dataclass
    class Row:
        born: DateValue | None = None
        tags: list = field(default_factory=list)

    row = Row()
    with pytest.raises(FieldTypeError):
        build_plan(["born", "tags"], row)

    assert row.born is None


def test_header_match_uses_simple_case_folding():
    @dataclass
    class Row:
        strasse: str = column("Straße", default="")

    assert build_plan(["STRASSE"], Row()) == ()
    assert [b.column for b in build_plan(["x", "STRAßE"], Row())] == [1]
    assert find_column(["ΣΟΦΙΑ"], "σοφια") == 0
