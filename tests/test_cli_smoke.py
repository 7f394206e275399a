import json

import pytest
from typer.testing import CliRunner

from csvbind.cli import app

runner = CliRunner()

RECORDS_MODULE = '''
from dataclasses import dataclass, field

from csvbind import BoolValue, UInt, column


@dataclass
class Person:
    first_name: str = column("First Name", default="")
    age: int = 0
    badge: UInt = 0
    active: BoolValue = field(default_factory=BoolValue)


@dataclass
class Broken:
    age: list = field(default_factory=list)
'''


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    (tmp_path / "cli_records.py").write_text(RECORDS_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    for name in ("DELIMITER", "ENCODING", "LOG_DIR", "REPORT_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(f"CSVBIND_{name}", raising=False)
    return tmp_path


def _invoke(workdir, *args):
    base = ["--log-dir", str(workdir / "logs"), "--report-dir", str(workdir / "reports"), "--run-id", "r1"]
    return runner.invoke(app, [*base, *args])


def _csv(workdir, text):
    path = workdir / "people.csv"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_help_shows_commands():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "plan" in result.stdout
    assert "decode" in result.stdout


def test_decode_clean_file(workdir):
    csv_path = _csv(workdir, "First Name,Age,Badge,Active\nAda,,7,yes\nAlan,41,8,no\n")

    result = _invoke(workdir, "decode", "--csv", csv_path, "--record", "cli_records:Person")

    assert result.exit_code == 0, result.output
    assert "rows=2" in result.stdout

    report = json.loads((workdir / "reports" / "report_decode_r1.json").read_text(encoding="utf-8"))
    assert report["summary"]["rows_decoded"] == 2
    assert report["items"][0]["values"] == {"first_name": "Ada", "age": 0, "badge": 7, "active": "true"}
    assert (workdir / "logs" / "decode_r1.log").exists()


def test_decode_reports_fault_with_exit_code_1(workdir):
    csv_path = _csv(workdir, "First Name,Badge\nAda,1\nBob,\n")

    result = _invoke(workdir, "decode", "--csv", csv_path, "--record", "cli_records:Person")

    assert result.exit_code == 1
    assert "rows=1" in result.stdout
    assert "line=3 column=2" in result.output

    log_text = (workdir / "logs" / "decode_r1.log").read_text(encoding="utf-8")
    assert "decode failed line=3 column=2" in log_text


def test_plan_prints_bindings(workdir):
    csv_path = _csv(workdir, "age;first name\n")

    result = _invoke(workdir, "--delimiter", ";", "plan", "--csv", csv_path, "--record", "cli_records:Person")

    assert result.exit_code == 0, result.output
    assert "first_name -> 2 'first name' (string)" in result.stdout
    assert "age -> 1 'age' (int)" in result.stdout
    assert "badge -> unmatched" in result.stdout


def test_missing_csv_exits_2(workdir):
    result = _invoke(workdir, "decode", "--csv", str(workdir / "absent.csv"), "--record", "cli_records:Person")
    assert result.exit_code == 2


def test_bad_record_path_exits_2(workdir):
    csv_path = _csv(workdir, "Age\n1\n")
    result = _invoke(workdir, "decode", "--csv", csv_path, "--record", "cli_records.Person")
    assert result.exit_code == 2
    assert "module:Class" in result.output


def test_unsupported_field_type_exits_2(workdir):
    csv_path = _csv(workdir, "Age\n1\n")
    result = _invoke(workdir, "decode", "--csv", csv_path, "--record", "cli_records:Broken")
    assert result.exit_code == 2
    assert "cannot convert this type" in result.output


def test_empty_csv_exits_2(workdir):
    csv_path = _csv(workdir, "")
    result = _invoke(workdir, "plan", "--csv", csv_path, "--record", "cli_records:Person")
    assert result.exit_code == 2
    assert "cannot read header" in result.output
