"""Integration tests reading real report files through the CLI run loop."""

import json
import logging
from pathlib import Path

import pytest

from results_reader.cli import run
from results_reader.testing.trx.payloads import (
    error_info,
    trx_document,
    unit_test,
    unit_test_result,
)

from .conftest import WriteReportFn


async def test_reads_directory_of_reports(
    reports_dir: Path,
    write_report: WriteReportFn,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Reads every TRX file, skipping broken and foreign files."""
    write_report(
        "unit/results.trx",
        trx_document(
            definitions=[
                unit_test(
                    name="Tests.Login.Works",
                    execution_id="E1",
                    description="Logs in",
                    parameters={"Browser": "chrome"},
                ),
                unit_test(name="Tests.Login.Fails", execution_id="E2"),
            ],
            results=[
                unit_test_result(
                    execution_id="E1",
                    test_name="Tests.Login.Works",
                    start_time="2024-01-01T00:00:00.1234567+00:00",
                    end_time="2024-01-01T00:00:02.9876543+00:00",
                ),
                unit_test_result(
                    execution_id="E2",
                    test_name="Tests.Login.Fails",
                    outcome="Failed",
                    output=error_info(message="Expected 200", stack_trace="at Login"),
                ),
                unit_test_result(
                    execution_id="E3",
                    test_name="Tests.Login.Skipped",
                    outcome="NotExecuted",
                    start_time=None,
                    end_time=None,
                ),
            ],
        ),
    )
    write_report("broken.trx", "<TestRun><Results>")
    write_report("junit.trx", "<testsuites><testsuite name='x' /></testsuites>")
    write_report("notes.txt", "not a report")

    with caplog.at_level(logging.INFO):
        exit_code = await run(
            reader_key="trx",
            reader_config_json="{}",
            paths=[reports_dir],
        )

    output = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert output["total"] == 3
    assert output["passed"] == 1
    assert output["failed"] == 1
    assert output["unknown"] == 1
    assert output["errors"] == 0

    works, fails, skipped = output["results"]
    assert works == {
        "file": str(reports_dir / "unit" / "results.trx"),
        "name": "Tests.Login.Works",
        "status": "passed",
        "start": 1704067200,
        "stop": 1704067202,
        "duration": 2,
        "message": None,
        "trace": None,
        "description": "Logs in",
        "parameters": {"Browser": "chrome"},
        "labels": [{"name": "resultFormat", "value": "trx"}],
    }
    assert fails["message"] == "Expected 200"
    assert fails["trace"] == "at Login"
    assert fails["parameters"] == {}
    assert skipped["duration"] is None
    assert "Could not parse file" in caplog.text


async def test_reads_documented_example(
    write_report: WriteReportFn,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """A single passing execution yields one passed result."""
    path = write_report(
        "example.trx",
        "<TestRun>"
        '<TestDefinitions><UnitTest name="T1"><Execution id="E1"/></UnitTest>'
        "</TestDefinitions>"
        '<Results><UnitTestResult executionId="E1" testName="T1" outcome="Passed"'
        ' startTime="2024-01-01T00:00:00Z" endTime="2024-01-01T00:00:05Z"/>'
        "</Results></TestRun>",
    )

    exit_code = await run(reader_key="trx", reader_config_json="{}", paths=[path])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    [result] = output["results"]
    assert result["name"] == "T1"
    assert result["status"] == "passed"
    assert result["duration"] == 5
    assert result["parameters"] == {}
    assert result["description"] is None
