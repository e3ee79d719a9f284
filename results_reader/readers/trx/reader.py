"""TRX reader implementation."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

from lxml import etree

from results_reader.models.result import (
    RESULT_FORMAT_LABEL,
    Label,
    TestResult,
    TestStatus,
)
from results_reader.readers.base import ResultsReader
from results_reader.readers.trx.config import TrxReaderConfig
from results_reader.readers.trx.models import TrxUnitTest
from results_reader.visitor import ResultsVisitor
from results_reader.xml_element import XmlElement, parse_document

log = logging.getLogger(__name__)

TRX_RESULTS_FORMAT = "trx"

TEST_RUN_ELEMENT = "TestRun"
TEST_DEFINITIONS_ELEMENT = "TestDefinitions"
UNIT_TEST_ELEMENT = "UnitTest"
NAME_ATTRIBUTE = "name"
DESCRIPTION_ELEMENT = "Description"
EXECUTION_ELEMENT = "Execution"
ID_ATTRIBUTE = "id"
PROPERTIES_ELEMENT = "Properties"
PROPERTY_ELEMENT = "Property"
KEY_ELEMENT = "Key"
VALUE_ELEMENT = "Value"

RESULTS_ELEMENT = "Results"
UNIT_TEST_RESULT_ELEMENT = "UnitTestResult"
EXECUTION_ID_ATTRIBUTE = "executionId"
TEST_NAME_ATTRIBUTE = "testName"
START_TIME_ATTRIBUTE = "startTime"
END_TIME_ATTRIBUTE = "endTime"
OUTCOME_ATTRIBUTE = "outcome"
OUTPUT_ELEMENT = "Output"
ERROR_INFO_ELEMENT = "ErrorInfo"
MESSAGE_ELEMENT = "Message"
STACK_TRACE_ELEMENT = "StackTrace"

OUTCOME_TO_STATUS: Mapping[str, TestStatus] = {
    "passed": "passed",
    "failed": "failed",
}

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# .NET writes 7 fractional digits, datetime accepts at most 6
FRACTION_PATTERN = re.compile(r"\.(\d+)")


def parse_status(outcome: str | None) -> TestStatus:
    """Map a TRX outcome to a normalized status, case-insensitively."""
    if outcome is None:
        return "unknown"
    return OUTCOME_TO_STATUS.get(outcome.lower(), "unknown")


def parse_time(time: str | None) -> int | None:
    """Parse a zoned ISO-8601 timestamp into epoch seconds.

    Sub-second precision is dropped. Timestamps that cannot be parsed, or
    that carry no zone offset, are logged and yield None.
    """
    if time is None:
        return None

    normalized = FRACTION_PATTERN.sub(
        lambda match: "." + match.group(1)[:6].ljust(6, "0"), time, count=1
    )
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError as e:
        log.error("Could not parse time %s: %s", time, e)
        return None

    if parsed.tzinfo is None:
        log.error("Could not parse time %s: no zone offset", time)
        return None

    return (parsed - EPOCH) // timedelta(seconds=1)


def parse_properties(unit_test_element: XmlElement) -> dict[str, str]:
    """Read the Properties list of a UnitTest element into a mapping.

    A Property missing its Key or Value is skipped.
    """
    properties: dict[str, str] = {}
    properties_element = unit_test_element.get_first(PROPERTIES_ELEMENT)
    if properties_element is None:
        return properties

    for property_element in properties_element.get(PROPERTY_ELEMENT):
        key = property_element.get_first(KEY_ELEMENT)
        value = property_element.get_first(VALUE_ELEMENT)
        if key is not None and value is not None:
            properties[key.value] = value.value
    return properties


def parse_unit_test(unit_test_element: XmlElement) -> TrxUnitTest:
    """Build a test definition from a UnitTest element."""
    description = unit_test_element.get_first(DESCRIPTION_ELEMENT)
    execution = unit_test_element.get_first(EXECUTION_ELEMENT)
    return TrxUnitTest(
        name=unit_test_element.get_attribute(NAME_ATTRIBUTE),
        execution_id=(
            execution.get_attribute(ID_ATTRIBUTE) if execution is not None else None
        ),
        description=description.value if description is not None else None,
        parameters=parse_properties(unit_test_element),
    )


def parse_test_definitions(
    test_run_element: XmlElement,
) -> dict[str | None, TrxUnitTest]:
    """Collect test definitions keyed by execution id.

    Definitions without an execution id all land on the None key, the last
    one wins.
    """
    tests: dict[str | None, TrxUnitTest] = {}
    definitions = test_run_element.get_first(TEST_DEFINITIONS_ELEMENT)
    if definitions is None:
        return tests

    for unit_test_element in definitions.get(UNIT_TEST_ELEMENT):
        unit_test = parse_unit_test(unit_test_element)
        tests[unit_test.execution_id] = unit_test
    return tests


def get_error_info_value(unit_test_result: XmlElement, name: str) -> str | None:
    """Return the text of Output/ErrorInfo/<name>, if the whole path exists."""
    if (output := unit_test_result.get_first(OUTPUT_ELEMENT)) is None:
        return None
    if (error_info := output.get_first(ERROR_INFO_ELEMENT)) is None:
        return None
    if (element := error_info.get_first(name)) is None:
        return None
    return element.value


@dataclass(frozen=True, kw_only=True)
class TrxReader(ResultsReader):
    """Reader for TRX files written by .NET test runners.

    Test definitions are read first and kept for the duration of one file,
    then every UnitTestResult is joined to its definition through the
    execution id and emitted straight away.
    """

    config: TrxReaderConfig

    @classmethod
    def from_config(cls, config: TrxReaderConfig) -> "TrxReader":
        """Create reader from its configuration."""
        return cls(config=config)

    def read_result_file(self, visitor: ResultsVisitor, path: Path) -> None:
        """Parse the file if its name carries the configured suffix."""
        if not path.name.lower().endswith(self.config.file_suffix.lower()):
            log.debug("Skipping %s, not a %s file", path, self.config.file_suffix)
            return
        self.parse_test_run(visitor, path)

    def parse_test_run(self, visitor: ResultsVisitor, path: Path) -> None:
        """Parse a whole TRX document, logging and swallowing parse failures."""
        log.debug("Parsing file %s", path)
        try:
            test_run_element = parse_document(path, huge_tree=self.config.huge_tree)
        except (etree.XMLSyntaxError, OSError) as e:
            log.error("Could not parse file %s: %s", path, e)
            return

        if (element_name := test_run_element.name) != TEST_RUN_ELEMENT:
            log.debug(
                "%s is not a valid TRX file. Unknown root element %s",
                path,
                element_name,
            )
            return

        tests = parse_test_definitions(test_run_element)
        results_element = test_run_element.get_first(RESULTS_ELEMENT)
        if results_element is None:
            return

        for unit_test_result in results_element.get(UNIT_TEST_RESULT_ELEMENT):
            self.parse_unit_test_result(unit_test_result, tests, visitor)

    def parse_unit_test_result(
        self,
        unit_test_result: XmlElement,
        tests: Mapping[str | None, TrxUnitTest],
        visitor: ResultsVisitor,
    ) -> None:
        """Build a normalized result from a UnitTestResult and emit it."""
        execution_id = unit_test_result.get_attribute(EXECUTION_ID_ATTRIBUTE)
        start = parse_time(unit_test_result.get_attribute(START_TIME_ATTRIBUTE))
        stop = parse_time(unit_test_result.get_attribute(END_TIME_ATTRIBUTE))
        duration: int | None = None
        if start is not None and stop is not None:
            duration = max(stop - start, 0)

        unit_test = tests.get(execution_id) if execution_id is not None else None

        result = TestResult(
            name=unit_test_result.get_attribute(TEST_NAME_ATTRIBUTE),
            status=parse_status(unit_test_result.get_attribute(OUTCOME_ATTRIBUTE)),
            start=start,
            stop=stop,
            duration=duration,
            message=get_error_info_value(unit_test_result, MESSAGE_ELEMENT),
            trace=get_error_info_value(unit_test_result, STACK_TRACE_ELEMENT),
            description=unit_test.description if unit_test is not None else None,
            parameters=dict(unit_test.parameters) if unit_test is not None else {},
            labels=[Label(name=RESULT_FORMAT_LABEL, value=TRX_RESULTS_FORMAT)],
        )
        visitor.visit_test_result(result)
