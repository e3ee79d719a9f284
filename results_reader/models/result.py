"""Models for normalized test results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

TestStatus = Literal["passed", "failed", "unknown"]

RESULT_FORMAT_LABEL = "resultFormat"


@dataclass(frozen=True, kw_only=True)
class Label:
    """Name/value pair attached to a test result."""

    name: str
    value: str


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Normalized result of a single test execution.

    Independent of the report format it was read from. Times are epoch
    seconds; duration is only set when both start and stop are known.
    """

    __test__ = False

    name: str | None = None
    status: TestStatus = "unknown"
    start: int | None = None
    stop: int | None = None
    duration: int | None = None
    message: str | None = None
    trace: str | None = None
    description: str | None = None
    parameters: Mapping[str, str] = field(default_factory=dict)
    labels: Sequence[Label] = ()

    def get_label(self, name: str) -> str | None:
        """Return the value of the first label with the given name."""
        return next((label.value for label in self.labels if label.name == name), None)
