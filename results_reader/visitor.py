"""Consumers of normalized test results."""

from dataclasses import dataclass, field
from typing import Protocol

from results_reader.models.result import TestResult


class ResultsVisitor(Protocol):
    """Receives normalized results one at a time, in emission order."""

    def visit_test_result(self, result: TestResult) -> None:
        """Accept a single test result."""
        ...


@dataclass(kw_only=True)
class CollectingVisitor:
    """Visitor keeping every visited result in memory."""

    results: list[TestResult] = field(default_factory=list)

    def visit_test_result(self, result: TestResult) -> None:
        """Append the result to the collected list."""
        self.results.append(result)
