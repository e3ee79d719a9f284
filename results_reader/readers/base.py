"""Abstract base class for test report readers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from results_reader.visitor import ResultsVisitor


@dataclass(frozen=True, kw_only=True)
class ResultsReader(ABC):
    """Abstract base for report format readers.

    A reader decides on its own whether a file belongs to its format. Files
    it does not recognize, or cannot parse, are skipped without raising so
    that the caller can carry on with other files.
    """

    @abstractmethod
    def read_result_file(self, visitor: ResultsVisitor, path: Path) -> None:
        """Read a report file and pass every test result to the visitor.

        Args:
            visitor: Consumer receiving normalized results in document order
            path: Report file to read

        """
