"""Processor reading many report files with a single reader."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from results_reader.models.result import TestResult
from results_reader.readers.base import ResultsReader
from results_reader.visitor import CollectingVisitor

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class FileResults:
    """Result container for a single report file."""

    path: Path
    results: Sequence[TestResult]
    error: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResultsProcessor:
    """Reads report files concurrently, one worker thread per file."""

    reader: ResultsReader

    async def read_files(self, paths: Sequence[Path]) -> Sequence[FileResults]:
        """Read all files and return their results in input order.

        Args:
            paths: Report files to read

        Returns:
            List of file results, one per path

        """
        if not paths:
            log.info("No files provided")
            return []

        log.info("Reading %d file(s)...", len(paths))
        tasks = [asyncio.to_thread(self._read_file, path) for path in paths]

        results = await asyncio.gather(*tasks, return_exceptions=True)
        log.info("Reading completed")

        return self._process_results(paths, results)

    def _process_results(
        self,
        paths: Sequence[Path],
        results: Sequence[FileResults | BaseException],
    ) -> Sequence[FileResults]:
        """Process results from file reading, handling exceptions."""
        final_results: list[FileResults] = []

        for path, result in zip(paths, results, strict=True):
            if isinstance(result, FileResults):
                log.info("Read %d result(s) from %s", len(result.results), path)
                final_results.append(result)
            elif isinstance(result, Exception):
                log.error("Reading %s failed: %s", path, result, exc_info=result)
                final_results.append(
                    FileResults(path=path, results=[], error=str(result))
                )
            else:
                raise result

        return final_results

    def _read_file(self, path: Path) -> FileResults:
        """Read a single file into memory."""
        visitor = CollectingVisitor()
        self.reader.read_result_file(visitor, path)
        return FileResults(path=path, results=visitor.results)
