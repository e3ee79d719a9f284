"""Fixtures for integration tests reading reports from disk."""

from pathlib import Path
from typing import Protocol

import pytest


class WriteReportFn(Protocol):
    """Write a report file below the reports directory."""

    def __call__(self, name: str, content: str) -> Path:
        """Write content to name and return the path."""
        ...


@pytest.fixture
def reports_dir(tmp_path: Path) -> Path:
    """Create an empty directory for report files."""
    reports = tmp_path / "reports"
    reports.mkdir()
    return reports


@pytest.fixture
def write_report(reports_dir: Path) -> WriteReportFn:
    """Return a helper writing report files."""

    def _write(name: str, content: str) -> Path:
        path = reports_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
