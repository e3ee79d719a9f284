"""Loading of readers from entry points."""

from importlib.metadata import entry_points
from typing import Any

from results_reader.readers.manifest import ReaderManifest

ENTRY_POINT_GROUP = "results_reader.readers"


class ReaderNotFoundError(Exception):
    """Raised when a reader is not found."""


def load_reader_manifest(key: str) -> ReaderManifest[Any]:
    """Load a reader manifest by key.

    Args:
        key: The reader key as registered in pyproject.toml (e.g., "trx")

    Returns:
        The reader manifest instance

    Raises:
        ReaderNotFoundError: If no reader with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: ReaderManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise ReaderNotFoundError(
        f"Reader '{key}' not found. Available readers: {available}"
    )
