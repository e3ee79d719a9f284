"""Reader manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from results_reader.readers.base import ResultsReader

ConfigT = TypeVar("ConfigT", bound=BaseModel)


@dataclass(frozen=True, kw_only=True)
class ReaderManifest(Generic[ConfigT]):
    """Manifest describing a reader plugin.

    The manifest contains references to the configuration class and the
    reader factory function for lazy loading of readers based on their key.
    """

    config_cls: type[ConfigT]
    reader_factory: Callable[[ConfigT], ResultsReader]
