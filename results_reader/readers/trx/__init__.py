"""TRX (Visual Studio test results) reader module."""

from results_reader.readers.trx.config import TrxReaderConfig
from results_reader.readers.trx.manifest import trx_manifest
from results_reader.readers.trx.reader import TrxReader

__all__ = ["TrxReader", "TrxReaderConfig", "trx_manifest"]
