"""TRX reader manifest."""

from results_reader.readers.manifest import ReaderManifest
from results_reader.readers.trx.config import TrxReaderConfig
from results_reader.readers.trx.reader import TrxReader

trx_manifest = ReaderManifest(
    config_cls=TrxReaderConfig,
    reader_factory=TrxReader.from_config,
)
