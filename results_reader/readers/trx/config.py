"""Configuration for the TRX reader."""

from pydantic import BaseModel


class TrxReaderConfig(BaseModel):
    """Configuration for the TRX reader.

    - file_suffix: only files ending with this suffix are parsed
    - huge_tree: lift lxml's safety limits for very large reports
    """

    file_suffix: str = ".trx"
    huge_tree: bool = False
