"""Loader for delimited text files (.csv, .txt)."""

from .base_loader import BaseLoader, decode_bytes


class CsvLoader(BaseLoader):
    """Load comma-delimited exports from curve tracers."""

    def read_text(self) -> str:
        return decode_bytes(self.name, self.read_bytes())
