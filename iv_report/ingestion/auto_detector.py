"""Auto-detect file format and acquire measurement text."""

from pathlib import Path
from typing import Optional, Tuple, Union

from ..config import UPLOAD_CONFIG
from ..exceptions import FileUnreadableError
from .base_loader import BaseLoader
from .csv_loader import CsvLoader
from .xlsx_loader import XlsxLoader

# A batch source is a path on disk or an in-memory upload (name, bytes)
Source = Union[str, Path, Tuple[str, bytes]]


class AutoDetector:
    """Select a loader by file extension and acquire text from it."""

    @classmethod
    def loader_for(cls, file_path: Union[str, Path], data: Optional[bytes] = None) -> BaseLoader:
        """Select appropriate loader based on file extension.

        Args:
            file_path: Path to data file, or the upload's file name when
                ``data`` is given
            data: Raw bytes of an in-memory upload

        Raises:
            FileUnreadableError: for unsupported extensions or missing files
        """
        ext = Path(file_path).suffix.lower()

        if ext in UPLOAD_CONFIG["text_extensions"]:
            return CsvLoader(file_path, data)
        elif ext in UPLOAD_CONFIG["spreadsheet_extensions"]:
            return XlsxLoader(file_path, data)

        raise FileUnreadableError(Path(file_path).name, f"unsupported file extension {ext!r}")

    @classmethod
    def read_text(cls, file_path: Union[str, Path], data: Optional[bytes] = None) -> str:
        """Auto-detect format and return the file as delimited text."""
        return cls.loader_for(file_path, data).read_text()

    @staticmethod
    def source_name(source: Source) -> str:
        """Session key for a batch source: the upload name or the file name."""
        if isinstance(source, tuple):
            return source[0]
        return Path(source).name

    @classmethod
    def acquire(cls, source: Source) -> Tuple[str, str]:
        """Acquire one batch source.

        Returns:
            (name, text)
        """
        if isinstance(source, tuple):
            name, data = source
            return name, cls.read_text(name, data)
        return cls.source_name(source), cls.read_text(source)
