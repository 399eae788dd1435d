"""Base loader class for measurement files.

Loaders only acquire text; parsing is done by ``record_parser``.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..config import UPLOAD_CONFIG
from ..exceptions import FileUnreadableError


def decode_bytes(name: str, data: bytes, encoding: Optional[str] = None) -> str:
    """Decode raw file bytes into text.

    Raises:
        FileUnreadableError: for binary content or bytes that are not
            valid in the configured encoding.
    """
    encoding = encoding or UPLOAD_CONFIG["encoding"]
    if b'\x00' in data:
        raise FileUnreadableError(name, "binary content, expected delimited text")
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise FileUnreadableError(name, f"not valid {encoding} text ({e.reason})") from e


class BaseLoader(ABC):
    """Abstract base class for data loaders.

    A loader reads from ``file_path`` or, for in-memory uploads, from
    ``data`` (``file_path`` then only supplies the name and extension).
    """

    def __init__(self, file_path: Union[str, Path], data: Optional[bytes] = None):
        self.file_path = Path(file_path)
        self.name = self.file_path.name
        self._data = data

        if data is None and not self.file_path.is_file():
            raise FileUnreadableError(self.name, "file not found")

    @abstractmethod
    def read_text(self) -> str:
        """Return the file as comma-delimited text, header line first."""
        pass

    def get_file_extension(self) -> str:
        """Get file extension."""
        return self.file_path.suffix.lower()

    def read_bytes(self) -> bytes:
        """Acquire the raw bytes, enforcing the upload size limit."""
        if self._data is not None:
            data = self._data
        else:
            try:
                data = self.file_path.read_bytes()
            except OSError as e:
                raise FileUnreadableError(self.name, e.strerror or str(e)) from e

        max_bytes = UPLOAD_CONFIG["max_file_size_mb"] * 1024 * 1024
        if len(data) > max_bytes:
            raise FileUnreadableError(
                self.name, f"file exceeds {UPLOAD_CONFIG['max_file_size_mb']} MB limit"
            )
        return data
