"""Data Ingestion Module for curve tracer I-V data.

File Formats:
- CSV / TXT (comma separated): parsed directly
- XLSX/XLS (Excel): flattened to comma-delimited text first

Features:
- Positional record parsing with lenient numeric handling
- Per-file irradiance and temperature overrides
- Extension-based loader selection for paths and in-memory uploads
"""

from .record_parser import ParseResult, parse_records
from .base_loader import BaseLoader, decode_bytes
from .csv_loader import CsvLoader
from .xlsx_loader import XlsxLoader
from .auto_detector import AutoDetector

__all__ = [
    "ParseResult",
    "parse_records",
    "BaseLoader",
    "decode_bytes",
    "CsvLoader",
    "XlsxLoader",
    "AutoDetector",
]
