"""I-V Curve Report toolkit.

Parses curve tracer I-V sweeps of photovoltaic modules and extracts
Voc, Isc and the maximum power point, measured and corrected to STC.
"""

from .analysis import Curve, Sample, analyze
from .ingestion import parse_records
from .session import BatchResult, FileFailure, Session

__version__ = "1.0.0"

__all__ = [
    "Curve",
    "Sample",
    "analyze",
    "parse_records",
    "BatchResult",
    "FileFailure",
    "Session",
]
