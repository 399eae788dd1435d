"""Session of analyzed I-V curves.

A session maps file names to curves and owns the "currently selected
curve" pointer used by charts, summary cards and report drafting.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Union

import pandas as pd

from .analysis.iv_curve import analyze
from .analysis.models import Curve
from .config import UPLOAD_CONFIG
from .exceptions import FileUnreadableError, UnknownCurveError
from .ingestion.auto_detector import AutoDetector, Source
from .ingestion.record_parser import parse_records

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    'source_name', 'points', 'irradiance', 'temperature',
    'pmax', 'vmpp', 'impp', 'voc', 'isc', 'ff',
    'pmax_stc', 'vmpp_stc', 'impp_stc', 'voc_stc', 'isc_stc', 'ff_stc',
]


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be processed in a batch."""
    name: str
    kind: str
    message: str


@dataclass
class BatchResult:
    """Outcome of a batch: accepted curve keys and per-file failures."""
    added: List[str] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def build_curve(name: str, raw_text: str) -> Curve:
    """Parse and analyze one file's text."""
    parsed = parse_records(raw_text)
    if parsed.issues:
        logger.info(
            "%s: %d rows skipped, %d cells degraded",
            name, len(parsed.skipped_rows), parsed.degraded_cells,
        )
    return analyze(name, parsed.samples, parsed.irradiance, parsed.temperature)


def _process_source(source: Source) -> Union[Curve, FileFailure]:
    name = AutoDetector.source_name(source)
    try:
        name, text = AutoDetector.acquire(source)
        return build_curve(name, text)
    except FileUnreadableError as e:
        logger.warning("%s", e)
        return FileFailure(name=name, kind="FileUnreadable", message=e.reason)
    except Exception as e:
        logger.exception("Error processing file %s", name)
        return FileFailure(name=name, kind=type(e).__name__, message=str(e))


class Session:
    """Curves keyed by source file name, plus the selected key."""

    def __init__(self):
        self._curves: Dict[str, Curve] = {}
        self._selected_key: Optional[str] = None

    @property
    def selected_key(self) -> Optional[str]:
        return self._selected_key

    def add_curve(self, curve: Curve) -> "Session":
        """Insert a curve, replacing any previous curve with the same name."""
        was_empty = not self._curves
        if curve.source_name in self._curves:
            logger.info("Replacing curve %s", curve.source_name)
        self._curves[curve.source_name] = curve
        if was_empty:
            self._selected_key = curve.source_name
        return self

    def add_file(self, name: str, raw_text: str) -> "Session":
        """Parse, analyze and insert one file's text under ``name``."""
        return self.add_curve(build_curve(name, raw_text))

    def add_upload(self, name: str, data: bytes) -> "Session":
        """Decode an in-memory upload and insert it under ``name``.

        Raises:
            FileUnreadableError: if the bytes cannot be turned into text
        """
        return self.add_file(name, AutoDetector.read_text(name, data))

    def add_batch(self, sources: Iterable[Source], max_workers: Optional[int] = None) -> BatchResult:
        """Acquire, parse and analyze several files.

        Files are processed in parallel and merged in submission order, so
        a later source with the same name wins regardless of which worker
        finishes first. Failures are reported per file and never abort the
        other files.

        Args:
            sources: Paths on disk or (name, bytes) uploads
            max_workers: Thread pool size (UPLOAD_CONFIG['max_workers'] by default)
        """
        sources = list(sources)
        result = BatchResult()
        if not sources:
            return result

        with ThreadPoolExecutor(max_workers=max_workers or UPLOAD_CONFIG["max_workers"]) as pool:
            outcomes = list(pool.map(_process_source, sources))

        for outcome in outcomes:
            if isinstance(outcome, FileFailure):
                result.failures.append(outcome)
            else:
                self.add_curve(outcome)
                result.added.append(outcome.source_name)

        logger.info(
            "Batch of %d files: %d curves added, %d failed",
            len(sources), len(result.added), len(result.failures),
        )
        return result

    def select(self, key: str) -> Curve:
        """Select a curve by key and return it.

        Raises:
            UnknownCurveError: if ``key`` is not in the session
        """
        if key not in self._curves:
            raise UnknownCurveError(key)
        self._selected_key = key
        return self._curves[key]

    def current(self) -> Optional[Curve]:
        """The selected curve, or None for an empty session."""
        if self._selected_key is None:
            return None
        return self._curves.get(self._selected_key)

    def keys(self) -> List[str]:
        return list(self._curves)

    def curves(self) -> List[Curve]:
        return list(self._curves.values())

    def summary_frame(self) -> pd.DataFrame:
        """One row of named parameters per curve, in insertion order."""
        return pd.DataFrame(
            [curve.parameters() for curve in self._curves.values()],
            columns=SUMMARY_COLUMNS,
        )

    def __len__(self) -> int:
        return len(self._curves)

    def __contains__(self, key: str) -> bool:
        return key in self._curves

    def __iter__(self) -> Iterator[str]:
        return iter(self._curves)
