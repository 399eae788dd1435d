"""Parser for curve tracer I-V records (comma-delimited text).

Row layout (positional, the first line is always a header)::

    voltage, current, voltage_corrected, current_corrected[, irradiance[, temperature]]

Malformed rows are skipped and malformed numbers degrade to 0; both are
recovered here and reported as diagnostics on the result.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ..analysis.models import Sample
from ..config import ANALYSIS_CONFIG, UPLOAD_CONFIG
from ..exceptions import MalformedNumber, MalformedRow

logger = logging.getLogger(__name__)

COLUMNS = [
    'voltage',
    'current',
    'voltage_corrected',
    'current_corrected',
    'irradiance',
    'temperature',
]
SAMPLE_COLUMNS = COLUMNS[:4]
CORRECTED_COLUMNS = ('voltage_corrected', 'current_corrected')

_LINE_BREAK = re.compile(r'\r\n|\r|\n')

ParseIssue = Union[MalformedRow, MalformedNumber]


@dataclass(frozen=True)
class ParseResult:
    """Samples in file row order plus the file's environment overrides."""
    samples: Tuple[Sample, ...]
    irradiance: Optional[float] = None  # W/m², last numeric value in the file
    temperature: Optional[float] = None  # °C, last numeric value in the file
    issues: Tuple[ParseIssue, ...] = ()

    @property
    def skipped_rows(self) -> Tuple[int, ...]:
        return tuple(i.line_no for i in self.issues if isinstance(i, MalformedRow))

    @property
    def degraded_cells(self) -> int:
        return sum(1 for i in self.issues if isinstance(i, MalformedNumber))


def split_fields(line: str, line_no: int, delimiter: str) -> List[str]:
    """Split one data row into trimmed fields.

    Raises:
        MalformedRow: if the row is blank or has too few fields.
    """
    if not line.strip():
        raise MalformedRow(line_no, "blank row")

    fields = [f.strip() for f in line.split(delimiter)]
    min_fields = ANALYSIS_CONFIG["min_fields_per_row"]
    if len(fields) < min_fields:
        raise MalformedRow(line_no, f"{len(fields)} fields, need at least {min_fields}")

    # Columns past the temperature are ignored
    fields = fields[:len(COLUMNS)]
    return fields + [None] * (len(COLUMNS) - len(fields))


def _last_valid(column: pd.Series) -> Optional[float]:
    """Value of the last numeric cell in the column (later rows override earlier ones)."""
    idx = column.last_valid_index()
    if idx is None:
        return None
    return float(column[idx])


def parse_records(text: str, delimiter: Optional[str] = None) -> ParseResult:
    """Parse curve tracer text into samples.

    Args:
        text: Full file content; the first line is discarded as a header
        delimiter: Field delimiter (defaults to UPLOAD_CONFIG['delimiter'])

    Returns:
        ParseResult with samples in row order. Irradiance and temperature
        are None when no row carries a numeric value for them.
    """
    delimiter = delimiter or UPLOAD_CONFIG["delimiter"]
    lines = _LINE_BREAK.split(text)

    rows = []
    line_numbers = []
    issues: List[ParseIssue] = []
    for line_no, line in enumerate(lines[1:], start=2):
        try:
            rows.append(split_fields(line, line_no, delimiter))
            line_numbers.append(line_no)
        except MalformedRow as e:
            issues.append(e)

    if not rows:
        logger.debug("No data rows found (%d lines)", len(lines))
        return ParseResult(samples=(), issues=tuple(issues))

    table = pd.DataFrame(rows, columns=COLUMNS)
    numeric = table.apply(pd.to_numeric, errors='coerce').astype(float)
    # nan/inf cells count as non-numeric
    numeric = numeric.where(np.isfinite(numeric))

    for column in SAMPLE_COLUMNS:
        bad = numeric[column].isna()
        if column in CORRECTED_COLUMNS:
            # Empty corrected cells fall back to the measured value silently
            bad &= table[column] != ''
        for pos in np.flatnonzero(bad.to_numpy()):
            issues.append(MalformedNumber(line_numbers[pos], column, table[column].iat[pos]))

    voltage = numeric['voltage'].fillna(0.0)
    current = numeric['current'].fillna(0.0)
    voltage_corrected = numeric['voltage_corrected'].fillna(voltage)
    current_corrected = numeric['current_corrected'].fillna(current)

    samples = tuple(
        Sample(v, i, vc, ic)
        for v, i, vc, ic in zip(
            voltage.tolist(),
            current.tolist(),
            voltage_corrected.tolist(),
            current_corrected.tolist(),
        )
    )

    issues.sort(key=lambda issue: issue.line_no)
    result = ParseResult(
        samples=samples,
        irradiance=_last_valid(numeric['irradiance']),
        temperature=_last_valid(numeric['temperature']),
        issues=tuple(issues),
    )

    if result.issues:
        logger.debug(
            "Parsed %d samples; skipped %d rows, degraded %d cells",
            len(samples), len(result.skipped_rows), result.degraded_cells,
        )
    return result
