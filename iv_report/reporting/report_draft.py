"""Report draft handed to a document rendering collaborator.

The draft gathers plant data, datasheet values and the per-curve results
of a session in a stable, named structure. Rendering to PDF/DOCX happens
outside this package.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from ..config import REPORT_CONFIG
from ..exceptions import IncompleteReportError
from ..session import SUMMARY_COLUMNS, Session
from .plant import ModuleNameplate, PlantData, plant_nominal_power, string_nominal_power

logger = logging.getLogger(__name__)

RESULT_COLUMNS = SUMMARY_COLUMNS + ['pmax_deviation_pct', 'selected']


def pmax_deviation(pmax_stc: float, nameplate: Optional[ModuleNameplate]) -> Optional[float]:
    """Deviation of STC-corrected Pmax from the datasheet Pmax, in percent."""
    if nameplate is None or not nameplate.pmax or nameplate.pmax <= 0:
        return None
    return (pmax_stc / nameplate.pmax - 1) * 100


@dataclass(frozen=True)
class ReportDraft:
    """Everything a rendered I-V test report needs, in named fields."""
    title: str
    company_name: str
    report_date: date
    plant: PlantData
    nameplate: Optional[ModuleNameplate]
    datasheet_name: Optional[str]
    selected_key: Optional[str]
    results: Tuple[Dict[str, Any], ...]
    sections: Tuple[str, ...]

    @classmethod
    def build(cls,
              plant: PlantData,
              session: Session,
              nameplate: Optional[ModuleNameplate] = None,
              datasheet_name: Optional[str] = None,
              report_date: Optional[date] = None) -> "ReportDraft":
        """Assemble a draft from plant data and an analyzed session.

        Raises:
            IncompleteReportError: if plant data is incomplete, the session
                has no curves, or (when REPORT_CONFIG['require_datasheet'])
                no datasheet was supplied
        """
        missing = [f"plant.{name}" for name in plant.missing_fields()]
        has_datasheet = bool(datasheet_name) or (nameplate is not None and not nameplate.is_blank())
        if REPORT_CONFIG["require_datasheet"] and not has_datasheet:
            missing.append("datasheet")
        if len(session) == 0:
            missing.append("curves")
        if missing:
            raise IncompleteReportError(missing)

        results = []
        for curve in session.curves():
            row = curve.parameters()
            row['pmax_deviation_pct'] = pmax_deviation(curve.corrected_max_power, nameplate)
            row['selected'] = curve.source_name == session.selected_key
            results.append(row)

        logger.info("Report draft for %s with %d curves", plant.name, len(results))
        return cls(
            title=REPORT_CONFIG["title"],
            company_name=REPORT_CONFIG["company_name"],
            report_date=report_date or date.today(),
            plant=plant,
            nameplate=nameplate,
            datasheet_name=datasheet_name,
            selected_key=session.selected_key,
            results=tuple(results),
            sections=tuple(REPORT_CONFIG["sections"]),
        )

    @property
    def source_files(self) -> Tuple[str, ...]:
        return tuple(row['source_name'] for row in self.results)

    def results_frame(self) -> pd.DataFrame:
        """Per-curve results table."""
        return pd.DataFrame(list(self.results), columns=RESULT_COLUMNS)

    def to_dict(self) -> Dict[str, Any]:
        """Plain nested dict for a rendering collaborator."""
        return {
            'title': self.title,
            'company_name': self.company_name,
            'report_date': self.report_date.isoformat(),
            'plant': {
                **asdict(self.plant),
                'string_nominal_power': string_nominal_power(self.plant),
                'plant_nominal_power': plant_nominal_power(self.plant),
            },
            'datasheet': {
                'file_name': self.datasheet_name,
                **(asdict(self.nameplate) if self.nameplate else {}),
            },
            'source_files': list(self.source_files),
            'selected_key': self.selected_key,
            'results': [dict(row) for row in self.results],
            'sections': list(self.sections),
        }
