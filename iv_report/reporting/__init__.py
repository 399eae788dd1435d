"""Reporting inputs for I-V test reports.

Builds the named structure consumed by PDF/Word renderers:
- plant: installation data and module datasheet values
- report_draft: per-curve results, comparison with the datasheet, sections
"""

from .plant import PlantData, ModuleNameplate, string_nominal_power, plant_nominal_power
from .report_draft import ReportDraft, pmax_deviation

__all__ = [
    'PlantData',
    'ModuleNameplate',
    'string_nominal_power',
    'plant_nominal_power',
    'ReportDraft',
    'pmax_deviation',
]
