"""I-V Curve Analysis Module.

Modules:
- models: Sample and Curve value objects
- iv_curve: Parameter extraction (Isc, Voc, Pmax, Vmpp, Impp, FF), measured and STC
- series: Chart-ready I-V and P-V series
"""

from .models import Sample, Curve
from .iv_curve import IVCurveAnalyzer, analyze, summary
from .series import iv_series, pv_series, interpolate_series

__all__ = [
    "Sample",
    "Curve",
    "IVCurveAnalyzer",
    "analyze",
    "summary",
    "iv_series",
    "pv_series",
    "interpolate_series",
]
