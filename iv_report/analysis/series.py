"""Chart-ready I-V and P-V series.

Series are projections of a curve's samples, never stored separately, so
the I-V and P-V views always share the same point order.
"""

from typing import Optional, Tuple

import numpy as np
import pandas as pd
from scipy.interpolate import interp1d

from ..config import ANALYSIS_CONFIG
from .models import Curve

IV_COLUMNS = ['voltage', 'current', 'voltage_stc', 'current_stc']
PV_COLUMNS = ['voltage', 'power', 'voltage_stc', 'power_stc']


def iv_series(curve: Curve) -> pd.DataFrame:
    """I-V series: (voltage, current) and (voltage_stc, current_stc) per sample."""
    return pd.DataFrame(
        [(s.voltage, s.current, s.voltage_corrected, s.current_corrected)
         for s in curve.samples],
        columns=IV_COLUMNS,
        dtype=float,
    )


def pv_series(curve: Curve) -> pd.DataFrame:
    """P-V series: (voltage, power) and (voltage_stc, power_stc) per sample."""
    return pd.DataFrame(
        [(s.voltage, s.power, s.voltage_corrected, s.power_corrected)
         for s in curve.samples],
        columns=PV_COLUMNS,
        dtype=float,
    )


def interpolate_series(curve: Curve,
                       num_points: Optional[int] = None,
                       corrected: bool = False) -> Tuple[np.ndarray, np.ndarray]:
    """Generate a smooth I-V trace for display by interpolation.

    Samples are sorted by voltage and duplicate voltages averaged before
    interpolating, so noisy sweeps still produce a single-valued trace.

    Args:
        curve: Curve to resample
        num_points: Number of points in interpolated curve
        corrected: Use the STC-corrected pairs instead of the measured ones

    Returns:
        (voltage_interp, current_interp)

    Raises:
        ValueError: if the curve has fewer than 2 distinct voltages
    """
    if num_points is None:
        num_points = ANALYSIS_CONFIG["interpolation_points"]

    frame = iv_series(curve)
    v_col, i_col = ('voltage_stc', 'current_stc') if corrected else ('voltage', 'current')
    grouped = frame.groupby(v_col, sort=True)[i_col].mean()

    if len(grouped) < 2:
        raise ValueError(
            f"{curve.source_name}: need at least 2 distinct voltages to interpolate"
        )

    voltage = grouped.index.to_numpy(dtype=float)
    current = grouped.to_numpy(dtype=float)

    v_interp = np.linspace(voltage.min(), voltage.max(), num_points)
    f = interp1d(voltage, current, kind='linear')
    return v_interp, f(v_interp)
