"""I-V Curve Analysis Module.

Extracts key performance parameters from a sequence of samples, in the
measured domain and in the STC-corrected domain.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from ..config import ANALYSIS_CONFIG
from .models import Curve, Sample

logger = logging.getLogger(__name__)


class IVCurveAnalyzer:
    """Analyze I-V samples and extract performance parameters."""

    def __init__(self, samples: Iterable[Sample]):
        """Initialize with I-V samples.

        Args:
            samples: Samples in sweep order. Order is kept as given
                (no sorting) so ties resolve to the first occurrence.
        """
        self.samples: Tuple[Sample, ...] = tuple(samples)

        self.voltage = np.array([s.voltage for s in self.samples], dtype=float)
        self.current = np.array([s.current for s in self.samples], dtype=float)
        self.voltage_stc = np.array([s.voltage_corrected for s in self.samples], dtype=float)
        self.current_stc = np.array([s.current_corrected for s in self.samples], dtype=float)

        # Results storage
        self.results: Dict[str, float] = {}

    def extract_parameters(self) -> Dict[str, float]:
        """Extract all I-V curve parameters.

        Returns:
            Dictionary containing:
                - isc, voc: Short-circuit current (A), open-circuit voltage (V)
                - pmax, vmpp, impp: Measured maximum power point
                - isc_stc, voc_stc, pmax_stc, vmpp_stc, impp_stc: Same, corrected domain
                - ff, ff_stc: Fill factors
        """
        self.results['isc'] = self._find_isc(self.current)
        self.results['voc'] = self._find_voc(self.voltage)
        self.results['isc_stc'] = self._find_isc(self.current_stc)
        self.results['voc_stc'] = self._find_voc(self.voltage_stc)

        vmpp, impp, pmax = self._find_mpp(self.voltage, self.current)
        self.results['vmpp'] = vmpp
        self.results['impp'] = impp
        self.results['pmax'] = pmax

        vmpp, impp, pmax = self._find_mpp(self.voltage_stc, self.current_stc)
        self.results['vmpp_stc'] = vmpp
        self.results['impp_stc'] = impp
        self.results['pmax_stc'] = pmax

        self.results['ff'] = self._calculate_fill_factor(
            self.results['pmax'], self.results['voc'], self.results['isc'])
        self.results['ff_stc'] = self._calculate_fill_factor(
            self.results['pmax_stc'], self.results['voc_stc'], self.results['isc_stc'])

        return self.results

    @staticmethod
    def _find_isc(current: np.ndarray) -> float:
        """Short-circuit current: the largest current on the sweep."""
        if current.size == 0:
            return 0.0
        return float(current.max())

    @staticmethod
    def _find_voc(voltage: np.ndarray) -> float:
        """Open-circuit voltage: the largest voltage on the sweep."""
        if voltage.size == 0:
            return 0.0
        return float(voltage.max())

    @staticmethod
    def _find_mpp(voltage: np.ndarray, current: np.ndarray) -> Tuple[float, float, float]:
        """Find the maximum power point among the measured samples.

        Returns:
            (vmpp, impp, pmax)
        """
        if voltage.size == 0:
            return 0.0, 0.0, 0.0

        power = voltage * current

        # argmax returns the first index on ties
        idx_max = int(np.argmax(power))
        return float(voltage[idx_max]), float(current[idx_max]), float(power[idx_max])

    @staticmethod
    def _calculate_fill_factor(pmax: float, voc: float, isc: float) -> float:
        """Calculate fill factor.

        FF = Pmax / (Voc * Isc)
        """
        if voc > 0 and isc > 0 and pmax > 0:
            ff = pmax / (voc * isc)
            return min(ff, 1.0)  # FF should not exceed 1.0

        return 0.0

    def to_curve(self,
                 source_name: str,
                 irradiance: Optional[float] = None,
                 temperature: Optional[float] = None) -> Curve:
        """Build the immutable Curve for these samples.

        Args:
            source_name: Originating file name (session key)
            irradiance: Irradiance in W/m² (STC default when None)
            temperature: Temperature in °C (STC default when None)
        """
        if not self.results:
            self.extract_parameters()

        if irradiance is None:
            irradiance = ANALYSIS_CONFIG["default_stc_irradiance"]
        if temperature is None:
            temperature = ANALYSIS_CONFIG["default_stc_temperature"]

        r = self.results
        return Curve(
            source_name=source_name,
            samples=self.samples,
            irradiance=float(irradiance),
            temperature=float(temperature),
            measured_max_power=r['pmax'],
            v_at_max_power=r['vmpp'],
            i_at_max_power=r['impp'],
            corrected_max_power=r['pmax_stc'],
            v_at_corrected_max_power=r['vmpp_stc'],
            i_at_corrected_max_power=r['impp_stc'],
            open_circuit_voltage=r['voc'],
            short_circuit_current=r['isc'],
            corrected_open_circuit_voltage=r['voc_stc'],
            corrected_short_circuit_current=r['isc_stc'],
            fill_factor=r['ff'],
            corrected_fill_factor=r['ff_stc'],
        )


def analyze(source_name: str,
            samples: Iterable[Sample],
            irradiance: Optional[float] = None,
            temperature: Optional[float] = None) -> Curve:
    """Analyze one file's samples into a Curve."""
    curve = IVCurveAnalyzer(samples).to_curve(source_name, irradiance, temperature)
    if curve.is_empty:
        logger.warning("%s: no valid samples, all parameters reported as 0", source_name)
    return curve


def summary(curve: Curve) -> str:
    """Generate a plain-text summary of a curve's parameters."""
    return f"""
I-V Curve Analysis Results: {curve.source_name}
========================

Irradiance:   {curve.irradiance:.0f} W/m²
Temperature:  {curve.temperature:.1f} °C
Points:       {curve.point_count}

                              Measured     STC
Short-Circuit Current (Isc):  {curve.short_circuit_current:8.3f}  {curve.corrected_short_circuit_current:8.3f}  A
Open-Circuit Voltage (Voc):   {curve.open_circuit_voltage:8.3f}  {curve.corrected_open_circuit_voltage:8.3f}  V

Maximum Power Point:
  Voltage (Vmpp):             {curve.v_at_max_power:8.3f}  {curve.v_at_corrected_max_power:8.3f}  V
  Current (Impp):             {curve.i_at_max_power:8.3f}  {curve.i_at_corrected_max_power:8.3f}  A
  Power (Pmax):               {curve.measured_max_power:8.3f}  {curve.corrected_max_power:8.3f}  W

Fill Factor (FF):             {curve.fill_factor:8.4f}  {curve.corrected_fill_factor:8.4f}
"""
