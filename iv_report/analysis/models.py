"""Value objects for I-V measurement data."""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Sample:
    """One measured point on an I-V sweep.

    Corrected values are the STC-translated pair reported by the
    curve tracer; they equal the measured values when the file carries
    no correction columns.
    """
    voltage: float  # V
    current: float  # A
    voltage_corrected: float  # V at STC
    current_corrected: float  # A at STC

    @property
    def power(self) -> float:
        return self.voltage * self.current

    @property
    def power_corrected(self) -> float:
        return self.voltage_corrected * self.current_corrected


@dataclass(frozen=True)
class Curve:
    """Analysis result for one measurement file.

    Built by ``IVCurveAnalyzer``; every derived field is computed once
    from ``samples``. Empty curves report all derived values as 0.
    """
    source_name: str
    samples: Tuple[Sample, ...] = field(repr=False)
    irradiance: float  # W/m²
    temperature: float  # °C

    # Measured maximum power point
    measured_max_power: float
    v_at_max_power: float
    i_at_max_power: float

    # Corrected maximum power point (may be a different sample)
    corrected_max_power: float
    v_at_corrected_max_power: float
    i_at_corrected_max_power: float

    open_circuit_voltage: float
    short_circuit_current: float
    corrected_open_circuit_voltage: float
    corrected_short_circuit_current: float

    fill_factor: float
    corrected_fill_factor: float

    @property
    def point_count(self) -> int:
        return len(self.samples)

    @property
    def is_empty(self) -> bool:
        return not self.samples

    def parameters(self) -> dict:
        """Named scalar results, for summary cards and report rows."""
        return {
            'source_name': self.source_name,
            'points': self.point_count,
            'irradiance': self.irradiance,
            'temperature': self.temperature,
            'pmax': self.measured_max_power,
            'vmpp': self.v_at_max_power,
            'impp': self.i_at_max_power,
            'voc': self.open_circuit_voltage,
            'isc': self.short_circuit_current,
            'ff': self.fill_factor,
            'pmax_stc': self.corrected_max_power,
            'vmpp_stc': self.v_at_corrected_max_power,
            'impp_stc': self.i_at_corrected_max_power,
            'voc_stc': self.corrected_open_circuit_voltage,
            'isc_stc': self.corrected_short_circuit_current,
            'ff_stc': self.corrected_fill_factor,
        }
