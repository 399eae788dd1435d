"""Plant and module metadata supplied alongside the measurements."""

import logging
from dataclasses import asdict, dataclass
from typing import Any, List, Mapping, Optional

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlantData:
    """Installation data entered by the user."""
    name: str = ""
    inverter_count: int = 0
    modules_per_string: int = 0
    nominal_power: float = 0.0  # Wp per module

    def missing_fields(self) -> List[str]:
        """Names of fields that are empty or not positive."""
        missing = []
        if not self.name.strip():
            missing.append("name")
        if self.inverter_count <= 0:
            missing.append("inverter_count")
        if self.modules_per_string <= 0:
            missing.append("modules_per_string")
        if self.nominal_power <= 0:
            missing.append("nominal_power")
        return missing

    def is_complete(self) -> bool:
        return not self.missing_fields()


def string_nominal_power(plant: PlantData) -> float:
    """Nominal DC power of one string (W)."""
    return plant.modules_per_string * plant.nominal_power


def plant_nominal_power(plant: PlantData) -> float:
    """Nominal DC power of the plant (W), one string per inverter."""
    return plant.inverter_count * string_nominal_power(plant)


@dataclass(frozen=True)
class ModuleNameplate:
    """Module datasheet values at STC.

    Values are supplied by an external datasheet reader or typed in by
    the user; this package never reads PDF content.
    """
    manufacturer: str = ""
    model: str = ""
    pmax: Optional[float] = None  # W
    voc: Optional[float] = None  # V
    isc: Optional[float] = None  # A
    vmp: Optional[float] = None  # V
    imp: Optional[float] = None  # A

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ModuleNameplate":
        """Build from loosely typed key/value pairs.

        Unknown keys are ignored; electrical values that are not numbers
        are left unset.
        """
        electrical = {}
        for key in ('pmax', 'voc', 'isc', 'vmp', 'imp'):
            raw = values.get(key)
            if isinstance(raw, str):
                raw = raw.strip()
            if raw is None or raw == "":
                continue
            value = pd.to_numeric(raw, errors='coerce')
            if pd.notna(value):
                electrical[key] = float(value)
            else:
                logger.warning("Ignoring non-numeric nameplate %s=%r", key, raw)

        return cls(
            manufacturer=str(values.get('manufacturer') or ""),
            model=str(values.get('model') or ""),
            **electrical,
        )

    def is_blank(self) -> bool:
        """True when no datasheet value has been supplied."""
        return not any(asdict(self).values())
