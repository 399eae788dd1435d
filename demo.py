#!/usr/bin/env python3
"""Demo script for the I-V Curve Report toolkit.

Demonstrates:
1. Building a curve tracer CSV export
2. Parsing and parameter extraction into a session
3. Drafting report inputs
"""

import numpy as np

from iv_report.analysis import summary
from iv_report.config import configure_logging
from iv_report.reporting import ModuleNameplate, PlantData, ReportDraft
from iv_report.session import Session


def generate_sample_csv(irradiance: float = 800.0, temperature: float = 30.0) -> str:
    """Generate a sample curve tracer export with STC-corrected columns."""
    # Typical c-Si module
    voltage = np.linspace(0, 55, 100)
    v_oc = 52.0
    i_sc = 12.5

    # Simplified I-V characteristic
    current = i_sc * (1 - (voltage / v_oc)**3) * np.exp(-voltage / (v_oc * 0.6))
    current = np.maximum(current, 0)  # No negative current

    # Irradiance-only translation, enough for a demo
    current_stc = current * 1000.0 / irradiance
    voltage_stc = voltage + 0.15 * (temperature - 25.0)

    lines = ["Voltage (V),Current (A),Voltage STC (V),Current STC (A),Irradiance (W/m2),Temperature (C)"]
    for v, i, vs, cs in zip(voltage, current, voltage_stc, current_stc):
        lines.append(f"{v:.4f},{i:.4f},{vs:.4f},{cs:.4f},{irradiance:.1f},{temperature:.1f}")
    return "\n".join(lines) + "\n"


def main():
    configure_logging()

    print("=" * 70)
    print("I-V Curve Report Toolkit - Demo")
    print("=" * 70)

    session = Session()
    session.add_file("string_01.csv", generate_sample_csv(800.0, 30.0))
    session.add_file("string_02.csv", generate_sample_csv(950.0, 41.0))
    session.add_file("empty.csv", "Voltage,Current\n1,2,3\n")

    for key in session:
        print(summary(session.select(key)))

    session.select("string_01.csv")
    plant = PlantData(name="Demo Solar Plant", inverter_count=2, modules_per_string=24, nominal_power=540)
    nameplate = ModuleNameplate(manufacturer="Demo", model="DM-540", pmax=540.0, voc=49.5, isc=13.9)
    draft = ReportDraft.build(plant, session, nameplate=nameplate, datasheet_name="DM-540.pdf")

    print("=" * 70)
    print(f"{draft.title} - {draft.plant.name}")
    print("=" * 70)
    print(draft.results_frame()[['source_name', 'pmax', 'pmax_stc', 'pmax_deviation_pct']].to_string(index=False))
    print()


if __name__ == "__main__":
    main()
