"""
Pytest configuration and shared fixtures for the I-V curve report tests.
"""

import pytest

from iv_report.analysis import analyze
from iv_report.ingestion import parse_records


SCENARIO_TEXT = (
    "Voltage,Current,Voltage STC,Current STC,Irradiance,Temperature\n"
    "10,2,10,2,1000,25\n"
    "8,3,8.5,3.1\n"
    "5,4,5,4\n"
)


@pytest.fixture
def scenario_text():
    """Header plus three rows; the second row is the maximum power point."""
    return SCENARIO_TEXT


@pytest.fixture
def scenario_curve(scenario_text):
    """Curve analyzed from the three-row scenario."""
    parsed = parse_records(scenario_text)
    return analyze("scenario.csv", parsed.samples, parsed.irradiance, parsed.temperature)


@pytest.fixture
def write_file(tmp_path):
    """Write text or bytes to a file in a temporary directory."""
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write
