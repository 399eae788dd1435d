"""
Tests for file loaders and extension detection.
"""

import pandas as pd
import pytest

from iv_report.config import UPLOAD_CONFIG
from iv_report.exceptions import FileUnreadableError
from iv_report.ingestion import AutoDetector, CsvLoader, XlsxLoader, decode_bytes, parse_records
from iv_report.session import Session


@pytest.fixture
def scenario_xlsx(tmp_path):
    """The three-row scenario saved as an Excel workbook."""
    df = pd.DataFrame(
        [
            [10, 2, 10, 2, 1000, 25],
            [8, 3, 8.5, 3.1, None, None],
            [5, 4, 5, 4, None, None],
        ],
        columns=["Voltage", "Current", "Voltage STC", "Current STC", "Irradiance", "Temperature"],
    )
    path = tmp_path / "scenario.xlsx"
    df.to_excel(path, index=False)
    return path


class TestDecodeBytes:

    def test_decodes_utf8(self):
        assert decode_bytes("a.csv", "h\n1,2,3,4\n".encode()) == "h\n1,2,3,4\n"

    def test_strips_bom(self):
        assert decode_bytes("a.csv", b"\xef\xbb\xbfh\n") == "h\n"

    def test_nul_bytes_rejected(self):
        with pytest.raises(FileUnreadableError, match="binary"):
            decode_bytes("a.csv", b"h\x00\n")

    def test_custom_encoding(self):
        assert decode_bytes("a.csv", "Tensão\n".encode("latin-1"), encoding="latin-1") == "Tensão\n"


class TestCsvLoader:

    def test_reads_file(self, write_file, scenario_text):
        path = write_file("a.csv", scenario_text)

        assert CsvLoader(path).read_text() == scenario_text

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileUnreadableError, match="not found"):
            CsvLoader(tmp_path / "missing.csv")

    def test_in_memory_data(self):
        loader = CsvLoader("upload.csv", data=b"h\n1,2,1,2\n")

        assert loader.name == "upload.csv"
        assert loader.read_text() == "h\n1,2,1,2\n"

    def test_size_limit(self, monkeypatch):
        monkeypatch.setitem(UPLOAD_CONFIG, "max_file_size_mb", 0)

        with pytest.raises(FileUnreadableError, match="limit"):
            CsvLoader("big.csv", data=b"h\n1,2,3,4\n").read_text()


class TestXlsxLoader:

    def test_sheet_becomes_parseable_text(self, scenario_xlsx):
        text = XlsxLoader(scenario_xlsx).read_text()
        result = parse_records(text)

        assert len(result.samples) == 3
        assert result.samples[1].voltage_corrected == pytest.approx(8.5)
        assert result.irradiance == 1000.0
        assert result.temperature == 25.0

    def test_upload_through_session(self, scenario_xlsx):
        session = Session().add_upload("scenario.xlsx", scenario_xlsx.read_bytes())
        curve = session.current()

        assert curve.measured_max_power == pytest.approx(24.0)
        assert curve.v_at_max_power == pytest.approx(8.0)

    def test_list_sheets(self, scenario_xlsx):
        assert XlsxLoader(scenario_xlsx).list_sheets() == ["Sheet1"]

    def test_corrupt_workbook(self):
        with pytest.raises(FileUnreadableError):
            XlsxLoader("broken.xlsx", data=b"this is not a workbook").read_text()

    def test_comma_in_text_cell_does_not_shift_columns(self, tmp_path):
        """A decimal-comma text cell is left empty instead of splitting the row."""
        df = pd.DataFrame(
            [["1,5", 2, 1, 2], [3, 4, 3, 4]],
            columns=["Tensão, V", "Corrente", "Tensão STC", "Corrente STC"],
        )
        path = tmp_path / "decimal_comma.xlsx"
        df.to_excel(path, index=False)

        text = XlsxLoader(path).read_text()
        result = parse_records(text)

        assert '"' not in text
        assert len(result.samples) == 2
        assert result.samples[0].voltage == 0.0
        assert result.samples[0].current == pytest.approx(2.0)
        assert result.samples[0].voltage_corrected == pytest.approx(1.0)
        assert result.samples[0].current_corrected == pytest.approx(2.0)
        assert result.samples[1].voltage == pytest.approx(3.0)
        assert result.irradiance is None
        assert result.degraded_cells == 1

    def test_missing_engine_is_not_a_file_error(self, monkeypatch):
        """An uninstalled Excel engine surfaces as ImportError, not a corrupt file."""
        def read_excel(*args, **kwargs):
            raise ImportError("Missing optional dependency 'xlrd'")

        monkeypatch.setattr(pd, "read_excel", read_excel)

        with pytest.raises(ImportError):
            XlsxLoader("legacy.xls", data=b"\xd0\xcf\x11\xe0").read_text()


class TestAutoDetector:

    @pytest.mark.parametrize("name, loader_cls", [
        ("a.csv", CsvLoader),
        ("a.TXT", CsvLoader),
        ("a.xlsx", XlsxLoader),
        ("a.xls", XlsxLoader),
    ])
    def test_loader_by_extension(self, name, loader_cls):
        assert isinstance(AutoDetector.loader_for(name, data=b""), loader_cls)

    def test_unsupported_extension(self):
        with pytest.raises(FileUnreadableError, match="unsupported"):
            AutoDetector.loader_for("datasheet.pdf", data=b"%PDF")

    def test_source_name(self, tmp_path):
        assert AutoDetector.source_name(tmp_path / "x" / "curve.csv") == "curve.csv"
        assert AutoDetector.source_name(("upload.csv", b"")) == "upload.csv"

    def test_acquire_path(self, write_file):
        path = write_file("curve.csv", "h\n1,2,1,2\n")

        assert AutoDetector.acquire(path) == ("curve.csv", "h\n1,2,1,2\n")
