"""
Tests for plant data, datasheet values and the report draft.
"""

from datetime import date

import pytest

from iv_report.config import REPORT_CONFIG
from iv_report.exceptions import IncompleteReportError
from iv_report.reporting import (
    ModuleNameplate,
    PlantData,
    ReportDraft,
    plant_nominal_power,
    pmax_deviation,
    string_nominal_power,
)
from iv_report.session import Session


@pytest.fixture
def plant():
    return PlantData(name="Usina Solar Brasília", inverter_count=10, modules_per_string=24, nominal_power=540)


@pytest.fixture
def session(scenario_text):
    session = Session()
    session.add_file("a.csv", scenario_text)
    session.add_file("b.csv", "h\n20,5,20,5\n")
    return session


class TestPlantData:

    def test_complete(self, plant):
        assert plant.is_complete()
        assert plant.missing_fields() == []

    def test_defaults_are_incomplete(self):
        assert PlantData().missing_fields() == [
            "name", "inverter_count", "modules_per_string", "nominal_power",
        ]

    def test_blank_name_is_missing(self):
        plant = PlantData(name="   ", inverter_count=1, modules_per_string=1, nominal_power=1)

        assert plant.missing_fields() == ["name"]

    def test_nominal_powers(self, plant):
        assert string_nominal_power(plant) == 24 * 540
        assert plant_nominal_power(plant) == 10 * 24 * 540


class TestModuleNameplate:

    def test_from_mapping(self):
        nameplate = ModuleNameplate.from_mapping({
            'manufacturer': "Acme",
            'model': "AC-540",
            'pmax': " 540 ",
            'voc': "abc",
            'isc': 13.9,
            'vmp': "",
        })

        assert nameplate.manufacturer == "Acme"
        assert nameplate.pmax == 540.0
        assert nameplate.voc is None
        assert nameplate.isc == 13.9
        assert nameplate.vmp is None

    def test_blank(self):
        assert ModuleNameplate().is_blank()
        assert ModuleNameplate.from_mapping({'pmax': ""}).is_blank()
        assert not ModuleNameplate(model="X").is_blank()

    def test_pmax_deviation(self):
        assert pmax_deviation(26.25, ModuleNameplate(pmax=25.0)) == pytest.approx(5.0)
        assert pmax_deviation(26.25, ModuleNameplate()) is None
        assert pmax_deviation(26.25, None) is None


class TestReportDraft:

    def test_incomplete_plant_refused(self, session):
        with pytest.raises(IncompleteReportError) as exc_info:
            ReportDraft.build(PlantData(name="X"), session, datasheet_name="ds.pdf")

        assert "plant.inverter_count" in exc_info.value.missing
        assert "plant.name" not in exc_info.value.missing

    def test_empty_session_refused(self, plant):
        with pytest.raises(IncompleteReportError) as exc_info:
            ReportDraft.build(plant, Session(), datasheet_name="ds.pdf")

        assert exc_info.value.missing == ["curves"]

    def test_datasheet_required(self, plant, session):
        with pytest.raises(IncompleteReportError) as exc_info:
            ReportDraft.build(plant, session, nameplate=ModuleNameplate())

        assert exc_info.value.missing == ["datasheet"]

    def test_datasheet_optional_by_config(self, plant, session, monkeypatch):
        monkeypatch.setitem(REPORT_CONFIG, "require_datasheet", False)

        draft = ReportDraft.build(plant, session)

        assert draft.datasheet_name is None

    def test_results_per_curve(self, plant, session):
        session.select("b.csv")
        draft = ReportDraft.build(
            plant, session,
            nameplate=ModuleNameplate(pmax=25.0),
            datasheet_name="ds.pdf",
            report_date=date(2024, 5, 1),
        )

        assert draft.source_files == ("a.csv", "b.csv")
        assert draft.selected_key == "b.csv"
        assert [row['selected'] for row in draft.results] == [False, True]
        assert draft.results[0]['pmax'] == 24.0
        assert draft.results[0]['pmax_deviation_pct'] == pytest.approx((8.5 * 3.1 / 25.0 - 1) * 100)
        assert draft.results[1]['pmax_deviation_pct'] == pytest.approx(300.0)

    def test_results_frame(self, plant, session):
        draft = ReportDraft.build(plant, session, datasheet_name="ds.pdf")
        df = draft.results_frame()

        assert df['source_name'].tolist() == ["a.csv", "b.csv"]
        assert df['pmax_deviation_pct'].isna().all()

    def test_to_dict(self, plant, session):
        draft = ReportDraft.build(
            plant, session,
            nameplate=ModuleNameplate(model="AC-540", pmax=540.0),
            datasheet_name="ds.pdf",
            report_date=date(2024, 5, 1),
        )
        data = draft.to_dict()

        assert data['report_date'] == "2024-05-01"
        assert data['plant']['name'] == plant.name
        assert data['plant']['plant_nominal_power'] == 10 * 24 * 540
        assert data['datasheet']['file_name'] == "ds.pdf"
        assert data['datasheet']['model'] == "AC-540"
        assert data['selected_key'] == "a.csv"
        assert data['sections'] == REPORT_CONFIG["sections"]
        assert len(data['results']) == 2
