# tests/test_services.py
import csv
import io
import json

import pytest

from conftest import build_epg, make_ad, make_zone
from services import ExportService, StatisticsService, ValidationService
from validators.models import ValidationError


@pytest.fixture
def broken_xml():
    """Two zones, errors in both (unknown asset in zone 1, bad genre in zone 2)."""
    zones = [
        make_zone(2, ads=[make_ad(2, fileName="nope.png")]),
        make_zone(3, ads=[make_ad(3, genre="x")]),
    ]
    return build_epg(zones)


@pytest.fixture
def broken_result(broken_xml):
    return ValidationService().validate_xml(broken_xml)


# --- ValidationService ---

def test_validate_xml_clean(clean_xml):
    service = ValidationService()
    result = service.validate_xml(clean_xml)

    assert service.is_valid(result)
    assert service.get_error_summary(result) == "No errors"


def test_validate_xml_with_asset_overrides(clean_xml):
    result = ValidationService().validate_xml(clean_xml, asset_overrides={})

    assert [ValidationService.get_error_tag(e.message) for e in result.errors] == ["File-Not-Found"] * 4


@pytest.mark.parametrize("message, tag", [
    ("{Dimension-Mismatch} Dimension mismatch for a.png", "Dimension-Mismatch"),
    ("Missing <numberOfAdZones> element", "Missing-Element"),
    ("Invalid XML structure: oops", "Invalid-Value"),
    ("Expected 2 of something", "Count-Mismatch"),
    ("Root element must be <start>, found <epg>", "Validation-Error"),
])
def test_get_error_tag(message, tag):
    assert ValidationService.get_error_tag(message) == tag


def test_error_summary_counts_tags(broken_result):
    summary = ValidationService().get_error_summary(broken_result)

    assert summary == "File-Not-Found: 1; Invalid-Genre: 1"


# --- ExportService ---

def test_filter_errors(broken_result):
    export = ExportService()

    assert len(export.filter_errors(broken_result.errors)) == 2
    assert [e.field for e in export.filter_errors(broken_result.errors, pht_id=3)] == ["genre"]
    assert [e.pht_id for e in export.filter_errors(broken_result.errors, zone_index=1)] == [2]
    assert export.filter_errors(broken_result.errors, pht_id=2, field="genre") == []


def test_csv_layout():
    errors = [
        ValidationError(9, '{File-Not-Found} File "a.png" not found', zone_index=1, pht_id=2, field="fileName"),
        ValidationError(3, "{Count-Mismatch} Expected 2 adZones but found 1", field="numberOfAdZones"),
    ]

    text = ExportService().errors_to_csv(errors)
    rows = list(csv.reader(io.StringIO(text)))

    assert text.splitlines()[0] == '"Line","AdZone","PHT","Error Type","Message","Field"'
    assert rows[1] == ["9", "1", "2", "ERROR", 'File-Not-Found File "a.png" not found', "fileName"]
    assert rows[2] == ["3", "", "", "ERROR", "Count-Mismatch Expected 2 adZones but found 1", "numberOfAdZones"]


def test_json_report(broken_result):
    report = ExportService().errors_to_json(broken_result.errors[:1], "epg.xml", broken_result)

    assert report["fileName"] == "epg.xml"
    assert report["summary"]["totalIssues"] == 1
    assert report["summary"]["errors"] == 2
    assert report["summary"]["validation"]["totalAds"] == 2
    assert report["issues"][0]["errorTag"] == "File-Not-Found"
    assert report["issues"][0]["adZone"] == 1
    assert "T" in report["validationDate"]


def test_json_issues_carry_source_line(broken_xml, broken_result):
    report = ExportService().errors_to_json(broken_result.errors, "epg.xml", broken_result, broken_xml)

    asset, genre = report["issues"]
    assert asset["line"] == 9
    assert asset["xmlContent"].startswith("<image ")
    assert 'fileName="nope.png"' in asset["xmlContent"]
    assert genre["line"] == 23
    assert genre["xmlContent"] == "<genre>x</genre>"


def test_json_source_line_without_document(broken_result):
    report = ExportService().errors_to_json(broken_result.errors, "epg.xml", broken_result)

    assert [i["xmlContent"] for i in report["issues"]] == ["Line not found"] * 2


def test_json_source_line_out_of_range():
    error = ValidationError(line=99, message="{Count-Mismatch} Expected 2 adZones but found 1")
    report = ExportService().errors_to_json([error], "epg.xml", xml_text="<start>\n</start>\n")

    assert report["issues"][0]["xmlContent"] == "Line not found"


def test_export_files(tmp_path, broken_result):
    export = ExportService(output_dir=str(tmp_path / "reports"))

    csv_path = export.export_csv(broken_result.errors, "epg.xml")
    json_path = export.export_json(broken_result.errors, "epg.xml", broken_result)

    assert csv_path.endswith("epg_validation_report.csv")
    assert json_path.endswith("epg_validation_report.json")
    with open(json_path, encoding="utf-8") as f:
        assert len(json.load(f)["issues"]) == 2
    with open(csv_path, encoding="utf-8") as f:
        assert len(f.read().splitlines()) == 3


# --- StatisticsService ---

def test_pht_presence():
    rows = StatisticsService().get_pht_presence([2, 4])

    assert [(r["id"], r["present"]) for r in rows] == [(1, False), (2, True), (3, False), (4, True)]
    assert rows[0]["name"] == "Home Advert"
    assert StatisticsService().get_missing_phts([2, 4]) == [1, 3]


def test_count_errors(broken_result):
    stats = StatisticsService()

    assert stats.count_errors_by_tag(broken_result.errors) == {"File-Not-Found": 1, "Invalid-Genre": 1}
    assert stats.count_errors_by_zone(broken_result) == {1: 1, 2: 1}


def test_tag_counts_agree_between_services(broken_result):
    errors = broken_result.errors + [ValidationError(3, "Expected 2 of something")]

    counts = ValidationService.count_errors_by_tag(errors)

    assert counts == {"Count-Mismatch": 1, "File-Not-Found": 1, "Invalid-Genre": 1}
    assert StatisticsService().count_errors_by_tag(errors) == counts


def test_summary_table(broken_result):
    table = StatisticsService().format_summary_table(broken_result)

    assert "Validation Summary" in table
    assert "Invalid-Genre" in table
    assert "TOTAL ERRORS" in table


def test_presence_table_lists_unknown_phts():
    table = StatisticsService().format_pht_presence_table([2, 9])

    assert "Channel Banner Advert" in table
    assert "Unknown PHT ids" in table
    assert "Missing" in table
