# tests/test_models.py
from validators.models import ValidationError, ValidationResult, ValidationSummary


def test_error_line_is_at_least_one():
    assert ValidationError(0, "x").line == 1
    assert ValidationError(-3, "x").line == 1
    assert ValidationError(None, "x").line == 1
    assert ValidationError(12, "x").line == 12


def test_result_validity_ignores_warnings():
    warning = ValidationError(3, "heads up", severity="warning")

    assert ValidationResult(warnings=[warning]).is_valid
    assert not ValidationResult(errors=[ValidationError(1, "boom")]).is_valid


def test_present_phts_are_sorted_and_unique():
    assert ValidationResult(present_phts=[3, 1, 3]).present_phts == [1, 3]


def test_result_dict_round_trip():
    result = ValidationResult(
        errors=[ValidationError(9, "{File-Not-Found} x", zone_index=1, pht_id=2, field="fileName")],
        present_phts=[2],
        summary=ValidationSummary(1, 1, 1, 1, ["genre"], ["x"]),
    )

    data = result.to_dict()

    assert data["isValid"] is False
    assert data["errors"][0] == {
        "line": 9,
        "message": "{File-Not-Found} x",
        "type": "error",
        "adZone": 1,
        "pht": 2,
        "field": "fileName",
    }
    assert data["summary"]["missingTags"] == ["genre"]
    assert ValidationResult.from_dict(data) == result
