# tests/test_asset_manager.py
import json

import pytest

from managers import AssetManager, AssetRecord


def test_default_database_lookup():
    manager = AssetManager()
    record = manager.lookup("m3_ST112HW_29.png")

    assert len(manager) == 15
    assert record.dimensions == "90x128"
    assert record.mime_type == "image/png"
    assert "boot_ST112HW_29.m2v" in manager
    assert manager.lookup("nope.png") is None


def test_overrides_replace_defaults():
    manager = AssetManager({"a.png": {"actualWidth": 10, "actualHeight": 20}})

    assert manager.get_all_file_names() == ["a.png"]
    assert manager.lookup("a.png").file_name == "a.png"
    assert "m1_ST112HW_29.png" not in manager


def test_empty_override_means_no_assets():
    assert len(AssetManager({})) == 0


def test_record_accepts_snake_case_keys():
    record = AssetRecord.from_dict({"file_name": "x.jpg", "actual_width": "300", "actual_height": 180})

    assert record.dimensions == "300x180"
    assert record.to_dict()["fileName"] == "x.jpg"


def test_record_without_name_is_rejected():
    with pytest.raises(ValueError):
        AssetRecord.from_dict({"actualWidth": 1, "actualHeight": 1})


def test_load_object_json(tmp_path):
    path = tmp_path / "assets.json"
    path.write_text(json.dumps({"g9.png": {"fileName": "g9.png", "actualWidth": 400, "actualHeight": 200}}))

    manager = AssetManager.from_json_file(str(path))

    assert manager.lookup("g9.png").dimensions == "400x200"


def test_load_list_json(tmp_path):
    path = tmp_path / "assets.json"
    path.write_text(json.dumps([
        {"fileName": "one.png", "actualWidth": 1, "actualHeight": 2},
        {"fileName": "two.png", "actualWidth": 3, "actualHeight": 4},
    ]))

    manager = AssetManager.from_json_file(str(path))

    assert manager.get_all_file_names() == ["one.png", "two.png"]
    assert [r.dimensions for r in manager.get_all_records()] == ["1x2", "3x4"]


def test_unsupported_json_is_rejected():
    with pytest.raises(ValueError):
        AssetManager.from_json_data("just a string")
