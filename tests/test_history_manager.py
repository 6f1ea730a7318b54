# tests/test_history_manager.py
import pytest

from managers import HistoryManager, JSONFileStorage, MemoryStorage
from validators import validate
from validators.models import ValidationError, ValidationResult


@pytest.fixture
def history():
    return HistoryManager(MemoryStorage())


def failing_result():
    return ValidationResult(errors=[ValidationError(4, "{Count-Mismatch} boom")], present_phts=[2])


def test_empty_history(history):
    assert history.get_validation_history() == []


def test_entries_are_newest_first(history, clean_xml):
    history.save_validation_history("first.xml", validate(clean_xml))
    history.save_validation_history("second.xml", failing_result())

    entries = history.get_validation_history()

    assert [e.file_name for e in entries] == ["second.xml", "first.xml"]
    assert entries[0].is_valid is False
    assert entries[0].error_count == 1
    assert entries[1].is_valid is True
    assert entries[1].present_phts == [2, 3, 4]


def test_history_is_capped_at_five(history):
    for i in range(7):
        history.save_validation_history(f"file{i}.xml", failing_result())

    entries = history.get_validation_history()

    assert len(entries) == 5
    assert entries[0].file_name == "file6.xml"
    assert entries[-1].file_name == "file2.xml"


def test_entry_restores_result(history):
    saved = history.save_validation_history("a.xml", failing_result(), file_path="/tmp/a.xml")

    entry = history.get_entry(saved.id)

    assert entry.file_path == "/tmp/a.xml"
    assert entry.to_result() == failing_result()


def test_clear_history(history):
    history.save_validation_history("a.xml", failing_result())
    history.clear_validation_history()

    assert history.get_validation_history() == []


def test_corrupt_history_is_ignored(capsys):
    storage = MemoryStorage()
    storage.set("epg_validation_history", "{not json")

    assert HistoryManager(storage).get_validation_history() == []
    assert "Warning: Could not load validation history" in capsys.readouterr().out


def test_file_storage_persists(tmp_path):
    directory = tmp_path / "history"
    HistoryManager(JSONFileStorage(str(directory))).save_validation_history("a.xml", failing_result())

    assert (directory / "epg_validation_history.json").exists()
    entries = HistoryManager(JSONFileStorage(str(directory))).get_validation_history()
    assert [e.file_name for e in entries] == ["a.xml"]


def test_file_storage_remove_missing_key(tmp_path):
    JSONFileStorage(str(tmp_path)).remove("nothing")
