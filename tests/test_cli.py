# tests/test_cli.py
import json

import pytest

import EPG_Validator_CLI
from cli import CommandParser


# --- Argument parsing ---

def test_file_required_for_validation(capsys):
    parser = CommandParser()

    assert not parser.validate_args(parser.parse_args([]))
    assert "--file is required" in capsys.readouterr().out


def test_utility_flags_need_no_file():
    parser = CommandParser()

    assert parser.validate_args(parser.parse_args(["--history"]))
    assert parser.validate_args(parser.parse_args(["--profiles"]))
    assert parser.validate_args(parser.parse_args(["--clear-history"]))


def test_unknown_pht_filter_rejected():
    parser = CommandParser()

    assert not parser.validate_args(parser.parse_args(["--file", "a.xml", "--pht", "7"]))
    assert not parser.validate_args(parser.parse_args(["--file", "a.xml", "--zone", "0"]))
    assert parser.validate_args(parser.parse_args(["--file", "a.xml", "--pht", "2", "--zone", "1"]))


# --- End to end ---

def run_cli(args):
    with pytest.raises(SystemExit) as exc:
        EPG_Validator_CLI.main(args)
    return exc.value.code


def test_valid_file_exits_zero(tmp_path, clean_xml):
    xml_file = tmp_path / "epg.xml"
    xml_file.write_text(clean_xml, encoding="utf-8")

    code = run_cli(["--file", str(xml_file), "--history-dir", str(tmp_path / "history")])

    assert code == 0


def test_invalid_file_exports_and_records_history(tmp_path, invalid_xml, capsys):
    xml_file = tmp_path / "broken.xml"
    xml_file.write_text(invalid_xml, encoding="utf-8")
    reports = tmp_path / "reports"
    history_dir = tmp_path / "history"

    code = run_cli([
        "--file", str(xml_file),
        "--export-csv", "--export-json",
        "--output-dir", str(reports),
        "--history-dir", str(history_dir),
    ])

    assert code == 1
    assert (reports / "broken_validation_report.csv").exists()
    with open(reports / "broken_validation_report.json", encoding="utf-8") as f:
        report = json.load(f)
    assert report["summary"]["totalIssues"] == 1
    assert report["issues"][0]["xmlContent"].startswith("<image ")
    assert "Dimension-Mismatch" in capsys.readouterr().out

    EPG_Validator_CLI.display_history(str(history_dir))
    assert "broken.xml" in capsys.readouterr().out


def test_no_history_flag(tmp_path, clean_xml):
    xml_file = tmp_path / "epg.xml"
    xml_file.write_text(clean_xml, encoding="utf-8")
    history_dir = tmp_path / "history"

    run_cli(["--file", str(xml_file), "--no-history", "--history-dir", str(history_dir)])

    assert not history_dir.exists()


def test_missing_target_exits_one(tmp_path, capsys):
    code = run_cli(["--file", str(tmp_path / "nothing"), "--no-history"])

    assert code == 1
    assert "No XML files found" in capsys.readouterr().err


def test_profiles_listing(capsys):
    EPG_Validator_CLI.display_profiles()
    out = capsys.readouterr().out

    assert "BootUp Advert" in out
    assert "480/720/1080" in out
