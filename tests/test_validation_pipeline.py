# tests/test_validation_pipeline.py
import pytest

from conftest import build_epg, make_ad, make_zone
from validators import ValidationPipeline


@pytest.fixture
def samples(tmp_path, clean_xml, invalid_xml):
    (tmp_path / "good.xml").write_text(clean_xml, encoding="utf-8")
    (tmp_path / "bad.xml").write_text(invalid_xml, encoding="utf-8")
    (tmp_path / "readme.txt").write_text("not xml")
    return tmp_path


def test_validate_directory(samples, capsys):
    pipeline = ValidationPipeline()
    results = pipeline.validate_directory(str(samples))

    assert sorted(p.rsplit("/", 1)[-1] for p in results) == ["bad.xml", "good.xml"]
    assert not pipeline.all_passed()
    out = capsys.readouterr().out
    assert "good.xml: ✅ PASS" in out
    assert "bad.xml: ❌ FAIL (1 errors)" in out


def test_validate_single_file_target(samples):
    pipeline = ValidationPipeline(verbose=False)
    pipeline.validate_directory(str(samples / "good.xml"))

    assert len(pipeline.results) == 1
    assert pipeline.all_passed()


def test_markdown_report_written(samples, tmp_path):
    pipeline = ValidationPipeline(verbose=False)
    pipeline.validate_directory(str(samples))
    report_path = tmp_path / "report.md"

    text = pipeline.generate_report(str(report_path))

    assert report_path.read_text(encoding="utf-8") == text
    assert text.startswith("# EPG Validation Report")
    assert "**Total files validated:** 2" in text
    assert "{Dimension-Mismatch}" in text
    assert "- PHTs present: 2, 3, 4" in text


def test_report_printed_without_file(samples, capsys):
    pipeline = ValidationPipeline(verbose=False)
    pipeline.validate_directory(str(samples))
    pipeline.generate_report()

    assert "# EPG Validation Report" in capsys.readouterr().out


def test_validate_text_does_not_record():
    pipeline = ValidationPipeline(verbose=False)
    xml = build_epg([make_zone(2, ads=[make_ad(2, fileName="nope.png")])])

    assert not pipeline.validate_text(xml).is_valid
    assert pipeline.results == {}
