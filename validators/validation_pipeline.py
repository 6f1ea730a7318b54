"""
validation_pipeline.py

Runs EPG validation over single files or whole directories and renders a
markdown report of the results.

Usage:
    # Validate single file
    python -m validators.validation_pipeline samples/epg.xml

    # Validate directory
    python -m validators.validation_pipeline samples/

    # Use an asset database exported by the host application
    python -m validators.validation_pipeline samples/ --assets assets.json

    # Generate report
    python -m validators.validation_pipeline samples/ --report validation_report.md
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from managers.asset_manager import AssetManager, AssetMap

from .epg_validator import validate, validate_file
from .models import ValidationResult


class ValidationPipeline:
    """Validates EPG documents file by file and keeps the results for reporting."""

    def __init__(self, asset_overrides: Optional[AssetMap] = None, verbose: bool = True):
        """
        Initialize validation pipeline.

        Args:
            asset_overrides: Replacement asset map (default: built-in asset database)
            verbose: Print per-file progress while validating
        """
        if isinstance(asset_overrides, AssetManager):
            self.assets = asset_overrides
        else:
            self.assets = AssetManager(asset_overrides)
        self.verbose = verbose
        self.results: Dict[str, ValidationResult] = {}

    def validate_text(self, xml_content: str) -> ValidationResult:
        """Validate document text without recording it."""
        return validate(xml_content, self.assets)

    def validate_file(self, xml_file: str) -> ValidationResult:
        """
        Validate a single file and record its result.

        Args:
            xml_file: Path to XML file

        Returns:
            ValidationResult object
        """
        result = validate_file(xml_file, self.assets)
        self.results[str(xml_file)] = result
        if self.verbose:
            status = "✅ PASS" if result.is_valid else f"❌ FAIL ({result.total_errors()} errors)"
            print(f"  {Path(xml_file).name}: {status}")
        return result

    def validate_directory(self, directory: str) -> Dict[str, ValidationResult]:
        """
        Validate all XML files in directory.

        Args:
            directory: Path to directory containing XML files (or a single file)

        Returns:
            Dictionary mapping file paths to ValidationResult objects
        """
        dir_path = Path(directory)

        if dir_path.is_file():
            xml_files = [dir_path]
        else:
            xml_files = sorted(dir_path.glob("*.xml"))

        if self.verbose:
            print(f"\n{'=' * 80}")
            print(f"Validating {len(xml_files)} XML files from {directory}")
            print(f"{'=' * 80}\n")

        for xml_file in xml_files:
            self.validate_file(str(xml_file))

        return self.results

    def all_passed(self) -> bool:
        return all(r.is_valid for r in self.results.values())

    def generate_report(self, output_file: str = None) -> str:
        """
        Generate validation report.

        Args:
            output_file: Path to output markdown file (prints to stdout if None)

        Returns:
            Report text
        """
        report_lines = []
        report_lines.append("# EPG Validation Report")
        report_lines.append("")
        report_lines.append(f"**Total files validated:** {len(self.results)}")

        passed = sum(1 for r in self.results.values() if r.is_valid)
        failed = len(self.results) - passed

        report_lines.append(f"**✅ Passed:** {passed}")
        report_lines.append(f"**❌ Failed:** {failed}")
        report_lines.append("")

        report_lines.append("## Per-file Results")
        report_lines.append("")

        for file_path, result in sorted(self.results.items()):
            file_name = Path(file_path).name
            status = (
                "✅ PASS"
                if result.is_valid
                else f"❌ FAIL ({result.total_errors()} errors)"
            )

            report_lines.append(f"### {file_name} - {status}")
            report_lines.append("")

            summary = result.summary
            phts = ", ".join(str(p) for p in result.present_phts) or "none"
            report_lines.append(
                f"- AdZones: {summary.total_ad_zones}/{summary.expected_ad_zones} "
                f"(found/declared), Ads: {summary.total_ads}/{summary.expected_ads}"
            )
            report_lines.append(f"- PHTs present: {phts}")
            report_lines.append("")

            if result.errors:
                report_lines.append("**Errors:**")
                for err in result.errors:
                    report_lines.append(f"- Line {err.line}: {err.message}")
                report_lines.append("")

            if result.warnings:
                report_lines.append("**Warnings:**")
                for warn in result.warnings:
                    report_lines.append(f"- Line {warn.line}: {warn.message}")
                report_lines.append("")

        report_text = "\n".join(report_lines)

        if output_file:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(report_text)
            if self.verbose:
                print(f"\n📄 Report saved to: {output_file}")
        else:
            print("\n" + "=" * 80)
            print(report_text)
            print("=" * 80)

        return report_text


def main():
    """Main entry point."""
    if len(sys.argv) < 2:
        print(
            "Usage: python -m validators.validation_pipeline <xml_file_or_directory> [--assets assets.json] [--report output.md]"
        )
        sys.exit(1)

    target = sys.argv[1]

    assets = None
    if "--assets" in sys.argv:
        assets_idx = sys.argv.index("--assets")
        if assets_idx + 1 < len(sys.argv):
            assets = AssetManager.from_json_file(sys.argv[assets_idx + 1])

    report_file = None
    if "--report" in sys.argv:
        report_idx = sys.argv.index("--report")
        if report_idx + 1 < len(sys.argv):
            report_file = sys.argv[report_idx + 1]

    pipeline = ValidationPipeline(asset_overrides=assets)
    pipeline.validate_directory(target)
    pipeline.generate_report(report_file)

    sys.exit(0 if pipeline.all_passed() else 1)


if __name__ == "__main__":
    main()
