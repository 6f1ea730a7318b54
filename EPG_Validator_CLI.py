#!/usr/bin/env python3
"""
EPG AdZone Validator - CLI Entry Point
======================================

Command-line interface following SOLID principles.
This file is intentionally minimal, delegating all logic to specialized services.

Architecture:
- Services: Business logic (validation, export, statistics)
- Managers: Coordination (assets, history, file operations)
- CLI: User interface (parsing, formatting)
- Core: Settings
- Validators: Validation engine

Usage:
    python EPG_Validator_CLI.py --file samples/epg.xml
    python EPG_Validator_CLI.py --file samples/ --assets assets.json --report report.md
    python EPG_Validator_CLI.py --history
    python EPG_Validator_CLI.py --profiles
"""

import os
import sys
from typing import List, Optional

# Service layer
from services import (
    ValidationService,
    ExportService,
    StatisticsService,
)

# Manager layer
from managers import (
    AssetManager,
    FileManager,
    HistoryManager,
    JSONFileStorage,
)

# Validation layer
from validators import ValidationPipeline
from validators.pht_rules import PHT_PROFILES

# CLI layer
from cli import CommandParser, OutputFormatter


def validate_target(
    target: str,
    assets_file: str = None,
    pht_id: int = None,
    zone_index: int = None,
    export_csv: bool = False,
    export_json: bool = False,
    output_dir: str = None,
    report_file: str = None,
    record_history: bool = True,
    history_dir: str = None,
) -> bool:
    """
    Validate a file or every XML file in a directory.

    Args:
        target: XML file or directory
        assets_file: JSON asset database replacing the built-in one
        pht_id: Only show/export errors for this PHT
        zone_index: Only show/export errors for this AdZone
        export_csv: Write a CSV report per file
        export_json: Write a JSON report per file
        output_dir: Directory for exported reports
        report_file: Markdown report path for the whole run
        record_history: Store each result in the validation history
        history_dir: Directory for stored history

    Returns:
        True if every validated file is valid
    """
    file_manager = FileManager()
    formatter = OutputFormatter()

    xml_files = file_manager.list_xml_files(target)
    if not xml_files:
        formatter.print_error(f"No XML files found at: {target}")
        return False

    # Initialize services (dependency injection)
    assets = AssetManager.from_json_file(assets_file) if assets_file else None
    pipeline = ValidationPipeline(asset_overrides=assets, verbose=False)
    val_service = ValidationService(pipeline)
    export_service = ExportService(output_dir)
    stats_service = StatisticsService()
    history_manager = HistoryManager(JSONFileStorage(history_dir)) if record_history else None

    if assets is not None:
        formatter.print_info(f"Using asset database {assets_file} ({len(assets)} records)")

    for xml_file in xml_files:
        file_name = os.path.basename(xml_file)
        formatter.print_validation_start(xml_file)

        result = val_service.validate_file(xml_file)

        formatter.print_result_status(file_name, result)
        formatter.print_statistics_table(stats_service.format_summary_table(result))
        formatter.print_statistics_table(
            stats_service.format_pht_presence_table(result.present_phts)
        )

        errors = export_service.filter_errors(result.errors, pht_id=pht_id, zone_index=zone_index)
        formatter.print_errors(errors, shown_of=len(result.errors))

        if export_csv:
            path = export_service.export_csv(errors, file_name)
            formatter.print_success(f"CSV report saved to {path}")
        if export_json:
            path = export_service.export_json(
                errors, file_name, result, export_service.file_manager.read_text(xml_file)
            )
            formatter.print_success(f"JSON report saved to {path}")

        if history_manager is not None:
            history_manager.save_validation_history(
                file_name, result, os.path.abspath(xml_file)
            )

    if report_file:
        pipeline.generate_report(report_file)
        formatter.print_success(f"Markdown report saved to {report_file}")

    return pipeline.all_passed()


def display_history(history_dir: str = None) -> None:
    """
    Display recent validations.

    Args:
        history_dir: Directory for stored history
    """
    history_manager = HistoryManager(JSONFileStorage(history_dir))
    formatter = OutputFormatter()

    formatter.print_header("Validation History")

    entries = history_manager.get_validation_history()
    if not entries:
        formatter.print_info("No validation history")
        return

    print(f"{'When':<20} {'File':<36} {'Status':<8} {'Errors':<8} PHTs")
    print("-" * 80)
    for entry in entries:
        status = "VALID" if entry.is_valid else "INVALID"
        phts = ", ".join(str(p) for p in entry.present_phts) or "-"
        when = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        print(f"{when:<20} {entry.file_name:<36} {status:<8} {entry.error_count:<8} {phts}")


def clear_history(history_dir: str = None) -> None:
    """Delete stored validation history."""
    HistoryManager(JSONFileStorage(history_dir)).clear_validation_history()
    OutputFormatter().print_success("Validation history cleared")


def display_profiles() -> None:
    """Display the PHT profile catalog."""
    formatter = OutputFormatter()

    formatter.print_header("PHT Profiles")

    print(f"{'PHT':<5} {'Name':<24} {'Ads':<7} {'Widths':<16} {'Heights':<16} File types")
    print("-" * 80)
    for pht_id in sorted(PHT_PROFILES.keys()):
        profile = PHT_PROFILES[pht_id]
        widths = "/".join(profile.image_attribute_specs["w"].allowed_values)
        heights = "/".join(profile.image_attribute_specs["h"].allowed_values)
        types = ", ".join(sorted(profile.allowed_asset_file_types))
        ads = f"{profile.min_ads}-{profile.max_ads}"
        print(f"{pht_id:<5} {profile.name:<24} {ads:<7} {widths:<16} {heights:<16} {types}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for CLI."""
    # Parse arguments
    parser = CommandParser()
    args = parser.parse_args(argv)
    formatter = OutputFormatter()

    # Validate arguments
    if not parser.validate_args(args):
        sys.exit(1)

    # Execute command
    try:
        if args.profiles:
            display_profiles()
        elif args.clear_history:
            clear_history(args.history_dir)
        elif args.history:
            display_history(args.history_dir)
        else:
            all_valid = validate_target(
                args.file,
                assets_file=args.assets,
                pht_id=args.pht,
                zone_index=args.zone,
                export_csv=args.export_csv,
                export_json=args.export_json,
                output_dir=args.output_dir,
                report_file=args.report,
                record_history=not args.no_history,
                history_dir=args.history_dir,
            )
            sys.exit(0 if all_valid else 1)
    except KeyboardInterrupt:
        formatter.print_warning("\nOperation cancelled by user")
        sys.exit(130)
    except Exception as e:
        formatter.print_error(f"Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
