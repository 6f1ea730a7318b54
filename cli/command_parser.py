"""
Command Parser
==============

Handles CLI argument parsing.
Follows SRP: Only handles command-line argument parsing.
"""

import argparse
from typing import Any

from validators.pht_rules import get_all_profile_ids


class CommandParser:
    """
    Parser for command-line arguments.

    Follows SRP: Only handles argument parsing.
    """

    def __init__(self):
        """Initialize command parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all options.

        Returns:
            Configured ArgumentParser
        """
        parser = argparse.ArgumentParser(
            description="EPG AdZone XML Validator",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Validate one document
  python EPG_Validator_CLI.py --file samples/epg.xml

  # Validate a directory against a host-supplied asset database
  python EPG_Validator_CLI.py --file samples/ --assets assets.json

  # Only show PHT 2 errors and export them
  python EPG_Validator_CLI.py --file samples/epg.xml --pht 2 --export-csv

  # Show recent validations
  python EPG_Validator_CLI.py --history
            """
        )

        # Validation arguments
        parser.add_argument(
            "--file",
            help="EPG XML file or directory of XML files to validate"
        )

        parser.add_argument(
            "--assets",
            help="JSON asset database replacing the built-in one"
        )

        # Filters
        parser.add_argument(
            "--pht",
            type=int,
            help="Only show errors for this PHT id"
        )

        parser.add_argument(
            "--zone",
            type=int,
            help="Only show errors for this AdZone (1-based)"
        )

        # Export
        parser.add_argument(
            "--export-csv",
            action="store_true",
            help="Export (filtered) errors to CSV"
        )

        parser.add_argument(
            "--export-json",
            action="store_true",
            help="Export (filtered) errors to JSON"
        )

        parser.add_argument(
            "--output-dir",
            help="Directory for exported reports (default: validation_reports/)"
        )

        parser.add_argument(
            "--report",
            help="Write a markdown report of all validated files to this path"
        )

        # Utility arguments
        parser.add_argument(
            "--history",
            action="store_true",
            help="Display recent validation history"
        )

        parser.add_argument(
            "--clear-history",
            action="store_true",
            help="Delete stored validation history"
        )

        parser.add_argument(
            "--profiles",
            action="store_true",
            help="Display the PHT profile catalog"
        )

        parser.add_argument(
            "--no-history",
            action="store_true",
            help="Do not record this run in the validation history"
        )

        parser.add_argument(
            "--history-dir",
            help="Directory for stored history (default: validation_history/)"
        )

        return parser

    def parse_args(self, args=None) -> Any:
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def validate_args(self, args: Any) -> bool:
        """
        Validate parsed arguments.

        Args:
            args: Parsed arguments namespace

        Returns:
            True if arguments are valid
        """
        # If validating, a target is required
        if not any([args.history, args.clear_history, args.profiles]):
            if not args.file:
                print("Error: --file is required when validating")
                return False

        if args.pht is not None and args.pht not in get_all_profile_ids():
            print(f"Error: --pht must be one of {get_all_profile_ids()}")
            return False

        if args.zone is not None and args.zone < 1:
            print("Error: --zone must be at least 1")
            return False

        return True
