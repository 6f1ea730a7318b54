"""
Output Formatter
================

Handles console output formatting.
Follows SRP: Only handles output formatting.
"""

import sys
from typing import List

from validators.models import ValidationError, ValidationResult


class OutputFormatter:
    """
    Formatter for console output.

    Follows SRP: Only handles output formatting.
    """

    def print_header(self, title: str) -> None:
        """
        Print formatted header.

        Args:
            title: Header title
        """
        print("\n" + "=" * 80)
        print(f" {title}")
        print("=" * 80)

    def print_validation_start(self, file_path: str) -> None:
        self.print_header(f"Validating {file_path}")

    def print_result_status(self, file_name: str, result: ValidationResult) -> None:
        """
        Print one-line pass/fail status.

        Args:
            file_name: Validated file name
            result: Validation result
        """
        if result.is_valid:
            self.print_success(f"{file_name}: all EPG validation rules passed")
        else:
            print(f"✗ {file_name}: {result.total_errors()} validation error(s)")

    def print_errors(self, errors: List[ValidationError], shown_of: int = None) -> None:
        """
        Print errors as a table.

        Args:
            errors: Errors to print (usually filtered)
            shown_of: Unfiltered error count, printed when it differs
        """
        if not errors:
            if shown_of:
                self.print_info(f"No errors match the filter ({shown_of} in total)")
            return

        print()
        print(f"{'Line':<6} {'AdZone':<7} {'PHT':<5} {'Field':<18} Message")
        print("-" * 80)
        for error in errors:
            zone = error.zone_index if error.zone_index is not None else "-"
            pht = error.pht_id if error.pht_id is not None else "-"
            field = error.field or "-"
            print(f"{error.line:<6} {zone!s:<7} {pht!s:<5} {field:<18} {error.message}")
        print("-" * 80)

        if shown_of is not None and shown_of != len(errors):
            self.print_info(f"Showing {len(errors)} of {shown_of} errors")

    def print_statistics_table(self, stats_text: str) -> None:
        """
        Print statistics table.

        Args:
            stats_text: Formatted statistics text
        """
        print(stats_text)

    def print_error(self, message: str) -> None:
        """
        Print error message.

        Args:
            message: Error message
        """
        print(f"ERROR: {message}", file=sys.stderr)

    def print_warning(self, message: str) -> None:
        """
        Print warning message.

        Args:
            message: Warning message
        """
        print(f"WARNING: {message}", file=sys.stderr)

    def print_success(self, message: str) -> None:
        """
        Print success message.

        Args:
            message: Success message
        """
        print(f"✓ {message}")

    def print_info(self, message: str) -> None:
        """
        Print info message.

        Args:
            message: Info message
        """
        print(f"ℹ {message}")
