"""
Export Service
==============

Handles report export operations following Single Responsibility Principle.
Only handles formatting and writing of validation reports.
"""

import csv
import io
import json
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.settings import EXPORT_DIR
from managers.file_manager import FileManager
from validators.line_index import line_preview
from validators.models import ValidationError, ValidationResult

from .validation_service import ValidationService


CSV_HEADERS = ["Line", "AdZone", "PHT", "Error Type", "Message", "Field"]


def strip_tags(message: str) -> str:
    """Remove the curly braces of bracketed tags from a message."""
    return message.replace("{", "").replace("}", "")


class ExportService:
    """
    Service responsible for exporting validation errors to files.

    Follows SRP: Only handles export operations.
    """

    def __init__(self, output_dir: str = None, file_manager: FileManager = None):
        """
        Initialize export service.

        Args:
            output_dir: Directory for exported reports (default: EXPORT_DIR)
            file_manager: File system helper (dependency injection)
        """
        self.output_dir = str(output_dir) if output_dir is not None else str(EXPORT_DIR)
        self.file_manager = file_manager if file_manager is not None else FileManager()

    @staticmethod
    def filter_errors(
        errors: List[ValidationError],
        pht_id: Optional[int] = None,
        zone_index: Optional[int] = None,
        field: Optional[str] = None,
    ) -> List[ValidationError]:
        """
        Select errors for one PHT, zone and/or field. None means "any".

        Returns:
            New list; the input is not modified
        """
        selected = []
        for error in errors:
            if pht_id is not None and error.pht_id != pht_id:
                continue
            if zone_index is not None and error.zone_index != zone_index:
                continue
            if field is not None and error.field != field:
                continue
            selected.append(error)
        return selected

    def errors_to_csv(self, errors: List[ValidationError]) -> str:
        """
        Render errors as CSV with every cell quoted.

        Columns: Line, AdZone, PHT, Error Type (always "ERROR"),
        Message (tag braces removed), Field.
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        for error in errors:
            writer.writerow(
                [
                    error.line,
                    error.zone_index if error.zone_index is not None else "",
                    error.pht_id if error.pht_id is not None else "",
                    "ERROR",
                    strip_tags(error.message),
                    error.field or "",
                ]
            )
        return buffer.getvalue()

    def errors_to_json(
        self,
        errors: List[ValidationError],
        file_name: str,
        result: Optional[ValidationResult] = None,
        xml_text: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Build the JSON report structure.

        Args:
            errors: Errors to include (usually a filtered subset)
            file_name: Validated file name
            result: Full validation result, adds its summary when given
            xml_text: Validated document, source of each issue's xmlContent

        Returns:
            Report dictionary
        """
        summary: Dict[str, Any] = {
            "totalIssues": len(errors),
            "errors": len(result.errors) if result is not None else len(errors),
        }
        if result is not None:
            summary["validation"] = result.summary.to_dict()
            summary["presentPHTs"] = list(result.present_phts)
        lines = xml_text.split("\n") if xml_text is not None else []

        return {
            "fileName": file_name,
            "validationDate": datetime.now().isoformat(),
            "summary": summary,
            "issues": [
                {
                    "line": error.line,
                    "adZone": error.zone_index,
                    "pht": error.pht_id,
                    "errorType": error.severity,
                    "errorTag": ValidationService.get_error_tag(error.message),
                    "message": error.message,
                    "field": error.field,
                    "xmlContent": line_preview(lines, error.line),
                }
                for error in errors
            ],
        }

    def export_csv(self, errors: List[ValidationError], file_name: str) -> str:
        """
        Write the CSV report for a validated file.

        Returns:
            Path to exported file
        """
        self.file_manager.ensure_directory(self.output_dir)
        filepath = os.path.join(
            self.output_dir, self.file_manager.report_filename(file_name, "csv")
        )
        with open(filepath, "w", encoding="utf-8", newline="") as f:
            f.write(self.errors_to_csv(errors))
        return filepath

    def export_json(
        self,
        errors: List[ValidationError],
        file_name: str,
        result: Optional[ValidationResult] = None,
        xml_text: Optional[str] = None,
    ) -> str:
        """
        Write the JSON report for a validated file.

        Returns:
            Path to exported file
        """
        self.file_manager.ensure_directory(self.output_dir)
        filepath = os.path.join(
            self.output_dir, self.file_manager.report_filename(file_name, "json")
        )
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.errors_to_json(errors, file_name, result, xml_text), f, indent=2, ensure_ascii=False)
        return filepath
