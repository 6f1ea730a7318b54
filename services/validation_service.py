"""
Validation Service
==================

Orchestrates validation workflow following Single Responsibility Principle.
Only handles validation orchestration.
"""

import re
from collections import Counter
from typing import Dict, List, Optional

from managers.asset_manager import AssetMap
from validators.models import ValidationError, ValidationResult
from validators.validation_pipeline import ValidationPipeline


_TAG_PATTERN = re.compile(r"\{([A-Za-z-]+)\}")


class ValidationService:
    """
    Service responsible for orchestrating validation process.

    Follows SRP: Only handles validation logic.
    """

    def __init__(self, pipeline: ValidationPipeline = None):
        """
        Initialize validation service.

        Args:
            pipeline: Validation pipeline (dependency injection)
        """
        self.pipeline = pipeline if pipeline is not None else ValidationPipeline(verbose=False)

    def validate_xml(
        self, xml_content: str, asset_overrides: Optional[AssetMap] = None
    ) -> ValidationResult:
        """
        Validate EPG document text.

        Args:
            xml_content: XML content to validate
            asset_overrides: Replacement asset map for this call only

        Returns:
            ValidationResult
        """
        if asset_overrides is not None:
            return ValidationPipeline(asset_overrides, verbose=False).validate_text(xml_content)
        return self.pipeline.validate_text(xml_content)

    def validate_file(self, xml_file: str) -> ValidationResult:
        """
        Validate an EPG document on disk.

        Args:
            xml_file: Path to XML file

        Returns:
            ValidationResult
        """
        return self.pipeline.validate_file(xml_file)

    def is_valid(self, validation_result: ValidationResult) -> bool:
        return validation_result.is_valid

    @staticmethod
    def get_error_tag(message: str) -> str:
        """
        Machine-readable tag of an error message.

        Uses the bracketed tag (e.g. "{Dimension-Mismatch}") when present,
        otherwise classifies the message by its wording.

        Args:
            message: Error message

        Returns:
            Tag name without brackets
        """
        match = _TAG_PATTERN.search(message)
        if match:
            return match.group(1)
        if "Missing" in message:
            return "Missing-Element"
        if "Invalid" in message:
            return "Invalid-Value"
        if "Expected" in message:
            return "Count-Mismatch"
        return "Validation-Error"

    @staticmethod
    def count_errors_by_tag(errors: List[ValidationError]) -> Dict[str, int]:
        """
        Count errors per machine-readable tag.

        Args:
            errors: Validation errors

        Returns:
            Tag -> count, sorted by tag
        """
        counts = Counter(ValidationService.get_error_tag(e.message) for e in errors)
        return dict(sorted(counts.items()))

    def get_error_summary(self, validation_result: ValidationResult) -> str:
        """
        Get human-readable error summary.

        Args:
            validation_result: Result from validate_xml()

        Returns:
            Error summary string
        """
        if self.is_valid(validation_result):
            return "No errors"

        counts = self.count_errors_by_tag(validation_result.errors)
        parts = [f"{tag}: {count}" for tag, count in counts.items()]
        return "; ".join(parts) if parts else "Validation failed"
