"""
Statistics Service
==================

Provides statistics and reporting following Single Responsibility Principle.
Only handles data analysis and statistics.
"""

from typing import Dict, List

from validators.models import ValidationError, ValidationResult
from validators.pht_rules import PHT_PROFILES

from .validation_service import ValidationService


class StatisticsService:
    """
    Service responsible for summarizing validation results.

    Follows SRP: Only handles statistics and reporting.
    """

    def __init__(self):
        """Initialize statistics service."""
        self.profiles = PHT_PROFILES

    def get_pht_presence(self, present_phts: List[int]) -> List[Dict]:
        """
        Presence of every catalog PHT in a document.

        Args:
            present_phts: PHT ids found in the document

        Returns:
            One row per catalog profile: id, name, present
        """
        present = set(present_phts)
        return [
            {
                "id": pht_id,
                "name": self.profiles[pht_id].name,
                "present": pht_id in present,
            }
            for pht_id in sorted(self.profiles.keys())
        ]

    def get_missing_phts(self, present_phts: List[int]) -> List[int]:
        return [row["id"] for row in self.get_pht_presence(present_phts) if not row["present"]]

    def count_errors_by_tag(self, errors: List[ValidationError]) -> Dict[str, int]:
        """Tag -> count, sorted by tag. Same counting as ValidationService."""
        return ValidationService.count_errors_by_tag(errors)

    def count_errors_by_zone(self, result: ValidationResult) -> Dict[int, int]:
        """Number of errors per AdZone; document-level errors are left out."""
        counts: Dict[int, int] = {}
        for error in result.errors:
            if error.zone_index is not None:
                counts[error.zone_index] = counts.get(error.zone_index, 0) + 1
        return dict(sorted(counts.items()))

    def format_pht_presence_table(self, present_phts: List[int]) -> str:
        """
        Format PHT presence as readable table.

        Args:
            present_phts: PHT ids found in the document

        Returns:
            Formatted table string
        """
        lines = []
        lines.append("=" * 80)
        lines.append("PHT Type Presence")
        lines.append("=" * 80)
        lines.append(f"{'PHT':<6} {'Name':<30} {'Status':<12}")
        lines.append("-" * 80)

        for row in self.get_pht_presence(present_phts):
            status = "Present" if row["present"] else "Missing"
            lines.append(f"{row['id']:<6} {row['name']:<30} {status:<12}")

        unknown = sorted(set(present_phts) - set(self.profiles.keys()))
        if unknown:
            lines.append(
                f"{'N/A':<6} {'Unknown PHT ids':<30} {', '.join(str(p) for p in unknown):<12}"
            )

        lines.append("=" * 80)
        return "\n".join(lines)

    def format_summary_table(self, result: ValidationResult) -> str:
        """
        Format declared vs. found counts and error tags.

        Args:
            result: Validation result

        Returns:
            Formatted table string
        """
        summary = result.summary
        lines = []
        lines.append("=" * 80)
        lines.append("Validation Summary")
        lines.append("=" * 80)
        lines.append(f"{'Item':<30} {'Declared':<12} {'Found':<12}")
        lines.append("-" * 80)
        lines.append(f"{'AdZones':<30} {summary.expected_ad_zones:<12} {summary.total_ad_zones:<12}")
        lines.append(f"{'Ads':<30} {summary.expected_ads:<12} {summary.total_ads:<12}")

        if summary.missing_tags:
            lines.append(f"{'Missing tags':<30} {', '.join(summary.missing_tags)}")
        if summary.invalid_attributes:
            lines.append(f"{'Invalid attributes':<30} {', '.join(summary.invalid_attributes)}")

        counts = self.count_errors_by_tag(result.errors)
        if counts:
            lines.append("-" * 80)
            lines.append(f"{'Error Tag':<30} {'Count':<12}")
            lines.append("-" * 80)
            for tag, count in counts.items():
                lines.append(f"{tag:<30} {count:<12}")

        lines.append("-" * 80)
        lines.append(f"{'TOTAL ERRORS':<30} {len(result.errors):<12}")
        lines.append("=" * 80)

        return "\n".join(lines)
