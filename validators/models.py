"""
models.py

Data contract shared by the validator and everything that reports on it
(CLI, export, history, web front end).
"""

from typing import Any, Dict, List, Optional


class ValidationError:
    """Represents a single validation finding."""

    def __init__(
        self,
        line: int,
        message: str,
        severity: str = "error",
        zone_index: Optional[int] = None,
        pht_id: Optional[int] = None,
        field: Optional[str] = None,
    ):
        self.line = line if line and line > 0 else 1
        self.message = message
        self.severity = severity  # 'error', 'warning'
        self.zone_index = zone_index
        self.pht_id = pht_id
        self.field = field

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "message": self.message,
            "type": self.severity,
            "adZone": self.zone_index,
            "pht": self.pht_id,
            "field": self.field,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationError":
        return cls(
            line=data.get("line", 1),
            message=data.get("message", ""),
            severity=data.get("type", "error"),
            zone_index=data.get("adZone"),
            pht_id=data.get("pht"),
            field=data.get("field"),
        )

    def __eq__(self, other):
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        location = f"line {self.line}"
        if self.zone_index is not None:
            location += f", AdZone {self.zone_index}"
        return f"[{self.severity}] {self.message} ({location})"


class ValidationSummary:
    """Declared vs. actual counts of one validation run."""

    def __init__(
        self,
        total_ad_zones: int = 0,
        expected_ad_zones: int = 0,
        total_ads: int = 0,
        expected_ads: int = 0,
        missing_tags: List[str] = None,
        invalid_attributes: List[str] = None,
    ):
        self.total_ad_zones = total_ad_zones
        self.expected_ad_zones = expected_ad_zones
        self.total_ads = total_ads
        self.expected_ads = expected_ads
        self.missing_tags = list(missing_tags or [])
        self.invalid_attributes = list(invalid_attributes or [])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalAdZones": self.total_ad_zones,
            "expectedAdZones": self.expected_ad_zones,
            "totalAds": self.total_ads,
            "expectedAds": self.expected_ads,
            "missingTags": list(self.missing_tags),
            "invalidAttributes": list(self.invalid_attributes),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationSummary":
        return cls(
            total_ad_zones=data.get("totalAdZones", 0),
            expected_ad_zones=data.get("expectedAdZones", 0),
            total_ads=data.get("totalAds", 0),
            expected_ads=data.get("expectedAds", 0),
            missing_tags=data.get("missingTags", []),
            invalid_attributes=data.get("invalidAttributes", []),
        )

    def __eq__(self, other):
        if not isinstance(other, ValidationSummary):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"ValidationSummary({self.to_dict()})"


class ValidationResult:
    """Holds the outcome of validating one EPG document."""

    def __init__(
        self,
        errors: List[ValidationError] = None,
        warnings: List[ValidationError] = None,
        present_phts: List[int] = None,
        summary: ValidationSummary = None,
    ):
        self.errors = list(errors or [])
        self.warnings = list(warnings or [])
        self.present_phts = sorted(set(present_phts or []))
        self.summary = summary if summary is not None else ValidationSummary()

    @property
    def is_valid(self) -> bool:
        """True iff no errors were found; warnings do not count."""
        return len(self.errors) == 0

    def total_errors(self) -> int:
        return len(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "presentPHTs": list(self.present_phts),
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationResult":
        return cls(
            errors=[ValidationError.from_dict(e) for e in data.get("errors", [])],
            warnings=[ValidationError.from_dict(w) for w in data.get("warnings", [])],
            present_phts=data.get("presentPHTs", []),
            summary=ValidationSummary.from_dict(data.get("summary", {})),
        )

    def __eq__(self, other):
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        status = "valid" if self.is_valid else f"{len(self.errors)} errors"
        return f"ValidationResult({status}, PHTs={self.present_phts})"
