"""
epg_validator.py

Logical validation of EPG AdZone documents.

Stages run in a fixed order and every finding is collected, so one pass
reports as much as possible:

1. Parse (fatal on failure)
2. Root element
3. Declared vs. actual adZone count
4. Duplicate PHT pre-scan (stops before ad-level checks when any PHT repeats)
5. Per zone: PHT profile, ad count range, declared vs. actual ads, and per ad
   the <image>/<animate> attributes, image ids, file types, asset dimensions,
   genre/lang/time values and required child tags
6. Declared vs. actual total ads

Usage:
    python -m validators.epg_validator samples/epg.xml
"""

import re
from typing import Dict, List, Optional, Set, Union

from lxml import etree

from core.settings import (
    AD_TAG,
    ANIMATE_TAG,
    EXPECTED_ROOT_TAG,
    IMAGE_TAG,
    TOTAL_ADS_TAG,
    ZONE_AD_COUNT_TAG,
    ZONE_COUNT_TAG,
    ZONE_PHT_TAG,
    ZONE_TAG,
)
from managers.asset_manager import AssetManager, AssetMap

from . import pht_rules
from .line_index import find_line
from .models import ValidationError, ValidationResult, ValidationSummary


_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)

# (tag, check, error tag, what the value should look like)
_SCALAR_CHECKS = [
    ("genre", pht_rules.validate_genre, "Invalid-Genre", "a positive genre code"),
    ("lang", pht_rules.validate_language, "Invalid-Language", "3 lowercase letters"),
    (
        "adsStartTime",
        pht_rules.validate_time_format,
        "Invalid-Time-Format",
        '"YYYY-MM-DDTHH:MM:SS+HH:MM"',
    ),
    (
        "adsExpirationTime",
        pht_rules.validate_time_format,
        "Invalid-Time-Format",
        '"YYYY-MM-DDTHH:MM:SS+HH:MM"',
    ),
]

_OUTCOME_TAGS = {
    pht_rules.INVALID_VALUE: "Invalid-Value",
    pht_rules.PATTERN_MISMATCH: "Pattern-Mismatch",
    pht_rules.CHECK_FAILED: "Validation-Failed",
}


def _text(element) -> str:
    """Text content of an element, including nested text."""
    if element is None:
        return ""
    return "".join(element.itertext())


def _child(element, tag: str):
    """First direct child named ``tag``, in any namespace or none."""
    return element.find(f"{{*}}{tag}")


def _descendants(element, tag: str) -> list:
    """All descendants named ``tag`` (matched by local name), in document order."""
    return element.xpath(".//*[local-name()=$name]", name=tag)


def _parse_int(text: Optional[str], default: int = 0) -> int:
    """Leading integer of a string (like parseInt), or the default."""
    if text is None:
        return default
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else default


class EPGValidator:
    """Validates one EPG document against the PHT rule catalog and asset store."""

    def __init__(
        self,
        xml_text: Union[str, bytes],
        asset_overrides: Optional[Union[AssetMap, AssetManager]] = None,
    ):
        """
        Initialize validator.

        Args:
            xml_text: Raw document text
            asset_overrides: Replacement asset map or AssetManager
                (default: built-in asset database)
        """
        if isinstance(xml_text, (bytes, bytearray)):
            xml_text = xml_text.decode("utf-8", errors="replace")
        self.xml_text = xml_text
        self.document_lines = xml_text.split("\n")
        if isinstance(asset_overrides, AssetManager):
            self.assets = asset_overrides
        else:
            self.assets = AssetManager(asset_overrides)
        self.root = None
        self.errors: List[ValidationError] = []
        self.warnings: List[ValidationError] = []
        self._missing_tags: Set[str] = set()
        self._invalid_attributes: Set[str] = set()

    def validate_all(self) -> ValidationResult:
        """
        Run every validation stage.

        Returns:
            ValidationResult (never raises for malformed input)
        """
        self.errors = []
        self.warnings = []
        self._missing_tags = set()
        self._invalid_attributes = set()

        if not self._parse():
            return self._build_result([], 0, 0, 0, 0)

        self._validate_root()

        expected_zones = self._read_declared_count(ZONE_COUNT_TAG)
        expected_ads = self._read_declared_count(TOTAL_ADS_TAG)

        zones = _descendants(self.root, ZONE_TAG)
        if expected_zones != len(zones):
            self._add_error(
                find_line(self.document_lines, f"<{ZONE_COUNT_TAG}"),
                f"{{Count-Mismatch}} Expected {expected_zones} adZones but found {len(zones)}",
                field=ZONE_COUNT_TAG,
            )

        zone_lines = self._locate_zones(len(zones))
        zone_phts = [self._read_zone_pht(zone) for zone in zones]
        present_phts = sorted(set(zone_phts))

        if self._validate_duplicate_phts(zone_phts, zone_lines):
            return self._build_result(
                present_phts, len(zones), expected_zones, 0, expected_ads
            )

        total_ads = 0
        for zone_index, zone in enumerate(zones, 1):
            total_ads += self._validate_zone(
                zone, zone_index, zone_phts[zone_index - 1], zone_lines[zone_index - 1]
            )

        if expected_ads != total_ads:
            self._add_error(
                find_line(self.document_lines, f"<{TOTAL_ADS_TAG}"),
                f"{{Count-Mismatch}} Expected {expected_ads} total ads but found {total_ads}",
                field=TOTAL_ADS_TAG,
            )

        return self._build_result(
            present_phts, len(zones), expected_zones, total_ads, expected_ads
        )

    # ============================================================================
    # Document level
    # ============================================================================
    def _parse(self) -> bool:
        parser = etree.XMLParser(resolve_entities="internal", no_network=True)
        try:
            self.root = etree.fromstring(self.xml_text.encode("utf-8"), parser)
        except (etree.XMLSyntaxError, ValueError) as e:
            self._add_error(1, f"Invalid XML structure: {e}")
            return False
        return True

    def _validate_root(self):
        root_name = etree.QName(self.root).localname
        if root_name != EXPECTED_ROOT_TAG:
            self._add_error(
                find_line(self.document_lines, f"<{root_name}"),
                f"Root element must be <{EXPECTED_ROOT_TAG}>, found <{root_name}>",
            )

    def _read_declared_count(self, tag: str) -> int:
        matches = _descendants(self.root, tag)
        element = matches[0] if matches else None
        if element is None:
            self._add_error(
                find_line(self.document_lines, tag),
                f"Missing <{tag}> element",
                field=tag,
            )
            return 0
        return _parse_int(_text(element))

    def _locate_zones(self, zone_count: int) -> List[int]:
        """Line of each adZone start tag, each search starting after the previous zone."""
        lines = []
        search_from = 0
        for _ in range(zone_count):
            line = find_line(self.document_lines, f"<{ZONE_TAG}", search_from)
            lines.append(line)
            search_from = line
        return lines

    def _read_zone_pht(self, zone) -> int:
        return _parse_int(_text(_child(zone, ZONE_PHT_TAG)))

    def _validate_duplicate_phts(self, zone_phts: List[int], zone_lines: List[int]) -> bool:
        """
        Report every PHT declared by more than one zone.

        Returns:
            True if duplicates were found and ad-level validation must stop
        """
        zones_by_pht: Dict[int, List[int]] = {}
        for zone_index, pht_id in enumerate(zone_phts, 1):
            zones_by_pht.setdefault(pht_id, []).append(zone_index)

        found = False
        for pht_id, zone_indices in zones_by_pht.items():
            if len(zone_indices) < 2:
                continue
            found = True
            repeat_index = zone_indices[1]
            listed = ", ".join(str(i) for i in zone_indices)
            self._add_error(
                self._line_within(f"<{ZONE_PHT_TAG}", zone_lines[repeat_index - 1]),
                f"{{Duplicate-PHT}} PHT {pht_id} is declared by multiple AdZones: {listed}",
                zone_index=repeat_index,
                pht_id=pht_id,
                field=ZONE_PHT_TAG,
            )
        return found

    # ============================================================================
    # Zone level
    # ============================================================================
    def _validate_zone(self, zone, zone_index: int, pht_id: int, zone_line: int) -> int:
        """
        Validate one adZone and its ads.

        Returns:
            Number of advertInfo entries found in the zone
        """
        profile = pht_rules.lookup_profile(pht_id)
        if profile is None:
            self._add_error(
                self._line_within(f"<{ZONE_PHT_TAG}", zone_line),
                f"{{Invalid-PHT}} AdZone {zone_index}: Unknown PHT type {pht_id}",
                zone_index=zone_index,
                pht_id=pht_id,
                field=ZONE_PHT_TAG,
            )

        declared_ads = _parse_int(_text(_child(zone, ZONE_AD_COUNT_TAG)))
        ads = _descendants(zone, AD_TAG)
        count_line = self._line_within(f"<{ZONE_AD_COUNT_TAG}", zone_line)

        if profile is not None and not profile.allows_ad_count(declared_ads):
            self._add_error(
                count_line,
                f"{{PHT-Rule-Violation}} AdZone {zone_index} (PHT {pht_id} - {profile.name}): "
                f"numberOfAds {declared_ads} is outside the allowed range "
                f"{profile.min_ads}-{profile.max_ads}",
                zone_index=zone_index,
                pht_id=pht_id,
                field=ZONE_AD_COUNT_TAG,
            )

        if declared_ads != len(ads):
            self._add_error(
                count_line,
                f"{{Count-Mismatch}} AdZone {zone_index} (PHT {pht_id}): "
                f"Expected {declared_ads} ads but found {len(ads)}",
                zone_index=zone_index,
                pht_id=pht_id,
                field=ZONE_AD_COUNT_TAG,
            )

        seen_ids: Set[str] = set()
        search_from = zone_line - 1
        for ad_index, ad in enumerate(ads, 1):
            ad_line = find_line(self.document_lines, f"<{AD_TAG}", search_from)
            search_from = ad_line
            self._validate_ad(ad, zone_index, ad_index, pht_id, profile, seen_ids, ad_line)

        return len(ads)

    # ============================================================================
    # Ad level
    # ============================================================================
    def _validate_ad(self, ad, zone_index, ad_index, pht_id, profile, seen_ids, ad_line):
        image = _child(ad, IMAGE_TAG)
        if image is not None:
            image_line = self._line_within(f"<{IMAGE_TAG}", ad_line)
            self._validate_image(
                image, zone_index, ad_index, pht_id, profile, seen_ids, image_line
            )

        animate = _child(ad, ANIMATE_TAG)
        if animate is not None and profile is not None:
            animate_line = self._line_within(f"<{ANIMATE_TAG}", ad_line)
            self._validate_attributes(
                animate,
                ANIMATE_TAG,
                profile.animate_attribute_specs,
                zone_index,
                ad_index,
                pht_id,
                animate_line,
            )

        self._validate_ad_scalars(ad, zone_index, ad_index, pht_id, ad_line)

        if profile is not None:
            for tag in profile.required_child_tags:
                if _child(ad, tag) is None:
                    self._missing_tags.add(tag)
                    self._add_error(
                        ad_line,
                        f"{{Missing-Tag}} Missing <{tag}> in AdZone {zone_index}, Ad {ad_index}",
                        zone_index=zone_index,
                        pht_id=pht_id,
                        field=tag,
                    )

    def _validate_image(self, image, zone_index, ad_index, pht_id, profile, seen_ids, image_line):
        context = f"(AdZone {zone_index}, Ad {ad_index})"

        if profile is not None:
            self._validate_attributes(
                image,
                IMAGE_TAG,
                profile.image_attribute_specs,
                zone_index,
                ad_index,
                pht_id,
                image_line,
            )

        image_id = image.get("id")
        if image_id is not None:
            if image_id in seen_ids:
                self._invalid_attributes.add("id")
                self._add_error(
                    self._line_within("id=", image_line),
                    f"{{Duplicate-ID}} Duplicate image id '{image_id}' in AdZone {zone_index} {context}",
                    zone_index=zone_index,
                    pht_id=pht_id,
                    field="id",
                )
            else:
                seen_ids.add(image_id)

        file_type = image.get("type")
        if profile is not None and file_type is not None and not profile.allows_file_type(file_type):
            self._invalid_attributes.add("type")
            allowed = ", ".join(sorted(profile.allowed_asset_file_types))
            self._add_error(
                self._line_within("type=", image_line),
                f"{{Invalid-File-Type}} File type '{file_type}' is not allowed for PHT {pht_id} "
                f"(allowed: {allowed}) {context}",
                zone_index=zone_index,
                pht_id=pht_id,
                field="type",
            )

        file_name = image.get("fileName")
        if file_name:
            self._validate_asset(image, file_name, zone_index, ad_index, pht_id, image_line)

    def _validate_asset(self, image, file_name, zone_index, ad_index, pht_id, image_line):
        """Cross-check declared image dimensions against the asset store."""
        context = f"(AdZone {zone_index}, Ad {ad_index})"
        line = self._line_within(file_name, image_line)
        record = self.assets.lookup(file_name)

        if record is None:
            self._add_error(
                line,
                f"{{File-Not-Found}} File {file_name} not found in asset database {context}",
                zone_index=zone_index,
                pht_id=pht_id,
                field="fileName",
            )
            return

        declared_w = _parse_int(image.get("w"))
        declared_h = _parse_int(image.get("h"))
        if declared_w != record.actual_width or declared_h != record.actual_height:
            self._add_error(
                line,
                f"{{Dimension-Mismatch}} Dimension mismatch for {file_name}: XML declares "
                f"{declared_w}x{declared_h} but actual is {record.dimensions} {context}",
                zone_index=zone_index,
                pht_id=pht_id,
                field="fileName",
            )

    def _validate_attributes(self, element, tag, specs, zone_index, ad_index, pht_id, element_line):
        """Apply a profile's attribute specs to one <image> or <animate> element."""
        context = f"(AdZone {zone_index}, Ad {ad_index})"

        for attr, spec in specs.items():
            value = element.get(attr)
            if value is None:
                if spec.required:
                    self._invalid_attributes.add(attr)
                    self._add_error(
                        element_line,
                        f"{{Missing-Attribute}} Missing '{attr}' attribute in <{tag}> element {context}",
                        zone_index=zone_index,
                        pht_id=pht_id,
                        field=attr,
                    )
                continue

            outcome = spec.check_value(value)
            if outcome is None:
                continue

            self._invalid_attributes.add(attr)
            if outcome == pht_rules.INVALID_VALUE:
                detail = f"Invalid value '{value}' for '{attr}' in <{tag}> (allowed: {', '.join(spec.allowed_values)})"
            elif outcome == pht_rules.PATTERN_MISMATCH:
                detail = f"Value '{value}' for '{attr}' in <{tag}> does not match pattern {spec.pattern.pattern}"
            else:
                detail = f"Value '{value}' for '{attr}' in <{tag}> failed validation ({spec.describe()})"

            self._add_error(
                self._line_within(f"{attr}=", element_line),
                f"{{{_OUTCOME_TAGS[outcome]}}} {detail} {context}",
                zone_index=zone_index,
                pht_id=pht_id,
                field=attr,
            )

    def _validate_ad_scalars(self, ad, zone_index, ad_index, pht_id, ad_line):
        context = f"(AdZone {zone_index}, Ad {ad_index})"

        for tag, check, error_tag, expected in _SCALAR_CHECKS:
            element = _child(ad, tag)
            if element is None:
                continue
            value = _text(element).strip()
            if not check(value):
                self._add_error(
                    self._line_within(f"<{tag}", ad_line),
                    f"{{{error_tag}}} Invalid {tag} '{value}' (expected {expected}) {context}",
                    zone_index=zone_index,
                    pht_id=pht_id,
                    field=tag,
                )

    # ============================================================================
    # Helpers
    # ============================================================================
    def _line_within(self, needle: str, anchor_line: int) -> int:
        """Line of ``needle`` at or after ``anchor_line``; the anchor itself when not found."""
        return max(find_line(self.document_lines, needle, anchor_line - 1), anchor_line)

    def _add_error(self, line, message, zone_index=None, pht_id=None, field=None):
        self.errors.append(
            ValidationError(
                line=line,
                message=message,
                severity="error",
                zone_index=zone_index,
                pht_id=pht_id,
                field=field,
            )
        )

    def _build_result(self, present_phts, total_zones, expected_zones, total_ads, expected_ads):
        summary = ValidationSummary(
            total_ad_zones=total_zones,
            expected_ad_zones=expected_zones,
            total_ads=total_ads,
            expected_ads=expected_ads,
            missing_tags=sorted(self._missing_tags),
            invalid_attributes=sorted(self._invalid_attributes),
        )
        return ValidationResult(
            errors=list(self.errors),
            warnings=list(self.warnings),
            present_phts=present_phts,
            summary=summary,
        )


def validate(
    xml_text: Union[str, bytes],
    asset_overrides: Optional[Union[AssetMap, AssetManager]] = None,
) -> ValidationResult:
    """
    Validate EPG document text.

    Args:
        xml_text: Raw document text
        asset_overrides: Replacement asset map (default: built-in asset database)

    Returns:
        ValidationResult
    """
    validator = EPGValidator(xml_text, asset_overrides)
    return validator.validate_all()


def validate_file(
    xml_file: str,
    asset_overrides: Optional[Union[AssetMap, AssetManager]] = None,
) -> ValidationResult:
    """
    Validate an EPG document on disk.

    Args:
        xml_file: Path to XML file
        asset_overrides: Replacement asset map (default: built-in asset database)

    Returns:
        ValidationResult
    """
    with open(xml_file, "r", encoding="utf-8", errors="replace") as f:
        xml_text = f.read()
    return validate(xml_text, asset_overrides)


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python -m validators.epg_validator <xml_file>")
        sys.exit(1)

    xml_file = sys.argv[1]
    print(f"Validating {xml_file}")
    print("=" * 80)

    result = validate_file(xml_file)

    if result.is_valid:
        print(" All EPG validation rules passed!")
    else:
        print(f" Found {len(result.errors)} validation error(s):\n")
        for error in result.errors:
            print(error)

    sys.exit(0 if result.is_valid else 1)
