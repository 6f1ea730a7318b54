"""
pht_rules.py

Per-profile (PHT, Product Hardware Type) rule catalog for EPG AdZone documents.

Every AdZone declares exactly one PHT. The profile decides:
- how many ads the zone may carry
- which child tags every advertInfo entry must have
- which attributes <image> and <animate> need, and what their values may look like
- which asset file types may be referenced

The catalog is static and read-only; lookups return shared profile objects.
"""

import re
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple


# Outcomes of AttributeSpec.check_value()
INVALID_VALUE = "invalid_value"
PATTERN_MISMATCH = "pattern"
CHECK_FAILED = "check"


class AttributeSpec:
    """Constraint on one attribute: required flag plus at most one value rule."""

    def __init__(
        self,
        required: bool = True,
        pattern: str = None,
        allowed_values: List[str] = None,
        check: Callable[[str], bool] = None,
    ):
        self.required = required
        self.pattern = re.compile(pattern, re.ASCII) if pattern else None
        self.allowed_values = tuple(allowed_values) if allowed_values else None
        self.check = check

    def check_value(self, value: str) -> Optional[str]:
        """
        Check a present attribute value.

        Returns:
            None if the value is acceptable, otherwise one of
            INVALID_VALUE, PATTERN_MISMATCH or CHECK_FAILED.
        """
        if self.allowed_values is not None and value not in self.allowed_values:
            return INVALID_VALUE
        if self.pattern is not None and not self.pattern.fullmatch(value):
            return PATTERN_MISMATCH
        if self.check is not None and not self.check(value):
            return CHECK_FAILED
        return None

    def describe(self) -> str:
        """Short human description of the value rule."""
        if self.allowed_values is not None:
            return "one of " + ", ".join(self.allowed_values)
        if self.pattern is not None:
            return f"pattern {self.pattern.pattern}"
        if self.check is not None:
            return self.check.__doc__ or self.check.__name__
        return "any value"

    def __repr__(self):
        return f"AttributeSpec(required={self.required}, rule={self.describe()!r})"


class PHTProfile:
    """Rule set for one PHT type."""

    def __init__(
        self,
        pht_id: int,
        name: str,
        description: str,
        ad_count_range: Tuple[int, int],
        required_child_tags: List[str],
        image_attribute_specs: Dict[str, AttributeSpec],
        animate_attribute_specs: Dict[str, AttributeSpec],
        allowed_asset_file_types: List[str],
    ):
        self.id = pht_id
        self.name = name
        self.description = description
        self.ad_count_range = ad_count_range
        self.required_child_tags = tuple(required_child_tags)
        self.image_attribute_specs = MappingProxyType(dict(image_attribute_specs))
        self.animate_attribute_specs = MappingProxyType(dict(animate_attribute_specs))
        self.allowed_asset_file_types = frozenset(
            t.lower() for t in allowed_asset_file_types
        )

    @property
    def min_ads(self) -> int:
        return self.ad_count_range[0]

    @property
    def max_ads(self) -> int:
        return self.ad_count_range[1]

    def allows_ad_count(self, count: int) -> bool:
        return self.min_ads <= count <= self.max_ads

    def allows_file_type(self, file_type: str) -> bool:
        return file_type.lower() in self.allowed_asset_file_types

    def __repr__(self):
        return f"PHTProfile({self.id}, {self.name!r})"


# ==============================================================================
# SHARED CHECKS
# ==============================================================================
_DIGITS = re.compile(r"[0-9]+")
_LANGUAGE = re.compile(r"[a-z]{3}")
_QUOTED_TIMESTAMP = re.compile(r'"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+\d{2}:\d{2}"', re.ASCII)


def is_positive_integer_id(value: str) -> bool:
    """must be all digits and greater than 0"""
    return bool(_DIGITS.fullmatch(value)) and int(value) > 0


def validate_genre(genre: str) -> bool:
    """
    Genre codes are decimal digits. 255 and 460 are listed explicitly next to
    the general positive-integer rule; both paths are kept.
    """
    return bool(_DIGITS.fullmatch(genre)) and (
        genre == "255" or genre == "460" or int(genre) > 0
    )


def validate_language(lang: str) -> bool:
    """Three lowercase ASCII letters (ISO 639-2 style)."""
    return bool(_LANGUAGE.fullmatch(lang))


def validate_time_format(time_value: str) -> bool:
    """
    Timestamps are stored as quoted strings inside element text, so the
    surrounding double quotes are part of a valid value.
    """
    return bool(_QUOTED_TIMESTAMP.fullmatch(time_value))


# ==============================================================================
# CATALOG
# ==============================================================================
REQUIRED_CHILD_TAGS = [
    "image",
    "animate",
    "genre",
    "lang",
    "adsStartTime",
    "adsExpirationTime",
]

IMAGE_FILE_TYPES = ["png", "jpg", "jpeg"]
BOOTUP_FILE_TYPES = ["m2v", "mp4", "png", "jpg", "jpeg"]


def _image_specs(widths: List[str], heights: List[str], file_types: List[str]):
    extensions = "|".join(file_types)
    return {
        "id": AttributeSpec(check=is_positive_integer_id),
        "zOrder": AttributeSpec(pattern=r"\d{1,3}"),
        "type": AttributeSpec(allowed_values=file_types),
        "w": AttributeSpec(allowed_values=widths),
        "h": AttributeSpec(allowed_values=heights),
        "x": AttributeSpec(pattern=r"\d+"),
        "y": AttributeSpec(pattern=r"\d+"),
        "fileName": AttributeSpec(pattern=rf"[a-zA-Z0-9_\-\.]+\.({extensions})"),
        "resolution": AttributeSpec(allowed_values=["small", "large"]),
        "duration": AttributeSpec(pattern=r"\d{2}"),
        "align": AttributeSpec(allowed_values=["1", "2", "3"]),
        "style": AttributeSpec(allowed_values=["1", "2", "3"]),
    }


def _animate_specs():
    return {
        "style": AttributeSpec(allowed_values=["1", "2", "3"]),
        "delay": AttributeSpec(pattern=r"\d+"),
        "pixel": AttributeSpec(pattern=r"\d+"),
        "dur": AttributeSpec(pattern=r"\d+"),
        "repeat": AttributeSpec(allowed_values=["0", "1"]),
    }


def _build_catalog() -> Mapping[int, PHTProfile]:
    profiles = [
        PHTProfile(
            pht_id=1,
            name="Home Advert",
            description="Home screen advertisement zone",
            ad_count_range=(1, 15),
            required_child_tags=REQUIRED_CHILD_TAGS,
            image_attribute_specs=_image_specs(
                ["180", "250", "300", "360"],
                ["125", "180", "240", "280"],
                IMAGE_FILE_TYPES,
            ),
            animate_attribute_specs=_animate_specs(),
            allowed_asset_file_types=IMAGE_FILE_TYPES,
        ),
        PHTProfile(
            pht_id=2,
            name="Channel Banner Advert",
            description="Channel banner advertisement zone",
            ad_count_range=(1, 10),
            required_child_tags=REQUIRED_CHILD_TAGS,
            image_attribute_specs=_image_specs(
                ["174", "200", "250"],
                ["136", "150", "180"],
                IMAGE_FILE_TYPES,
            ),
            animate_attribute_specs=_animate_specs(),
            allowed_asset_file_types=IMAGE_FILE_TYPES,
        ),
        PHTProfile(
            pht_id=3,
            name="Guide Advert",
            description="Guide screen advertisement zone",
            ad_count_range=(1, 8),
            required_child_tags=REQUIRED_CHILD_TAGS,
            image_attribute_specs=_image_specs(
                ["360", "400", "450"],
                ["180", "200", "240"],
                IMAGE_FILE_TYPES,
            ),
            animate_attribute_specs=_animate_specs(),
            allowed_asset_file_types=IMAGE_FILE_TYPES,
        ),
        PHTProfile(
            pht_id=4,
            name="BootUp Advert",
            description="Boot-up screen advertisement zone",
            ad_count_range=(1, 5),
            required_child_tags=REQUIRED_CHILD_TAGS,
            image_attribute_specs=_image_specs(
                ["480", "720", "1080"],
                ["240", "360", "540"],
                BOOTUP_FILE_TYPES,
            ),
            animate_attribute_specs=_animate_specs(),
            allowed_asset_file_types=BOOTUP_FILE_TYPES,
        ),
    ]

    catalog = {}
    for profile in profiles:
        if profile.id in catalog:
            raise ValueError(f"Duplicate PHT id in catalog: {profile.id}")
        if profile.min_ads < 1:
            raise ValueError(f"PHT {profile.id}: minimum ad count must be >= 1")
        catalog[profile.id] = profile
    return MappingProxyType(catalog)


PHT_PROFILES = _build_catalog()


def lookup_profile(pht_id: int) -> Optional[PHTProfile]:
    """Return the profile for a PHT id, or None when the id is unknown."""
    return PHT_PROFILES.get(pht_id)


def get_all_profile_ids() -> List[int]:
    return sorted(PHT_PROFILES.keys())
