# tests/conftest.py
import pytest


# Assets from the built-in database whose real size is allowed by their PHT profile.
CLEAN_ADS = {
    2: {"fileName": "cb1_ST112HW_29.png", "type": "png", "w": "174", "h": "136"},
    3: {"fileName": "g1_ST112HW_29.png", "type": "png", "w": "360", "h": "180"},
    4: {"fileName": "boot_ST112HW_29.m2v", "type": "m2v", "w": "480", "h": "240"},
}

IMAGE_ATTRIBUTE_ORDER = [
    "id", "zOrder", "type", "w", "h", "x", "y",
    "fileName", "resolution", "duration", "align", "style",
]


def make_ad(pht=2, image_id="1", drop=(), genre="255", lang="eng",
            start='"2024-01-01T00:00:00+02:00"', expiry='"2024-12-31T23:59:59+02:00"',
            **image_overrides):
    """Description of one advertInfo entry that passes every check for ``pht``."""
    image = {
        "id": image_id,
        "zOrder": "1",
        "x": "0",
        "y": "0",
        "resolution": "small",
        "duration": "10",
        "align": "1",
        "style": "1",
    }
    image.update(CLEAN_ADS[pht])
    image.update(image_overrides)
    return {
        "image": image,
        "animate": {"style": "1", "delay": "0", "pixel": "2", "dur": "5", "repeat": "0"},
        "genre": genre,
        "lang": lang,
        "adsStartTime": start,
        "adsExpirationTime": expiry,
        "drop": set(drop),
    }


def make_zone(pht, ad_count=1, declared_ads=None, ads=None):
    """An adZone with ``ad_count`` clean ads (distinct image ids)."""
    if ads is None:
        ads = [make_ad(pht, image_id=str(i)) for i in range(1, ad_count + 1)]
    return {
        "pht": str(pht),
        "declared_ads": len(ads) if declared_ads is None else declared_ads,
        "ads": ads,
    }


def render_ad(ad):
    lines = ["    <advertInfo>"]
    if "image" not in ad["drop"]:
        attrs = " ".join(
            f'{name}="{ad["image"][name]}"'
            for name in IMAGE_ATTRIBUTE_ORDER + sorted(set(ad["image"]) - set(IMAGE_ATTRIBUTE_ORDER))
            if name in ad["image"] and ad["image"][name] is not None
        )
        lines.append(f"      <image {attrs}/>")
    if "animate" not in ad["drop"]:
        attrs = " ".join(f'{k}="{v}"' for k, v in ad["animate"].items())
        lines.append(f"      <animate {attrs}/>")
    for tag in ("genre", "lang", "adsStartTime", "adsExpirationTime"):
        if tag not in ad["drop"]:
            lines.append(f"      <{tag}>{ad[tag]}</{tag}>")
    lines.append("    </advertInfo>")
    return lines


def build_epg(zones, declared_zones=None, declared_total=None, root="start"):
    """Render an EPG document; declared counts default to the real ones."""
    total_ads = sum(len(z["ads"]) for z in zones)
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f"<{root}>",
        f"  <numberOfAdZones>{len(zones) if declared_zones is None else declared_zones}</numberOfAdZones>",
        f"  <totalnumberOfAds>{total_ads if declared_total is None else declared_total}</totalnumberOfAds>",
    ]
    for zone in zones:
        lines.append("  <adZone>")
        lines.append(f"    <PHT>{zone['pht']}</PHT>")
        lines.append(f"    <numberOfAds>{zone['declared_ads']}</numberOfAds>")
        for ad in zone["ads"]:
            lines.extend(render_ad(ad))
        lines.append("  </adZone>")
    lines.append(f"</{root}>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def clean_xml():
    """A valid document with PHT 2, 3 and 4 zones."""
    return build_epg([make_zone(2, 2), make_zone(3, 1), make_zone(4, 1)])


@pytest.fixture
def invalid_xml():
    """A document with a dimension mismatch in its only zone."""
    ad = make_ad(2, fileName="cb3_ST112HW_29.png")
    return build_epg([make_zone(2, ads=[ad])])
