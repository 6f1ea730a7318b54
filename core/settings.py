from pathlib import Path

# ==============================================================================
# PROJECT PATHS
# ==============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent

# Directories
HISTORY_DIR = BASE_DIR / "validation_history"
EXPORT_DIR = BASE_DIR / "validation_reports"

# ==============================================================================
# DOCUMENT STRUCTURE
# ==============================================================================
EXPECTED_ROOT_TAG = "start"

ZONE_COUNT_TAG = "numberOfAdZones"
TOTAL_ADS_TAG = "totalnumberOfAds"
ZONE_TAG = "adZone"
ZONE_PHT_TAG = "PHT"
ZONE_AD_COUNT_TAG = "numberOfAds"
AD_TAG = "advertInfo"
IMAGE_TAG = "image"
ANIMATE_TAG = "animate"


# ==============================================================================
# HISTORY SETTINGS
# ==============================================================================
HISTORY_KEY = "epg_validation_history"
MAX_HISTORY_ITEMS = 5

# ==============================================================================
# DEFAULT ASSET DATABASE
# ==============================================================================
# Reference properties of the physical files an EPG document may point at.
# A few records deliberately differ from what the sample documents declare.
DEFAULT_ASSET_DATABASE = {
    "boot_ST112HW_29.m2v": {
        "fileName": "boot_ST112HW_29.m2v",
        "actualWidth": 480,
        "actualHeight": 240,
        "mimeType": "video/mpeg",
        "resolution": "small",
        "fileSize": 2048000,
    },
    "m1_ST112HW_29.png": {
        "fileName": "m1_ST112HW_29.png",
        "actualWidth": 88,
        "actualHeight": 126,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 15360,
    },
    "m2_ST112HW_29.png": {
        "fileName": "m2_ST112HW_29.png",
        "actualWidth": 88,
        "actualHeight": 126,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 15360,
    },
    "m3_ST112HW_29.png": {
        "fileName": "m3_ST112HW_29.png",
        "actualWidth": 90,
        "actualHeight": 128,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 15800,
    },
    "m4_ST112HW_29.png": {
        "fileName": "m4_ST112HW_29.png",
        "actualWidth": 88,
        "actualHeight": 126,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 15360,
    },
    "cb1_ST112HW_29.png": {
        "fileName": "cb1_ST112HW_29.png",
        "actualWidth": 174,
        "actualHeight": 136,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 38400,
    },
    "cb2_ST112HW_29.png": {
        "fileName": "cb2_ST112HW_29.png",
        "actualWidth": 174,
        "actualHeight": 136,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 38400,
    },
    "cb3_ST112HW_29.png": {
        "fileName": "cb3_ST112HW_29.png",
        "actualWidth": 176,
        "actualHeight": 138,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 39200,
    },
    "cb4_ST112HW_29.png": {
        "fileName": "cb4_ST112HW_29.png",
        "actualWidth": 174,
        "actualHeight": 136,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 38400,
    },
    "cb5_ST112HW_29.png": {
        "fileName": "cb5_ST112HW_29.png",
        "actualWidth": 174,
        "actualHeight": 136,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 38400,
    },
    "g1_ST112HW_29.png": {
        "fileName": "g1_ST112HW_29.png",
        "actualWidth": 360,
        "actualHeight": 180,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 105600,
    },
    "g2_ST112HW_29.png": {
        "fileName": "g2_ST112HW_29.png",
        "actualWidth": 360,
        "actualHeight": 180,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 105600,
    },
    "g3_ST112HW_29.png": {
        "fileName": "g3_ST112HW_29.png",
        "actualWidth": 362,
        "actualHeight": 182,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 107000,
    },
    "g4_ST112HW_29.png": {
        "fileName": "g4_ST112HW_29.png",
        "actualWidth": 360,
        "actualHeight": 180,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 105600,
    },
    "g5_ST112HW_29.png": {
        "fileName": "g5_ST112HW_29.png",
        "actualWidth": 360,
        "actualHeight": 180,
        "mimeType": "image/png",
        "resolution": "small",
        "fileSize": 105600,
    },
}
