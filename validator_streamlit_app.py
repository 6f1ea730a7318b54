import json

import streamlit as st

from managers import AssetManager, HistoryManager, MemoryStorage
from services import ExportService, StatisticsService, ValidationService
from validators.line_index import line_preview
from validators.pht_rules import get_all_profile_ids

# ==============================================================================
# PAGE CONFIGURATION
# ==============================================================================
st.set_page_config(
    page_title="EPG AdZone Validator",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ==============================================================================
# CORPORATE DESIGN
# ==============================================================================
def inject_corporate_styles():
    st.markdown("""
    <style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&family=Outfit:wght@300;400;600;700&display=swap');

    :root {
        --accent-petrol: #009999;
        --bg-deep-slate: #0F1117;
        --bg-sidebar: #171923;
        --text-off-white: #F7FAFC;
        --glass-border: rgba(0, 153, 153, 0.3);
    }

    html, body, [class*="css"] {
        font-family: 'Outfit', 'Inter', sans-serif;
    }

    [data-testid="stSidebar"] {
        background-color: var(--bg-sidebar) !important;
        border-right: 1px solid var(--glass-border) !important;
    }

    .hero-title {
        font-size: 3rem !important;
        font-weight: 800 !important;
        color: #009999 !important;
        margin-bottom: 20px !important;
    }

    .section-header {
        color: var(--accent-petrol);
        border-bottom: 2px solid var(--glass-border);
        padding-bottom: 10px;
        margin-top: 20px;
        margin-bottom: 20px;
        font-weight: 700;
        letter-spacing: 1px;
        text-transform: uppercase;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    </style>
    """, unsafe_allow_html=True)


def section(title: str):
    st.markdown(f"<div class='section-header'>{title}</div>", unsafe_allow_html=True)


def load_uploaded_assets(uploaded):
    """AssetManager from an uploaded JSON file, or None for the built-in database."""
    if uploaded is None:
        return None
    try:
        return AssetManager.from_json_data(json.loads(uploaded.getvalue().decode("utf-8")))
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
        st.sidebar.error(f"Could not load asset database: {e}")
        return None


inject_corporate_styles()

# Session-scoped history; browsers do not share it
if "history_storage" not in st.session_state:
    st.session_state.history_storage = MemoryStorage()
history_manager = HistoryManager(st.session_state.history_storage)

validation_service = ValidationService()
export_service = ExportService()
stats_service = StatisticsService()

# ==============================================================================
# SIDEBAR
# ==============================================================================
with st.sidebar:
    st.markdown("<h2 style='color: #009999;'>EPG VALIDATOR</h2>", unsafe_allow_html=True)
    st.markdown("### Configuration")

    assets_upload = st.file_uploader("Asset database (JSON, optional)", type="json")
    assets = load_uploaded_assets(assets_upload)
    if assets is not None:
        st.success(f"Using uploaded asset database ({len(assets)} records)")

    st.divider()
    st.markdown("### Recent Validations")
    history = history_manager.get_validation_history()
    if not history:
        st.caption("No validations yet")
    for entry in history:
        status = "VALID" if entry.is_valid else f"{entry.error_count} errors"
        st.markdown(f"**{entry.file_name}** - {status}  \n"
                    f"<small>{entry.timestamp.strftime('%Y-%m-%d %H:%M:%S')}</small>",
                    unsafe_allow_html=True)
    if history and st.button("Clear history"):
        history_manager.clear_validation_history()
        st.rerun()

# ==============================================================================
# MAIN CORE
# ==============================================================================
st.markdown("<h1 class='hero-title'>EPG AdZone Validator</h1>", unsafe_allow_html=True)

section("File Selection")
uploaded_file = st.file_uploader("Choose an EPG XML file to validate", type="xml")

if uploaded_file is None:
    st.info("Please upload an EPG XML file to begin validation.")
    st.stop()

xml_content = uploaded_file.getvalue().decode("utf-8", errors="replace")

# Validate once per upload/asset combination, not on every widget interaction
run_key = (uploaded_file.name, uploaded_file.size, assets_upload.name if assets_upload else None)
if st.session_state.get("run_key") != run_key:
    result = validation_service.validate_xml(xml_content, assets)
    history_manager.save_validation_history(uploaded_file.name, result)
    st.session_state.run_key = run_key
    st.session_state.result = result
result = st.session_state.result

# --- STATUS ---
if result.is_valid:
    st.success(f"PASSED: {uploaded_file.name} - all EPG validation rules passed")
else:
    st.error(f"FAILED: {uploaded_file.name} ({result.total_errors()} errors)")

# --- SUMMARY ---
section("Validation Summary")
summary = result.summary
col1, col2, col3 = st.columns(3)
col1.metric("AdZones (found / declared)", f"{summary.total_ad_zones} / {summary.expected_ad_zones}")
col2.metric("Ads (found / declared)", f"{summary.total_ads} / {summary.expected_ads}")
col3.metric("Errors", result.total_errors())

if summary.missing_tags:
    st.warning("Missing tags: " + ", ".join(summary.missing_tags))
if summary.invalid_attributes:
    st.warning("Invalid attributes: " + ", ".join(summary.invalid_attributes))

# --- PHT PRESENCE ---
section("PHT Presence")
presence_cols = st.columns(len(get_all_profile_ids()))
for col, row in zip(presence_cols, stats_service.get_pht_presence(result.present_phts)):
    col.metric(f"PHT {row['id']} - {row['name']}", "Present" if row["present"] else "Missing")

# --- ERRORS ---
if result.errors:
    section("Errors")
    filter_col1, filter_col2 = st.columns(2)
    pht_choice = filter_col1.selectbox("PHT", ["All"] + get_all_profile_ids())
    zone_ids = sorted({e.zone_index for e in result.errors if e.zone_index is not None})
    zone_choice = filter_col2.selectbox("AdZone", ["All"] + zone_ids)

    errors = export_service.filter_errors(
        result.errors,
        pht_id=None if pht_choice == "All" else pht_choice,
        zone_index=None if zone_choice == "All" else zone_choice,
    )

    xml_lines = xml_content.split("\n")
    st.dataframe(
        [
            {
                "Line": e.line,
                "AdZone": e.zone_index,
                "PHT": e.pht_id,
                "Tag": ValidationService.get_error_tag(e.message),
                "Field": e.field,
                "Message": e.message,
                "Source": line_preview(xml_lines, e.line),
            }
            for e in errors
        ],
        use_container_width=True,
        hide_index=True,
    )
    st.caption(f"Showing {len(errors)} of {result.total_errors()} errors")

    stats_text = stats_service.format_summary_table(result)
    with st.expander("Error tag breakdown"):
        st.code(stats_text, language="text")

    dl1, dl2 = st.columns(2)
    dl1.download_button(
        "Download CSV",
        export_service.errors_to_csv(errors),
        file_name=export_service.file_manager.report_filename(uploaded_file.name, "csv"),
        mime="text/csv",
        use_container_width=True,
    )
    dl2.download_button(
        "Download JSON",
        json.dumps(export_service.errors_to_json(errors, uploaded_file.name, result, xml_content), indent=2),
        file_name=export_service.file_manager.report_filename(uploaded_file.name, "json"),
        mime="application/json",
        use_container_width=True,
    )

if result.warnings:
    section("Warnings")
    for warning in result.warnings:
        st.warning(f"Line {warning.line}: {warning.message}")

st.markdown("<br><br>", unsafe_allow_html=True)
st.divider()
st.markdown("<p style='text-align: center; color: #718096; font-size: 0.9rem;'>EPG AdZone Validation Utility</p>", unsafe_allow_html=True)
