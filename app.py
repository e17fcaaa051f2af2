
# =============================================================================
# APP: app.py (Single-Page Version)
# Input form and full report are two views of one script, switched through
# st.session_state.view.
# =============================================================================

# =============================================================================
# 1. IMPORT LIBRARIES
# =============================================================================
import logging

import streamlit as st

import config
from dataset import DatasetError, list_categories, list_states, load_dataset
from report import contribution_chart, contribution_frame, group_comparison, state_comparison
from risk_engine import explain_risk, format_risk, resolve_groups, risk_band
from selection import Selection, change_category, default_selection
from theme import ThemeStore, host_theme_hint

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(page_title="LifeStyle & Risk AI", page_icon="🥑", layout="wide")

# =============================================================================
# 2. LOAD DATASET (Cached for performance)
# =============================================================================
@st.cache_resource
def load_artifacts():
    """
    Loads and validates the bundled dataset once for all sessions.
    """
    try:
        return load_dataset(config.DATA_PATH, config.ANCHOR_STATE)
    except DatasetError as e:
        logger.error("Dataset failed to load: %s", e)
        st.error(f"Error loading the obesity dataset: {e}")
        st.stop()


@st.cache_resource
def get_theme_store():
    return ThemeStore(config.THEME_SETTINGS_PATH)


dataset = load_artifacts()
theme_store = get_theme_store()

# =============================================================================
# 3. SESSION STATE AND CALLBACKS
# =============================================================================
FORM_KEYS = ("state", "category", "group", "fruit_score", "exercise_score")

if 'view' not in st.session_state:
    st.session_state.view = 'input'
if 'selection' not in st.session_state:
    st.session_state.selection = default_selection(dataset)
if 'result' not in st.session_state:
    st.session_state.result = None
if 'theme_settings' not in st.session_state:
    st.session_state.theme_settings = theme_store.load(fallback=host_theme_hint())


def seed_form_state():
    # Widget keys are dropped while the report view is shown; restore them
    # from the last known selection.
    for key in FORM_KEYS:
        if key not in st.session_state:
            st.session_state[key] = getattr(st.session_state.selection, key)


def current_selection() -> Selection:
    return Selection(**{key: st.session_state[key] for key in FORM_KEYS})


def on_category_change():
    # The group select must never keep a label from the previous category
    selection = change_category(dataset, current_selection(), st.session_state.category)
    st.session_state.group = selection.group
    st.session_state.selection = selection


def on_toggle_theme():
    settings = st.session_state.theme_settings.toggle()
    st.session_state.theme_settings = settings
    theme_store.save(settings)


def on_analyze():
    selection = current_selection()
    breakdown = explain_risk(dataset, selection)
    st.session_state.selection = selection
    st.session_state.result = {
        "selection": selection,
        "breakdown": breakdown,
        "score": breakdown.score,
    }
    logger.info("Estimated %.1f for %s", st.session_state.result["score"], selection.cohort)

# =============================================================================
# 4. STYLING
# =============================================================================
st.markdown("""<style>
.title-font { font-size: 44px; font-weight: bold; color: #059669; font-family: 'Arial Rounded MT Bold', sans-serif; }
.section-title { font-size: 22px; font-weight: bold; color: #1e293b; margin-top: 20px; margin-bottom: 12px; }
.result-label { font-size: 12px; letter-spacing: 0.05em; text-transform: uppercase; font-weight: 600; color: #64748b; }
.risk-value { font-size: 52px; font-weight: 800; line-height: 1.1; margin-top: 6px; }
.risk-high { color: #dc2626; }
.risk-med { color: #d97706; }
.risk-low { color: #059669; }
.footer { margin-top: 60px; text-align: center; font-size: 14px; color: #636e72; }
</style>""", unsafe_allow_html=True)

if st.session_state.theme_settings.dark:
    st.markdown("""<style>
    .stApp { background-color: #0f172a; color: #e2e8f0; }
    .title-font { color: #34d399; }
    .section-title { color: #f1f5f9; }
    .result-label { color: #94a3b8; }
    .stApp label, .stApp p, .stApp h3 { color: #e2e8f0; }
    </style>""", unsafe_allow_html=True)

# =============================================================================
# 5. PAGE DEFINITIONS (as functions)
# =============================================================================
def render_header():
    col_title, col_theme = st.columns([5, 1])
    with col_title:
        st.markdown('<div class="title-font">🥑 LifeStyle &amp; Risk AI</div>', unsafe_allow_html=True)
    with col_theme:
        label = "☀️ Light" if st.session_state.theme_settings.dark else "🌙 Dark"
        st.button(label, on_click=on_toggle_theme, key="theme_toggle")


def render_input_page():
    """
    Renders the demographic and lifestyle inputs plus the latest result.
    """
    seed_form_state()
    col1, col2 = st.columns(2)

    with col1:
        st.markdown('<div class="section-title">1. Demographic Profile</div>', unsafe_allow_html=True)
        st.selectbox("State", list_states(dataset), key="state")
        st.selectbox("Category", list_categories(dataset), key="category", on_change=on_category_change)
        groups = resolve_groups(dataset, st.session_state.category)
        if groups:
            st.selectbox("Group", groups, key="group")
        else:
            st.session_state.group = ""
            st.warning("No groups are available for this category.")

    with col2:
        st.markdown('<div class="section-title">2. Lifestyle Habits</div>', unsafe_allow_html=True)
        st.slider(
            "Daily Fruit Intake (🍎 High Intake → Zero Intake 🚫)",
            min_value=config.SCORE_MIN, max_value=config.SCORE_MAX, key="fruit_score",
        )
        st.slider(
            "Physical Activity (🏃 Very Active → Sedentary 🛋️)",
            min_value=config.SCORE_MIN, max_value=config.SCORE_MAX, key="exercise_score",
        )
        st.button("🔍 Analyze Risk", on_click=on_analyze, type="primary", key="analyze")

    st.session_state.selection = current_selection()

    result = st.session_state.result
    if result is not None:
        selection = result["selection"]
        score = result["score"]
        with st.container(border=True):
            st.markdown('<div class="result-label">Estimated Obesity Risk Probability</div>', unsafe_allow_html=True)
            st.markdown(
                f'<div class="risk-value risk-{risk_band(score)}">{format_risk(score)}</div>',
                unsafe_allow_html=True,
            )
            st.markdown(
                f"Based on historical data for **{selection.group} ({selection.category})** "
                f"in **{selection.state}**  \nadjusted by your personal lifestyle choices."
            )
            if result["breakdown"].used_fallback:
                st.info(
                    f"No data was found for this cohort, so a default base rate of "
                    f"{format_risk(config.FALLBACK_BASE_RATE)} was used."
                )
            if st.button("📊 View Full Report"):
                st.session_state.view = 'report'
                st.rerun()


def render_report_page():
    """
    Renders the breakdown of the latest estimate and how the cohort compares.
    """
    result = st.session_state.result
    if result is None:
        st.warning("Please analyze a profile on the input page first.")
        if st.button("⬅️ Go to Input Page"):
            st.session_state.view = 'input'
            st.rerun()
        st.stop()

    selection = result["selection"]
    breakdown = result["breakdown"]
    cohort_label = f"{selection.group} ({selection.category}) in {selection.state}"

    st.markdown('<div class="section-title">Your Personalized Risk Report</div>', unsafe_allow_html=True)
    st.success(f"✅ Estimated obesity risk for {cohort_label}: **{format_risk(result['score'])}**")

    tab_impact, tab_groups, tab_states = st.tabs(
        ["**Lifestyle Impact**", "**Compare Groups**", "**Compare States**"]
    )

    with tab_impact:
        st.markdown("### How Your Habits Moved the Estimate")
        st.pyplot(contribution_chart(breakdown, cohort_label))
        st.dataframe(contribution_frame(breakdown).round(1))

    with tab_groups:
        st.markdown(f"### {selection.category} groups in {selection.state}")
        groups_df = group_comparison(dataset, selection.state, selection.category)
        if groups_df.empty:
            st.write("No data is available for this state and category.")
        else:
            st.bar_chart(groups_df.set_index("group")["base_rate"])
            st.dataframe(groups_df, hide_index=True)

    with tab_states:
        st.markdown(f"### {selection.group} ({selection.category}) across states")
        states_df = state_comparison(dataset, selection.category, selection.group)
        if states_df.empty:
            st.write("No data is available for this cohort.")
        else:
            st.dataframe(states_df, hide_index=True)

    if st.button("⬅️ Start a New Analysis"):
        st.session_state.view = 'input'
        st.rerun()

# =============================================================================
# SCRIPT EXECUTION ROUTER
# =============================================================================
render_header()

if st.session_state.view == 'input':
    render_input_page()
elif st.session_state.view == 'report':
    render_report_page()
else:
    st.session_state.view = 'input'
    st.rerun()

st.markdown('<div class="footer">Made with 🥑 by the LifeStyle &amp; Risk team</div>', unsafe_allow_html=True)
