#!/usr/bin/env python3
"""
Life Expectancy Predictor - Streamlit Web Application

This is the main Streamlit application for the life expectancy predictor.
It provides an interactive web interface for entering a profile, viewing
the prediction and its explanation, browsing WHO statistics and exporting
reports.
"""

import streamlit as st

from lifespan.models import UserProfile, Disease
from lifespan.reference_data import REFERENCE_DATA
from pages.prediction_form import run_prediction, reset_prediction

# Configure Streamlit page
st.set_page_config(
    page_title="Life Expectancy Predictor",
    page_icon="❤️",
    layout="wide",
    initial_sidebar_state="expanded"
)

PAGE_HOME = "🏠 Home"
PAGE_PREDICT = "📝 Enter Your Profile"
PAGE_RESULTS = "❤️ View Results"
PAGE_STATS = "🌍 Global Statistics"
PAGE_EXPORT = "📊 Export Reports"


def initialize_session_state():
    """Initialize session state variables."""
    if 'profile' not in st.session_state:
        st.session_state.profile = None
    if 'report' not in st.session_state:
        st.session_state.report = None
    if 'breakdown' not in st.session_state:
        st.session_state.breakdown = None
    if 'diseases' not in st.session_state:
        st.session_state.diseases = []


def create_sidebar():
    """Create the sidebar navigation."""
    st.sidebar.title("❤️ Life Expectancy Predictor")
    st.sidebar.markdown("---")

    if st.session_state.report:
        profile = st.session_state.profile
        st.sidebar.success(f"**Prediction:** {st.session_state.report.prediction} years")
        st.sidebar.info(f"Country: {REFERENCE_DATA.country_name(profile.country)}")
        st.sidebar.info(f"Age: {profile.age}")

        if st.sidebar.button("🔄 Start Over", help="Clear the current prediction"):
            reset_prediction()
            st.session_state.page = PAGE_PREDICT
            st.rerun()
    else:
        st.sidebar.warning("No prediction yet")

    st.sidebar.markdown("---")

    page_options = [PAGE_HOME, PAGE_PREDICT, PAGE_RESULTS, PAGE_STATS, PAGE_EXPORT]
    return st.sidebar.selectbox(
        "Navigate to:",
        page_options,
        index=page_options.index(st.session_state.page)
    )


def show_home_page():
    """Display the home page."""
    st.title("❤️ Life Expectancy Predictor")
    st.markdown("### Predict your life expectancy using WHO data")

    col1, col2 = st.columns([2, 1])

    with col1:
        st.markdown("""
        This tool estimates your expected lifespan from where you live, your body
        measurements and your lifestyle, then explains which factors moved the estimate.

        **How it works:**
        - 🌍 **Country baseline**: WHO life expectancy at birth for your country and gender
        - 🚬 **Lifestyle**: smoking and alcohol consumption adjust the baseline
        - ⚖️ **Body**: BMI category and height
        - 🩺 **Health conditions**: each condition compounds by its severity
        - 🏥 **Country health factors**: healthcare, lifestyle and environment

        **Getting Started:**
        1. Enter your profile
        2. View your prediction, risk level and recommendations
        3. Compare with global statistics
        4. Export a report
        """)

        st.markdown("### Quick Start")
        col_a, col_b = st.columns(2)

        with col_a:
            if st.button("📝 Enter Your Profile", use_container_width=True):
                st.session_state.page = PAGE_PREDICT
                st.rerun()

        with col_b:
            if st.button("📂 Load Sample Profile", use_container_width=True):
                load_sample_data()
                st.session_state.page = PAGE_RESULTS
                st.rerun()

    with col2:
        st.markdown("### Current Status")
        if st.session_state.report:
            st.success("✅ Prediction Available")
            st.info(f"**Prediction:** {st.session_state.report.prediction} years")
            st.info(f"**Risk Level:** {st.session_state.report.risk_level.title()}")
            if st.button("❤️ View Results", use_container_width=True):
                st.session_state.page = PAGE_RESULTS
                st.rerun()
        else:
            st.warning("⚠️ No Prediction Yet")
            st.markdown("Enter your profile or load the sample profile to get started.")

        st.caption("This estimate uses fixed multipliers and is not medical advice.")


def load_sample_data():
    """Load a sample profile for demonstration."""
    profile = UserProfile(
        country="GBR",
        gender="female",
        height=165,
        weight=72,
        age=52,
        smoking="former",
        alcohol="moderate",
        diseases=[Disease(name="Hypertension", severity="mild")]
    )
    run_prediction(profile)
    st.success("✅ Sample profile loaded successfully!")


def main():
    """Main application function."""
    initialize_session_state()

    if 'page' not in st.session_state:
        st.session_state.page = PAGE_HOME

    selected_page = create_sidebar()
    if selected_page != st.session_state.page:
        st.session_state.page = selected_page
        st.rerun()

    # Display selected page
    if st.session_state.page == PAGE_HOME:
        show_home_page()
    elif st.session_state.page == PAGE_PREDICT:
        from pages.prediction_form import show_prediction_form_page
        show_prediction_form_page()
    elif st.session_state.page == PAGE_RESULTS:
        from pages.results import show_results_page
        show_results_page()
    elif st.session_state.page == PAGE_STATS:
        from pages.global_stats import show_global_stats_page
        show_global_stats_page()
    elif st.session_state.page == PAGE_EXPORT:
        from pages.export_reports import show_export_reports_page
        show_export_reports_page()


if __name__ == "__main__":
    main()
