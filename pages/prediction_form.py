"""
Profile Entry Page for Streamlit Life Expectancy Application
"""

import streamlit as st
from pydantic import ValidationError

from lifespan.models import UserProfile, ProfileConfigModel
from lifespan.calculator import LifeExpectancyCalculator
from lifespan.analysis import AnalysisGenerator
from lifespan.config import get_settings
from lifespan.reference_data import REFERENCE_DATA

SMOKING_OPTIONS = {
    "never": "Never Smoked",
    "former": "Former Smoker",
    "light": "Light Smoker (1-10 cigarettes/day)",
    "moderate": "Moderate Smoker (11-20 cigarettes/day)",
    "heavy": "Heavy Smoker (20+ cigarettes/day)",
}

ALCOHOL_OPTIONS = {
    "none": "None",
    "light": "Light (1-2 drinks/week)",
    "moderate": "Moderate (3-7 drinks/week)",
    "heavy": "Heavy (8+ drinks/week)",
}


def option_index(options, value) -> int:
    """Position of a saved value among selectbox options, first option when absent."""
    return options.index(value) if value in options else 0


def run_prediction(profile: UserProfile):
    """Predict and analyze a profile, storing the results in session state."""
    calculator = LifeExpectancyCalculator()
    breakdown = calculator.get_multiplier_breakdown(profile)
    generator = AnalysisGenerator(unify_country_fallback=get_settings().unify_country_fallback)

    st.session_state.profile = profile
    st.session_state.breakdown = breakdown
    st.session_state.report = generator.analyze(profile, breakdown["prediction"])


def reset_prediction():
    st.session_state.profile = None
    st.session_state.report = None
    st.session_state.breakdown = None
    st.session_state.diseases = []


def show_disease_editor():
    """Add and remove health conditions outside the main form."""
    st.subheader("🩺 Health Conditions")

    col1, col2, col3 = st.columns([3, 2, 1])
    with col1:
        disease_name = st.text_input("Condition", placeholder="e.g., Diabetes", key="disease_name")
    with col2:
        disease_severity = st.selectbox("Severity", ["mild", "moderate", "severe"], key="disease_severity")
    with col3:
        st.markdown("<br>", unsafe_allow_html=True)
        if st.button("➕ Add", use_container_width=True):
            if disease_name.strip():
                st.session_state.diseases.append({"name": disease_name.strip(), "severity": disease_severity})
                st.rerun()
            else:
                st.error("Please enter the condition name.")

    if st.session_state.diseases:
        for i, disease in enumerate(st.session_state.diseases):
            col1, col2 = st.columns([5, 1])
            with col1:
                st.write(f"• **{disease['name']}** ({disease['severity']})")
            with col2:
                if st.button("🗑️", key=f"remove_disease_{i}", help="Remove this condition"):
                    st.session_state.diseases.pop(i)
                    st.rerun()
    else:
        st.caption("No health conditions added.")


def show_prediction_form_page():
    """Display the profile entry page."""
    st.title("📝 Life Expectancy Prediction")
    st.markdown("Enter your health information to get a personalized prediction.")

    show_disease_editor()
    st.markdown("---")

    existing = st.session_state.profile
    country_codes = REFERENCE_DATA.supported_countries()

    with st.form("profile_form"):
        st.subheader("Location & Demographics")

        col1, col2 = st.columns(2)
        with col1:
            country = st.selectbox(
                "Country *",
                country_codes,
                index=option_index(country_codes, existing.country if existing else None),
                format_func=lambda code: f"{REFERENCE_DATA.country_name(code)} ({REFERENCE_DATA.country_region(code)})"
            )
            age = st.number_input(
                "Age *",
                min_value=1,
                max_value=120,
                value=int(existing.age) if existing else 35,
                step=1
            )
        with col2:
            gender_options = ["male", "female", "other"]
            gender = st.selectbox(
                "Gender *",
                gender_options,
                index=option_index(gender_options, existing.gender if existing else None),
                format_func=str.title
            )

        st.subheader("Physical Measurements")
        col1, col2 = st.columns(2)
        with col1:
            height = st.number_input(
                "Height (cm) *",
                min_value=100.0,
                max_value=250.0,
                value=float(existing.height) if existing else 170.0,
                step=0.5
            )
        with col2:
            weight = st.number_input(
                "Weight (kg) *",
                min_value=30.0,
                max_value=300.0,
                value=float(existing.weight) if existing else 70.0,
                step=0.5
            )

        st.subheader("Lifestyle")
        col1, col2 = st.columns(2)
        with col1:
            smoking = st.selectbox(
                "Smoking Status",
                list(SMOKING_OPTIONS.keys()),
                index=option_index(list(SMOKING_OPTIONS), existing.smoking if existing else None),
                format_func=SMOKING_OPTIONS.get
            )
        with col2:
            alcohol = st.selectbox(
                "Alcohol Consumption",
                list(ALCOHOL_OPTIONS.keys()),
                index=option_index(list(ALCOHOL_OPTIONS), existing.alcohol if existing else None),
                format_func=ALCOHOL_OPTIONS.get
            )

        submitted = st.form_submit_button("❤️ Predict Life Expectancy", use_container_width=True)

        if submitted:
            try:
                config_model = ProfileConfigModel(
                    country=country,
                    gender=gender,
                    height=height,
                    weight=weight,
                    age=age,
                    smoking=smoking,
                    alcohol=alcohol,
                    diseases=st.session_state.diseases
                )
            except ValidationError as e:
                st.error(f"Validation error: {e}")
                return

            with st.spinner("Calculating life expectancy..."):
                run_prediction(config_model.to_user_profile())

            st.success(f"✅ Predicted life expectancy: {st.session_state.report.prediction} years")
            st.info("**Next Step:** Go to 'View Results' for the full analysis.")

    with st.expander("ℹ️ Help & Guidelines"):
        st.markdown("""
        **Demographics:**
        - **Country**: Sets the WHO baseline life expectancy and country health factors
        - **Gender**: "Other" uses the combined baseline for both sexes

        **Physical Measurements:**
        - Height and weight determine your BMI category (underweight, normal, overweight, obese)

        **Health Conditions:**
        - Each condition reduces the estimate by its severity: mild 5%, moderate 10%, severe 20%
        - Multiple conditions compound
        """)
