"""
Results Page for Streamlit Life Expectancy Application
"""

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from lifespan.classifiers import calculate_bmi
from lifespan.exporters import MULTIPLIER_LABELS, RISK_LEVEL_TEXT
from lifespan.reference_data import REFERENCE_DATA

RISK_LEVEL_COLORS = {
    "low": "#28a745",
    "medium": "#ffc107",
    "high": "#dc3545",
}


def show_results_page():
    """Display the prediction and its analysis."""
    st.title("❤️ Your Life Expectancy Prediction")
    st.markdown("Based on WHO data")

    if not st.session_state.report:
        st.warning("⚠️ Please enter your profile first.")
        if st.button("📝 Go to Profile Entry"):
            st.session_state.page = "📝 Enter Your Profile"
            st.rerun()
        return

    profile = st.session_state.profile
    report = st.session_state.report
    breakdown = st.session_state.breakdown

    col1, col2 = st.columns([1, 2])
    with col1:
        st.metric("Predicted Life Expectancy", f"{report.prediction} years")
        st.markdown(f"🌍 **{REFERENCE_DATA.country_name(profile.country)}**")

    with col2:
        show_country_comparison(report)

    tab1, tab2, tab3 = st.tabs(["📋 Profile & Factors", "💡 Recommendations", "📈 Adjustments"])

    with tab1:
        show_profile_summary(profile, report)
        show_factors(report)

    with tab2:
        show_recommendations(report)

    with tab3:
        show_adjustments_chart(breakdown)


def show_country_comparison(report):
    comparison = report.country_comparison
    if comparison is None:
        st.info("No national average is available for this country.")
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Your Prediction", f"{report.prediction} years")
    with col2:
        st.metric("Country Average", f"{comparison.average} years")
    with col3:
        sign = "+" if comparison.difference >= 0 else ""
        st.metric(
            "Difference",
            f"{sign}{comparison.difference:.1f} years",
            delta=f"{sign}{comparison.percentage:.1f}%"
        )


def show_profile_summary(profile, report):
    st.subheader("Your Profile Summary")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.write(f"**Country:** {REFERENCE_DATA.country_name(profile.country)}")
        st.write(f"**Age:** {profile.age} years")
        st.write(f"**Gender:** {profile.gender}")
    with col2:
        st.write(f"**Height:** {profile.height} cm")
        st.write(f"**Weight:** {profile.weight} kg")
        st.write(f"**BMI:** {calculate_bmi(profile.weight, profile.height):.1f}")
    with col3:
        color = RISK_LEVEL_COLORS.get(report.risk_level, "#6c757d")
        st.markdown(
            f"**Risk Level:** <span style='color:{color}'>{RISK_LEVEL_TEXT.get(report.risk_level, 'Unknown')}</span>",
            unsafe_allow_html=True
        )


def show_factors(report):
    if not report.factors:
        st.success("No negative factors found in your profile.")
        return

    st.subheader("Key Factors Affecting Your Prediction")
    for factor in report.factors:
        arrow = "↓" if factor.impact == "negative" else "↑"
        with st.container(border=True):
            st.markdown(f"**{factor.name}** {arrow} Impact")
            st.caption(factor.description)


def show_recommendations(report):
    if not report.recommendations:
        st.info("No specific recommendations. Keep up your healthy habits!")
        return

    st.subheader("Recommendations to Improve Life Expectancy")
    for recommendation in report.recommendations:
        st.markdown(f"💡 {recommendation}")


def show_adjustments_chart(breakdown):
    st.subheader("Adjustments Applied to Your Baseline")
    st.write(f"**Baseline life expectancy:** {breakdown['base_expectancy']} years")

    df = pd.DataFrame([
        {"Adjustment": MULTIPLIER_LABELS.get(name, name), "Multiplier": value}
        for name, value in breakdown["multipliers"].items()
    ])

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=df["Multiplier"],
        y=df["Adjustment"],
        orientation='h',
        marker_color=['#28a745' if v >= 1 else '#dc3545' for v in df["Multiplier"]],
        hovertemplate='%{y}: %{x:.4f}<extra></extra>'
    ))
    fig.add_vline(x=1.0, line_dash="dash", line_color="black")
    fig.update_layout(
        xaxis_title="Multiplier",
        height=400,
        margin=dict(l=20, r=20, t=30, b=20)
    )
    st.plotly_chart(fig, use_container_width=True)

    if breakdown["floor_applied"]:
        st.info("The adjusted estimate fell below your age plus five years, so the minimum of five remaining years was applied.")

    st.dataframe(df, use_container_width=True, hide_index=True)
