"""
Global Statistics Page for Streamlit Life Expectancy Application
"""

import asyncio
import streamlit as st
import plotly.graph_objects as go

from lifespan.statistics import WHOStatisticsService, top_countries


@st.cache_data(ttl=3600, show_spinner=False)
def load_statistics():
    return asyncio.run(WHOStatisticsService().fetch_dashboard())


def show_global_stats_page():
    """Display WHO life expectancy statistics."""
    st.title("🌍 Global Life Expectancy Statistics")

    with st.spinner("Loading global statistics..."):
        snapshot = load_statistics()

    if snapshot.used_sample_data:
        st.warning("Failed to fetch global statistics. Using sample data instead.")

    col1, col2 = st.columns([3, 2])

    with col1:
        st.subheader("Top Countries by Life Expectancy")
        df = top_countries(snapshot.global_stats, 10)
        if df.empty:
            st.info("No country statistics available.")
        else:
            fig = go.Figure()
            fig.add_trace(go.Scatter(
                x=df["Country"],
                y=df["Life Expectancy"],
                mode='lines+markers',
                name='Life Expectancy (years)',
                line=dict(color='rgb(102, 126, 234)'),
                fill='tozeroy',
                fillcolor='rgba(102, 126, 234, 0.1)'
            ))
            fig.update_layout(
                title="Top 10 Countries by Life Expectancy",
                yaxis=dict(range=[60, 90], title="Years"),
                height=450
            )
            st.plotly_chart(fig, use_container_width=True)

    with col2:
        st.subheader("Regional Averages")
        for region, data in snapshot.regional_stats.items():
            st.metric(region, f"{data.average:.1f} years", help=f"{data.count} countries")

    st.markdown("---")
    st.markdown("**Source:** World Health Organization (WHO) Global Health Observatory")
    st.markdown("**Note:** Data represents life expectancy at birth for the most recent available year.")

    if st.button("🔄 Refresh Statistics"):
        load_statistics.clear()
        st.rerun()
