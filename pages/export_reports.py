"""
Export Reports Page for Streamlit Life Expectancy Application
"""

import streamlit as st
import tempfile
import os
import json
from datetime import datetime

from lifespan.exporters import ExcelExporter, WordExporter, PDFExporter


def show_export_reports_page():
    """Display the export reports page."""
    st.title("📊 Export Reports")

    if not st.session_state.report:
        st.warning("⚠️ Please enter your profile first.")
        if st.button("📝 Go to Profile Entry"):
            st.session_state.page = "📝 Enter Your Profile"
            st.rerun()
        return

    profile = st.session_state.profile
    report = st.session_state.report

    st.markdown(f"Export the report for a prediction of **{report.prediction} years**.")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base_name = f"life_expectancy_{profile.country}_{timestamp}"

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        if st.button("📗 Excel Report", use_container_width=True):
            export_file(ExcelExporter(profile, report), f"{base_name}.xlsx",
                        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                        "Excel report")

    with col2:
        if st.button("📘 Word Document", use_container_width=True):
            export_file(WordExporter(profile, report), f"{base_name}.docx",
                        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                        "Word document")

    with col3:
        if st.button("📕 PDF Report", use_container_width=True):
            export_file(PDFExporter(profile, report), f"{base_name}.pdf",
                        "application/pdf", "PDF report")

    with col4:
        st.download_button(
            label="📄 JSON Data",
            data=json.dumps({"profile": profile.to_dict(), "report": report.to_dict()}, indent=2),
            file_name=f"{base_name}.json",
            mime="application/json",
            use_container_width=True
        )


def export_file(exporter, filename: str, mime: str, label: str):
    """Render a report to a temporary file and offer it for download."""
    try:
        with st.spinner(f"Generating {label}..."):
            suffix = os.path.splitext(filename)[1]
            with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp_file:
                tmp_path = tmp_file.name

            try:
                exporter.export(tmp_path)
                with open(tmp_path, 'rb') as f:
                    file_data = f.read()
            finally:
                os.unlink(tmp_path)

            st.download_button(
                label=f"📥 Download {label}",
                data=file_data,
                file_name=filename,
                mime=mime
            )
            st.success(f"✅ {label} generated successfully!")

    except OSError as e:
        st.error(f"Error generating {label}: {str(e)}")
