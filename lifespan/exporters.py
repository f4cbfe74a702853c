import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from docx import Document
from docx.shared import Inches
from docx.enum.text import WD_ALIGN_PARAGRAPH
from datetime import datetime
from typing import Optional, List
import os
import tempfile

from .calculator import LifeExpectancyCalculator
from .classifiers import calculate_bmi
from .models import UserProfile, AnalysisReport
from .reference_data import REFERENCE_DATA

MULTIPLIER_LABELS = {
    "age": "Age Bracket",
    "smoking": "Smoking",
    "alcohol": "Alcohol",
    "diseases": "Health Conditions",
    "height_weight": "Height & BMI",
    "country": "Country Health Factors",
}

RISK_LEVEL_TEXT = {
    "low": "Low Risk",
    "medium": "Medium Risk",
    "high": "High Risk",
}


def profile_summary_rows(profile: UserProfile, report: AnalysisReport) -> List[List[str]]:
    """Label/value rows describing the profile, shared by every export format."""
    rows = [
        ["Country", REFERENCE_DATA.country_name(profile.country)],
        ["Age", f"{profile.age} years"],
        ["Gender", profile.gender],
        ["Height", f"{profile.height} cm"],
        ["Weight", f"{profile.weight} kg"],
        ["BMI", f"{calculate_bmi(profile.weight, profile.height):.1f}"],
        ["Smoking", profile.smoking],
        ["Alcohol Consumption", profile.alcohol],
        ["Health Conditions", ", ".join(f"{d.name} ({d.severity})" for d in profile.diseases) or "None"],
        ["Risk Level", RISK_LEVEL_TEXT.get(report.risk_level, "Unknown")],
    ]
    return rows


def comparison_rows(report: AnalysisReport) -> List[List[str]]:
    comparison = report.country_comparison
    if comparison is None:
        return []
    sign = "+" if comparison.difference >= 0 else ""
    return [
        ["Your Prediction", f"{report.prediction} years"],
        ["Country Average", f"{comparison.average} years"],
        ["Difference", f"{sign}{comparison.difference:.1f} years"],
        ["Difference (%)", f"{sign}{comparison.percentage:.1f}%"],
    ]


def multiplier_frame(breakdown: dict) -> pd.DataFrame:
    rows = [
        {"Adjustment": MULTIPLIER_LABELS.get(name, name), "Multiplier": round(value, 4)}
        for name, value in breakdown["multipliers"].items()
    ]
    return pd.DataFrame(rows, columns=["Adjustment", "Multiplier"])


class ExcelExporter:
    """Export a life expectancy report to Excel format."""

    def __init__(self, profile: UserProfile, report: AnalysisReport,
                 calculator: Optional[LifeExpectancyCalculator] = None):
        self.profile = profile
        self.report = report
        self.calculator = calculator or LifeExpectancyCalculator()

    def export(self, file_path: str) -> None:
        """Export the report to an Excel workbook with one sheet per section."""
        breakdown = self.calculator.get_multiplier_breakdown(self.profile)

        summary_data = [
            ['Life Expectancy Prediction', ''],
            ['Predicted Life Expectancy', f"{self.report.prediction} years"],
            ['', ''],
            ['Profile Summary', ''],
        ]
        summary_data.extend(profile_summary_rows(self.profile, self.report))

        comparison = comparison_rows(self.report)
        if comparison:
            summary_data.extend([['', ''], ['Country Comparison', '']])
            summary_data.extend(comparison)

        summary_data.extend([
            ['', ''],
            ['Report Generated', datetime.now().strftime('%Y-%m-%d at %H:%M:%S')],
        ])

        with pd.ExcelWriter(file_path, engine='openpyxl') as writer:
            pd.DataFrame(summary_data, columns=['Item', 'Value']).to_excel(
                writer, sheet_name='Summary', index=False
            )

            factors_df = pd.DataFrame(
                [[f.name, f.impact, f.description] for f in self.report.factors],
                columns=['Factor', 'Impact', 'Description']
            )
            factors_df.to_excel(writer, sheet_name='Factors', index=False)

            recommendations_df = pd.DataFrame(
                self.report.recommendations, columns=['Recommendation']
            )
            recommendations_df.to_excel(writer, sheet_name='Recommendations', index=False)

            multipliers_df = multiplier_frame(breakdown)
            multipliers_df.to_excel(writer, sheet_name='Multipliers', index=False)

            for sheet_name, worksheet in writer.sheets.items():
                for column_cells in worksheet.columns:
                    length = max(len(str(cell.value or "")) for cell in column_cells)
                    worksheet.column_dimensions[column_cells[0].column_letter].width = min(length + 2, 80)


class WordExporter:
    """Export a life expectancy report to a Word document."""

    def __init__(self, profile: UserProfile, report: AnalysisReport,
                 calculator: Optional[LifeExpectancyCalculator] = None):
        self.profile = profile
        self.report = report
        self.calculator = calculator or LifeExpectancyCalculator()

    def export(self, file_path: str, include_chart: bool = True) -> None:
        """Export the report to a Word document.

        Args:
            file_path: Output file path
            include_chart: Whether to include the multiplier chart (default: True)
        """
        doc = Document()

        title = doc.add_heading("LIFE EXPECTANCY PREDICTION", level=1)
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER

        prediction_para = doc.add_paragraph()
        prediction_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        prediction_para.add_run("Predicted Life Expectancy: ").bold = True
        prediction_para.add_run(f"{self.report.prediction} years").bold = True

        doc.add_paragraph(f"Report Date: {datetime.now().strftime('%B %d, %Y')}")

        doc.add_heading("Profile Summary", level=2)
        self._add_table(doc, profile_summary_rows(self.profile, self.report))

        comparison = comparison_rows(self.report)
        if comparison:
            doc.add_heading(
                f"Comparison with {REFERENCE_DATA.country_name(self.report.country_comparison.country)}",
                level=2
            )
            self._add_table(doc, comparison)

        if self.report.factors:
            doc.add_heading("Key Factors Affecting Your Prediction", level=2)
            for factor in self.report.factors:
                para = doc.add_paragraph(style='List Bullet')
                para.add_run(f"{factor.name} ({factor.impact}): ").bold = True
                para.add_run(factor.description)

        if self.report.recommendations:
            doc.add_heading("Recommendations to Improve Life Expectancy", level=2)
            for recommendation in self.report.recommendations:
                doc.add_paragraph(recommendation, style='List Bullet')

        breakdown = self.calculator.get_multiplier_breakdown(self.profile)
        doc.add_heading("Calculation Methodology", level=2)
        doc.add_paragraph(
            f"Baseline life expectancy of {breakdown['base_expectancy']} years is adjusted by the "
            f"multipliers below. The prediction never falls below the current age plus five years."
        )
        df = multiplier_frame(breakdown)
        self._add_table(doc, [[row['Adjustment'], f"{row['Multiplier']:.4f}"] for _, row in df.iterrows()])

        if include_chart:
            chart_path = self._create_chart(df)
            if chart_path:
                try:
                    doc.add_picture(chart_path, width=Inches(6))
                finally:
                    os.unlink(chart_path)

        doc.add_paragraph(
            "Source: World Health Organization (WHO) life expectancy data. This estimate is "
            "produced from fixed multipliers and is not medical advice."
        )

        doc.save(file_path)

    def _add_table(self, doc, rows: List[List[str]]) -> None:
        table = doc.add_table(rows=len(rows), cols=2)
        table.style = 'Light List'
        for i, (label, value) in enumerate(rows):
            cells = table.rows[i].cells
            cells[0].text = label
            cells[0].paragraphs[0].runs[0].bold = True
            cells[1].text = value

    def _create_chart(self, df: pd.DataFrame) -> Optional[str]:
        """Create a temporary chart file for inclusion in the Word document."""
        fig = None
        try:
            fig, ax = plt.subplots(figsize=(8, 4))
            colors = ['black' if value >= 1 else 'grey' for value in df["Multiplier"]]
            ax.barh(df["Adjustment"], df["Multiplier"], color=colors, alpha=0.7)
            ax.axvline(1.0, color='black', linewidth=1)
            ax.set_xlabel("Multiplier")
            ax.set_title("Adjustments Applied to Baseline Life Expectancy")
            fig.tight_layout()

            with tempfile.NamedTemporaryFile(delete=False, suffix='.png') as tmp_file:
                fig.savefig(tmp_file.name, dpi=150, bbox_inches='tight')
                return tmp_file.name
        except (OSError, ValueError) as e:
            print(f"Warning: Could not create chart: {e}")
            return None
        finally:
            if fig is not None:
                plt.close(fig)


class PDFExporter:
    """Export a life expectancy report to PDF format using ReportLab."""

    def __init__(self, profile: UserProfile, report: AnalysisReport,
                 calculator: Optional[LifeExpectancyCalculator] = None):
        self.profile = profile
        self.report = report
        self.calculator = calculator or LifeExpectancyCalculator()

    def export(self, file_path: str) -> None:
        """Export the report to a PDF file."""
        from reportlab.lib.pagesizes import letter
        from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
        from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
        from reportlab.lib.units import inch
        from reportlab.lib import colors
        from reportlab.lib.enums import TA_CENTER

        doc = SimpleDocTemplate(
            file_path,
            pagesize=letter,
            leftMargin=0.75*inch,
            rightMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.75*inch
        )
        story = []
        styles = getSampleStyleSheet()

        title_style = ParagraphStyle(
            'CustomTitle',
            parent=styles['Heading1'],
            fontSize=20,
            alignment=TA_CENTER,
            spaceAfter=20
        )

        table_style = TableStyle([
            ('TEXTCOLOR', (0, 0), (-1, -1), colors.black),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
            ('BACKGROUND', (0, 0), (-1, -1), colors.white),
            ('GRID', (0, 0), (-1, -1), 1, colors.black)
        ])

        story.append(Paragraph("Life Expectancy Prediction", title_style))
        story.append(Paragraph(f"<b>Predicted Life Expectancy:</b> {self.report.prediction} years", styles['Normal']))
        story.append(Paragraph(f"<b>Report Generated:</b> {datetime.now().strftime('%B %d, %Y at %H:%M:%S')}", styles['Normal']))
        story.append(Spacer(1, 20))

        story.append(Paragraph("Profile Summary", styles['Heading2']))
        summary_table = Table(profile_summary_rows(self.profile, self.report))
        summary_table.setStyle(table_style)
        story.append(summary_table)
        story.append(Spacer(1, 20))

        comparison = comparison_rows(self.report)
        if comparison:
            story.append(Paragraph("Country Comparison", styles['Heading2']))
            comparison_table = Table(comparison)
            comparison_table.setStyle(table_style)
            story.append(comparison_table)
            story.append(Spacer(1, 20))

        if self.report.factors:
            story.append(Paragraph("Key Factors Affecting Your Prediction", styles['Heading2']))
            for factor in self.report.factors:
                story.append(Paragraph(f"<b>{factor.name}</b> ({factor.impact}): {factor.description}", styles['Normal']))
            story.append(Spacer(1, 20))

        if self.report.recommendations:
            story.append(Paragraph("Recommendations", styles['Heading2']))
            for recommendation in self.report.recommendations:
                story.append(Paragraph(f"• {recommendation}", styles['Normal']))
            story.append(Spacer(1, 20))

        breakdown = self.calculator.get_multiplier_breakdown(self.profile)
        story.append(Paragraph("Adjustments Applied", styles['Heading2']))
        multiplier_data = [['Adjustment', 'Multiplier']]
        multiplier_data.append(['Baseline Life Expectancy', f"{breakdown['base_expectancy']} years"])
        for _, row in multiplier_frame(breakdown).iterrows():
            multiplier_data.append([row['Adjustment'], f"{row['Multiplier']:.4f}"])
        multiplier_table = Table(multiplier_data)
        multiplier_table.setStyle(table_style)
        story.append(multiplier_table)

        doc.build(story)
