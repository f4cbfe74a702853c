from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse
import logging
import os
from dataclasses import asdict
from datetime import datetime

from lifespan.models import ProfileConfigModel
from lifespan.calculator import LifeExpectancyCalculator
from lifespan.analysis import AnalysisGenerator
from lifespan.exporters import ExcelExporter, WordExporter, PDFExporter
from lifespan.reference_data import REFERENCE_DATA
from lifespan.statistics import WHOStatisticsService
from lifespan.config import get_settings

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, description="Life expectancy prediction and analysis API",
              version=settings.app_version)

os.makedirs("temp_files", exist_ok=True)

calculator = LifeExpectancyCalculator()
analysis_generator = AnalysisGenerator(unify_country_fallback=settings.unify_country_fallback)
statistics_service = WHOStatisticsService()

EXPORT_FORMATS = {
    "excel": (ExcelExporter, "xlsx", "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"),
    "word": (WordExporter, "docx", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    "pdf": (PDFExporter, "pdf", "application/pdf"),
}


@app.get("/api/countries")
async def list_countries():
    """Supported countries with their baseline life expectancy."""
    return {
        "countries": [
            {
                "code": code,
                "name": REFERENCE_DATA.country_name(code),
                "region": REFERENCE_DATA.country_region(code),
                "baseline": dict(REFERENCE_DATA.base_life_expectancy[code]),
            }
            for code in REFERENCE_DATA.supported_countries()
        ]
    }


@app.post("/api/predict")
async def predict(config: ProfileConfigModel):
    """Predict life expectancy and explain the result."""
    profile = config.to_user_profile()
    breakdown = calculator.get_multiplier_breakdown(profile)
    report = analysis_generator.analyze(profile, breakdown["prediction"])

    return {
        "success": True,
        "prediction": report.prediction,
        "report": report.to_dict(),
        "breakdown": breakdown,
    }


@app.get("/api/stats/global")
async def global_stats(limit: int = 100):
    """Country level WHO life expectancy (sample data when WHO is unreachable)."""
    stats = await statistics_service.fetch_global_stats(limit)
    return {"stats": [asdict(s) for s in stats]}


@app.get("/api/stats/regional")
async def regional_stats():
    """Average WHO life expectancy per region (sample data when WHO is unreachable)."""
    stats = await statistics_service.fetch_regional_stats()
    return {"regions": {region: asdict(s) for region, s in stats.items()}}


@app.post("/api/export/{format}")
async def export_report(format: str, config: ProfileConfigModel):
    """Export the report for a profile in the specified format."""
    if format not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail="Invalid format")

    exporter_class, extension, media_type = EXPORT_FORMATS[format]
    profile = config.to_user_profile()
    report = analysis_generator.analyze(profile, calculator.predict(profile))

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"life_expectancy_{profile.country}_{timestamp}.{extension}"
    filepath = os.path.join("temp_files", filename)

    try:
        exporter_class(profile, report, calculator).export(filepath)
    except OSError as e:
        logger.error(f"Error exporting {format} report: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return FileResponse(
        path=filepath,
        filename=filename,
        media_type=media_type
    )
