"""
FastAPI application for the title engine web interface.

The API is stateless: /api/upload returns the parsed samples and the client
sends them back with each /api/predict request.

Production deployment configuration via environment variables.
"""

import logging
import os
from typing import Any, List, Optional, Union

from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from core.ingestion import (
    MAX_SAMPLES,
    CellParser,
    SampleSession,
    WorkbookError,
    load_samples,
)
from core.title_engine import Sample, TitleEngineError
from reporting.estimate_pdf import EstimateReportGenerator
from utils.config import Config


logger = logging.getLogger(__name__)

# =============================================================================
# Environment Configuration
# =============================================================================

# Production mode detection
IS_PRODUCTION = os.getenv("RAILWAY_ENVIRONMENT") is not None or os.getenv("PRODUCTION", "").lower() == "true"

# CORS configuration - locked down for production
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "").split(",") if os.getenv("ALLOWED_ORIGINS") else []
if not ALLOWED_ORIGINS and not IS_PRODUCTION:
    # Development fallback only
    ALLOWED_ORIGINS = ["http://localhost:8000", "http://127.0.0.1:8000"]

# Debug mode - NEVER enabled in production
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true" and not IS_PRODUCTION

APP_VERSION = "1.0.0"


# =============================================================================
# API Request/Response Models
# =============================================================================

class SampleInput(BaseModel):
    """One (house number, title number) pair."""
    house_number: int = Field(gt=0)
    title_number: int = Field(gt=0)
    category_label: str = ""

    def to_sample(self) -> Sample:
        return Sample(
            house_number=self.house_number,
            title_number=self.title_number,
            category_label=self.category_label,
        )


class PredictRequest(BaseModel):
    """Request body for prediction and estimate sheets."""
    samples: List[SampleInput] = Field(max_length=MAX_SAMPLES)
    # Validated by the engine so booleans and fractions get invalid_target
    target_house_number: Any
    # Title types to include; omit for all
    categories: Optional[List[str]] = None

    def to_session(self) -> SampleSession:
        return SampleSession.from_samples(s.to_sample() for s in self.samples)


def error_response(error: Union[TitleEngineError, WorkbookError], status_code: int = 400) -> JSONResponse:
    """Uniform JSON body for recoverable failures."""
    return JSONResponse(
        {
            "success": False,
            "error": error.kind,
            "message": error.message,
        },
        status_code=status_code,
    )


def create_app(config: Optional[Config] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config.load()

    app = FastAPI(
        title="Title Number Engine",
        description="Predicts land-registry title numbers from house numbers",
        version=APP_VERSION,
        # Production settings: disable docs/redoc for private deployment
        docs_url=None if IS_PRODUCTION else "/docs",
        redoc_url=None if IS_PRODUCTION else "/redoc",
        openapi_url=None if IS_PRODUCTION else "/openapi.json",
        debug=DEBUG_MODE,
    )

    # ==========================================================================
    # Healthcheck endpoints are registered first. No dependencies, no IO.
    # ==========================================================================
    @app.get("/", include_in_schema=False)
    def root():
        """Root healthcheck. No dependencies, no IO."""
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        """Secondary health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    # CORS middleware - locked down for production
    if ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
        )

    parser = CellParser(min_title_digits=config.min_title_digits)
    report_generator = EstimateReportGenerator()

    @app.post("/api/upload")
    async def upload_workbook(file: UploadFile = File(...)):
        """
        Parse a survey workbook into samples.

        Returns:
            - success: true with samples and the title types found
            - success: false with message if the file cannot be used
        """
        content = await file.read()
        if len(content) > config.max_upload_bytes:
            return JSONResponse(
                {
                    "success": False,
                    "error": "file_too_large",
                    "message": f"File exceeds {config.max_upload_bytes} bytes.",
                },
                status_code=413,
            )

        try:
            result = load_samples(
                content,
                file.filename or "",
                parser,
                content_type=file.content_type,
            )
        except WorkbookError as e:
            logger.warning("Upload %s rejected: %s", file.filename, e.kind)
            return error_response(e)

        session = SampleSession.from_samples(result.samples)
        body = {
            "success": True,
            "samples": [s.to_dict() for s in session.samples],
            "categories": [
                {"value": value, "label": label}
                for value, label in session.categories.items()
            ],
            "skipped_columns": len(result.skipped_columns),
            "dropped_samples": session.dropped_count,
        }
        if len(session.samples) < 2:
            body["warning"] = (
                f"Found {len(session.samples)} valid data pairs. "
                "Not enough data to calculate a pattern."
            )
        return body

    @app.post("/api/predict")
    async def predict(request_data: PredictRequest):
        """
        Predict the title number for the target house.

        Low confidence is a valid result, returned with success: true.
        """
        try:
            outcome = request_data.to_session().predict(
                request_data.target_house_number,
                selected=request_data.categories,
            )
        except TitleEngineError as e:
            return error_response(e)

        return {"success": True, "result": outcome.to_dict()}

    @app.post("/api/report")
    async def estimate_report(request_data: PredictRequest):
        """Predict and return the estimate sheet as a PDF."""
        try:
            outcome = request_data.to_session().predict(
                request_data.target_house_number,
                selected=request_data.categories,
            )
        except TitleEngineError as e:
            return error_response(e)

        pdf_bytes = report_generator.generate_to_buffer(outcome)
        filename = f"TITLE-{outcome.target_house_number}.pdf"
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": APP_VERSION,
            "environment": "production" if IS_PRODUCTION else "development",
        }

    return app


# Create app instance for uvicorn
app = create_app()
