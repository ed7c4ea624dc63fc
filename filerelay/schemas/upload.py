"""
FileRelay: Pydantic Request/Response Schemas
==============================================

What:  Pydantic models for the transient per-request entities and the API
       contract of the relay endpoint.
How:   FastAPI uses the response models to serialize responses and to
       generate the OpenAPI documentation.
Who:   Upload is built by UploadService; GenerationResult by RelayService;
       the error/health models document the responses in main.py and routes.
When:  Created on request receipt and discarded once the response is sent.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request-scoped entities
# ══════════════════════════════════════════════════════════════════════════


class Upload(BaseModel):
    """
    What:  A single file submitted in one HTTP request, already validated.
    When:  Created after validation and discarded once the API call returns.
    """
    content: bytes = Field(description="Raw file bytes", repr=False)
    mime_type: str = Field(description="Declared MIME type of the upload")
    size: int = Field(ge=0, description="Size of the upload in bytes")
    filename: Optional[str] = Field(default=None, description="Original client filename")

    model_config = {"frozen": True}


class GenerationResult(BaseModel):
    """
    What:  Text returned by the generative model for one upload.
    Who:   Returned by POST /read-file as {"generatedText": "..."}.
    """
    generated_text: str = Field(
        alias="generatedText",
        description="Model output, returned verbatim",
    )

    model_config = {"populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body for every failed request.

    Examples:
        {"error": "File is required"}
        {"error": "An error occurred while generating content", "details": "quota exceeded"}
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[str] = Field(
        default=None,
        description="Underlying failure message (downstream errors only)",
    )


class HealthResponse(BaseModel):
    """Returned by GET /health. Does not call the generative API."""
    status: str = Field(description="Overall service status: healthy, degraded")
    version: str = Field(description="Application version")
    model: str = Field(description="Configured Gemini model name")
    uptime_seconds: float = Field(description="Seconds since service started")
