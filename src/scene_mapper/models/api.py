"""
API request and response models.
"""

from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Interpretation Models
# =============================================================================


class InterpretRequest(BaseModel):
    """Request model for scene interpretation."""

    text: str = Field(..., description="Free-form scene description", min_length=1)
    supplied_confidence: float | None = Field(
        default=None, ge=0.0, le=1.0,
        description="Confidence reported by an image-analysis collaborator",
    )
    seed: int | None = Field(
        default=None, description="Seed for reproducible positions and connections"
    )


class ConfidenceResponse(BaseModel):
    """Confidence attached to a generated scene."""

    value: float = Field(..., ge=0.0, le=1.0)
    band: str
    source: str


class InterpretResponse(BaseModel):
    """Response model for scene interpretation."""

    scene: dict[str, Any] = Field(..., description="Scene graph as plain data")
    confidence: ConfidenceResponse
    element_count: int
    connection_count: int
    inconclusive: bool


# =============================================================================
# Report Models
# =============================================================================


class ReportRequest(BaseModel):
    """Request a plain report for a scene graph."""

    scene: dict[str, Any] = Field(..., description="Scene graph as plain data")
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)


class ReportResponse(BaseModel):
    """Report data for an external PDF exporter."""

    report: dict[str, Any]
    text: str
