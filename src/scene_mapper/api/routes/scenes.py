"""
Scene interpretation routes.

Provides endpoints to:
- Interpret a description into a scene graph with confidence
- Build report content for an external exporter
- List the detection catalog
"""

import random

import structlog
from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from scene_mapper.catalog.patterns import PATTERN_RULES
from scene_mapper.config import get_settings
from scene_mapper.models.api import (
    ConfidenceResponse,
    InterpretRequest,
    InterpretResponse,
    ReportRequest,
    ReportResponse,
)
from scene_mapper.models.scene import SceneGraph
from scene_mapper.services.confidence import (
    ConfidenceEstimator,
    ConfidenceSource,
    ConfidenceScore,
    get_confidence_estimator,
)
from scene_mapper.services.interpreter import SceneInterpreter, get_scene_interpreter
from scene_mapper.services.report import build_report

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/interpret", response_model=InterpretResponse)
async def interpret_scene(request: InterpretRequest) -> InterpretResponse:
    """
    Interpret a scene description.

    A seed makes positions, connections and the estimated confidence
    reproducible for that request.
    """
    if request.seed is not None:
        rng = random.Random(request.seed)
        settings = get_settings()
        interpreter = SceneInterpreter(rng=rng, settings=settings)
        estimator = ConfidenceEstimator(rng=rng, settings=settings)
    else:
        interpreter = get_scene_interpreter()
        estimator = get_confidence_estimator()

    scene = interpreter.interpret(request.text)

    confidence = estimator.estimate(scene, supplied=request.supplied_confidence)

    return InterpretResponse(
        scene=scene.to_dict(),
        confidence=ConfidenceResponse(**confidence.to_dict()),
        element_count=len(scene.elements),
        connection_count=len(scene.connections),
        inconclusive=scene.is_inconclusive,
    )


@router.post("/report", response_model=ReportResponse)
async def scene_report(request: ReportRequest) -> ReportResponse:
    """Build report content (title, narrative, elements, connections)."""
    try:
        scene = SceneGraph.model_validate(request.scene)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    confidence = None
    if request.confidence is not None:
        estimator = get_confidence_estimator()
        confidence = ConfidenceScore(
            value=request.confidence,
            band=estimator.classify(request.confidence),
            source=ConfidenceSource.SUPPLIED,
        )

    report = build_report(scene, confidence)
    logger.info("report_built", title=report.title, elements=len(scene.elements))

    return ReportResponse(report=report.to_dict(), text=report.to_text())


@router.get("/catalog")
async def list_catalog() -> list[dict]:
    """List detection rules in emission order."""
    return [
        {
            "category": rule.category.value,
            "synonyms": sorted(rule.synonyms),
            "color": rule.color,
            "icon": rule.icon,
            "classification": rule.classification,
        }
        for rule in PATTERN_RULES
    ]
