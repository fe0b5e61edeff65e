"""
Pipeline Orchestrator

Coordinates the staged processing of a scene description: the timed
progress stages, interpretation and confidence estimation.
"""

import asyncio
import random
from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Callable
from uuid import UUID, uuid4

import structlog

from scene_mapper.config import Settings, get_settings
from scene_mapper.models.scene import SceneGraph
from scene_mapper.services.confidence import ConfidenceEstimator, ConfidenceScore
from scene_mapper.services.interpreter import SceneInterpreter, validate_description
from scene_mapper.services.preview_editor import PreviewEditor
from scene_mapper.services.task_slot import TaskSlot

logger = structlog.get_logger(__name__)


class PipelineStatus(str, Enum):
    """Pipeline execution status."""
    PENDING = "pending"
    ANALYZING = "analyzing"
    IDENTIFYING = "identifying"
    MAPPING = "mapping"
    BUILDING = "building"
    COMPLETED = "completed"
    FAILED = "failed"


PROCESSING_STAGES: tuple[PipelineStatus, ...] = (
    PipelineStatus.ANALYZING,
    PipelineStatus.IDENTIFYING,
    PipelineStatus.MAPPING,
    PipelineStatus.BUILDING,
)

STAGE_LABELS: dict[PipelineStatus, str] = {
    PipelineStatus.PENDING: "Waiting for description...",
    PipelineStatus.ANALYZING: "Analyzing description...",
    PipelineStatus.IDENTIFYING: "Identifying elements...",
    PipelineStatus.MAPPING: "Mapping relationships...",
    PipelineStatus.BUILDING: "Building visualization...",
    PipelineStatus.COMPLETED: "Scene mapped",
    PipelineStatus.FAILED: "Processing failed",
}

ProgressCallback = Callable[[PipelineStatus, str, float], None]


class PipelineResult:
    """Result of a pipeline execution."""

    def __init__(
        self,
        request_id: UUID,
        status: PipelineStatus,
        scene: SceneGraph | None = None,
        confidence: ConfidenceScore | None = None,
        error: str | None = None,
        started_at: datetime | None = None,
        completed_at: datetime | None = None,
    ):
        self.request_id = request_id
        self.status = status
        self.scene = scene
        self.confidence = confidence
        self.error = error
        self.started_at = started_at
        self.completed_at = completed_at

    @property
    def duration_seconds(self) -> float | None:
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_id": str(self.request_id),
            "status": self.status.value,
            "elements": len(self.scene.elements) if self.scene else 0,
            "connections": len(self.scene.connections) if self.scene else 0,
            "confidence": self.confidence.to_dict() if self.confidence else None,
            "error": self.error,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
        }


class SceneOrchestrator:
    """
    Orchestrates one scene request at a time.

    Coordinates:
    1. Timed processing stages with progress labels
    2. Interpretation of the description
    3. Confidence estimation
    4. Preview editor for the resulting scene

    Submitting a new request cancels the stage sequence of the previous
    one, and progress from a superseded request is never reported.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.random_seed)

        self.interpreter = SceneInterpreter(rng=self.rng, settings=self.settings)
        self.estimator = ConfidenceEstimator(rng=self.rng, settings=self.settings)

        self._slot = TaskSlot("scene-processing")
        self._current_request: UUID | None = None
        self._last_result: PipelineResult | None = None

        # Callbacks
        self._progress_callback: ProgressCallback | None = None

    @property
    def last_result(self) -> PipelineResult | None:
        return self._last_result

    @property
    def is_processing(self) -> bool:
        return self._slot.active

    def set_progress_callback(self, callback: ProgressCallback) -> None:
        """Set callback for progress updates."""
        self._progress_callback = callback

    def _report_progress(
        self,
        request_id: UUID,
        status: PipelineStatus,
        progress: float,
    ) -> None:
        """Report progress to callback, unless the request was superseded."""
        if request_id != self._current_request:
            logger.debug(
                "stale_progress_ignored",
                request_id=str(request_id),
                status=status.value,
            )
            return
        if self._progress_callback:
            self._progress_callback(status, STAGE_LABELS[status], progress)

    # =========================================================================
    # Main Pipeline
    # =========================================================================

    async def run(
        self,
        text: str,
        supplied_confidence: float | None = None,
        request_id: UUID | None = None,
    ) -> PipelineResult:
        """
        Run the staged processing for one description.

        Args:
            text: Scene description
            supplied_confidence: Confidence from an image-analysis collaborator
            request_id: Identifier of the request (generated when omitted)

        Returns:
            PipelineResult with the scene graph and its confidence
        """
        request_id = request_id or uuid4()
        self._current_request = request_id
        started_at = datetime.now()

        try:
            validate_description(text)
        except ValueError as e:
            logger.warning("pipeline_rejected", request_id=str(request_id), error=str(e))
            self._report_progress(request_id, PipelineStatus.FAILED, 1.0)
            return PipelineResult(
                request_id=request_id,
                status=PipelineStatus.FAILED,
                error=str(e),
                started_at=started_at,
                completed_at=datetime.now(),
            )

        logger.info("pipeline_started", request_id=str(request_id), text_length=len(text))

        try:
            for index, stage in enumerate(PROCESSING_STAGES):
                self._report_progress(request_id, stage, index / len(PROCESSING_STAGES))
                await asyncio.sleep(self.settings.processing_stage_delay)
        except asyncio.CancelledError:
            logger.info("pipeline_cancelled", request_id=str(request_id))
            raise

        scene = self.interpreter.interpret(text)
        confidence = self.estimator.estimate(scene, supplied=supplied_confidence)
        completed_at = datetime.now()

        result = PipelineResult(
            request_id=request_id,
            status=PipelineStatus.COMPLETED,
            scene=scene,
            confidence=confidence,
            started_at=started_at,
            completed_at=completed_at,
        )
        if request_id == self._current_request:
            self._last_result = result

        logger.info(
            "pipeline_completed",
            request_id=str(request_id),
            elements=len(scene.elements),
            connections=len(scene.connections),
            confidence=round(confidence.value, 3),
            duration_seconds=result.duration_seconds,
        )
        self._report_progress(request_id, PipelineStatus.COMPLETED, 1.0)
        return result

    def submit(
        self,
        text: str,
        supplied_confidence: float | None = None,
    ) -> asyncio.Task:
        """
        Start processing a description, cancelling any request in flight.

        Must be called from a running event loop. Awaiting the returned task
        of a superseded request raises asyncio.CancelledError.
        """
        request_id = uuid4()
        self._current_request = request_id
        return self._slot.replace(
            self.run(text, supplied_confidence=supplied_confidence, request_id=request_id)
        )

    def cancel(self) -> bool:
        """Cancel the request in flight (if any)."""
        self._current_request = None
        return self._slot.cancel()

    def preview(self, result: PipelineResult) -> PreviewEditor:
        """Open a preview editor on a completed result's scene."""
        if result.scene is None:
            raise ValueError(f"Result {result.request_id} has no scene to preview")
        return PreviewEditor(result.scene, rng=self.rng, settings=self.settings)


@lru_cache()
def get_scene_orchestrator() -> SceneOrchestrator:
    """Get cached scene orchestrator instance."""
    return SceneOrchestrator()
