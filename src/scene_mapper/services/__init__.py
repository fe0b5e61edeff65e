"""
Business logic services for Scene Mapper.
"""

from scene_mapper.services.interpreter import (
    InvalidInputError,
    SceneInterpreter,
    get_scene_interpreter,
)
from scene_mapper.services.confidence import (
    ConfidenceBand,
    ConfidenceEstimator,
    ConfidenceScore,
    get_confidence_estimator,
)
from scene_mapper.services.task_slot import TaskSlot
from scene_mapper.services.render_state import RenderStateMachine
from scene_mapper.services.preview_editor import PreviewEditor
from scene_mapper.services.report import SceneReport, build_report

__all__ = [
    "InvalidInputError",
    "SceneInterpreter",
    "get_scene_interpreter",
    "ConfidenceBand",
    "ConfidenceEstimator",
    "ConfidenceScore",
    "get_confidence_estimator",
    "TaskSlot",
    "RenderStateMachine",
    "PreviewEditor",
    "SceneReport",
    "build_report",
]
