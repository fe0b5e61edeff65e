"""
Staged scene processing.

Runs the timed progress stages before interpretation:
1. Analyzing - Reading the description
2. Identifying - Detecting scene elements
3. Mapping - Inferring relationships
4. Building - Preparing the visualization
"""

from scene_mapper.pipeline.orchestrator import (
    PipelineResult,
    PipelineStatus,
    SceneOrchestrator,
    get_scene_orchestrator,
)

__all__ = [
    "PipelineResult",
    "PipelineStatus",
    "SceneOrchestrator",
    "get_scene_orchestrator",
]
