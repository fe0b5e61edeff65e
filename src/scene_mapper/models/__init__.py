"""
Models for Scene Mapper.

This module contains all data models used throughout the application:
- Scene models for elements, connections and the scene graph
- Render models for phases, filters and derived frames
- API models for request/response schemas
"""

from scene_mapper.models.scene import (
    ANALYZED_TITLE,
    INCONCLUSIVE_TITLE,
    Position,
    SceneCategory,
    SceneConnection,
    SceneElement,
    SceneGraph,
)
from scene_mapper.models.render import (
    CategoryFilter,
    ConnectionView,
    ElementView,
    FilterMode,
    RenderFrame,
    RenderPhase,
)
from scene_mapper.models.api import (
    ConfidenceResponse,
    InterpretRequest,
    InterpretResponse,
    ReportRequest,
    ReportResponse,
)

__all__ = [
    # Scene models
    "ANALYZED_TITLE",
    "INCONCLUSIVE_TITLE",
    "Position",
    "SceneCategory",
    "SceneConnection",
    "SceneElement",
    "SceneGraph",
    # Render models
    "CategoryFilter",
    "ConnectionView",
    "ElementView",
    "FilterMode",
    "RenderFrame",
    "RenderPhase",
    # API models
    "ConfidenceResponse",
    "InterpretRequest",
    "InterpretResponse",
    "ReportRequest",
    "ReportResponse",
]
