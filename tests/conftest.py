"""Shared pytest fixtures for the Scene Mapper test suite."""

import random

import pytest

from scene_mapper.config import Settings
from scene_mapper.models.scene import (
    Position,
    SceneCategory,
    SceneConnection,
    SceneElement,
    SceneGraph,
)


# ---------------------------------------------------------------------------
# Singleton cache clearing (autouse)
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_singletons():
    """Clear all @lru_cache singletons between tests."""
    from scene_mapper.config import get_settings
    from scene_mapper.services.interpreter import get_scene_interpreter
    from scene_mapper.services.confidence import get_confidence_estimator
    from scene_mapper.pipeline.orchestrator import get_scene_orchestrator

    get_settings.cache_clear()
    get_scene_interpreter.cache_clear()
    get_confidence_estimator.cache_clear()
    get_scene_orchestrator.cache_clear()
    yield


# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fast_settings():
    """Settings with millisecond delays for async tests."""
    return Settings(
        _env_file=None,
        render_connect_delay=0.02,
        render_element_stagger=0.1,
        processing_stage_delay=0.005,
    )


@pytest.fixture
def rng():
    return random.Random(1234)


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def scenario_text():
    return "Body found next to a sofa with blood leading to the kitchen; front door open"


def _element(name, category, x=150.0, y=150.0, color="#123456"):
    return SceneElement(
        name=name,
        category=category,
        color=color,
        position=Position(x=x, y=y),
        tooltip=f"{name} found at the scene",
        classification="Test evidence",
    )


@pytest.fixture
def sample_scene():
    """Four elements chained by three connections."""
    elements = [
        _element("Body", SceneCategory.BODY, 120, 140),
        _element("Weapon", SceneCategory.WEAPON, 220, 180),
        _element("Blood", SceneCategory.BLOOD, 320, 260),
        _element("Room", SceneCategory.ROOM, 420, 380),
    ]
    connections = [
        SceneConnection(source="Body", target="Weapon", description="spatial relation between Body and Weapon"),
        SceneConnection(source="Weapon", target="Blood", description="spatial relation between Weapon and Blood"),
        SceneConnection(source="Blood", target="Room", description="spatial relation between Blood and Room"),
    ]
    return SceneGraph(
        elements=elements,
        connections=connections,
        narrative="Forensic analysis identified 4 main elements in the scene.",
        title="Crime Scene Analyzed",
    )


@pytest.fixture
def degenerate_scene():
    """Self-referential and dangling connections."""
    return SceneGraph(
        elements=[_element("Body", SceneCategory.BODY)],
        connections=[
            SceneConnection(source="Body", target="Body", description="self"),
            SceneConnection(source="Body", target="Ghost", description="dangling"),
        ],
        narrative="",
        title="Degenerate",
    )
