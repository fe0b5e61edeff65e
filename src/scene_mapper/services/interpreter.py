"""
Scene interpretation service.

Turns a free-form forensic description into a SceneGraph:
- Detects elements with the pattern catalog
- Infers placeholder spatial relations between adjacent elements
- Writes the forensic narrative and title
"""

import random
from functools import lru_cache

import structlog

from scene_mapper.catalog.patterns import PatternRule, match_rules
from scene_mapper.config import Settings, get_settings
from scene_mapper.models.scene import (
    ANALYZED_TITLE,
    INCONCLUSIVE_TITLE,
    Position,
    SceneConnection,
    SceneElement,
    SceneGraph,
)

logger = structlog.get_logger(__name__)

CONNECTION_COLOR = "#ff4500"

INSUFFICIENT_NARRATIVE = (
    "Insufficient description for forensic analysis. "
    "Please provide more details about the scene."
)
NARRATIVE_CLOSING = (
    "The evidence suggests an investigative pattern that requires detailed analysis."
)


class InvalidInputError(ValueError):
    """Raised when the interpreter is given no usable description."""


def validate_description(text: str) -> str:
    """
    Check that a description can be interpreted.

    Raises:
        InvalidInputError: If text is None, not a string, or blank
    """
    if text is None:
        raise InvalidInputError("Scene description is required")
    if not isinstance(text, str):
        raise InvalidInputError(
            f"Scene description must be a string, got {type(text).__name__}"
        )
    if not text.strip():
        raise InvalidInputError("Scene description is empty")
    return text


def spawn_position(rng: random.Random, settings: Settings) -> Position:
    """Draw a position uniformly inside the configured spawn bounds."""
    return Position(
        x=rng.uniform(settings.spawn_x_min, settings.spawn_x_max),
        y=rng.uniform(settings.spawn_y_min, settings.spawn_y_max),
    )


def generate_narrative(elements: list[SceneElement]) -> tuple[str, str]:
    """
    Build the forensic narrative and title for detected elements.

    Returns:
        Tuple of (narrative, title)
    """
    if not elements:
        return INSUFFICIENT_NARRATIVE, INCONCLUSIVE_TITLE

    sentences = ", ".join(
        f"{element.name} located in a strategic position" for element in elements
    )
    narrative = (
        f"Forensic analysis identified {len(elements)} main elements in the scene. "
        f"{sentences}. {NARRATIVE_CLOSING}"
    )
    return narrative, ANALYZED_TITLE


class SceneInterpreter:
    """
    Rule-based scene interpreter.

    All random draws (positions, connections) go through the injected
    generator so a seeded instance produces identical graphs.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.random_seed)

    def interpret(self, text: str) -> SceneGraph:
        """
        Interpret a scene description.

        Args:
            text: Raw description (typed, extracted or OCR'd)

        Returns:
            A new SceneGraph; an empty element list means the description
            was too sparse and the graph carries the inconclusive title.

        Raises:
            InvalidInputError: If text is None, not a string, or blank
        """
        validate_description(text)

        elements = [self._build_element(rule) for rule in match_rules(text)]
        connections = self._infer_connections(elements)
        narrative, title = generate_narrative(elements)

        logger.info(
            "scene_interpreted",
            text_length=len(text),
            elements=len(elements),
            connections=len(connections),
            inconclusive=not elements,
        )

        return SceneGraph(
            elements=elements,
            connections=connections,
            narrative=narrative,
            title=title,
        )

    def _build_element(self, rule: PatternRule) -> SceneElement:
        name = rule.category.display_name
        return SceneElement(
            name=name,
            category=rule.category,
            color=rule.color,
            position=spawn_position(self.rng, self.settings),
            tooltip=f"{name} found at the scene",
            classification=rule.classification,
            icon=rule.icon,
        )

    def _infer_connections(self, elements: list[SceneElement]) -> list[SceneConnection]:
        """
        Link adjacent elements at random.

        Placeholder for real spatial reasoning: each adjacent pair in emission
        order is linked independently with the configured probability.
        """
        connections = []
        for current, following in zip(elements, elements[1:]):
            if self.rng.random() < self.settings.connection_probability:
                connections.append(
                    SceneConnection(
                        source=current.name,
                        target=following.name,
                        color=CONNECTION_COLOR,
                        description=(
                            f"spatial relation between {current.name} and {following.name}"
                        ),
                    )
                )
        return connections


@lru_cache()
def get_scene_interpreter() -> SceneInterpreter:
    """Get cached scene interpreter instance."""
    return SceneInterpreter()
