"""
Scene graph models: elements, connections and the graph container.

Based on the forensic scene vocabulary used by the pattern catalog.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from scene_mapper.config import CANVAS_HEIGHT, CANVAS_WIDTH

INCONCLUSIVE_TITLE = "Inconclusive Analysis"
ANALYZED_TITLE = "Crime Scene Analyzed"


class SceneCategory(str, Enum):
    """
    Closed set of element categories.

    CUSTOM covers manually added elements that match no catalog rule.
    """

    BODY = "body"
    WEAPON = "weapon"
    BLOOD = "blood"
    FOOTPRINT = "footprint"
    ACCESS_POINT = "access-point"
    FURNITURE = "furniture"
    ROOM = "room"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        """Element name derived from the category ("access-point" -> "Access-point")."""
        return self.value.capitalize()


class Position(BaseModel):
    """A point on the reference canvas."""

    x: float = Field(..., ge=0.0, le=CANVAS_WIDTH)
    y: float = Field(..., ge=0.0, le=CANVAS_HEIGHT)

    def rounded(self) -> tuple[int, int]:
        return round(self.x), round(self.y)


class SceneElement(BaseModel):
    """
    A typed, positioned entity detected in or added to a scene.

    The name is the join key used by connections, so it must be unique
    within a graph.
    """

    name: str = Field(..., min_length=1, description="Display name, unique per graph")
    category: SceneCategory = Field(..., description="Element category")
    color: str = Field(..., description="Display color hint")
    position: Position
    tooltip: str = Field(default="", description="Hover description")
    classification: str = Field(default="", description="Free-text evidence label")
    icon: str = Field(default="pin", description="Icon tag for the renderer")

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Normalize element name by stripping whitespace."""
        return v.strip() if isinstance(v, str) else v


class SceneConnection(BaseModel):
    """
    A directed, described relation between two named elements.

    Serialized with ``from``/``to`` keys for downstream renderers.
    """

    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(..., alias="from", description="Name of the source element")
    target: str = Field(..., alias="to", description="Name of the target element")
    color: str = Field(default="#ff4500")
    description: str = Field(default="")

    def references(self, name: str) -> bool:
        """Whether either endpoint is the given element name."""
        return self.source == name or self.target == name


class SceneGraph(BaseModel):
    """
    Structured result of interpreting a scene description.

    Elements keep detection order; connections reference elements by name.
    """

    elements: list[SceneElement] = Field(default_factory=list)
    connections: list[SceneConnection] = Field(default_factory=list)
    narrative: str = Field(default="")
    title: str = Field(default=INCONCLUSIVE_TITLE)

    @property
    def is_inconclusive(self) -> bool:
        """True when nothing was detected; a user-visible state, not a failure."""
        return not self.elements

    def element_names(self) -> list[str]:
        return [element.name for element in self.elements]

    def get_element(self, name: str) -> SceneElement | None:
        """Get an element by exact name."""
        for element in self.elements:
            if element.name == name:
                return element
        return None

    def has_element(self, name: str) -> bool:
        return self.get_element(name) is not None

    def connections_for(self, name: str) -> list[SceneConnection]:
        """Get all connections involving an element (as source or target)."""
        return [c for c in self.connections if c.references(name)]

    def dangling_connections(self) -> list[SceneConnection]:
        """Connections with at least one endpoint missing from the elements."""
        names = set(self.element_names())
        return [
            c for c in self.connections
            if c.source not in names or c.target not in names
        ]

    def duplicate_names(self) -> list[str]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for name in self.element_names():
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        return duplicates

    def is_consistent(self) -> bool:
        """Whether names are unique and every connection endpoint exists."""
        return not self.duplicate_names() and not self.dangling_connections()

    def category_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for element in self.elements:
            key = element.category.value
            counts[key] = counts.get(key, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain data for renderers, exporters and narrators."""
        return self.model_dump(mode="json", by_alias=True)
