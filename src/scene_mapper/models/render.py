"""Data models for the interactive scene renderer.

Defines the animation phases, the category filter with its explicit
show-all / hide-all sentinels, and the derived per-frame views.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from scene_mapper.models.scene import SceneCategory


class RenderPhase(IntEnum):
    """Animation phases, ordered so that phases can be compared."""
    IDLE = 0          # No graph
    APPEARING = 1     # Elements fading/scaling in
    CONNECTED = 2     # Connections drawn
    INTERACTIVE = 3   # Steady state


class FilterMode(str, Enum):
    """How a CategoryFilter decides visibility."""
    ALL = "ALL"       # No filter requested
    NONE = "NONE"     # Explicitly hide everything
    ONLY = "ONLY"     # Only the listed categories


@dataclass(frozen=True)
class CategoryFilter:
    """Active category filter.

    An empty category set is never used to mean "hide all"; that requires
    the NONE mode returned by ``CategoryFilter.none()``.
    """
    mode: FilterMode = FilterMode.ALL
    categories: frozenset[SceneCategory] = frozenset()

    @classmethod
    def all(cls) -> "CategoryFilter":
        return cls(mode=FilterMode.ALL)

    @classmethod
    def none(cls) -> "CategoryFilter":
        return cls(mode=FilterMode.NONE)

    @classmethod
    def only(cls, categories: Iterable[SceneCategory | str]) -> "CategoryFilter":
        """Filter to the given categories; an empty iterable shows everything."""
        parsed = frozenset(SceneCategory(c) for c in categories)
        if not parsed:
            return cls.all()
        return cls(mode=FilterMode.ONLY, categories=parsed)

    def passes(self, category: SceneCategory) -> bool:
        if self.mode == FilterMode.ALL:
            return True
        if self.mode == FilterMode.NONE:
            return False
        return category in self.categories

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "categories": sorted(c.value for c in self.categories),
        }


@dataclass
class ElementView:
    """Derived render state for one element."""
    name: str
    category: SceneCategory
    color: str
    x: float
    y: float
    icon: str
    size: int
    tooltip: str = ""
    visible: bool = False
    hovered: bool = False
    selected: bool = False
    glow: bool = False
    scale: float = 0.0
    appear_delay: float = 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category.value,
            "color": self.color,
            "x": self.x,
            "y": self.y,
            "icon": self.icon,
            "size": self.size,
            "tooltip": self.tooltip,
            "visible": self.visible,
            "hovered": self.hovered,
            "selected": self.selected,
            "glow": self.glow,
            "scale": self.scale,
            "appear_delay": self.appear_delay,
        }


@dataclass
class ConnectionView:
    """Derived render state for one connection."""
    source: str
    target: str
    color: str
    description: str = ""
    visible: bool = False

    def to_dict(self) -> dict:
        return {
            "from": self.source,
            "to": self.target,
            "color": self.color,
            "description": self.description,
            "visible": self.visible,
        }


@dataclass
class RenderFrame:
    """Everything a renderer needs to draw the current state."""
    phase: RenderPhase
    generation: int
    title: str = ""
    elements: list[ElementView] = field(default_factory=list)
    connections: list[ConnectionView] = field(default_factory=list)
    hovered: str | None = None
    selected: str | None = None
    filter: CategoryFilter = field(default_factory=CategoryFilter.all)

    def visible_elements(self) -> list[ElementView]:
        return [e for e in self.elements if e.visible]

    def visible_connections(self) -> list[ConnectionView]:
        return [c for c in self.connections if c.visible]

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.name,
            "generation": self.generation,
            "title": self.title,
            "elements": [e.to_dict() for e in self.elements],
            "connections": [c.to_dict() for c in self.connections],
            "hovered": self.hovered,
            "selected": self.selected,
            "filter": self.filter.to_dict(),
        }
