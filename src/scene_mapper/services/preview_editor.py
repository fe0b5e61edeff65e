"""
Scene preview and manual edit service.

Provides functionality to:
- Hold a working copy of a generated scene
- Add custom elements and remove elements with cascading connection removal
- Discard edits or commit the working copy to the renderer
"""

import random

import structlog

from scene_mapper.catalog.patterns import (
    CUSTOM_CLASSIFICATION,
    CUSTOM_COLOR,
    CUSTOM_ICON,
)
from scene_mapper.config import Settings, get_settings
from scene_mapper.models.scene import SceneCategory, SceneElement, SceneGraph
from scene_mapper.services.interpreter import spawn_position
from scene_mapper.services.render_state import RenderStateMachine

logger = structlog.get_logger(__name__)


class PreviewEditor:
    """
    Editable working copy of a scene graph.

    Every mutation keeps the graph invariant: element names are unique
    and every connection references existing elements. Invalid mutations
    are ignored rather than raised.
    """

    def __init__(
        self,
        graph: SceneGraph,
        rng: random.Random | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.random_seed)

        self._original = graph.model_copy(deep=True)
        self._working = graph.model_copy(deep=True)
        self._editing = True

    @property
    def graph(self) -> SceneGraph:
        """The current working copy."""
        return self._working

    @property
    def original(self) -> SceneGraph:
        return self._original

    @property
    def is_editing(self) -> bool:
        return self._editing

    @property
    def is_dirty(self) -> bool:
        """Whether the working copy differs from the graph it started from."""
        return self._working != self._original

    def add_element(
        self,
        name: str,
        classification: str = CUSTOM_CLASSIFICATION,
    ) -> SceneElement | None:
        """
        Append a manually added element.

        Args:
            name: Display name; blank or already used names are ignored
            classification: Free-text evidence label

        Returns:
            The new element, or None if nothing was added
        """
        if not self._editing:
            logger.debug("edit_ignored_after_commit", operation="add_element")
            return None

        name = (name or "").strip()
        if not name:
            logger.debug("add_element_ignored", reason="empty_name")
            return None
        if self._working.has_element(name):
            logger.debug("add_element_ignored", reason="duplicate_name", name=name)
            return None

        element = SceneElement(
            name=name,
            category=SceneCategory.CUSTOM,
            color=CUSTOM_COLOR,
            position=spawn_position(self.rng, self.settings),
            tooltip=f"{name} manually added",
            classification=classification,
            icon=CUSTOM_ICON,
        )
        self._working.elements.append(element)

        logger.info("element_added", name=name, elements=len(self._working.elements))
        return element

    def remove_element(self, index: int) -> SceneElement | None:
        """
        Remove the element at a position and every connection referencing it.

        Returns the removed element, or None for an out-of-range index.
        """
        if not self._editing:
            logger.debug("edit_ignored_after_commit", operation="remove_element")
            return None

        if not 0 <= index < len(self._working.elements):
            logger.debug(
                "remove_element_ignored",
                index=index,
                elements=len(self._working.elements),
            )
            return None

        removed = self._working.elements.pop(index)
        kept = [c for c in self._working.connections if not c.references(removed.name)]
        dropped = len(self._working.connections) - len(kept)
        self._working.connections = kept

        logger.info(
            "element_removed",
            name=removed.name,
            connections_removed=dropped,
        )
        return removed

    def reset(self) -> None:
        """Discard all edits."""
        self._working = self._original.model_copy(deep=True)
        self._editing = True
        logger.debug("edits_discarded")

    def commit(self, machine: RenderStateMachine) -> SceneGraph:
        """
        Hand the working copy to the renderer and end edit mode.

        Must be called from a running event loop (the renderer starts its
        phase timers).
        """
        committed = self._working.model_copy(deep=True)
        machine.show(committed)
        self._editing = False

        logger.info(
            "preview_committed",
            elements=len(committed.elements),
            connections=len(committed.connections),
            edited=self.is_dirty,
        )
        return committed
