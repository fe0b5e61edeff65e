"""
Interactive scene render state machine.

Owns the animation phase, hover, selection and category filters for the
committed scene graph, and derives per-frame visibility and emphasis.
Rendering never mutates the graph itself.
"""

import asyncio
from collections.abc import Callable, Iterable

import structlog

from scene_mapper.catalog.patterns import get_size_for_category
from scene_mapper.config import Settings, get_settings
from scene_mapper.models.render import (
    CategoryFilter,
    ConnectionView,
    ElementView,
    FilterMode,
    RenderFrame,
    RenderPhase,
)
from scene_mapper.models.scene import SceneCategory, SceneGraph
from scene_mapper.services.task_slot import TaskSlot

logger = structlog.get_logger(__name__)

HOVER_SCALE = 1.1

FrameListener = Callable[[RenderFrame], None]


class RenderStateMachine:
    """
    Phase machine: IDLE -> APPEARING -> CONNECTED -> INTERACTIVE.

    Committing a graph restarts the sequence and cancels the timers of the
    previous graph. Every timer carries the generation it was started for,
    so a late callback from a superseded graph is ignored.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

        self._graph: SceneGraph | None = None
        self._phase = RenderPhase.IDLE
        self._generation = 0

        self._hovered: str | None = None
        self._selected: str | None = None
        self._filter = CategoryFilter.all()

        self._timers = TaskSlot("render-phase")
        self._listeners: list[FrameListener] = []

    # =========================================================================
    # State accessors
    # =========================================================================

    @property
    def graph(self) -> SceneGraph | None:
        return self._graph

    @property
    def phase(self) -> RenderPhase:
        return self._phase

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def hovered(self) -> str | None:
        return self._hovered

    @property
    def selected(self) -> str | None:
        return self._selected

    @property
    def active_filter(self) -> CategoryFilter:
        return self._filter

    @property
    def is_interactive(self) -> bool:
        return self._phase == RenderPhase.INTERACTIVE

    def subscribe(self, listener: FrameListener) -> Callable[[], None]:
        """
        Register a callback that receives a frame after every state change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # =========================================================================
    # Phase lifecycle
    # =========================================================================

    def show(self, graph: SceneGraph) -> int:
        """
        Commit a new canonical graph and restart the animation sequence.

        Must be called from a running event loop; without one it raises
        RuntimeError and leaves the current state untouched. Returns the
        generation token of the new graph.
        """
        asyncio.get_running_loop()

        self._timers.cancel()
        self._generation += 1
        generation = self._generation

        self._graph = graph
        self._phase = RenderPhase.IDLE
        self._hovered = None
        self._selected = None

        if not graph.is_consistent():
            logger.warning(
                "inconsistent_scene_committed",
                generation=generation,
                dangling=len(graph.dangling_connections()),
                duplicates=graph.duplicate_names(),
            )

        logger.info(
            "scene_committed",
            generation=generation,
            elements=len(graph.elements),
            connections=len(graph.connections),
        )

        self.advance(generation, RenderPhase.APPEARING)
        self._timers.replace(self._run_phases(generation))
        return generation

    def clear(self) -> None:
        """Drop the graph and cancel pending timers (unmount)."""
        cancelled = self._timers.cancel()
        self._generation += 1
        self._graph = None
        self._phase = RenderPhase.IDLE
        self._hovered = None
        self._selected = None

        logger.info("scene_cleared", generation=self._generation, cancelled_timer=cancelled)
        self._notify()

    async def _run_phases(self, generation: int) -> None:
        await asyncio.sleep(self.settings.render_connect_delay)
        if self.advance(generation, RenderPhase.CONNECTED):
            self.advance(generation, RenderPhase.INTERACTIVE)

    def advance(self, generation: int, phase: RenderPhase) -> bool:
        """
        Move forward to a phase on behalf of the given generation.

        Returns False for stale generations and for phases that are not
        ahead of the current one.
        """
        if generation != self._generation or self._graph is None:
            logger.info(
                "stale_phase_advance_ignored",
                generation=generation,
                current_generation=self._generation,
                phase=phase.name,
            )
            return False
        if phase <= self._phase:
            return False

        previous = self._phase
        self._phase = phase
        logger.debug(
            "phase_advanced",
            generation=generation,
            from_phase=previous.name,
            to_phase=phase.name,
        )
        self._notify()
        return True

    async def settled(self) -> None:
        """Wait until the pending phase timer has run or been cancelled."""
        await self._timers.wait()

    # =========================================================================
    # Interaction
    # =========================================================================

    def _accepts_interaction(self, name: str | None) -> bool:
        """Interaction needs a shown graph and, for a name, a visible element."""
        if self._graph is None or self._phase < RenderPhase.APPEARING:
            return False
        if name is None:
            return True
        element = self._graph.get_element(name)
        return element is not None and self._filter.passes(element.category)

    def _is_hidden(self, name: str | None) -> bool:
        if self._graph is None or name is None:
            return False
        element = self._graph.get_element(name)
        return element is not None and not self._filter.passes(element.category)

    def _drop_hidden_interaction(self) -> None:
        # Hover and selection never point at an element the filter hides
        if self._is_hidden(self._hovered):
            self._hovered = None
        if self._is_hidden(self._selected):
            self._selected = None

    def hover(self, name: str | None) -> bool:
        """
        Set (or clear with None) the emphasized element.

        Returns True if the hover state changed.
        """
        if not self._accepts_interaction(name) or name == self._hovered:
            return False
        self._hovered = name
        self._notify()
        return True

    def select(self, name: str) -> str | None:
        """
        Toggle selection of an element; selecting it again deselects it.

        Returns the selected element name after the call.
        """
        if name is None or not self._accepts_interaction(name):
            return self._selected

        self._selected = None if self._selected == name else name
        logger.debug("selection_changed", selected=self._selected)
        self._notify()
        return self._selected

    def set_filters(
        self,
        filters: CategoryFilter | Iterable[SceneCategory | str],
    ) -> CategoryFilter:
        """
        Replace the active category filter.

        An empty iterable means no filter (show everything). To hide every
        element pass ``CategoryFilter.none()``.
        """
        if not isinstance(filters, CategoryFilter):
            filters = CategoryFilter.only(filters)
        self._filter = filters
        self._drop_hidden_interaction()

        logger.debug("filters_changed", **filters.to_dict())
        self._notify()
        return self._filter

    def toggle_filter(self, category: SceneCategory | str) -> CategoryFilter:
        """Add or remove one category from the ONLY set."""
        category = SceneCategory(category)
        current = (
            set(self._filter.categories)
            if self._filter.mode == FilterMode.ONLY
            else set()
        )
        current ^= {category}
        return self.set_filters(current)

    def clear_filters(self) -> CategoryFilter:
        return self.set_filters(CategoryFilter.all())

    # =========================================================================
    # Derived view
    # =========================================================================

    def frame(self) -> RenderFrame:
        """Derive the visibility and emphasis flags for the current state."""
        frame = RenderFrame(
            phase=self._phase,
            generation=self._generation,
            hovered=self._hovered,
            selected=self._selected,
            filter=self._filter,
        )
        if self._graph is None:
            return frame

        frame.title = self._graph.title
        appeared = self._phase >= RenderPhase.APPEARING
        visibility: dict[str, bool] = {}

        for index, element in enumerate(self._graph.elements):
            visible = appeared and self._filter.passes(element.category)
            hovered = element.name == self._hovered
            if not appeared:
                scale = 0.0
            else:
                scale = HOVER_SCALE if hovered else 1.0

            # First occurrence wins if names collide
            visibility.setdefault(element.name, visible)
            frame.elements.append(
                ElementView(
                    name=element.name,
                    category=element.category,
                    color=element.color,
                    x=element.position.x,
                    y=element.position.y,
                    icon=element.icon,
                    size=get_size_for_category(element.category),
                    tooltip=element.tooltip,
                    visible=visible,
                    hovered=hovered,
                    selected=element.name == self._selected,
                    glow=hovered,
                    scale=scale,
                    appear_delay=round(index * self.settings.render_element_stagger, 6),
                )
            )

        connected = self._phase >= RenderPhase.CONNECTED
        for connection in self._graph.connections:
            frame.connections.append(
                ConnectionView(
                    source=connection.source,
                    target=connection.target,
                    color=connection.color,
                    description=connection.description,
                    visible=(
                        connected
                        and visibility.get(connection.source, False)
                        and visibility.get(connection.target, False)
                    ),
                )
            )

        return frame

    def _notify(self) -> None:
        if not self._listeners:
            return
        frame = self.frame()
        for listener in list(self._listeners):
            try:
                listener(frame)
            except Exception as e:
                logger.error(
                    "frame_listener_failed",
                    generation=frame.generation,
                    phase=frame.phase.name,
                    error=str(e),
                )
