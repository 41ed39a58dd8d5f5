"""
Base classes for diagram layout algorithms.

This module provides abstract base classes that define the common interface
and shared functionality for all layout algorithms:

- BaseLayout: Abstract base with event system, node/edge management
- IterativeLayout: For layouts with a fixed iteration budget (force-directed)
- StaticLayout: For single-pass layouts (hierarchical, tree, grid, etc.)

Layouts mutate the caller's Node objects in place. Edges whose endpoints
are missing from the node batch are skipped silently everywhere.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import (
    Edge,
    EdgeLike,
    Event,
    EventCallback,
    EventType,
    Node,
    NodeLike,
)
from .validation import validate_edge_references, validate_iterations


class BaseLayout(ABC):
    """
    Abstract base class for all layout algorithms.

    Provides shared infrastructure:
    - Event system (start/tick/end events)
    - Node/edge management via properties
    - Per-instance random source
    - Adjacency helpers that ignore dangling edges

    Example:
        layout = SomeLayout(nodes=nodes, edges=edges)
        layout.run()

        for node in layout.nodes:
            print(f"Node {node.id}: ({node.x}, {node.y})")
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            nodes: List of nodes (Node objects or dicts of Node arguments)
            edges: List of edges (Edge objects or dicts of Edge arguments)
            random_seed: Seed for the layout's private random source
            on_start: Callback for start event
            on_tick: Callback for tick event (iterative layouts)
            on_end: Callback for end event
        """
        self._nodes: list[Node] = []
        self._edges: list[Edge] = []
        self._events: dict[EventType, EventCallback] = {}
        self._random_seed: Optional[int] = random_seed
        self._rng = random.Random(random_seed)

        if nodes is not None:
            self.nodes = nodes
        if edges is not None:
            self.edges = edges

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """Set nodes. Node objects are kept by reference, dicts are converted."""
        self._nodes = []
        for node_data in value:
            if isinstance(node_data, Node):
                self._nodes.append(node_data)
            else:
                self._nodes.append(Node(**node_data))

    @property
    def edges(self) -> list[Edge]:
        """Get the list of edges."""
        return self._edges

    @edges.setter
    def edges(self, value: Sequence[EdgeLike]) -> None:
        """Set edges. Edge objects are kept by reference, dicts are converted."""
        self._edges = []
        for edge_data in value:
            if isinstance(edge_data, Edge):
                self._edges.append(edge_data)
            else:
                self._edges.append(Edge(**edge_data))

    @property
    def random_seed(self) -> Optional[int]:
        """Get random seed for reproducible layouts."""
        return self._random_seed

    @random_seed.setter
    def random_seed(self, value: Optional[int]) -> None:
        """Set random seed and reset the private random source."""
        self._random_seed = value
        self._rng = random.Random(value)

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Trigger an event, calling the registered callback."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Check that every edge references existing nodes.

        Not called by run(); layouts tolerate dangling edges. Use this for
        fail-fast behaviour.

        Raises:
            InvalidEdgeError: If any edge references a missing node.
        """
        validate_edge_references(self._nodes, self._edges, strict=True)
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self (for chaining)
        """
        pass

    def stop(self) -> Self:
        """Stop the layout (for iterative layouts)."""
        return self

    # -------------------------------------------------------------------------
    # Utility Methods
    # -------------------------------------------------------------------------

    def _node_map(self) -> dict[int, Node]:
        """Map node id to node."""
        return {node.id: node for node in self._nodes}

    def _valid_edges(self) -> Iterator[Edge]:
        """Yield edges whose endpoints both exist; dangling edges are skipped."""
        ids = {node.id for node in self._nodes}
        for edge in self._edges:
            if edge.source in ids and edge.target in ids:
                yield edge

    def _build_adjacency(self) -> dict[int, list[int]]:
        """Directed adjacency (source id -> target ids) over valid edges."""
        adj: dict[int, list[int]] = defaultdict(list)
        for edge in self._valid_edges():
            adj[edge.source].append(edge.target)
        return adj

    def _in_degrees(self) -> dict[int, int]:
        """In-degree of every node over valid edges."""
        in_degree = {node.id: 0 for node in self._nodes}
        for edge in self._valid_edges():
            in_degree[edge.target] += 1
        return in_degree

    def _connectivity(self) -> dict[int, int]:
        """Number of incident edge endpoints per node."""
        degree = {node.id: 0 for node in self._nodes}
        for edge in self._edges:
            if edge.source in degree:
                degree[edge.source] += 1
            if edge.target in degree:
                degree[edge.target] += 1
        return degree


class IterativeLayout(BaseLayout):
    """
    Base class for layouts that run a fixed iteration budget.

    Provides:
    - Iteration budget (always run in full unless stopped)
    - Tick-based iteration loop
    - Optional cancellation hook checked before every tick

    Example:
        layout = SomeForceLayout(
            nodes=nodes,
            edges=edges,
            iterations=100,
            should_stop=lambda: time.monotonic() > deadline,
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        random_seed: Optional[int] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # IterativeLayout-specific parameters
        iterations: int = 100,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> None:
        """
        Initialize iterative layout.

        Args:
            nodes: List of nodes
            edges: List of edges
            random_seed: Seed for the layout's private random source
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of iterations to run (>= 0)
            should_stop: Optional cancellation/deadline hook; when it returns
                True the loop ends before the next tick.
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        self._iterations: int = validate_iterations(iterations)
        self._should_stop = should_stop
        self._running: bool = False
        self._alpha: float = 1.0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def alpha(self) -> float:
        """Fraction of the initial temperature remaining (1 -> 0)."""
        return self._alpha

    @property
    def iterations(self) -> int:
        """Get iteration budget."""
        return self._iterations

    @iterations.setter
    def iterations(self, value: int) -> None:
        """Set iteration budget."""
        self._iterations = validate_iterations(value)

    @property
    def should_stop(self) -> Optional[Callable[[], bool]]:
        """Get the cancellation hook."""
        return self._should_stop

    @should_stop.setter
    def should_stop(self, value: Optional[Callable[[], bool]]) -> None:
        self._should_stop = value

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            True if done, False if more iterations remain.
        """
        pass

    def kick(self) -> None:
        """Run tick() for the whole budget, honouring stop() and should_stop."""
        self._running = True
        for _ in range(self._iterations):
            if not self._running:
                break
            if self._should_stop is not None and self._should_stop():
                break
            if self.tick():
                break
        self._running = False

    def stop(self) -> Self:
        """Stop the layout before its next tick."""
        self._running = False
        return self


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layout algorithms.

    These layouts compute positions in one pass without iteration.
    Examples: hierarchical, tree, circular, grid layouts.
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Fires start event, computes layout, fires end event.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self.trigger({"type": EventType.start, "alpha": 1.0})

        # Subclasses implement _compute()
        self._compute(**kwargs)

        self.trigger({"type": EventType.end, "alpha": 0.0})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> None:
        """Compute node positions."""
        pass


__all__ = [
    "BaseLayout",
    "IterativeLayout",
    "StaticLayout",
]
