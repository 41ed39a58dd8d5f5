"""
Fruchterman-Reingold force-directed layout algorithm.

Based on the paper:
"Graph Drawing by Force-directed Placement" by Fruchterman and Reingold (1991)

The algorithm simulates a physical system where:
- All nodes repel each other (like electrical charges)
- Connected nodes attract each other (like springs)
- A "temperature" parameter limits movement and cools linearly to zero

Forces act on node centers. There is no convergence detection: the full
iteration budget always runs unless ``stop()`` or ``should_stop`` ends it.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

import numpy as np

if TYPE_CHECKING:
    from typing_extensions import Self

from ..base import IterativeLayout
from ..types import EdgeLike, EventCallback, EventType, NodeLike
from ..validation import validate_canvas_size

# Distance floor so coincident nodes still push each other apart
MIN_DISTANCE = 0.01

# Nodes closer than this to the first node count as "stacked"
STACKED_EPSILON = 1.0


class ForceDirectedLayout(IterativeLayout):
    """
    Fruchterman-Reingold force-directed diagram layout.

    Positions nodes by simulating:
    - Repulsion ``k^2 / d`` between every node pair (O(n^2) per iteration)
    - Attraction ``d^2 / k`` along every edge
    - Displacement capped by a temperature that cools from ``width / 10``
      towards 0 over the iteration budget

    with ``k = sqrt(width * height / n)``. Node centers are clamped to
    ``[size / 2, bound - size / 2]`` after every step.

    If every node starts within 1px of the first node, initial positions are
    randomized inside the canvas first, using the layout's seeded random
    source. Without a seed results vary between runs.

    Example:
        layout = ForceDirectedLayout(
            nodes=nodes,
            edges=edges,
            size=(2000, 1500),
            iterations=100,
            random_seed=42,
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        edges: Optional[Sequence[EdgeLike]] = None,
        size: Sequence[float] = (2000.0, 1500.0),
        random_seed: Optional[int] = None,
        on_start: Optional[EventCallback] = None,
        on_tick: Optional[EventCallback] = None,
        on_end: Optional[EventCallback] = None,
        # IterativeLayout parameters
        iterations: int = 100,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> None:
        """
        Initialize force-directed layout.

        Args:
            nodes: List of nodes
            edges: List of edges
            size: Canvas size as (width, height)
            random_seed: Seed for the randomized initial placement
            on_start: Callback for start event
            on_tick: Callback for tick event
            on_end: Callback for end event
            iterations: Number of iterations to run
            should_stop: Optional cancellation hook checked before each tick
        """
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
            iterations=iterations,
            should_stop=should_stop,
        )
        self._size: tuple[float, float] = validate_canvas_size(size)

        # Internal state (set up by run())
        self._pos: Optional[np.ndarray] = None
        self._lower: Optional[np.ndarray] = None
        self._upper: Optional[np.ndarray] = None
        self._sources: Optional[np.ndarray] = None
        self._targets: Optional[np.ndarray] = None
        self._k: float = 0.0
        self._temperature: float = 0.0
        self._initial_temperature: float = 0.0
        self._cooling: float = 0.0
        self._iteration: int = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def size(self) -> tuple[float, float]:
        """Get canvas size (width, height)."""
        return self._size

    @size.setter
    def size(self, value: Sequence[float]) -> None:
        """Set canvas size."""
        self._size = validate_canvas_size(value)

    @property
    def optimal_distance(self) -> float:
        """Ideal edge length ``sqrt(area / n)`` for the current node batch."""
        n = max(1, len(self._nodes))
        return math.sqrt(self._size[0] * self._size[1] / n)

    @property
    def temperature(self) -> float:
        """Current displacement cap."""
        return self._temperature

    # -------------------------------------------------------------------------
    # Layout Implementation
    # -------------------------------------------------------------------------

    def _initialize_positions(self) -> None:
        """Scatter nodes randomly if they are all stacked on the first one."""
        first = self._nodes[0]
        stacked = all(
            abs(node.x - first.x) < STACKED_EPSILON and abs(node.y - first.y) < STACKED_EPSILON
            for node in self._nodes
        )
        if not stacked:
            return

        width, height = self._size
        for node in self._nodes:
            node.x = self._rng.random() * (width - node.width)
            node.y = self._rng.random() * (height - node.height)

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self for chaining
        """
        n = len(self._nodes)
        width, height = self._size

        self._alpha = 1.0
        self.trigger({"type": EventType.start, "alpha": self._alpha})

        if n == 1:
            self._nodes[0].move_center_to(width / 2, height / 2)
        elif n > 1:
            self._setup()
            self.kick()
            self._write_back()

        self._alpha = 0.0
        self.trigger({"type": EventType.end, "alpha": 0.0})
        return self

    def _setup(self) -> None:
        width, height = self._size
        self._initialize_positions()

        self._k = self.optimal_distance
        self._initial_temperature = width / 10
        self._temperature = self._initial_temperature
        self._cooling = self._initial_temperature / (self._iterations + 1)
        self._iteration = 0

        self._pos = np.array([node.center for node in self._nodes], dtype=np.float64)
        half = np.array([(node.width / 2, node.height / 2) for node in self._nodes])
        self._lower = half
        # A node larger than the canvas is pinned to the lower bound on that axis
        self._upper = np.maximum(np.array([width, height]) - half, half)

        index = {node.id: i for i, node in enumerate(self._nodes)}
        pairs = [(index[e.source], index[e.target]) for e in self._valid_edges()]
        self._sources = np.array([p[0] for p in pairs], dtype=np.intp)
        self._targets = np.array([p[1] for p in pairs], dtype=np.intp)

    def tick(self) -> bool:
        """
        Perform one iteration of the layout.

        Returns:
            Always False; the budget is the only stopping rule.
        """
        # These are set in run() before tick() is called
        assert self._pos is not None
        assert self._lower is not None and self._upper is not None
        assert self._sources is not None and self._targets is not None

        pos = self._pos
        k = self._k

        # Repulsive forces between all pairs (self-pairs have zero delta)
        delta = pos[:, np.newaxis, :] - pos[np.newaxis, :, :]
        dist = np.maximum(np.hypot(delta[..., 0], delta[..., 1]), MIN_DISTANCE)
        repulsion = (k * k) / dist
        disp = (delta / dist[..., np.newaxis] * repulsion[..., np.newaxis]).sum(axis=1)

        # Attractive forces along edges
        if len(self._sources):
            edge_delta = pos[self._sources] - pos[self._targets]
            edge_dist = np.maximum(np.hypot(edge_delta[:, 0], edge_delta[:, 1]), MIN_DISTANCE)
            attraction = (edge_dist * edge_dist) / k
            force = edge_delta / edge_dist[:, np.newaxis] * attraction[:, np.newaxis]
            np.subtract.at(disp, self._sources, force)
            np.add.at(disp, self._targets, force)

        # Apply displacements, limited by temperature
        length = np.maximum(np.hypot(disp[:, 0], disp[:, 1]), MIN_DISTANCE)
        limited = np.minimum(length, self._temperature)
        pos += disp / length[:, np.newaxis] * limited[:, np.newaxis]
        np.clip(pos, self._lower, self._upper, out=pos)

        # Cool down linearly
        self._temperature -= self._cooling
        self._iteration += 1
        self._alpha = max(0.0, self._temperature / self._initial_temperature)

        self._write_back()
        self.trigger(
            {"type": EventType.tick, "alpha": self._alpha, "iteration": self._iteration}
        )
        return False

    def _write_back(self) -> None:
        """Copy simulated centers back to the caller's nodes."""
        assert self._pos is not None
        for node, (cx, cy) in zip(self._nodes, self._pos):
            node.move_center_to(float(cx), float(cy))


def apply_force_directed(
    nodes: Sequence[NodeLike],
    edges: Sequence[EdgeLike],
    width: float = 2000.0,
    height: float = 1500.0,
    iterations: int = 100,
    random_seed: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> None:
    """
    Position nodes with a Fruchterman-Reingold simulation.

    No-op on an empty node list; a single node is centered in the canvas.

    Raises:
        ValidationError: If iterations < 0 or the canvas is not positive
    """
    ForceDirectedLayout(
        nodes=nodes,
        edges=edges,
        size=(width, height),
        iterations=iterations,
        random_seed=random_seed,
        should_stop=should_stop,
    ).run()


__all__ = ["ForceDirectedLayout", "apply_force_directed"]
