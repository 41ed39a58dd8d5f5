"""Mirror a layout about the center line of its bounding box."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ..base import StaticLayout
from ..types import EdgeLike, EventCallback, NodeLike
from ..validation import ValidationError

VALID_AXES = ("horizontal", "vertical")


class FlipLayout(StaticLayout):
    """
    Mirror node centers.

    ``axis="horizontal"`` mirrors left/right about the bounding box's
    vertical center line; ``axis="vertical"`` mirrors top/bottom. The
    bounding box is unchanged, so flipping twice restores the input.
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
        axis: str = "horizontal",
    ) -> None:
        super().__init__(
            nodes=nodes,
            edges=edges,
            random_seed=random_seed,
            on_start=on_start,
            on_tick=on_tick,
            on_end=on_end,
        )
        if axis not in VALID_AXES:
            raise ValidationError(f"axis must be one of {VALID_AXES}")
        self._axis: str = axis

    @property
    def axis(self) -> str:
        """Get mirror direction."""
        return self._axis

    @axis.setter
    def axis(self, value: str) -> None:
        if value not in VALID_AXES:
            raise ValidationError(f"axis must be one of {VALID_AXES}")
        self._axis = value

    def _compute(self, **kwargs: Any) -> None:
        if not self._nodes:
            return

        if self._axis == "horizontal":
            mid = (min(n.x for n in self._nodes) + max(n.right for n in self._nodes)) / 2
            for node in self._nodes:
                node.x = 2 * mid - node.center_x - node.width / 2
        else:
            mid = (min(n.y for n in self._nodes) + max(n.bottom for n in self._nodes)) / 2
            for node in self._nodes:
                node.y = 2 * mid - node.center_y - node.height / 2


def flip_horizontal(nodes: Sequence[NodeLike]) -> None:
    """Mirror nodes left/right."""
    FlipLayout(nodes=nodes, axis="horizontal").run()


def flip_vertical(nodes: Sequence[NodeLike]) -> None:
    """Mirror nodes top/bottom."""
    FlipLayout(nodes=nodes, axis="vertical").run()


__all__ = ["FlipLayout", "flip_horizontal", "flip_vertical"]
