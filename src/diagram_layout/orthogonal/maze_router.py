"""
Two-layer A* grid router.

Routes a single connection between two points over a uniform grid:

- Layer 0 avoids obstacle rectangles (inflated by a margin) and pays a
  proximity cost near them
- Layer 1 ignores obstacles; switching layers costs a fixed via penalty
- Changing direction costs a bend penalty

The result is an orthogonal waypoint list beginning and ending at the exact
requested points, or an empty list when no route exists.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from typing import Optional, Sequence

import numpy as np

from ..types import OBSTACLE_LAYER, VIA_LAYER, Node, Point, Waypoint
from .types import DIRECTIONS, NO_DIRECTION, RouteOptions, RoutingGrid

logger = logging.getLogger(__name__)

# Proximity cost only applies within this many grid spacings of an obstacle
PROXIMITY_RANGE = 1.5

COLLINEAR_TOLERANCE = 0.001


def build_grid(
    start: Point,
    end: Point,
    obstacles: Sequence[Node],
    options: RouteOptions,
) -> RoutingGrid:
    """
    Rasterize the routing area.

    The bounds cover both endpoints and every inflated obstacle, padded by
    two grid spacings. A grid point is blocked when it lies inside (or on
    the border of) an inflated obstacle.
    """
    spacing = options.grid_spacing
    margin = options.obstacle_margin

    rects = np.array(
        [
            (n.x - margin, n.y - margin, n.x + n.width + margin, n.y + n.height + margin)
            for n in obstacles
        ],
        dtype=np.float64,
    ).reshape(-1, 4)

    min_x = min(start[0], end[0])
    min_y = min(start[1], end[1])
    max_x = max(start[0], end[0])
    max_y = max(start[1], end[1])
    if len(rects):
        min_x = min(min_x, float(rects[:, 0].min()))
        min_y = min(min_y, float(rects[:, 1].min()))
        max_x = max(max_x, float(rects[:, 2].max()))
        max_y = max(max_y, float(rects[:, 3].max()))

    pad = spacing * 2
    min_x -= pad
    min_y -= pad
    max_x += pad
    max_y += pad

    cols = min(options.max_grid_size, max(3, math.ceil((max_x - min_x) / spacing)))
    rows = min(options.max_grid_size, max(3, math.ceil((max_y - min_y) / spacing)))

    xs = min_x + np.arange(cols) * spacing
    ys = min_y + np.arange(rows) * spacing

    blocked = np.zeros((rows, cols), dtype=bool)
    nearest = np.full((rows, cols), np.inf)
    for left, top, right, bottom in rects:
        inside_x = (xs >= left) & (xs <= right)
        inside_y = (ys >= top) & (ys <= bottom)
        blocked |= inside_y[:, np.newaxis] & inside_x[np.newaxis, :]

        dx = np.maximum(np.maximum(left - xs, xs - right), 0.0)
        dy = np.maximum(np.maximum(top - ys, ys - bottom), 0.0)
        np.minimum(nearest, np.hypot(dy[:, np.newaxis], dx[np.newaxis, :]), out=nearest)

    proximity = np.where(
        nearest < spacing * PROXIMITY_RANGE,
        options.proximity_penalty / (nearest + 1.0),
        0.0,
    )

    return RoutingGrid(
        min_x=min_x,
        min_y=min_y,
        spacing=spacing,
        cols=cols,
        rows=rows,
        blocked=blocked,
        proximity=proximity,
    )


def _search(grid: RoutingGrid, source: tuple[int, int], goal: tuple[int, int], options: RouteOptions) -> list[int]:
    """
    A* over (col, row, layer) states.

    Returns:
        State indices from source to goal (both on layer 0), or [] if the
        frontier is exhausted first.
    """
    cols, rows = grid.cols, grid.rows
    blocked = grid.blocked.ravel().tolist()
    proximity = grid.proximity.ravel().tolist()
    goal_col, goal_row = goal

    size = cols * rows * 2
    dist = [math.inf] * size
    prev = [-1] * size
    heading = [NO_DIRECTION] * size

    start_state = grid.state(source[0], source[1], OBSTACLE_LAYER)
    goal_state = grid.state(goal_col, goal_row, OBSTACLE_LAYER)

    counter = itertools.count()
    dist[start_state] = 0.0
    frontier: list[tuple[float, int, int, float]] = [
        (float(abs(source[0] - goal_col) + abs(source[1] - goal_row)), next(counter), start_state, 0.0)
    ]

    def relax(state: int, cost: float, parent: int, direction: int, col: int, row: int) -> None:
        if cost < dist[state]:
            dist[state] = cost
            prev[state] = parent
            heading[state] = direction
            priority = cost + abs(col - goal_col) + abs(row - goal_row)
            heapq.heappush(frontier, (priority, next(counter), state, cost))

    found = False
    while frontier:
        _, _, current, cost = heapq.heappop(frontier)
        if cost > dist[current]:
            continue  # stale entry
        if current == goal_state:
            found = True
            break

        col, row, layer = grid.unpack(current)
        incoming = heading[current]

        for direction, (d_col, d_row) in enumerate(DIRECTIONS):
            n_col = col + d_col
            n_row = row + d_row
            if n_col < 0 or n_col >= cols or n_row < 0 or n_row >= rows:
                continue
            cell = n_row * cols + n_col
            if layer == OBSTACLE_LAYER and blocked[cell]:
                continue

            step = 1.0
            if current != start_state and incoming != direction:
                step += options.bend_penalty
            step += proximity[cell]
            relax(cell * 2 + layer, cost + step, current, direction, n_col, n_row)

        # Via: layer 0 -> 1 always, layer 1 -> 0 only on a free cell
        cell = row * cols + col
        if layer == OBSTACLE_LAYER:
            relax(cell * 2 + VIA_LAYER, cost + options.via_penalty, current, NO_DIRECTION, col, row)
        elif not blocked[cell]:
            relax(cell * 2 + OBSTACLE_LAYER, cost + options.via_penalty, current, NO_DIRECTION, col, row)

    if not found:
        return []

    path = [goal_state]
    while prev[path[-1]] != -1:
        path.append(prev[path[-1]])
    path.reverse()
    return path


def simplify_waypoints(points: Sequence[Waypoint]) -> list[Waypoint]:
    """
    Drop interior waypoints that are axis-aligned collinear with both
    neighbours on the same layer. The first and last points are always kept.
    """
    simplified: list[Waypoint] = []
    last = len(points) - 1
    for i, b in enumerate(points):
        if i == 0 or i == last:
            simplified.append(b)
            continue
        a = points[i - 1]
        c = points[i + 1]
        same_layer = a.layer == b.layer == c.layer
        vertical = abs(a.x - b.x) < COLLINEAR_TOLERANCE and abs(b.x - c.x) < COLLINEAR_TOLERANCE
        horizontal = abs(a.y - b.y) < COLLINEAR_TOLERANCE and abs(b.y - c.y) < COLLINEAR_TOLERANCE
        if same_layer and (vertical or horizontal):
            continue
        simplified.append(b)
    return simplified


def route(
    start: Point,
    end: Point,
    obstacles: Sequence[Node],
    options: Optional[RouteOptions] = None,
) -> list[Waypoint]:
    """
    Find an orthogonal path from ``start`` to ``end`` around ``obstacles``.

    Args:
        start: Exact start point (e.g. a connection point)
        end: Exact end point
        obstacles: Nodes to avoid on layer 0
        options: Router tuning; defaults to ``RouteOptions()``

    Returns:
        Waypoints beginning with ``start`` and ending with ``end`` (both on
        layer 0), or an empty list if the goal is unreachable. Callers
        should fall back to a straight line on an empty result.

    Example:
        >>> path = route((0, 0), (200, 0), [])
        >>> (path[0].x, path[0].y), (path[-1].x, path[-1].y)
        ((0.0, 0.0), (200.0, 0.0))
    """
    options = options or RouteOptions()
    grid = build_grid(start, end, obstacles, options)
    source = grid.to_cell(*start)
    goal = grid.to_cell(*end)
    logger.debug(
        "Routing %s -> %s on %dx%d grid (%d obstacles)",
        start, end, grid.cols, grid.rows, len(obstacles),
    )

    states = _search(grid, source, goal, options)
    if not states:
        logger.debug("No route from %s to %s", start, end)
        return []

    waypoints: list[Waypoint] = []
    last_state: Optional[tuple[int, int, int]] = None
    for state in states:
        col, row, layer = grid.unpack(state)
        if (col, row, layer) != last_state:
            x, y = grid.to_world(col, row)
            waypoints.append(Waypoint(float(x), float(y), layer))
        last_state = (col, row, layer)

    simplified = simplify_waypoints(waypoints)

    return [
        Waypoint(float(start[0]), float(start[1]), OBSTACLE_LAYER),
        *simplified,
        Waypoint(float(end[0]), float(end[1]), OBSTACLE_LAYER),
    ]


__all__ = ["route", "build_grid", "simplify_waypoints"]
