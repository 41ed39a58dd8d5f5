"""
Input validation utilities for layout and routing.

Provides centralized validation functions for canvas size, node sizes,
iteration budgets, router options and edge references. Raises descriptive
exceptions on invalid configuration; graph *shape* is never an error.
"""

from __future__ import annotations

from typing import Any, Sequence


class ValidationError(ValueError):
    """Base exception for layout validation errors."""

    pass


class InvalidCanvasSizeError(ValidationError):
    """Raised when canvas dimensions are invalid."""

    pass


class InvalidNodeError(ValidationError):
    """Raised when a node is malformed."""

    pass


class InvalidEdgeError(ValidationError):
    """Raised when an edge references nodes that do not exist."""

    pass


class InvalidRouteOptionsError(ValidationError):
    """Raised when grid router options are unusable."""

    pass


class GraphStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match algorithm assumptions."""

    pass


def validate_canvas_size(size: Sequence[float]) -> tuple[float, float]:
    """
    Validate canvas size dimensions.

    Args:
        size: [width, height] sequence

    Returns:
        Validated (width, height) tuple

    Raises:
        InvalidCanvasSizeError: If dimensions are invalid
    """
    if len(size) < 2:
        raise InvalidCanvasSizeError(
            f"Canvas size must have 2 elements [width, height], got {len(size)}"
        )

    width, height = float(size[0]), float(size[1])

    if width <= 0:
        raise InvalidCanvasSizeError(f"Canvas width must be positive, got {width}")
    if height <= 0:
        raise InvalidCanvasSizeError(f"Canvas height must be positive, got {height}")

    return width, height


def validate_iterations(iterations: int) -> int:
    """
    Validate iteration count is non-negative.

    Raises:
        ValidationError: If iterations < 0
    """
    iterations = int(iterations)
    if iterations < 0:
        raise ValidationError(f"iterations must be >= 0, got {iterations}")
    return iterations


def validate_positive(value: float, name: str) -> float:
    """Validate a spacing/size parameter is strictly positive."""
    value = float(value)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_edge_references(
    nodes: Sequence[Any],
    edges: Sequence[Any],
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that every edge endpoint names an existing node.

    The algorithms themselves skip dangling edges silently; this check is
    for callers that want referential integrity enforced up front.

    Args:
        nodes: Sequence of nodes
        edges: Sequence of edges
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (edge_id, issue_description) tuples

    Raises:
        InvalidEdgeError: If strict=True and dangling edges found
    """
    ids = {node.id for node in nodes}
    issues: list[tuple[int, str]] = []

    for edge in edges:
        if edge.source not in ids:
            issues.append((edge.id, f"Edge {edge.id}: source node {edge.source} not found"))
        if edge.target not in ids:
            issues.append((edge.id, f"Edge {edge.id}: target node {edge.target} not found"))

    if strict and issues:
        msg = "Invalid edge references:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidEdgeError(msg)

    return issues


__all__ = [
    "ValidationError",
    "InvalidCanvasSizeError",
    "InvalidNodeError",
    "InvalidEdgeError",
    "InvalidRouteOptionsError",
    "GraphStructureWarning",
    "validate_canvas_size",
    "validate_iterations",
    "validate_positive",
    "validate_edge_references",
]
