"""Space validator: programmatic checks of a map after making space.

Runs a suite of checks against a MetroMap and returns a list of
Violation objects describing any problems found.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from metro_space.map import MetroMap


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Violation:
    check: str
    severity: Severity
    message: str
    context: dict = field(default_factory=dict)


def validate_space(metro_map: MetroMap) -> list[Violation]:
    """Run all checks and return violations."""
    violations: list[Violation] = []
    violations.extend(check_buffer_overlap(metro_map))
    violations.extend(check_octilinearity(metro_map))
    violations.extend(check_coordinate_sanity(metro_map))
    violations.extend(check_bend_degree(metro_map))
    violations.extend(check_zero_length_edges(metro_map))
    violations.extend(check_coincident_nodes(metro_map))
    return violations


def check_buffer_overlap(metro_map: MetroMap) -> list[Violation]:
    """Every remaining conflict is an overlap of two element buffers."""
    return [
        Violation(
            check="buffer_overlap",
            severity=Severity.ERROR,
            message=(
                f"{conflict.conflict_type.label} conflict between "
                f"{conflict.elements[0]!r} and {conflict.elements[1]!r} "
                f"(area {conflict.polygon.area:.1f})"
            ),
            context={"elements": conflict.elements},
        )
        for conflict in metro_map.evaluate_conflicts()
    ]


def check_octilinearity(metro_map: MetroMap) -> list[Violation]:
    """Edges carrying routes should be octilinear."""
    violations: list[Violation] = []
    for edge in metro_map.non_octilinear_edges():
        if not edge.has_routes():
            continue
        violations.append(
            Violation(
                check="octilinearity",
                severity=Severity.WARNING,
                message=f"{edge!r} runs at {edge.direction.angle:.2f} degrees",
                context={"edge": edge},
            )
        )
    return violations


def check_coordinate_sanity(metro_map: MetroMap) -> list[Violation]:
    """No NaN or infinite coordinates."""
    violations: list[Violation] = []
    for node in metro_map.nodes:
        if not (math.isfinite(node.x) and math.isfinite(node.y)):
            violations.append(
                Violation(
                    check="coordinate_sanity",
                    severity=Severity.ERROR,
                    message=f"{node!r} has invalid coordinates",
                    context={"node": node},
                )
            )
    return violations


def check_bend_degree(metro_map: MetroMap) -> list[Violation]:
    """A bend node joins at least two edges; otherwise it is dangling."""
    violations: list[Violation] = []
    for node in metro_map.nodes:
        if node.signature.is_bend and node.degree < 2:
            violations.append(
                Violation(
                    check="bend_degree",
                    severity=Severity.WARNING,
                    message=f"Bend {node!r} has degree {node.degree}",
                    context={"node": node},
                )
            )
    return violations


def check_zero_length_edges(metro_map: MetroMap) -> list[Violation]:
    """An edge whose endpoints share a position cannot be drawn."""
    return [
        Violation(
            check="zero_length_edge",
            severity=Severity.ERROR,
            message=f"{edge!r} has zero length",
            context={"edge": edge},
        )
        for edge in metro_map.edges
        if edge.length == 0
    ]


def check_coincident_nodes(metro_map: MetroMap) -> list[Violation]:
    """No two nodes may share a position."""
    violations: list[Violation] = []
    seen: dict[tuple[float, float], object] = {}
    for node in metro_map.nodes:
        other = seen.setdefault(node.coordinate, node)
        if other is not node:
            violations.append(
                Violation(
                    check="coincident_nodes",
                    severity=Severity.ERROR,
                    message=f"{node!r} sits on {other!r}",
                    context={"nodes": (other, node)},
                )
            )
    return violations
