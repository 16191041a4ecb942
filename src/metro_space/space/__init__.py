"""Make-space strategies.

Public API:
- LineSpaceHandler: protocol of a strategy (``make_space()``)
- ScaleLineSpaceHandler: uniform scaling
- DisplaceLineSpaceHandler: local displacement with octilinear repair
- insert_bend_nodes, merge_bend_nodes: bend insertion helpers
"""

from __future__ import annotations

from typing import Protocol

from metro_space.space.adjustment import (
    AdjustmentGuard,
    DisplaceResult,
    calculate_adjustment_costs,
    correct_edge,
    correct_non_octilinear_edges,
    evaluate_move_direction,
    is_simple_node,
    octilinear_move_distance,
)
from metro_space.space.bends import (
    insert_bend_nodes,
    merge_bend_nodes,
    octilinear_bend_points,
)
from metro_space.space.displace import DisplaceLineSpaceHandler, displace_nodes
from metro_space.space.scale import ScaleLineSpaceHandler, evaluate_scale_factor


class LineSpaceHandler(Protocol):
    def make_space(self) -> None: ...


STRATEGIES = {
    "scale": ScaleLineSpaceHandler,
    "displace": DisplaceLineSpaceHandler,
}
"""Strategy name -> handler class taking the metro map."""

__all__ = [
    "STRATEGIES",
    "AdjustmentGuard",
    "DisplaceLineSpaceHandler",
    "DisplaceResult",
    "LineSpaceHandler",
    "ScaleLineSpaceHandler",
    "calculate_adjustment_costs",
    "correct_edge",
    "correct_non_octilinear_edges",
    "displace_nodes",
    "evaluate_move_direction",
    "evaluate_scale_factor",
    "insert_bend_nodes",
    "is_simple_node",
    "merge_bend_nodes",
    "octilinear_bend_points",
    "octilinear_move_distance",
]
