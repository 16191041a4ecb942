"""Metro map: a graph with the margins that define when elements conflict."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from metro_space.conflict import Conflict, find_conflicts
from metro_space.constants import EDGE_MARGIN, ROUTE_MARGIN
from metro_space.geometry import DEFAULT_PRECISION, PrecisionModel
from metro_space.graph import Graph, Node
from metro_space.space import STRATEGIES, LineSpaceHandler

logger = logging.getLogger(__name__)


class MetroMap(Graph):
    """A metro map graph that can make space for its route bundles.

    ``route_margin`` is the gap between parallel routes of one bundle,
    ``edge_margin`` the clearance every node and edge needs around it.
    """

    def __init__(
        self,
        route_margin: float = ROUTE_MARGIN,
        edge_margin: float = EDGE_MARGIN,
        nodes: Iterable[Node] = (),
        precision: PrecisionModel = DEFAULT_PRECISION,
    ) -> None:
        super().__init__(nodes, precision)
        self.route_margin = route_margin
        self.edge_margin = edge_margin

    def evaluate_conflicts(
        self,
        major_misalignment_only: bool = False,
        correction_factor: float = 1.0,
    ) -> list[Conflict]:
        """Current conflicts, most urgent first."""
        return find_conflicts(
            self,
            self.route_margin,
            self.edge_margin,
            major_misalignment_only=major_misalignment_only,
            correction_factor=correction_factor,
            precision=self.precision,
        )

    def make_space(self, strategy: str | LineSpaceHandler = "displace") -> None:
        """Rearrange nodes in place until route bundles and stations fit.

        ``strategy`` is ``"scale"``, ``"displace"`` or a handler object
        with a ``make_space()`` method.
        """
        if isinstance(strategy, str):
            try:
                handler_class = STRATEGIES[strategy]
            except KeyError:
                raise ValueError(
                    f"Unknown strategy {strategy!r}, expected one of {sorted(STRATEGIES)}"
                ) from None
            handler = handler_class(self)
        else:
            handler = strategy

        logger.info(
            "Making space (%s) for %d nodes and %d edges",
            type(handler).__name__, len(self.nodes), len(self.edges),
        )
        handler.make_space()

    def __repr__(self) -> str:
        return (
            f"MetroMap(nodes={len(self.nodes)}, edges={len(self.edges)}, "
            f"route_margin={self.route_margin}, edge_margin={self.edge_margin})"
        )
