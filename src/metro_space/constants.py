"""Constants used across the space-making modules.

Centralizes margins, iteration caps and adjustment costs used by the
conflict finder, the scale and displace strategies and the signatures.
"""

# ---------------------------------------------------------------------------
# Precision
# ---------------------------------------------------------------------------
PRECISION_DECIMALS: int = 6
"""Number of decimals every coordinate is rounded to."""

# ---------------------------------------------------------------------------
# Margins (used as function parameter defaults)
# ---------------------------------------------------------------------------
ROUTE_MARGIN: float = 5.0
"""Spacing between two routes inside a bundle."""

EDGE_MARGIN: float = 25.0
"""Spacing between an edge (or a station) and any other element."""

SIGNATURE_ROUTE_MARGIN: float = 5.0
"""Route margin used when sizing station signatures."""

MIN_SIGNATURE_SIDE: float = 20.0
"""Minimal side length of a rectangle station signature."""

# ---------------------------------------------------------------------------
# Conflicts
# ---------------------------------------------------------------------------
NODE_CONFLICT_RANK: int = 40
"""Rank of node/node conflicts (adjacent or not)."""

ELEMENT_CONFLICT_RANK: int = 30
"""Rank of node/edge and edge/edge conflicts."""

# ---------------------------------------------------------------------------
# Scale strategy
# ---------------------------------------------------------------------------
MAX_ITERATIONS_SCALE: int = 100
"""Hard ceiling of scale iterations."""

MIN_SCALE_FACTOR: float = 1.00001
"""Smallest scale factor applied per iteration."""

# ---------------------------------------------------------------------------
# Displace strategy
# ---------------------------------------------------------------------------
MAX_ITERATIONS_DISPLACE: int = 200
"""Hard ceiling of displace iterations per pass."""

MAJOR_MISALIGNMENT_CORRECTION_FACTOR: float = 0.25
"""Correction factor of the first pass (blatant overlaps only)."""

FULL_CORRECTION_FACTOR: float = 1.0
"""Correction factor of the second pass (restore octilinearity)."""

# ---------------------------------------------------------------------------
# Octilinear repair
# ---------------------------------------------------------------------------
MAX_ADJUSTMENT_COSTS: float = 5.0
"""Endpoint moves costing more than this are replaced by bend insertion."""

CORRECT_CIRCLE_PENALTY: float = 1000.0
"""Cost of revisiting a node in one correction chain."""

OCTILINEAR_TOLERANCE: float = 1e-6
"""Tolerance when comparing |dx| and |dy| of an edge."""
