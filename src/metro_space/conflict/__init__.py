"""Conflict detection over buffered graph elements.

Public API:
- find_conflicts: ordered list of conflicts of a graph
- compare_conflicts: the conflict comparator
- Conflict, ConflictType: conflict model
- NodeBuffer, EdgeBuffer: element buffers
"""

from metro_space.conflict.buffer import EdgeBuffer, ElementBuffer, NodeBuffer
from metro_space.conflict.finder import build_buffers, compare_conflicts, find_conflicts
from metro_space.conflict.model import Conflict, ConflictType

__all__ = [
    "Conflict",
    "ConflictType",
    "EdgeBuffer",
    "ElementBuffer",
    "NodeBuffer",
    "build_buffers",
    "compare_conflicts",
    "find_conflicts",
]
