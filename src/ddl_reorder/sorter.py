"""
DDL Reorder - Topological Sorter

Kahn's algorithm over the foreign-key graph:
1. Queue every table with in-degree 0
2. Pop tables FIFO, emit them, decrement each dependent once per edge
3. Enqueue dependents whose in-degree drops to 0
4. If fewer tables were emitted than the graph holds, there is a cycle

Runs in O(V + E). The caller's in-degree map is copied, not drained, so the
same DependencyGraph can be sorted more than once.

Root ordering: tables that are ready at the same time come out in the order
given by seed_order (the source order in the pipeline), which makes the
output deterministic for a given input.
"""

from collections import deque
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .exceptions import CyclicDependencyError
from .extractor import DependencyGraph


class RootOrder(Enum):
    """How tables that become ready together are released."""
    APPEARANCE = "appearance"  # source order
    NAME = "name"              # alphabetical


def topological_sort(
    graph: Dict[str, List[str]],
    in_degree: Dict[str, int],
    seed_order: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Order tables so that every parent precedes its dependents.

    Args:
        graph: parent -> dependents (one entry per foreign key)
        in_degree: table -> number of foreign keys it declares
        seed_order: Preferred order for the initial zero in-degree tables

    Returns:
        Table names, each once, in dependency-safe order

    Raises:
        CyclicDependencyError: when the graph contains a cycle

    Example:
        >>> topological_sort({"orders": [], "customers": ["orders"]},
        ...                  {"orders": 1, "customers": 0})
        ['customers', 'orders']
    """
    remaining = dict(in_degree)

    queue = deque()
    queued = set()
    for table in list(seed_order or []) + list(remaining):
        if table in queued or remaining.get(table) != 0:
            continue
        queue.append(table)
        queued.add(table)

    sorted_tables = []
    while queue:
        current = queue.popleft()
        sorted_tables.append(current)

        for dependent in graph.get(current, []):
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                queue.append(dependent)

    if len(sorted_tables) != len(graph):
        emitted = set(sorted_tables)
        raise CyclicDependencyError(sorted(t for t in graph if t not in emitted))

    return sorted_tables


def sort_tables(deps: DependencyGraph, root_order=RootOrder.APPEARANCE) -> List[str]:
    """
    Sort the tables of an extraction result.

    root_order APPEARANCE releases ready tables in source order,
    NAME releases them alphabetically. Plain strings are accepted too.
    """
    root_order = RootOrder(root_order)
    if root_order is RootOrder.APPEARANCE:
        seed = deps.tables
    else:
        seed = sorted(deps.graph)
    return topological_sort(deps.graph, deps.in_degree, seed_order=seed)


if __name__ == "__main__":
    print("DDL Reorder - Topological Sorter")
    print("=" * 50)

    graph = {
        "order_items": [],
        "orders": ["order_items"],
        "products": ["order_items"],
        "customers": ["orders"],
    }
    in_degree = {"order_items": 2, "orders": 1, "products": 0, "customers": 0}
    print(f"Order: {topological_sort(graph, in_degree)}")

    try:
        topological_sort({"a": ["b"], "b": ["a"]}, {"a": 1, "b": 1})
    except CyclicDependencyError as e:
        print(f"Cycle: {e}")
