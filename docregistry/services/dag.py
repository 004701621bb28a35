"""DAG utilities for menu hierarchy cycle detection."""

from __future__ import annotations

WHITE, GRAY, BLACK = 0, 1, 2


def find_cycles(edges: list[tuple[str, str]]) -> list[list[str]]:
    """Find the cycles closed by back-edges in an edge list.

    Uses iterative DFS with white/gray/black coloring, traversing
    child -> parent. An edge to a GRAY node closes a cycle; the cycle is
    read off the DFS stack. O(V+E) time. Nodes are visited in sorted order
    so the result is deterministic.

    Args:
        edges: list of (child, parent) tuples.

    Returns:
        One entry per back-edge, each the list of nodes on the cycle starting
        and ending with the node the back-edge points to. A self-loop on
        ``a`` yields ``["a", "a"]``.
    """
    adj: dict[str, list[str]] = {}
    nodes: set[str] = set()
    for child, parent in edges:
        adj.setdefault(child, []).append(parent)
        nodes.add(child)
        nodes.add(parent)

    color: dict[str, int] = {n: WHITE for n in nodes}
    cycles: list[list[str]] = []

    for start in sorted(nodes):
        if color[start] != WHITE:
            continue
        # Stack entries: (node, parent_index). parent_index tracks iteration
        # progress through adj[node].
        stack: list[tuple[str, int]] = [(start, 0)]
        color[start] = GRAY
        while stack:
            node, idx = stack[-1]
            parents = adj.get(node, [])
            if idx < len(parents):
                stack[-1] = (node, idx + 1)
                parent = parents[idx]
                if color[parent] == GRAY:
                    path = [entry for entry, _ in stack]
                    cycles.append([*path[path.index(parent) :], parent])
                elif color[parent] == WHITE:
                    color[parent] = GRAY
                    stack.append((parent, 0))
            else:
                color[node] = BLACK
                stack.pop()

    return cycles
