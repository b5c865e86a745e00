"""Dependency ordering for pattern catalogs.

This module builds the dependency graph of a batch of pattern definitions
and orders it topologically. Traversal is an iterative depth-first search
over integer node ids with three-color marking, so deep reference chains
do not hit the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from grokmatch.core.exceptions import CycleDetectedError
from grokmatch.core.types import DependencyGraph, PatternName
from grokmatch.patterns.references import referenced_names

logger = logging.getLogger(__name__)

_UNVISITED = 0
_VISITING = 1
_VISITED = 2


def build_dependency_graph(entries: Iterable[tuple[PatternName, str]]) -> DependencyGraph:
    """Map each definition name to the names its raw text references.

    Only the name part of a reference forms an edge; aliases are ignored.
    A later entry with the same name replaces the earlier one.

    Args:
        entries: (name, raw pattern text) pairs.

    Returns:
        Name -> referenced names in order of appearance (duplicates kept).

    """
    graph: DependencyGraph = {}
    for name, raw in entries:
        graph[name] = referenced_names(raw)
    return graph


def sort_graph(
    graph: Mapping[PatternName, list[PatternName]],
    *,
    tolerate_cycles: bool = False,
) -> list[PatternName]:
    """Order graph keys so every name precedes the names it depends on.

    Dependencies that are not keys of the graph count as leaves and are
    not part of the result. Reverse the result to get dependencies first.

    Args:
        graph: Name -> dependency names.
        tolerate_cycles: Log and skip back edges instead of raising.

    Returns:
        All keys of graph in topological order, dependents first.

    Raises:
        CycleDetectedError: If the graph has a cycle and tolerate_cycles
            is False.

    Examples:
        >>> sort_graph({"DERIVED": ["BASE"], "BASE": []})
        ['DERIVED', 'BASE']

    """
    names = list(graph)
    ids = {name: idx for idx, name in enumerate(names)}
    edges = [[ids[dep] for dep in graph[name] if dep in ids] for name in names]
    state = [_UNVISITED] * len(names)
    finished: list[int] = []

    for root in range(len(names)):
        if state[root] != _UNVISITED:
            continue

        state[root] = _VISITING
        stack: list[tuple[int, int]] = [(root, 0)]
        while stack:
            node, pos = stack[-1]
            if pos == len(edges[node]):
                stack.pop()
                state[node] = _VISITED
                finished.append(node)
                continue

            stack[-1] = (node, pos + 1)
            dep = edges[node][pos]
            if state[dep] == _UNVISITED:
                state[dep] = _VISITING
                stack.append((dep, 0))
            elif state[dep] == _VISITING:
                on_stack = [n for n, _ in stack]
                cycle = [names[n] for n in on_stack[on_stack.index(dep) :]] + [names[dep]]
                if not tolerate_cycles:
                    raise CycleDetectedError(
                        f"Cycle detected at pattern '{names[dep]}': {' -> '.join(cycle)}",
                        name=names[dep],
                        cycle=cycle,
                    )
                logger.warning("Ignoring dependency cycle: %s", " -> ".join(cycle))

    return [names[idx] for idx in reversed(finished)]
