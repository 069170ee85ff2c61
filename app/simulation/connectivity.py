"""
simulation/connectivity.py

Reachability over the component graph with no Qt dependencies.

Nodes are component IDs; two components are adjacent when some wire has
points referencing both. There is no electrical model here: a component is
"active" when it shares a connected closure with a source and a ground.
"""

import logging
from collections import deque

from models.validation import (
    NO_COMPLETE_PATH,
    NO_GROUND,
    NO_VOLTAGE_SOURCE,
    ValidationError,
)

logger = logging.getLogger(__name__)


def build_adjacency(wires) -> dict[str, set[str]]:
    """
    Build an undirected adjacency map from wires.

    Args:
        wires: Iterable of WireData

    Returns:
        Dict mapping component ID to the set of directly wired component IDs.
        Components referenced by a wire with no other partner map to an
        empty set.
    """
    adjacency: dict[str, set[str]] = {}
    for wire in wires:
        ids = wire.get_component_ids()
        for comp_id in ids:
            neighbours = adjacency.setdefault(comp_id, set())
            neighbours.update(other for other in ids if other != comp_id)
    return adjacency


def find_connected_components(start_id: str, wires) -> set[str]:
    """
    Breadth-first closure of start_id over the wire graph.

    The result always contains start_id itself.
    """
    adjacency = build_adjacency(wires)
    return _closure(start_id, adjacency)


def _closure(start_id: str, adjacency: dict[str, set[str]]) -> set[str]:
    visited = set()
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        for neighbour in adjacency.get(current, ()):
            if neighbour not in visited:
                queue.append(neighbour)
    return visited


def find_active_components(components, wires) -> tuple[set[str], list[ValidationError]]:
    """
    Derive the set of powered components.

    Args:
        components: Dict[str, ComponentData] keyed by component ID
        wires: List[WireData]

    Returns:
        (active, findings) where:
            active: set of component IDs lying in a closure that holds both a
                source and a ground
            findings: list[ValidationError]; a single error when there is no
                source or no ground (active is then empty and meaningless),
                a single warning when no closure qualifies, otherwise empty
    """
    sources = [c for c in components.values() if c.is_source()]
    grounds = [c for c in components.values() if c.is_ground()]

    if not sources:
        return set(), [ValidationError.error(NO_VOLTAGE_SOURCE)]
    if not grounds:
        return set(), [ValidationError.error(NO_GROUND)]

    ground_ids = {g.component_id for g in grounds}
    adjacency = build_adjacency(wires)
    active: set[str] = set()

    for source in sources:
        if source.component_id in active:
            continue
        closure = _closure(source.component_id, adjacency)
        if closure & ground_ids:
            active.update(closure)
        logger.debug("Closure of %s: %d component(s)", source.component_id, len(closure))

    if not active:
        return active, [ValidationError.warning(NO_COMPLETE_PATH)]
    return active, []
