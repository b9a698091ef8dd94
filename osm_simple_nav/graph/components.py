"""Connected-component extraction using breadth-first search.

Connectivity is computed over the undirected skeleton of the edge
list: every edge links its endpoints both ways, whatever the one-way
flag or the directedness of the load. Vertices are visited in vertex
insertion order, so the result is deterministic for a given input.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, Iterable, List, Set, Tuple

from ..domain.models import Edge, Graph, VisualGraph, build_visual_edges
from ..ports.loader import MapLoaderPort

logger = logging.getLogger(__name__)

Adjacency = Dict[str, List[str]]


def build_adjacency(vertex_ids: Iterable[str], edges: Iterable[Edge]) -> Adjacency:
    """Build a symmetric adjacency mapping keyed by vertex id.

    Parameters
    ----------
    vertex_ids:
        Every vertex of the graph; isolated vertices get an empty list.
    edges:
        Edges whose endpoints are all among ``vertex_ids``.

    Returns
    -------
    dict[str, list[str]]
        Neighbor ids for each vertex, in edge order.
    """
    adjacency: Adjacency = {vid: [] for vid in vertex_ids}
    for edge in edges:
        adjacency.setdefault(edge.source, []).append(edge.target)
        adjacency.setdefault(edge.target, []).append(edge.source)
    return adjacency


def bfs(adjacency: Adjacency, start: str, visited: Set[str]) -> List[str]:
    """Collect the vertices reachable from ``start``, in dequeue order.

    Vertices are marked in ``visited`` when enqueued, so none is queued
    twice. ``visited`` is updated in place.
    """
    component: List[str] = []
    queue = deque([start])
    visited.add(start)
    while queue:
        current = queue.popleft()
        component.append(current)
        for neighbor in adjacency.get(current, []):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return component


def connected_components(adjacency: Adjacency) -> List[List[str]]:
    """Partition the adjacency keys into connected components.

    Returns
    -------
    list[list[str]]
        Components in discovery order; together they cover every key
        exactly once.
    """
    visited: Set[str] = set()
    components: List[List[str]] = []
    for vid in adjacency:
        if vid not in visited:
            components.append(bfs(adjacency, vid, visited))
    return components


def largest_component(components: List[List[str]]) -> List[str]:
    """Return the component with the most vertices.

    On a tie the first discovered component wins; an empty list of
    components yields an empty component.
    """
    best: List[str] = []
    for component in components:
        if len(component) > len(best):
            best = component
    return best


def restrict(
    graph: Graph, visual_graph: VisualGraph, members: Iterable[str]
) -> Tuple[Graph, VisualGraph]:
    """Build new graphs holding only ``members`` and the edges between them.

    An edge is kept only when both its endpoints are members. Vertex and
    edge order follow the input graph; the bounding box is preserved.
    """
    keep = set(members)
    vertices = {vid: v for vid, v in graph.vertices.items() if vid in keep}
    visual_vertices = {
        vid: vv for vid, vv in visual_graph.visual_vertices.items() if vid in keep
    }
    edges = tuple(e for e in graph.edges if e.source in keep and e.target in keep)

    new_graph = Graph(vertices=vertices, edges=edges)
    new_visual_graph = VisualGraph(
        graph=new_graph,
        visual_vertices=visual_vertices,
        visual_edges=build_visual_edges(edges, visual_vertices),
        bounds=visual_graph.bounds,
        directed=visual_graph.directed,
    )
    return new_graph, new_visual_graph


def extract_largest_component(
    loader: MapLoaderPort, directed: bool = False
) -> Tuple[Graph, VisualGraph]:
    """Load a map afresh and keep only its largest connected component.

    Parameters
    ----------
    loader:
        Loader for the map; it is run here, not reused from a prior load.
    directed:
        Passed to the loader; does not change how connectivity is computed.

    Returns
    -------
    Graph, VisualGraph
        New instances restricted to the largest component.

    Raises
    ------
    MapLoadError
        Propagated unchanged from the loader.
    """
    graph, visual_graph = loader.load(directed)

    adjacency = build_adjacency(graph.vertices, graph.edges)
    components = connected_components(adjacency)
    best = largest_component(components)

    logger.info(
        "Largest component selected",
        extra={
            "components": len(components),
            "vertices": len(best),
            "removed": graph.vertex_count - len(best),
        },
    )
    return restrict(graph, visual_graph, best)
