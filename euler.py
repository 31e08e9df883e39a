# euler.py
import logging
from typing import List, Optional, Tuple

import networkx as nx

from graph import Graph, T


# ============================================================
# Degree parity & connectivity
# ============================================================
def odd_degree_vertices(graph: Graph[T]) -> List[T]:
    '''
    Return vertices with odd degree, ascending.
    '''
    return [v for v in graph.vertices() if graph.degree(v) % 2]

def is_connected_on_non_isolated(graph: Graph[T]) -> bool:
    '''
    Check if the vertices carrying at least one edge form one component.
    Isolated vertices are ignored; a graph without edges counts as connected.
    '''
    G = graph.to_networkx()
    active = [v for v in G.nodes if G.degree(v) > 0]
    if not active:
        return True
    return nx.is_connected(G.subgraph(active))

# ============================================================
# Euler trail
# ============================================================
def find_trail(graph: Graph[T]) -> List[T]:
    '''
    Find an Euler trail (every edge used exactly once) in an undirected graph.

        0 odd-degree vertices -> circuit, starting at the first vertex.
        2 odd-degree vertices -> open trail, starting at the first odd vertex.
        otherwise             -> no trail, returns [].

    The edge-bearing vertices must be connected. On a disconnected graph the
    greedy walk stops early and the returned trail misses some edges.

    The input graph is not modified: edges are consumed from a private copy.
    At each step the walk moves to the smallest neighbor other than the start
    vertex, and only goes back to the start when nothing else is left.
    '''
    vertices = graph.vertices()
    count_odd = 0
    first_odd: Optional[T] = None
    for v in vertices:
        if graph.degree(v) % 2:
            count_odd += 1
            if first_odd is None:
                first_odd = v

    if count_odd not in (0, 2):
        logging.info(f"No Euler trail: {count_odd} odd-degree vertices")
        return []
    if not vertices:
        return []

    start = first_odd if first_odd is not None else vertices[0]
    logging.debug(f"Odd-degree vertices: k={count_odd}, starting at {start}")

    work = graph.copy()
    trail = [start]
    while work.degree(trail[-1]):
        last = trail[-1]
        v_next = next((v for v in work.neighbors(last) if v != start), start)
        work.remove_edge(last, v_next)
        trail.append(v_next)

    expected = graph.edge_count() + 1
    if len(trail) != expected:
        logging.warning(f"Incomplete trail: {len(trail) - 1} of {expected - 1} edges used; "
                        "graph is probably not connected")
    return trail

# ============================================================
# Trail utils
# ============================================================
def is_circuit(trail: List[T]) -> bool:
    '''
    True if the trail uses at least one edge and ends where it starts.
    '''
    return len(trail) >= 2 and trail[0] == trail[-1]

def edges_from_trail(trail: List[T]) -> List[Tuple[T, T]]:
    '''
    Convert trail of vertices to list of edges (u,v).
    '''
    return [(trail[i], trail[i+1]) for i in range(len(trail)-1)]
