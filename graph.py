# graph.py
import functools
import threading
from typing import Dict, Generic, Hashable, List, Tuple, TypeVar

import networkx as nx

# Vertices must be hashable and totally ordered (every listing is sorted).
T = TypeVar("T", bound=Hashable)

DEFAULT_WEIGHT = 1
NO_EDGE_WEIGHT = 0


class VertexNotFoundError(KeyError):
    '''
    Raised when a query needs an existing vertex and the vertex is unknown.
    '''
    def __init__(self, vertex):
        super().__init__(f"Vertex {vertex!r} does not exist")
        self.vertex = vertex


# ============================================================
# Directed graph
# ============================================================
class DiGraph(Generic[T]):
    ''' Directed graph, optionally weighted.

    Adjacency is stored as {vertex: {neighbor: weight}}. A vertex is a key of
    the outer mapping, even when it has no outgoing edges, and the edge v1->v2
    exists iff v2 is a key of adj[v1].

    Weights default to 1. Since weight() reports a missing edge as 0, an edge
    explicitly stored with weight 0 cannot be told apart from no edge at all.
    '''
    def __init__(self):
        self._adj: Dict[T, Dict[T, int]] = {}

    def __repr__(self):
        return f"DiGraph(V={len(self._adj)}, E={self.edge_count()})"

    def __len__(self) -> int:
        return len(self._adj)

    def __contains__(self, v) -> bool:
        return self.is_vertex(v)

    def __eq__(self, other):
        if not isinstance(other, DiGraph):
            return NotImplemented
        return self._adj == other._adj

    # ---------- mutation ----------

    def add_vertex(self, v: T):
        '''
        Add v with no edges. Does nothing if v already exists.
        '''
        self._adj.setdefault(v, {})

    def add_edge(self, v1: T, v2: T, w: int = DEFAULT_WEIGHT):
        '''
        Add the edge v1->v2 with weight w, creating v1 and v2 if needed.
        An existing edge keeps its weight (use update_edge to change it).
        '''
        if not self.is_edge(v1, v2):
            self.update_edge(v1, v2, w)

    def update_edge(self, v1: T, v2: T, w: int):
        '''
        Set the weight of v1->v2 to w, adding the edge and endpoints if absent.
        '''
        self.add_vertex(v2)
        self._adj.setdefault(v1, {})[v2] = w

    def remove_edge(self, v1: T, v2: T):
        if v1 in self._adj:
            self._adj[v1].pop(v2, None)

    def remove(self, v: T):
        '''
        Remove v and every edge into or out of it. Does nothing if v is unknown.
        '''
        if v not in self._adj:
            return
        for nbrs in self._adj.values():
            nbrs.pop(v, None)
        del self._adj[v]

    # ---------- queries ----------

    def is_vertex(self, v: T) -> bool:
        return v in self._adj

    def is_edge(self, v1: T, v2: T) -> bool:
        return v1 in self._adj and v2 in self._adj[v1]

    def weight(self, v1: T, v2: T) -> int:
        '''
        Weight of v1->v2, or 0 if the edge (or either vertex) does not exist.
        '''
        if not self.is_edge(v1, v2):
            return NO_EDGE_WEIGHT
        return self._adj[v1][v2]

    def degree_out(self, v: T) -> int:
        try:
            return len(self._adj[v])
        except KeyError:
            raise VertexNotFoundError(v) from None

    def degree_in(self, v: T) -> int:
        return len(self.neighbors_in(v))

    def neighbors(self, v: T) -> List[T]:
        '''
        Vertices reachable from v along one outgoing edge, ascending.
        Empty if v does not exist.
        '''
        return sorted(self._adj.get(v, ()))

    def neighbors_in(self, v: T) -> List[T]:
        '''
        Vertices with an edge into v, ascending. Scans every vertex.
        '''
        return sorted(u for u, nbrs in self._adj.items() if v in nbrs)

    def vertices(self) -> List[T]:
        return sorted(self._adj)

    def edges(self) -> List[Tuple[T, T, int]]:
        '''
        Every directed edge as (v1, v2, weight), in ascending order.
        '''
        return [(v1, v2, self._adj[v1][v2]) for v1 in self.vertices() for v2 in self.neighbors(v1)]

    def edge_count(self) -> int:
        return sum(len(nbrs) for nbrs in self._adj.values())

    def copy(self) -> "DiGraph[T]":
        '''
        Copy of this graph sharing no adjacency mappings with it.
        '''
        g = type(self)()
        g._adj = {v: dict(nbrs) for v, nbrs in self._adj.items()}
        return g

    def to_networkx(self) -> nx.DiGraph:
        G = nx.DiGraph()
        G.add_nodes_from(self._adj)
        G.add_weighted_edges_from(self.edges())
        return G


# ============================================================
# Undirected graph
# ============================================================
def _locked(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class Graph(Generic[T]):
    ''' Undirected graph, optionally weighted.

    Wraps a DiGraph whose edges are always mirrored: every edge mutation is
    applied to v1->v2 and v2->v1 under a single lock, so no caller can see one
    direction without the other. The degree of a vertex is its out-degree in
    the wrapped DiGraph.
    '''
    def __init__(self):
        self._digraph: DiGraph[T] = DiGraph()
        self._lock = threading.RLock()

    def __repr__(self):
        return f"Graph(V={len(self)}, E={self.edge_count()})"

    @_locked
    def __len__(self) -> int:
        return len(self._digraph)

    def __contains__(self, v) -> bool:
        return self.is_vertex(v)

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return self._digraph == other._digraph

    def __deepcopy__(self, memo):
        return self.copy()

    # ---------- mutation ----------

    @_locked
    def add_vertex(self, v: T):
        self._digraph.add_vertex(v)

    @_locked
    def add_edge(self, v1: T, v2: T, w: int = DEFAULT_WEIGHT):
        '''
        Add the edge between v1 and v2 with weight w, creating the vertices if
        needed. An existing edge keeps its weight.
        '''
        self._digraph.add_edge(v1, v2, w)
        self._digraph.add_edge(v2, v1, w)

    @_locked
    def update_edge(self, v1: T, v2: T, w: int):
        self._digraph.update_edge(v1, v2, w)
        self._digraph.update_edge(v2, v1, w)

    @_locked
    def remove_edge(self, v1: T, v2: T):
        self._digraph.remove_edge(v1, v2)
        self._digraph.remove_edge(v2, v1)

    @_locked
    def remove(self, v: T):
        self._digraph.remove(v)

    # ---------- queries ----------

    @_locked
    def is_vertex(self, v: T) -> bool:
        return self._digraph.is_vertex(v)

    @_locked
    def is_edge(self, v1: T, v2: T) -> bool:
        return self._digraph.is_edge(v1, v2)

    @_locked
    def weight(self, v1: T, v2: T) -> int:
        return self._digraph.weight(v1, v2)

    @_locked
    def degree(self, v: T) -> int:
        '''
        Number of edges attached to v. Raises VertexNotFoundError if v is unknown.
        '''
        return self._digraph.degree_out(v)

    # Symmetric adjacency makes in/out degrees equal to the degree.
    degree_out = degree

    @_locked
    def degree_in(self, v: T) -> int:
        return self._digraph.degree_in(v)

    @_locked
    def neighbors(self, v: T) -> List[T]:
        return self._digraph.neighbors(v)

    @_locked
    def neighbors_in(self, v: T) -> List[T]:
        return self._digraph.neighbors_in(v)

    @_locked
    def vertices(self) -> List[T]:
        return self._digraph.vertices()

    @_locked
    def edges(self) -> List[Tuple[T, T, int]]:
        '''
        Every undirected edge once, as (v1, v2, weight) with v1 <= v2.
        Only `<` is used to compare vertices, as in sorted().
        '''
        return [(v1, v2, w) for v1, v2, w in self._digraph.edges() if not v2 < v1]

    def edge_count(self) -> int:
        return len(self.edges())

    @_locked
    def copy(self) -> "Graph[T]":
        g = type(self)()
        g._digraph = self._digraph.copy()
        return g

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(self.vertices())
        G.add_weighted_edges_from(self.edges())
        return G
