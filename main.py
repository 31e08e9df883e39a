# main.py
from graph import Graph
from euler import edges_from_trail, find_trail, is_circuit, is_connected_on_non_isolated, odd_degree_vertices

import argparse
import json
import logging
import sys
import time
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

# ============================================================
# Default params
# ============================================================
DEFAULT_SAMPLE = "all"
DEFAULT_VERTEX_TYPE = "int"
NO_TRAIL_MARKER = "none."

# Demo graphs: #1 has an Euler circuit, #2 an Euler path, #3 is non-Eulerian
SAMPLE_EDGES = {
    "1": [(1, 2), (1, 3), (1, 4), (1, 5), (2, 3), (2, 5),
          (2, 6), (3, 6), (3, 7), (4, 5), (5, 6), (6, 7)],
    "2": [(1, 2), (1, 4), (2, 3), (2, 4), (3, 5), (4, 5)],
    "3": [(1, 2), (1, 3), (1, 4), (1, 5), (2, 3), (2, 5),
          (3, 6), (4, 5), (4, 6), (5, 6)],
}

VERTEX_TYPES = {"int": int, "str": str}

# ============================================================
# CLI & Logging
# ============================================================
def build_argparser():
    p = argparse.ArgumentParser(prog="eulertrail", description="Euler trail finder")

    # Input graphs
    p.add_argument("--sample", choices=sorted(SAMPLE_EDGES) + ["all"], default=DEFAULT_SAMPLE,
                   help="Demo graph to solve (ignored when --edge is given)")
    p.add_argument("-e", "--edge", action="append", nargs="+", metavar="U V [W]",
                   help="Add an undirected edge U-V with optional weight W (repeatable)")
    p.add_argument("--vertex-type", choices=sorted(VERTEX_TYPES), default=DEFAULT_VERTEX_TYPE)
    # int = vertices are parsed as integers (ascending numeric order)
    # str = vertices are kept as strings (lexicographic order)

    # Checks & output
    p.add_argument("--check-connected", action="store_true",
                   help="Report graphs whose edge-bearing vertices are disconnected")
    p.add_argument("--print-edges", action="store_true", help="Print the trail as a list of edges")
    p.add_argument("--export", help="Output path for the trails (JSON)")
    p.add_argument("--progress", action="store_true", help="Show a progress bar over the graphs")
    p.add_argument("-v", "--verbose", action="count", default=1)
    p.add_argument("-q", "--quiet", action="count", default=0)
    # verbosity = verbose - quiet: 0=warning, 1=info, 2=debug

    return p



def log_level(verbosity: int) -> int:
    '''
    Map verbosity to a logging level: <=0 = warning, 1 = info, >=2 = debug.
    '''
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    return level

def configure_logging(verbosity: int):
    """Configure logging level based on verbosity.
    Parameters
    ----------
    verbosity : int
        0 = warning, 1 = info, 2 = debug
    """
    logging.basicConfig(
        level=log_level(verbosity),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )

# ============================================================
# Graph building
# ============================================================
def build_graph(edges: Sequence[Tuple]) -> Graph:
    '''
    Build an undirected graph from (u,v) or (u,v,w) tuples.
    '''
    g = Graph()
    for e in edges:
        g.add_edge(*e)
    return g

def parse_edge(values: List[str], vertex_type: str) -> Tuple:
    '''
    Parse one --edge argument into (u,v) or (u,v,w).
    Raises ValueError on a malformed edge.
    '''
    if len(values) not in (2, 3):
        raise ValueError(f"an edge needs U V [W], got {' '.join(values)!r}")
    convert = VERTEX_TYPES[vertex_type]
    u, v = convert(values[0]), convert(values[1])
    if len(values) == 2:
        return u, v
    w = values[2]
    try:
        return u, v, int(w)
    except ValueError:
        return u, v, float(w)

def graphs_from_args(args, parser) -> Dict[str, Graph]:
    '''
    Return the graphs to solve, keyed by name.
    '''
    if args.edge:
        try:
            edges = [parse_edge(values, args.vertex_type) for values in args.edge]
        except ValueError as exc:
            parser.error(f"argument -e/--edge: {exc}")
        return {"custom": build_graph(edges)}
    names = sorted(SAMPLE_EDGES) if args.sample == "all" else [args.sample]
    return {f"sample {name}": build_graph(SAMPLE_EDGES[name]) for name in names}

# ============================================================
# Solving
# ============================================================
def solve(graph: Graph, check_connected: bool = False) -> Tuple[List, Dict]:
    '''
    Find an Euler trail and describe how it was obtained.
    '''
    t0 = time.time()
    odds = odd_degree_vertices(graph)
    k = len(odds)
    logging.info(f"Odd-degree vertices: k={k}")

    connected = None
    if check_connected:
        connected = is_connected_on_non_isolated(graph)
        if not connected:
            logging.error("Graph is not connected on its non-isolated vertices; the trail will be incomplete.")

    trail = find_trail(graph)
    if not trail:
        mode = "none"
    elif is_circuit(trail):
        mode = "circuit"
    else:
        mode = "path"

    meta = {
        "mode": mode,
        "k": k,
        "vertices": len(graph),
        "edges": graph.edge_count(),
        "complete": len(trail) == graph.edge_count() + 1,
        "time_sec": round(time.time() - t0, 3),
    }
    if connected is not None:
        meta["connected"] = connected
    return trail, meta

# ============================================================
# Printing utils
# ============================================================
def format_graph(graph: Graph) -> str:
    '''
    Vertex count line, then one line per vertex: "v: n(w) n(w) ...".
    '''
    vertices = graph.vertices()
    lines = [f"Vertex count: {len(vertices)}"]
    for v in vertices:
        nbrs = "".join(f" {n}({graph.weight(v, n)})" for n in graph.neighbors(v))
        lines.append(f"{v}:{nbrs}")
    return "\n".join(lines)

def format_trail(trail: List, print_edges: bool = False) -> str:
    '''
    Space separated vertices (or edges), or a "none." marker if empty.
    '''
    if not trail:
        return f"Euler Path: {NO_TRAIL_MARKER}"
    if print_edges:
        return "Euler Path: " + " ".join(f"{u}-{v}" for u, v in edges_from_trail(trail))
    return "Euler Path: " + " ".join(str(v) for v in trail)

def print_summary(name: str, meta: Dict):
    '''
    Print solution summary to the console.
    '''
    print(f"=== {name} ===")
    print(f"Trail kind             : {meta.get('mode')}")
    print(f"Odd-degree vertices (k): {meta.get('k')}")
    print(f"Edges used             : {'all' if meta.get('complete') else 'not all'}")
    print(f"Total time             : {meta.get('time_sec')} s")

# ============================================================
# Export
# ============================================================
def export_trails(path: Optional[str], results: List[Dict]):
    '''
    Export trails and meta to a JSON file.
    '''
    if not path: return
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"trails": results}, f, ensure_ascii=False, indent=2)

# ============================================================
# Main
# ============================================================
def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose - args.quiet)

    graphs = graphs_from_args(args, parser)
    results = []
    for name in tqdm(graphs, desc="Euler trails", disable=not args.progress):
        graph = graphs[name]
        trail, meta = solve(graph, check_connected=args.check_connected)
        print_summary(name, meta)
        print(format_graph(graph))
        print(format_trail(trail, print_edges=args.print_edges))
        print()
        results.append({"name": name, "trail": trail, "meta": meta})

    try:
        export_trails(args.export, results)
    except OSError as exc:
        logging.error(f"Failed to export trails to {args.export}: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
