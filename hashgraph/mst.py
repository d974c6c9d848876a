"""
Minimum spanning trees.

Prim's algorithm comes in three flavors, differing in how the frontier, i.e. the
candidate edges between the visited nodes and the unvisited nodes, is kept track of:

- MAP keeps only the cheapest known edge per unvisited node, and scans the whole map
  for the minimum at every step.
- HEAP keeps every candidate edge ever seen in a min-heap, and lazily discards the
  edges pointing to visited nodes on pop.
- HYBRID keeps both. The map filters out dominated edges before they reach the heap,
  and the emptiness of the map signals termination.

All three flavors produce the sequence of discovered nodes, each along with the head it's
discovered by, and the tree is then rebuilt from that sequence.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from enum import Enum
from operator import attrgetter
from typing import Optional, TypeVar

from more_itertools import unique_everseen

from .collections_extra import OrderedSet, PriorityQueue, UnionFind
from .exceptions import Unreachable
from .graph import Context, Edge, Graph, Head
from .typing_extra import Comparable


__all__ = ["Frontier", "prim", "prim_at", "kruskal", "reconstruct_tree"]


Node = TypeVar("Node", bound=Hashable)
Weight = TypeVar("Weight", bound=Comparable)

# A node, along with the head it's discovered by. The root has no head.
Discovery = tuple[Node, Optional[Head]]


class Frontier(Enum):
    """ An enumeration to specify how Prim's algorithm keeps track of candidate edges """

    MAP = "map"
    HEAP = "heap"
    HYBRID = "hybrid"


def prim(
    graph: Graph[Node, Weight], frontier: Frontier = Frontier.HYBRID
) -> Graph[Node, Weight]:
    """
    Minimum spanning tree by Prim's algorithm, grown from the earliest inserted node.

    An empty graph is returned as it is.
    """

    match = graph.match_any()
    if match is None:
        return graph

    root, _ = match
    return _prim(graph, root, frontier)


def prim_at(
    start: Node, graph: Graph[Node, Weight], frontier: Frontier = Frontier.HYBRID
) -> Graph[Node, Weight]:
    """
    Minimum spanning tree by Prim's algorithm, grown from the given node.

    The graph is returned as it is if the start node is not in the graph.

    For disconnected graph, only the component containing the start node is spanned.

    In the output, the start node has no head, and every other node has exactly one head,
    the edge it's discovered by. Each tree edge is stored once, directed away from the
    start node. For the same edge/node insertion order, output is guaranteed to be
    deterministic.
    """

    if start not in graph:
        return graph

    return _prim(graph, start, frontier)


def _prim(
    graph: Graph[Node, Weight], root: Node, frontier: Frontier
) -> Graph[Node, Weight]:

    if frontier is Frontier.MAP:
        discoveries = _discover_by_map(graph, root)
    elif frontier is Frontier.HEAP:
        discoveries = _discover_by_heap(graph, root)
    elif frontier is Frontier.HYBRID:
        discoveries = _discover_by_hybrid(graph, root)
    else:
        raise ValueError("the frontier argument receives invalid value")

    return reconstruct_tree(discoveries)


def _discover_by_map(graph: Graph[Node, Weight], root: Node) -> Iterator[Discovery]:
    visited: set[Node] = set()
    optimal: dict[Node, Head[Weight, Node]] = {}

    node, head = root, None

    while True:
        visited.add(node)
        yield node, head

        for tail in graph[node].tails:
            if tail.successor in visited:
                continue

            # On ties the earlier edge stays
            best = optimal.get(tail.successor)
            if best is None or tail.weight < best.weight:
                optimal[tail.successor] = Head(tail.weight, node)

        if not optimal:
            return

        # min() returns the earliest inserted one among ties
        node, head = min(optimal.items(), key=lambda item: item[1].weight)
        del optimal[node]


def _discover_by_heap(graph: Graph[Node, Weight], root: Node) -> Iterator[Discovery]:
    visited: set[Node] = set()
    candidates: PriorityQueue[Edge[Node, Weight]] = PriorityQueue()
    remaining = graph.order - 1

    node, head = root, None

    while True:
        visited.add(node)
        yield node, head

        if not remaining:
            return

        for tail in graph[node].tails:
            if tail.successor not in visited:
                candidates.push(Edge(node, tail.weight, tail.successor), tail.weight)

        edge = _pop_unvisited(candidates, visited)
        if edge is None:
            return

        node, head = edge.successor, edge.head
        remaining -= 1


def _discover_by_hybrid(graph: Graph[Node, Weight], root: Node) -> Iterator[Discovery]:
    visited: set[Node] = set()
    optimal: dict[Node, Head[Weight, Node]] = {}
    candidates: PriorityQueue[Edge[Node, Weight]] = PriorityQueue()

    node, head = root, None

    while True:
        visited.add(node)
        yield node, head

        for tail in graph[node].tails:
            if tail.successor in visited:
                continue

            # Dominated edges never enter the heap. Edges that get dominated later stay
            # in the heap, and are popped only after the node is visited.
            best = optimal.get(tail.successor)
            if best is None or tail.weight < best.weight:
                optimal[tail.successor] = Head(tail.weight, node)
                candidates.push(Edge(node, tail.weight, tail.successor), tail.weight)

        if not optimal:
            return

        edge = _pop_unvisited(candidates, visited)
        if edge is None:
            # Every entry of the map has its edge in the heap
            raise Unreachable

        node = edge.successor
        head = optimal.pop(node)


def _pop_unvisited(
    candidates: PriorityQueue[Edge[Node, Weight]], visited: set[Node]
) -> Optional[Edge[Node, Weight]]:
    """ Pop the cheapest edge leading to an unvisited node, or None if there is none """

    while candidates:
        edge = candidates.pop()
        if edge.successor not in visited:
            return edge

    return None


def reconstruct_tree(discoveries: Iterable[Discovery]) -> Graph[Node, Weight]:
    """
    Build a graph from a sequence of discovered nodes.

    The discovery sequence only tracks the incoming direction. The outgoing direction,
    i.e. the tail at the predecessor, is spliced in afterwards.
    """

    contexts: dict[Node, Context[Weight, Node]] = {}
    edges: list[Edge[Node, Weight]] = []

    for node, head in discoveries:
        if head is None:
            contexts[node] = Context()
        else:
            contexts[node] = Context(heads=OrderedSet([head]))
            edges.append(Edge(head.predecessor, head.weight, node))

    return Graph.from_contexts(contexts, edges)


def _undirected_key(edge: Edge[Node, Weight]) -> tuple[frozenset[Node], Weight]:
    return frozenset({edge.predecessor, edge.successor}), edge.weight


def kruskal(graph: Graph[Node, Weight]) -> Graph[Node, Weight]:
    """
    Minimum spanning tree by Kruskal's algorithm.

    An empty graph is returned as it is.

    For disconnected graph, a minimum spanning forest over all the nodes is returned.

    Each tree edge is stored once, directed in the way it's first enumerated. Among edges
    of equal weight, the earlier enumerated one is preferred. For the same edge/node
    insertion order, output is guaranteed to be deterministic.
    """

    if not graph:
        return graph

    # sorted() is stable, so ties keep the enumeration order
    edges = sorted(
        unique_everseen(graph.edges(), key=_undirected_key), key=attrgetter("weight")
    )

    forest = UnionFind(graph.nodes())
    contexts: dict[Node, Context[Weight, Node]] = {node: Context() for node in graph}
    accepted: list[Edge[Node, Weight]] = []

    for edge in edges:
        if len(accepted) == graph.order - 1:
            break

        if forest.connected(edge.predecessor, edge.successor):
            continue

        forest.union(edge.predecessor, edge.successor)
        contexts[edge.successor].heads.add(edge.head)
        accepted.append(edge)

    return Graph.from_contexts(contexts, accepted)
