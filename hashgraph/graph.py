from __future__ import annotations

from collections import deque
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Generic, Optional, TypeVar

import attrs
from more_itertools import first, ilen

from .collections_extra import OrderedSet
from .exceptions import NodeNotFoundError, SelfLoopError
from .typing_extra import Comparable


__all__ = ["Head", "Tail", "Edge", "Context", "Graph"]


#
# Thin semantic type annotation
#

Node = TypeVar("Node", bound=Hashable)
Weight = TypeVar("Weight", bound=Comparable)


@attrs.frozen
class Head(Generic[Weight, Node]):
    """ The incoming view of an edge, stored at the successor """

    weight: Weight
    predecessor: Node


@attrs.frozen
class Tail(Generic[Weight, Node]):
    """ The outgoing view of an edge, stored at the predecessor """

    weight: Weight
    successor: Node


@attrs.frozen
class Edge(Generic[Node, Weight]):
    predecessor: Node
    weight: Weight
    successor: Node

    @property
    def head(self) -> Head[Weight, Node]:
        return Head(self.weight, self.predecessor)

    @property
    def tail(self) -> Tail[Weight, Node]:
        return Tail(self.weight, self.successor)

    def reverse(self) -> Edge[Node, Weight]:
        return Edge(self.successor, self.weight, self.predecessor)


@attrs.define
class Context(Generic[Weight, Node]):
    heads: OrderedSet[Head[Weight, Node]] = attrs.field(factory=OrderedSet)
    tails: OrderedSet[Tail[Weight, Node]] = attrs.field(factory=OrderedSet)

    def copy(self) -> Context[Weight, Node]:
        return Context(self.heads.copy(), self.tails.copy())


# Graph is represented internally as a mapping from node to its context. An undirected
# edge is stored as two directed edges, each one visible as a tail at its predecessor and
# as a head at its successor.
class Graph(Generic[Node, Weight]):
    def __init__(self) -> None:
        self._contexts = {}  # type: dict[Node, Context[Weight, Node]]

    __slots__ = "_contexts"

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[Node, Node, Weight]]) -> Graph[Node, Weight]:
        """ Build an undirected graph from (node, node, weight) triples """

        graph: Graph[Node, Weight] = cls()

        for v, w, weight in edges:
            graph.add_edge(v, w, weight)

        return graph

    @classmethod
    def from_contexts(
        cls,
        contexts: Mapping[Node, Context[Weight, Node]],
        edges: Iterable[Edge[Node, Weight]],
    ) -> Graph[Node, Weight]:
        """
        Build a graph from a node-to-context mapping, then splice every edge in as a tail
        of its predecessor.

        Heads are taken from the mapping as they are, so the caller is responsible to
        provide the matching heads at the successors. NodeNotFoundError is raised if the
        predecessor of an edge is not in the mapping.
        """

        graph: Graph[Node, Weight] = cls()
        graph._contexts = {node: context.copy() for node, context in contexts.items()}

        for edge in edges:
            graph[edge.predecessor].tails.add(edge.tail)

        return graph

    def add_node(self, v: Node) -> None:
        self._contexts.setdefault(v, Context())

    def add_edge(self, v: Node, w: Node, weight: Weight) -> None:
        """ Add an undirected edge, i.e. the directed edges in both directions """

        if v == w:
            raise SelfLoopError("Self loop is not supported")

        edge = Edge(v, weight, w)
        self.insert_edge(edge)
        self.insert_edge(edge.reverse())

    def insert_edge(self, edge: Edge[Node, Weight]) -> None:
        """ Add a single directed edge. Missing endpoints are added as nodes. """

        self.add_node(edge.predecessor)
        self.add_node(edge.successor)

        self._contexts[edge.predecessor].tails.add(edge.tail)
        self._contexts[edge.successor].heads.add(edge.head)

    def remove_edge(self, v: Node, w: Node) -> None:
        """ Remove every edge between v and w, in both directions, regardless of weight """

        for p, s in ((v, w), (w, v)):
            if p not in self._contexts or s not in self._contexts:
                continue

            tails = self._contexts[p].tails
            tails -= [tail for tail in tails if tail.successor == s]

            heads = self._contexts[s].heads
            heads -= [head for head in heads if head.predecessor == p]

    def __contains__(self, node: Node) -> bool:
        return node in self._contexts

    def __getitem__(self, node: Node) -> Context[Weight, Node]:
        try:
            return self._contexts[node]

        except KeyError:
            raise NodeNotFoundError(node) from None

    def get(self, node: Node) -> Optional[Context[Weight, Node]]:
        return self._contexts.get(node)

    def __len__(self) -> int:
        return len(self._contexts)

    def __iter__(self) -> Iterator[Node]:
        yield from self._contexts

    @property
    def order(self) -> int:
        """ Number of nodes """
        return len(self._contexts)

    @property
    def size(self) -> int:
        """ Number of directed edges. An undirected edge counts twice. """
        return sum(len(context.tails) for context in self._contexts.values())

    def nodes(self) -> Iterator[Node]:
        yield from self._contexts

    def contexts(self) -> Iterator[tuple[Node, Context[Weight, Node]]]:
        yield from self._contexts.items()

    def edges(self) -> Iterator[Edge[Node, Weight]]:
        """ For the same edge/node insertion order, the output is deterministic. """

        for node, context in self._contexts.items():
            for tail in context.tails:
                yield Edge(node, tail.weight, tail.successor)

    def match_any(self) -> Optional[tuple[Node, Context[Weight, Node]]]:
        """ Return the earliest inserted node with its context, or None for an empty graph """
        return first(self._contexts.items(), default=None)

    def total_weight(self) -> Weight:
        """ Sum the weights of all directed edges. An undirected edge counts twice. """
        return sum(edge.weight for edge in self.edges())  # type: ignore

    def bfs(self, source: Node) -> Iterator[Node]:
        """
        Traverse along tails. Depending on the connectivity of the graph, it may not
        traverse all the nodes. For the same edge/node insertion order, the output is
        deterministic.
        """

        assert source in self._contexts

        queue: deque[Node] = deque([source])
        traversed: set[Node] = set()

        while queue:
            node = queue.popleft()

            if node in traversed:
                continue

            yield node
            traversed.add(node)
            queue.extend(tail.successor for tail in self._contexts[node].tails)

    def connected(self) -> bool:
        if not self._contexts:
            return True

        entry = first(self._contexts)
        return ilen(self.bfs(entry)) == len(self._contexts)

    def is_symmetric(self) -> bool:
        """ Whether every tail has its reciprocal head, and vice versa """

        for node, context in self._contexts.items():
            for tail in context.tails:
                other = self._contexts.get(tail.successor)
                if other is None or Head(tail.weight, node) not in other.heads:
                    return False

            for head in context.heads:
                other = self._contexts.get(head.predecessor)
                if other is None or Tail(head.weight, node) not in other.tails:
                    return False

        return True

    def copy(self) -> Graph[Node, Weight]:
        """
        Note that this is shallow copy, NOT deep copy.

        The interface guarantees deep copy of the whole adjacency structure, but not to
        the level of Node internal.
        """

        new: Graph[Node, Weight] = Graph()
        new._contexts = {node: context.copy() for node, context in self._contexts.items()}
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented

        return self._contexts == other._contexts

    def __str__(self) -> str:
        return "Graph({})".format(self._contexts)

    def __repr__(self) -> str:
        return self.__str__()
