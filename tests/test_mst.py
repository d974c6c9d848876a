from collections.abc import Hashable

import pytest
from hypothesis import given
from hypothesis.strategies import sampled_from

from hashgraph import (
    Context,
    Edge,
    Frontier,
    Graph,
    Head,
    NodeNotFoundError,
    Tail,
    kruskal,
    prim,
    prim_at,
    reconstruct_tree,
)
from hashgraph.utils import iequal

from .strategies import disconnected_graphs, graphs


frontiers = pytest.mark.parametrize("frontier", list(Frontier))


def diamond() -> Graph:
    return Graph.from_edges(
        [("A", "B", 4), ("A", "C", 1), ("C", "B", 2), ("C", "D", 5), ("B", "D", 3)]
    )


def reference_weight(graph: Graph, root: Hashable) -> int:
    """ Weight of a minimum spanning tree of the component of root, by naive relabeling """

    component = list(graph.bfs(root))
    label = {node: node for node in component}
    edges = sorted(graph.edges(), key=lambda edge: edge.weight)

    total = 0
    for edge in edges:
        if edge.predecessor not in label:
            continue

        a, b = label[edge.predecessor], label[edge.successor]
        if a == b:
            continue

        total += edge.weight
        for node in component:
            if label[node] == b:
                label[node] = a

    return total


def assert_spanning_tree(tree: Graph, root: Hashable) -> None:
    root_context = tree[root]
    assert not root_context.heads

    for node, context in tree.contexts():
        if node != root:
            assert len(context.heads) == 1

    # n nodes, n-1 edges, and connected, hence acyclic
    assert tree.size == tree.order - 1
    assert set(tree.bfs(root)) == set(tree.nodes())
    assert tree.is_symmetric()


@frontiers
def test_prim_at_diamond(frontier: Frontier) -> None:
    tree = prim_at("A", diamond(), frontier)

    assert list(tree.nodes()) == ["A", "C", "B", "D"]
    assert set(tree.edges()) == {Edge("A", 1, "C"), Edge("C", 2, "B"), Edge("B", 3, "D")}
    assert tree.total_weight() == 6

    assert not tree["A"].heads
    assert list(tree["A"].tails) == [Tail(1, "C")]
    assert list(tree["C"].heads) == [Head(1, "A")]
    assert list(tree["B"].heads) == [Head(2, "C")]
    assert list(tree["D"].heads) == [Head(3, "B")]
    assert_spanning_tree(tree, "A")


@frontiers
def test_prim_diamond_grows_from_first_node(frontier: Frontier) -> None:
    assert prim(diamond(), frontier) == prim_at("A", diamond(), frontier)


@frontiers
def test_prim_at_absent_node(frontier: Frontier) -> None:
    g = diamond()
    assert prim_at("Z", g, frontier) is g

    empty: Graph = Graph()
    assert prim_at("A", empty, frontier) is empty


@frontiers
def test_prim_empty_graph(frontier: Frontier) -> None:
    g: Graph = Graph()
    assert prim(g, frontier) is g


@frontiers
def test_prim_single_node(frontier: Frontier) -> None:
    g: Graph = Graph()
    g.add_node("A")

    tree = prim(g, frontier)

    assert tree == g
    assert tree is not g


@frontiers
def test_prim_ties_prefer_earlier_edges(frontier: Frontier) -> None:
    g = Graph.from_edges([("A", "B", 1), ("A", "C", 1), ("B", "C", 1)])

    tree = prim_at("A", g, frontier)

    assert list(tree.edges()) == [Edge("A", 1, "B"), Edge("A", 1, "C")]


@frontiers
def test_prim_parallel_edges(frontier: Frontier) -> None:
    g = Graph.from_edges([("A", "B", 5), ("A", "B", 2), ("B", "C", 1), ("A", "C", 1)])

    tree = prim_at("A", g, frontier)

    assert set(tree.edges()) == {Edge("A", 1, "C"), Edge("C", 1, "B")}


@frontiers
def test_prim_negative_weights(frontier: Frontier) -> None:
    g = Graph.from_edges(
        [("A", "B", -1), ("A", "C", 4), ("B", "C", 2), ("C", "D", -2), ("B", "D", 3)]
    )

    tree = prim_at("A", g, frontier)

    assert tree.total_weight() == -1
    assert_spanning_tree(tree, "A")


@frontiers
def test_prim_does_not_mutate_input(frontier: Frontier) -> None:
    g = diamond()
    prim_at("B", g, frontier)
    assert g == diamond()


@pytest.mark.parametrize("frontier", [Frontier.MAP, Frontier.HYBRID])
def test_prim_dangling_tail(frontier: Frontier) -> None:
    # A tail pointing to an absent node breaks the store's consistency
    g = Graph.from_contexts({"A": Context()}, [Edge("A", 1, "Z")])

    with pytest.raises(NodeNotFoundError):
        prim_at("A", g, frontier)


def test_prim_invalid_frontier() -> None:
    with pytest.raises(ValueError):
        prim(diamond(), "hybrid")  # type: ignore


@given(graphs(min_nodes=1), sampled_from(list(Frontier)))
def test_prim_spanning_tree_property_based(graph: Graph, frontier: Frontier) -> None:
    root = next(iter(graph.nodes()))
    tree = prim(graph, frontier)

    assert set(tree.nodes()) == set(graph.nodes())
    assert_spanning_tree(tree, root)
    assert tree.total_weight() == reference_weight(graph, root)

    # Every tree edge is an edge of the graph
    for edge in tree.edges():
        assert edge.tail in graph[edge.predecessor].tails


@given(graphs(min_nodes=1))
def test_prim_frontiers_agree(graph: Graph) -> None:
    weights = {prim(graph, frontier).total_weight() for frontier in Frontier}
    assert len(weights) == 1


@given(graphs(), sampled_from(list(Frontier)))
def test_prim_deterministic(graph: Graph, frontier: Frontier) -> None:
    assert iequal(
        prim(graph, frontier).edges(), prim(graph, frontier).edges(), strict=True
    )


@given(disconnected_graphs(), sampled_from(list(Frontier)))
def test_prim_disconnected(
    args: tuple[Graph, list[Hashable], list[Hashable]], frontier: Frontier
) -> None:
    graph, left, right = args

    tree = prim_at(left[0], graph, frontier)
    assert set(tree.nodes()) == set(left)
    assert_spanning_tree(tree, left[0])

    tree = prim_at(right[-1], graph, frontier)
    assert set(tree.nodes()) == set(right)
    assert tree.total_weight() == reference_weight(graph, right[-1])


def test_reconstruct_tree() -> None:
    tree = reconstruct_tree([("A", None), ("C", Head(1, "A")), ("B", Head(2, "C"))])

    assert list(tree.nodes()) == ["A", "C", "B"]
    assert list(tree.edges()) == [Edge("A", 1, "C"), Edge("C", 2, "B")]
    assert not tree["B"].tails
    assert tree.is_symmetric()

    assert reconstruct_tree([]) == Graph()


def test_kruskal_diamond() -> None:
    tree = kruskal(diamond())

    assert list(tree.nodes()) == ["A", "B", "C", "D"]
    assert set(tree.edges()) == {Edge("A", 1, "C"), Edge("B", 2, "C"), Edge("B", 3, "D")}
    assert tree.total_weight() == 6
    assert tree.is_symmetric()


def test_kruskal_empty_graph() -> None:
    g: Graph = Graph()
    assert kruskal(g) is g


@given(graphs(min_nodes=1))
def test_kruskal_property_based(graph: Graph) -> None:
    tree = kruskal(graph)

    assert set(tree.nodes()) == set(graph.nodes())
    assert tree.size == tree.order - 1
    assert tree.is_symmetric()
    assert tree.total_weight() == prim(graph).total_weight()


@given(disconnected_graphs())
def test_kruskal_disconnected(args: tuple[Graph, list[Hashable], list[Hashable]]) -> None:
    graph, left, right = args

    forest = kruskal(graph)

    assert set(forest.nodes()) == set(graph.nodes())
    assert forest.size == forest.order - 2
    assert forest.total_weight() == reference_weight(graph, left[0]) + reference_weight(
        graph, right[0]
    )


def test_kruskal_ties_prefer_earlier_edges() -> None:
    g = Graph.from_edges([("A", "B", 1), ("A", "C", 1), ("B", "C", 1)])

    tree = kruskal(g)

    assert list(tree.edges()) == [Edge("A", 1, "B"), Edge("A", 1, "C")]
    assert not tree["B"].tails
