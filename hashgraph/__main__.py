#!/usr/bin/env python3

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import IO, Any, Optional, Union

import click
from colorama import colorama_text

from .__version__ import __version__
from .exceptions import SelfLoopError
from .graph import Graph
from .mst import Frontier, kruskal, prim, prim_at
from .utils import Logger, bright_yellow, is_nan, no_color_context


__all__ = ["Algorithm", "MalformedInput", "MutuallyExclusiveOptions", "read_graph", "main"]


#
# Enumerations
#


class Algorithm(Enum):
    """ An enumeration to specify the minimum spanning tree algorithm """

    MAP = "map"
    HEAP = "heap"
    HYBRID = "hybrid"
    KRUSKAL = "kruskal"


#
# Custom Exceptions
#


class MalformedInput(click.ClickException):
    """ An exception to signal that a line of the input can't be parsed """

    def __init__(self, lineno: int, reason: str) -> None:
        super().__init__(f"line {lineno}: {reason}")


class MutuallyExclusiveOptions(click.UsageError):
    """ An exception to signal that two or more mutually exclusive CLI options are set """


#
# Utility Classes
#


class AlgorithmParamType(click.ParamType):
    """ A parameter type for the --algorithm CLI option """

    name = "algorithm"

    def convert(self, value: Union[str, Algorithm], param: Any, ctx: Any) -> Algorithm:
        if isinstance(value, Algorithm):
            return value

        try:
            return Algorithm(value)

        except ValueError:
            self.fail(
                "--algorithm argument has invalid value. "
                "Possible values are `map`, `heap`, `hybrid`, and `kruskal`.",
                param,
                ctx,
            )


def parse_weight(field: str) -> Union[int, float]:
    try:
        return int(field)
    except ValueError:
        weight = float(field)

    if is_nan(weight):
        raise ValueError("NaN is not a valid weight")

    return weight


def read_graph(lines: Iterable[str]) -> Graph[str, Union[int, float]]:
    """
    Read an undirected graph, one edge per line in the form of `node node weight`.

    A line with a single field declares an isolated node. Blank lines are skipped, and
    `#` starts a comment.
    """

    graph: Graph[str, Union[int, float]] = Graph()

    for lineno, line in enumerate(lines, start=1):
        fields = line.split("#", 1)[0].split()

        if not fields:
            continue

        if len(fields) == 1:
            graph.add_node(fields[0])

        elif len(fields) == 3:
            v, w, weight_field = fields

            try:
                weight = parse_weight(weight_field)
            except ValueError:
                raise MalformedInput(lineno, f"{weight_field!r} is not a valid weight") from None

            try:
                graph.add_edge(v, w, weight)
            except SelfLoopError:
                raise MalformedInput(lineno, f"self loop on {v!r} is not supported") from None

        else:
            raise MalformedInput(
                lineno, f"expect `node node weight`, got {len(fields)} fields"
            )

    return graph


@click.command(
    name="hashgraph-mst",
    help="Compute the minimum spanning tree of a weighted undirected graph. "
    "The graph is read from FILE (or stdin), one edge per line in the form of `node node weight`.",
    context_settings=dict(help_option_names=["-h", "--help"]),
)
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "-s",
    "--start",
    metavar="NODE",
    default=None,
    help="The node to grow the tree from. By default the first node in the input is used.",
)
@click.option(
    "-a",
    "--algorithm",
    default="hybrid",
    show_default=True,
    type=AlgorithmParamType(),
    help="Specify the algorithm. Possible values are `map`, `heap`, `hybrid`, and `kruskal`. "
    "The first three are variants of Prim's algorithm, differing in how candidate edges "
    "are kept track of.",
)
@click.option("-v", "--verbose", is_flag=True, help="Increase verboseness.")
@click.option(
    "--color-off",
    is_flag=True,
    help="Turn off color output. For compatibility with environment without color code support.",
)
@click.version_option(__version__)
def main(
    file: IO[str], start: Optional[str], algorithm: Algorithm, verbose: bool, color_off: bool
) -> None:
    """ the CLI entry """

    if start is not None and algorithm is Algorithm.KRUSKAL:
        raise MutuallyExclusiveOptions(
            "Can't specify both `--start` and `--algorithm kruskal` options"
        )

    colorness_context_manager = no_color_context() if color_off else colorama_text()

    with colorness_context_manager:
        logger = Logger(enabled=verbose)

        graph = read_graph(file)
        logger.log(f"Read {graph.order} nodes and {graph.size // 2} edges")

        if start is not None and start not in graph:
            raise click.BadParameter(
                f"{start!r} is not a node in the graph", param_hint="'--start'"
            )

        logger.log(f"Run the {algorithm.value} algorithm")
        tree = spanning_tree(graph, start, algorithm)
        logger.log(f"Spanned {tree.order} of {graph.order} nodes")

        display_tree(tree)


def spanning_tree(
    graph: Graph, start: Optional[str], algorithm: Algorithm
) -> Graph:
    if algorithm is Algorithm.KRUSKAL:
        return kruskal(graph)

    frontier = Frontier(algorithm.value)

    if start is None:
        return prim(graph, frontier)
    else:
        return prim_at(start, graph, frontier)


def display_tree(tree: Graph) -> None:
    """ Display tree edges grouped by their successors, followed by the succinct summary """

    for node, context in tree.contexts():
        for head in context.heads:
            print(f"{head.predecessor} {node} {head.weight}")

    print(bright_yellow(f"Total weight: {tree.total_weight()}"))


if __name__ == "__main__":
    main()  # pylint: disable=no-value-for-parameter
