from .__version__ import __version__
from .exceptions import HashGraphError, NodeNotFoundError, SelfLoopError
from .graph import Context, Edge, Graph, Head, Tail
from .mst import Frontier, kruskal, prim, prim_at, reconstruct_tree


__all__ = [
    "Graph",
    "Context",
    "Edge",
    "Head",
    "Tail",
    "prim",
    "prim_at",
    "kruskal",
    "reconstruct_tree",
    "Frontier",
    "HashGraphError",
    "NodeNotFoundError",
    "SelfLoopError",
    "__version__",
]
