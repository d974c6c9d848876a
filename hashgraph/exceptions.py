__all__ = ["HashGraphError", "NodeNotFoundError", "SelfLoopError", "Unreachable"]


class HashGraphError(Exception):
    pass


class NodeNotFoundError(HashGraphError, KeyError):
    """ An exception to signal that a node is unconditionally looked up but absent """

    def __init__(self, node: object) -> None:
        super().__init__(node)
        self.node = node

    def __str__(self) -> str:
        return f"{self.node!r} is not a node in the graph"


class SelfLoopError(HashGraphError, ValueError):
    pass


class Unreachable(HashGraphError, RuntimeError):
    """ An exception to signal that an internally impossible state is reached """
