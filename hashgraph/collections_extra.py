from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSet
from dataclasses import dataclass, field
from heapq import heappop, heappush
from itertools import count, repeat
from operator import attrgetter
from typing import Generic, Optional, TypeVar

import attrs

from .typing_extra import Comparable
from .utils import maxmin


__all__ = ["OrderedSet", "UnionFind", "PriorityQueue"]


T = TypeVar("T")


class OrderedSet(MutableSet[T]):
    def __init__(self, iterable: Iterable[T] = tuple()) -> None:
        self._data = dict.fromkeys(iterable)  # type: dict[T, None]

    __slots__ = "_data"

    def __contains__(self, elem: T) -> bool:
        return elem in self._data

    def __iter__(self) -> Iterator[T]:
        yield from self._data

    def __len__(self) -> int:
        return len(self._data)

    def __isub__(self, other: Iterable[T]) -> OrderedSet[T]:
        for elem in other:
            self._data.pop(elem, None)

        return self

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._data)!r})"

    def copy(self) -> OrderedSet[T]:
        """ Shallow copy, not deep copy """

        new: OrderedSet[T] = OrderedSet()
        new._data = self._data.copy()

        return new

    def add(self, elem: T) -> None:
        self._data[elem] = None

    def discard(self, elem: T) -> None:
        self._data.pop(elem, None)

    def update(self, iterable: Iterable[T]) -> None:
        self._data.update(zip(iterable, repeat(None)))


@attrs.define
class UnionFindNode(Generic[T]):
    item: T
    parent: Optional[UnionFindNode[T]]
    rank: int = 0


class UnionFind(Generic[T]):
    def __init__(self, elements: Iterable[T]) -> None:
        self._table = {}  # type: dict[T, UnionFindNode[T]]

        for elem in elements:
            node = UnionFindNode(elem, parent=None)
            node.parent = node
            self._table[elem] = node

    __slots__ = "_table"

    def find(self, element: T) -> T:
        if element not in self._table:
            raise ValueError(f"Can't find {element}")

        return self._find(self._table[element]).item

    def _find(self, node: UnionFindNode[T]) -> UnionFindNode[T]:
        # Iterative, with path compression, so that long chains don't hit the recursion limit
        root = node
        while root.parent is not root:
            root = root.parent  # type: ignore

        while node is not root:
            node.parent, node = root, node.parent  # type: ignore

        return root

    def union(self, x: T, y: T) -> None:
        if x not in self._table:
            raise ValueError(f"Can't find {x}")
        if y not in self._table:
            raise ValueError(f"Can't find {y}")

        node1, node2 = self._table[x], self._table[y]
        root1, root2 = self._find(node1), self._find(node2)

        if root1 is root2:
            return
        elif root1.rank != root2.rank:
            root1, root2 = maxmin(root1, root2, key=attrgetter("rank"))
            root2.parent = root1
        else:
            root2.parent = root1
            root1.rank += 1

    def connected(self, x: T, y: T) -> bool:
        return self.find(x) == self.find(y)


@dataclass(order=True)
class PrioritizedItem(Generic[T]):
    priority: Comparable
    sequence: int
    item: T = field(compare=False)


class PriorityQueue(Generic[T]):
    """
    A min-priority queue.

    Items of equal priority are popped in the order they are pushed, so the output is
    deterministic for the same push order.
    """

    def __init__(self) -> None:
        self._data = []  # type: list[PrioritizedItem[T]]
        self._counter = count()

    __slots__ = ("_data", "_counter")

    def __bool__(self) -> bool:
        return bool(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def push(self, elem: T, priority: Comparable) -> None:
        pitem = PrioritizedItem(priority, next(self._counter), elem)
        heappush(self._data, pitem)

    def pop(self) -> T:
        if not self._data:
            raise IndexError("Pop from empty priority queue")

        return heappop(self._data).item
