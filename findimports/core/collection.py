# findimports/core/collection.py
"""
A small query layer over tagged node trees.

``Collection.find`` walks every path in the collection in document order and
keeps the descendants with a given tag, optionally narrowed by a nested dict
of field values. ``filter`` narrows by an arbitrary predicate on the path.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

import structlog

from findimports.core.nodes import Node

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NodePath:
    # a node plus the path of the node that owns it.
    node: Node
    parent: Optional["NodePath"] = None
    name: Optional[str] = None

    def walk(self) -> Iterator["NodePath"]:
        # pre-order, iterative so deep trees don't hit the recursion limit.
        stack: List[NodePath] = [self]
        while stack:
            path = stack.pop()
            yield path
            children = [NodePath(child, path, field_name) for field_name, child in path.node.iter_children()]
            stack.extend(reversed(children))


def matches_shape(node: Node, where: Dict[str, Any]) -> bool:
    for key, expected in where.items():
        actual = node.get(key)
        if isinstance(expected, dict):
            if not isinstance(actual, Node) or not matches_shape(actual, expected):
                return False
        elif actual != expected:
            return False
    return True


class Collection:
    """An ordered set of node paths supporting find, filter and size."""

    def __init__(self, paths: Iterable[NodePath] = ()):
        self._paths: List[NodePath] = list(paths)

    @classmethod
    def from_node(cls, node: Node) -> "Collection":
        return cls([NodePath(node)])

    def find(self, node_type: str, where: Optional[Dict[str, Any]] = None) -> "Collection":
        seen = set()
        found: List[NodePath] = []
        for root in self._paths:
            for path in root.walk():
                if path.node.type != node_type or id(path.node) in seen:
                    continue
                if where and not matches_shape(path.node, where):
                    continue
                seen.add(id(path.node))
                found.append(path)
        log.debug("collection_find", node_type=node_type, where=where, count=len(found))
        return Collection(found)

    def filter(self, predicate: Callable[[NodePath], bool]) -> "Collection":
        return Collection(p for p in self._paths if predicate(p))

    def size(self) -> int:
        return len(self._paths)

    def paths(self) -> List[NodePath]:
        return list(self._paths)

    def nodes(self) -> List[Node]:
        return [p.node for p in self._paths]

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[NodePath]:
        return iter(self._paths)

    def __repr__(self) -> str:
        return f"Collection(size={len(self._paths)})"
