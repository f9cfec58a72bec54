"""Type tree: group candidate types by namespace and enclosing type, filter by name.

Both functions are pure. A filter change produces a new candidate list and a
freshly built tree; nodes are never mutated after build_tree returns.
"""

import itertools
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from refkit.types.descriptor import TypeDescriptor

__all__ = ["TreeNode", "build_tree", "filter_types", "iter_nodes"]


@dataclass
class TreeNode:
    """One row of the type tree. Leaves carry a descriptor, groups carry children."""

    id: int
    label: str
    descriptor: TypeDescriptor | None = None
    children: list["TreeNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return self.descriptor is not None


@dataclass
class _Item:
    label: str
    descriptor: TypeDescriptor | None = None
    children: list["_Item"] = field(default_factory=list)

    def group(self, label: str) -> "_Item":
        for child in self.children:
            if child.descriptor is None and child.label == label:
                return child
        child = _Item(label)
        self.children.append(child)
        return child


def build_tree(types: Iterable[TypeDescriptor | None] | None) -> list[TreeNode]:
    """Build top-level nodes from candidates, in input order.

    Every breadcrumb but the last becomes a grouping node (shared by label
    under the same parent); the type itself becomes a leaf labelled with its
    nicified name. Ids are assigned depth-first, parents before children.
    """
    root = _Item("root")
    for descriptor in types or ():
        if descriptor is None:
            continue
        crumbs = descriptor.breadcrumbs
        if not crumbs:
            continue
        parent = root
        for name in crumbs[:-1]:
            if not name:
                continue
            parent = parent.group(name)
        parent.children.append(_Item(descriptor.nicified_name, descriptor))

    counter = itertools.count()
    return [_freeze(child, counter) for child in root.children]


def _freeze(item: _Item, counter: Iterator[int]) -> TreeNode:
    node = TreeNode(id=next(counter), label=item.label, descriptor=item.descriptor)
    node.children = [_freeze(child, counter) for child in item.children]
    return node


def filter_types(
    types: Sequence[TypeDescriptor | None], text: str | None
) -> Sequence[TypeDescriptor | None]:
    """Keep candidates whose full name contains text, case-insensitively.

    Blank text returns the input list itself.
    """
    if not text or not text.strip():
        return types
    needle = text.lower()
    return [
        t
        for t in types
        if t is not None and t.full_name is not None and needle in t.full_name.lower()
    ]


def iter_nodes(nodes: Iterable[TreeNode], depth: int = 0) -> Iterator[tuple[TreeNode, int]]:
    """Pre-order walk yielding (node, depth)."""
    for node in nodes:
        yield node, depth
        yield from iter_nodes(node.children, depth + 1)
