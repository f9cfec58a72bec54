"""Searchable type picker: filter text in, hierarchical rows out, one choice.

This is the data side of the popup. Renderers read ``rows()`` and call
``apply_filter()`` / ``choose()``; nothing here draws.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from refkit.events.bus import EventBus
from refkit.events.topics import PickerTopics
from refkit.types.descriptor import TypeDescriptor
from refkit.types.icons import IconResolver
from refkit.types.tree import TreeNode, build_tree, filter_types, iter_nodes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickerRow:
    """A visible row. icon is None for groups and for leaves without one."""

    node: TreeNode
    depth: int
    icon: Any = None

    @property
    def label(self) -> str:
        return self.node.label or ""


class TypePicker:
    """Holds candidates, the current filter and the tree built from them."""

    def __init__(
        self,
        types: Iterable[TypeDescriptor | None] | None,
        on_selected: Callable[[type], None] | None,
        icons: IconResolver | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.all_types: list[TypeDescriptor | None] = list(types) if types is not None else []
        self.filtered_types = self.all_types
        self.filter_text = ""
        self.closed = False
        self._on_selected = on_selected
        self._icons = icons
        self._bus = bus
        self.roots: list[TreeNode] = []
        self._by_id: dict[int, TreeNode] = {}
        self._rebuild()

    def _rebuild(self) -> None:
        self.roots = build_tree(self.filtered_types)
        self._by_id = {node.id: node for node, _ in iter_nodes(self.roots)}

    def apply_filter(self, text: str | None) -> None:
        self.filter_text = text or ""
        self.filtered_types = list(filter_types(self.all_types, text))
        self._rebuild()
        if self._bus is not None:
            self._bus.broadcast(
                PickerTopics.FILTER_CHANGED, self, self.filter_text, len(self.filtered_types)
            )

    def node(self, node_id: int) -> TreeNode | None:
        return self._by_id.get(node_id)

    def rows(self) -> list[PickerRow]:
        """Pre-order rows of the current tree with resolved leaf icons."""
        return [
            PickerRow(node=node, depth=depth, icon=self._icon(node))
            for node, depth in iter_nodes(self.roots)
        ]

    def _icon(self, node: TreeNode) -> Any:
        if self._icons is None or node.descriptor is None or node.descriptor.cls is None:
            return None
        return self._icons.icon_for(node.descriptor.cls, node.descriptor.metadata) or None

    def choose(self, node_id: int) -> bool:
        """Select a concrete leaf by id, notify, then close. False otherwise."""
        if self.closed:
            return False
        node = self._by_id.get(node_id)
        if node is None or node.descriptor is None or node.descriptor.cls is None:
            return False
        if not node.descriptor.concrete:
            logger.debug("Picker ignored non-concrete %s", node.descriptor.full_name)
            return False
        cls = node.descriptor.cls
        logger.debug("Picker selected %s", node.descriptor.full_name)
        if self._on_selected is not None:
            self._on_selected(cls)
        if self._bus is not None:
            self._bus.broadcast(PickerTopics.TYPE_SELECTED, self, cls, node.descriptor)
        self.close()
        return True

    def close(self) -> None:
        self.closed = True
