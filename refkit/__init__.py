"""Managed-reference type picker, event bus and singleton registry."""

from refkit.events import EventBus, PickerTopics
from refkit.field import ManagedReferenceField, field_declared_type
from refkit.picker import PickerRow, TypePicker
from refkit.singleton import SimpleSingleton, SingletonRegistry
from refkit.types import (
    IconResolver,
    SerializableClass,
    TreeNode,
    TypeCatalog,
    TypeDescriptor,
    build_tree,
    filter_types,
    load_catalog,
    serializable_class,
)

__all__ = [
    "EventBus",
    "IconResolver",
    "ManagedReferenceField",
    "PickerRow",
    "PickerTopics",
    "SerializableClass",
    "SimpleSingleton",
    "SingletonRegistry",
    "TreeNode",
    "TypeCatalog",
    "TypeDescriptor",
    "TypePicker",
    "build_tree",
    "field_declared_type",
    "filter_types",
    "load_catalog",
    "serializable_class",
]
