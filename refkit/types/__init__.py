"""Candidate types: descriptors, catalog, icons and the type tree."""

from refkit.types.catalog import TypeCatalog, load_catalog
from refkit.types.descriptor import TypeDescriptor, nicified_type_name, nicify
from refkit.types.icons import IconResolver
from refkit.types.metadata import SerializableClass, metadata_for, serializable_class
from refkit.types.tree import TreeNode, build_tree, filter_types

__all__ = [
    "IconResolver",
    "SerializableClass",
    "TreeNode",
    "TypeCatalog",
    "TypeDescriptor",
    "build_tree",
    "filter_types",
    "load_catalog",
    "metadata_for",
    "nicified_type_name",
    "nicify",
    "serializable_class",
]
