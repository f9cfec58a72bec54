"""Type catalog: explicit registry of candidate types for managed references.

Modules register their concrete types at import time (``@catalog.register``)
or a YAML catalog lists them by entrypoint. Queries never scan loaded modules.
"""

import dataclasses
import importlib
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from refkit.types.descriptor import TypeDescriptor, is_concrete
from refkit.types.metadata import SerializableClass, metadata_for

logger = logging.getLogger(__name__)


class CatalogEntry(BaseModel):
    """One type in catalog.yaml."""

    entrypoint: str  # module:QualName
    icon_name: str | None = None
    icon_type: str | None = None  # module:QualName
    custom_icon: str | None = None
    enabled: bool = True

    @field_validator("entrypoint", "icon_type")
    @classmethod
    def _check_entrypoint(cls, value: str | None) -> str | None:
        if value is not None and ":" not in value:
            raise ValueError(f"expected module:QualName, got {value!r}")
        return value


class CatalogManifest(BaseModel):
    """Schema for catalog.yaml."""

    types: list[CatalogEntry] = Field(default_factory=list)


def load_catalog_manifest(path: Path) -> CatalogManifest:
    """Read and validate catalog.yaml.

    Raises ValueError for malformed YAML or a non-mapping document and
    ValidationError for entries that do not match the schema.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid catalog YAML: {path}") from e
    if data is None:
        return CatalogManifest()
    if not isinstance(data, dict):
        raise ValueError(f"Catalog must be a YAML object: {path}")
    return CatalogManifest.model_validate(data)


def import_entrypoint(entrypoint: str) -> Any:
    """Resolve ``module:Outer.Inner`` to the object it names."""
    module_name, qualname = entrypoint.split(":", 1)
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


def _full_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class TypeCatalog:
    """Registered candidate types and their catalog-level metadata."""

    def __init__(self) -> None:
        self._types: dict[type, SerializableClass | None] = {}

    def register(
        self, cls: type | None = None, *, metadata: SerializableClass | None = None
    ) -> Any:
        """Add a type. Works bare, as ``@catalog.register`` or ``@catalog.register(metadata=...)``."""
        if cls is None:
            return lambda c: self.register(c, metadata=metadata)
        self._types[cls] = metadata
        return cls

    def unregister(self, cls: type) -> None:
        self._types.pop(cls, None)

    def __contains__(self, cls: object) -> bool:
        return cls in self._types

    def __len__(self) -> int:
        return len(self._types)

    def metadata(self, cls: type) -> SerializableClass | None:
        """Catalog metadata for cls, else the class's own decorator metadata."""
        meta = self._types.get(cls)
        return meta if meta is not None else metadata_for(cls)

    def assignable_concrete_types(self, base: type | None) -> list[type]:
        """Registered concrete subclasses of base, ordered by full name."""
        if base is None:
            return []
        result = []
        for cls in self._types:
            try:
                if not issubclass(cls, base):
                    continue
            except TypeError:
                # base is not a class or not a runtime-checkable protocol
                return []
            if is_concrete(cls):
                result.append(cls)
        return sorted(result, key=_full_name)

    def descriptors_for(self, base: type | None) -> list[TypeDescriptor]:
        return [
            dataclasses.replace(TypeDescriptor.from_type(cls), metadata=self.metadata(cls))
            for cls in self.assignable_concrete_types(base)
        ]

    @staticmethod
    def stored_type_name(cls: type) -> str:
        """Name under which a value's type is stored: ``<module> <qualname>``."""
        return f"{cls.__module__} {cls.__qualname__}"

    def find(self, stored_name: str | None) -> type | None:
        """Inverse of stored_type_name over registered types. None if unknown."""
        if not stored_name:
            return None
        module_name, sep, qualname = stored_name.partition(" ")
        if not sep or not module_name or not qualname:
            return None
        for cls in self._types:
            if cls.__module__ == module_name and cls.__qualname__ == qualname:
                return cls
        return None

    def create_instance(self, cls: type | None) -> Any | None:
        """Construct cls with no arguments. None when that fails."""
        if cls is None:
            return None
        try:
            return cls()
        except Exception as e:
            logger.debug("Cannot create instance of %s: %s", _full_name(cls), e)
            return None

    def load(self, path: Path) -> int:
        """Register every enabled entry of a catalog file. Returns how many were added."""
        manifest = load_catalog_manifest(path)
        added = 0
        for entry in manifest.types:
            if not entry.enabled:
                continue
            try:
                cls = import_entrypoint(entry.entrypoint)
                icon_type = import_entrypoint(entry.icon_type) if entry.icon_type else None
            except Exception as e:
                logger.exception("Failed to import catalog entry %s: %s", entry.entrypoint, e)
                continue
            if not isinstance(cls, type):
                logger.warning("Catalog entry %s is not a class, skipped", entry.entrypoint)
                continue
            meta = None
            if entry.icon_name or entry.icon_type or entry.custom_icon:
                meta = SerializableClass(
                    icon_name=entry.icon_name,
                    icon_type=icon_type,
                    custom_icon=entry.custom_icon,
                )
            self.register(cls, metadata=meta)
            added += 1
        logger.info("Loaded %d types from catalog %s", added, path)
        return added


def load_catalog(path: Path, catalog: TypeCatalog | None = None) -> TypeCatalog:
    """Load path into catalog (a new one when omitted) and return it."""
    catalog = catalog if catalog is not None else TypeCatalog()
    catalog.load(path)
    return catalog
