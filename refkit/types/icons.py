"""Icon resolution for candidate types.

Order: metadata custom icon, metadata icon name, icon of metadata icon_type,
default icon for the type. The first non-empty result wins.
"""

from typing import Any, Mapping

from refkit.types.metadata import SerializableClass, metadata_for


class IconResolver:
    """Resolves a display icon for a class. Icons are opaque values (glyphs, paths)."""

    def __init__(
        self,
        named_icons: Mapping[str, Any] | None = None,
        type_icons: Mapping[str, Any] | None = None,
        fallback: Any = None,
    ) -> None:
        self._named = dict(named_icons or {})
        # keyed by "module.QualName"
        self._types = dict(type_icons or {})
        self._fallback = fallback

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> "IconResolver":
        cfg = settings.get("icons", {})
        return cls(
            named_icons=cfg.get("named"),
            type_icons=cfg.get("types"),
            fallback=cfg.get("fallback") or None,
        )

    def named_icon(self, name: str | None) -> Any:
        if not name:
            return None
        return self._named.get(name) or None

    def type_icon(self, type_: type | None) -> Any:
        """Icon of the nearest class in the MRO that has one."""
        if type_ is None:
            return None
        for klass in type_.__mro__:
            icon = self._types.get(f"{klass.__module__}.{klass.__qualname__}")
            if icon:
                return icon
        return None

    def default_icon(self, type_: type | None) -> Any:
        if type_ is None:
            return None
        return self.type_icon(type_) or self._fallback

    def icon_for(self, type_: type | None, metadata: SerializableClass | None = None) -> Any:
        if type_ is None:
            return None
        if metadata is None:
            metadata = metadata_for(type_)

        if metadata is not None and metadata.custom_icon:
            return metadata.custom_icon

        if metadata is not None:
            icon = self.named_icon(metadata.icon_name)
            if icon:
                return icon

        if metadata is not None and metadata.icon_type is not None:
            icon = self.type_icon(metadata.icon_type)
            if icon:
                return icon

        return self.default_icon(type_)
