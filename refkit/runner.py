"""Entry point for the terminal picker: settings, logging, catalog, then prompt."""

import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from refkit.constants import PICK_CANCELLED, PICK_ERROR, PICK_SUCCESS
from refkit.logging_config import setup_logging
from refkit.picker.popup import TypePicker
from refkit.picker.terminal import run_picker
from refkit.settings import get_setting, load_settings
from refkit.types.catalog import TypeCatalog, import_entrypoint, load_catalog
from refkit.types.icons import IconResolver

logger = logging.getLogger(__name__)

_USAGE = "usage: python -m refkit module:BaseType [filter]"


def _load_base(entrypoint: str) -> type:
    if ":" not in entrypoint:
        raise ValueError(f"expected module:QualName, got {entrypoint!r}")
    base = import_entrypoint(entrypoint)
    if not isinstance(base, type):
        raise ValueError(f"{entrypoint} is not a class")
    return base


def main(argv: list[str] | None = None, project_root: Path | None = None) -> int:
    """Pick a concrete subclass of the given base. Prints its stored type name."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(_USAGE)
        return PICK_ERROR

    root = project_root or Path.cwd()
    settings = load_settings(root / "config")
    setup_logging(root, settings)

    catalog_path = root / get_setting(settings, "catalog.path", "config/catalog.yaml")
    try:
        catalog = load_catalog(catalog_path)
    except (OSError, ValueError, ValidationError) as e:
        logger.exception("Cannot load catalog %s: %s", catalog_path, e)
        print(f"Cannot load catalog: {e}")
        return PICK_ERROR
    try:
        base = _load_base(args[0])
    except Exception as e:
        logger.exception("Cannot load base type %s: %s", args[0], e)
        print(f"Cannot load base type {args[0]}: {e}")
        return PICK_ERROR

    picker = TypePicker(
        catalog.descriptors_for(base),
        None,
        icons=IconResolver.from_settings(settings),
    )
    if len(args) > 1:
        picker.apply_filter(args[1])

    try:
        chosen = run_picker(
            picker,
            prompt=get_setting(settings, "picker.search_prompt", "Search"),
            show_icons=bool(get_setting(settings, "picker.show_icons", True)),
        )
    except KeyboardInterrupt:
        chosen = None

    if chosen is None:
        print("\nCancelled.")
        return PICK_CANCELLED

    print(TypeCatalog.stored_type_name(chosen))
    return PICK_SUCCESS
