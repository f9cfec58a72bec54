"""Type picker: UI-agnostic popup state plus a questionary terminal renderer."""

from refkit.picker.popup import PickerRow, TypePicker

__all__ = ["PickerRow", "TypePicker"]
