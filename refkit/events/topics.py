"""Event names broadcast by the picker. Subscribers are optional."""


class PickerTopics:
    """Topics published by TypePicker when it has a bus attached."""

    # Filter text changed and the tree was rebuilt
    FILTER_CHANGED = "picker.filter_changed"

    # A leaf was chosen; the picker closes right after
    TYPE_SELECTED = "picker.type_selected"


# Broadcast argument contracts (documentation)
FILTER_CHANGED_ARGS = ("filter: str", "match_count: int")
TYPE_SELECTED_ARGS = ("type: type", "descriptor: TypeDescriptor")
