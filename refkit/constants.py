"""Exit codes for the picker command."""

PICK_SUCCESS = 0  # Type chosen, stored name printed to stdout
PICK_CANCELLED = 1  # User cancelled (Ctrl+C or escape)
PICK_ERROR = 2  # Bad arguments, catalog or base type
