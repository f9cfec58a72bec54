"""Shared prompt styling for the terminal picker."""

from questionary import Style

STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("separator", "fg:#808080"),
    ]
)
