"""CLI command groups for depmap-cli."""

__all__ = [
    "locator",
    "modules",
]
