"""Teleport-aware shortest-time routing over a walkable map plane."""

__all__ = [
    "core",
    "data",
    "graph",
    "routing",
    "api",
    "cli",
]
