"""Database models."""

from ohla.models.node_profile import NodeProfile

__all__ = [
    "NodeProfile",
]
