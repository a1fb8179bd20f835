"""Shared API dependencies."""

from ohla.database import engine
from ohla.services.node_store import NodeProfileStore


def get_store() -> NodeProfileStore:
    """Store bound to the application engine."""
    return NodeProfileStore(engine)
