"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.state_store import IStateStore

__all__ = [
    "IStateStore",
]
