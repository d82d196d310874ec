"""Image adapters - Transient local image handles."""

from .memory import InMemoryImageStore

__all__ = ["InMemoryImageStore"]
