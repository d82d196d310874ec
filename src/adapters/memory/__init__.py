"""In-memory adapters - Process-local implementations of domain ports."""

from .directory import InMemoryUserDirectory

__all__ = ["InMemoryUserDirectory"]
