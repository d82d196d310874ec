"""dummyjson adapter - Remote demo API implementation of UserDirectory."""

from .client import DummyJsonUserDirectory, build_http_client

__all__ = ["DummyJsonUserDirectory", "build_http_client"]
