"""Application bootstrap package."""

from .bootstrap import AppContext, create_app  # noqa: F401

__all__ = ["AppContext", "create_app"]
