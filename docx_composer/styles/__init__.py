"""Style resolution."""

from .style_resolver import PropertyResolver

__all__ = ["PropertyResolver"]
