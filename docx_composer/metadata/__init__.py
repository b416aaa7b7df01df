"""Document metadata: properties, settings and package extensions."""

from .doc_props import DocProps
from .extensions import CustomItem, WebExtension
from .settings import Settings

__all__ = ["CustomItem", "DocProps", "Settings", "WebExtension"]
