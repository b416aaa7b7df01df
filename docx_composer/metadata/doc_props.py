"""
Document properties.

Holds the core timestamps written to ``docProps/core.xml`` and the ordered
custom properties written to ``docProps/custom.xml``.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

W3CDTF_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def now_w3cdtf() -> str:
    """Current UTC time as a W3CDTF string (second precision)."""
    return datetime.now(timezone.utc).strftime(W3CDTF_FORMAT)


class DocProps:
    """
    Core and custom document properties.

    ``created`` and ``updated`` stay ``None`` until set; the writer stamps the
    current time for unset values.
    """

    def __init__(self):
        self.created: Optional[str] = None
        self.updated: Optional[str] = None
        self.custom_properties: List[Tuple[str, str]] = []

    def set_created(self, created: str) -> "DocProps":
        self.created = created
        return self

    def set_updated(self, updated: str) -> "DocProps":
        self.updated = updated
        return self

    def add_custom_property(self, name: str, value: str) -> "DocProps":
        """Add or replace a custom property; first insertion fixes its position."""
        if not name:
            raise ValueError("Custom property name must be a non-empty string")
        for index, (existing, _) in enumerate(self.custom_properties):
            if existing == name:
                self.custom_properties[index] = (name, str(value))
                return self
        self.custom_properties.append((name, str(value)))
        return self

    def get_custom_property(self, name: str) -> Optional[str]:
        for existing, value in self.custom_properties:
            if existing == name:
                return value
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "created": self.created,
            "updated": self.updated,
            "custom_properties": [[name, value] for name, value in self.custom_properties],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocProps):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = object.__hash__
