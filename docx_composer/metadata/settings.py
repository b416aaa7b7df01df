"""Document settings written to ``word/settings.xml``."""

from typing import Any, Dict, List, Optional, Tuple

DEFAULT_TAB_STOP = 709


class Settings:
    """Document id, default tab stop and document variables."""

    def __init__(self):
        self.doc_id: Optional[str] = None
        self.default_tab_stop: int = DEFAULT_TAB_STOP
        self.doc_vars: List[Tuple[str, str]] = []

    def set_doc_id(self, doc_id: str) -> "Settings":
        """Set the document GUID; surrounding braces are dropped."""
        self.doc_id = doc_id.strip().strip("{}")
        return self

    def set_default_tab_stop(self, tab_stop: int) -> "Settings":
        self.default_tab_stop = int(tab_stop)
        return self

    def add_doc_var(self, name: str, value: str) -> "Settings":
        self.doc_vars.append((name, str(value)))
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "doc_id": self.doc_id,
            "default_tab_stop": self.default_tab_stop,
            "doc_vars": [[name, value] for name, value in self.doc_vars],
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Settings):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = object.__hash__
