"""
JSON exporter for Document models.

Produces the canonical JSON value of a model: the same shape for a document
under construction and for one read back from a package.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..models.document import Document

logger = logging.getLogger(__name__)


class JSONExporter:
    """
    Exports a Document as its canonical JSON value.

    Args:
        document: Document to export
        indent: JSON indentation level for string output
        ensure_ascii: Whether to escape non-ASCII characters in string output
    """

    def __init__(self, document: Document, indent: int = 2, ensure_ascii: bool = False):
        self.document = document
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self) -> Dict[str, Any]:
        return self.document.to_dict()

    def export_to_string(self) -> str:
        return json.dumps(self.export(), indent=self.indent, ensure_ascii=self.ensure_ascii)

    def export_to_file(self, output_path: Union[str, Path]) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.export_to_string(), encoding="utf-8")
        logger.info(f"JSON written to {output_path}")
        return output_path
