"""Export of Document models to .docx packages and JSON."""

from .docx_exporter import DOCXExporter
from .json_exporter import JSONExporter

__all__ = ["DOCXExporter", "JSONExporter"]
