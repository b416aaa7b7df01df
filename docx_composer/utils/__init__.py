"""Utility helpers for docx_composer."""

from .logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
