"""Custom exceptions for docx_composer."""

from typing import Optional


class DocxComposerError(Exception):
    """Base exception for docx_composer errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ValidationError(DocxComposerError):
    """Exception raised at build time when the model breaks a cross-reference invariant."""

    pass


class PackageError(DocxComposerError):
    """Exception raised when a package cannot be opened or its main document is unusable."""

    pass
