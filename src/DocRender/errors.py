"""DocRender exception hierarchy.

Parsing never raises on text input; these cover the edges around it.
"""

from __future__ import annotations


class DocRenderError(Exception):
    """Base exception for all DocRender errors."""


class ConfigError(DocRenderError):
    """Raised for an invalid configuration file."""


class RenderError(DocRenderError):
    """Raised when a renderer meets a node it has no case for."""


class AnalysisError(DocRenderError):
    """Raised when the emotion analysis service call fails."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
