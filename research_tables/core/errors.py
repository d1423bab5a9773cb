"""
Error definitions for table rendering.

- FormatError: the dataset cannot be turned into markup. Always propagates.
- ExternalToolError: the rasterizer is missing or failed. Recovered from at
  the image rendering boundary.
"""

from typing import Any


class TableRenderError(Exception):
    """Base class for table rendering errors."""

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} ({ctx_str})" if ctx_str else self.message

    def to_dict(self) -> dict[str, Any]:
        """For structured log fields."""
        return {"error": self.message, **self.context}


class FormatError(TableRenderError, ValueError):
    """Raised when a dataset cannot be serialized to markup."""


class ExternalToolError(TableRenderError):
    """Raised when the external rasterizer is unavailable or fails."""
