"""JSON output formatter for CLI."""

from __future__ import annotations

import json
from typing import Any

from scriptflow.cli.formatters.base import OutputFormat, OutputFormatter


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.JSON) -> str:  # noqa: ARG002
        """Format data as JSON.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        if hasattr(data, "model_dump"):
            return json.dumps(data.model_dump(mode="json"), default=str, indent=2)
        if hasattr(data, "to_dict"):
            return json.dumps(data.to_dict(), default=str, indent=2)
        if isinstance(data, dict | list | tuple):
            return json.dumps(data, default=str, indent=2)
        return json.dumps({"value": data}, default=str, indent=2)

    def format_success(self, message: str, data: Any = None) -> str:
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = data
        return json.dumps(response, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Structured errors also report their hint.
        """
        error_msg = error.message if hasattr(error, "message") else str(error)
        response: dict[str, Any] = {"success": False, "error": error_msg, "code": code}
        hint = getattr(error, "hint", None)
        if hint:
            response["hint"] = hint
        return json.dumps(response, default=str, indent=2)
