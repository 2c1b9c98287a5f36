"""Command output: human notifications or machine-readable JSON.

Results go to stdout; errors go to stderr. In JSON mode an error is the
payload of :meth:`InheritProfileError.to_json_error` plus an ``error`` code.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from inherit_profile.core.exceptions import InheritProfileError


def _error_payload(error: Exception, message: str, error_code: str) -> Dict[str, Any]:
    if isinstance(error, InheritProfileError):
        payload = error.to_json_error()
        payload["message"] = message
    else:
        payload = {"message": message, "code": type(error).__name__, "context": {}}
    payload["error"] = error_code
    return payload


class OutputFormatter:
    """Render a command's outcome as a notification line or as JSON."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, data: Any, *, stream: Any = None) -> None:
        print(json.dumps(data, indent=self.indent, default=str, ensure_ascii=False), file=stream or sys.stdout)

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
        quiet: bool = False,
    ) -> None:
        """Report a finished run.

        ``quiet`` hides the notification line (``showMessages: false``); the
        JSON payload is always written.
        """
        if self.json_mode:
            self._dump({"status": status, **data})
        elif not quiet:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report a failed run on stderr."""
        msg = message or str(error)
        if self.json_mode:
            self._dump(_error_payload(error, msg, error_code), stream=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        self._dump(data)

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = ["OutputFormatter"]
