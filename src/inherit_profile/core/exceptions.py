from __future__ import annotations

from typing import Any, Dict, Mapping


class InheritProfileError(Exception):
    """Base exception for profile inheritance."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(InheritProfileError, ValueError):
    """Raised when the merged configuration fails schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        InheritProfileError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ProfileNotFoundError(InheritProfileError, LookupError):
    """Raised when a profile name cannot be mapped to a directory."""

    def __init__(
        self,
        message: str = "",
        *,
        profile: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if profile:
            ctx["profile"] = profile
        InheritProfileError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)


class SettingsWriteError(InheritProfileError, OSError):
    """Raised when a profile's settings.json cannot be written back."""

    def __init__(
        self,
        message: str = "",
        *,
        path: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if path:
            ctx["path"] = path
        InheritProfileError.__init__(self, message, context=ctx)
        OSError.__init__(self, message)


__all__ = [
    "InheritProfileError",
    "ConfigError",
    "ProfileNotFoundError",
    "SettingsWriteError",
]
