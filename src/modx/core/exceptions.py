from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping


class ModxError(Exception):
    """Base exception for the modx engine."""

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


class TemplateNotFoundError(ModxError, FileNotFoundError):
    """Raised when a template, layout or component cannot be resolved.

    The message lists every directory that was searched so a misconfigured
    search path is obvious from the error alone.
    """

    def __init__(
        self,
        name: str,
        kind: str,
        searched: Iterable[Any],
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        dirs = [str(d) for d in searched]
        listing = "\n".join(f"- {d}" for d in dirs) if dirs else "- (no template directories configured)"
        message = f"{kind.title()} '{name}' not found. Searched:\n{listing}"
        ctx = dict(context or {})
        ctx.update({"name": name, "kind": kind, "searched": dirs})
        ModxError.__init__(self, message, context=ctx)
        FileNotFoundError.__init__(self, message)
        self.name = name
        self.kind = kind
        self.searched = dirs


class TemplateDirectoryError(ModxError, FileNotFoundError):
    """Raised when a configured template directory is missing."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModxError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class ExpansionLimitError(ModxError, RuntimeError):
    """Raised when directive expansion does not reach a fixed point in time."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModxError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class EmptyOutputError(ModxError, RuntimeError):
    """Raised when a render produced no output at all."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModxError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class RenderExecutionError(ModxError, RuntimeError):
    """Raised when compiled template text fails while being executed."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModxError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


class ConfigError(ModxError, ValueError):
    """Raised for invalid configuration or malformed MODX_* overrides."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        ModxError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "ModxError",
    "TemplateNotFoundError",
    "TemplateDirectoryError",
    "ExpansionLimitError",
    "EmptyOutputError",
    "RenderExecutionError",
    "ConfigError",
]
