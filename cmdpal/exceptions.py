"""Custom exception hierarchy for cmdpal.

Exception Hierarchy:
    CmdpalError (base)
    ├── ValidationError - bad catalog entry or duplicate id
    ├── CatalogLoadError - unreadable or malformed catalog file
    ├── EnvironmentUnavailableError - host snapshot could not be taken
    └── ExecutionError - an action handler failed
        └── UnknownActionError - no handler registered for an action key

"Not found" conditions (unknown id, unknown category) are never exceptions;
lookups return ``None`` or an empty list instead.

Usage:
    from cmdpal.exceptions import ValidationError

    try:
        registry.register(entry)
    except ValidationError as e:
        logger.error(f"Skipping entry: {e}")
"""

from typing import Any, Optional


class CmdpalError(Exception):
    """Base exception for all cmdpal errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., ids, paths)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Catalog Errors
# =============================================================================


class ValidationError(CmdpalError):
    """A catalog entry was rejected by the registry."""

    def __init__(
        self,
        message: str = "Invalid catalog entry",
        *,
        entry_id: Optional[str] = None,
        field: Optional[str] = None,
        **context: Any,
    ) -> None:
        if entry_id is not None:
            context["entry_id"] = entry_id
        if field is not None:
            context["field"] = field
        super().__init__(message, **context)


class CatalogLoadError(CmdpalError):
    """A catalog file could not be read or parsed."""

    def __init__(
        self,
        message: str = "Failed to load catalog",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path is not None:
            context["path"] = path
        super().__init__(message, **context)


# =============================================================================
# Host Errors
# =============================================================================


class EnvironmentUnavailableError(CmdpalError):
    """The host could not produce an environment snapshot - retryable."""

    def __init__(self, message: str = "Environment snapshot unavailable", **context: Any) -> None:
        super().__init__(message, retryable=True, **context)


class ExecutionError(CmdpalError):
    """An action handler reported failure."""

    def __init__(
        self,
        message: str = "Action execution failed",
        *,
        action_key: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.action_key = action_key
        if action_key is not None:
            context["action_key"] = action_key
        super().__init__(message, **context)


class UnknownActionError(ExecutionError):
    """No handler is registered for the requested action key."""

    def __init__(self, action_key: str, **context: Any) -> None:
        super().__init__(f"Unknown action: {action_key}", action_key=action_key, **context)
