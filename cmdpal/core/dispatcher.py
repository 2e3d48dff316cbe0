"""
Action dispatch: a lookup table from action key to handler.

Hosts register one handler per action key at startup. ``execute`` is the
single capability the palette controller needs from the host.
"""

import logging
from collections.abc import Callable, Iterable

from cmdpal.exceptions import ExecutionError, UnknownActionError, ValidationError

logger = logging.getLogger(__name__)

ActionHandler = Callable[[], object]


class ActionDispatcher:
    """Maps action keys to handlers and runs them."""

    def __init__(self) -> None:
        self._handlers: dict[str, ActionHandler] = {}

    def register(self, action_key: str, handler: ActionHandler) -> None:
        """Register a handler. Re-registering a key is an error."""
        if not action_key:
            raise ValidationError("Action key must not be empty", field="action_key")
        if not callable(handler):
            raise ValidationError(f"Handler for {action_key} must be callable", field="handler")
        if action_key in self._handlers:
            raise ValidationError(f"Duplicate action key: {action_key}", field="action_key")
        self._handlers[action_key] = handler

    def bulk_register(self, handlers: dict[str, ActionHandler]) -> None:
        for action_key, handler in handlers.items():
            self.register(action_key, handler)

    def execute(self, action_key: str) -> object:
        """Run the handler for ``action_key``.

        Raises:
            UnknownActionError: No handler is registered for the key.
            ExecutionError: The handler raised; the original error is chained.
        """
        handler = self._handlers.get(action_key)
        if handler is None:
            raise UnknownActionError(action_key)

        logger.debug(f"Executing action: {action_key}")
        try:
            return handler()
        except ExecutionError:
            raise
        except Exception as e:
            raise ExecutionError(str(e) or type(e).__name__, action_key=action_key) from e

    def missing(self, action_keys: Iterable[str]) -> list[str]:
        """Action keys from ``action_keys`` that have no handler."""
        return [key for key in action_keys if key not in self._handlers]

    def __contains__(self, action_key: object) -> bool:
        return action_key in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
