"""Context propagation for structured logging.

This module provides utilities for maintaining contextual metadata that is
automatically injected into all log records within a scope. Context lives in
a ContextVar, so each web request (threadpool worker or task) sees only its
own fields.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator

# Context variable holding the fields bound for the current call chain
_log_context: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Get the current logging context.

    Returns:
        Copy of the fields bound in the current context; mutating it does not
        change the context

    Example:
        >>> with log_context(request_id="abc123"):
        ...     get_log_context()
        {'request_id': 'abc123'}
    """
    return dict(_log_context.get())


def push_log_context(**fields: Any) -> Token:
    """Push new context fields onto the logging context.

    This merges new fields with existing context; a field already bound is
    overridden until the matching pop_log_context() call.

    Args:
        **fields: Key-value pairs to add to the logging context

    Returns:
        Token to pass to pop_log_context() to restore the previous state

    Example:
        >>> token = push_log_context(request_id="abc123", path="/search")
        >>> # ... every log record now carries request_id and path ...
        >>> pop_log_context(token)
    """
    return _log_context.set({**_log_context.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the logging context to a previous state.

    Args:
        token: Token returned from push_log_context()

    Example:
        >>> token = push_log_context(retrieval_id="r-1")
        >>> # ... do work ...
        >>> pop_log_context(token)
    """
    _log_context.reset(token)


def clear_log_context() -> None:
    """Clear all logging context fields.

    This is primarily useful for testing.
    """
    _log_context.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind context fields for the duration of a block.

    Pushes the fields on entry and restores the previous context on exit,
    even if the block raises.

    Args:
        **fields: Key-value pairs to add to the logging context

    Yields:
        Copy of the context in effect inside the block

    Example:
        >>> with log_context(request_id="abc123"):
        ...     logger.info("Handling search")  # record carries request_id
        ... # context restored on exit
    """
    token = push_log_context(**fields)
    try:
        yield get_log_context()
    finally:
        pop_log_context(token)
