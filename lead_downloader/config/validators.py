"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for potential issues and return warnings.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    upstream = config_dict.get("upstream", {})
    if isinstance(upstream, dict):
        endpoint = upstream.get("endpoint")
        if isinstance(endpoint, str) and endpoint.strip().startswith("http://"):
            warning_messages.append(
                "upstream.endpoint uses plain http; the API key will be sent unencrypted"
            )

        timeout = upstream.get("http_request_timeout")
        if isinstance(timeout, int) and 5 <= timeout < 10:
            warning_messages.append(
                f"Short http_request_timeout ({timeout}s) may abort large page requests"
            )

    logging_section = config_dict.get("logging", {})
    if isinstance(logging_section, dict):
        level = logging_section.get("level")
        if isinstance(level, str) and level.upper() == "DEBUG":
            warning_messages.append(
                "DEBUG logging records every upstream request; avoid it in production"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
