"""
Telemetry and error-handling wrapper for advisor actions.

Each action runs inside ``call_with_telemetry``: its properties and outcome
are reported through logging, and errors are logged instead of reaching
the host.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .prompts import UserCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ActionContext:
    """
    Mutable context handed to a telemetry-wrapped action.

    Attributes:
        name: Event name
        properties: String properties attached to the event
        measurements: Numeric measurements attached to the event
        suppress_error_display: Log errors at debug level instead of error level
    """
    name: str
    properties: dict[str, str] = field(default_factory=dict)
    measurements: dict[str, float] = field(default_factory=dict)
    suppress_error_display: bool = False


def call_with_telemetry(
    name: str,
    fn: Callable[[ActionContext], T],
    context: ActionContext | None = None,
) -> T | None:
    """
    Run an action, reporting its result and swallowing its errors.

    Args:
        name: Event name
        fn: Action receiving the ActionContext
        context: Pre-built context (a new one is created otherwise)

    Returns:
        The action's return value, or None if it failed or was cancelled
    """
    context = context or ActionContext(name=name)
    context.properties.setdefault("result", "Succeeded")
    start = time.monotonic()
    result: T | None = None

    try:
        result = fn(context)
    except UserCancelledError:
        context.properties["result"] = "Canceled"
    except Exception as e:
        context.properties["result"] = "Failed"
        context.properties["error"] = type(e).__name__
        context.properties["errorMessage"] = str(e)
        if context.suppress_error_display:
            logger.debug("%s failed: %s", name, e, exc_info=True)
        else:
            logger.exception("%s failed: %s", name, e)
    finally:
        context.measurements["duration"] = round(time.monotonic() - start, 3)
        logger.debug(
            "telemetry %s properties=%s measurements=%s",
            name, context.properties, context.measurements,
            extra={"telemetry": {
                "event": name,
                "properties": dict(context.properties),
                "measurements": dict(context.measurements),
            }},
        )

    return result


def report_properties(context: ActionContext, **properties: Any) -> None:
    """Attach string properties to a context."""
    for key, value in properties.items():
        context.properties[key] = str(value)
