from __future__ import annotations

import inspect
import logging
from typing import Any

from wirebox.exceptions import WireboxLabelNotDefinedError
from wirebox.types import LabelCallback

logger = logging.getLogger(__name__)

_VARIADIC_KINDS = {inspect.Parameter.VAR_POSITIONAL}
_POSITIONAL_KINDS = {
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
}


class LabelRegistry:
    """Hold one post-construction callback per label name."""

    def __init__(self) -> None:
        self._callbacks: dict[str, LabelCallback] = {}

    def define(self, name: str, callback: LabelCallback) -> None:
        if name in self._callbacks:
            logger.debug("Redefining label %r", name)
        self._callbacks[name] = callback

    def get(self, name: str) -> LabelCallback:
        try:
            return self._callbacks[name]
        except KeyError:
            raise WireboxLabelNotDefinedError(name) from None


def _positional_capacity(callback: LabelCallback) -> int | None:
    """Return how many positional arguments ``callback`` accepts, ``None`` for unlimited."""
    try:
        parameters = inspect.signature(callback).parameters.values()
    except (TypeError, ValueError):
        # builtins without a signature get every argument
        return None

    capacity = 0
    for parameter in parameters:
        if parameter.kind in _VARIADIC_KINDS:
            return None
        if parameter.kind in _POSITIONAL_KINDS:
            capacity += 1
    return capacity


def invoke_label(callback: LabelCallback, *arguments: Any) -> Any:
    """Call a label callback with the leading ``arguments`` its signature accepts.

    Label callbacks receive ``(instance, container, service_id)``; a callback
    declaring fewer positional parameters gets only the leading ones.
    """
    capacity = _positional_capacity(callback)
    if capacity is not None:
        arguments = arguments[:capacity]
    return callback(*arguments)
