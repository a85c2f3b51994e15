from __future__ import annotations

from typing import Any


class WireboxError(Exception):
    """Root of every error raised by a container, its definitions, tags and labels.

    Each subclass carries the offending identifier (``service_id``,
    ``label_name`` or ``tag``) where there is one.
    """


class WireboxServiceNotDefinedError(WireboxError):
    """Signal that a service identifier has no definition in the container.

    Raised by ``Container.get``, ``Container.get_resolver``,
    ``Container.get_definition`` and ``Container.add_label``.

    Typical fix is registering the service with ``set``/``set_shared`` before
    requesting or labeling it.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f"Service '{service_id}' is not defined in container.")


class WireboxInvalidTagError(WireboxError):
    """Signal a tag that is neither a string nor a mapping with a ``name`` key.

    Raised by ``Container.tag`` and the ``tag(...)`` configurator.
    """

    def __init__(self, tag: Any) -> None:
        self.tag = tag
        super().__init__(
            f"Service tags must be strings or mappings with a mandatory 'name' key, got {tag!r}.",
        )


class WireboxInvalidDefinitionError(WireboxError):
    """Signal an invalid raw definition registration.

    Raised by ``Container.set_raw`` when the value is not a ``Definition``,
    when the definition belongs to another container, and by
    ``Definition.compile`` when a definition is compiled a second time.
    """


class WireboxDefinitionNotCompiledError(WireboxError):
    """Signal access to compile-time state of a definition that was never compiled.

    Raised when reading ``Definition.id`` or ``Definition.resolve`` before the
    definition has been registered in a container. Definitions built with
    ``Container.create`` are compiled only when passed to ``set_raw``.
    """


class WireboxLabelNotDefinedError(WireboxError):
    """Signal that a label name has no registered callback.

    Raised by ``Container.get_label`` and, lazily, when resolving a service that
    carries the label. Typical fix is calling ``define_label`` before the first
    resolution of labeled services.
    """

    def __init__(self, label_name: str) -> None:
        self.label_name = label_name
        super().__init__(
            f"Label '{label_name}' callback is not defined but a service is labeled with it.",
        )


class WireboxInvalidSortOptionsError(WireboxError):
    """Signal malformed sort options passed to ``Container.over_tags``.

    Options must carry a non-empty ``field`` and an integer ``order`` of ``1``
    or ``-1``; booleans are rejected. Also raised when the payload values of
    ``field`` cannot be compared with each other. The underlying error is
    chained as ``__cause__``.
    """


class WireboxCircularDependencyError(WireboxError):
    """Signal re-entrant resolution of a service that is already being resolved.

    Raised when a factory, a nested definition or a label callback ends up
    resolving the service currently under construction.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(f"Circular dependency detected while resolving '{service_id}'.")
