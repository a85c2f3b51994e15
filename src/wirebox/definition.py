from __future__ import annotations

import copy
import functools
import logging
from typing import TYPE_CHECKING, Any

from wirebox.exceptions import (
    WireboxCircularDependencyError,
    WireboxDefinitionNotCompiledError,
    WireboxInvalidDefinitionError,
)
from wirebox.labels import invoke_label
from wirebox.types import DefinitionKind, LabelCallback, Resolver, TagSpec

if TYPE_CHECKING:
    from typing_extensions import Self

    from wirebox.container import Container

logger = logging.getLogger(__name__)

_CONSTANT_TYPES: tuple[type[Any], ...] = (type(None), bool, int, float, complex, str, bytes)


class _Uncomputed:
    def __repr__(self) -> str:
        return "<uncomputed>"


_UNCOMPUTED: Any = _Uncomputed()


class Definition:
    """Wrap one service's raw specification and compile it into a resolver.

    The raw value is one of:

    - a callable, treated as a factory and called with the definition
      ``context`` followed by ``args``;
    - another ``Definition``, whose context, arguments and resolver are adopted;
    - an immutable scalar, returned as is;
    - any other object, returned by reference when shared and copied otherwise.

    A definition is owned by exactly one container and compiled exactly once,
    when it is registered. Compilation binds factory arguments (resolving
    nested definitions among them once) and installs ``resolve``, which runs
    the raw resolver, then every attached label callback in attachment order.
    Shared definitions keep the first result for the container's lifetime, so
    their labels run once.
    """

    def __init__(
        self,
        raw: Any,
        container: Container,
        context: Any = None,
        *args: Any,
    ) -> None:
        self.container = container
        self.shared = False
        self.context = container if context is None else context
        self.args: tuple[Any, ...] = args
        self._labels: dict[str, None] = {}
        self._id: str | None = None
        self._resolver: Resolver | None = None
        self._memoized = False
        self._value: Any = _UNCOMPUTED
        self._resolving = False
        self.kind = self._classify(raw)
        self.raw = self.configure(raw)

    @property
    def id(self) -> str:
        if self._id is None:
            msg = "Service definition is not compiled. No identifier specified."
            raise WireboxDefinitionNotCompiledError(msg)
        return self._id

    @property
    def resolve(self) -> Resolver:
        """Return the compiled zero-argument resolver."""
        if self._resolver is None:
            msg = "Service definition is not compiled. Register it with set_raw() first."
            raise WireboxDefinitionNotCompiledError(msg)
        return self._resolver

    @property
    def is_compiled(self) -> bool:
        return self._resolver is not None

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(self._labels)

    @staticmethod
    def _classify(raw: Any) -> DefinitionKind:
        if isinstance(raw, Definition):
            return DefinitionKind.NESTED
        if callable(raw):
            return DefinitionKind.FACTORY
        if isinstance(raw, _CONSTANT_TYPES):
            return DefinitionKind.CONSTANT
        return DefinitionKind.OBJECT

    def configure(self, raw: Any) -> Any:
        """Unwrap a nested definition one level, adopting its context and arguments."""
        if isinstance(raw, Definition):
            self.context = raw.context
            self.args = raw.args
            return raw.resolve
        return raw

    def arguments(self) -> tuple[Any, ...]:
        """Resolve nested definitions among ``args`` now; pass other values through."""
        return tuple(arg.resolve() if isinstance(arg, Definition) else arg for arg in self.args)

    def label(self, name: str, callback: LabelCallback | None = None) -> Self:
        """Attach a label, optionally defining its callback on the container at the same time.

        Attaching the same name twice keeps a single entry at its first position.
        """
        self._labels.setdefault(name, None)
        if callback is not None:
            self.container.define_label(name, callback)
        return self

    def tags(self, *tags: TagSpec) -> Self:
        self.container.tag(self.id, *tags)
        return self

    def compile(self, service_id: str) -> None:
        """Assign the service identifier and install the resolver.

        Raises:
            WireboxInvalidDefinitionError: If the definition is already compiled
                or ``service_id`` is empty.
            WireboxDefinitionNotCompiledError: If a nested definition among the
                arguments was never compiled.

        """
        if self._id is not None:
            msg = f"Service definition is already compiled as '{self._id}'."
            raise WireboxInvalidDefinitionError(msg)
        if not isinstance(service_id, str) or not service_id:
            msg = f"Service identifier must be a non-empty string, got {service_id!r}."
            raise WireboxInvalidDefinitionError(msg)

        inner = self._create_resolver()

        self._id = service_id
        self._memoized = self.shared
        self._resolver = functools.partial(self._resolve_compiled, inner)
        logger.debug(
            "Compiled service %r: kind=%s shared=%s",
            service_id,
            self.kind.value,
            self.shared,
        )

    def _create_resolver(self) -> Resolver:
        raw = self.raw

        if self.kind is DefinitionKind.FACTORY:
            return functools.partial(raw, self.context, *self.arguments())

        if self.kind is DefinitionKind.NESTED:
            return raw

        if self.kind is DefinitionKind.OBJECT and not self.shared:
            clone = copy.deepcopy if self.container.deep_clone else copy.copy
            return functools.partial(clone, raw)

        return lambda: raw

    def _resolve_compiled(self, inner: Resolver) -> Any:
        if self._memoized and self._value is not _UNCOMPUTED:
            return self._value

        if self._resolving:
            raise WireboxCircularDependencyError(self.id)

        self._resolving = True
        try:
            instance = inner()
            self._apply_labels(instance)
        finally:
            self._resolving = False

        if self._memoized:
            logger.debug("Memoized shared service %r", self._id)
            self._value = instance
        return instance

    def _apply_labels(self, instance: Any) -> None:
        for name in tuple(self._labels):
            callback = self.container.get_label(name)
            invoke_label(callback, instance, self.container, self.id)

    def __repr__(self) -> str:
        service_id = self._id if self._id is not None else "<uncompiled>"
        return (
            f"Definition(id={service_id!r}, kind={self.kind.value}, shared={self.shared}, "
            f"labels={list(self._labels)!r})"
        )
