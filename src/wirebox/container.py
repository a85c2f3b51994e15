from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, TypeVar, overload

from wirebox.definition import Definition
from wirebox.exceptions import WireboxInvalidDefinitionError, WireboxServiceNotDefinedError
from wirebox.labels import LabelRegistry
from wirebox.tags import SortOptions, TagStore, over_pairs
from wirebox.types import (
    Configurator,
    LabelCallback,
    Resolver,
    SortFunction,
    TagPayload,
    TagSpec,
)

if TYPE_CHECKING:
    from typing_extensions import Self

T = TypeVar("T")
SortOptionsLike = SortOptions | Mapping[str, Any] | Sequence[Any]
TagCallback = Callable[[str, TagPayload], Any]

logger = logging.getLogger(__name__)


class Container:
    """Store service definitions and resolve them lazily by identifier.

    Services are registered under string identifiers with ``set`` (a new
    instance per ``get``) or ``set_shared`` (one instance for the container's
    lifetime). The raw value may be a factory callable, a nested
    ``Definition``, or a plain value; mutable values of transient services are
    copied on every ``get``.

    On top of the registry the container keeps two independent stores:
    tags, arbitrary payloads grouping services for later iteration with
    ``over_tags``, and labels, named callbacks invoked right after a labeled
    service is constructed.

    Every registered identifier that does not collide with one of the
    container's own attribute names is also readable as an attribute:
    ``container.mailer`` is ``container.get("mailer")``.
    """

    def __init__(
        self,
        definitions: Mapping[str, Any] | None = None,
        *,
        deep_clone: bool = True,
    ) -> None:
        """Initialize a container, optionally registering transient definitions.

        Args:
            definitions: Mapping of service identifiers to raw specifications,
                registered with ``set`` in mapping order.
            deep_clone: Deep copy mutable values of transient services on each
                ``get``. With ``False`` a shallow copy is made instead.

        """
        self.deep_clone = deep_clone
        self._definitions: dict[str, Definition] = {}
        self._labels = LabelRegistry()
        self._tags = TagStore()
        self._reserved: frozenset[str] = frozenset()
        self._reserved = frozenset(dir(self))

        for service_id, raw in (definitions or {}).items():
            self.set(service_id, raw)

    def __getattr__(self, name: str) -> Any:
        # only reached for names that are not real attributes
        definitions = self.__dict__.get("_definitions")
        if definitions is not None and name in definitions:
            return self.get(name)
        msg = f"{type(self).__name__!r} object has no attribute or service {name!r}"
        raise AttributeError(msg)

    def __setattr__(self, name: str, value: Any) -> None:
        self._check_service_attribute(name)
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        self._check_service_attribute(name)
        super().__delattr__(name)

    def _check_service_attribute(self, name: str) -> None:
        # service attributes are read-only views of get()
        definitions = self.__dict__.get("_definitions")
        reserved = self.__dict__.get("_reserved", frozenset())
        if definitions is not None and name in definitions and name not in reserved:
            msg = f"Service attribute {name!r} is read-only; use set() to replace the service."
            raise AttributeError(msg)

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._definitions

    def has(self, service_id: str) -> bool:
        return service_id in self._definitions

    def service_ids(self) -> list[str]:
        return list(self._definitions)

    def get(self, service_id: str) -> Any:
        """Resolve a service.

        Raises:
            WireboxServiceNotDefinedError: If nothing is registered under ``service_id``.

        """
        return self.get_definition(service_id).resolve()

    def get_resolver(self, service_id: str) -> Resolver:
        """Return the zero-argument resolver of a service without calling it."""
        return self.get_definition(service_id).resolve

    def get_definition(self, service_id: str) -> Definition:
        try:
            return self._definitions[service_id]
        except KeyError:
            raise WireboxServiceNotDefinedError(service_id) from None

    def set(self, service_id: str, definition: Any, *configurators: Configurator) -> Self:
        """Register or replace a transient service.

        Args:
            service_id: Identifier of the service.
            definition: A factory callable (called with the container), a
                ``Definition``, or a value.
            *configurators: Callbacks receiving ``(definition, container)``
                right after registration, for example ``label(...)`` or ``tag(...)``.

        Examples:
            .. code-block:: python

                container.set("settings", {"debug": False})
                container.set("mailer", lambda c: Mailer(c.get("settings")), tag("transport"))

        """
        return self.set_raw(service_id, self.create(definition), *configurators)

    def set_shared(self, service_id: str, definition: Any, *configurators: Configurator) -> Self:
        """Register or replace a service resolved once and reused afterwards."""
        shared = self.create(definition)
        shared.shared = True
        return self.set_raw(service_id, shared, *configurators)

    def set_raw(
        self,
        service_id: str,
        definition: Definition,
        *configurators: Configurator,
    ) -> Self:
        """Compile and register a pre-built definition.

        Raises:
            WireboxInvalidDefinitionError: If ``definition`` is not a ``Definition``
                of this container, or was already registered.

        """
        if not isinstance(definition, Definition):
            msg = f"Raw definition must be an instance of Definition, got {definition!r}."
            raise WireboxInvalidDefinitionError(msg)
        if definition.container is not self:
            msg = "Raw definition belongs to another container."
            raise WireboxInvalidDefinitionError(msg)

        definition.compile(service_id)

        if service_id in self._definitions:
            logger.debug("Replacing service %r", service_id)
        self._definitions[service_id] = definition

        for configurator in configurators:
            configurator(definition, self)

        return self

    def create(self, definition: Any, context: Any = None, *args: Any) -> Definition:
        """Build a definition owned by this container without registering it.

        Args:
            definition: Raw specification, as accepted by ``set``.
            context: First positional argument passed to a factory. Defaults
                to the container.
            *args: Extra factory arguments. ``Definition`` arguments are
                resolved once, when the definition is registered.

        """
        return Definition(definition, self, context, *args)

    def register(self, provider: Callable[[Self], T]) -> T:
        """Call ``provider`` with the container to bundle related registrations."""
        return provider(self)

    def is_reserved(self, service_id: str) -> bool:
        """Check whether ``service_id`` collides with the container's own attributes.

        Reserved identifiers stay resolvable with ``get`` but are not exposed
        as attributes.
        """
        return service_id in self._reserved

    def tag(self, service_id: str, *tags: TagSpec) -> Self:
        """Attach tags to a service.

        A string tag ``"x"`` is stored as ``{"name": "x"}``; mappings must carry
        a ``name`` key and may hold any other fields. Repeated tags are kept as
        separate entries in call order.

        Raises:
            WireboxInvalidTagError: If a tag is neither a string nor a mapping with ``name``.

        """
        self._tags.add(service_id, *tags)
        return self

    def get_tag(self, tag_name: str) -> dict[str, list[TagPayload]]:
        return self._tags.get(tag_name)

    @overload
    def over_tags(self, tag_name: str, sort_options: TagCallback, /) -> None: ...

    @overload
    def over_tags(
        self,
        tag_name: str,
        sort_options: SortOptionsLike | None,
        callback: TagCallback,
        /,
    ) -> None: ...

    def over_tags(
        self,
        tag_name: str,
        sort_options: SortOptionsLike | TagCallback | None = None,
        callback: TagCallback | None = None,
        /,
    ) -> None:
        """Call ``callback(service_id, payload)`` for each tag entry named ``tag_name``.

        Without sort options entries are visited in tagging order. With sort
        options, given as ``{"field": ..., "order": ...}``, a ``(field, order)``
        pair or ``SortOptions``, entries are stably sorted by the numeric
        payload field (missing fields count as ``0``): ``order=1`` ascending,
        ``order=-1`` descending.

        Raises:
            WireboxInvalidSortOptionsError: If sort options are malformed. No
                callback runs in that case.

        """
        if callback is None and callable(sort_options):
            callback, sort_options = sort_options, None
        if callback is None:
            msg = "over_tags() requires a callback."
            raise TypeError(msg)

        if sort_options is None:
            over_pairs(list(self._tags.pairs(tag_name)), callback)
            return

        options = SortOptions.coerce(sort_options)  # type: ignore[arg-type]
        over_pairs(self.get_sorted_tags(tag_name, options), callback)

    def get_sorted_tags(self, tag_name: str, sort: SortFunction | SortOptions) -> Any:
        """Order the entries of a tag.

        Args:
            tag_name: Tag to read.
            sort: Either ``SortOptions``, producing a list of ``(service_id, payload)``
                pairs, or a callable receiving the per-service payload mapping
                and returning whatever ordering it builds.

        """
        if isinstance(sort, SortOptions):
            return self._tags.sorted_pairs(tag_name, sort)
        return sort(self.get_tag(tag_name))

    def define_label(self, name: str, callback: LabelCallback) -> Self:
        """Register, or replace, the callback run after services labeled ``name`` are built.

        The callback receives ``(instance, container, service_id)``; it may
        declare fewer positional parameters to receive only the leading ones.
        """
        self._labels.define(name, callback)
        return self

    def add_label(self, service_id: str, *labels: str) -> Self:
        """Attach labels to a registered service, in call order.

        Labels attached after a shared service was resolved do not apply to
        the already stored instance.
        """
        definition = self.get_definition(service_id)
        for name in labels:
            definition.label(name)
        return self

    def get_label(self, name: str) -> LabelCallback:
        """Return a label callback.

        Raises:
            WireboxLabelNotDefinedError: If no callback is defined for ``name``.

        """
        return self._labels.get(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(services={list(self._definitions)!r})"
