from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from wirebox.container import Container
    from wirebox.definition import Definition

Resolver: TypeAlias = Callable[[], Any]
"""A zero-argument callable producing a service instance."""

Configurator: TypeAlias = Callable[["Definition", "Container"], Any]
"""A callback configuring a just-registered definition in place."""

LabelCallback: TypeAlias = Callable[..., Any]
"""A post-construction hook called with ``(instance, container, service_id)``."""

TagPayload: TypeAlias = MutableMapping[str, Any]
"""A normalized tag: a mapping that always carries a ``name`` key."""

TagSpec: TypeAlias = str | Mapping[str, Any]
"""A tag as accepted by ``Container.tag``: a bare name or a payload mapping."""

SortFunction: TypeAlias = Callable[[Mapping[str, list[TagPayload]]], Any]
"""A callable turning a per-service tag mapping into an ordered result."""


class DefinitionKind(str, Enum):
    """Describe how a definition turns its raw value into an instance."""

    FACTORY = "factory"
    """A callable invoked with the bound context and arguments."""

    NESTED = "nested"
    """A reference to another definition's resolver."""

    OBJECT = "object"
    """A mutable value, shared by reference or copied per resolution."""

    CONSTANT = "constant"
    """An immutable scalar returned as is."""
