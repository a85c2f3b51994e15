from wirebox.configurators import label, tag
from wirebox.container import Container
from wirebox.definition import Definition
from wirebox.exceptions import (
    WireboxCircularDependencyError,
    WireboxDefinitionNotCompiledError,
    WireboxError,
    WireboxInvalidDefinitionError,
    WireboxInvalidSortOptionsError,
    WireboxInvalidTagError,
    WireboxLabelNotDefinedError,
    WireboxServiceNotDefinedError,
)
from wirebox.tags import SortOptions
from wirebox.types import DefinitionKind

__all__ = [
    "Container",
    "Definition",
    "DefinitionKind",
    "SortOptions",
    "WireboxCircularDependencyError",
    "WireboxDefinitionNotCompiledError",
    "WireboxError",
    "WireboxInvalidDefinitionError",
    "WireboxInvalidSortOptionsError",
    "WireboxInvalidTagError",
    "WireboxLabelNotDefinedError",
    "WireboxServiceNotDefinedError",
    "label",
    "tag",
]
