from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, Strict, ValidationError, field_validator

from wirebox.exceptions import WireboxInvalidSortOptionsError, WireboxInvalidTagError
from wirebox.types import TagPayload, TagSpec

_SORT_PAIR_LENGTH = 2


class SortOptions(BaseModel):
    """Describe how tagged services are ordered by ``Container.over_tags``.

    ``field`` names a numeric key of the tag payload; payloads without it sort
    as ``0``. ``order=1`` visits ascending values and ``order=-1`` descending
    values. Ties keep the tagging order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    field: str = Field(min_length=1)
    order: Annotated[int, Strict()]

    @field_validator("order")
    @classmethod
    def check_direction(cls, value: int) -> int:
        if value not in (-1, 1):
            msg = "order must be 1 (ascending) or -1 (descending)"
            raise ValueError(msg)
        return value

    @classmethod
    def coerce(cls, value: SortOptions | Mapping[str, Any] | Sequence[Any]) -> SortOptions:
        """Build options from a model, a mapping or a ``(field, order)`` pair.

        Raises:
            WireboxInvalidSortOptionsError: If the value has the wrong shape.

        """
        if isinstance(value, SortOptions):
            return value

        if isinstance(value, Sequence) and not isinstance(value, str):
            if len(value) != _SORT_PAIR_LENGTH:
                msg = f"Sort options pair must be (field, order), got {value!r}."
                raise WireboxInvalidSortOptionsError(msg)
            value = {"field": value[0], "order": value[1]}
        elif isinstance(value, Mapping):
            value = dict(value)

        try:
            return cls.model_validate(value)
        except ValidationError as exc:
            msg = f"Invalid sort options {value!r}: {exc}"
            raise WireboxInvalidSortOptionsError(msg) from exc

    def key(self, payload: Mapping[str, Any]) -> Any:
        return payload.get(self.field, 0)


def normalize_tag(tag: Any) -> TagPayload:
    """Turn a tag spec into a payload mapping carrying a ``name`` key.

    Mappings are kept by reference, so payload identity is preserved.
    """
    if isinstance(tag, str):
        return {"name": tag}

    if isinstance(tag, Mapping) and "name" in tag:
        return tag  # type: ignore[return-value]

    raise WireboxInvalidTagError(tag)


class TagStore:
    """Hold, per tag name, the ordered payload lists of each tagged service."""

    def __init__(self) -> None:
        self._tags: dict[str, dict[str, list[TagPayload]]] = {}

    def add(self, service_id: str, *tags: TagSpec) -> None:
        # normalize everything first so a bad spec leaves the store untouched
        payloads = [normalize_tag(tag) for tag in tags]
        for payload in payloads:
            tagged = self._tags.setdefault(payload["name"], {})
            tagged.setdefault(service_id, []).append(payload)

    def get(self, tag_name: str) -> dict[str, list[TagPayload]]:
        return self._tags.get(tag_name, {})

    def pairs(self, tag_name: str) -> Iterator[tuple[str, TagPayload]]:
        """Yield ``(service_id, payload)`` in service order, then payload order."""
        for service_id, payloads in self.get(tag_name).items():
            for payload in payloads:
                yield service_id, payload

    def sorted_pairs(
        self,
        tag_name: str,
        options: SortOptions,
    ) -> list[tuple[str, TagPayload]]:
        """Stably sort the entries of a tag on ``options.field``.

        Raises:
            WireboxInvalidSortOptionsError: If the payload values of the field
                cannot be compared with each other.

        """
        # sorted() keeps ties in place for reverse=True as well
        try:
            return sorted(
                self.pairs(tag_name),
                key=lambda pair: options.key(pair[1]),
                reverse=options.order == -1,
            )
        except TypeError as exc:
            msg = f"Tag {tag_name!r} payloads are not comparable on field {options.field!r}: {exc}"
            raise WireboxInvalidSortOptionsError(msg) from exc


def over_pairs(
    pairs: list[tuple[str, TagPayload]] | Iterator[tuple[str, TagPayload]],
    callback: Callable[[str, TagPayload], Any],
) -> None:
    for service_id, payload in pairs:
        callback(service_id, payload)
