"""Errors: every failure is a ``WireboxError``.

Unknown services, undefined labels, malformed tags and sort options, and
circular resolution all raise immediately.
"""

from __future__ import annotations

from wirebox import (
    Container,
    WireboxCircularDependencyError,
    WireboxInvalidSortOptionsError,
    WireboxLabelNotDefinedError,
    WireboxServiceNotDefinedError,
)


def main() -> None:
    container = Container()

    try:
        container.get("missing")
    except WireboxServiceNotDefinedError as error:
        print(f"missing={error.service_id}")  # => missing=missing

    container.set("labeled", [])
    container.add_label("labeled", "undefined")
    try:
        container.get("labeled")
    except WireboxLabelNotDefinedError as error:
        print(f"label={error.label_name}")  # => label=undefined

    try:
        container.over_tags("any", {"field": "priority", "order": 0}, print)
    except WireboxInvalidSortOptionsError:
        print("invalid_sort_options=True")  # => invalid_sort_options=True

    container.set("loop", lambda c: c.get("loop"))
    try:
        container.get("loop")
    except WireboxCircularDependencyError as error:
        print(f"cycle={error.service_id}")  # => cycle=loop


if __name__ == "__main__":
    main()
