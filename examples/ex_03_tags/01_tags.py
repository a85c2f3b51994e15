"""Tags: group services and visit them in order.

Tags carry arbitrary payloads. ``over_tags`` visits tagged services in tagging
order, or sorted by a numeric payload field (``order=1`` ascending,
``order=-1`` descending).
"""

from __future__ import annotations

from wirebox import Container, tag


def main() -> None:
    container = Container()
    container.set("auth", "auth-middleware", tag({"name": "middleware", "priority": 10}))
    container.set("cors", "cors-middleware", tag({"name": "middleware", "priority": 30}))
    container.set("gzip", "gzip-middleware", tag({"name": "middleware", "priority": 20}))

    visited: list[str] = []
    container.over_tags("middleware", lambda service_id, _tag: visited.append(service_id))
    print(f"tagging_order={visited}")  # => tagging_order=['auth', 'cors', 'gzip']

    ascending: list[str] = []
    container.over_tags(
        "middleware",
        {"field": "priority", "order": 1},
        lambda service_id, _tag: ascending.append(container.get(service_id)),
    )
    print(f"ascending={ascending}")  # => ascending=['auth-middleware', 'gzip-middleware', 'cors-middleware']

    descending: list[str] = []
    container.over_tags(
        "middleware",
        ("priority", -1),
        lambda service_id, _tag: descending.append(service_id),
    )
    print(f"descending={descending}")  # => descending=['cors', 'gzip', 'auth']


if __name__ == "__main__":
    main()
