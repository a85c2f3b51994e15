"""Labels: post-construction hooks.

A label callback runs right after a labeled service is built. Transient
services run it on every ``get``; shared services only once.
"""

from __future__ import annotations

from typing import Any

from wirebox import Container, label


class Registry:
    def __init__(self) -> None:
        self.plugins: list[str] = []


def main() -> None:
    container = Container()
    container.set("csv", "csv-exporter")
    container.set("json", "json-exporter")
    container.tag("csv", "exporter")
    container.tag("json", "exporter")

    def collect_exporters(registry: Registry, c: Container) -> None:
        c.over_tags("exporter", lambda service_id, _tag: registry.plugins.append(c.get(service_id)))

    container.set_shared("registry", lambda _: Registry(), label("exporters", collect_exporters))
    registry = container.get("registry")
    print(f"plugins={registry.plugins}")  # => plugins=['csv-exporter', 'json-exporter']
    print(f"collected_once={container.get('registry').plugins == registry.plugins}")  # => collected_once=True

    seen: list[Any] = []
    container.define_label("audit", lambda _instance, _c, service_id: seen.append(service_id))
    container.set("request", lambda _: {})
    container.add_label("request", "audit")
    container.get("request")
    container.get("request")
    print(f"audited={seen}")  # => audited=['request', 'request']


if __name__ == "__main__":
    main()
