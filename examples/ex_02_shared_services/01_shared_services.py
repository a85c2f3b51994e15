"""Shared and transient services.

Transient object values are copied on every ``get``; shared services keep the
first instance for the container's lifetime.
"""

from __future__ import annotations

from wirebox import Container


def main() -> None:
    defaults = {"retries": 3, "hosts": ["a", "b"]}

    container = Container()
    container.set("config", defaults)
    container.set_shared("shared_config", defaults)

    copy = container.get("config")
    print(f"copy_equal={copy == defaults}")  # => copy_equal=True
    print(f"copy_is_new={copy is not defaults}")  # => copy_is_new=True
    print(f"deep_copy={copy['hosts'] is not defaults['hosts']}")  # => deep_copy=True

    shared = container.get("shared_config")
    print(f"shared_same={shared is container.get('shared_config')}")  # => shared_same=True

    shallow = Container(deep_clone=False)
    shallow.set("config", defaults)
    print(f"shallow_hosts_shared={shallow.get('config')['hosts'] is defaults['hosts']}")  # => shallow_hosts_shared=True


if __name__ == "__main__":
    main()
