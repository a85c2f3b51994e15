"""Services: values, factories and definitions with bound arguments.

Register a plain value, a factory receiving the container, and a definition
whose arguments are resolved once when it is registered.
"""

from __future__ import annotations

from wirebox import Container


class Settings:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class Database:
    def __init__(self, container: Container, settings: Settings) -> None:
        self.container = container
        self.settings = settings


def main() -> None:
    container = Container({"app_name": "inventory"})
    container.set("settings", lambda _: Settings("postgresql://localhost/app"))
    container.set("database", lambda c: Database(c, c.get("settings")))

    print(f"app_name={container.get('app_name')}")  # => app_name=inventory
    print(f"dsn={container.get('database').settings.dsn}")  # => dsn=postgresql://localhost/app
    print(f"attribute_access={container.app_name}")  # => attribute_access=inventory

    bound = container.create(Database, None, container.get_definition("settings"))
    container.set_raw("bound_database", bound)
    first = container.get("bound_database")
    second = container.get("bound_database")
    print(f"new_database={first is not second}")  # => new_database=True
    print(f"settings_bound_once={first.settings is second.settings}")  # => settings_bound_once=True


if __name__ == "__main__":
    main()
