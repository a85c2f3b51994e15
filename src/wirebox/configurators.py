"""Configurator factories for trailing arguments of ``Container.set``.

.. code-block:: python

    container.set("mailer", make_mailer, tag("transport"), label("audit", audit_log))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wirebox.types import Configurator, LabelCallback, TagSpec

if TYPE_CHECKING:
    from wirebox.container import Container
    from wirebox.definition import Definition


def label(name: str, callback: LabelCallback | None = None) -> Configurator:
    """Attach label ``name`` to the registered service, defining its callback when given."""

    def configure(definition: Definition, _container: Container) -> None:
        definition.label(name, callback)

    return configure


def tag(*tags: TagSpec) -> Configurator:
    """Tag the registered service with every given tag."""

    def configure(definition: Definition, _container: Container) -> None:
        definition.tags(*tags)

    return configure
