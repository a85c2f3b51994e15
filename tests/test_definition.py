from __future__ import annotations

from typing import Any

import pytest

from wirebox import (
    Container,
    Definition,
    DefinitionKind,
    WireboxCircularDependencyError,
    WireboxDefinitionNotCompiledError,
    WireboxInvalidDefinitionError,
)


class _Client:
    pass


@pytest.mark.parametrize(
    ("raw", "kind"),
    [
        (lambda c: c, DefinitionKind.FACTORY),
        (_Client, DefinitionKind.FACTORY),
        ("text", DefinitionKind.CONSTANT),
        (42, DefinitionKind.CONSTANT),
        (None, DefinitionKind.CONSTANT),
        ([1, 2], DefinitionKind.OBJECT),
        ({"a": 1}, DefinitionKind.OBJECT),
        (_Client(), DefinitionKind.OBJECT),
    ],
)
def test_kind_follows_raw_value(container: Container, raw: Any, kind: DefinitionKind) -> None:
    assert container.create(raw).kind is kind


def test_nested_kind(container: Container) -> None:
    container.set("inner", 1)

    definition = container.create(container.get_definition("inner"))

    assert definition.kind is DefinitionKind.NESTED


def test_id_and_resolve_require_compilation(container: Container) -> None:
    definition = container.create([1])

    assert not definition.is_compiled
    with pytest.raises(WireboxDefinitionNotCompiledError, match="No identifier specified"):
        _ = definition.id
    with pytest.raises(WireboxDefinitionNotCompiledError):
        definition.resolve()


def test_compile_assigns_id_once(container: Container) -> None:
    definition = container.create([1])

    container.set_raw("first", definition)

    assert definition.is_compiled
    assert definition.id == "first"
    with pytest.raises(WireboxInvalidDefinitionError, match="already compiled as 'first'"):
        container.set_raw("second", definition)
    assert "second" not in container


def test_compile_rejects_empty_identifier(container: Container) -> None:
    with pytest.raises(WireboxInvalidDefinitionError, match="non-empty string"):
        container.set("", 1)


def test_set_raw_requires_a_definition(container: Container) -> None:
    with pytest.raises(WireboxInvalidDefinitionError, match="instance of Definition"):
        container.set_raw("service", {"not": "a definition"})  # type: ignore[arg-type]


def test_set_raw_rejects_definitions_of_other_containers(container: Container) -> None:
    foreign = Container().create(1)

    with pytest.raises(WireboxInvalidDefinitionError, match="another container"):
        container.set_raw("service", foreign)


def test_uncompiled_definition_arguments_fail_at_registration(container: Container) -> None:
    dependency = container.create(1)
    definition = container.create(lambda _c, value: value, None, dependency)

    with pytest.raises(WireboxDefinitionNotCompiledError):
        container.set_raw("service", definition)

    assert not definition.is_compiled


def test_arguments_resolve_nested_definitions(container: Container) -> None:
    container.set("number", 7)
    definition = container.create(None, None, container.get_definition("number"), "plain")

    assert definition.arguments() == (7, "plain")


def test_context_defaults_to_container(container: Container) -> None:
    assert container.create(1).context is container
    assert container.create(1, "ctx").context == "ctx"


def test_chained_nested_definitions_collapse(container: Container) -> None:
    container.set_shared("base", lambda _: object())
    container.set_raw("middle", container.create(container.get_definition("base")))
    container.set_raw("top", container.create(container.get_definition("middle")))

    assert container.get("top") is container.get("base")


def test_definition_label_helper_defines_callback(container: Container) -> None:
    container.set("items", [])

    definition = container.get_definition("items").label("mark", lambda items: items.append(1))

    assert isinstance(definition, Definition)
    assert container.get("items") == [1]


def test_definition_tags_helper(container: Container) -> None:
    container.set("items", [])

    container.get_definition("items").tags("group", {"name": "group", "weight": 2})

    assert container.get_tag("group") == {
        "items": [{"name": "group"}, {"name": "group", "weight": 2}],
    }


def test_repr_mentions_identifier(container: Container) -> None:
    definition = container.create([])

    assert "<uncompiled>" in repr(definition)

    container.set_raw("items", definition)

    assert "'items'" in repr(definition)


class TestCircularDependencies:
    def test_factory_resolving_itself(self, container: Container) -> None:
        container.set("loop", lambda c: c.get("loop"))

        with pytest.raises(WireboxCircularDependencyError, match="'loop'") as exc_info:
            container.get("loop")

        assert exc_info.value.service_id == "loop"

    def test_indirect_cycle(self, container: Container) -> None:
        container.set("a", lambda c: c.get("b"))
        container.set("b", lambda c: c.get("a"))

        with pytest.raises(WireboxCircularDependencyError):
            container.get("a")

    def test_label_resolving_its_shared_service(self, container: Container) -> None:
        container.set_shared("service", [])
        container.define_label("again", lambda _instance, c: c.get("service"))
        container.add_label("service", "again")

        with pytest.raises(WireboxCircularDependencyError):
            container.get("service")

    def test_marker_is_released_after_failure(self, container: Container) -> None:
        attempts: list[int] = []

        def flaky(_: Container) -> str:
            attempts.append(1)
            if len(attempts) == 1:
                msg = "boom"
                raise RuntimeError(msg)
            return "ok"

        container.set("flaky", flaky)

        with pytest.raises(RuntimeError, match="boom"):
            container.get("flaky")

        assert container.get("flaky") == "ok"
