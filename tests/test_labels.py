from __future__ import annotations

from typing import Any

import pytest

from wirebox import Container, WireboxLabelNotDefinedError, WireboxServiceNotDefinedError


def _push_counter() -> tuple[list[int], Any]:
    calls: list[int] = []

    def push(instance: list[int]) -> None:
        calls.append(1)
        instance.append(len(calls))

    return calls, push


def test_label_runs_once_for_shared_services(container: Container) -> None:
    calls, push = _push_counter()
    container.define_label("push", push)
    container.set_shared("array", [])
    container.add_label("array", "push")

    assert container.get("array") == [1]
    assert container.get("array") == [1]
    assert len(calls) == 1


def test_label_runs_on_every_get_for_transient_services(container: Container) -> None:
    calls, push = _push_counter()
    container.define_label("push", push)
    container.set("array", [])
    container.add_label("array", "push")

    assert container.get("array") == [1]
    assert container.get("array") == [2]
    assert len(calls) == 2


def test_labels_run_in_attachment_order_without_duplicates(container: Container) -> None:
    calls, push_count = _push_counter()
    container.define_label("push_everything", lambda instance: instance.append(42))
    container.define_label("push_count", push_count)
    container.set("array", [])

    container.add_label("array", "push_count")
    container.add_label("array", "push_everything")
    container.add_label("array", "push_everything")

    assert container.get("array") == [1, 42]
    assert container.get("array") == [2, 42]
    assert len(calls) == 2
    assert container.get_definition("array").labels == ("push_count", "push_everything")


def test_label_callback_receives_container_and_service_id(container: Container) -> None:
    received: list[tuple[Any, Container, str]] = []
    container.define_label(
        "spy",
        lambda instance, c, service_id: received.append((instance, c, service_id)),
    )
    container.set_shared("service", lambda _: "instance")
    container.add_label("service", "spy")

    container.get("service")

    assert received == [("instance", container, "service")]


def test_label_callback_can_report_service_id(container: Container) -> None:
    container.set("my_identifier", [1, 2, 3])
    container.define_label(
        "id_to_body",
        lambda instance, _c, service_id: instance.append(service_id),
    )
    container.add_label("my_identifier", "id_to_body")

    assert container.get_definition("my_identifier").id == "my_identifier"
    assert container.get("my_identifier") == [1, 2, 3, "my_identifier"]


def test_label_may_be_defined_after_it_is_attached(container: Container) -> None:
    container.set("array", [])
    container.add_label("array", "late")
    container.define_label("late", lambda instance: instance.append("late"))

    assert container.get("array") == ["late"]


def test_redefining_a_label_replaces_its_callback(container: Container) -> None:
    container.set("array", [])
    container.add_label("array", "mark")
    container.define_label("mark", lambda instance: instance.append("first"))
    container.define_label("mark", lambda instance: instance.append("second"))

    assert container.get("array") == ["second"]


def test_label_added_after_shared_resolution_does_not_apply(container: Container) -> None:
    container.define_label("mark", lambda instance: instance.append("mark"))
    container.set_shared("array", [])

    assert container.get("array") == []

    container.add_label("array", "mark")

    assert container.get("array") == []


def test_label_added_after_transient_resolution_applies_to_next_get(container: Container) -> None:
    container.define_label("mark", lambda instance: instance.append("mark"))
    container.set("array", [])

    assert container.get("array") == []

    container.add_label("array", "mark")

    assert container.get("array") == ["mark"]


def test_undefined_label_fails_lazily(container: Container) -> None:
    container.set("array", [])
    container.add_label("array", "missing")

    with pytest.raises(WireboxLabelNotDefinedError, match="'missing'") as exc_info:
        container.get("array")

    assert exc_info.value.label_name == "missing"


def test_get_label(container: Container) -> None:
    def callback(instance: Any) -> None:
        pass

    container.define_label("known", callback)

    assert container.get_label("known") is callback
    with pytest.raises(WireboxLabelNotDefinedError):
        container.get_label("unknown")


def test_add_label_to_unknown_service(container: Container) -> None:
    with pytest.raises(WireboxServiceNotDefinedError):
        container.add_label("missing", "label")


def test_define_and_add_label_are_chainable(container: Container) -> None:
    container.set("array", [])

    result = container.define_label("a", lambda instance: None).add_label("array", "a")

    assert result is container


def test_variadic_label_callbacks_receive_every_argument(container: Container) -> None:
    received: list[Any] = []

    class Recorder:
        def __call__(self, *args: Any) -> None:
            received.extend(args)

    container.define_label("record", Recorder())
    container.set("value", "v")
    container.add_label("value", "record")

    container.get("value")

    assert received == ["v", container, "value"]


def test_tagged_services_can_be_compiled_into_a_labeled_target(container: Container) -> None:
    container.set("custom1", [1, 2, 3])
    container.set("custom2", [4, 5])
    container.set_shared("target", [])

    (
        container.tag("custom1", "concat")
        .tag("custom1", {"name": "concat", "value": 42})
        .tag("custom2", "concat", "concat")
    )
    container.add_label("target", "concat_label")

    def concat(service: list[int], di: Container) -> None:
        def collect(tagged_service: str, tag: dict[str, Any]) -> None:
            if tag.get("value"):
                service.append(tag["value"])
            else:
                service.extend(di.get(tagged_service))

        di.over_tags("concat", collect)

    container.define_label("concat_label", concat)

    assert container.get("target") == [1, 2, 3, 42, 4, 5, 4, 5]
    assert container.get("target") == [1, 2, 3, 42, 4, 5, 4, 5]
