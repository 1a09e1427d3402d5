from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

import pytest

from kbehdz.bindings import (
    ActionExecutionError,
    ActionUndoError,
    CommandRegistry,
    KeyCode,
    NothingToRedoError,
    NothingToUndoError,
    UnboundInputError,
    load_default_bindings,
)
from kbehdz.commands import FunctionCommand, command


@dataclass
class Counter:
    value: int = 0
    calls: List[str] = field(default_factory=list)


@dataclass
class Add:
    amount: int
    label: str = "add"

    def execute(self, context: Counter) -> int:
        context.value += self.amount
        context.calls.append(f"{self.label}.execute")
        return context.value

    def undo(self, context: Counter) -> int:
        context.value -= self.amount
        context.calls.append(f"{self.label}.undo")
        return context.value


@dataclass
class Record:
    label: str

    def execute(self, context: Counter) -> str:
        context.calls.append(self.label)
        return self.label


class Boom:
    def __init__(self, *, fail_execute: bool = False, fail_undo: bool = False):
        self.fail_execute = fail_execute
        self.fail_undo = fail_undo

    def execute(self, context: Any) -> None:
        if self.fail_execute:
            raise ValueError("execute exploded")

    def undo(self, context: Any) -> None:
        if self.fail_undo:
            raise ValueError("undo exploded")


def make_registry(**kwargs: Any) -> CommandRegistry:
    return CommandRegistry(**kwargs)


def test_rebinding_replaces_previous_command() -> None:
    registry = make_registry()
    counter = Counter()
    registry.bind("k", Record("first"))
    registry.bind("k", Record("second"))

    result = registry.dispatch("k", counter)

    assert result == "second"
    assert counter.calls == ["second"]
    assert len(registry) == 1


def test_dispatch_unbound_input_raises() -> None:
    registry = make_registry()

    with pytest.raises(UnboundInputError) as excinfo:
        registry.dispatch("missing", Counter())

    assert excinfo.value.input_id == "missing"


def test_undo_and_redo_on_empty_history() -> None:
    registry = make_registry()

    with pytest.raises(NothingToUndoError):
        registry.undo(Counter())
    with pytest.raises(NothingToRedoError):
        registry.redo(Counter())


def test_dispatch_undo_redo_round_trip() -> None:
    registry = make_registry()
    counter = Counter(value=10)
    registry.bind(KeyCode("w"), Add(5))

    assert registry.dispatch(KeyCode("w"), counter) == 15
    assert registry.undo(counter) == 10
    assert counter.value == 10
    assert registry.redo(counter) == 15
    assert counter.value == 15
    assert counter.calls == ["add.execute", "add.undo", "add.execute"]


def test_new_dispatch_after_undo_discards_redo_tail() -> None:
    registry = make_registry()
    counter = Counter()
    registry.bind("a", Add(1))
    registry.bind("b", Add(10))

    registry.dispatch("a", counter)
    registry.dispatch("a", counter)
    registry.undo(counter)
    registry.dispatch("b", counter)

    assert counter.value == 11
    assert registry.stats().history_size == 2
    with pytest.raises(NothingToRedoError):
        registry.redo(counter)


def test_unbind_missing_input_is_noop() -> None:
    registry = make_registry()
    registry.bind("a", Record("a"))
    before = registry.revision()

    assert registry.unbind("never-bound") is None

    assert registry.revision() == before
    assert registry.is_bound("a")


def test_unbind_returns_removed_command() -> None:
    registry = make_registry()
    cmd = Record("a")
    registry.bind("a", cmd)

    assert registry.unbind("a") is cmd
    assert "a" not in registry
    with pytest.raises(UnboundInputError):
        registry.dispatch("a", Counter())


def test_non_undoable_commands_skip_history() -> None:
    registry = make_registry()
    counter = Counter()
    registry.bind("add", Add(2))
    registry.bind("pause", Record("pause"))

    registry.dispatch("add", counter)
    registry.dispatch("pause", counter)

    assert registry.stats().history_size == 1
    registry.undo(counter)
    assert counter.value == 0
    with pytest.raises(NothingToUndoError):
        registry.undo(counter)


def test_execute_failure_is_wrapped_and_not_recorded() -> None:
    registry = make_registry()
    registry.bind("boom", Boom(fail_execute=True))

    with pytest.raises(ActionExecutionError) as excinfo:
        registry.dispatch("boom", None)

    assert isinstance(excinfo.value.__cause__, ValueError)
    assert isinstance(excinfo.value.error, ValueError)
    assert excinfo.value.input_id == "boom"
    assert not registry.can_undo()


def test_undo_failure_keeps_history_position() -> None:
    registry = make_registry()
    failing = Boom(fail_undo=True)
    registry.bind("boom", failing)
    registry.dispatch("boom", None)

    with pytest.raises(ActionUndoError) as excinfo:
        registry.undo(None)

    assert excinfo.value.command is failing
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.error is excinfo.value.__cause__
    assert registry.stats().history_position == 1

    failing.fail_undo = False
    registry.undo(None)
    assert registry.stats().history_position == 0


def test_redo_failure_keeps_history_position() -> None:
    registry = make_registry()
    flaky = Boom()
    registry.bind("flaky", flaky)
    registry.dispatch("flaky", None)
    registry.undo(None)

    flaky.fail_execute = True
    with pytest.raises(ActionExecutionError) as excinfo:
        registry.redo(None)

    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.error is excinfo.value.__cause__
    assert excinfo.value.input_id == "flaky"

    assert registry.can_redo()
    assert registry.stats().history_position == 0


def test_history_limit_drops_oldest_entries() -> None:
    registry = make_registry(history_limit=2)
    counter = Counter()
    registry.bind("a", Add(1))

    for _ in range(3):
        registry.dispatch("a", counter)

    assert registry.stats().history_size == 2
    registry.undo(counter)
    registry.undo(counter)
    assert counter.value == 1
    with pytest.raises(NothingToUndoError):
        registry.undo(counter)


def test_history_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        make_registry(history_limit=0)


def test_bind_rejects_objects_without_execute() -> None:
    registry = make_registry()

    with pytest.raises(TypeError):
        registry.bind("a", object())  # type: ignore[arg-type]

    assert len(registry) == 0


def test_get_allows_rebinding_to_another_input() -> None:
    registry = make_registry()
    load_default_bindings(registry)

    registry.bind("X", registry.get("Y"))

    assert registry.dispatch("X") == "scream"
    assert registry.get("missing") is None


def test_from_bindings_accepts_pairs_and_mappings() -> None:
    first = CommandRegistry.from_bindings(
        [("a", Record("one")), ("a", Record("two")), ("b", Record("b"))]
    )
    second = CommandRegistry.from_bindings({"c": Record("c")})

    assert first.dispatch("a", Counter()) == "two"
    assert len(first) == 2
    assert second.dispatch("c", Counter()) == "c"


def test_iter_bindings_and_revision_tracking() -> None:
    registry = make_registry()
    start = registry.revision()
    registry.bind("a", Record("a"))
    registry.bind("b", Record("b"))
    registry.unbind("a")

    assert [input_id for input_id, _ in registry.iter_bindings()] == ["b"]
    assert registry.revision() == start + 3


def test_clear_history() -> None:
    registry = make_registry()
    counter = Counter()
    registry.bind("a", Add(1))
    registry.dispatch("a", counter)
    registry.dispatch("a", counter)
    registry.undo(counter)

    registry.clear_history()

    assert not registry.can_undo()
    assert not registry.can_redo()
    assert counter.value == 1


def test_function_commands_dispatch_with_context() -> None:
    registry = make_registry()
    seen: List[Any] = []
    registry.bind(1, FunctionCommand(seen.append))
    registry.bind(2, command(lambda ctx: seen.append(ctx), lambda ctx: seen.pop()))

    registry.dispatch(1, "ctx-1")
    registry.dispatch(2, "ctx-2")
    registry.undo()

    assert seen == ["ctx-1"]
    assert registry.stats().history_size == 1


def test_registries_are_independent() -> None:
    menu = make_registry()
    gameplay = make_registry()
    menu.bind("esc", Record("close-menu"))

    assert "esc" in menu
    assert "esc" not in gameplay


def test_history_entries_is_a_snapshot() -> None:
    registry = make_registry()
    seen: List[Any] = []
    registry.bind("a", command(seen.append, lambda ctx: seen.pop()))
    registry.dispatch("a", 1)

    entries = registry.history_entries()

    assert isinstance(entries, tuple)
    assert [entry.input_id for entry in entries] == ["a"]
    assert not hasattr(registry, "history")
    assert registry.stats().history_position == 1
    assert seen == [1]
