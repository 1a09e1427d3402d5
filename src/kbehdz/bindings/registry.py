"""Command registry binding input identifiers to commands."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, Iterator, Mapping, Optional, Tuple

from kbehdz.commands.base import Command, ensure_command, supports_undo
from kbehdz.runtime.telemetry import record_event, span

from .errors import (
    ActionExecutionError,
    ActionUndoError,
    NothingToRedoError,
    NothingToUndoError,
    UnboundInputError,
)
from .history import CommandHistory, HistoryEntry
from .models import RegistryStats

BindingPairs = Iterable[Tuple[Hashable, Command]] | Mapping[Hashable, Command]


class CommandRegistry:
    """Owns input bindings and the undo/redo history of dispatched commands.

    Each input id maps to at most one command; binding again replaces the
    previous command. Commands exposing ``undo`` are recorded on dispatch,
    everything else runs without touching the history.
    """

    def __init__(
        self,
        *,
        history_limit: Optional[int] = None,
        logger_name: str | None = None,
    ) -> None:
        self._bindings: Dict[Hashable, Command] = {}
        self._history = CommandHistory(limit=history_limit)
        self._logger_name = logger_name
        self._revision = 0

    @classmethod
    def from_bindings(
        cls,
        bindings: BindingPairs,
        *,
        history_limit: Optional[int] = None,
        logger_name: str | None = None,
    ) -> "CommandRegistry":
        registry = cls(history_limit=history_limit, logger_name=logger_name)
        registry.bind_many(bindings)
        return registry

    def __contains__(self, input_id: object) -> bool:
        return input_id in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def revision(self) -> int:
        return self._revision

    def history_entries(self) -> tuple[HistoryEntry, ...]:
        """Snapshot of the recorded commands, oldest first."""

        return self._history.entries()

    def bind(self, input_id: Hashable, command: Command) -> None:
        ensure_command(command)
        previous = self._bindings.get(input_id)
        self._bindings[input_id] = command
        self._touch_bindings()
        record_event(
            "bindings.bind",
            data={
                "input": repr(input_id),
                "command": type(command).__name__,
                "replaced": previous is not None,
            },
            logger_name=self._logger_name,
        )

    def bind_many(self, bindings: BindingPairs) -> None:
        pairs = bindings.items() if isinstance(bindings, Mapping) else bindings
        for input_id, command in pairs:
            self.bind(input_id, command)

    def unbind(self, input_id: Hashable) -> Optional[Command]:
        command = self._bindings.pop(input_id, None)
        if command is None:
            return None
        self._touch_bindings()
        record_event(
            "bindings.unbind",
            data={"input": repr(input_id)},
            logger_name=self._logger_name,
        )
        return command

    def get(self, input_id: Hashable) -> Optional[Command]:
        """Return the command bound to ``input_id`` without running it."""

        return self._bindings.get(input_id)

    def is_bound(self, input_id: Hashable) -> bool:
        return input_id in self._bindings

    def iter_bindings(self) -> Iterator[Tuple[Hashable, Command]]:
        yield from self._bindings.items()

    def dispatch(self, input_id: Hashable, context: Any = None) -> Any:
        """Run the command bound to ``input_id`` against ``context``.

        Raises ``UnboundInputError`` when nothing is bound and
        ``ActionExecutionError`` when the command itself fails. A command
        that fails is not recorded in the history.
        """

        command = self._bindings.get(input_id)
        if command is None:
            raise UnboundInputError(input_id)

        with span(
            "bindings::dispatch",
            logger_name=self._logger_name,
            component="bindings",
            metadata={
                "input": repr(input_id),
                "command": type(command).__name__,
            },
        ) as handle:
            try:
                result = command.execute(context)
            except Exception as exc:
                raise ActionExecutionError(input_id, command, exc) from exc

            if supports_undo(command):
                dropped = self._history.push(HistoryEntry(input_id, command))
                handle.add_metadata("history_position", self._history.position)
                if dropped:
                    handle.add_metadata("history_dropped", dropped)
            return result

    def undo(self, context: Any = None) -> Any:
        """Reverse the most recently applied command.

        The history pointer only moves back once the command's ``undo``
        returns; a failing undo raises ``ActionUndoError`` and leaves the
        history as it was.
        """

        entry = self._history.peek_undo()
        if entry is None:
            raise NothingToUndoError()

        with span(
            "bindings::undo",
            logger_name=self._logger_name,
            component="bindings",
            metadata={
                "input": repr(entry.input_id),
                "command": type(entry.command).__name__,
            },
        ):
            try:
                result = entry.command.undo(context)  # type: ignore[attr-defined]
            except Exception as exc:
                raise ActionUndoError(entry.input_id, entry.command, exc) from exc
            self._history.step_back()
            return result

    def redo(self, context: Any = None) -> Any:
        """Re-execute the next undone command."""

        entry = self._history.peek_redo()
        if entry is None:
            raise NothingToRedoError()

        with span(
            "bindings::redo",
            logger_name=self._logger_name,
            component="bindings",
            metadata={
                "input": repr(entry.input_id),
                "command": type(entry.command).__name__,
            },
        ):
            try:
                result = entry.command.execute(context)
            except Exception as exc:
                raise ActionExecutionError(
                    entry.input_id, entry.command, exc
                ) from exc
            self._history.step_forward()
            return result

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def clear_history(self) -> None:
        self._history.clear()
        record_event("history.clear", logger_name=self._logger_name)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=len(self._bindings),
            history_size=len(self._history),
            history_position=self._history.position,
        )

    def _touch_bindings(self) -> None:
        self._revision += 1


__all__ = ["CommandRegistry"]
