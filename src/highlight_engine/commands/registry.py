"""Registry mapping command ids to handlers."""

from __future__ import annotations

from typing import Dict, Iterator

from highlight_engine.runtime.telemetry import record_event, span
from highlight_engine.session.controller import SessionResult
from highlight_engine.surface.protocol import SurfaceEditError

from .models import CommandRef


class CommandConflictError(RuntimeError):
    """Raised when a command id is registered twice."""

    def __init__(self, command: CommandRef) -> None:
        super().__init__(f"Command '{command.id}' is already registered")
        self.command = command


class CommandRegistry:
    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, CommandRef] = {}
        self._logger_name = logger_name

    def register(self, command: CommandRef, *, replace: bool = False) -> CommandRef:
        if command.id in self._commands and not replace:
            raise CommandConflictError(command)
        self._commands[command.id] = command
        return command

    def unregister(self, command_id: str) -> CommandRef | None:
        return self._commands.pop(command_id, None)

    def get(self, command_id: str) -> CommandRef:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def execute(self, command_id: str) -> SessionResult:
        """Run a command; host edit failures are reported, not raised."""

        command = self.get(command_id)
        with span(
            command.telemetry_name or command.id,
            logger_name=self._logger_name,
            component="commands",
            metadata={"command": command.id},
        ) as handle:
            try:
                result = command()
            except SurfaceEditError as exc:
                handle.add_metadata("edit_error", exc)
                record_event(
                    "command.failed",
                    level="warning",
                    data={"command": command.id, "error": exc},
                    logger_name=self._logger_name,
                )
                return SessionResult(ok=False, status="edit_failed", message=str(exc))
            handle.add_metadata("status", result.status)
            return result

    def ids(self) -> tuple[str, ...]:
        return tuple(self._commands)

    def __iter__(self) -> Iterator[CommandRef]:
        return iter(tuple(self._commands.values()))

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __len__(self) -> int:
        return len(self._commands)


__all__ = ["CommandConflictError", "CommandRegistry"]
