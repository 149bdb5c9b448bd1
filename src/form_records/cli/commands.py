# src/form_records/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..records.errors import EditStateError, RecordNotFoundError
from ..records.record_models import Record, RecordKind

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by connectors (/help, /add, /edit, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Cannot parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_assignments(args: list[str]) -> dict[str, str]:
    """Turn ["task=Buy milk", "description=2 liters"] into a field mapping."""
    out: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"expected field=value, got {arg!r}")
        out[key.strip()] = value
    return out


def format_record(rec: Record) -> str:
    parts = [f"id={rec.id}"]
    for key, value in rec.fields().items():
        if key == "password" and value:
            value = "*" * len(value)
        parts.append(f"{key}: {value}")
    return " | ".join(parts)


def _parse_id(args: list[str], usage: str) -> int | str:
    if len(args) != 1:
        return usage
    try:
        return int(args[0])
    except ValueError:
        return f"Invalid id: {args[0]!r}. {usage}"


def _not_saved(state: AppState, reply: str, emit: CommandEmitter | None) -> str:
    """
    Report a failed write. With an emitter the notice goes out immediately
    and the reply stays short; otherwise it is appended to the reply.
    """
    notice = f"Not saved: {state.store.last_error}. The change was not written to disk."
    if emit is not None:
        emit(notice)
        return reply
    return f"{reply}\n{notice}"


def _fields_usage(state: AppState, cmd: str) -> str:
    names = " ".join(f"{n}=..." for n in state.store.field_names)
    return f"Usage: /{cmd} {names}"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    editing = state.edit.editing_id
    return (
        "Status:\n"
        f"  Record kind: {store.kind.value}\n"
        f"  File: {store.path}\n"
        f"  Records: {store.count()}\n"
        f"  Editing: {editing if editing is not None else '-'}"
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    records = state.store.records
    if not records:
        return "No records."
    lines = [f"Records ({len(records)}):"]
    for i, rec in enumerate(records, start=1):
        lines.append(f"{i}. {format_record(rec)}")
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add task="Buy milk" description="2 liters"
    /add name=Ana lastName=Perez email=ana@example.com password=secret
    """
    if not args:
        return _fields_usage(state, "add")
    try:
        fields = parse_assignments(args)
        before = state.store.count()
        records = state.store.add(fields)
    except ValueError as e:
        return f"{e}\n{_fields_usage(state, 'add')}"

    if state.store.last_error is not None:
        return _not_saved(state, "Record not added.", emit)
    if len(records) == before:
        return "Record not added."
    return f"Added: {format_record(records[-1])}"


def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    parsed = _parse_id(args, "Usage: /delete <id>")
    if isinstance(parsed, str):
        return parsed

    existed = state.store.get(parsed) is not None
    state.store.remove(parsed)

    if state.store.last_error is not None:
        return _not_saved(state, f"Record {parsed} not deleted.", emit)
    if not existed:
        return f"No record with id={parsed}."
    if state.edit.editing_id == parsed:
        state.edit.cancel()
    return f"Deleted record {parsed}."


def _edit_unavailable(state: AppState) -> str | None:
    if state.store.kind != RecordKind.TASK:
        return f"Editing is only available for {RecordKind.TASK.value} records."
    return None


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <id>  -> load record into the edit buffer
    /edit       -> show the current buffer
    """
    if (msg := _edit_unavailable(state)) is not None:
        return msg

    if not args:
        if not state.edit.is_editing:
            return "Not editing. Usage: /edit <id>"
        buf = ", ".join(f"{k}={v!r}" for k, v in state.edit.buffer.items())
        return f"Editing {state.edit.editing_id}: {buf}"

    parsed = _parse_id(args, "Usage: /edit <id>")
    if isinstance(parsed, str):
        return parsed
    try:
        buf = state.edit.start(parsed)
    except RecordNotFoundError:
        return f"No record with id={parsed}."
    shown = ", ".join(f"{k}={v!r}" for k, v in buf.items())
    return f"Editing {parsed}: {shown}\nUse /set field=value, then /save or /cancel."


def cmd_set(state: AppState, args: list[str]) -> str:
    if (msg := _edit_unavailable(state)) is not None:
        return msg
    if not args:
        return _fields_usage(state, "set")
    try:
        fields = parse_assignments(args)
        for key, value in fields.items():
            state.edit.set_field(key, value)
    except EditStateError:
        return "Not editing. Use /edit <id> first."
    except ValueError as e:
        return str(e)
    buf = ", ".join(f"{k}={v!r}" for k, v in state.edit.buffer.items())
    return f"Editing {state.edit.editing_id}: {buf}"


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if (msg := _edit_unavailable(state)) is not None:
        return msg
    record_id = state.edit.editing_id
    try:
        state.edit.commit()
    except EditStateError:
        return "Not editing. Use /edit <id> first."

    if state.store.last_error is not None:
        return _not_saved(state, f"Record {record_id} not updated.", emit)
    rec = state.store.get(record_id) if record_id is not None else None
    if rec is None:
        return f"Record {record_id} no longer exists; nothing updated."
    return f"Updated: {format_record(rec)}"


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if not state.edit.is_editing:
        return "Not editing."
    record_id = state.edit.editing_id
    state.edit.cancel()
    return f"Edit of {record_id} cancelled."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show record kind, file and counts.")
registry.register("list", cmd_list, help_text="List records.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a record: /add field=value ...")
registry.register("delete", cmd_delete, help_text="Delete a record: /delete <id>.", aliases=["rm", "del"])
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <id>.")
registry.register("set", cmd_set, help_text="Change fields being edited: /set field=value ...")
registry.register("save", cmd_save, help_text="Save the record being edited.")
registry.register("cancel", cmd_cancel, help_text="Discard the current edit.")
