# src/tododos/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.dialogs import collect_new_task, collect_task_updates
from ..core.models import Priority, ViewMode
from ..core.ports import Ask, Emit, PersistenceError
from ..core.state import AppState
from ..storage.sheets_gateway import friendly_persistence_error_message

CommandHandler = Callable[[AppState, Ask, Emit], str | None]

logger = logging.getLogger(__name__)

SECTIONS = ("Navigation", "Actions", "View")


class QuitRequested(Exception):
    """Raised by the quit command; the console loop ends the process with code 0."""


@dataclass(slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    aliases: list[str] = field(default_factory=list)
    section: str = "Actions"
    # Navigation keeps the details view open so the user can browse.
    navigation: bool = False


class CommandRegistry:
    """Fixed command table: exact (trimmed, case-insensitive) names and aliases."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._lookup: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        section: str = "Actions",
        navigation: bool = False,
    ) -> None:
        if section not in SECTIONS:
            raise ValueError(f"Unknown help section: {section}")
        cmd = Command(
            name=name.lower(),
            handler=handler,
            help_text=help_text,
            aliases=[a.lower() for a in (aliases or [])],
            section=section,
            navigation=navigation,
        )
        for key in (cmd.name, *cmd.aliases):
            if key in self._lookup:
                raise ValueError(f"Command name already registered: {key}")
            self._lookup[key] = cmd
        self._commands[cmd.name] = cmd

    def commands(self) -> list[Command]:
        return list(self._commands.values())

    def resolve(self, line: str) -> Command | None:
        return self._lookup.get(line.strip().lower())

    def handle(self, state: AppState, line: str, ask: Ask, emit: Emit) -> str | None:
        """
        Run one line of input against the table.

        Returns a feedback line (or None). Raises QuitRequested for quit.
        Any other exception from a handler is logged and reported as a failed
        command; the session goes on.
        """
        text = line.strip()
        if not text:
            state.view.mode = ViewMode.MAIN
            return None

        cmd = self.resolve(text)
        if cmd is None:
            try:
                number = int(text)
            except ValueError:
                state.view.mode = ViewMode.MAIN
                return f'Unknown command: "{text}". Enter "help" for a list of commands.'
            _leave_view(state, navigation=True)
            return _jump(state, number)

        _leave_view(state, navigation=cmd.navigation)

        try:
            return cmd.handler(state, ask, emit)
        except (QuitRequested, EOFError):
            # EOF inside a dialog ends the session like EOF at the prompt.
            raise
        except Exception as e:
            logger.exception("Command %s failed.", cmd.name)
            return f"Command failed: {e}"
        finally:
            state.clamp_selection()

    def build_help(self) -> str:
        lines = ["tododos - commands:"]
        for section in SECTIONS:
            lines.append("")
            lines.append(f"{section}:")
            for cmd in self._commands.values():
                if cmd.section != section:
                    continue
                names = ", ".join([cmd.name, *cmd.aliases])
                lines.append(f"  {names:<18} {cmd.help_text}")
        lines.append("")
        lines.append("Tip: enter a task number to jump to it.")
        return "\n".join(lines)


registry = CommandRegistry()


def _leave_view(state: AppState, *, navigation: bool) -> None:
    # Only the details view follows the cursor; help is left on any command.
    if not (navigation and state.view.mode is ViewMode.DETAILS):
        state.view.mode = ViewMode.MAIN


def _jump(state: AppState, number: int) -> str:
    length = len(state.filtered())
    if not state.view.cursor.jump_to(number, length):
        return f"Invalid task number: {number} (1-{length})" if length else "No tasks to jump to."
    return f"Jumped to task {number}."


# ---- navigation ----


def cmd_up(state: AppState, ask: Ask, emit: Emit) -> str | None:
    state.view.cursor.up(len(state.filtered()))
    return None


def cmd_down(state: AppState, ask: Ask, emit: Emit) -> str | None:
    state.view.cursor.down(len(state.filtered()))
    return None


def cmd_home(state: AppState, ask: Ask, emit: Emit) -> str | None:
    state.view.cursor.home(len(state.filtered()))
    return None


def cmd_end(state: AppState, ask: Ask, emit: Emit) -> str | None:
    state.view.cursor.end(len(state.filtered()))
    return None


# ---- task actions ----


def cmd_add(state: AppState, ask: Ask, emit: Emit) -> str | None:
    emit("New task")
    draft = collect_new_task(ask, emit)
    if draft is None:
        return "Aborted - no title entered."

    task = state.store.add(draft.title, draft.priority, draft.due_date, draft.tags)
    if task is None:
        return "Aborted - no title entered."

    details = []
    if task.priority is not Priority.NORMAL:
        details.append(f"priority: {task.priority}")
    if task.due_date:
        details.append(f"due: {task.due_date}")
    if task.tags:
        details.append(f"tags: {', '.join(task.tags)}")
    suffix = f" ({'; '.join(details)})" if details else ""
    return f'Added task "{task.title}"{suffix}.'


def cmd_quick(state: AppState, ask: Ask, emit: Emit) -> str | None:
    emit("Quick add")
    task = state.store.add(ask("Title: "))
    if task is None:
        return "Aborted - no title entered."
    return f'Added task "{task.title}".'


def cmd_delete(state: AppState, ask: Ask, emit: Emit) -> str | None:
    if len(state.store) == 0:
        return "No tasks to delete."
    index = state.selected_store_index()
    if index is None:
        return "No task selected."
    task = state.store.delete(index)
    return f'Deleted task "{task.title}".'


def cmd_edit(state: AppState, ask: Ask, emit: Emit) -> str | None:
    index = state.selected_store_index()
    if index is None:
        return "No task selected to edit."

    task = state.store.get(index)
    emit(f'Edit task: "{task.title}" (Enter keeps the current value)')
    updates = collect_task_updates(task, ask, emit)
    if not updates:
        return f'Task "{task.title}" unchanged.'
    state.store.edit(index, updates)
    return f'Updated task "{task.title}".'


def cmd_toggle(state: AppState, ask: Ask, emit: Emit) -> str | None:
    index = state.selected_store_index()
    if index is None:
        return "No task selected to toggle."
    task = state.store.toggle_status(index)
    return f'Marked task "{task.title}" as {task.status}.'


def cmd_search(state: AppState, ask: Ask, emit: Emit) -> str | None:
    emit(f"Current search: {state.view.search_term or 'none'}")
    state.set_search(ask("Search term (Enter to clear): "))
    if state.view.search_term:
        return f'Searching for "{state.view.search_term}".'
    return "Search cleared."


def cmd_clear(state: AppState, ask: Ask, emit: Emit) -> str | None:
    state.set_search("")
    return "Search cleared."


def cmd_save(state: AppState, ask: Ask, emit: Emit) -> str | None:
    records = state.store.records
    emit("Saving tasks...")
    try:
        state.gateway.save(records)
    except PersistenceError as e:
        logger.info("Save failed (%s): %s", e.category, e)
        return f"Save failed: {friendly_persistence_error_message(e)}"
    return f"Saved {len(records)} tasks to {state.gateway.describe()}."


def cmd_reload(state: AppState, ask: Ask, emit: Emit) -> str | None:
    try:
        records = state.gateway.load()
    except PersistenceError as e:
        logger.info("Reload failed (%s): %s", e.category, e)
        return f"Reload failed: {friendly_persistence_error_message(e)} Keeping the current list."
    state.store.replace_all(records)
    state.clamp_selection()
    return f"Reloaded {len(records)} tasks from {state.gateway.describe()}."


# ---- view ----


def cmd_help(state: AppState, ask: Ask, emit: Emit) -> str | None:
    state.view.mode = ViewMode.HELP
    return None


def cmd_details(state: AppState, ask: Ask, emit: Emit) -> str | None:
    state.view.mode = ViewMode.DETAILS
    return None


def cmd_quit(state: AppState, ask: Ask, emit: Emit) -> str | None:
    raise QuitRequested()


registry.register("up", cmd_up, "Move selection up", aliases=["k"], section="Navigation", navigation=True)
registry.register(
    "down", cmd_down, "Move selection down", aliases=["j"], section="Navigation", navigation=True
)
registry.register("home", cmd_home, "Jump to the first task", section="Navigation", navigation=True)
registry.register("end", cmd_end, "Jump to the last task", section="Navigation", navigation=True)

registry.register("add", cmd_add, "Add a task (title, priority, due date, tags)", aliases=["a"])
registry.register("quick", cmd_quick, "Quick add (title only)", aliases=["qa"])
registry.register("delete", cmd_delete, "Delete the selected task", aliases=["d"])
registry.register("edit", cmd_edit, "Edit the selected task", aliases=["e"])
registry.register("toggle", cmd_toggle, "Mark the selected task done/open", aliases=["t", "space"])
registry.register("search", cmd_search, "Filter tasks by title", aliases=["/"])
registry.register("clear", cmd_clear, "Clear the search filter")
registry.register("save", cmd_save, "Save tasks to the remote sheet", aliases=["s"])
registry.register("reload", cmd_reload, "Reload tasks from the remote sheet", aliases=["r"])

registry.register("help", cmd_help, "Show this help", aliases=["h"], section="View")
registry.register("details", cmd_details, "Show details of the selected task", aliases=["show"], section="View")
registry.register("quit", cmd_quit, "Quit without saving", aliases=["q", "exit"], section="View")
