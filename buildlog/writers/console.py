"""Console writer — renders buildlog events to ``stderr``.

Subscribes to every buildlog event, rebuilds per-project and per-task state
purely from the event stream, validates each phase change and renders
ordered, human readable lines.  During multi-project builds in an
interactive terminal a live progress bar is shown.

The progress bar is only used when

- the console is an interactive terminal,
- the current level is less verbose than ``verbose`` (output through the
  live display is asynchronous, so verbose logging bypasses it), and
- the current level is not ``silent``.

Color scheme
------------
- blue   : module and project labels, start symbols
- green  : finished symbols
- yellow : skipped symbols
- grey   : "Project k of n" / "Task k of n" labels
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.text import Text

from buildlog import config
from buildlog.core.errors import (
    InvalidTransitionError,
    TransitionConflict,
    UnknownProjectError,
    UnknownTaskError,
)
from buildlog.core.event_bus import EventBus, get_event_bus
from buildlog.models.events import (
    BuildMetadataEvent,
    BuildStatus,
    BuildStatusEvent,
    EventKind,
    LogEvent,
    ProjectMetadataEvent,
    ProjectStatusEvent,
    StopSignalEvent,
    TaskStatus,
)
from buildlog.models.levels import Level
from buildlog.models.state import (
    PROJECT_TRANSITIONS,
    TASK_TRANSITIONS,
    ProgressModel,
    ProjectPhase,
    ProjectState,
    TaskPhase,
    TaskState,
    next_start_index,
)
from buildlog.writers.progress import ProgressIndicator

logger = logging.getLogger(__name__)

# figures.pointer / figures.pointerSmall / figures.tick
POINTER = "❯"
POINTER_SMALL = "›"
TICK = "✔"

_LEVEL_PREFIXES: dict[Level, tuple[str, str]] = {
    Level.SILLY: ("silly", "reverse"),
    Level.VERBOSE: ("verb", "cyan"),
    Level.PERF: ("perf", "red on yellow"),
    Level.INFO: ("info", "green"),
    Level.WARN: ("warn", "yellow"),
    Level.ERROR: ("error", "white on red"),
}

# The conflict reported when leaving a phase is not allowed
_PROJECT_CONFLICTS: dict[ProjectPhase, TransitionConflict] = {
    ProjectPhase.NOT_STARTED: TransitionConflict.NOT_STARTED,
    ProjectPhase.STARTED: TransitionConflict.ALREADY_STARTED,
    ProjectPhase.SKIPPED: TransitionConflict.ALREADY_SKIPPED,
    ProjectPhase.ENDED: TransitionConflict.ALREADY_ENDED,
}

_TASK_CONFLICTS: dict[TaskPhase, TransitionConflict] = {
    TaskPhase.NOT_STARTED: TransitionConflict.NOT_STARTED,
    TaskPhase.STARTED: TransitionConflict.ALREADY_STARTED,
    TaskPhase.ENDED: TransitionConflict.ALREADY_ENDED,
}

_PROJECT_TARGETS: dict[str, ProjectPhase] = {
    BuildStatus.PROJECT_BUILD_START.value: ProjectPhase.STARTED,
    BuildStatus.PROJECT_BUILD_END.value: ProjectPhase.ENDED,
    BuildStatus.PROJECT_BUILD_SKIP.value: ProjectPhase.SKIPPED,
}

_TASK_TARGETS: dict[str, TaskPhase] = {
    TaskStatus.TASK_START.value: TaskPhase.STARTED,
    TaskStatus.TASK_END.value: TaskPhase.ENDED,
}


def level_prefix(level: Level) -> Text:
    """Colored prefix for *level*.  ``silent`` is rendered unstyled."""
    label, style = _LEVEL_PREFIXES.get(level, (level.value, ""))
    return Text(label, style=style)


class ConsoleWriter:
    """Standard handler for buildlog events.

    Parameters
    ----------
    console:
        Rich Console to write to.  Defaults to a Console on ``stderr``.
    bus:
        Event bus to subscribe to.  Defaults to the process-wide bus.
    """

    def __init__(
        self, console: Console | None = None, *, bus: EventBus | None = None
    ) -> None:
        self.console = console or Console(stderr=True)
        self._bus = bus or get_event_bus()
        self._projects: dict[str, ProjectState] = {}
        self._progress = ProgressModel()
        self._indicator = ProgressIndicator(
            self.console,
            refresh_per_second=config.load_settings().progress_fps,
            on_drained=self._handle_indicator_drained,
        )
        self._enabled = False
        self._subscriptions = {
            EventKind.LOG: self._handle_log_event,
            EventKind.BUILD_METADATA: self._handle_build_metadata_event,
            EventKind.PROJECT_METADATA: self._handle_project_metadata_event,
            EventKind.BUILD_STATUS: self._handle_build_status_event,
            EventKind.PROJECT_STATUS: self._handle_project_status_event,
            EventKind.STOP_SIGNAL: self._handle_stop_signal,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @classmethod
    def init(
        cls, console: Console | None = None, *, bus: EventBus | None = None
    ) -> ConsoleWriter:
        """Create a new writer and subscribe it to all events."""
        writer = cls(console, bus=bus)
        writer.enable()
        return writer

    @staticmethod
    def stop(bus: EventBus | None = None) -> None:
        """Ask every writer attached to *bus* to detach."""
        (bus or get_event_bus()).publish(StopSignalEvent())

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        """Attach all event handlers and start writing to the console."""
        if self._enabled:
            return
        for kind, handler in self._subscriptions.items():
            self._bus.subscribe(kind, handler)
        self._enabled = True

    def disable(self) -> None:
        """Detach all event handlers and stop the progress bar.

        Lines buffered by the progress bar are flushed before it releases
        the terminal.
        """
        if self._enabled:
            for kind, handler in self._subscriptions.items():
                self._bus.unsubscribe(kind, handler)
            self._enabled = False
        self._indicator.stop()

    def reset(self) -> None:
        """Forget all project and task state, e.g. before a new build run."""
        self._indicator.stop()
        self._projects.clear()
        self._progress = ProgressModel()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def progress(self) -> ProgressModel:
        """Copy of the current progress counters."""
        return self._progress.model_copy()

    @property
    def indicator(self) -> ProgressIndicator:
        return self._indicator

    def project_names(self) -> list[str]:
        return list(self._projects)

    def get_project_state(self, project_name: str) -> ProjectState:
        """Copy of the state of *project_name*."""
        return self._get_project(project_name).model_copy(deep=True)

    # ------------------------------------------------------------------
    # Progress bar
    # ------------------------------------------------------------------

    def _get_indicator(self) -> ProgressIndicator | None:
        """Return the active progress bar, starting one if it is wanted."""
        if self._indicator.is_active:
            return self._indicator
        if (
            not self.console.is_terminal
            or config.is_level_enabled(Level.VERBOSE)
            or config.get_level() is Level.SILENT
        ):
            return None
        if self._progress.total_units <= 0 or self._progress.is_complete:
            return None
        self._indicator.start(
            self._progress.total_units, self._progress.completed_units
        )
        return self._indicator

    def _update_progress_total(self) -> None:
        self._progress.recompute(self._projects)
        indicator = self._get_indicator()
        if indicator:
            indicator.set_total(self._progress.total_units)

    def _advance_progress(self, units: int) -> None:
        self._progress.advance(units)
        indicator = self._get_indicator()
        if indicator:
            indicator.set_completed(self._progress.completed_units)

    def _handle_indicator_drained(self) -> None:
        logger.debug(
            "Progress bar released the terminal at %s/%s units",
            self._progress.completed_units,
            self._progress.total_units,
        )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _write_message(self, level: Level, message: Text) -> None:
        # The level is checked when rendering, not when the event was emitted
        if not config.is_level_enabled(level):
            return
        line = Text.assemble(level_prefix(level), " ", message)
        if self._indicator.is_active:
            # The live display needs full control of the terminal
            self._indicator.log(line)
        else:
            self.console.print(line, soft_wrap=True, highlight=False)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _handle_log_event(self, event: LogEvent) -> None:
        self._write_message(
            event.level, Text.assemble((event.module_name, "blue"), " ", event.message)
        )

    def _handle_stop_signal(self, event: StopSignalEvent) -> None:
        self.disable()

    def _handle_build_metadata_event(self, event: BuildMetadataEvent) -> None:
        for project_name in event.projects_to_build:
            if project_name not in self._projects:
                self._projects[project_name] = ProjectState(name=project_name)
        self._update_progress_total()

    def _handle_project_metadata_event(self, event: ProjectMetadataEvent) -> None:
        project = self._get_project(event.project_name)
        if project.type is None:
            project.type = event.project_type
        project.add_tasks(event.tasks_to_run)
        self._update_progress_total()

    def _get_project(self, project_name: str) -> ProjectState:
        project = self._projects.get(project_name)
        if project is None:
            raise UnknownProjectError(f"writers/console: Unknown project {project_name}")
        return project

    def _get_task(self, project: ProjectState, task_name: str) -> TaskState:
        task = project.get_task(task_name)
        if task is None:
            raise UnknownTaskError(
                f"writers/console: Unknown task {task_name} for project {project.name}"
            )
        return task

    def _handle_build_status_event(self, event: BuildStatusEvent) -> None:
        project = self._get_project(event.project_name)
        target = _PROJECT_TARGETS.get(event.status)
        if target is None:
            self._write_message(
                Level.VERBOSE,
                Text(
                    f"writers/console: Received unknown build-status {event.status} "
                    f"for project {event.project_name}"
                ),
            )
            return

        if target not in PROJECT_TRANSITIONS[project.phase]:
            raise InvalidTransitionError(
                f"project {event.project_name}",
                event.status,
                _PROJECT_CONFLICTS[project.phase],
            )

        if project.start_index is None:
            project.start_index = next_start_index(
                [p.start_index for p in self._projects.values()]
            )
        project.phase = target
        project.type = event.project_type

        name = Text(event.project_name, style="bold")
        if target is ProjectPhase.STARTED:
            message = Text.assemble(
                (POINTER, "blue"), f" Building {event.project_type} project ", name, "..."
            )
            indicator = self._get_indicator()
            if indicator:
                indicator.set_description(
                    f"{POINTER} Building {event.project_type} project {event.project_name}..."
                )
        elif target is ProjectPhase.ENDED:
            message = Text.assemble(
                (TICK, "green"), f" Finished building {event.project_type} project ", name
            )
            self._advance_progress(self._progress.project_weight)
        else:
            message = Text.assemble(
                (TICK, "yellow"), f" Skipping build of {event.project_type} project ", name
            )
            # Skipping a project implicitly completes all of its tasks
            self._advance_progress(self._progress.project_weight + project.task_count)

        scope = Text(f"Project {project.start_index} of {len(self._projects)}", style="grey50")
        self._write_message(event.level, Text.assemble(scope, ": ", message))

    def _handle_project_status_event(self, event: ProjectStatusEvent) -> None:
        project = self._get_project(event.project_name)
        task = self._get_task(project, event.task_name)
        target = _TASK_TARGETS.get(event.status)
        if target is None:
            self._write_message(
                Level.VERBOSE,
                Text(
                    f"writers/console: Received unknown project-status {event.status} "
                    f"for project {event.project_name}, task {event.task_name}"
                ),
            )
            return

        if target not in TASK_TRANSITIONS[task.phase]:
            raise InvalidTransitionError(
                f"project {event.project_name}, task {event.task_name}",
                event.status,
                _TASK_CONFLICTS[task.phase],
            )

        if task.start_index is None:
            task.start_index = project.next_task_index()
        task.phase = target

        name = Text(event.task_name, style="bold")
        if target is TaskPhase.STARTED:
            message = Text.assemble((POINTER_SMALL, "blue"), " Running task ", name, "...")
        else:
            message = Text.assemble((TICK, "green"), " Finished task ", name)
            self._advance_progress(1)

        scope = Text(event.project_name, style="blue")
        if config.is_level_enabled(Level.VERBOSE):
            scope.append(f" Task {task.start_index} of {project.task_count}", style="grey50")
        self._write_message(event.level, Text.assemble(scope, ": ", message))
