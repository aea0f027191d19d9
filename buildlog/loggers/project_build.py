"""Logger for status events of a single project's build.

Emits ``project-metadata`` and ``project-status`` events.  If no subscriber
is attached, status messages are written directly to ``sys.stderr``.
"""

from __future__ import annotations

from buildlog.core.errors import InvalidArgumentError, UnknownTaskError
from buildlog.loggers.logger import Logger
from buildlog.models.events import ProjectMetadataEvent, ProjectStatusEvent, TaskStatus
from buildlog.models.levels import Level


class ProjectTaskTracker(Logger):
    """Tracks the tasks of one project build and reports their phase changes.

    Parameters
    ----------
    module_name:
        Identifier for messages created by this tracker.
    project_name:
        Name of the project being built.
    project_type:
        Type of the project being built, e.g. ``application``.
    """

    def __init__(
        self, module_name: str, project_name: str, project_type: str, **kwargs
    ) -> None:
        super().__init__(module_name, **kwargs)
        if not project_name:
            raise InvalidArgumentError("ProjectTaskTracker: Missing project_name parameter")
        if not project_type:
            raise InvalidArgumentError("ProjectTaskTracker: Missing project_type parameter")
        self._project_name = project_name
        self._project_type = project_type
        self._tasks_to_run: list[str] | None = None

    @property
    def project_name(self) -> str:
        return self._project_name

    @property
    def project_type(self) -> str:
        return self._project_type

    @property
    def tasks(self) -> list[str]:
        return list(self._tasks_to_run or [])

    def set_tasks(self, tasks: list[str]) -> None:
        """Declare the tasks that will run for this project."""
        if not tasks or not isinstance(tasks, (list, tuple)):
            raise InvalidArgumentError(
                "ProjectTaskTracker#set_tasks: Missing or incorrect tasks parameter"
            )
        self._tasks_to_run = list(tasks)
        self._emit(
            ProjectMetadataEvent(
                project_name=self._project_name,
                project_type=self._project_type,
                tasks_to_run=self._tasks_to_run,
            )
        )

    def start_task(self, task_name: str) -> None:
        self._report(
            "start_task",
            task_name,
            TaskStatus.TASK_START,
            Level.INFO,
            f"{self._project_name}: Running task {task_name}...",
        )

    def end_task(self, task_name: str) -> None:
        self._report(
            "end_task",
            task_name,
            TaskStatus.TASK_END,
            Level.VERBOSE,
            f"{self._project_name}: Finished task {task_name}",
        )

    def _report(
        self,
        method: str,
        task_name: str,
        status: TaskStatus,
        level: Level,
        fallback_message: str,
    ) -> None:
        if not task_name:
            raise InvalidArgumentError(
                f"ProjectTaskTracker#{method}: Missing task_name parameter"
            )
        if not self._tasks_to_run or task_name not in self._tasks_to_run:
            raise UnknownTaskError(f"ProjectTaskTracker#{method}: Unknown task {task_name}")
        has_subscribers = self._emit(
            ProjectStatusEvent(
                level=level,
                project_name=self._project_name,
                project_type=self._project_type,
                task_name=task_name,
                status=status.value,
            )
        )
        if not has_subscribers:
            self._log(level, fallback_message)
