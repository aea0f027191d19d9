"""Logger for status events of a whole build run.

Emits ``build-metadata`` and ``build-status`` events.  If no subscriber is
attached, status messages are written directly to ``sys.stderr``.
"""

from __future__ import annotations

from buildlog.core.errors import InvalidArgumentError, UnknownProjectError
from buildlog.loggers.logger import Logger
from buildlog.models.events import BuildMetadataEvent, BuildStatus, BuildStatusEvent
from buildlog.models.levels import Level


class BuildTracker(Logger):
    """Tracks the projects of one build run and reports their phase changes.

    The tracker keeps its own record of the projects it declared and
    validates against that, independent of any writer's state.
    """

    def __init__(self, module_name: str, **kwargs) -> None:
        super().__init__(module_name, **kwargs)
        self._projects_to_build: list[str] | None = None

    @property
    def projects(self) -> list[str]:
        return list(self._projects_to_build or [])

    def set_projects(self, projects: list[str]) -> None:
        """Declare the projects of this build run."""
        if not projects or not isinstance(projects, (list, tuple)):
            raise InvalidArgumentError(
                "BuildTracker#set_projects: Missing or incorrect projects parameter"
            )
        self._projects_to_build = list(projects)
        self._emit(BuildMetadataEvent(projects_to_build=self._projects_to_build))

    def start_project_build(self, project_name: str, project_type: str) -> None:
        self._report(
            "start_project_build",
            project_name,
            project_type,
            BuildStatus.PROJECT_BUILD_START,
            Level.INFO,
            f"Building {project_type} project {project_name}...",
        )

    def end_project_build(self, project_name: str, project_type: str) -> None:
        self._report(
            "end_project_build",
            project_name,
            project_type,
            BuildStatus.PROJECT_BUILD_END,
            Level.VERBOSE,
            f"Finished building {project_type} project {project_name}",
        )

    def skip_project_build(self, project_name: str, project_type: str) -> None:
        self._report(
            "skip_project_build",
            project_name,
            project_type,
            BuildStatus.PROJECT_BUILD_SKIP,
            Level.INFO,
            f"Skipping build of {project_type} project {project_name}",
        )

    def _report(
        self,
        method: str,
        project_name: str,
        project_type: str,
        status: BuildStatus,
        level: Level,
        fallback_message: str,
    ) -> None:
        if not self._projects_to_build or project_name not in self._projects_to_build:
            raise UnknownProjectError(
                f"BuildTracker#{method}: Unknown project {project_name}"
            )
        if not project_type:
            raise InvalidArgumentError(
                f"BuildTracker#{method}: Missing project_type parameter"
            )
        has_subscribers = self._emit(
            BuildStatusEvent(
                level=level,
                project_name=project_name,
                project_type=project_type,
                status=status.value,
            )
        )
        if not has_subscribers:
            self._log(level, fallback_message)
