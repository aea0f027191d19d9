"""Progress state owned by the console writer.

Project and task state live in arenas keyed by name.  Callers always look
entries up by key instead of holding on to references.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ProjectPhase(str, Enum):
    """Lifecycle of one project build."""

    NOT_STARTED = "not_started"
    STARTED = "started"
    SKIPPED = "skipped"
    ENDED = "ended"


class TaskPhase(str, Enum):
    """Lifecycle of one task execution."""

    NOT_STARTED = "not_started"
    STARTED = "started"
    ENDED = "ended"


# Legal transitions; terminal phases (SKIPPED, ENDED) have no outgoing edges.
PROJECT_TRANSITIONS: dict[ProjectPhase, set[ProjectPhase]] = {
    ProjectPhase.NOT_STARTED: {ProjectPhase.STARTED, ProjectPhase.SKIPPED},
    ProjectPhase.STARTED: {ProjectPhase.ENDED},
    ProjectPhase.SKIPPED: set(),
    ProjectPhase.ENDED: set(),
}

TASK_TRANSITIONS: dict[TaskPhase, set[TaskPhase]] = {
    TaskPhase.NOT_STARTED: {TaskPhase.STARTED},
    TaskPhase.STARTED: {TaskPhase.ENDED},
    TaskPhase.ENDED: set(),
}


def next_start_index(indices: list[int | None]) -> int:
    """Return ``1 + max(non-null indices)``, or 1 when none is set."""
    return 1 + max((idx for idx in indices if idx is not None), default=0)


class TaskState(BaseModel):
    """Execution state of a single task within a project."""

    name: str
    phase: TaskPhase = TaskPhase.NOT_STARTED
    start_index: int | None = None


class ProjectState(BaseModel):
    """Build state of a single project and its task arena."""

    name: str
    type: str | None = None
    phase: ProjectPhase = ProjectPhase.NOT_STARTED
    start_index: int | None = None
    tasks: dict[str, TaskState] = Field(default_factory=dict)

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    def get_task(self, task_name: str) -> TaskState | None:
        return self.tasks.get(task_name)

    def add_tasks(self, task_names: list[str]) -> int:
        """Register unknown tasks as NOT_STARTED.  Returns how many were added."""
        added = 0
        for task_name in task_names:
            if task_name not in self.tasks:
                self.tasks[task_name] = TaskState(name=task_name)
                added += 1
        return added

    def next_task_index(self) -> int:
        return next_start_index([task.start_index for task in self.tasks.values()])


class ProgressModel(BaseModel):
    """Weighted completion counters for a build run.

    ``total_units = project_weight * project_count + sum(task counts)``
    where ``project_weight`` equals the project count, so finishing a project
    weighs as much as a task in every sibling project.
    """

    total_units: int = 0
    completed_units: int = 0
    project_weight: int = 0

    @property
    def fraction(self) -> float:
        """Completion ratio in ``[0.0, 1.0]``; 0.0 while nothing is registered."""
        if self.total_units <= 0:
            return 0.0
        return min(self.completed_units / self.total_units, 1.0)

    @property
    def is_complete(self) -> bool:
        return self.total_units > 0 and self.completed_units >= self.total_units

    def recompute(self, projects: dict[str, ProjectState]) -> None:
        """Recompute weight and total after project or task membership changed."""
        self.project_weight = len(projects)
        task_total = sum(project.task_count for project in projects.values())
        self.total_units = self.project_weight * len(projects) + task_total

    def advance(self, units: int) -> None:
        self.completed_units += units
