"""Live terminal progress bar used by the console writer.

Wraps a Rich ``Progress`` display in an explicit state machine:

- ``IDLE``     : no bar on screen; lines go straight to the console.
- ``ACTIVE``   : the bar owns the terminal; lines are printed above it.
- ``DRAINING`` : the bar is being torn down; lines go straight to the
  console.

The indicator stops itself once its completed counter reaches the total and
can then be started again by its owner.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from rich.console import Console, RenderableType
from rich.progress import BarColumn, Progress, TaskID, TextColumn

logger = logging.getLogger(__name__)


class IndicatorState(str, Enum):
    """Lifecycle of the progress indicator."""

    IDLE = "idle"
    ACTIVE = "active"
    DRAINING = "draining"


class ProgressIndicator:
    """Single progress bar rendered with Rich.

    Parameters
    ----------
    console:
        Rich Console the bar renders to.
    refresh_per_second:
        Redraw rate of the live display.
    on_drained:
        Called once the bar has released the terminal.
    """

    def __init__(
        self,
        console: Console,
        *,
        refresh_per_second: float = 12.0,
        on_drained: Callable[[], None] | None = None,
    ) -> None:
        self.console = console
        self._refresh_per_second = refresh_per_second
        self._on_drained = on_drained
        self._state = IndicatorState.IDLE
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._total = 0
        self._completed = 0
        self._description = ""

    @property
    def state(self) -> IndicatorState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is IndicatorState.ACTIVE

    @property
    def total(self) -> int:
        return self._total

    @property
    def completed(self) -> int:
        return self._completed

    @property
    def description(self) -> str:
        return self._description

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, total: int, completed: int = 0, description: str = "") -> None:
        """Put a fresh bar on screen.  No-op unless IDLE."""
        if self._state is not IndicatorState.IDLE:
            return
        self._total = total
        self._completed = completed
        self._description = description
        self._progress = Progress(
            BarColumn(
                bar_width=20,
                complete_style="bold",
                finished_style="bold",
            ),
            TextColumn("{task.description}", markup=False),
            console=self.console,
            transient=True,
            refresh_per_second=self._refresh_per_second,
        )
        self._task_id = self._progress.add_task(
            description, total=total, completed=completed
        )
        self._progress.start()
        self._state = IndicatorState.ACTIVE
        logger.debug("Progress indicator started (%s/%s)", completed, total)

    def stop(self) -> None:
        """Tear the bar down.

        The display is refreshed once more before it stops, so every line
        printed above the bar is on screen when the terminal is released.
        """
        if self._state is not IndicatorState.ACTIVE:
            return
        self._state = IndicatorState.DRAINING
        assert self._progress is not None
        self._progress.refresh()
        self._progress.stop()
        self._progress = None
        self._task_id = None

        self._state = IndicatorState.IDLE
        logger.debug("Progress indicator drained (%s/%s)", self._completed, self._total)
        if self._on_drained is not None:
            self._on_drained()

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def set_total(self, total: int) -> None:
        self._total = total
        self._update(total=total)

    def set_completed(self, completed: int) -> None:
        self._completed = completed
        self._update(completed=completed)

    def advance(self, units: int) -> None:
        self.set_completed(self._completed + units)

    def set_description(self, description: str) -> None:
        self._description = description
        self._update(description=description)

    def _update(self, **fields) -> None:
        if self._state is not IndicatorState.ACTIVE:
            return
        assert self._progress is not None and self._task_id is not None
        self._progress.update(self._task_id, **fields)
        if self._total > 0 and self._completed >= self._total:
            self.stop()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def log(self, line: RenderableType) -> None:
        """Write *line* above the bar, or directly when no bar is shown."""
        if self._state is IndicatorState.ACTIVE:
            assert self._progress is not None
            self._progress.console.print(line, soft_wrap=True, highlight=False)
        else:
            self.console.print(line, soft_wrap=True, highlight=False)
