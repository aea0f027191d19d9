"""Tests for the ProgressIndicator and how the ConsoleWriter drives it."""

from __future__ import annotations

import pytest
from rich.console import Console

from buildlog import config
from buildlog.core.event_bus import EventBus
from buildlog.models.events import BuildMetadataEvent, LogEvent, ProjectMetadataEvent
from buildlog.writers.console import ConsoleWriter
from buildlog.writers.progress import IndicatorState, ProgressIndicator


@pytest.fixture
def tty_writer(tty_console: Console, bus: EventBus):
    cw = ConsoleWriter.init(tty_console, bus=bus)
    yield cw
    cw.disable()


class TestProgressIndicator:
    def test_starts_idle(self, tty_console: Console):
        indicator = ProgressIndicator(tty_console)
        assert indicator.state is IndicatorState.IDLE
        assert indicator.is_active is False

    def test_start_and_complete(self, tty_console: Console):
        drained = []
        indicator = ProgressIndicator(tty_console, on_drained=lambda: drained.append(True))
        indicator.start(4)
        assert indicator.state is IndicatorState.ACTIVE

        indicator.advance(3)
        assert indicator.is_active is True
        indicator.advance(1)

        assert indicator.state is IndicatorState.IDLE
        assert drained == [True]
        assert indicator.completed == indicator.total == 4

    def test_start_when_active_is_noop(self, tty_console: Console):
        indicator = ProgressIndicator(tty_console)
        indicator.start(4)
        indicator.start(10, 2)
        assert indicator.total == 4
        assert indicator.completed == 0
        indicator.stop()

    def test_stop_when_idle_is_noop(self, tty_console: Console):
        drained = []
        indicator = ProgressIndicator(tty_console, on_drained=lambda: drained.append(True))
        indicator.stop()
        assert drained == []

    def test_raising_total_keeps_bar_active(self, tty_console: Console):
        indicator = ProgressIndicator(tty_console)
        indicator.start(2)
        indicator.set_total(5)
        indicator.set_completed(2)
        assert indicator.is_active is True
        indicator.stop()
        assert indicator.state is IndicatorState.IDLE

    def test_lines_logged_while_active_are_not_lost(self, tty_console: Console):
        indicator = ProgressIndicator(tty_console)
        indicator.start(2)
        indicator.log("first line")
        indicator.set_completed(2)
        indicator.log("second line")

        written = tty_console.file.getvalue()
        assert "first line" in written
        assert "second line" in written
        assert written.index("first line") < written.index("second line")

    def test_restart_after_drain(self, tty_console: Console):
        indicator = ProgressIndicator(tty_console)
        indicator.start(1)
        indicator.advance(1)
        assert indicator.state is IndicatorState.IDLE
        indicator.start(3, 1)
        assert indicator.is_active is True
        assert indicator.completed == 1
        indicator.stop()

    def test_line_logged_on_drained_is_written(self, tty_console: Console):
        states = []

        def on_drained():
            states.append(indicator.state)
            indicator.log("after teardown")

        indicator = ProgressIndicator(tty_console, on_drained=on_drained)
        indicator.start(1)
        indicator.log("during build")
        indicator.advance(1)

        assert states == [IndicatorState.IDLE]
        written = tty_console.file.getvalue()
        assert written.index("during build") < written.index("after teardown")

    def test_description_is_not_markup(self, tty_console: Console):
        indicator = ProgressIndicator(tty_console)
        indicator.start(2, description="lib[/] [bold]")
        indicator.set_description("my[red]lib")
        assert indicator.description == "my[red]lib"
        indicator.stop()
        assert "my[red]lib" in tty_console.file.getvalue()


class TestWriterIndicatorGating:
    def test_created_for_interactive_terminal(self, tty_writer: ConsoleWriter, bus: EventBus):
        bus.publish(BuildMetadataEvent(projects_to_build=["a", "b"]))
        assert tty_writer.indicator.is_active is True
        assert tty_writer.indicator.total == 4

    def test_not_created_without_terminal(self, writer: ConsoleWriter, bus: EventBus):
        bus.publish(BuildMetadataEvent(projects_to_build=["a"]))
        assert writer.indicator.state is IndicatorState.IDLE

    @pytest.mark.parametrize("level", ["silly", "verbose", "silent"])
    def test_not_created_for_verbose_or_silent(
        self, tty_writer: ConsoleWriter, bus: EventBus, level: str
    ):
        config.set_level(level)
        bus.publish(BuildMetadataEvent(projects_to_build=["a"]))
        assert tty_writer.indicator.state is IndicatorState.IDLE

    def test_tracks_task_totals(self, tty_writer: ConsoleWriter, bus: EventBus):
        bus.publish(BuildMetadataEvent(projects_to_build=["a"]))
        bus.publish(
            ProjectMetadataEvent(project_name="a", project_type="library", tasks_to_run=["t"])
        )
        assert tty_writer.indicator.total == 2

    def test_torn_down_when_build_completes(
        self, tty_writer: ConsoleWriter, bus: EventBus, make_build_status
    ):
        bus.publish(BuildMetadataEvent(projects_to_build=["a"]))
        bus.publish(make_build_status("a"))
        assert tty_writer.indicator.is_active is True

        bus.publish(make_build_status("a", "project-build-end"))
        assert tty_writer.indicator.state is IndicatorState.IDLE

    def test_recreated_on_next_need(
        self, tty_writer: ConsoleWriter, bus: EventBus, make_build_status
    ):
        bus.publish(BuildMetadataEvent(projects_to_build=["a"]))
        bus.publish(make_build_status("a", "project-build-skip"))
        assert tty_writer.indicator.state is IndicatorState.IDLE

        bus.publish(BuildMetadataEvent(projects_to_build=["b"]))
        assert tty_writer.indicator.is_active is True
        assert tty_writer.indicator.completed == tty_writer.progress.completed_units

    def test_disable_mid_build_stops_indicator(
        self, tty_writer: ConsoleWriter, bus: EventBus, tty_console: Console
    ):
        bus.publish(BuildMetadataEvent(projects_to_build=["a", "b"]))
        assert tty_writer.indicator.is_active is True

        tty_writer.disable()
        assert tty_writer.indicator.state is IndicatorState.IDLE

        before = tty_console.file.getvalue()
        bus.publish(LogEvent(level="info", message="after", module_name="m"))
        assert tty_console.file.getvalue() == before

    def test_log_lines_routed_through_indicator(
        self, tty_writer: ConsoleWriter, bus: EventBus, tty_console: Console
    ):
        bus.publish(BuildMetadataEvent(projects_to_build=["a"]))
        bus.publish(LogEvent(level="info", message="while building", module_name="m"))
        tty_writer.disable()
        assert "while building" in tty_console.file.getvalue()


class TestWriterIndicatorDescription:
    @pytest.mark.parametrize("project_name", ["lib[/]", "my[red]lib"])
    def test_bracketed_project_names_shown_verbatim(
        self,
        tty_writer: ConsoleWriter,
        bus: EventBus,
        tty_console: Console,
        make_build_status,
        project_name: str,
    ):
        bus.publish(BuildMetadataEvent(projects_to_build=[project_name, "b"]))
        bus.publish(make_build_status(project_name))

        expected = f"Building library project {project_name}..."
        assert tty_writer.indicator.description.endswith(expected)

        bus.publish(make_build_status(project_name, "project-build-end"))
        tty_writer.disable()
        assert expected in tty_console.file.getvalue()
