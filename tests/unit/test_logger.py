"""Tests for Logger — event emission, fallback output, module names."""

from __future__ import annotations

import pytest

from buildlog import config, get_logger
from buildlog.core.errors import InvalidArgumentError, UnknownLevelError
from buildlog.core.event_bus import EventBus
from buildlog.loggers.logger import Logger
from buildlog.models.events import EventKind
from buildlog.models.levels import MESSAGE_LEVELS, Level


class TestLoggerConstruction:
    def test_missing_module_name(self):
        with pytest.raises(InvalidArgumentError, match="Missing module_name"):
            Logger("")

    def test_illegal_module_name(self):
        with pytest.raises(InvalidArgumentError, match="Invalid module name: my module"):
            Logger("my module")

    def test_allowed_special_characters(self):
        log = Logger("@scope/pkg:module-name_1.x")
        assert log.module_name == "@scope/pkg:module-name_1.x"

    def test_get_logger(self):
        log = get_logger("my:module")
        assert isinstance(log, Logger)
        assert log.module_name == "my:module"

    def test_no_silent_method(self):
        assert not hasattr(Logger("my:module"), "silent")


class TestLogEvents:
    @pytest.mark.parametrize("level", MESSAGE_LEVELS)
    def test_level_methods_publish_events(self, bus: EventBus, level: str):
        received = []
        bus.subscribe(EventKind.LOG, received.append)
        log = Logger("my:module", bus=bus)

        getattr(log, level)("Message", 1)

        assert len(received) == 1
        assert received[0].level is Level(level)
        assert received[0].message == "Message 1"
        assert received[0].module_name == "my:module"

    def test_event_published_regardless_of_threshold(self, bus: EventBus):
        received = []
        bus.subscribe(EventKind.LOG, received.append)
        config.set_level("error")

        Logger("my:module", bus=bus).silly("quiet")

        assert len(received) == 1

    def test_non_string_parts_are_rendered(self, bus: EventBus):
        received = []
        bus.subscribe(EventKind.LOG, received.append)
        Logger("my:module", bus=bus).info("config", {"a": 1})
        assert received[0].message == "config {'a': 1}"

    def test_context_fields_copied_into_event(self, bus: EventBus):
        received = []
        bus.subscribe(EventKind.LOG, received.append)
        Logger("my:module", bus=bus).log(
            "warn", "Oops", project_name="p", project_type="library", task_name="minify"
        )
        event = received[0]
        assert (event.project_name, event.project_type, event.task_name) == (
            "p",
            "library",
            "minify",
        )

    def test_unknown_context_field_rejected(self, bus: EventBus):
        with pytest.raises(InvalidArgumentError, match="Unknown context fields: colour"):
            Logger("my:module", bus=bus).log("info", "m", colour="red")

    def test_silent_level_rejected(self, bus: EventBus):
        received = []
        bus.subscribe(EventKind.LOG, received.append)
        with pytest.raises(InvalidArgumentError, match="silent"):
            Logger("my:module", bus=bus).log("silent", "m")
        assert received == []

    def test_unknown_level_rejected(self, bus: EventBus):
        with pytest.raises(UnknownLevelError):
            Logger("my:module", bus=bus).log("debug", "m")

    def test_is_level_enabled_follows_threshold(self):
        log = Logger("my:module")
        assert log.is_level_enabled("info") is True
        config.set_level("warn")
        assert log.is_level_enabled("info") is False


class TestFallbackOutput:
    def test_writes_to_stderr_without_subscribers(self, bus: EventBus, capsys):
        Logger("my:module", bus=bus).info("Message 1")
        assert capsys.readouterr().err == "[info] my:module: Message 1\n"

    def test_fallback_respects_threshold(self, bus: EventBus, capsys):
        Logger("my:module", bus=bus).verbose("Message 1")
        assert capsys.readouterr().err == ""

    def test_no_fallback_with_subscribers(self, bus: EventBus, capsys):
        bus.subscribe(EventKind.LOG, lambda e: None)
        Logger("my:module", bus=bus).error("Message 1")
        assert capsys.readouterr().err == ""
