from __future__ import annotations

import io
import logging
from typing import Generator

import pytest

from depregistry.utils.logger import (
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore the ``depregistry`` logger after each test."""
    yield
    disable_logging()
    logging.getLogger("depregistry").propagate = True


def _record(level: int = logging.WARNING, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord("depregistry.test", level, __file__, 1, msg, None, None)


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger naming."""

    def test_root(self) -> None:
        assert get_logger().name == "depregistry"
        assert get_logger("depregistry").name == "depregistry"

    def test_relative_name(self) -> None:
        assert get_logger("pruner").name == "depregistry.pruner"

    def test_qualified_name(self) -> None:
        assert get_logger("depregistry.core.loader").name == "depregistry.core.loader"


@pytest.mark.unit
class TestLevelForVerbosity:
    """Tests for level_for_verbosity."""

    @pytest.mark.parametrize(
        "verbose, level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_mapping(self, verbose: int, level: int) -> None:
        assert level_for_verbosity(verbose) == level


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging and disable_logging."""

    def test_writes_to_stream(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.INFO, stream=stream)

        get_logger("test").info("loaded %d packages", 3)

        assert "INFO: loaded 3 packages" in stream.getvalue()
        assert is_logging_configured()

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.WARNING, stream=stream)

        get_logger("test").info("hidden")
        get_logger("test").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_repeated_setup_replaces_handler(self) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger("depregistry").handlers) == 1

    def test_verbose_format_includes_logger_name(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.DEBUG, verbose=True, stream=stream)

        get_logger("pruner").debug("pass 1")

        assert "depregistry.pruner - DEBUG - pass 1" in stream.getvalue()

    def test_disable_logging(self) -> None:
        stream = io.StringIO()
        setup_logging(stream=stream)

        disable_logging()
        get_logger("test").error("silenced")

        assert stream.getvalue() == ""
        assert not is_logging_configured()


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_plain_without_color(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False)

        assert formatter.format(_record()) == "WARNING: hello"

    def test_colored_on_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(ColoredFormatter, "_should_use_color", staticmethod(lambda: True))
        formatter = ColoredFormatter("%(levelname)s: %(message)s")
        record = _record()

        output = formatter.format(record)

        assert output == "\033[33mWARNING\033[0m: hello"
        assert record.levelname == "WARNING"

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert ColoredFormatter._should_use_color() is False
