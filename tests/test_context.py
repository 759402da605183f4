from __future__ import annotations

import click
import pytest
from click.testing import CliRunner

from depregistry.config import DepRegistryConfig
from depregistry.context import DepRegistryContext, pass_context


@pytest.mark.unit
class TestDepRegistryContext:
    """Tests for DepRegistryContext."""

    def test_defaults(self) -> None:
        ctx = DepRegistryContext()

        assert ctx.config_path is None
        assert ctx.verbose == 0
        assert ctx.color is True
        assert ctx.config is None

    def test_get_config_falls_back_to_defaults(self) -> None:
        ctx = DepRegistryContext()

        config = ctx.get_config()

        assert config == DepRegistryConfig()
        assert ctx.get_config() is config

    def test_get_config_returns_loaded(self) -> None:
        ctx = DepRegistryContext()
        ctx.config = DepRegistryConfig(interpreter_name="python")

        assert ctx.get_config().interpreter_name == "python"

    def test_slots_reject_unknown_attributes(self) -> None:
        ctx = DepRegistryContext()

        with pytest.raises(AttributeError):
            ctx.unknown = 1  # type: ignore[attr-defined]


@pytest.mark.unit
class TestPassContext:
    """Tests for the pass_context decorator."""

    def test_creates_context_when_missing(self) -> None:
        @click.command()
        @pass_context
        def show(ctx: DepRegistryContext) -> None:
            click.echo(type(ctx).__name__)
            click.echo(ctx.get_config().interpreter_name)

        result = CliRunner().invoke(show, [])

        assert result.exit_code == 0
        assert result.output == "DepRegistryContext\njulia\n"
