"""
Shared context object for depregistry CLI commands.

The group callback fills one :class:`DepRegistryContext` per invocation and
subcommands receive it through :data:`pass_context`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from depregistry.config import DepRegistryConfig


class DepRegistryContext:
    """Global context object for depregistry CLI commands.

    Attributes:
        config_path: Path to the configuration file, if one was used.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration (``None`` until the group callback runs).
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[DepRegistryConfig] = None

    def get_config(self) -> DepRegistryConfig:
        """Return the loaded configuration, falling back to defaults."""
        if self.config is None:
            self.config = DepRegistryConfig()
        return self.config


#: Click decorator for injecting :class:`DepRegistryContext` into commands.
pass_context = click.make_pass_decorator(DepRegistryContext, ensure=True)
