"""CLI package for the host metric check."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name == "app":
        return import_module("cli.app")
    raise AttributeError(name)

# The Typer application lives in ``cli.app``; it is not re-exported here so that
# tests can patch attributes on the ``cli.app`` module path.

__all__ = []
