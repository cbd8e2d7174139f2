"""Errors raised while loading and translating dialplan scripts."""

from __future__ import annotations


class DialplanError(Exception):
    """Base class for every translation failure."""


class BlockNotFoundError(DialplanError):
    """A script graph references a block that does not exist."""


class LoadError(DialplanError):
    """The store could not produce a script or the context list."""


class ScriptNotFoundError(LoadError):
    """No script is stored under the requested id."""

    def __init__(self, script_id: int):
        super().__init__(f"Script {script_id} not found")
        self.script_id = script_id


__all__ = ["DialplanError", "BlockNotFoundError", "LoadError", "ScriptNotFoundError"]
