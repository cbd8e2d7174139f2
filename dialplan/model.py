"""Script graph objects handed to the translator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .blocks import BlockKind


@dataclass(frozen=True)
class Block:
    """A node in a script graph."""

    local_id: int
    kind: BlockKind
    label: str
    parameters: Tuple[str, ...] = ()
    caption: str = ""

    def parameter(self, index: int, default: str = "") -> str:
        """Return the ``index``-th parameter or ``default`` when it is missing."""
        if index < len(self.parameters):
            return self.parameters[index]
        return default


@dataclass(frozen=True)
class Connection:
    """Directed edge between two blocks of the same script."""

    source_local_id: int
    target_local_id: int


@dataclass
class Script:
    id: int
    name: str
    blocks: list[Block] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)


@dataclass
class Extension:
    name: str
    script: Optional[Script] = None


@dataclass
class Context:
    name: str
    extensions: list[Extension] = field(default_factory=list)


__all__ = ["Block", "Connection", "Script", "Extension", "Context"]
