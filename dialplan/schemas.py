"""Pydantic schemas for the stored document and the API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .blocks import BlockKind
from .model import Block, Connection, Script


class BlockData(BaseModel):
    local_id: int
    kind: BlockKind
    label: str | None = Field(default=None, description="Priority label; defaults to block<local_id>.")
    parameters: list[str] = Field(default_factory=list)
    caption: str = ""

    def to_block(self) -> Block:
        return Block(
            local_id=self.local_id,
            kind=self.kind,
            label=self.label or f"block{self.local_id}",
            parameters=tuple(self.parameters),
            caption=self.caption,
        )


class ConnectionData(BaseModel):
    source: int
    target: int

    def to_connection(self) -> Connection:
        return Connection(source_local_id=self.source, target_local_id=self.target)


class ScriptData(BaseModel):
    id: int
    name: str
    blocks: list[BlockData] = Field(default_factory=list)
    connections: list[ConnectionData] = Field(default_factory=list)

    def to_script(self) -> Script:
        return Script(
            id=self.id,
            name=self.name,
            blocks=[block.to_block() for block in self.blocks],
            connections=[connection.to_connection() for connection in self.connections],
        )


class ExtensionData(BaseModel):
    name: str
    script_id: int | None = None


class ContextData(BaseModel):
    name: str
    extensions: list[ExtensionData] = Field(default_factory=list)


class ConfigurationData(BaseModel):
    fastagi_host: str | None = None


class DialplanDocument(BaseModel):
    """Root of the JSON file backing :class:`~dialplan.store.DialplanStore`."""

    configuration: ConfigurationData = Field(default_factory=ConfigurationData)
    scripts: list[ScriptData] = Field(default_factory=list)
    contexts: list[ContextData] = Field(default_factory=list)


class ScriptSummary(BaseModel):
    id: int
    name: str


class ScriptList(BaseModel):
    scripts: list[ScriptSummary]


class HostAddress(BaseModel):
    value: str = Field(..., min_length=1, description="FastAGI host, optionally with a port.")


__all__ = [
    "BlockData",
    "ConnectionData",
    "ScriptData",
    "ExtensionData",
    "ContextData",
    "ConfigurationData",
    "DialplanDocument",
    "ScriptSummary",
    "ScriptList",
    "HostAddress",
]
