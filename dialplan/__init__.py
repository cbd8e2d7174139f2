"""Asterisk dialplan translator for graph-authored call scripts."""

from .blocks import BlockKind
from .exceptions import BlockNotFoundError, DialplanError, LoadError, ScriptNotFoundError
from .model import Block, Connection, Context, Extension, Script
from .translator import DialplanCache, TranslatorService, assemble_dialplan, compile_script

__all__ = [
    "BlockKind",
    "Block",
    "Connection",
    "Context",
    "Extension",
    "Script",
    "DialplanError",
    "BlockNotFoundError",
    "LoadError",
    "ScriptNotFoundError",
    "DialplanCache",
    "TranslatorService",
    "assemble_dialplan",
    "compile_script",
]
