"""Translation of script graphs into Asterisk dialplan text."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from threading import Lock
from typing import TYPE_CHECKING, Iterable, List, Optional

from .blocks import BlockKind, render, render_host_switch, render_switch
from .exceptions import BlockNotFoundError
from .model import Block, Context, Script

if TYPE_CHECKING:
    from .store import DialplanStore

logger = logging.getLogger("dialplan.translator")

GOTO_LINE = "\tsame = n,Goto({label})\n"
HANGUP_LINE = "\tsame = n,Hangup()\n"
CACHE_WARNING = "; WARNING! Could not load dialplan. The cache is used.\n\n"


class ScriptCompiler:
    """Walks one script graph from its start block.

    Every reachable block is rendered once. Reaching an already rendered
    block emits a ``Goto`` to its label; a block without a successor ends its
    branch with ``Hangup``. Switch blocks end their branch too: their default
    target is walked next, then the case targets in reverse connection order.
    """

    def __init__(self, script: Script, host_address: str):
        self._script = script
        self._host_address = host_address
        self._blocks = {}
        for block in script.blocks:
            self._blocks.setdefault(block.local_id, block)

    def compile(self) -> str:
        result: List[str] = []
        visited: set[int] = set()
        pending: List[Block] = [self.find_start_block()]
        while pending:
            self._walk_branch(pending.pop(), result, visited, pending)
        return "".join(result)

    def find_start_block(self) -> Block:
        for block in self._script.blocks:
            if block.kind is BlockKind.START:
                return block
        raise BlockNotFoundError(f"Could not find start block in script {self._script.id}")

    def find_block(self, local_id: int) -> Block:
        try:
            return self._blocks[local_id]
        except KeyError:
            raise BlockNotFoundError(
                f"Could not find block with local id {local_id} in script {self._script.id}"
            ) from None

    def find_next_block(self, block: Block) -> Optional[Block]:
        for connection in self._script.connections:
            if connection.source_local_id == block.local_id:
                return self.find_block(connection.target_local_id)
        return None

    def _targets(self, block: Block) -> Iterable[Block]:
        for connection in self._script.connections:
            if connection.source_local_id == block.local_id:
                yield self.find_block(connection.target_local_id)

    def find_case_blocks(self, switch: Block) -> List[Block]:
        return [target for target in self._targets(switch) if target.kind.is_case]

    def find_default_block(self, switch: Block) -> Block:
        for target in self._targets(switch):
            if target.kind is BlockKind.FALSE_CASE:
                return target
        raise BlockNotFoundError(
            f"Could not find default case block for block {switch.local_id} in script {self._script.id}"
        )

    def _walk_branch(
        self,
        block: Optional[Block],
        result: List[str],
        visited: set[int],
        pending: List[Block],
    ) -> None:
        while block is not None:
            if block.local_id in visited:
                result.append(GOTO_LINE.format(label=block.label))
                return
            if block.kind.is_switcher:
                self._handle_switch(block, result, visited, pending)
                return
            result.append(render(block))
            visited.add(block.local_id)
            block = self.find_next_block(block)
        result.append(HANGUP_LINE)

    def _handle_switch(
        self,
        block: Block,
        result: List[str],
        visited: set[int],
        pending: List[Block],
    ) -> None:
        cases = self.find_case_blocks(block)
        default = self.find_default_block(block)
        if block.kind.is_host_dependent:
            result.append(render_host_switch(block, cases, self._host_address))
        else:
            result.append(render_switch(block, cases))
        visited.add(block.local_id)
        pending.extend(cases)
        pending.append(default)


def compile_script(script: Script, host_address: str) -> str:
    """Return the dialplan body for ``script``."""
    return ScriptCompiler(script, host_address).compile()


def assemble_dialplan(contexts: Iterable[Context], host_address: str) -> str:
    """Render every context with its extensions and their scripts."""
    result: List[str] = []
    for context in contexts:
        result.append(f"[{context.name}]\n")
        for extension in context.extensions:
            result.append(f"exten = {extension.name},1,NoOp()\n")
            if extension.script is not None:
                result.append(compile_script(extension.script, host_address))
    return "".join(result)


class DialplanCache:
    """Last successfully assembled dialplan."""

    def __init__(self, text: str = ""):
        self._lock = Lock()
        self._text = text

    def get(self) -> str:
        with self._lock:
            return self._text

    def set(self, text: str) -> None:
        with self._lock:
            self._text = text

    def __bool__(self) -> bool:
        return bool(self.get())


def build_summary(generator_name: str, elapsed_ms: int, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    stamp = now.strftime("%Y.%m.%d %H:%M:%S.") + f"{now.microsecond // 1000:03d}"
    return f"\n; Generated by {generator_name} in {elapsed_ms}ms\n; {stamp}\n"


class TranslatorService:
    """Entry points used by the API and the CLI."""

    def __init__(self, store: "DialplanStore", cache: DialplanCache, generator_name: str):
        self._store = store
        self._cache = cache
        self._generator_name = generator_name

    @property
    def cache(self) -> DialplanCache:
        return self._cache

    def translate_script(self, script_id: int) -> str:
        host_address = self._store.current_host_address()
        return compile_script(self._store.load_script(script_id), host_address)

    def translate_dialplan(self) -> str:
        started = time.perf_counter()
        result: List[str] = []
        try:
            self._refresh_cache()
        except Exception:
            logger.exception("Could not load dialplan")
            result.append(CACHE_WARNING)
        result.append(self._cache.get())
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        result.append(build_summary(self._generator_name, elapsed_ms))
        return "".join(result)

    def _refresh_cache(self) -> None:
        host_address = self._store.current_host_address()
        contexts = self._store.load_all_contexts()
        text = assemble_dialplan(contexts, host_address)
        self._cache.set(text)
        logger.info("Dialplan rebuilt: %d contexts, %d characters", len(contexts), len(text))


__all__ = [
    "ScriptCompiler",
    "compile_script",
    "assemble_dialplan",
    "DialplanCache",
    "build_summary",
    "TranslatorService",
]
