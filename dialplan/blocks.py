"""Block kinds and the dialplan lines each of them renders to.

Every kind belongs to exactly one rendering form:

* plain blocks render from the block alone;
* switch blocks also receive their case targets, in connection order;
* host dependent switch blocks additionally receive the FastAGI host.

The translator picks the form from ``is_switcher``/``is_host_dependent``.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Sequence

if TYPE_CHECKING:
    from .model import Block


class BlockKind(str, Enum):
    START = "Start"
    ANSWER = "Answer"
    HANGUP = "Hangup"
    PLAYBACK = "Playback"
    BACKGROUND = "Background"
    WAIT = "Wait"
    WAIT_EXTEN = "WaitExten"
    DIAL = "Dial"
    QUEUE = "Queue"
    VOICEMAIL = "Voicemail"
    SET = "Set"
    NOOP = "NoOp"
    READ = "Read"
    SWITCH = "Switch"
    IF = "If"
    AGI_SWITCH = "AgiSwitch"
    CASE = "Case"
    FALSE_CASE = "FalseCase"

    @property
    def is_switcher(self) -> bool:
        return self in _SWITCH_RENDERERS or self in _HOST_SWITCH_RENDERERS

    @property
    def is_host_dependent(self) -> bool:
        return self in _HOST_SWITCH_RENDERERS

    @property
    def is_case(self) -> bool:
        return self is BlockKind.CASE


def _line(block: "Block", app: str, *args: str) -> str:
    values = list(args)
    while values and not values[-1]:
        values.pop()
    return f"\tsame = n({block.label}),{app}({','.join(values)})\n"


def _goto_if(condition: str, target: "Block") -> str:
    return f"\tsame = n,GotoIf($[{condition}]?{target.label})\n"


def _compare(left: str, case: "Block") -> str:
    return f'"{left}" = "{case.parameter(0)}"'


# ── Plain blocks ──────────────────────────────────────────────────────────────

def _app_without_args(app: str) -> Callable[["Block"], str]:
    return lambda block: _line(block, app)


def _app_with_args(app: str, count: int) -> Callable[["Block"], str]:
    return lambda block: _line(block, app, *(block.parameter(i) for i in range(count)))


def _render_set(block: "Block") -> str:
    return _line(block, "Set", f"{block.parameter(0)}={block.parameter(1)}")


_RENDERERS: Dict[BlockKind, Callable[["Block"], str]] = {
    BlockKind.START: lambda block: _line(block, "NoOp", "Start"),
    BlockKind.ANSWER: _app_without_args("Answer"),
    BlockKind.HANGUP: _app_without_args("Hangup"),
    BlockKind.PLAYBACK: _app_with_args("Playback", 1),
    BlockKind.BACKGROUND: _app_with_args("Background", 1),
    BlockKind.WAIT: _app_with_args("Wait", 1),
    BlockKind.WAIT_EXTEN: _app_with_args("WaitExten", 1),
    BlockKind.DIAL: _app_with_args("Dial", 3),
    BlockKind.QUEUE: _app_with_args("Queue", 1),
    BlockKind.VOICEMAIL: _app_with_args("VoiceMail", 1),
    BlockKind.SET: _render_set,
    BlockKind.NOOP: _app_with_args("NoOp", 1),
    BlockKind.READ: _app_with_args("Read", 3),
    BlockKind.CASE: lambda block: _line(block, "NoOp", f"Case {block.parameter(0)}".rstrip()),
    BlockKind.FALSE_CASE: lambda block: _line(block, "NoOp", "Default"),
}


# ── Switch blocks ─────────────────────────────────────────────────────────────

def _render_switch(block: "Block", cases: Sequence["Block"]) -> str:
    expression = block.parameter(0)
    lines = [_line(block, "NoOp", "Switch")]
    lines.extend(_goto_if(_compare(expression, case), case) for case in cases)
    return "".join(lines)


def _render_if(block: "Block", cases: Sequence["Block"]) -> str:
    condition = block.parameter(0)
    lines = [_line(block, "NoOp", "If")]
    lines.extend(_goto_if(condition, case) for case in cases)
    return "".join(lines)


_SWITCH_RENDERERS: Dict[BlockKind, Callable[["Block", Sequence["Block"]], str]] = {
    BlockKind.SWITCH: _render_switch,
    BlockKind.IF: _render_if,
}


def _render_agi_switch(block: "Block", cases: Sequence["Block"], host_address: str) -> str:
    script, variable = block.parameter(0), block.parameter(1, "AGISTATUS")
    lines = [_line(block, "AGI", f"agi://{host_address}/{script}")]
    lines.extend(_goto_if(_compare(f"${{{variable}}}", case), case) for case in cases)
    return "".join(lines)


_HOST_SWITCH_RENDERERS: Dict[
    BlockKind, Callable[["Block", Sequence["Block"], str], str]
] = {
    BlockKind.AGI_SWITCH: _render_agi_switch,
}


def _check_registry() -> None:
    forms = (_RENDERERS, _SWITCH_RENDERERS, _HOST_SWITCH_RENDERERS)
    for kind in BlockKind:
        owners = sum(kind in form for form in forms)
        if owners != 1:
            raise RuntimeError(f"Block kind {kind.value} must have exactly one renderer, found {owners}")


_check_registry()


# ── Public API ────────────────────────────────────────────────────────────────

def render(block: "Block") -> str:
    if block.kind.is_switcher:
        raise ValueError(f"{block.kind.value} block {block.local_id} needs its case targets to render")
    return _RENDERERS[block.kind](block)


def render_switch(block: "Block", case_targets: Sequence["Block"]) -> str:
    if block.kind.is_host_dependent:
        raise ValueError(f"{block.kind.value} block {block.local_id} needs the FastAGI host to render")
    return _SWITCH_RENDERERS[block.kind](block, case_targets)


def render_host_switch(block: "Block", case_targets: Sequence["Block"], host_address: str) -> str:
    return _HOST_SWITCH_RENDERERS[block.kind](block, case_targets, host_address)


__all__ = ["BlockKind", "render", "render_switch", "render_host_switch"]
