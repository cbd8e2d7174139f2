import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from dialplan.blocks import BlockKind, render, render_host_switch, render_switch
from dialplan.model import Block


def make(kind, *parameters, label="x", local_id=1):
    return Block(local_id=local_id, kind=kind, label=label, parameters=tuple(parameters))


def test_every_kind_has_exactly_one_rendering_form():
    for kind in BlockKind:
        if kind.is_host_dependent:
            assert kind.is_switcher
    assert BlockKind.AGI_SWITCH.is_host_dependent
    assert BlockKind.SWITCH.is_switcher and not BlockKind.SWITCH.is_host_dependent
    assert not BlockKind.ANSWER.is_switcher
    assert BlockKind.CASE.is_case and not BlockKind.FALSE_CASE.is_case


@pytest.mark.parametrize(
    ("kind", "parameters", "expected"),
    [
        (BlockKind.START, (), "\tsame = n(x),NoOp(Start)\n"),
        (BlockKind.ANSWER, (), "\tsame = n(x),Answer()\n"),
        (BlockKind.PLAYBACK, ("welcome",), "\tsame = n(x),Playback(welcome)\n"),
        (BlockKind.DIAL, ("SIP/100",), "\tsame = n(x),Dial(SIP/100)\n"),
        (BlockKind.DIAL, ("SIP/100", "20", "tT"), "\tsame = n(x),Dial(SIP/100,20,tT)\n"),
        (BlockKind.SET, ("LANG", "en"), "\tsame = n(x),Set(LANG=en)\n"),
        (BlockKind.CASE, ("3",), "\tsame = n(x),NoOp(Case 3)\n"),
        (BlockKind.FALSE_CASE, (), "\tsame = n(x),NoOp(Default)\n"),
    ],
)
def test_plain_renderings(kind, parameters, expected):
    assert render(make(kind, *parameters)) == expected


def test_switch_renders_one_goto_per_case_in_order():
    cases = [make(BlockKind.CASE, "1", label="one"), make(BlockKind.CASE, "2", label="two")]
    text = render_switch(make(BlockKind.SWITCH, "${EXTEN}", label="sw"), cases)
    assert text == (
        "\tsame = n(sw),NoOp(Switch)\n"
        '\tsame = n,GotoIf($["${EXTEN}" = "1"]?one)\n'
        '\tsame = n,GotoIf($["${EXTEN}" = "2"]?two)\n'
    )


def test_if_uses_condition_verbatim():
    cases = [make(BlockKind.CASE, label="yes")]
    text = render_switch(make(BlockKind.IF, "${COUNT} > 3", label="check"), cases)
    assert text.splitlines()[1] == "\tsame = n,GotoIf($[${COUNT} > 3]?yes)"


def test_host_switch_embeds_host_address():
    cases = [make(BlockKind.CASE, "ok", label="good")]
    text = render_host_switch(make(BlockKind.AGI_SWITCH, "check.agi", "RESULT", label="agi"), cases, "agi.local")
    assert text == (
        "\tsame = n(agi),AGI(agi://agi.local/check.agi)\n"
        '\tsame = n,GotoIf($["${RESULT}" = "ok"]?good)\n'
    )


def test_switch_cannot_render_without_cases():
    with pytest.raises(ValueError):
        render(make(BlockKind.SWITCH, "${EXTEN}"))


def test_host_switch_requires_host():
    with pytest.raises(ValueError):
        render_switch(make(BlockKind.AGI_SWITCH, "check.agi"), [])
