import json
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))
sys.path.append(str(Path(__file__).resolve().parent))

from dialplan import cli
from dialplan.config import get_settings
from graphs import sample_document


@pytest.fixture
def data_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "dialplan.json"
    path.write_text(json.dumps(sample_document()), "utf-8")
    monkeypatch.setenv("DATA_PATH", str(tmp_path / "unused.json"))
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield path
    get_settings.cache_clear()  # type: ignore[attr-defined]


def test_prints_full_dialplan(data_file, capsys):
    assert cli.main(["--data", str(data_file), "dialplan"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("[incoming]\n")
    assert "; Generated by" in out


def test_prints_single_script(data_file, capsys):
    assert cli.main(["--data", str(data_file), "script", "--id", "7"]) == 0
    assert "AGI(agi://10.0.0.5:4573/lookup.agi)" in capsys.readouterr().out


def test_reports_errors(data_file, capsys):
    assert cli.main(["--data", str(data_file), "script", "--id", "3"]) == 1
    assert "start block" in capsys.readouterr().err
