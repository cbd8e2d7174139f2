import asyncio
import json
import sys
from pathlib import Path

import pytest
from httpx import AsyncClient, ASGITransport

sys.path.append(str(Path(__file__).resolve().parents[1]))
sys.path.append(str(Path(__file__).resolve().parent))

from dialplan.app import create_app
from dialplan.config import get_settings
from graphs import sample_document


@pytest.fixture
def app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    data_file = tmp_path / "dialplan.json"
    data_file.write_text(json.dumps(sample_document()), "utf-8")
    monkeypatch.setenv("DATA_PATH", str(data_file))
    get_settings.cache_clear()  # type: ignore[attr-defined]
    yield create_app()
    get_settings.cache_clear()  # type: ignore[attr-defined]


def _body(text: str) -> str:
    return text.split("\n; Generated by")[0]


@pytest.mark.asyncio
async def test_concurrent_dialplan_requests_agree(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        async def get():
            resp = await client.get("/dialplan")
            assert resp.status_code == 200
            return resp.text

        results = await asyncio.gather(*(get() for _ in range(8)))

    bodies = {_body(text) for text in results}
    assert len(bodies) == 1
    assert bodies.pop() == app.state.translator.cache.get()


@pytest.mark.asyncio
async def test_script_translation_while_dialplan_rebuilds(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        responses = await asyncio.gather(
            client.get("/dialplan"),
            client.get("/scripts/7/translation"),
            client.put("/configuration/fastagi-host", json={"value": "agi.other"}),
            client.get("/dialplan"),
        )

    assert [r.status_code for r in responses] == [200, 200, 200, 200]
    for response in (responses[0], responses[3]):
        assert not response.text.startswith("; WARNING!")
