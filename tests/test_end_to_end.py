import json
from pathlib import Path

import pytest
from django.core.cache import cache
from django.test import Client


@pytest.fixture(autouse=True)
def _force_celery_eager(settings):
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True
    settings.CELERY_TASK_STORE_EAGER_RESULT = True
    cache.clear()


def _post_start(client: Client, payload: dict) -> str:
    r = client.post("/placement/solve/start", data=json.dumps(payload), content_type="application/json")
    assert r.status_code == 200, r.content
    task_id = r.json()["task_id"]
    assert isinstance(task_id, str)
    return task_id


def _get_status(client: Client, task_id: str) -> dict:
    r = client.get(f"/placement/solve/status/{task_id}")
    assert r.status_code == 200
    return r.json()


def test_payload_ilots_end_to_end():
    client = Client()
    payload = json.loads((Path(__file__).parent / "data" / "payload_ilots.json").read_text(encoding="utf-8"))
    data = _get_status(client, _post_start(client, payload))
    assert data.get("status") == "SUCCESS", data
    assignment = data["assignment"]
    noms = {s["name"] for s in payload["students"]}
    assert set(assignment.values()) == noms
    # aucune case sans siège dans le plan
    exists = payload["grid"]["exists"]
    assert all(exists[int(k)] for k in assignment)


def test_start_json_invalide():
    r = Client().post("/placement/solve/start", data="{pas du json", content_type="application/json")
    assert r.status_code == 400


def test_start_liste_refusee():
    r = Client().post("/placement/solve/start", data="[]", content_type="application/json")
    assert r.status_code == 400


def test_start_get_interdit():
    r = Client().get("/placement/solve/start")
    assert r.status_code == 405


class _FauxResultat:
    def __init__(self, state, result=None):
        self.state = state
        self.result = result


def test_status_en_attente(monkeypatch):
    monkeypatch.setattr("celery.result.AsyncResult", lambda task_id: _FauxResultat("PENDING"))
    assert _get_status(Client(), "abc") == {"status": "PENDING"}


def test_status_erreur_interne(monkeypatch):
    monkeypatch.setattr("celery.result.AsyncResult", lambda task_id: _FauxResultat("FAILURE", RuntimeError("boum")))
    data = _get_status(Client(), "abc")
    assert data["status"] == "FAILURE"
    assert data["error"] == "erreur_interne"
    assert data["message"] == "boum"
