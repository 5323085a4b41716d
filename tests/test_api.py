import pytest

from spweb.api import MAX_COUNT, app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_home(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"


def test_config_defaults(client):
    data = client.get("/config").get_json()
    assert data["length"] == 40
    assert data["upper"] == [8, None]


def test_generate_with_defaults(client):
    resp = client.post("/generate", json={})
    assert resp.status_code == 200
    assert resp.headers["Cache-Control"] == "no-store"
    (pw,) = resp.get_json()["passwords"]
    assert len(pw) == 40


def test_generate_custom_config(client):
    resp = client.post("/generate", json={
        "length": 12,
        "upper": [2, None],
        "lower": [2, None],
        "digits": [2, None],
        "symbols": [2, 4],
        "symbol_charset": "!@#",
        "count": 5,
    })
    passwords = resp.get_json()["passwords"]
    assert len(passwords) == 5
    for pw in passwords:
        assert len(pw) == 12
        assert pw[0] not in "!@#"


def test_generate_rejects_bad_config(client):
    resp = client.post("/generate", json={"length": 12, "upper": [10, None]})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "PolicyViolation"
    assert "exceed" in body["message"]


@pytest.mark.parametrize("count", [0, MAX_COUNT + 1, "3", True])
def test_generate_rejects_bad_count(client, count):
    resp = client.post("/generate", json={"count": count})
    assert resp.status_code == 400


def test_generate_rejects_malformed_json(client):
    resp = client.post("/generate", data="{not json", content_type="application/json")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "BadRequest"
    assert "passwords" not in body


def test_generate_without_body_uses_defaults(client):
    resp = client.post("/generate")
    assert resp.status_code == 200
    assert len(resp.get_json()["passwords"][0]) == 40
