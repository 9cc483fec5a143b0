from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from users_api import main
from users_api.api.routes import get_user_repo
from users_api.core.config import Settings, get_settings
from users_api.main import app

FORM = {"Content-Type": "application/x-www-form-urlencoded"}


@pytest.fixture
def client(store):
    app.dependency_overrides[get_user_repo] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_user_lifecycle(client, store):
    response = client.post("/user/add", content="id=42&uname=alice", headers=FORM)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"status": True, "data": {"id": "42", "uname": "alice"}}

    response = client.get("/user/get/42")
    assert response.json()["data"] == {"Item": {"id": "42", "uname": "alice"}}

    response = client.put("/user/update/42", content="uname=bob", headers=FORM)
    assert response.json()["data"] == {"Attributes": {"id": "42", "uname": "bob"}}

    response = client.get("/user/list")
    assert response.json()["data"]["Items"] == [{"id": "42", "uname": "bob"}]

    response = client.delete("/user/remove/42")
    assert response.json()["data"] == {"Attributes": {"id": "42", "uname": "bob"}}
    assert store.items == {}


def test_add_validation_failure(client):
    response = client.post("/user/add", content="id=abc&uname=!!", headers=FORM)
    assert response.status_code == 400
    assert response.json() == {"status": False, "error": ["invalid id", "invalid uname"]}


def test_update_missing_user(client):
    response = client.put("/user/update/7", content="uname=bob", headers=FORM)
    assert response.status_code == 400
    assert response.json()["error"]["kind"] == "ConditionalCheckFailedException"


def test_get_missing_user(client):
    response = client.get("/user/get/404")
    assert response.status_code == 200
    assert response.json() == {"status": True, "data": {}}


def test_host_header_does_not_change_store(client, store):
    client.post("/user/add", content="id=1&uname=a", headers={**FORM, "Host": "localhost:3000"})
    response = client.get("/user/get/1", headers={"Host": "api.example.com"})
    assert response.json()["data"] == {"Item": {"id": "1", "uname": "a"}}
    assert store.items == {"1": {"id": "1", "uname": "a"}}


def test_duplicate_ids_rejected_when_configured(client, store):
    app.dependency_overrides[get_settings] = lambda: Settings(reject_duplicate_ids=True)
    client.post("/user/add", content="id=1&uname=a", headers=FORM)

    response = client.post("/user/add", content="id=1&uname=b", headers=FORM)

    assert response.status_code == 400
    assert response.json()["error"]["kind"] == "ConditionalCheckFailedException"
    assert store.items["1"]["uname"] == "a"


def test_add_with_undecodable_body(client, store):
    response = client.post("/user/add", content=b"id=1&uname=\xff", headers=FORM)

    assert response.status_code == 400
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"status": False, "error": ["invalid uname"]}
    assert store.items == {}


def test_update_with_undecodable_body(client, store):
    store.items["1"] = {"id": "1", "uname": "a"}

    response = client.put("/user/update/1", content=b"uname=\xfe\xff", headers=FORM)

    assert response.status_code == 400
    assert response.json() == {"status": False, "error": "invalid uname"}


@pytest.mark.parametrize(
    "host, local",
    [(None, True), ("api.example.com", False), ("", False)],
)
def test_startup_selects_store_from_settings(monkeypatch, store, host, local):
    if host is None:
        host = main.settings.local_host
    monkeypatch.setattr(main.settings, "host", host)
    get_store = Mock(return_value=store)
    monkeypatch.setattr(main, "get_store", get_store)

    with TestClient(app) as client:
        assert app.state.store is store
        client.post("/user/add", content="id=5&uname=e", headers={**FORM, "Host": "localhost:3000"})

    config = get_store.call_args.args[0]
    assert config.local is local
    assert config.url == (main.settings.local_store_url if local else main.settings.store_url)
    assert store.items == {"5": {"id": "5", "uname": "e"}}
    assert store.closed is True
