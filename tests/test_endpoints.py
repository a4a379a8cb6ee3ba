from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from conftest import COLLECTION, SECRET, drink_doc, line_body, sign, text_event, unfollow_event
from fernbot.app import create_app
from fernbot.messaging import EchoMessenger
from fernbot.settings import Settings
from fernbot.store import MemoryEntryStore


@pytest.fixture
def messenger():
    return EchoMessenger()


@pytest.fixture
def client(messenger):
    cfg = Settings(_env_file=None, CHANNEL_SECRET=SECRET, COLLECTION_NAME=COLLECTION, LOG_LEVEL="DEBUG")
    store = MemoryEntryStore({COLLECTION: [drink_doc(), {"id": "food", "question": "ชอบกินอะไร"}]})
    app = create_app(cfg, store=store, messenger=messenger)
    with TestClient(app) as c:
        yield c


def post_webhook(client, body, signature=None):
    return client.post(
        "/webhook",
        content=body.encode("utf-8"),
        headers={
            "Content-Type": "application/json",
            "X-Line-Signature": signature if signature is not None else sign(body),
        },
    )


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "running" in r.json()["message"]


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "OK"
    assert data["timestamp"]


def test_webhook_replies(client, messenger):
    body = line_body(text_event("เฟิร์นชอบดื่มอะไร", reply_token="r1"), unfollow_event())
    r = post_webhook(client, body)
    assert r.status_code == 200
    assert [x["status"] for x in r.json()["results"]] == ["replied", "ignored"]
    assert messenger.sent == [("r1", "ชาเย็น")]


def test_webhook_rejects_bad_signature(client, messenger):
    body = line_body(text_event("ชอบดื่มอะไร"))
    r = post_webhook(client, body, signature="bogus")
    assert r.status_code == 400
    assert messenger.sent == []


def test_webhook_rejects_signed_body_without_events(client, messenger):
    r = post_webhook(client, '{"destination": "U0"}')
    assert r.status_code == 400
    assert messenger.sent == []


def test_webhook_empty_batch(client):
    r = post_webhook(client, line_body())
    assert r.status_code == 200
    assert r.json() == {"results": []}


def test_debug_reports_store_without_secrets(client):
    r = client.get("/debug")
    assert r.status_code == 200
    data = r.json()
    assert data["documents"]["count"] == 2
    assert data["store"] == "MemoryEntryStore"
    assert data["channel_secret_set"] is True
    assert data["debug"] is True
    assert SECRET not in r.text


def test_similarity_route(client):
    r = client.get("/test-similarity/" + quote("ชอบดื่มอะไร"))
    assert r.status_code == 200
    data = r.json()
    assert data["persona"] == "Both"
    assert data["accepted"] is True
    assert data["best"]["id"] == "drink"
    assert data["best"]["score"] == 1000
    assert data["reply"] == "เฟิร์น: ชาเย็น\n\nน่านน้ำ: กาแฟ"
    assert data["ranked"][1]["score"] is None


def test_similarity_route_no_match(client):
    r = client.get("/test-similarity/" + quote("สวัสดีครับ"))
    assert r.status_code == 200
    data = r.json()
    assert data["accepted"] is False
    assert data["best"] is None
    assert data["keywords"] == []


def test_debug_reports_debug_flag(messenger):
    cfg = Settings(_env_file=None, CHANNEL_SECRET=SECRET, COLLECTION_NAME=COLLECTION, DEBUG=False)
    app = create_app(cfg, store=MemoryEntryStore({}), messenger=messenger)
    with TestClient(app) as c:
        data = c.get("/debug").json()
    assert data["debug"] is False
    assert data["documents"]["count"] == 0
