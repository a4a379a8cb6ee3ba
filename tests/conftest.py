import base64
import hashlib
import hmac
import json
import uuid

import pytest

from fernbot.search import Entry, PersonaDetector, QAEngine
from fernbot.store import MemoryEntryStore

SECRET = "test-channel-secret"
COLLECTION = "audio_content"


def drink_doc(**overrides):
    doc = {
        "id": "drink",
        "question": "ชอบดื่มอะไร",
        "keywords": ["เครื่องดื่ม"],
        "fern_answer": "ชาเย็น",
        "nannam_answer": "กาแฟ",
    }
    doc.update(overrides)
    return doc


def entry(doc_id="e1", **fields):
    return Entry(id=doc_id, **fields)


def sign(body: str, secret: str = SECRET) -> str:
    digest = hmac.new(secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def _base_event(event_type: str) -> dict:
    return {
        "type": event_type,
        "mode": "active",
        "timestamp": 1692251666727,
        "source": {"type": "user", "userId": "U4af4980629000000000000000000000"},
        "webhookEventId": uuid.uuid4().hex.upper()[:26],
        "deliveryContext": {"isRedelivery": False},
    }


def text_event(text: str, reply_token: str = "reply-1") -> dict:
    event = _base_event("message")
    event["replyToken"] = reply_token
    event["message"] = {
        "type": "text",
        "id": "468789577898262530",
        "quoteToken": "q3Plxr4AgKd",
        "text": text,
    }
    return event


def image_event(reply_token: str = "reply-img") -> dict:
    event = _base_event("message")
    event["replyToken"] = reply_token
    event["message"] = {
        "type": "image",
        "id": "468789577898262531",
        "quoteToken": "q3Plxr4AgKe",
        "contentProvider": {"type": "line"},
    }
    return event


def unfollow_event() -> dict:
    return _base_event("unfollow")


def line_body(*events: dict) -> str:
    return json.dumps(
        {"destination": "U0000000000000000000000000000000", "events": list(events)},
        ensure_ascii=False,
    )


@pytest.fixture
def store():
    return MemoryEntryStore({COLLECTION: [drink_doc()]})


@pytest.fixture
def detector():
    return PersonaDetector()


@pytest.fixture
def engine(store, detector):
    return QAEngine(store=store, collection=COLLECTION, detector=detector)
