# ============================================================
# Fern & Nannam LINE bot: FastAPI app
# ------------------------------------------------------------
# This app wires everything together:
#   - LINE webhook (signature check + concurrent event handling)
#   - QA engine over an entry store (Firestore or local YAML)
#   - LINE or echo messenger for replies
#   - health / debug / similarity-test routes
# ============================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from linebot.v3 import WebhookParser
from linebot.v3.exceptions import InvalidSignatureError
from pydantic import BaseModel

# --- Local imports ---
from fernbot.bot import Bot, log_trace
from fernbot.errors import StoreUnavailableError
from fernbot.messaging import EchoMessenger
from fernbot.search import QAEngine, SignalWeights, SimilarityScorer
from fernbot.search.types import finite_or_none
from fernbot.settings import Settings, configure_logging, settings
from fernbot.store import YamlEntryStore

logger = logging.getLogger("fernbot.app")


# ------------------------------------------------------------
# 🔧 Dependency selection
# ------------------------------------------------------------
def build_store(cfg: Settings):
    if cfg.firebase_configured:
        from fernbot.store.firestore import FirestoreEntryStore
        return FirestoreEntryStore.from_settings(cfg)
    logger.warning("FIREBASE_PROJECT_ID not set; reading entries from %s", cfg.ENTRIES_PATH)
    return YamlEntryStore(cfg.ENTRIES_PATH)


def build_messenger(cfg: Settings):
    if cfg.line_configured:
        from fernbot.messaging.line_client import LineMessenger
        return LineMessenger(cfg.CHANNEL_ACCESS_TOKEN)
    logger.warning("CHANNEL_ACCESS_TOKEN not set; replies go to the echo messenger")
    return EchoMessenger()


def build_engine(cfg: Settings, store) -> QAEngine:
    return QAEngine(
        store=store,
        collection=cfg.COLLECTION_NAME,
        scorer=SimilarityScorer(SignalWeights.from_yaml(cfg.SCORING_CONFIG)),
        threshold=cfg.ACCEPT_THRESHOLD,
        suggestion_limit=cfg.SUGGESTION_LIMIT,
        trace_hook=log_trace,
    )


# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class WebhookResponse(BaseModel):
    results: List[Dict[str, Any]]


class SimilarityPayload(BaseModel):
    query: str
    persona: str
    cleaned: str
    keywords: List[str]
    threshold: float
    accepted: bool
    best: Optional[Dict[str, Any]]
    ranked: List[Dict[str, Any]]
    reply: str


# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
def create_app(cfg: Optional[Settings] = None, store=None, messenger=None) -> FastAPI:
    """Build the app. ``store``/``messenger`` override the settings-based choice."""
    cfg = cfg or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(cfg.LOG_LEVEL)
        if not cfg.CHANNEL_SECRET:
            logger.warning("CHANNEL_SECRET not set; webhook signatures are checked against an empty secret")
        app.state.store = store if store is not None else build_store(cfg)
        app.state.messenger = messenger if messenger is not None else build_messenger(cfg)
        app.state.engine = build_engine(cfg, app.state.store)
        app.state.bot = Bot(app.state.engine, app.state.messenger)
        app.state.parser = WebhookParser(cfg.CHANNEL_SECRET or "")
        logger.info("%s started (env=%s, collection=%s)", cfg.APP_NAME, cfg.ENV, cfg.COLLECTION_NAME)
        yield
        await app.state.messenger.close()
        app.state.store.close()

    app = FastAPI(title=cfg.APP_NAME, version="1.0", lifespan=lifespan)

    # --------------------------------------------------------
    # 💬 LINE webhook
    # --------------------------------------------------------
    @app.post("/webhook", response_model=WebhookResponse)
    async def webhook(request: Request, x_line_signature: str = Header(default="")):
        body = (await request.body()).decode("utf-8")
        try:
            events = request.app.state.parser.parse(body, x_line_signature)
        except InvalidSignatureError:
            raise HTTPException(status_code=400, detail="Invalid signature")
        except (ValueError, KeyError):
            raise HTTPException(status_code=400, detail="Malformed webhook body")

        results = await request.app.state.bot.handle_events(events)
        return {"results": results}

    # --------------------------------------------------------
    # 🔎 Similarity test route
    # --------------------------------------------------------
    @app.get("/test-similarity/{q}", response_model=SimilarityPayload)
    async def similarity(q: str, request: Request):
        engine: QAEngine = request.app.state.engine
        try:
            outcome = await run_in_threadpool(engine.search, q)
        except StoreUnavailableError as e:
            logger.exception("Store unavailable during similarity test")
            raise HTTPException(status_code=503, detail=str(e))
        if outcome is None:
            raise HTTPException(status_code=422, detail="Query is empty")

        best = outcome.result.best
        return SimilarityPayload(
            query=outcome.query.raw,
            persona=outcome.query.persona.value,
            cleaned=outcome.query.cleaned,
            keywords=outcome.query.keywords,
            threshold=engine.threshold,
            accepted=outcome.accepted is not None,
            best=None if best is None else {
                "id": best.entry.id,
                "question": best.entry.question_text,
                "score": finite_or_none(best.score),
                "signals": best.signals,
            },
            ranked=outcome.trace.top,
            reply=engine.reply_for(outcome),
        )

    # --------------------------------------------------------
    # 🧭 Health / debug
    # --------------------------------------------------------
    @app.get("/health")
    def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/debug")
    async def debug(request: Request):
        state = request.app.state
        documents: Dict[str, Any]
        try:
            entries = await run_in_threadpool(
                state.store.fetch_all, cfg.COLLECTION_NAME, state.engine.detector.answer_fields
            )
            documents = {
                "count": len(entries),
                "questions": [e.question_text for e in entries[:10]],
            }
        except StoreUnavailableError as e:
            logger.exception("Store unavailable during debug check")
            documents = {"error": str(e)}
        return {
            "app": cfg.APP_NAME,
            "env": cfg.ENV,
            "debug": cfg.DEBUG,
            "collection": cfg.COLLECTION_NAME,
            "store": type(state.store).__name__,
            "messenger": type(state.messenger).__name__,
            "line_configured": cfg.line_configured,
            "channel_secret_set": bool(cfg.CHANNEL_SECRET),
            "firebase_configured": cfg.firebase_configured,
            "threshold": cfg.ACCEPT_THRESHOLD,
            "documents": documents,
        }

    @app.get("/")
    def hello():
        return {"message": "LINE Bot is running! 🎉"}

    return app


app = create_app()
