# ============================================================
# Bot orchestrator
# ------------------------------------------------------------
# Turns inbound LINE webhook events into replies:
#   - only text message events are answered
#   - each event runs independently (asyncio.gather)
#   - the blocking store read runs in the threadpool
#   - store and delivery failures never escape to the webhook
# ============================================================

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional

from fastapi.concurrency import run_in_threadpool
from linebot.v3.webhooks import MessageEvent, TextMessageContent

from .errors import DeliveryError, StoreUnavailableError
from .search import QAEngine, SearchTrace
from .search import messages

logger = logging.getLogger("fernbot.bot")

STATUS_REPLIED = "replied"
STATUS_IGNORED = "ignored"
STATUS_FAILED = "failed"


def log_trace(trace: SearchTrace) -> None:
    """Trace hook: one INFO summary line, the full trace at DEBUG."""
    logger.info(
        "search persona=%s keywords=%s candidates=%d best=%s score=%s outcome=%s",
        trace.persona.value,
        trace.keywords,
        trace.candidates,
        trace.best_id,
        trace.best_score,
        trace.outcome,
    )
    logger.debug("search trace: %s", trace.as_dict())


def event_text(event: Any) -> Optional[str]:
    """Trimmed text of a text-message event, else ``None``."""
    if not isinstance(event, MessageEvent) or not isinstance(event.message, TextMessageContent):
        return None
    text = (event.message.text or "").strip()
    return text or None


class Bot:
    def __init__(self, engine: QAEngine, messenger):
        self.engine = engine
        self.messenger = messenger

    async def reply_text(self, text: str) -> Optional[str]:
        """Run the engine for ``text``; store failures become an apology."""
        try:
            reply = await run_in_threadpool(self.engine.answer, text)
        except StoreUnavailableError:
            logger.exception("Entry store unavailable while answering %r", text)
            return messages.STORE_ERROR
        return reply.text if reply is not None else None

    async def handle_event(self, event: Any) -> str:
        text = event_text(event)
        if text is None:
            return STATUS_IGNORED

        answer = await self.reply_text(text)
        if answer is None:
            return STATUS_IGNORED

        try:
            await self.messenger.reply(event.reply_token, answer)
        except DeliveryError:
            logger.exception("Reply delivery failed")
            return STATUS_FAILED
        return STATUS_REPLIED

    async def _handle_safely(self, event: Any) -> Dict[str, Any]:
        try:
            status = await self.handle_event(event)
        except Exception:
            logger.exception("Unhandled error for event %s", getattr(event, "type", "?"))
            status = STATUS_FAILED
        return {"type": getattr(event, "type", None), "status": status}

    async def handle_events(self, events: Iterable[Any]) -> List[Dict[str, Any]]:
        """Handle a webhook batch; one status dict per event, in input order."""
        return list(await asyncio.gather(*(self._handle_safely(e) for e in events)))
