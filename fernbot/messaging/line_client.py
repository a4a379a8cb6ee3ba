# Reply client for the LINE Messaging API (async SDK).

import logging

from linebot.v3.messaging import (
    AsyncApiClient,
    AsyncMessagingApi,
    Configuration,
    ReplyMessageRequest,
    TextMessage,
)
from linebot.v3.messaging.exceptions import ApiException

from ..errors import DeliveryError

logger = logging.getLogger("fernbot.messaging.line")

# LINE rejects text messages longer than this.
MAX_TEXT_LENGTH = 5000


class LineMessenger:
    def __init__(self, channel_access_token: str):
        self.name = "line"
        self._client = AsyncApiClient(Configuration(access_token=channel_access_token))
        self._api = AsyncMessagingApi(self._client)

    async def reply(self, reply_token: str, text: str) -> None:
        request = ReplyMessageRequest(
            reply_token=reply_token,
            messages=[TextMessage(text=text[:MAX_TEXT_LENGTH])],
        )
        try:
            await self._api.reply_message(request)
            logger.debug("Replied to %s", reply_token)
        except ApiException as e:
            raise DeliveryError(f"LINE reply failed ({e.status}): {e.reason}") from e

    async def close(self) -> None:
        await self._client.close()
