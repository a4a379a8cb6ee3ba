# Dummy messenger for local dev and tests: keeps replies in memory instead of
# calling the LINE API.

import logging
from typing import List, Tuple

logger = logging.getLogger("fernbot.messaging.echo")


class EchoMessenger:
    def __init__(self):
        self.name = "echo-dev"
        self.sent: List[Tuple[str, str]] = []

    async def reply(self, reply_token: str, text: str) -> None:
        self.sent.append((reply_token, text))
        logger.info("[ECHO REPLY] %s -> %s", reply_token, text.replace("\n", " | "))

    async def close(self) -> None:
        pass
