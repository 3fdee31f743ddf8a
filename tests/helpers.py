"""
Test Helpers

Shared builders used by the fixtures and test modules.
"""

import hashlib
import hmac
from typing import List

from levanta_webhook.config import Settings
from levanta_webhook.notifications import NotificationSink

TEST_SECRET = "testsecret"


class RecordingSink(NotificationSink):
    """Sink that keeps delivered messages in memory."""

    name = "recording"

    def __init__(self, fail: bool = False):
        self.messages: List[str] = []
        self.fail = fail

    async def deliver(self, message: str) -> None:
        if self.fail:
            raise RuntimeError("sink is down")
        self.messages.append(message)


def make_settings(**overrides) -> Settings:
    """Build settings that ignore the environment's .env file."""
    values = {
        "levanta_webhook_secret": TEST_SECRET,
        "discord_webhook_url": None,
        "slack_webhook_url": None,
        "telegram_bot_token": None,
        "telegram_chat_id": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def sign(body: bytes, secret: str = TEST_SECRET) -> str:
    """Compute the signature header value for a body."""
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()
