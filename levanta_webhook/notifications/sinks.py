"""
Chat Notification Sinks

Concrete sinks for the chat platforms the receiver can forward to.
"""

from typing import Any, Dict, Optional

import httpx

from levanta_webhook.notifications.base import HTTPNotificationSink


class DiscordSink(HTTPNotificationSink):
    """Posts messages to a Discord channel webhook."""

    name = "discord"

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.webhook_url = webhook_url

    def build_request(self, message: str) -> tuple[str, Dict[str, Any]]:
        return self.webhook_url, {"content": message}


class SlackSink(HTTPNotificationSink):
    """Posts messages to a Slack incoming webhook."""

    name = "slack"

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.webhook_url = webhook_url

    def build_request(self, message: str) -> tuple[str, Dict[str, Any]]:
        return self.webhook_url, {"text": message}


class TelegramSink(HTTPNotificationSink):
    """Sends messages through the Telegram Bot API."""

    name = "telegram"

    TELEGRAM_API_BASE = "https://api.telegram.org"

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.bot_token = bot_token
        self.chat_id = chat_id

    def build_request(self, message: str) -> tuple[str, Dict[str, Any]]:
        url = f"{self.TELEGRAM_API_BASE}/bot{self.bot_token}/sendMessage"
        return url, {"chat_id": self.chat_id, "text": message}
