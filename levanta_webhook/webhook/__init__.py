"""
Webhook Package

This package contains webhook handling components:
- handler: FastAPI route handler
- security: Webhook signature verification
- formatter: Event to notification text
"""

from levanta_webhook.webhook.handler import router

__all__ = ["router"]
