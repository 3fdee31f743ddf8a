"""
Notification Formatter Module

Turns a parsed Levanta event into a human-readable notification.

Two forms exist:
- the short form, a single line returned in the webhook response
- the detailed form, sent to the configured notification sink

Both are pure functions of the event.
"""

from typing import Callable, Dict, List

from levanta_webhook.models import (
    Event,
    EventType,
    LinkDisabledData,
    ProductData,
    ProductRemovedData,
)

SHORT_TEMPLATES: Dict[str, str] = {
    EventType.LINK_DISABLED.value: "🔗 Link Disabled: {data[id]} - {data[sourceName]}",
    EventType.PRODUCT_ACCESS_GAINED.value: "✅ Access Gained: {data[asin]} on {data[marketplace]}",
    EventType.PRODUCT_ADDED.value: "➕ Product Added: {data[asin]} on {data[marketplace]}",
    EventType.PRODUCT_REMOVED.value: "➖ Product Removed: {data[asin]}",
}

DEFAULT_TEMPLATE = "📨 Event: {type}"


def format_notification(event: Event) -> str:
    """
    Format the one-line notification for an event.

    Unknown event types fall back to a generic message.

    Raises:
        KeyError: If a known event type lacks a field its message needs
    """
    template = SHORT_TEMPLATES.get(event.type, DEFAULT_TEMPLATE)
    return template.format(type=event.type, data=event.data)


def _link_details(event: Event) -> List[str]:
    data = LinkDisabledData.model_validate(event.data)
    return [f"URL: {data.url}"]


def _product_details(event: Event) -> List[str]:
    data = ProductData.model_validate(event.data)
    return [
        f"Commission: {data.commission_percent}",
        f"Price: {data.pricing.price} {data.pricing.currency}",
    ]


def _removed_details(event: Event) -> List[str]:
    data = ProductRemovedData.model_validate(event.data)
    return [f"Marketplace: {data.marketplace}"]


DETAIL_BUILDERS: Dict[str, Callable[[Event], List[str]]] = {
    EventType.LINK_DISABLED.value: _link_details,
    EventType.PRODUCT_ACCESS_GAINED.value: _product_details,
    EventType.PRODUCT_ADDED.value: _product_details,
    EventType.PRODUCT_REMOVED.value: _removed_details,
}


def format_detailed_notification(event: Event) -> str:
    """
    Format the multi-line notification sent to chat sinks.

    The first line is always the short form.

    Raises:
        KeyError: If the short form cannot be built
        pydantic.ValidationError: If the event data lacks a detail field
    """
    lines = [format_notification(event)]
    builder = DETAIL_BUILDERS.get(event.type)
    if builder:
        lines.extend(builder(event))
    return "\n".join(lines)
