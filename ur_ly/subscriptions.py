"""Creating and removing subscriptions."""

import logging
import uuid
from typing import Any, Optional
from urllib.parse import urlparse

from .exceptions import ValidationError
from .models import Subscription, utc_now_iso
from .registry import SubscriptionRegistry
from .utils import extract_ur_property_ids

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 1
PROPERTY_URL_EXAMPLE = "https://www.ur-net.go.jp/chintai/kanto/tokyo/00_0000.html"


def is_valid_webhook_url(url: str) -> bool:
    """True for an absolute http(s) URL with no whitespace or control characters."""
    if any(ord(ch) <= 32 or ord(ch) == 127 for ch in url):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)


def parse_threshold(value: Any) -> int:
    """Parse a threshold from request input; missing or blank means the default."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_THRESHOLD
    if isinstance(value, bool):
        raise ValidationError("Threshold must be a whole number")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError("Threshold must be a whole number")
    try:
        threshold = int(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValidationError("Threshold must be a whole number")
    if threshold < 0:
        raise ValidationError("Threshold must not be negative")
    return threshold


def create_subscription(
    registry: SubscriptionRegistry,
    property_url: Optional[str],
    webhook_url: Optional[str],
    threshold: Any = None,
) -> Subscription:
    """
    Validate a subscribe request and store the new subscription.

    Raises:
        ValidationError: If a field is missing or the property URL is not a UR property page.
        StorageError: If the subscription could not be saved.
    """
    if not property_url or not webhook_url:
        raise ValidationError("Missing required fields")
    if not isinstance(property_url, str) or not isinstance(webhook_url, str):
        raise ValidationError("propertyUrl and webhookUrl must be strings")
    if not is_valid_webhook_url(webhook_url):
        raise ValidationError("Invalid webhook URL. Expected an absolute http(s) URL")

    ids = extract_ur_property_ids(property_url)
    if ids is None:
        raise ValidationError(
            f"Invalid UR property URL. Expected format: {PROPERTY_URL_EXAMPLE}"
        )

    subscription = Subscription(
        id=str(uuid.uuid4()),
        property_url=property_url,
        shisya=ids.shisya,
        danchi=ids.danchi,
        slack_webhook_url=webhook_url,
        threshold=parse_threshold(threshold),
        created_at=utc_now_iso(),
    )
    registry.put(subscription)
    logger.info(
        f"Created subscription {subscription.id} for {ids.shisya}_{ids.danchi} "
        f"(threshold {subscription.threshold})"
    )
    return subscription


def delete_subscription(registry: SubscriptionRegistry, subscription_id: str) -> None:
    """Remove a subscription; unknown ids are ignored."""
    registry.delete(subscription_id)
    logger.info(f"Deleted subscription {subscription_id}")
