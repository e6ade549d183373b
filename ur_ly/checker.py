"""The poll cycle: check every subscription for vacancies and notify."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import URApiConfig
from .models import Subscription, utc_now_iso
from .registry import SubscriptionRegistry
from .slack_notifier import send_slack_notification
from .ur_client import fetch_property_availability

logger = logging.getLogger(__name__)


@dataclass
class CheckSummary:
    """Outcome of one poll cycle."""
    checked: int = 0
    notified: int = 0
    failed: int = 0

    def to_dict(self):
        return {'checked': self.checked, 'notified': self.notified, 'failed': self.failed}


def check_subscription(
    subscription: Subscription,
    registry: SubscriptionRegistry,
    client: httpx.Client,
    api_config: URApiConfig,
) -> bool:
    """
    Poll one subscription, notify if the threshold is met, and save its timestamps.

    The record is only saved when the UR API produced a count; a failed poll
    leaves the stored subscription untouched.

    Returns:
        True if a notification was delivered.

    Raises:
        PollError: If the UR API could not be queried.
        StorageError: If the updated subscription could not be saved.
    """
    availability = fetch_property_availability(
        subscription.shisya,
        subscription.danchi,
        client,
        api_url=api_config.api_url,
    )
    vacancy_count = availability.count
    subscription.last_checked = utc_now_iso()

    notified = False
    if vacancy_count >= subscription.threshold:
        message = f"Vacancy available: {vacancy_count} room(s) found!"
        notified = send_slack_notification(
            subscription.slack_webhook_url,
            message,
            subscription.property_url,
            vacancy_count,
            client,
        )
        if notified:
            subscription.last_notified = utc_now_iso()
            logger.info(f"Notification sent for subscription {subscription.id}")
        else:
            logger.warning(f"Notification failed for subscription {subscription.id}")

    registry.put(subscription)
    return notified


def check_all_subscriptions(
    registry: SubscriptionRegistry,
    api_config: URApiConfig,
    client: Optional[httpx.Client] = None,
) -> CheckSummary:
    """
    Run one poll cycle over every stored subscription, sequentially.

    A failure on one subscription is logged and does not stop the cycle.

    Raises:
        StorageError: If the subscriptions could not be listed.
    """
    subscriptions = registry.list_all()
    logger.info(f"Checking {len(subscriptions)} subscription(s)")

    summary = CheckSummary()
    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=api_config.timeout_seconds)

    try:
        for subscription in subscriptions:
            try:
                if check_subscription(subscription, registry, client, api_config):
                    summary.notified += 1
                summary.checked += 1
            except Exception as e:
                summary.failed += 1
                logger.error(f"Error checking subscription {subscription.id}: {e}", exc_info=True)
                continue
    finally:
        if own_client:
            client.close()

    logger.info(
        f"Check complete: {summary.checked} checked, "
        f"{summary.notified} notified, {summary.failed} failed"
    )
    return summary
