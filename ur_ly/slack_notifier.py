"""Slack webhook notification module."""

import logging
from typing import Any, Dict

import httpx

from .exceptions import NotifyError

logger = logging.getLogger(__name__)


def build_slack_message(message: str, property_url: str, vacancy_count: int) -> Dict[str, Any]:
    """Build the Block Kit payload for a vacancy alert."""
    return {
        'text': message,
        'blocks': [
            {
                'type': 'section',
                'text': {
                    'type': 'mrkdwn',
                    'text': f"*UR-ly Alert*\n{message}",
                },
            },
            {
                'type': 'section',
                'fields': [
                    {
                        'type': 'mrkdwn',
                        'text': f"*Available Rooms:*\n{vacancy_count}",
                    },
                    {
                        'type': 'mrkdwn',
                        'text': f"*Property URL:*\n<{property_url}|View Property>",
                    },
                ],
            },
        ],
    }


def post_to_webhook(webhook_url: str, payload: Dict[str, Any], client: httpx.Client) -> None:
    """
    POST a JSON payload to a Slack incoming webhook.

    Raises:
        NotifyError: If the request fails or Slack answers with a non-2xx status.
    """
    try:
        response = client.post(webhook_url, json=payload)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise NotifyError(f"Request to Slack webhook failed: {e}") from e

    if not response.is_success:
        raise NotifyError(f"Slack webhook returned {response.status_code}: {response.text[:200]}")


def send_slack_notification(
    webhook_url: str,
    message: str,
    property_url: str,
    vacancy_count: int,
    client: httpx.Client,
) -> bool:
    """
    Send a vacancy alert to Slack.

    Args:
        webhook_url: Slack incoming webhook URL.
        message: Headline text of the alert.
        property_url: Public URL of the property, linked in the message.
        vacancy_count: Number of vacant rooms found.
        client: HTTP client used for the request.

    Returns:
        True if Slack accepted the message, False otherwise.
    """
    payload = build_slack_message(message, property_url, vacancy_count)
    try:
        post_to_webhook(webhook_url, payload, client)
    except NotifyError as e:
        logger.error(f"Failed to send Slack notification: {e}")
        return False

    logger.info(f"Slack notification sent ({vacancy_count} room(s))")
    return True
