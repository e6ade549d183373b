"""
HTTP front door for subscriptions, served through API Gateway proxy events.

Routes:
- GET /                    - Subscribe form
- POST /subscribe          - Create a subscription
- GET /subscriptions       - List all subscriptions
- DELETE /unsubscribe/{id} - Delete a subscription
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict

from .exceptions import StorageError, ValidationError
from .landing_page import LANDING_PAGE_HTML
from .registry import SubscriptionRegistry
from .subscriptions import create_subscription, delete_subscription

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'GET,POST,DELETE,OPTIONS',
}


def _json_response(status_code: int, body: Any) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {**CORS_HEADERS, 'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def _read_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """Decode the JSON request body; raises ValidationError if it is not a JSON object."""
    raw = event.get('body') or ''
    try:
        if event.get('isBase64Encoded'):
            raw = base64.b64decode(raw).decode('utf-8')
        body = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise ValidationError("Invalid request")
    if not isinstance(body, dict):
        raise ValidationError("Invalid request")
    return body


def handle_request(event: Dict[str, Any], registry: SubscriptionRegistry) -> Dict[str, Any]:
    """Route an API Gateway proxy event to the matching handler."""
    http_method = event.get('httpMethod', '')
    path = event.get('path', '') or '/'

    try:
        if http_method == 'OPTIONS':
            return {'statusCode': 200, 'headers': CORS_HEADERS, 'body': ''}

        if path == '/' and http_method == 'GET':
            return {
                'statusCode': 200,
                'headers': {'Content-Type': 'text/html; charset=utf-8'},
                'body': LANDING_PAGE_HTML,
            }
        if path == '/subscribe' and http_method == 'POST':
            return handle_subscribe(event, registry)
        if path == '/subscriptions' and http_method == 'GET':
            return handle_list_subscriptions(registry)
        if path.startswith('/unsubscribe/') and http_method == 'DELETE':
            subscription_id = path.split('/')[2]
            if subscription_id:
                return handle_unsubscribe(subscription_id, registry)

        return {'statusCode': 404, 'headers': CORS_HEADERS, 'body': 'Not Found'}

    except Exception as e:
        logger.error(f"Error handling {http_method} {path}: {e}", exc_info=True)
        return _json_response(500, {'error': 'Internal server error'})


def handle_subscribe(event: Dict[str, Any], registry: SubscriptionRegistry) -> Dict[str, Any]:
    """Create a subscription from ``{propertyUrl, webhookUrl, threshold?}``."""
    try:
        body = _read_body(event)
        subscription = create_subscription(
            registry,
            property_url=body.get('propertyUrl'),
            webhook_url=body.get('webhookUrl'),
            threshold=body.get('threshold'),
        )
    except ValidationError as e:
        return _json_response(400, {'error': str(e)})
    except StorageError:
        return _json_response(500, {'error': 'Failed to save subscription'})

    return _json_response(200, {'success': True, 'id': subscription.id})


def handle_list_subscriptions(registry: SubscriptionRegistry) -> Dict[str, Any]:
    try:
        subscriptions = registry.list_all()
    except StorageError:
        return _json_response(500, {'error': 'Failed to list subscriptions'})

    return _json_response(200, {
        'count': len(subscriptions),
        'subscriptions': [s.to_dict() for s in subscriptions],
    })


def handle_unsubscribe(subscription_id: str, registry: SubscriptionRegistry) -> Dict[str, Any]:
    try:
        delete_subscription(registry, subscription_id)
    except StorageError:
        return _json_response(500, {'error': 'Failed to unsubscribe'})

    return _json_response(200, {'success': True})
