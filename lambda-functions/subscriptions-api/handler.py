"""
Lambda function serving the subscribe form and the subscription API.
Invoked through API Gateway (proxy integration).
"""

import logging
from typing import Dict, Any

from ur_ly.api import handle_request
from ur_ly.config import load_config
from ur_ly.registry import SubscriptionRegistry

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

config = load_config()
registry = SubscriptionRegistry.from_config(config.storage)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Handle subscription requests.

    Routes:
    - GET / - Subscribe form
    - POST /subscribe - Create subscription
    - GET /subscriptions - List subscriptions
    - DELETE /unsubscribe/{id} - Delete subscription
    """
    return handle_request(event, registry)
