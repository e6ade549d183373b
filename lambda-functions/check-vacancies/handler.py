"""
Lambda function to check every subscription for UR vacancies.
Triggered by EventBridge on a fixed schedule.
"""

import json
import logging
from typing import Dict, Any

from ur_ly.checker import check_all_subscriptions
from ur_ly.config import load_config
from ur_ly.exceptions import StorageError
from ur_ly.registry import SubscriptionRegistry

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

config = load_config()
registry = SubscriptionRegistry.from_config(config.storage)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """Run one poll cycle over all subscriptions."""
    logger.info("Running scheduled vacancy check...")
    try:
        summary = check_all_subscriptions(registry, config.ur_api)
    except StorageError as e:
        logger.error(f"Error in check-vacancies: {e}", exc_info=True)
        return {
            'statusCode': 500,
            'body': json.dumps({'message': 'Check failed'})
        }

    return {
        'statusCode': 200,
        'body': json.dumps({'message': 'Check complete', **summary.to_dict()})
    }
