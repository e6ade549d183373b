"""DynamoDB operations for storing subscriptions."""

import logging
from typing import Any, List

import boto3
from botocore.exceptions import ClientError

from .config import StorageConfig
from .exceptions import StorageError
from .models import Subscription

logger = logging.getLogger(__name__)


class SubscriptionRegistry:
    """
    Subscription records kept in a DynamoDB table, one item per subscription.

    Items are keyed by ``<prefix><id>`` in the ``pk`` attribute. Writes are
    plain upserts, so concurrent writers to the same id are last-write-wins.
    """

    def __init__(self, table: Any, prefix: str = "subscription:"):
        """
        Args:
            table: A boto3 DynamoDB ``Table`` resource.
            prefix: Key prefix shared by all subscription items.
        """
        self.table = table
        self.prefix = prefix

    @classmethod
    def from_config(cls, config: StorageConfig) -> "SubscriptionRegistry":
        """Create a registry backed by the table named in ``config``."""
        dynamodb = boto3.resource(
            'dynamodb',
            region_name=config.region,
            endpoint_url=config.endpoint_url,
        )
        return cls(dynamodb.Table(config.table_name), prefix=config.key_prefix)

    def key_for(self, subscription_id: str) -> str:
        return f"{self.prefix}{subscription_id}"

    def put(self, subscription: Subscription) -> None:
        """Insert or overwrite a subscription."""
        try:
            self.table.put_item(Item=subscription.to_item(self.key_for(subscription.id)))
        except ClientError as e:
            logger.error(f"DynamoDB error saving subscription {subscription.id}: {e}")
            raise StorageError(f"Failed to save subscription {subscription.id}") from e

    def list_all(self) -> List[Subscription]:
        """
        Return every subscription stored under the key prefix.

        Order is not guaranteed. Items that cannot be read as a subscription
        are logged and skipped.
        """
        scan_kwargs = {
            'FilterExpression': 'begins_with(pk, :prefix)',
            'ExpressionAttributeValues': {':prefix': self.prefix},
        }
        subscriptions = []
        try:
            while True:
                response = self.table.scan(**scan_kwargs)
                for item in response.get('Items', []):
                    try:
                        subscriptions.append(Subscription.from_item(item))
                    except (KeyError, TypeError, ValueError) as e:
                        logger.warning(f"Skipping malformed subscription item {item.get('pk')}: {e}")

                last_key = response.get('LastEvaluatedKey')
                if not last_key:
                    break
                scan_kwargs['ExclusiveStartKey'] = last_key
        except ClientError as e:
            logger.error(f"DynamoDB error listing subscriptions: {e}")
            raise StorageError("Failed to list subscriptions") from e

        return subscriptions

    def delete(self, subscription_id: str) -> None:
        """Delete a subscription. Deleting an unknown id is not an error."""
        try:
            self.table.delete_item(Key={'pk': self.key_for(subscription_id)})
        except ClientError as e:
            logger.error(f"DynamoDB error deleting subscription {subscription_id}: {e}")
            raise StorageError(f"Failed to delete subscription {subscription_id}") from e
