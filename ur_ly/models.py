"""Data models for subscriptions and UR search results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .exceptions import ParseError


def utc_now_iso() -> str:
    """Current UTC time as ISO8601 with millisecond precision, e.g. 2024-01-02T03:04:05.678Z."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class PropertyIds:
    """Identifiers UR uses for a property, taken from its public URL."""
    shisya: str   # branch code, e.g. "20"
    danchi: str   # estate code, e.g. "7140"


@dataclass
class Subscription:
    """A registered watch on one UR property."""
    id: str
    property_url: str
    shisya: str
    danchi: str
    slack_webhook_url: str
    threshold: int      # minimum vacant rooms before notifying
    created_at: str     # ISO8601 UTC
    last_checked: Optional[str] = None
    last_notified: Optional[str] = None

    def to_item(self, key: str) -> Dict[str, Any]:
        """DynamoDB item for this subscription, stored under ``key``."""
        return {
            'pk': key,
            'id': self.id,
            'property_url': self.property_url,
            'shisya': self.shisya,
            'danchi': self.danchi,
            'slack_webhook_url': self.slack_webhook_url,
            'threshold': self.threshold,
            'created_at': self.created_at,
            'last_checked': self.last_checked,
            'last_notified': self.last_notified,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Subscription":
        # DynamoDB hands numbers back as Decimal
        return cls(
            id=item['id'],
            property_url=item['property_url'],
            shisya=item['shisya'],
            danchi=item['danchi'],
            slack_webhook_url=item['slack_webhook_url'],
            threshold=int(item.get('threshold', 1)),
            created_at=item['created_at'],
            last_checked=item.get('last_checked'),
            last_notified=item.get('last_notified'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape returned by the API."""
        data = {
            'id': self.id,
            'propertyUrl': self.property_url,
            'shisya': self.shisya,
            'danchi': self.danchi,
            'slackWebhookUrl': self.slack_webhook_url,
            'threshold': self.threshold,
            'createdAt': self.created_at,
        }
        if self.last_checked:
            data['lastChecked'] = self.last_checked
        if self.last_notified:
            data['lastNotified'] = self.last_notified
        return data


def _optional_int(data: Dict[str, Any], key: str) -> Optional[int]:
    # Rent fields are informational only; anything non-numeric reads as unknown.
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass
class PropertyAvailability:
    """Vacancy information returned by the UR search API."""
    count: int
    rent_low: Optional[int] = None
    rent_high: Optional[int] = None
    rent_low_commonfee: Optional[int] = None
    rent_high_commonfee: Optional[int] = None
    rooms: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> "PropertyAvailability":
        """
        Validate a decoded UR search response.

        Raises:
            ParseError: If the body is not an object or has no integer ``count``.
        """
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

        count = data.get('count')
        if isinstance(count, bool) or not isinstance(count, int):
            raise ParseError(f"Missing or non-integer 'count' in response: {count!r}")

        rooms = data.get('room') or []
        if not isinstance(rooms, list):
            raise ParseError(f"Field 'room' must be a list, got {type(rooms).__name__}")

        return cls(
            count=int(count),
            rent_low=_optional_int(data, 'rent_low'),
            rent_high=_optional_int(data, 'rent_high'),
            rent_low_commonfee=_optional_int(data, 'rent_low_commonfee'),
            rent_high_commonfee=_optional_int(data, 'rent_high_commonfee'),
            rooms=rooms,
        )
