import json

import boto3
import httpx
import pytest
from moto import mock_aws

from ur_ly.config import URApiConfig
from ur_ly.models import Subscription
from ur_ly.registry import SubscriptionRegistry

TABLE_NAME = "test_subscriptions"
REGION = "ap-northeast-1"
UR_API_URL = "https://chintai.r6.ur-net.go.jp/chintai/api/bukken/search/bukken_main/"
PROPERTY_URL = "https://www.ur-net.go.jp/chintai/kanto/tokyo/20_7140.html"
WEBHOOK_URL = "https://hooks.slack.com/services/T000/B000/XXXX"


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    """Keep boto3 away from real credentials and point config at the test table."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.setenv("AWS_REGION", REGION)
    monkeypatch.setenv("DYNAMODB_TABLE_SUBSCRIPTIONS", TABLE_NAME)
    monkeypatch.delenv("DYNAMODB_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("SUBSCRIPTION_KEY_PREFIX", raising=False)


@pytest.fixture
def dynamodb():
    with mock_aws():
        yield boto3.resource("dynamodb", region_name=REGION)


@pytest.fixture
def table(dynamodb):
    return dynamodb.create_table(
        TableName=TABLE_NAME,
        KeySchema=[{"AttributeName": "pk", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "pk", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )


@pytest.fixture
def registry(table):
    return SubscriptionRegistry(table)


@pytest.fixture
def api_config():
    return URApiConfig(api_url=UR_API_URL, timeout_seconds=5.0)


@pytest.fixture
def make_subscription():
    def _make(**overrides):
        fields = dict(
            id="sub-1",
            property_url=PROPERTY_URL,
            shisya="20",
            danchi="7140",
            slack_webhook_url=WEBHOOK_URL,
            threshold=1,
            created_at="2024-01-01T00:00:00.000Z",
        )
        fields.update(overrides)
        return Subscription(**fields)
    return _make


class FakeServices:
    """Stands in for the UR API and Slack behind an httpx.MockTransport."""

    def __init__(self, vacancy_count=0, ur_status=200, slack_status=200):
        self.vacancy_count = vacancy_count
        self.ur_status = ur_status
        self.slack_status = slack_status
        self.ur_requests = []
        self.slack_requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "hooks.slack.com":
            self.slack_requests.append(request)
            return httpx.Response(self.slack_status, text="ok")
        self.ur_requests.append(request)
        return httpx.Response(self.ur_status, json={"count": self.vacancy_count, "room": []})

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def slack_payloads(self):
        return [json.loads(r.content) for r in self.slack_requests]


@pytest.fixture
def fake_services():
    return FakeServices
