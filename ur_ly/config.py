"""Configuration management."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_UR_API_URL = "https://chintai.r6.ur-net.go.jp/chintai/api/bukken/search/bukken_main/"


@dataclass
class StorageConfig:
    """DynamoDB storage configuration."""
    table_name: str
    key_prefix: str          # e.g. "subscription:"
    region: str
    endpoint_url: Optional[str] = None  # local DynamoDB, e.g. "http://localhost:8000"


@dataclass
class URApiConfig:
    """UR vacancy search API configuration."""
    api_url: str
    timeout_seconds: float


@dataclass
class AppConfig:
    """Complete application configuration."""
    storage: StorageConfig
    ur_api: URApiConfig
    log_level: str


def _parse_float_env(key: str, default: str) -> float:
    """Parse a float from an environment variable, naming the variable on failure."""
    value = os.getenv(key, default)
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be a number, got {value!r}")


def load_config() -> AppConfig:
    """
    Load configuration from environment variables.

    Raises:
        ValueError: If a configuration value cannot be parsed.
    """
    # Storage
    table_name = os.getenv("DYNAMODB_TABLE_SUBSCRIPTIONS", "ur_ly_subscriptions")
    key_prefix = os.getenv("SUBSCRIPTION_KEY_PREFIX", "subscription:")
    region = os.getenv("AWS_REGION", "ap-northeast-1")
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT_URL") or None

    # UR API
    api_url = os.getenv("UR_API_URL", DEFAULT_UR_API_URL)
    timeout_seconds = _parse_float_env("HTTP_TIMEOUT_SECONDS", "10")
    if timeout_seconds <= 0:
        raise ValueError("Environment variable HTTP_TIMEOUT_SECONDS must be positive")

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    return AppConfig(
        storage=StorageConfig(
            table_name=table_name,
            key_prefix=key_prefix,
            region=region,
            endpoint_url=endpoint_url,
        ),
        ur_api=URApiConfig(
            api_url=api_url,
            timeout_seconds=timeout_seconds,
        ),
        log_level=log_level,
    )
