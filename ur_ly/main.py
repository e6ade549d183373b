"""Command-line entry point for running checks and managing subscriptions."""

import argparse
import json
import logging
import sys

from .checker import check_all_subscriptions
from .config import AppConfig, load_config
from .exceptions import StorageError, ValidationError
from .registry import SubscriptionRegistry
from .subscriptions import create_subscription, delete_subscription

logger = logging.getLogger(__name__)


def _configure_logging(config: AppConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]  # stdout carries command output
    )


def run_check(config: AppConfig, registry: SubscriptionRegistry) -> int:
    """Run the poll cycle once (e.g. from cron)."""
    try:
        summary = check_all_subscriptions(registry, config.ur_api)
    except StorageError as e:
        logger.error(f"Could not load subscriptions: {e}")
        return 1
    print(json.dumps(summary.to_dict()))
    return 0


def run_list(registry: SubscriptionRegistry) -> int:
    try:
        subscriptions = registry.list_all()
    except StorageError as e:
        logger.error(f"Could not load subscriptions: {e}")
        return 1
    print(json.dumps({
        'count': len(subscriptions),
        'subscriptions': [s.to_dict() for s in subscriptions],
    }, indent=2, ensure_ascii=False))
    return 0


def run_subscribe(registry: SubscriptionRegistry, args: argparse.Namespace) -> int:
    try:
        subscription = create_subscription(
            registry, args.property_url, args.webhook_url, args.threshold
        )
    except (ValidationError, StorageError) as e:
        logger.error(f"Subscribe failed: {e}")
        return 1
    print(subscription.id)
    return 0


def run_unsubscribe(registry: SubscriptionRegistry, args: argparse.Namespace) -> int:
    try:
        delete_subscription(registry, args.id)
    except StorageError as e:
        logger.error(f"Unsubscribe failed: {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ur-ly",
        description="Watch UR rental properties for vacancies and alert Slack"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("check", help="Check every subscription once and send alerts")
    subparsers.add_parser("list", help="Print all subscriptions as JSON")

    subscribe = subparsers.add_parser("subscribe", help="Watch a UR property")
    subscribe.add_argument("property_url", help="UR property page, e.g. https://www.ur-net.go.jp/chintai/kanto/tokyo/20_7140.html")
    subscribe.add_argument("webhook_url", help="Slack incoming webhook URL")
    subscribe.add_argument(
        "--threshold",
        type=int,
        default=None,
        help="Minimum number of vacant rooms before alerting (default: 1)"
    )

    unsubscribe = subparsers.add_parser("unsubscribe", help="Stop watching a property")
    unsubscribe.add_argument("id", help="Subscription ID")
    return parser


def main(argv=None) -> int:
    """Main entry point with command-line argument parsing."""
    args = build_parser().parse_args(argv)

    config = load_config()
    _configure_logging(config)
    registry = SubscriptionRegistry.from_config(config.storage)

    if args.command == "check":
        return run_check(config, registry)
    if args.command == "list":
        return run_list(registry)
    if args.command == "subscribe":
        return run_subscribe(registry, args)
    return run_unsubscribe(registry, args)


if __name__ == "__main__":
    sys.exit(main())
