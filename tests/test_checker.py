import httpx

from ur_ly.checker import check_all_subscriptions, check_subscription


def _stored(registry, subscription_id):
    return next(s for s in registry.list_all() if s.id == subscription_id)


def test_vacancy_at_threshold_notifies(registry, api_config, make_subscription, fake_services):
    registry.put(make_subscription(threshold=1))
    services = fake_services(vacancy_count=3)

    summary = check_all_subscriptions(registry, api_config, client=services.client())

    assert summary.to_dict() == {"checked": 1, "notified": 1, "failed": 0}
    assert len(services.slack_requests) == 1
    payload = services.slack_payloads()[0]
    assert payload["text"] == "Vacancy available: 3 room(s) found!"
    stored = _stored(registry, "sub-1")
    assert stored.last_checked is not None
    assert stored.last_notified is not None


def test_no_vacancy_does_not_notify(registry, api_config, make_subscription, fake_services):
    registry.put(make_subscription(threshold=1))
    services = fake_services(vacancy_count=0)

    summary = check_all_subscriptions(registry, api_config, client=services.client())

    assert summary.notified == 0
    assert services.slack_requests == []
    stored = _stored(registry, "sub-1")
    assert stored.last_checked is not None
    assert stored.last_notified is None


def test_threshold_zero_always_notifies(registry, api_config, make_subscription, fake_services):
    registry.put(make_subscription(threshold=0))
    services = fake_services(vacancy_count=0)

    check_all_subscriptions(registry, api_config, client=services.client())

    assert len(services.slack_requests) == 1


def test_below_threshold_does_not_notify(registry, api_config, make_subscription, fake_services):
    registry.put(make_subscription(threshold=5))
    services = fake_services(vacancy_count=4)

    check_all_subscriptions(registry, api_config, client=services.client())

    assert services.slack_requests == []


def test_failed_notification_keeps_last_notified(registry, api_config, make_subscription, fake_services):
    registry.put(make_subscription(last_notified="2024-01-01T00:00:00.000Z"))
    services = fake_services(vacancy_count=2, slack_status=500)

    summary = check_all_subscriptions(registry, api_config, client=services.client())

    assert summary.to_dict() == {"checked": 1, "notified": 0, "failed": 0}
    stored = _stored(registry, "sub-1")
    assert stored.last_checked is not None
    assert stored.last_notified == "2024-01-01T00:00:00.000Z"


def test_failed_poll_leaves_record_untouched(registry, api_config, make_subscription, fake_services):
    registry.put(make_subscription())
    services = fake_services(ur_status=500)

    summary = check_all_subscriptions(registry, api_config, client=services.client())

    assert summary.to_dict() == {"checked": 0, "notified": 0, "failed": 1}
    assert _stored(registry, "sub-1").last_checked is None
    assert services.slack_requests == []


def test_one_failure_does_not_stop_the_cycle(registry, api_config, make_subscription):
    registry.put(make_subscription(id="broken", shisya="99", danchi="9999"))
    registry.put(make_subscription(id="ok"))
    slack_calls = []

    def handler(request):
        if request.url.host == "hooks.slack.com":
            slack_calls.append(request)
            return httpx.Response(200, text="ok")
        if b"shisya=99" in request.content:
            return httpx.Response(200, text="not json")
        return httpx.Response(200, json={"count": 1})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    summary = check_all_subscriptions(registry, api_config, client=client)

    assert summary.to_dict() == {"checked": 1, "notified": 1, "failed": 1}
    assert len(slack_calls) == 1
    assert _stored(registry, "ok").last_notified is not None
    assert _stored(registry, "broken").last_checked is None


def test_check_subscription_returns_delivery_result(registry, api_config, make_subscription, fake_services):
    services = fake_services(vacancy_count=1)
    subscription = make_subscription()

    assert check_subscription(subscription, registry, services.client(), api_config) is True
    assert subscription.last_notified is not None


def test_empty_registry(registry, api_config, fake_services):
    services = fake_services()

    summary = check_all_subscriptions(registry, api_config, client=services.client())

    assert summary.to_dict() == {"checked": 0, "notified": 0, "failed": 0}
    assert services.ur_requests == []


def test_unusable_webhook_still_saves_check(registry, api_config, make_subscription, fake_services):
    registry.put(make_subscription(slack_webhook_url="https://hooks.slack.com/services/T/B/X\t"))
    services = fake_services(vacancy_count=3)

    summary = check_all_subscriptions(registry, api_config, client=services.client())

    assert summary.to_dict() == {"checked": 1, "notified": 0, "failed": 0}
    stored = _stored(registry, "sub-1")
    assert stored.last_checked is not None
    assert stored.last_notified is None
