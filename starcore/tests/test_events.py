"""
Event bus: subscription, delivery order, failing listeners.
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from starcore.events import EventBus, GameEvents


def test_publish_delivers_payload_in_order():
    bus = EventBus()
    received = []
    bus.subscribe(GameEvents.CARGO_ADDED, lambda p: received.append(('first', p)))
    bus.subscribe(GameEvents.CARGO_ADDED, lambda p: received.append(('second', p)))

    bus.publish(GameEvents.CARGO_ADDED, {'element_key': 'IRON', 'amount': 3})
    assert received == [
        ('first', {'element_key': 'IRON', 'amount': 3}),
        ('second', {'element_key': 'IRON', 'amount': 3}),
    ]


def test_publish_without_subscribers_is_noop():
    bus = EventBus()
    bus.publish(GameEvents.SYSTEM_LEFT)
    bus.publish("never-subscribed", 42)
    assert bus.listener_count(GameEvents.SYSTEM_LEFT) == 0


def test_duplicate_subscription_ignored():
    bus = EventBus()
    calls = []

    def listener(payload):
        calls.append(payload)

    bus.subscribe(GameEvents.LIFT_OFF, listener)
    bus.subscribe(GameEvents.LIFT_OFF, listener)
    bus.publish(GameEvents.LIFT_OFF, 'x')
    assert calls == ['x']


def test_unsubscribe():
    bus = EventBus()
    calls = []

    def listener(payload):
        calls.append(payload)

    bus.subscribe(GameEvents.SCAN_COMPLETE, listener)
    bus.unsubscribe(GameEvents.SCAN_COMPLETE, listener)
    bus.unsubscribe(GameEvents.SCAN_COMPLETE, listener)
    bus.publish(GameEvents.SCAN_COMPLETE, ['line'])
    assert calls == []


def test_failing_listener_does_not_stop_delivery(caplog):
    bus = EventBus()
    calls = []

    def broken(payload):
        raise RuntimeError("listener bug")

    bus.subscribe(GameEvents.PLANET_LANDED, broken)
    bus.subscribe(GameEvents.PLANET_LANDED, calls.append)

    with caplog.at_level(logging.ERROR, logger="starcore.events"):
        bus.publish(GameEvents.PLANET_LANDED, 'planet')

    assert calls == ['planet']
    assert any("listener bug" in (r.exc_text or "") or r.exc_info for r in caplog.records)


def test_listener_may_unsubscribe_during_delivery():
    bus = EventBus()
    calls = []

    def once(payload):
        calls.append(payload)
        bus.unsubscribe(GameEvents.SYSTEM_ENTERED, once)

    bus.subscribe(GameEvents.SYSTEM_ENTERED, once)
    bus.publish(GameEvents.SYSTEM_ENTERED, 1)
    bus.publish(GameEvents.SYSTEM_ENTERED, 2)
    assert calls == [1]


def test_clear():
    bus = EventBus()
    bus.subscribe(GameEvents.GAME_STATE_CHANGED, print)
    bus.clear()
    assert bus.listener_count(GameEvents.GAME_STATE_CHANGED) == 0
