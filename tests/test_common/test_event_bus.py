"""Tests for the EventBus."""

from unittest.mock import Mock

from src.common.events.event_bus import DomainEvent, EventBus


def test_emit_calls_subscribers_in_order() -> None:
    bus = EventBus()
    calls = []
    bus.subscribe(DomainEvent.SALE_ADDED, lambda event, payload: calls.append(("first", payload)))
    bus.subscribe(DomainEvent.SALE_ADDED, lambda event, payload: calls.append(("second", payload)))

    bus.emit(DomainEvent.SALE_ADDED, "sale-1")

    assert calls == [("first", "sale-1"), ("second", "sale-1")]


def test_emit_only_reaches_subscribers_of_that_event() -> None:
    bus = EventBus()
    handler = Mock()
    bus.subscribe(DomainEvent.PRODUCT_ADDED, handler)

    bus.emit(DomainEvent.DATA_CHANGED)

    handler.assert_not_called()


def test_unsubscribe_and_duplicate_subscribe() -> None:
    bus = EventBus()
    handler = Mock()
    bus.subscribe(DomainEvent.DATA_CHANGED, handler)
    bus.subscribe(DomainEvent.DATA_CHANGED, handler)

    bus.emit(DomainEvent.DATA_CHANGED)
    bus.unsubscribe(DomainEvent.DATA_CHANGED, handler)
    bus.emit(DomainEvent.DATA_CHANGED)

    handler.assert_called_once_with(DomainEvent.DATA_CHANGED, None)


def test_failing_handler_does_not_stop_delivery() -> None:
    bus = EventBus()
    failing = Mock(side_effect=RuntimeError("boom"))
    healthy = Mock()
    bus.subscribe(DomainEvent.DATA_CHANGED, failing)
    bus.subscribe(DomainEvent.DATA_CHANGED, healthy)

    bus.emit(DomainEvent.DATA_CHANGED)

    failing.assert_called_once()
    healthy.assert_called_once()


def test_clear_drops_every_subscription() -> None:
    bus = EventBus()
    handler = Mock()
    bus.subscribe(DomainEvent.DATA_CHANGED, handler)
    bus.subscribe(DomainEvent.SALE_ADDED, handler)

    bus.clear()
    bus.emit(DomainEvent.DATA_CHANGED)
    bus.emit(DomainEvent.SALE_ADDED)

    handler.assert_not_called()
