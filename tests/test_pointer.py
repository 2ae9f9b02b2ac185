import pytest

from geometry import Surface
from pointer import Observable, ScrollService, PointerTracker, to_local


def test_observable_replays_current_value_on_subscribe():
    observable = Observable(3)
    seen = []
    observable.subscribe(seen.append)
    observable.emit(4)
    assert seen == [3, 4]
    assert observable.value == 4


def test_unsubscribe_stops_notifications_and_is_repeatable():
    observable = Observable(0)
    seen = []
    unsubscribe = observable.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    observable.emit(1)
    assert seen == [0]
    assert observable.subscriber_count == 0


def test_subscriber_may_unsubscribe_while_notified():
    observable = Observable(0)
    seen = []
    handles = {}

    def once(value):
        seen.append(value)
        if value == 1:
            handles["once"]()

    handles["once"] = observable.subscribe(once)
    observable.subscribe(seen.append)
    observable.emit(1)
    observable.emit(2)
    assert seen == [0, 0, 1, 1, 2]


def test_to_local_applies_offsets_and_scroll():
    surface = Surface(668.8, 400.0, 177.6, 141.0, False)
    assert to_local((300.0, 200.0), surface, 0.0) == pytest.approx((122.4, 59.0))
    assert to_local((300.0, 200.0), surface, 80.0) == pytest.approx((122.4, 139.0))


def test_tracker_follows_pointer_scroll_and_surface():
    service = ScrollService()
    tracker = PointerTracker(service, initial=(5.0, 6.0))
    assert tracker.local == (5.0, 6.0)

    tracker.attach(Surface(100.0, 100.0, 10.0, 20.0, False))
    assert tracker.local == (5.0, 6.0)

    service.move_pointer(50, 60)
    assert tracker.local == pytest.approx((40.0, 40.0))
    service.set_scroll_y(15)
    assert tracker.local == pytest.approx((40.0, 55.0))
    tracker.attach(Surface(100.0, 100.0, 0.0, 0.0, False))
    assert tracker.local == pytest.approx((50.0, 75.0))


def test_tracker_close_unsubscribes():
    service = ScrollService()
    tracker = PointerTracker(service, initial=(0.0, 0.0))
    tracker.attach(Surface(100.0, 100.0, 0.0, 0.0, False))
    tracker.close()
    tracker.close()
    service.move_pointer(9, 9)
    assert tracker.local == (0.0, 0.0)
    assert service.pointer.subscriber_count == 0
    assert service.scroll_y.subscriber_count == 0
