import logging

from scheduler import FrameScheduler, SchedulerState


class FakeClock:
    def __init__(self):
        self.ticks = []

    def tick(self, fps):
        self.ticks.append(fps)
        return 16


def test_runs_until_a_callback_stops_it():
    scheduler = FrameScheduler(fps=30, clock=FakeClock())
    frames = []

    def callback():
        frames.append(scheduler.frame_count)
        if len(frames) == 5:
            scheduler.stop()

    scheduler.add(callback)
    scheduler.start()
    assert frames == [0, 1, 2, 3, 4]
    assert scheduler.state is SchedulerState.STOPPED
    assert scheduler.clock.ticks == [30] * 4


def test_max_frames_stops_the_loop():
    scheduler = FrameScheduler(clock=FakeClock(), max_frames=12)
    counter = []
    scheduler.add(lambda: counter.append(1))
    scheduler.start()
    assert len(counter) == 12
    assert not scheduler.running


def test_failing_callback_does_not_stop_scheduling(caplog):
    scheduler = FrameScheduler(clock=FakeClock(), max_frames=3)
    calls = []

    def broken():
        raise RuntimeError("draw failed")

    scheduler.add(broken)
    scheduler.add(lambda: calls.append(scheduler.frame_count))
    with caplog.at_level(logging.ERROR):
        scheduler.start()
    assert calls == [0, 1, 2]
    assert "draw failed" in caplog.text


def test_removed_callback_is_not_called():
    scheduler = FrameScheduler(clock=FakeClock())
    calls = []
    remove = scheduler.add(lambda: calls.append("a"))
    scheduler.run_frame()
    remove()
    remove()
    scheduler.run_frame()
    assert calls == ["a"]


def test_callback_removed_mid_frame_is_skipped():
    scheduler = FrameScheduler(clock=FakeClock())
    calls = []
    handles = {}

    def first():
        calls.append("first")
        handles["second"]()

    scheduler.add(first)
    handles["second"] = scheduler.add(lambda: calls.append("second"))
    scheduler.run_frame()
    assert calls == ["first"]


def test_stop_is_idempotent():
    scheduler = FrameScheduler(clock=FakeClock())
    scheduler.stop()
    scheduler.stop()
    assert scheduler.state is SchedulerState.STOPPED
