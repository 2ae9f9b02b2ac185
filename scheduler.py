# scheduler.py
"""
Drives all registered per-frame callbacks once per display refresh.

The loop is a plain while-loop with a cancellation flag instead of a chain
of self-rescheduling callbacks. A callback that raises loses its work for
that frame only; the next frame is still scheduled.
"""
import enum
import logging
from typing import Callable, List, Optional

import pygame

from constants import FPS

# --- Data Contracts ---
#
# class FrameScheduler:
#   - add(self, callback: Callable[[], None]) -> Callable[[], None]:
#     - Registers a per-frame callback. Returns a function removing it,
#       safe to call more than once.
#   - start(self) -> None:
#     - Blocks, running frames until stop() is called (typically from a
#       callback) or max_frames frames have run.
#   - stop(self) -> None: idempotent.
#   - Invariants: state is STOPPED or RUNNING. Callbacks run in
#     registration order; one failing never skips the others.


class SchedulerState(enum.Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class FrameScheduler:
    """
    Runs callbacks at display-refresh cadence until explicitly stopped.

    max_frames is a run-control option for bounded runs such as profiling
    sessions. Left at None, only stop() ends the loop.
    """
    def __init__(self, fps: int = FPS, clock=None, max_frames: Optional[int] = None,
                 log_throttle: int = 300):
        """
        Args:
            fps (int): Target frame rate.
            clock: Anything with a pygame.time.Clock-like tick(fps) method.
            max_frames (Optional[int]): Stop after this many frames. None runs
                until stop() is called.
            log_throttle (int): Log a progress line every this many frames.
        """
        self.fps = fps
        self.clock = clock if clock is not None else pygame.time.Clock()
        self.max_frames = max_frames
        self.log_throttle = max(1, log_throttle)
        self.state = SchedulerState.STOPPED
        self.frame_count = 0
        self._callbacks: List[Callable[[], None]] = []

    def add(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return remove

    @property
    def running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    def run_frame(self) -> None:
        """Runs every registered callback once."""
        for callback in list(self._callbacks):
            # Removed by an earlier callback in this same frame
            if callback not in self._callbacks:
                continue
            try:
                callback()
            except Exception:
                logging.exception(f"Frame {self.frame_count}: callback {callback!r} failed.")
        self.frame_count += 1

    def start(self) -> None:
        """Enters the frame loop. Returns once the scheduler is stopped."""
        if self.running:
            logging.warning("Frame scheduler is already running.")
            return

        self.state = SchedulerState.RUNNING
        logging.info(f"Frame scheduler started at {self.fps} FPS.")
        while self.running:
            self.run_frame()
            if not self.running:
                break

            # Hot loops must throttle logs
            if self.frame_count % self.log_throttle == 0:
                fps = self.clock.get_fps() if hasattr(self.clock, 'get_fps') else 0.0
                logging.info(f"Frame {self.frame_count} | {fps:.1f} FPS")

            if self.max_frames is not None and self.frame_count >= self.max_frames:
                logging.info(f"Reached max_frames ({self.max_frames}). Stopping.")
                self.stop()
                break

            self.clock.tick(self.fps)
        logging.info("Frame scheduler loop finished.")

    def stop(self) -> None:
        if self.state is SchedulerState.STOPPED:
            return
        self.state = SchedulerState.STOPPED
        logging.info(f"Frame scheduler stopped after {self.frame_count} frames.")
