# phase_clock.py

import logging

import pygame

import constants

logger = logging.getLogger("convection_viz")


class PhaseClock:
    """
    Advances the animation phase on a fixed wall-clock interval.

    The interval is driven by a pygame timer that posts TICK_EVENT to the event
    queue, so each tick is handled on the main loop and runs to completion
    before the next one is read.

    Data Contract:
    - Inputs:
        - interval_ms (int): Milliseconds between ticks.
        - period (int): The phase wraps to 0 on reaching this value.
    - Outputs: None. Listeners receive the new phase on every tick.
    - Side Effects: Registers a repeating pygame timer while running.
    - Invariants: 0 <= phase < period. Once stopped, the timer is released,
      listeners are dropped and no further tick is delivered. Teardown is
      one-shot: a stopped clock cannot be restarted.
    """
    def __init__(self, interval_ms: int = constants.TICK_INTERVAL_MS, period: int = constants.PHASE_PERIOD):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.interval_ms = interval_ms
        self.period = period
        self.phase = 0
        self.tick_count = 0
        self._listeners = []
        self._running = False
        self._stopped = False

    @property
    def running(self):
        return self._running

    def subscribe(self, listener):
        """Registers a callable invoked with the new phase after every advance."""
        self._listeners.append(listener)

    def start(self):
        if self._stopped:
            raise RuntimeError("PhaseClock has been stopped and cannot be restarted")
        if self._running:
            raise RuntimeError("PhaseClock is already running")
        pygame.time.set_timer(constants.TICK_EVENT, self.interval_ms)
        self._running = True
        logger.info(f"PhaseClock started: interval={self.interval_ms}ms, period={self.period}")

    def stop(self):
        """Releases the timer. Safe to call more than once."""
        if self._stopped:
            return
        if self._running:
            pygame.time.set_timer(constants.TICK_EVENT, 0)
        self._running = False
        self._stopped = True
        self._listeners.clear()
        logger.info(f"PhaseClock stopped after {self.tick_count} ticks at phase {self.phase}")

    def advance(self):
        if self._stopped:
            return
        self.phase = (self.phase + 1) % self.period
        self.tick_count += 1
        for listener in self._listeners:
            listener(self.phase)

    def handle_event(self, event):
        """
        Advances the phase if `event` is this clock's tick.
        Returns True if the phase was advanced.
        """
        if event.type != constants.TICK_EVENT or not self._running:
            return False
        self.advance()
        return True

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
