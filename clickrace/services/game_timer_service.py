"""
Game Timer Service - Schedules game expiry.

This service handles:
- One-shot expiry timers armed when a room starts playing
- A background sweep that finalizes rooms whose end time has passed
  (covers timers lost to a restart or a missed wake-up)
- Shutdown of pending timers and the sweep thread
"""

import logging
import threading
from typing import Callable, Dict, Optional

from clickrace.config.game_settings import get_game_settings

logger = logging.getLogger(__name__)


class GameTimerService:
    """Runs game expiry callbacks for rooms."""

    def __init__(self, check_interval: Optional[int] = None):
        """Initialize the game timer service.

        Args:
            check_interval: Seconds between sweeps for overdue rooms
        """
        self.check_interval = check_interval or get_game_settings().check_interval
        self.running = False
        self.sweep_thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._timers: Dict[str, threading.Timer] = {}
        self._timers_lock = threading.Lock()

    def arm(self, room_id: str, delay: float, callback: Callable[[str], None]) -> threading.Timer:
        """
        Arm a one-shot timer that calls ``callback(room_id)`` after ``delay`` seconds.

        Only one timer is tracked per room; the room's own state decides
        whether a firing timer still has anything to do.
        """
        timer = threading.Timer(max(0.0, delay), self._fire, args=(room_id, callback))
        timer.daemon = True
        timer.name = f"game-end-{room_id}"

        with self._timers_lock:
            previous = self._timers.get(room_id)
            if previous is not None and previous.is_alive():
                logger.warning(f"Timer already armed for room {room_id}; keeping both")
            self._timers[room_id] = timer

        timer.start()
        logger.info(f"Armed game end timer for room {room_id} in {delay:.1f}s")
        return timer

    def pending_rooms(self):
        with self._timers_lock:
            return [room_id for room_id, timer in self._timers.items() if timer.is_alive()]

    def _fire(self, room_id: str, callback: Callable[[str], None]):
        with self._timers_lock:
            if self._timers.get(room_id) is threading.current_thread():
                del self._timers[room_id]

        try:
            logger.info(f"Game timer fired for room {room_id}")
            callback(room_id)
        except Exception as e:
            logger.error(f"Error ending game for room {room_id}: {e}")

    def start_sweeper(self, sweep: Callable[[], int]):
        """Start the background thread that calls ``sweep`` every check interval."""
        if self.running:
            return
        self.running = True
        self._stop_event.clear()
        self.sweep_thread = threading.Thread(target=self._sweep_loop, args=(sweep,), daemon=True)
        self.sweep_thread.start()
        logger.info("GameTimerService sweeper started")

    def _sweep_loop(self, sweep: Callable[[], int]):
        """Main loop that finalizes overdue rooms."""
        while self.running:
            try:
                finalized = sweep()
                if finalized:
                    logger.info(f"Sweeper finalized {finalized} overdue rooms")
            except Exception as e:
                logger.error(f"Error in sweep loop: {e}")
            self._stop_event.wait(self.check_interval)

    def stop(self):
        """Stop the sweeper and cancel pending timers."""
        self.running = False
        self._stop_event.set()
        if self.sweep_thread is not None and self.sweep_thread.is_alive():
            self.sweep_thread.join(timeout=2)

        with self._timers_lock:
            timers = list(self._timers.values())
            self._timers.clear()
        for timer in timers:
            timer.cancel()

        logger.info("GameTimerService stopped")
