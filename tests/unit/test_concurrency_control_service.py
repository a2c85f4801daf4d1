"""
Concurrency Control Service Unit Tests
"""

import threading
import time

from clickrace.services.concurrency_control_service import ConcurrencyControlService


class TestConcurrencyControlService:
    """Test per-room locking"""

    def setup_method(self):
        self.service = ConcurrencyControlService()

    def test_same_room_shares_lock(self):
        assert self.service.get_room_lock('r1') is self.service.get_room_lock('r1')
        assert self.service.get_room_lock('r1') is not self.service.get_room_lock('r2')
        assert self.service.tracked_room_count() == 2

    def test_room_operation_is_reentrant(self):
        with self.service.room_operation('r1'):
            with self.service.room_operation('r1'):
                pass

    def test_room_operations_are_serialized(self):
        """Test overlapping operations on one room never run at the same time"""
        active = []
        overlaps = []

        def worker():
            with self.service.room_operation('r1'):
                active.append(1)
                if len(active) > 1:
                    overlaps.append(len(active))
                time.sleep(0.005)
                active.pop()

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5.0)

        assert overlaps == []

    def test_different_rooms_do_not_block(self):
        entered = threading.Event()

        def other_room():
            with self.service.room_operation('r2'):
                entered.set()

        with self.service.room_operation('r1'):
            thread = threading.Thread(target=other_room)
            thread.start()
            assert entered.wait(timeout=2)
        thread.join(timeout=2)
