"""Tests for the controllers that own the engines on behalf of the UI."""

import pytest

from config import UTILIZATION_HISTORY_LIMIT
from controller import AllocatorController, PagingController
from errors import UnknownAlgorithmError


class TestAllocatorController:

    def test_inactive_until_initialized(self):
        ctl = AllocatorController()
        assert not ctl.is_active
        with pytest.raises(RuntimeError):
            ctl.allocate("P1", 10, "firstFit")

    def test_initialize_total_size(self):
        ctl = AllocatorController()
        ctl.initialize(total_size=100)
        assert ctl.is_active
        assert ctl.allocator.total_size == 100
        assert ctl.log[-1].kind == "system"
        assert list(ctl.utilization_history) == [("Step 1", 0.0)]

    def test_initialize_custom_partitions(self):
        ctl = AllocatorController()
        ctl.initialize(partition_sizes=[100, 200])
        assert [b.size for b in ctl.allocator.get_state()] == [100, 200]
        assert "100, 200" in ctl.log[-1].message

    @pytest.mark.parametrize("kwargs", [{}, {"total_size": 0}, {"partition_sizes": [5, -1]}])
    def test_initialize_rejects_bad_config(self, kwargs):
        ctl = AllocatorController()
        with pytest.raises(ValueError):
            ctl.initialize(**kwargs)
        assert not ctl.is_active

    def test_reinitialize_builds_fresh_engine(self):
        ctl = AllocatorController()
        ctl.initialize(total_size=100)
        first = ctl.allocator
        ctl.allocate("P1", 10, "firstFit")
        ctl.initialize(total_size=200)
        assert ctl.allocator is not first
        assert ctl.allocator.get_stats()["used"] == 0

    def test_allocate_and_deallocate_are_logged(self):
        ctl = AllocatorController()
        ctl.initialize(total_size=100)
        assert ctl.allocate(" P1 ", 40, "firstFit").success
        assert ctl.log[-1].kind == "alloc"
        assert ctl.allocator.get_state()[0].owner_id == "P1"

        assert ctl.deallocate("P1").success
        assert ctl.log[-1].kind == "dealloc"
        assert ctl.log[-1].message == "Deallocated P1 (40KB)."

        assert not ctl.deallocate("P1").success
        assert ctl.log[-1].kind == "fail"

    def test_invalid_input_does_not_reach_engine(self):
        ctl = AllocatorController()
        ctl.initialize(total_size=100)
        log_before = list(ctl.log)
        result = ctl.allocate("", 10, "firstFit")
        assert not result.success
        assert result.message == "Please enter a Process ID."
        assert not ctl.allocate("P1", 0, "firstFit").success
        assert not ctl.deallocate("  ").success
        assert ctl.allocator.allocations_attempted == 0
        assert ctl.log == log_before

    def test_utilization_history(self):
        ctl = AllocatorController()
        ctl.initialize(total_size=100)
        ctl.allocate("P1", 25, "firstFit")
        ctl.allocate("P2", 500, "firstFit")      # failure, no new point
        ctl.deallocate("P1")
        assert list(ctl.utilization_history) == [
            ("Step 1", 0.0), ("Step 2", 25.0), ("Step 3", 0.0)
        ]

    def test_utilization_history_is_capped(self):
        ctl = AllocatorController()
        ctl.initialize(total_size=1000)
        for i in range(UTILIZATION_HISTORY_LIMIT + 5):
            ctl.allocate(f"P{i}", 1, "firstFit")
        history = list(ctl.utilization_history)
        assert len(history) == UTILIZATION_HISTORY_LIMIT
        assert history[-1][0] == f"Step {UTILIZATION_HISTORY_LIMIT + 6}"

    def test_reset(self):
        ctl = AllocatorController()
        ctl.initialize(total_size=100)
        ctl.reset()
        assert not ctl.is_active
        assert len(ctl.utilization_history) == 0
        assert str(ctl.log[-1]).endswith("System reset. Ready for initialization.")


class TestPagingController:

    @pytest.mark.parametrize("frames", [0, 11])
    def test_frame_range(self, frames):
        ctl = PagingController()
        with pytest.raises(ValueError):
            ctl.initialize(frames, [1, 2], "fifo")

    @pytest.mark.parametrize("refs", [[], [1, -2]])
    def test_reference_string_validation(self, refs):
        ctl = PagingController()
        with pytest.raises(ValueError):
            ctl.initialize(3, refs, "fifo")

    def test_unknown_algorithm(self):
        ctl = PagingController()
        with pytest.raises(UnknownAlgorithmError):
            ctl.initialize(3, [1], "lfu")

    def test_step_logs_reason(self):
        ctl = PagingController()
        ctl.initialize(1, [4, 4], "lru")
        assert ctl.log[-1].message == "Initialized LRU with 1 frames."
        assert ctl.log[-1].kind == "system"
        first = ctl.step()
        assert ctl.log[-1].message == first.reason
        assert ctl.log[-1].kind == "fail"
        ctl.step()
        assert ctl.log[-1].kind == "alloc"

    def test_step_past_end(self):
        ctl = PagingController()
        ctl.initialize(1, [4], "lru")
        ctl.step()
        assert ctl.step() is None
        assert "All references have been processed" in ctl.log[-1].message
        assert len(ctl.simulator.history) == 1

    def test_run_all(self):
        ctl = PagingController()
        ctl.initialize(3, [1, 2, 3, 4, 1, 2, 5], "fifo")
        history = ctl.run_all()
        assert len(history) == 7
        assert ctl.log[-1].message == "Ran FIFO on 7 references with 3 frames."

    def test_switch_algorithm_reruns(self):
        ctl = PagingController()
        refs = [1, 2, 3, 4, 1, 2, 5]
        ctl.initialize(2, refs, "lru")
        ctl.run_all()
        ctl.switch_algorithm("optimal")
        assert ctl.simulator.algorithm.value == "optimal"
        assert len(ctl.simulator.history) == len(refs)
        assert ctl.simulator.faults == 6
        assert ctl.log[-1].message == "Switched to OPTIMAL. Re-ran simulation."

    def test_switch_algorithm_before_any_step(self):
        ctl = PagingController()
        ctl.initialize(2, [1, 2], "lru")
        ctl.switch_algorithm("clock")
        assert ctl.simulator.algorithm.value == "clock"
        assert ctl.simulator.history == ()

    def test_grid(self):
        ctl = PagingController()
        ctl.initialize(2, [1, 2, 1, 3], "fifo")
        ctl.run_all()
        rows = ctl.grid()
        assert [label for label, _ in rows] == ["Frame 0", "Frame 1", "Status"]
        assert rows[0][1] == [(1, "fault"), (1, "neutral"), (1, "hit"), (3, "fault")]
        assert rows[1][1] == [("-", "empty"), (2, "fault"), (2, "neutral"), (2, "neutral")]
        assert rows[2][1] == ["MISS", "MISS", "HIT", "MISS"]

    def test_reset(self):
        ctl = PagingController()
        ctl.initialize(2, [1], "fifo")
        ctl.reset()
        assert not ctl.is_active
        assert ctl.grid() == []
