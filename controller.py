# controller.py
"""
Controllers sitting between the Streamlit UI and the simulation engines.

Each controller owns at most one engine instance. Reconfiguring always builds
a fresh engine; nothing is shared between controllers or kept at module level.
"""

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from config import MAX_FRAMES, MIN_FRAMES, UTILIZATION_HISTORY_LIMIT
from engine import PartitionAllocator, Result
from paging import PagingSimulator, StepResult
from placement import PlacementAlgorithm
from replacement import ReplacementAlgorithm


@dataclass
class LogEntry:
    timestamp: str
    message: str
    kind: str = ""   # system | alloc | dealloc | fail

    def __str__(self):
        return f"[{self.timestamp}] {self.message}"


class _LoggingController:

    def __init__(self):
        self.log: List[LogEntry] = []

    def _log(self, message: str, kind: str = ""):
        self.log.append(LogEntry(datetime.now().strftime("%H:%M:%S"), message, kind))


# =============================================================================
# PARTITION ALLOCATION
# =============================================================================

class AllocatorController(_LoggingController):

    def __init__(self):
        super().__init__()
        self.allocator: Optional[PartitionAllocator] = None
        self.utilization_history: deque = deque(maxlen=UTILIZATION_HISTORY_LIMIT)
        self.step_counter = 0

    @property
    def is_active(self) -> bool:
        return self.allocator is not None

    def initialize(self, total_size: Optional[int] = None,
                   partition_sizes: Optional[Sequence[int]] = None):
        """
        Build a fresh allocator, either one block of ``total_size`` or the
        given custom partitions.

        Raises:
            ValueError: If no configuration is given or a size is not positive
        """
        if partition_sizes:
            if any(s <= 0 for s in partition_sizes):
                raise ValueError(
                    "Invalid partition sizes. Use positive numbers separated by commas."
                )
            self.allocator = PartitionAllocator(list(partition_sizes))
            self._log("Initializing with custom partitions: "
                      + ", ".join(str(s) for s in partition_sizes), "system")
        elif total_size is not None:
            if total_size <= 0:
                raise ValueError("Please enter a valid memory size.")
            self.allocator = PartitionAllocator(total_size)
            self._log(f"Initializing with total size: {total_size} KB", "system")
        else:
            raise ValueError("Please enter a valid memory size.")

        self.utilization_history.clear()
        self.step_counter = 0
        self._record_utilization()

    def reset(self):
        self.allocator = None
        self.utilization_history.clear()
        self.step_counter = 0
        self._log("System reset. Ready for initialization.", "system")

    def allocate(self, owner_id: str, size: int, algorithm=PlacementAlgorithm.FIRST_FIT) -> Result:
        owner_id = (owner_id or "").strip()
        if not owner_id:
            return self._reject("Please enter a Process ID.")
        if size is None or size <= 0:
            return self._reject("Please enter a valid Process Size.")
        self._require_allocator()

        result = self.allocator.allocate(owner_id, size, algorithm)
        self._log(result.message, "alloc" if result.success else "fail")
        if result.success:
            self._record_utilization()
        return result

    def deallocate(self, owner_id: str) -> Result:
        owner_id = (owner_id or "").strip()
        if not owner_id:
            return self._reject("Please enter a Process ID to deallocate.")
        self._require_allocator()

        result = self.allocator.deallocate(owner_id)
        self._log(result.message, "dealloc" if result.success else "fail")
        if result.success:
            self._record_utilization()
        return result

    def _reject(self, message: str) -> Result:
        # input validation failures never reach the engine or the log
        return Result(False, message)

    def _require_allocator(self):
        if self.allocator is None:
            raise RuntimeError("Memory has not been initialized")

    def _record_utilization(self):
        self.step_counter += 1
        stats = self.allocator.get_stats()
        self.utilization_history.append(
            (f"Step {self.step_counter}", stats["utilization_pct"])
        )


# =============================================================================
# PAGING
# =============================================================================

class PagingController(_LoggingController):

    def __init__(self):
        super().__init__()
        self.simulator: Optional[PagingSimulator] = None

    @property
    def is_active(self) -> bool:
        return self.simulator is not None

    def initialize(self, num_frames: int, reference_string: Sequence[int], algorithm):
        """
        Raises:
            ValueError: On an out-of-range frame count, an empty or negative
                reference string, or an unknown algorithm tag
        """
        if num_frames is None or not MIN_FRAMES <= num_frames <= MAX_FRAMES:
            raise ValueError(
                f"Number of frames must be between {MIN_FRAMES} and {MAX_FRAMES}."
            )
        if not reference_string:
            raise ValueError("Please enter a reference string.")
        if any(r < 0 for r in reference_string):
            raise ValueError(
                "Reference string must contain non-negative integers "
                "separated by spaces or commas."
            )
        self.simulator = PagingSimulator(num_frames, reference_string, algorithm)
        self._log(
            f"Initialized {self.simulator.algorithm.value.upper()} with {num_frames} frames.",
            "system",
        )

    def step(self) -> Optional[StepResult]:
        self._require_simulator()
        result = self.simulator.step()
        if result is None:
            self._log("All references have been processed. Click Reset to start over.", "fail")
            return None
        self._log(result.reason, "alloc" if result.hit else "fail")
        return result

    def run_all(self) -> Tuple[StepResult, ...]:
        self._require_simulator()
        history = self.simulator.run_all()
        sim = self.simulator
        self._log(
            f"Ran {sim.algorithm.value.upper()} on {len(sim.reference_string)} "
            f"references with {sim.num_frames} frames.",
            "system",
        )
        return history

    def switch_algorithm(self, algorithm):
        """Rebuild with ``algorithm``; rerun everything if the old run had started."""
        algorithm = ReplacementAlgorithm.parse(algorithm)
        if self.simulator is None:
            return
        had_history = bool(self.simulator.history)
        self.simulator = PagingSimulator(
            self.simulator.num_frames, self.simulator.reference_string, algorithm
        )
        if had_history:
            self.simulator.run_all()
            self._log(f"Switched to {algorithm.value.upper()}. Re-ran simulation.", "system")

    def reset(self):
        self.simulator = None
        self._log("Reset. Ready for new simulation.", "system")

    def grid(self) -> List[Tuple[str, list]]:
        """
        Textbook paging table: one row per frame, one column per step.

        Returns:
            List[Tuple[str, list]]: ``("Frame i", cells)`` rows where each cell
            is ``(value, kind)`` with kind one of empty/hit/fault/neutral,
            followed by a ``("Status", ["HIT" | "MISS", ...])`` row.
        """
        if self.simulator is None:
            return []
        history = self.simulator.history
        rows = []
        for f in range(self.simulator.num_frames):
            cells = []
            for step in history:
                value = step.frames[f]
                if value is None:
                    cells.append(("-", "empty"))
                elif step.frame_index == f:
                    cells.append((value, "hit" if step.hit else "fault"))
                else:
                    cells.append((value, "neutral"))
            rows.append((f"Frame {f}", cells))
        rows.append(("Status", ["HIT" if step.hit else "MISS" for step in history]))
        return rows

    def _require_simulator(self):
        if self.simulator is None:
            raise RuntimeError("Paging simulation has not been configured")
