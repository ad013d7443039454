# paging.py

from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from replacement import (
    ReplacementAlgorithm,
    clock_victim,
    fifo_victim,
    lru_victim,
    optimal_victim,
)


@dataclass(frozen=True)
class StepResult:
    """
    One processed reference.

    Attributes:
        ref (int): The page that was referenced
        hit (bool): True if the page was already resident
        evicted (Optional[int]): Page removed to make room, None on hits and
            when an empty frame was used
        frame_index (int): Frame that held the hit, or that was written on a fault
        frames (Tuple[Optional[int], ...]): Frame contents after this step
        reason (str): Human readable justification for the outcome
    """
    ref: int
    hit: bool
    evicted: Optional[int]
    frame_index: int
    frames: Tuple[Optional[int], ...]
    reason: str


class PagingSimulator:
    """
    Step-by-step demand paging over a fixed reference string.

    The simulator owns the frame table, the hit/fault counters and the
    per-algorithm bookkeeping:

    - FIFO: queue of frame indices in load order
    - LRU: last-used step per frame
    - Clock: reference bit per frame plus the clock hand

    Every processed reference is appended to ``history`` with a snapshot of
    the frame table, so ``len(history) == current_step`` at all times.
    """

    def __init__(self, num_frames: int, reference_string: Sequence[int], algorithm):
        if num_frames < 1:
            raise ValueError("Number of frames must be at least 1")
        self.algorithm = ReplacementAlgorithm.parse(algorithm)
        self.num_frames = num_frames
        self.reference_string: Tuple[int, ...] = tuple(reference_string)

        self.frames: List[Optional[int]] = [None] * num_frames
        self.current_step = 0
        self.hits = 0
        self.faults = 0
        self._history: List[StepResult] = []

        # FIFO replacement: frame indices, oldest load at the left
        self.fifo_queue: deque = deque()
        # LRU replacement: step of last use per frame (-1 = never)
        self.lru_timestamps: List[int] = [-1] * num_frames
        # Clock replacement
        self.clock_pointer = 0
        self.clock_bits: List[int] = [0] * num_frames

        self.event_log: List[str] = []

    @property
    def history(self) -> Tuple[StepResult, ...]:
        return tuple(self._history)

    @property
    def done(self) -> bool:
        return self.current_step >= len(self.reference_string)

    # =========================================================================
    # SIMULATION
    # =========================================================================

    def step(self) -> Optional[StepResult]:
        """
        Process the next reference.

        Returns:
            Optional[StepResult]: The step record, or None once the whole
            reference string has been processed (repeatable).
        """
        if self.done:
            return None

        ref = self.reference_string[self.current_step]

        if ref in self.frames:
            # ----- PAGE HIT -----
            frame_no = self.frames.index(ref)
            self.hits += 1
            result = StepResult(
                ref=ref,
                hit=True,
                evicted=None,
                frame_index=frame_no,
                frames=tuple(self.frames),
                reason=f"Page {ref} is already in Frame {frame_no} -> HIT",
            )
            self._on_hit(frame_no)
        else:
            # ----- PAGE FAULT -----
            self.faults += 1
            frame_no, reason = self._find_victim(ref)
            evicted = self.frames[frame_no]
            self.frames[frame_no] = ref
            result = StepResult(
                ref=ref,
                hit=False,
                evicted=evicted,
                frame_index=frame_no,
                frames=tuple(self.frames),
                reason=reason,
            )
            self._on_fault(frame_no)

        self.current_step += 1
        self._history.append(result)
        self.event_log.append(result.reason)
        return result

    def run_all(self) -> Tuple[StepResult, ...]:
        while self.step() is not None:
            pass
        return self.history

    # =========================================================================
    # ALGORITHM BOOKKEEPING
    # =========================================================================

    def _on_hit(self, frame_no: int):
        if self.algorithm is ReplacementAlgorithm.LRU:
            self.lru_timestamps[frame_no] = self.current_step
        elif self.algorithm is ReplacementAlgorithm.CLOCK:
            self.clock_bits[frame_no] = 1

    def _on_fault(self, frame_no: int):
        if self.algorithm is ReplacementAlgorithm.FIFO:
            # drop the stale position before re-queueing the reloaded frame
            if frame_no in self.fifo_queue:
                self.fifo_queue.remove(frame_no)
            self.fifo_queue.append(frame_no)
        elif self.algorithm is ReplacementAlgorithm.LRU:
            self.lru_timestamps[frame_no] = self.current_step
        elif self.algorithm is ReplacementAlgorithm.CLOCK:
            self.clock_bits[frame_no] = 1
            self.clock_pointer = (frame_no + 1) % self.num_frames

    def _find_victim(self, ref: int) -> Tuple[int, str]:
        if None in self.frames:
            frame_no = self.frames.index(None)
            return frame_no, f"Frame {frame_no} is empty -> placed Page {ref}"

        if self.algorithm is ReplacementAlgorithm.FIFO:
            frame_no = fifo_victim(self.fifo_queue)
            why = "is oldest"
            tag = "FIFO"
        elif self.algorithm is ReplacementAlgorithm.LRU:
            frame_no = lru_victim(self.lru_timestamps)
            why = "was least recently used"
            tag = "LRU"
        elif self.algorithm is ReplacementAlgorithm.OPTIMAL:
            future = self.reference_string[self.current_step + 1:]
            frame_no = optimal_victim(self.frames, future)
            why = "won't be used longest"
            tag = "Optimal"
        else:
            frame_no, self.clock_bits = clock_victim(self.clock_bits, self.clock_pointer)
            self.clock_pointer = frame_no
            why = "has ref bit 0"
            tag = "Clock"

        evicted = self.frames[frame_no]
        return frame_no, (
            f"{tag}: Page {evicted} (Frame {frame_no}) {why} -> evicted, placed Page {ref}"
        )

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    def get_stats(self) -> Dict[str, float]:
        """
        Statistics for the references processed so far.

        Returns:
            Dict[str, float]: total_refs, hits, faults, hit_ratio_pct and
            fault_ratio_pct (percentages to one decimal, 0.0 before any step)
        """
        total_refs = self.current_step
        if total_refs == 0:
            hit_ratio = fault_ratio = 0.0
        else:
            hit_ratio = round(self.hits / total_refs * 100, 1)
            fault_ratio = round(self.faults / total_refs * 100, 1)

        return {
            "total_refs": total_refs,
            "hits": self.hits,
            "faults": self.faults,
            "hit_ratio_pct": hit_ratio,
            "fault_ratio_pct": fault_ratio,
        }
