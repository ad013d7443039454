# replacement.py
"""
Victim selection for page replacement.

These functions are only consulted once every frame is occupied; filling an
empty frame is handled by the simulator itself. Each one is pure: it reads the
algorithm's bookkeeping and returns the frame index to evict.
"""

from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from errors import UnknownAlgorithmError


class ReplacementAlgorithm(Enum):
    """
    Page replacement policies.

    FIFO:    evict the page loaded longest ago (load order, not use order)
    LRU:     evict the page whose last use is oldest
    OPTIMAL: evict the page whose next use is farthest in the future
    CLOCK:   second chance; skip (and clear) pages whose reference bit is set
    """
    FIFO = "fifo"
    LRU = "lru"
    OPTIMAL = "optimal"
    CLOCK = "clock"

    @classmethod
    def parse(cls, tag) -> "ReplacementAlgorithm":
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise UnknownAlgorithmError(tag, [a.value for a in cls]) from None


def fifo_victim(queue: Iterable[int]) -> int:
    """Return the frame at the head of the load-order queue."""
    for frame_no in queue:
        return frame_no
    raise ValueError("FIFO queue is empty")


def lru_victim(timestamps: Sequence[int]) -> int:
    """
    Return the frame with the smallest last-used timestamp.

    Ties go to the lowest frame index.
    """
    min_time = float('inf')
    victim_frame_no = 0
    for frame_no, last_used in enumerate(timestamps):
        if last_used < min_time:
            min_time = last_used
            victim_frame_no = frame_no
    return victim_frame_no


def optimal_victim(frames: Sequence[Optional[int]], future: Sequence[int]) -> int:
    """
    Return the frame whose page is needed farthest in the future.

    Args:
        frames: Current frame contents.
        future: References still to come, excluding the one being served.

    A page that never appears in ``future`` is evicted immediately (lowest
    frame first); otherwise the farthest next use wins, ties to the lowest
    frame index.
    """
    farthest = -1
    victim_frame_no = 0
    for frame_no, page_no in enumerate(frames):
        try:
            next_use = future.index(page_no)
        except ValueError:
            return frame_no
        if next_use > farthest:
            farthest = next_use
            victim_frame_no = frame_no
    return victim_frame_no


def clock_victim(ref_bits: Sequence[int], pointer: int) -> Tuple[int, List[int]]:
    """
    Second-chance scan starting at ``pointer``.

    Frames with reference bit 1 get the bit cleared and are passed over; the
    first frame seen with bit 0 is the victim. Terminates within two
    revolutions since every bit is 0 after one.

    Returns:
        Tuple[int, List[int]]: the victim frame and the updated reference bits
        (``ref_bits`` itself is left untouched).
    """
    bits = list(ref_bits)
    n = len(bits)
    if n == 0:
        raise ValueError("No frames to choose from")
    while bits[pointer] != 0:
        bits[pointer] = 0
        pointer = (pointer + 1) % n
    return pointer, bits
