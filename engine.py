# engine.py

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Union

from errors import ErrorKind, UnknownAlgorithmError
from placement import PlacementAlgorithm, find_block


@dataclass(repr=False)
class MemoryBlock:
    block_id: int
    size: int
    allocated: bool = False
    owner_id: Optional[str] = None

    def __repr__(self):
        state = "A" if self.allocated else "F"
        owner = f"|{self.owner_id}" if self.allocated else ""
        return f"[{state}|#{self.block_id}|{self.size}{owner}]"


@dataclass(frozen=True)
class Result:
    success: bool
    message: str
    error: Optional[ErrorKind] = None
    block_id: Optional[int] = None
    size: Optional[int] = None

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> "Result":
        return cls(False, message, error=error)


class PartitionAllocator:
    """
    Contiguous memory allocator over a fixed-size region.

    The region is an ordered list of blocks (list position = address order).
    Blocks are split on allocation and adjacent free blocks are merged on
    deallocation, so their sizes always add up to ``total_size``.
    """

    def __init__(self, initial: Union[int, Sequence[int]] = 100):
        if isinstance(initial, int):
            self.initial_partitions = [initial]
        else:
            self.initial_partitions = list(initial)
        if not self.initial_partitions or any(s <= 0 for s in self.initial_partitions):
            raise ValueError("Partition sizes must be positive integers")
        self.total_size = sum(self.initial_partitions)
        self.reset()

    def reset(self):
        self.blocks: List[MemoryBlock] = [
            MemoryBlock(i + 1, size) for i, size in enumerate(self.initial_partitions)
        ]
        self.next_id = len(self.blocks) + 1
        # next-fit cursor, advanced by every successful allocation
        self.last_index = 0
        self.allocations_attempted = 0
        self.allocations_successful = 0
        self.event_log: List[str] = []

    # -----------------------------
    # Allocate / Deallocate
    # -----------------------------
    def allocate(self, owner_id: str, size: int, algorithm) -> Result:
        self.allocations_attempted += 1

        if self._find_owner(owner_id) is not None:
            return self._fail(
                ErrorKind.DUPLICATE_OWNER, f"Process ID {owner_id} already exists."
            )

        try:
            algorithm = PlacementAlgorithm.parse(algorithm)
        except UnknownAlgorithmError as e:
            return self._fail(ErrorKind.UNKNOWN_ALGORITHM, str(e))

        index = find_block(algorithm, self.blocks, size, self.last_index)
        if index is None:
            return self._fail(
                ErrorKind.NO_FIT,
                f"Allocation failed: No suitable block found using {algorithm.value}.",
            )

        self.allocations_successful += 1
        block = self._split_block(index, size)
        block.allocated = True
        block.owner_id = owner_id

        self.last_index = (index + 1) % len(self.blocks)

        message = f"Allocated {size}KB for {owner_id} at Block {block.block_id}."
        self.event_log.append(message)
        return Result(True, message, block_id=block.block_id, size=size)

    def deallocate(self, owner_id: str) -> Result:
        index = self._find_owner(owner_id)
        if index is None:
            return self._fail(
                ErrorKind.OWNER_NOT_FOUND, f"Process ID {owner_id} not found."
            )

        block = self.blocks[index]
        block.allocated = False
        block.owner_id = None
        block_id, size = block.block_id, block.size

        self._coalesce()

        if self.last_index >= len(self.blocks):
            self.last_index = 0

        message = f"Deallocated {owner_id} ({size}KB)."
        self.event_log.append(message)
        return Result(True, message, block_id=block_id, size=size)

    # -----------------------------
    # Helpers
    # -----------------------------
    def _fail(self, error: ErrorKind, message: str) -> Result:
        self.event_log.append(message)
        return Result.failure(error, message)

    def _find_owner(self, owner_id: str) -> Optional[int]:
        for i, block in enumerate(self.blocks):
            if block.allocated and block.owner_id == owner_id:
                return i
        return None

    def _split_block(self, index: int, req_size: int) -> MemoryBlock:
        block = self.blocks[index]

        # Perfect fit
        if block.size == req_size:
            return block

        remainder = MemoryBlock(self.next_id, block.size - req_size)
        self.next_id += 1

        block.size = req_size
        self.blocks.insert(index + 1, remainder)
        return block

    def _coalesce(self):
        # The merged run keeps the leftmost block (and its id).
        i = 0
        while i < len(self.blocks) - 1:
            current, following = self.blocks[i], self.blocks[i + 1]
            if not current.allocated and not following.allocated:
                current.size += following.size
                del self.blocks[i + 1]
                continue
            i += 1

    def get_state(self) -> List[MemoryBlock]:
        return [replace(b) for b in self.blocks]

    # --------------------------------------
    # Statistics
    # --------------------------------------
    def get_stats(self):
        free_blocks = [b.size for b in self.blocks if not b.allocated]
        used = sum(b.size for b in self.blocks if b.allocated)
        free = sum(free_blocks)
        largest_free = max(free_blocks) if free_blocks else 0

        # A region nothing has been placed in reports no fragmentation, even
        # when it starts out as several custom partitions.
        external_frag = free - largest_free if used > 0 else 0

        if self.allocations_attempted == 0:
            success_rate = 100.0
        else:
            success_rate = round(
                self.allocations_successful / self.allocations_attempted * 100, 1
            )

        return {
            "total": self.total_size,
            "used": used,
            "free": free,
            "utilization_pct": round(used / self.total_size * 100, 1),
            "external_fragmentation": external_frag,
            "largest_free_block": largest_free,
            "block_count": len(self.blocks),
            "success_rate_pct": success_rate,
        }
