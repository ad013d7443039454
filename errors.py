# errors.py

from enum import Enum


class ErrorKind(Enum):
    """Reasons an allocator operation can fail. None of them are fatal."""
    DUPLICATE_OWNER = "DuplicateOwner"
    NO_FIT = "NoFit"
    OWNER_NOT_FOUND = "OwnerNotFound"
    UNKNOWN_ALGORITHM = "UnknownAlgorithm"


class UnknownAlgorithmError(ValueError):
    """Raised when a placement or replacement tag is not recognised."""

    def __init__(self, tag, choices):
        self.tag = tag
        self.choices = tuple(choices)
        super().__init__(
            f"Unknown algorithm '{tag}'. Expected one of: {', '.join(self.choices)}"
        )
