"""Exceptions raised by the prefix sum index. Every one of these signals a
contract violation by the caller; none of them are transient, and the index
is never mutated when one is raised.
"""

from typing import Optional


class PrefixSumIndexError(Exception):
    """Base class for all errors raised by a PrefixSumIndex"""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidSizeError(PrefixSumIndexError, ValueError):
    """Raised when constructing an index with a negative size"""

    def __init__(self, size: int) -> None:
        super().__init__(f"size must be non-negative, got {size}")
        self.size = size


class IndexOutOfRangeError(PrefixSumIndexError, IndexError):
    """Raised when an update or query index falls outside its valid bounds,
    which are `[lower, upper)`
    """

    def __init__(self, index: int, *, lower: int, upper: int) -> None:
        super().__init__(f"index {index} out of range [{lower}, {upper})")
        self.index = index
        self.lower = lower
        self.upper = upper


class ValueOutOfRangeError(PrefixSumIndexError, OverflowError):
    """Raised when a value, delta, or the partial sum it would produce does
    not fit in a signed 64-bit integer
    """

    def __init__(self, value: int, *, slot: Optional[int] = None) -> None:
        if slot is None:
            message = f"value {value} does not fit in a signed 64-bit integer"
        else:
            message = (
                f"partial sum {value} at slot {slot} does not fit in a "
                "signed 64-bit integer"
            )
        super().__init__(message)
        self.value = value
        self.slot = slot
