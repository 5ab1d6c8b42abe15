from typing import Any, Iterable, List, Optional
from loguru import logger
from prefix_sums.lib.errors import (
    IndexOutOfRangeError,
    InvalidSizeError,
    ValueOutOfRangeError,
)
from prefix_sums.lib.settings import PrefixSumIndexSettings

INT64_MIN = -(2**63)
"""The smallest value representable by a signed 64-bit integer"""

INT64_MAX = 2**63 - 1
"""The largest value representable by a signed 64-bit integer"""


def _check_int(value: Any, name: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


class PrefixSumIndex:
    """Describes a fenwick tree, also known as a binary indexed tree, over a
    fixed number of integers. This data structure primarily has two operations:
    update and prefix_sum. Update adds a (possibly negative) delta to the
    element at a particular index, and prefix_sum returns the sum of the
    elements up to a particular index. Range sums fall out of the difference
    of two prefix sums.

    Although this can be thought of as a tree, I don't find it very intuitive
    to think of it that way. First go through the prefix sum algorithm, then
    the update algorithm. It may be helpful to read the original paper:

    https://static.aminer.org/pdf/PDF/001/073/976/a_new_data_structure_for_cumulative_frequency_tables.pdf

    Externally the index is a 0-indexed array of `size` integers. It requires
    O(n) space, where n is the size, and O(log n) time for update and queries.
    Only sums are supported: the aggregate must be invertible, so min/max are
    out.

    This is not safe to mutate from multiple threads without external locking.
    """

    def __init__(
        self, size: int, *, settings: Optional[PrefixSumIndexSettings] = None
    ) -> None:
        """Initializes an index of `size` zeros.

        Raises:
            InvalidSizeError: if size is negative
        """
        _check_int(size, "size")
        if size < 0:
            raise InvalidSizeError(size)

        if settings is None:
            settings = PrefixSumIndexSettings.from_environ()

        self.settings: PrefixSumIndexSettings = settings
        """The settings this index was constructed with"""

        self.size: int = size
        """The number of logical elements. Fixed at construction."""

        self.tree: List[int] = [0] * (size + 1)
        """The underlying tree data structure. Slot 0 is unused so that the
        remaining slots can be addressed by their one-based index.

        Value interpretation with a size of 7 (one-based logical indices):

        -, 1, 1..2, 3, 1..4, 5, 5..6, 7

        where a..b means the sum of the elements from a to b, inclusive,
        whereas just a means the element at a. In general slot i covers the
        lowest set bit of i elements, ending at element i. The pattern
        continues, e.g., for a size of 16:

        -, 1, 1..2, 3, 1..4, 5, 5..6, 7, 1..8, 9, 9..10, 11, 9..12, 13, 13..14,
        15, 1..16
        """

        logger.debug(f"created empty PrefixSumIndex {size=}")

    @classmethod
    def from_values(
        cls,
        values: Iterable[int],
        *,
        settings: Optional[PrefixSumIndexSettings] = None,
    ) -> "PrefixSumIndex":
        """Builds an index whose elements are the given values, in O(n) time.

        The result is identical to constructing an empty index and updating
        each index with its value in increasing order: instead of walking
        upward from every slot, each slot pushes its completed total into the
        next slot responsible for it.

        Raises:
            TypeError: if any value is not an int
            ValueOutOfRangeError: if 64-bit enforcement is enabled and a value
              or a partial sum does not fit
        """
        initial = list(values)
        for value in initial:
            _check_int(value, "value")

        result = cls(len(initial), settings=settings)
        if result.settings.enforce_int64:
            for value in initial:
                result._check_fits(value)

        tree = [0] + initial
        for one_based_index in range(1, result.size + 1):
            parent = one_based_index + (one_based_index & -one_based_index)
            if parent <= result.size:
                tree[parent] += tree[one_based_index]

        if result.settings.enforce_int64:
            for one_based_index in range(1, result.size + 1):
                result._check_fits(tree[one_based_index], slot=one_based_index)

        result.tree = tree
        logger.debug(f"built PrefixSumIndex from values size={result.size}")
        return result

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> int:
        return self.point_value(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrefixSumIndex):
            return NotImplemented
        return self.size == other.size and self.tree == other.tree

    def __repr__(self) -> str:
        return f"PrefixSumIndex({self.values()!r})"

    def update(self, index: int, delta: int) -> None:
        """Adds the given delta to the element at the given index.

        This requires log(n) time, where n is the size.

        Raises:
            IndexOutOfRangeError: if index is not in [0, size)
            ValueOutOfRangeError: if 64-bit enforcement is enabled and the
              delta or any resulting partial sum does not fit. Nothing is
              written in that case.
        """
        self._check_index(index, lower=0)
        _check_int(delta, "delta")
        if self.settings.enforce_int64:
            self._check_fits(delta)
        self._apply(index, delta)

    def set(self, index: int, value: int) -> None:
        """Sets the element at the given index to the given value, via an
        update by the difference from the current value.

        Raises:
            IndexOutOfRangeError: if index is not in [0, size)
            ValueOutOfRangeError: if 64-bit enforcement is enabled and the
              value or any resulting partial sum does not fit
        """
        _check_int(value, "value")
        if self.settings.enforce_int64:
            self._check_fits(value)
        self._apply(index, value - self.point_value(index))

    def _apply(self, index: int, delta: int) -> None:
        if self.settings.enforce_int64:
            one_based_index = index + 1
            while one_based_index <= self.size:
                self._check_fits(
                    self.tree[one_based_index] + delta, slot=one_based_index
                )
                one_based_index += one_based_index & -one_based_index

        one_based_index = index + 1
        while one_based_index <= self.size:
            self.tree[one_based_index] += delta
            one_based_index += one_based_index & -one_based_index

    def prefix_sum(self, index: int) -> int:
        """Computes the sum of the elements up to the given index, inclusive.
        An index of -1 refers to the empty prefix, whose sum is 0.

        Raises:
            IndexOutOfRangeError: if index is not in [-1, size)
        """
        self._check_index(index, lower=-1)
        result = self._prefix_sum(index)
        if self.settings.enforce_int64:
            self._check_fits(result)
        return result

    def range_sum(self, left: int, right: int) -> int:
        """Computes the sum of the elements from left to right, inclusive. If
        left is greater than right the range is empty and the sum is 0.

        Raises:
            IndexOutOfRangeError: if either bound is not in [0, size)
        """
        self._check_index(left, lower=0)
        self._check_index(right, lower=0)
        if left > right:
            return 0

        result = self._prefix_sum(right) - self._prefix_sum(left - 1)
        if self.settings.enforce_int64:
            self._check_fits(result)
        return result

    def point_value(self, index: int) -> int:
        """Returns the element at the given index.

        Raises:
            IndexOutOfRangeError: if index is not in [0, size)
        """
        return self.range_sum(index, index)

    def total(self) -> int:
        """The sum of every element; 0 for an empty index"""
        return self.prefix_sum(self.size - 1)

    def values(self) -> List[int]:
        """Reconstructs every element in O(n) time, by subtracting from each
        slot the slots which were folded into it during a build.
        """
        result = self.tree[1:]
        for one_based_index in range(1, self.size + 1):
            parent = one_based_index + (one_based_index & -one_based_index)
            if parent <= self.size:
                result[parent - 1] -= self.tree[one_based_index]
        return result

    def search(self, target: int) -> int:
        """Finds the smallest index whose prefix sum is at least the target,
        returning size if there is no such index.

        This requires log(n) time, but is only meaningful if every element is
        non-negative, so that the prefix sums never decrease. Otherwise the
        returned index is some index, but not necessarily the smallest.
        """
        _check_int(target, "target")

        position = 0
        remaining = target
        step = 1 << (self.size.bit_length() - 1) if self.size > 0 else 0
        while step > 0:
            candidate = position + step
            if candidate <= self.size and self.tree[candidate] < remaining:
                position = candidate
                remaining -= self.tree[candidate]
            step >>= 1
        return position

    def _prefix_sum(self, index: int) -> int:
        one_based_index = index + 1
        result = 0
        while one_based_index > 0:
            result += self.tree[one_based_index]
            one_based_index -= one_based_index & -one_based_index
        return result

    def _check_index(self, index: int, *, lower: int) -> None:
        _check_int(index, "index")
        if not lower <= index < self.size:
            raise IndexOutOfRangeError(index, lower=lower, upper=self.size)

    def _check_fits(self, value: int, *, slot: Optional[int] = None) -> None:
        if not INT64_MIN <= value <= INT64_MAX:
            logger.warning(
                f"rejecting value outside signed 64-bit range {value=} {slot=}"
            )
            raise ValueOutOfRangeError(value, slot=slot)
