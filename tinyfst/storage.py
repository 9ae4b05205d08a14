"""Growable, numpy-backed arrays.

The packed automaton keeps its states, arcs and symbol strings in
flat numpy buffers which are over-allocated and doubled when they run
out of room. `GrowableArray` owns one such buffer together with the
number of slots actually in use, so that callers only ever ask for
room (`ensure_room`) and never do capacity arithmetic themselves.

```python
import numpy as np
from tinyfst.storage import GrowableArray

weights = GrowableArray(np.float32, capacity=2)
for w in [0.5, 1.0, 2.5]:
    weights.append(w)

weights.capacity   # 4
weights.data       # array([0.5, 1. , 2.5], dtype=float32)
```

"""

import logging

import numpy as np

_LOGGER = logging.getLogger(__name__)

GROWTH_FACTOR = 2

class GrowableArray:
    """GrowableArray: a numpy array with spare capacity at the end.

    Only the first `len(self)` entries of the underlying buffer are
    meaningful. Existing entries never move relative to each other, so
    an index into the array stays valid across growth.
    """
    def __init__(self, dtype, capacity=1):
        """

        Parameters
        ----------
        dtype : numpy dtype or type
            element type of the buffer. Structured dtypes and `object`
            both work.

        capacity : int
            number of slots to preallocate. Values smaller than 1 are
            bumped to 1, so that doubling always makes progress.
        """
        self._data = np.zeros(max(int(capacity), 1), dtype=dtype)
        self._count = 0

    def __len__(self):
        return self._count

    def __getitem__(self, index):
        return self.data[index]

    def __repr__(self):
        return "GrowableArray({})".format(self.data.__repr__())

    @property
    def capacity(self):
        return len(self._data)

    @property
    def data(self):
        """Writable view of the slots in use."""
        return self._data[:self._count]

    @property
    def nbytes(self):
        """Size in bytes of the slots in use (not of the capacity)."""
        return self._count * self._data.itemsize

    def ensure_room(self, n=1):
        """Make sure `n` more elements can be appended without a
        reallocation.

        The buffer grows geometrically, so a sequence of appends costs
        amortized O(1) copying per element.

        """
        needed = self._count + n
        if needed <= len(self._data):
            return

        new_capacity = len(self._data)
        while new_capacity < needed:
            new_capacity *= GROWTH_FACTOR

        _LOGGER.debug("growing %s buffer from %d to %d slots",
                      self._data.dtype, len(self._data), new_capacity)
        self._resize(new_capacity)

    def append(self, item):
        """Append one element and return its index."""
        self.ensure_room(1)
        index = self._count
        self._data[index] = item
        self._count += 1
        return index

    def extend_default(self, n, fill):
        """Append `n` copies of `fill`, returning the index of the first
        one."""
        self.ensure_room(n)
        start = self._count
        self._data[start:start + n] = np.array(fill, dtype=self._data.dtype)
        self._count += n
        return start

    def shrink_to_fit(self):
        """Reallocate the buffer so that its capacity equals its length.

        An empty array keeps a single slot.
        """
        if len(self._data) != max(self._count, 1):
            self._resize(max(self._count, 1))

    def clear(self):
        """Drop every element and release the buffer."""
        self._data = np.zeros(1, dtype=self._data.dtype)
        self._count = 0

    def _resize(self, new_capacity):
        new_data = np.zeros(new_capacity, dtype=self._data.dtype)
        new_data[:self._count] = self._data[:self._count]
        self._data = new_data
