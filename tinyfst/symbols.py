"""Interning of arc labels.

Every input and output label of an automaton is stored once, in a
`SymbolTable`, and arcs refer to it by index. Index 0 is always the
epsilon label `@0@`.

"""

from .base import CapacityError
from .storage import GrowableArray

EPSILON = "@0@"
EPSILON_INDEX = 0

MAX_SYMBOLS = 2**32 - 1

class SymbolTable:
    """SymbolTable: a list of distinct strings in order of first
    occurrence, with a reverse mapping from string to index.

    """
    def __init__(self, capacity=1):
        self._symbols = GrowableArray(object, capacity)
        self._index = {}
        self.intern(EPSILON)

    def __len__(self):
        return len(self._symbols)

    def __iter__(self):
        return iter(self._symbols.data)

    def __contains__(self, label):
        return label in self._index

    def __getitem__(self, index):
        return self.symbol(index)

    def __repr__(self):
        return "SymbolTable({})".format(list(self).__repr__())

    @property
    def capacity(self):
        return self._symbols.capacity

    def intern(self, label):
        """Get the index of a label, adding it to the table if it hasn't
        been seen before.

        Parameters
        ----------
        label : string
            the label to look up. Labels are compared exactly.

        Returns
        -------
        int
            the index of `label`. Interning the same string twice
            gives the same index.

        Raises
        ------
        CapacityError
            Raised if the table already holds as many symbols as a
            32-bit index can address.

        """
        try:
            return self._index[label]
        except KeyError:
            pass

        if len(self._symbols) >= MAX_SYMBOLS:
            raise CapacityError(
                f"cannot add symbol '{label}': symbol table is full"
            )

        index = self._symbols.append(label)
        self._index[label] = index
        return index

    def index(self, label):
        """Get the index of a label which is already in the table.

        Raises `KeyError` if it isn't.
        """
        return self._index[label]

    def symbol(self, index):
        """Get the label stored at an index."""
        if index < 0 or index >= len(self._symbols):
            raise IndexError(f"no symbol with index {index}")
        return self._symbols[index]

    def byte_size(self):
        """Number of bytes needed to store every label as a
        null-terminated UTF-8 string."""
        return sum(len(label.encode("utf-8")) + 1 for label in self)

    def shrink_to_fit(self):
        self._symbols.shrink_to_fit()

    def clear(self):
        self._symbols.clear()
        self._index = {}
