"""A compact, array-indexed weighted finite-state transducer.

A `PackedFST` stores its states and arcs in two flat numpy structured
arrays and its labels in a `tinyfst.symbols.SymbolTable`:

```
states[s] = (first_arc_index, arc_count, weight)
arcs[a]   = (input_symbol, output_symbol, target_state, weight)
```

The arcs leaving state `s` are exactly
`arcs[first_arc_index : first_arc_index + arc_count]`. A state whose
final weight is `inf` is not final. State 0 is the start state and
always exists.

Automata are normally built by `tinyfst.att_parse`, but they can be
put together by hand as long as the arcs of each state are appended
as one consecutive run:

```python
from tinyfst.packed import PackedFST

fst = PackedFST()
fst.ensure_state(1)
a = fst.symbols.intern("a")
fst.append_arc(0, 1, a, a, 0.5)
fst.set_final_weight(1, 0.0)

fst.arcs_from(0)["target_state"]   # array([1], dtype=uint32)
```

"""

import numpy as np

from .base import FSTError, CapacityError
from .storage import GrowableArray
from .symbols import SymbolTable

STATE_DTYPE = np.dtype([
    ("first_arc_index", np.uint32),
    ("arc_count", np.uint16),
    ("weight", np.float32),
], align=True)

ARC_DTYPE = np.dtype([
    ("input_symbol", np.uint32),
    ("output_symbol", np.uint32),
    ("target_state", np.uint32),
    ("weight", np.float32),
], align=True)

NON_FINAL = np.float32(np.inf)

MAX_ARC_COUNT = int(np.iinfo(np.uint16).max)
MAX_INDEX = int(np.iinfo(np.uint32).max)

# three array references and three uint32 counts, padded to 8 bytes
HEADER_BYTES = 40

DEFAULT_STATE_RESERVE = 1024
DEFAULT_ARC_RESERVE = 1024
DEFAULT_SYMBOL_RESERVE = 1024

class PackedFST:
    """PackedFST: a weighted finite-state transducer in flat arrays.

    The automaton owns its arrays. Calling `destroy` (or leaving a
    `with` block) releases all of them at once; after that the
    automaton can't be used any more.
    """
    def __init__(self, state_reserve=DEFAULT_STATE_RESERVE,
                 arc_reserve=DEFAULT_ARC_RESERVE,
                 symbol_reserve=DEFAULT_SYMBOL_RESERVE):
        """

        Parameters
        ----------
        state_reserve : int
            number of states to preallocate room for.

        arc_reserve : int
            number of arcs to preallocate room for.

        symbol_reserve : int
            number of symbols to preallocate room for.
        """
        self.reserve(state_reserve, arc_reserve, symbol_reserve)

    def reserve(self, state_capacity, arc_capacity, symbol_capacity):
        """Allocate empty storage, dropping whatever was stored before.

        Afterwards the automaton holds only the non-final start state 0
        and the epsilon symbol.

        """
        self._states = GrowableArray(STATE_DTYPE, state_capacity)
        self._arcs = GrowableArray(ARC_DTYPE, arc_capacity)
        self._symbols = SymbolTable(symbol_capacity)
        self._states.append((0, 0, NON_FINAL))
        self._destroyed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.destroy()

    def __str__(self):
        return "PackedFST with {} states, {} arcs, {} symbols".format(
            self.statecount, self.arccount, self.symbolcount
        )

    def __repr__(self):
        return "PackedFST(states={}, arcs={}, symbols={})".format(
            self.statecount, self.arccount, self.symbolcount
        )

    @property
    def states(self):
        self._check_alive()
        return self._states.data

    @property
    def arcs(self):
        self._check_alive()
        return self._arcs.data

    @property
    def symbols(self):
        self._check_alive()
        return self._symbols

    @property
    def statecount(self):
        return len(self._states)

    @property
    def arccount(self):
        return len(self._arcs)

    @property
    def symbolcount(self):
        return len(self._symbols)

    @property
    def state_capacity(self):
        return self._states.capacity

    @property
    def arc_capacity(self):
        return self._arcs.capacity

    @property
    def symbol_capacity(self):
        return self._symbols.capacity

    @property
    def destroyed(self):
        return self._destroyed

    def ensure_state(self, index):
        """Make sure that the state `index` exists.

        Every state between the current last state and `index` is
        created as well, non-final and without arcs.

        Parameters
        ----------
        index : int
            number of the state that should exist afterwards.

        Raises
        ------
        CapacityError
            Raised if the state count would no longer fit in 32 bits.

        """
        self._check_alive()
        if index < 0 or index >= MAX_INDEX:
            raise CapacityError(f"state number {index} is out of range")

        missing = index + 1 - len(self._states)
        if missing > 0:
            self._states.extend_default(missing, (0, 0, NON_FINAL))

    def append_arc(self, source_state, target_state, input_symbol,
                   output_symbol, weight=0.0):
        """Append an arc leaving `source_state`.

        All arcs of a state must be appended one after the other: once
        an arc of another state has been appended, `source_state`
        can't get any more arcs.

        Returns
        -------
        int
            index of the new arc in the arcs array.

        Raises
        ------
        FSTError
            Raised if `source_state` doesn't exist, if the symbols
            aren't in the symbol table, or if `source_state` already
            has arcs which aren't at the end of the arcs array.

        CapacityError
            Raised if `source_state` already has the maximum number of
            arcs.

        """
        self._check_alive()
        self._check_state(source_state)
        self._check_symbol(input_symbol)
        self._check_symbol(output_symbol)

        states = self._states.data
        arc_count = int(states["arc_count"][source_state])

        first_arc = int(states["first_arc_index"][source_state])
        if arc_count > 0 and first_arc + arc_count != len(self._arcs):
            raise FSTError(
                f"arcs of state {source_state} must be appended "
                "consecutively, but another state's arcs follow them"
            )
        elif arc_count >= MAX_ARC_COUNT:
            raise CapacityError(
                f"state {source_state} cannot have more than "
                f"{MAX_ARC_COUNT} arcs"
            )

        if target_state < 0 or target_state >= MAX_INDEX:
            raise CapacityError(f"target state {target_state} is out of range")
        if len(self._arcs) >= MAX_INDEX:
            raise CapacityError("arcs array is full")

        if arc_count == 0:
            states["first_arc_index"][source_state] = len(self._arcs)

        index = self._arcs.append(
            (input_symbol, output_symbol, target_state, weight)
        )
        states["arc_count"][source_state] = arc_count + 1
        return index

    def set_final_weight(self, state, weight=0.0):
        """Make `state` final with the given weight.

        Passing `inf` makes the state non-final again.
        """
        self._check_alive()
        self._check_state(state)
        self._states.data["weight"][state] = weight

    def final_weight(self, state):
        self._check_alive()
        self._check_state(state)
        return float(self._states.data["weight"][state])

    def is_final(self, state):
        return self.final_weight(state) < np.inf

    def arcs_from(self, state):
        """Get the arcs leaving a state, as a view into the arcs array.
        """
        self._check_alive()
        self._check_state(state)
        first = int(self._states.data["first_arc_index"][state])
        count = int(self._states.data["arc_count"][state])
        return self._arcs.data[first:first + count]

    def shrink_to_fit(self):
        """Drop the spare capacity of every backing array."""
        self._check_alive()
        self._states.shrink_to_fit()
        self._arcs.shrink_to_fit()
        self._symbols.shrink_to_fit()

    def byte_footprint(self):
        """Get the number of bytes the automaton occupies when packed.

        This counts a fixed-size header, one packed record per state
        and per arc, and every symbol as a null-terminated UTF-8
        string. Spare capacity is not counted.

        Returns
        -------
        int
            footprint in bytes.
        """
        self._check_alive()
        return (HEADER_BYTES + self._states.nbytes + self._arcs.nbytes +
                self._symbols.byte_size())

    def destroy(self):
        """Release every array and symbol owned by the automaton.

        Calling this more than once has no further effect.
        """
        if self._destroyed:
            return

        self._states.clear()
        self._arcs.clear()
        self._symbols.clear()
        self._destroyed = True

    def _check_alive(self):
        if self._destroyed:
            raise FSTError("automaton has been destroyed")

    def _check_state(self, state):
        if state < 0 or state >= len(self._states):
            raise FSTError(f"no state with index {state}")

    def _check_symbol(self, symbol):
        if symbol < 0 or symbol >= len(self._symbols):
            raise FSTError(f"no symbol with index {symbol}")
