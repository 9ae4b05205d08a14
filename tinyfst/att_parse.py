"""Read weighted finite-state transducers in the AT&T text format.

An AT&T file has one tab-separated record per line. The number of
fields decides what the line means:

```
state                                   # final state, weight 0
state   weight                          # final state with a weight
state   target  input   output          # arc with weight 0
state   target  input   output  weight  # weighted arc
```

All lines for one source state have to form a single block, and the
blocks have to appear in increasing order of state number (this is
what `fstprint` and `hfst-fst2txt` write). State 0 is always the
start state.

```python
from tinyfst import att_parse

fst = att_parse.parse_att_string("0\\t1\\ta\\tb\\t0.5\\n1\\n")
fst.statecount      # 2
fst.arcs_from(0)    # the single arc 0 -> 1
```

Any malformed line aborts the whole parse: the partially built
automaton is destroyed and an `ATTInputException` carrying the line
number is raised.

"""

import io
import logging
import re

import numpy as np

from .base import (CapacityError, ATTInputException, ATTFormatError,
                   ATTValueError, StateOrderError, truncate)
from .packed import (PackedFST, DEFAULT_STATE_RESERVE, DEFAULT_ARC_RESERVE,
                     DEFAULT_SYMBOL_RESERVE)

_LOGGER = logging.getLogger(__name__)

FIELD_SEPARATOR = "\t"
MAX_FIELDS = 5

UINT_PREFIX = re.compile(r"\s*\+?[0-9]+")
FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"|infinity|inf|nan)",
    re.IGNORECASE
)

class ATTParser:
    """ATTParser: builds a `PackedFST` one AT&T line at a time.

    The parser owns the automaton until `finish` hands it over. If a
    line can't be parsed, the automaton is destroyed before the
    exception leaves `feed`, so nothing half-built ever escapes.

    """
    def __init__(self, state_reserve=DEFAULT_STATE_RESERVE,
                 arc_reserve=DEFAULT_ARC_RESERVE,
                 symbol_reserve=DEFAULT_SYMBOL_RESERVE):
        self._fst = PackedFST(state_reserve, arc_reserve, symbol_reserve)
        self._current_state = 0
        self.lineno = 0

    @property
    def fst(self):
        return self._fst

    def feed(self, line):
        """Parse one line and apply it to the automaton.

        Parameters
        ----------
        line : string
            one line of AT&T text. A trailing newline (and carriage
            return) is ignored.

        Raises
        ------
        ATTInputException
            Raised if the line is malformed. The automaton has been
            destroyed when this (or any other exception) is raised.

        """
        self.lineno += 1
        try:
            if line.endswith("\n"):
                line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
            self._apply(line)
        except BaseException:
            self.abort()
            _LOGGER.debug("aborted AT&T parse at line %d", self.lineno)
            raise

    def finish(self):
        """Trim the automaton's storage and hand it over."""
        self._fst.shrink_to_fit()
        _LOGGER.debug("read %d lines: %d states, %d arcs, %d symbols",
                      self.lineno, self._fst.statecount,
                      self._fst.arccount, self._fst.symbolcount)
        return self._fst

    def abort(self):
        self._fst.destroy()

    def _apply(self, line):
        # at most MAX_FIELDS + 1 pieces: a sixth piece is already an error
        fields = line.split(FIELD_SEPARATOR, MAX_FIELDS)
        fieldcount = len(fields)

        if fields[0] == "":
            self._error(ATTFormatError,
                        "empty line" if fieldcount == 1
                        else "empty first field", line, line)

        state = self._parse_state(fields[0], line)
        self._enter_state(state, fields[0], line)

        if fieldcount == 1:
            self._fst.set_final_weight(state, 0.0)
        elif fieldcount == 2:
            self._fst.set_final_weight(state,
                                       self._parse_weight(fields[1], line))
        elif fieldcount == 3:
            self._error(ATTFormatError,
                        "cannot parse line with 3 columns", line, line)
        elif fieldcount > MAX_FIELDS:
            self._error(ATTFormatError,
                        f"cannot parse line with more than {MAX_FIELDS} "
                        "columns", fields[MAX_FIELDS], line)
        else:
            self._add_arc(state, fields, line)

    def _enter_state(self, state, field, line):
        if state == self._current_state:
            return

        if state < self._current_state:
            self._error(StateOrderError,
                        f"state {state} appears after state "
                        f"{self._current_state}; lines must be grouped by "
                        "source state in increasing order", field, line)

        self._ensure_state(state, field, line)
        self._current_state = state

    def _add_arc(self, state, fields, line):
        target = self._parse_state(fields[1], line)
        self._ensure_state(target, fields[1], line)

        input_symbol = self._intern(fields[2], line)
        output_symbol = self._intern(fields[3], line)

        weight = 0.0
        if len(fields) == MAX_FIELDS:
            weight = self._parse_weight(fields[4], line)

        try:
            self._fst.append_arc(state, target, input_symbol,
                                 output_symbol, weight)
        except CapacityError as e:
            self._error(ATTValueError, str(e), fields[0], line, cause=e)

    def _ensure_state(self, state, field, line):
        try:
            self._fst.ensure_state(state)
        except CapacityError as e:
            self._error(ATTValueError, str(e), field, line, cause=e)

    def _intern(self, label, line):
        if label == "":
            self._error(ATTValueError, "empty symbol", label, line)
        try:
            return self._fst.symbols.intern(label)
        except CapacityError as e:
            self._error(ATTValueError, str(e), label, line, cause=e)

    def _parse_state(self, field, line):
        match = UINT_PREFIX.match(field)
        if match is None:
            self._error(ATTValueError, f"{truncate(field)} not a number",
                        field, line)
        if field[match.end():].strip() != "":
            self._error(ATTValueError,
                        f"parsing number failed at {truncate(field)}",
                        field, line)
        return int(match.group())

    def _parse_weight(self, field, line):
        match = FLOAT_PREFIX.match(field)
        if match is None:
            self._error(ATTValueError, f"{truncate(field)} not a float",
                        field, line)
        if field[match.end():].strip() != "":
            self._error(ATTValueError,
                        f"parsing float failed at {truncate(field)}",
                        field, line)
        value = float(match.group())
        with np.errstate(over="ignore"):
            weight = np.float32(value)
        if np.isfinite(value) and np.isinf(weight):
            self._error(ATTValueError, f"{truncate(field)} out of range",
                        field, line)
        return weight

    def _error(self, exc_class, message, field, line, cause=None):
        raise exc_class(message, lineno=self.lineno, field=field,
                        line=line) from cause


def parse_att(lines, state_reserve=DEFAULT_STATE_RESERVE,
              arc_reserve=DEFAULT_ARC_RESERVE,
              symbol_reserve=DEFAULT_SYMBOL_RESERVE) -> PackedFST:
    """Build a packed automaton from a sequence of AT&T lines.

    Parameters
    ----------
    lines : iterable of strings
        lines of AT&T text, with or without their newlines. Lines are
        consumed one at a time, so this can be an open file.

    state_reserve, arc_reserve, symbol_reserve : int
        initial capacities of the automaton's arrays. They only affect
        how often the arrays are reallocated while parsing.

    Returns
    -------
    PackedFST
        the automaton described by `lines`, with its storage trimmed
        to size.

    Raises
    ------
    ATTInputException
        Raised on the first malformed line. No automaton is returned
        in that case.

    """
    parser = ATTParser(state_reserve, arc_reserve, symbol_reserve)
    try:
        for line in lines:
            parser.feed(line)
    except BaseException:
        # also covers errors raised by the line source itself
        parser.abort()
        raise

    return parser.finish()


def parse_att_string(text, **reserve) -> PackedFST:
    """Build a packed automaton from a string of AT&T text.

    Lines are split on newlines only, so labels may contain any other
    character except a tab.
    """
    return parse_att(io.StringIO(text, newline="\n"), **reserve)


def load_att_file(filename, encoding="utf-8", **reserve) -> PackedFST:
    """Build a packed automaton from an AT&T file.

    Parameters
    ----------
    filename : string or path
        the file to read.

    encoding : string
        text encoding of the file.

    Returns
    -------
    PackedFST
        the automaton described by the file.

    Raises
    ------
    OSError
        Raised if the file can't be opened or read.

    ATTInputException
        Raised if the file isn't valid AT&T text.

    """
    _LOGGER.debug("reading AT&T file %s", filename)
    with open(filename, "r", encoding=encoding, newline="\n") as att_file:
        return parse_att(att_file, **reserve)
