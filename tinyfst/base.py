MAX_ERRLEN = 100

class FSTError(Exception):
    """Thrown when a packed automaton is used in a way that would break
    its storage invariants (appending arcs out of order, touching a
    destroyed automaton, addressing a state that doesn't exist).

    """
    pass

class CapacityError(FSTError):
    """Thrown when a packed field would overflow: more than 65535 arcs
    leaving a single state, or an index that doesn't fit in 32 bits.

    """
    pass

class ATTInputException(FSTError):
    """Base class for errors found while reading AT&T text.

    Attributes
    ----------
    lineno : int
        1-based number of the offending line.
    field : string
        content of the offending field (or the whole line, for errors
        which are about the line as a whole).
    line : string
        the offending line, with its newline stripped.
    """
    def __init__(self, message, lineno=None, field=None, line=None):
        self.message = message
        self.lineno = lineno
        self.field = field
        self.line = line

        if lineno is not None:
            message = "{}: {}".format(lineno, message)
        super().__init__(message)

class ATTFormatError(ATTInputException):
    """The line has a field count the AT&T format doesn't allow, or is
    empty."""
    pass

class ATTValueError(ATTInputException):
    """A field could not be read as the value its position requires."""
    pass

class StateOrderError(ATTInputException):
    """Lines for a source state appeared after lines for a later state.

    Arcs for one state have to form a single contiguous block, so the
    source states of an AT&T file must be grouped and non-decreasing.
    """
    pass

def truncate(text, maxlen=MAX_ERRLEN):
    if len(text) <= maxlen:
        return text
    return text[:maxlen] + "..."
