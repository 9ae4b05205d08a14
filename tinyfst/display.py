"""display.py: human-readable output for packed automata.

"""

import sys

import numpy as np

def summary(fst):
    return "Read FSA: {} states, {} arcs, {} symbols".format(
        fst.statecount, fst.arccount, fst.symbolcount
    )

def dump_lines(fst):
    """Describe an automaton line by line.

    The symbol table comes first, as `index = label` lines. Then, for
    each state in order, its final weight (if it is final) and its arcs,
    in AT&T layout with labels written out and every weight printed.

    Parameters
    ----------
    fst : PackedFST
        the automaton to describe.

    Yields
    ------
    string
        one line of output, without a trailing newline.

    """
    symbols = fst.symbols
    for i, label in enumerate(symbols):
        yield "{} = {}".format(i, label)

    for state, record in enumerate(fst.states):
        if record["weight"] < np.inf:
            yield "{}\t{:f}".format(state, record["weight"])

        for arc in fst.arcs_from(state):
            yield "{}\t{}\t{}\t{}\t{:f}".format(
                state, arc["target_state"],
                symbols[arc["input_symbol"]],
                symbols[arc["output_symbol"]],
                arc["weight"]
            )

def print_fst(fst, file=None):
    """Write `dump_lines(fst)` to a stream (stdout by default)."""
    if file is None:
        file = sys.stdout

    for line in dump_lines(fst):
        print(line, file=file)
