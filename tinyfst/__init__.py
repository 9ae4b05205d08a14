r"""
tinyfst
=======

`tinyfst` reads weighted finite-state transducers written in the
tab-separated AT&T text format and stores them as compact,
array-indexed automata: states and arcs live in flat
[numpy](https://numpy.org/) structured arrays, and input/output labels
are interned in a shared symbol table.

The package doesn't do anything *with* the automata (no composition,
determinization or shortest paths). It is meant to be the loading
step for code which does.

## Example usage

To read a transducer and look at the arcs leaving its start state:

```python
from tinyfst import att_parse

fst = att_parse.load_att_file("lexicon.att")

for arc in fst.arcs_from(0):
    print(fst.symbols[arc["input_symbol"]],
          fst.symbols[arc["output_symbol"]],
          arc["target_state"], arc["weight"])

fst.byte_footprint()
```

The same thing is available from the command line:

```
$ tinyfst --dump lexicon.att
```

"""

from .base import (FSTError, CapacityError, ATTInputException,
                   ATTFormatError, ATTValueError, StateOrderError)
from .packed import PackedFST
from .symbols import SymbolTable, EPSILON
from .att_parse import parse_att, parse_att_string, load_att_file
