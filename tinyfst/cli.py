"""Command-line entry point: read an AT&T file and report its size.

```
$ tinyfst lexicon.att
Read FSA: 1523 states, 2210 arcs, 57 symbols
52397 bytes
```

"""

import argparse
import logging
import sys

from .att_parse import load_att_file
from .base import ATTInputException
from .display import print_fst, summary
from .packed import (DEFAULT_STATE_RESERVE, DEFAULT_ARC_RESERVE,
                     DEFAULT_SYMBOL_RESERVE)

_LOGGER = logging.getLogger("tinyfst")

EXIT_FAILURE = 1

def build_parser():
    parser = argparse.ArgumentParser(
        prog="tinyfst",
        description="Read a weighted transducer in AT&T format into a "
        "packed automaton and report its size."
    )
    parser.add_argument("att_file", metavar="ATTFILE",
                        help="transducer in tab-separated AT&T format")
    parser.add_argument("--dump", action="store_true",
                        help="print the symbol table, final weights and arcs")
    parser.add_argument("--encoding", default="utf-8",
                        help="text encoding of ATTFILE (default: %(default)s)")
    parser.add_argument("--state-reserve", type=int,
                        default=DEFAULT_STATE_RESERVE,
                        help="initial state capacity (default: %(default)s)")
    parser.add_argument("--arc-reserve", type=int,
                        default=DEFAULT_ARC_RESERVE,
                        help="initial arc capacity (default: %(default)s)")
    parser.add_argument("--symbol-reserve", type=int,
                        default=DEFAULT_SYMBOL_RESERVE,
                        help="initial symbol capacity (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="log more (repeat for debug output)")
    return parser

def _log_level(verbosity):
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=_log_level(args.verbose))

    _LOGGER.info("Reading %s", args.att_file)
    try:
        fst = load_att_file(args.att_file, encoding=args.encoding,
                            state_reserve=args.state_reserve,
                            arc_reserve=args.arc_reserve,
                            symbol_reserve=args.symbol_reserve)
    except OSError as e:
        print(f"Cannot read {args.att_file}: {e.strerror or e}",
              file=sys.stderr)
        return EXIT_FAILURE
    except UnicodeDecodeError as e:
        print(f"Cannot read {args.att_file}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except ATTInputException as e:
        print(f"{args.att_file}:{e}", file=sys.stderr)
        print(f"Parsing {args.att_file} failed", file=sys.stderr)
        return EXIT_FAILURE

    with fst:
        print(summary(fst))
        if args.dump:
            print_fst(fst)
        print("{} bytes".format(fst.byte_footprint()))

    return 0

if __name__ == "__main__":
    sys.exit(main())
