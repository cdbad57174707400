# python -m WSPE {gen|proc|inspect} ...

import sys

from WSPE.cli import EXIT_USAGE, gen_main, proc_main
from WSPE.SVM.inspect_wav import main as inspect_main

_COMMANDS = {"gen": gen_main, "proc": proc_main, "inspect": inspect_main}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] not in _COMMANDS:
        print("Usage: python -m WSPE {gen|proc|inspect} ...", file=sys.stderr)
        return EXIT_USAGE
    return _COMMANDS[sys.argv[1]](sys.argv[2:])


if __name__ == "__main__":
    sys.exit(main())
