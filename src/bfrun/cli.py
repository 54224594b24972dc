from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .errors import BFError
from .interpreter import Interpreter
from .lexer import filter_code
from .log import init_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Brainfuck interpreter.",
    )
    parser.add_argument("code", nargs="?", help="Brainfuck source to run (unless --file is given)")
    parser.add_argument("-f", "--file", help="read the program from FILE instead")
    parser.add_argument("-i", "--input", help="use INPUT as the data for ',' instead of STDIN")
    parser.add_argument("-o", "--output", help="write the program output to OUTPUT instead of STDOUT")
    parser.add_argument("--max-cell-value", type=int, help="largest value a cell can hold (default 255)")
    parser.add_argument("--memory-size", type=int, help="fixed tape length (default: growable)")
    parser.add_argument("--flush-output", action="store_true", help="flush the output after every '.'")
    parser.add_argument("--prompt-stdin-once", action="store_true",
                        help="read one line of STDIN for all ',' instead of one line per ','")
    parser.add_argument("--instructions-limit", type=int, help="abort after this many instructions")
    parser.add_argument("--fallback-input", help="character stored by ',' when input runs out (default: 0)")
    parser.add_argument("--print-cells", action="store_true", help="print the final tape and run statistics")
    parser.add_argument("--no-bench", action="store_true", help="do not time the execution")
    parser.add_argument("--minify", action="store_true",
                        help="print the program with all non-instruction characters removed and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    init_logging(debug=args.verbose)

    try:
        if args.code is not None:
            interp = Interpreter(args.code)
        elif args.file is not None:
            interp = Interpreter.from_file(args.file)
        else:
            parser.print_help()
            return 0

        if args.minify:
            print(filter_code(interp.code))
            return 0

        interp.with_flush(args.flush_output).prompt_stdin_once(args.prompt_stdin_once)
        interp.with_bench_execution(not args.no_bench)
        if args.max_cell_value is not None:
            interp.with_max_value(args.max_cell_value)
        if args.memory_size is not None:
            interp.with_mem_size(args.memory_size)
        if args.instructions_limit is not None:
            interp.with_instructions_limit(args.instructions_limit)
        if args.fallback_input is not None:
            interp.with_fallback_input(args.fallback_input)
        if args.input is not None:
            interp.with_input(args.input)
        if args.output is not None:
            try:
                interp.with_output(open(args.output, "wb"))
            except OSError as e:
                print(f"Failed to open the provided file: {args.output}: {e}", file=sys.stderr)
                return 1

        with interp:
            report = interp.execute()
    except BFError as e:
        print(f"Something went wrong: {e}", file=sys.stderr)
        return 1

    if args.print_cells:
        print()
        print(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
