"""
Command-line grid word search.

Usage:
    python -m scripts.solve_grid <letters> [--size N] [--dictionary SRC]

Examples:
    python -m scripts.solve_grid "cats oren glad xyzq"
    python -m scripts.solve_grid c,a,t,s,o,r,e,n,g,l,a,d,x,y,z,q --min-length 3
    python -m scripts.solve_grid "cats oren glad xyzq" --dictionary https://example.com/words.txt

Prints every word found, grouped by starting cell in row-major order.
"""
import argparse
import sys

from gridsearch.settings import settings
from gridsearch.dictionary import load_index
from gridsearch.errors import GridSearchError
from gridsearch.grid import Grid, parse_letters
from gridsearch.metrics import StageTimer
from gridsearch.solver import format_report, search_all


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find dictionary words in a letter grid")
    parser.add_argument("letters", help="Grid letters in row-major order, e.g. \"cats oren glad xyzq\"")
    parser.add_argument("--size", type=int, default=None,
                        help="Grid side length (default: inferred from the letter count)")
    parser.add_argument("--dictionary", default=settings.DICTIONARY_SOURCE,
                        help="Word list file or http(s) URL (default: %(default)s)")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help="Shortest word to report (default: %(default)s)")
    parser.add_argument("--max-length", type=int, default=settings.MAX_WORD_LENGTH,
                        help="Longest word to report (default: %(default)s)")
    parser.add_argument("--timings", action="store_true", help="Print stage timings")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if not 1 <= args.min_length <= args.max_length:
        print(f"Error: need 1 <= --min-length ({args.min_length}) <= --max-length ({args.max_length})")
        return 1

    timer = StageTimer("cli")
    try:
        with timer.stage("grid"):
            grid = Grid.from_letters(parse_letters(args.letters), args.size)
        with timer.stage("dictionary"):
            index = load_index(args.dictionary, args.min_length, args.max_length,
                               settings.DICTIONARY_TIMEOUT)
    except GridSearchError as e:
        print(f"Error: {e}")
        return 1

    with timer.stage("search"):
        report = search_all(grid, index)

    print(f"Board {grid.size}x{grid.size}: {grid}")
    print(format_report(report, grid))
    if args.timings:
        print(f"\nTimings (ms): {timer.summary()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
