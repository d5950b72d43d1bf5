import argparse
import logging
import random

from tour import BASE, MARGIN, ConfigurationError, TourSolver, print_result


def build_parser():
    parser = argparse.ArgumentParser(
        description="Knight's tour over the interior of a bordered grid")
    parser.add_argument("--size", type=int, default=BASE, help="grid side length")
    parser.add_argument("--margin", type=int, default=MARGIN,
                        help="blocked border width on each side")
    parser.add_argument("--start", type=int, nargs=2, metavar=("ROW", "COL"),
                        default=None, help="start cell (random when omitted)")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the random start cell")
    parser.add_argument("--iterative", action="store_true",
                        help="search with an explicit stack instead of recursion")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        solver = TourSolver(args.size, args.margin, start=args.start,
                            rng=random.Random(args.seed))
    except ConfigurationError as e:
        parser.error(str(e))

    found = solver.solve_iterative() if args.iterative else solver.solve()
    if found:
        print_result(solver.grid)
    else:
        print("no result")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
