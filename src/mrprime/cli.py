import argparse
import re
import sys
from contextlib import contextmanager

from loguru import logger

from .primality import Verdict, errors, primality_test
from .primality.presets import presets

# Plain ASCII decimal. int() alone would also take "1_000", padding and
# non-ASCII digits.
DECIMAL = re.compile(r"[+-]?[0-9]+")


def decimal_int(text: str) -> int:
    if DECIMAL.fullmatch(text) is None:
        raise argparse.ArgumentTypeError(f"{text!r} is not an integer")
    return int(text, 10)


def positive_int(text: str) -> int:
    value = decimal_int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"{errors.int_label(value)} is not a positive integer")
    return value


def jobs_int(text: str) -> int:
    # joblib semantics: positive counts, -1 for every CPU, and 0 means nothing.
    value = decimal_int(text)
    if value == 0:
        raise argparse.ArgumentTypeError("0 workers")
    return value


@contextmanager
def unlimited_int_digits():
    # Candidates may run past the interpreter's 4300 digit str/int cap.
    if not hasattr(sys, "set_int_max_str_digits"):
        yield
        return
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(previous)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mrprime",
        description="Miller-Rabin probable prime test. "
                    "Exit status 0 = probably prime, 1 = composite, 2 = invalid input.",
    )
    ap.add_argument("n", type=decimal_int, help="the integer to test")
    ap.add_argument("k", nargs="?", type=positive_int, default=None,
                    help="number of rounds (default: the preset's, 3 for 'quick')")
    ap.add_argument("--preset", choices=sorted(presets), default="quick",
                    help="rounds and workers to use when k is not given")
    ap.add_argument("-j", "--jobs", type=jobs_int, default=None, help="override the preset's joblib workers")
    ap.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level to stderr")
    return ap


def setup_logging(verbose: bool):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def run(argv=None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        # argparse exits with 2 on bad arguments and 0 for --help.
        return e.code if isinstance(e.code, int) else int(Verdict.INVALID_INPUT)

    setup_logging(args.verbose)

    preset = presets[args.preset]
    k = args.k if args.k is not None else preset["rounds"]
    n_jobs = args.jobs if args.jobs is not None else preset["n_jobs"]
    label = errors.int_label(args.n)

    try:
        verdict = primality_test(args.n, k, n_jobs=n_jobs)
    except Exception:
        logger.exception(f"Testing {label} failed.")
        return int(Verdict.INVALID_INPUT)

    logger.debug(f"{label}: {verdict.name}")
    return int(verdict)


def main(argv=None) -> int:
    with unlimited_int_digits():
        return run(argv)


if __name__ == "__main__":
    sys.exit(main())
