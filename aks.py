"""
Command-line front end for the AKS primality test.

    python aks.py 97               # is 97 prime?
    python aks.py 10 30            # primes in [10, 30]
    python aks.py 97 --verbose     # print every stage as it completes
"""

import argparse
import sys

from primality_test import AKSPrimalityTest, find_primes


def print_event(event):
    print(f"[DEBUG] {event.stage}: {event.message}")


def report_number(n, verbose=False):
    tester = AKSPrimalityTest(on_event=print_event if verbose else None)
    if tester.is_prime(n):
        print(f"[INFO] {n} is prime.")
    else:
        print(f"[INFO] {n} is composite.")


def report_primes(lower, upper, verbose=False, processes=None):
    print(f"Looking for primes between {lower} and {upper}:")
    if verbose:
        primes = find_primes(lower, upper, on_event=print_event)
    else:
        primes = find_primes(lower, upper, processes=processes)
        print(" ".join(str(p) for p in primes))
    print(f"Done. Found {len(primes)} primes between {lower} and {upper}.")
    return primes


def build_parser():
    parser = argparse.ArgumentParser(
        description="Deterministic primality testing with the AKS algorithm"
    )
    parser.add_argument("a", type=int,
                        help="The number to test, or the lower bound of a range to search for primes")
    parser.add_argument("b", type=int, nargs="?", default=None,
                        help="The upper bound of the range to search for primes")
    parser.add_argument("--verbose", action="store_true",
                        help="Print the AKS computation stage by stage")
    parser.add_argument("--processes", type=int, default=None,
                        help="Worker processes for range searches (0 = one per CPU)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.b is not None:
        if not (0 < args.a < args.b):
            print(f"[ERROR] Invalid bounds ({args.a},{args.b}). "
                  "Please make sure you entered positive numbers in increasing order.")
            return 1
        if args.verbose and args.processes is not None and (args.processes == 0 or args.processes > 1):
            print("[ERROR] --verbose cannot be combined with --processes. "
                  "Verbose range searches run in a single process.")
            return 1
        report_primes(args.a, args.b, verbose=args.verbose, processes=args.processes)
    else:
        if args.a <= 0:
            print(f"[ERROR] Invalid number {args.a}. Please enter a positive number.")
            return 1
        report_number(args.a, verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
