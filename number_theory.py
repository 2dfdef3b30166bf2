"""
Number-theoretic helpers used by the AKS primality test.

All functions are pure and operate on plain Python integers.
"""

import math

from mpmath import mp, nint, root

# Working precision (decimal digits) for the real p-th root in is_perfect_power.
# 50 digits is far beyond what is needed to separate a word-sized perfect power
# from its neighbours.
PERFECT_POWER_DPS = 50


def gcd(a, b):
    """Greatest common divisor by the iterative Euclidean algorithm (non-negative)."""
    a, b = abs(a), abs(b)
    while b != 0:
        a, b = b, a % b
    return a


def is_coprime(a, b):
    return gcd(a, b) == 1


def euler_phi(n):
    """
    Euler's totient by brute force: count i in [1, n] coprime to n.

    O(n), which is fine because it is only ever called on the AKS parameter r,
    never on the candidate itself.
    """
    if n <= 0:
        return 0
    return sum(1 for i in range(1, n + 1) if is_coprime(n, i))


def is_perfect_power(n):
    """
    Return True if n = m**p for integers m >= 2, p >= 2.

    For every exponent p from 2 to ceil(log2 n) the real p-th root of n is
    taken with mpmath, rounded to the nearest integer and raised back to the
    p-th power. The rounding step makes the answer exact over the word range
    instead of relying on a floating-point root landing on an integer.
    """
    if n < 4:
        return False

    max_exponent = math.ceil(math.log2(n))
    with mp.workdps(PERFECT_POWER_DPS):
        for p in range(2, max_exponent + 1):
            candidate = int(nint(root(n, p)))
            if candidate ** p == n:
                return True
    return False


def trial_division(n):
    """6k +/- 1 trial division, used as the reference oracle."""
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    for i in range(5, math.isqrt(n) + 1, 6):
        if n % i == 0 or n % (i + 2) == 0:
            return False
    return True
