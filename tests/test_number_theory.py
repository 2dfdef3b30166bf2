import pytest

from number_theory import euler_phi, gcd, is_coprime, is_perfect_power, trial_division


@pytest.mark.parametrize("a, b, expected", [
    (0, 5, 5),
    (5, 0, 5),
    (12, 18, 6),
    (18, 12, 6),
    (17, 5, 1),
    (0, 0, 0),
    (-12, 18, 6),
])
def test_gcd(a, b, expected):
    assert gcd(a, b) == expected


def test_is_coprime():
    assert is_coprime(13, 7)
    assert not is_coprime(12, 18)
    assert is_coprime(1, 100)


@pytest.mark.parametrize("n, expected", [
    (1, 1), (2, 1), (7, 6), (12, 4), (30, 8), (97, 96), (0, 0),
])
def test_euler_phi(n, expected):
    assert euler_phi(n) == expected


@pytest.mark.parametrize("n", [4, 8, 9, 16, 27, 32, 125, 243, 343, 1024, 3 ** 20, 10 ** 18, 2 ** 62])
def test_perfect_powers_detected(n):
    assert is_perfect_power(n)


@pytest.mark.parametrize("n", [0, 1, 2, 3, 5, 6, 10, 12, 97, 561, 10 ** 18 + 1, 2 ** 62 + 1])
def test_non_perfect_powers(n):
    assert not is_perfect_power(n)


def test_perfect_power_matches_exhaustive_search():
    powers = {m ** k for m in range(2, 50) for k in range(2, 12) if m ** k <= 2000}
    for n in range(2000):
        assert is_perfect_power(n) == (n in powers), n


def test_trial_division():
    primes = [n for n in range(50) if trial_division(n)]
    assert primes == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]
