import random

import pytest

from int_mod import WORD_MAX, ModElement, RingContext


@pytest.mark.parametrize("modulus", [0, -1, -7])
def test_non_positive_modulus_rejected(modulus):
    with pytest.raises(ValueError):
        RingContext(modulus)


def test_modulus_above_word_bound_rejected():
    with pytest.raises(ValueError):
        RingContext(11, word_max=10)
    with pytest.raises(ValueError):
        RingContext(WORD_MAX + 1)


def test_construction_reduces():
    ring = RingContext(7)
    assert ring(10).value == 3
    assert ring(-1).value == 6
    assert ring(7).value == 0
    assert ring(ring(12)).value == 5
    assert ModElement(ring, 15).value == 1


def test_contexts_are_values():
    assert RingContext(7) == RingContext(7)
    assert RingContext(7)(3) == RingContext(7)(3)
    assert hash(RingContext(7)(3)) == hash(RingContext(7)(10))


@pytest.mark.parametrize("modulus", [1, 2, 7, 13, 97])
def test_arithmetic_matches_integers(modulus):
    ring = RingContext(modulus)
    for a in range(modulus):
        for b in range(modulus):
            x, y = ring(a), ring(b)
            assert (x + y).value == (a + b) % modulus
            assert (x - y).value == (a - b) % modulus
            assert (x * y).value == (a * b) % modulus


def test_overflow_safe_multiply_with_small_word():
    # threshold isqrt(100) = 10, so most products go through the decomposition
    ring = RingContext(97, word_max=100)
    assert ring.threshold == 10
    for a in range(97):
        for b in range(97):
            assert ring.multiply(a, b) == (a * b) % 97
            assert ring.add(a, b) == (a + b) % 97


@pytest.mark.parametrize("modulus", [WORD_MAX, 2 ** 61 - 1, 10 ** 18 + 9, 3 * 10 ** 9 + 19])
def test_word_sized_moduli(modulus):
    ring = RingContext(modulus)
    rng = random.Random(modulus)
    samples = [0, 1, modulus - 1, modulus - 2, ring.threshold, ring.threshold - 1]
    samples += [rng.randrange(modulus) for _ in range(40)]
    for a in samples:
        for b in samples[:12]:
            assert (ring(a) * ring(b)).value == (a * b) % modulus
            assert (ring(a) + ring(b)).value == (a + b) % modulus
            assert (ring(a) - ring(b)).value == (a - b) % modulus


def test_multiplication_commutative_and_associative():
    rng = random.Random(2024)
    for modulus in [5, 97, 10 ** 9 + 7, WORD_MAX]:
        ring = RingContext(modulus)
        for _ in range(50):
            a, b, c = (ring(rng.randrange(modulus)) for _ in range(3))
            assert a * b == b * a
            assert (a * b) * c == a * (b * c)


@pytest.mark.parametrize("exponent", [0, 1, 2, 5, 13])
def test_power_matches_repeated_multiplication(exponent):
    for modulus, base in [(7, 3), (97, 55), (2 ** 61 - 1, 123456789123), (1, 0)]:
        ring = RingContext(modulus)
        x = ring(base)
        expected = ring.one
        for _ in range(exponent):
            expected = expected * x
        assert x.power(exponent) == expected
        assert x ** exponent == expected


def test_power_zero_is_identity():
    ring = RingContext(11)
    assert ring(0) ** 0 == ring.one
    assert ring(5) ** 0 == 1


def test_negative_exponent_rejected():
    with pytest.raises(ValueError):
        RingContext(7)(3).power(-1)


def test_negate():
    ring = RingContext(7)
    assert (-ring(3)).value == 4
    assert (-ring(0)).value == 0
    assert ring(3).negate() + ring(3) == ring.zero


def test_equality():
    ring = RingContext(7)
    assert ring(3) == ring(10)
    assert ring(3) != ring(4)
    assert ring(3) == 3
    assert ring(3) == -4
    assert ring(3) != RingContext(11)(3)


def test_mixed_contexts_refused():
    with pytest.raises(TypeError):
        RingContext(7)(3) + RingContext(11)(3)
    with pytest.raises(TypeError):
        RingContext(7)(3) * RingContext(11)(3)
    with pytest.raises(TypeError):
        RingContext(7)(RingContext(11)(10))
    with pytest.raises(TypeError):
        ModElement(RingContext(7), RingContext(7, word_max=100)(3))


def test_same_context_element_accepted():
    ring = RingContext(7)
    assert ring(RingContext(7)(10)) == ring(3)


def test_hash_agrees_with_int_equality():
    ring = RingContext(7)
    assert ring(3) == 3
    assert hash(ring(3)) == hash(3)
    assert len({ring(3), 3}) == 1
    assert {3: "three"}[ring(10)] == "three"


def test_int_operands_coerced():
    ring = RingContext(7)
    assert (ring(5) + 4).value == 2
    assert (4 + ring(5)).value == 2
    assert (10 - ring(5)).value == 5
    assert (3 * ring(5)).value == 1


@pytest.mark.parametrize("modulus, value, expected", [
    (7, 3, 6),
    (7, 2, 3),
    (7, 6, 2),
    (7, 1, 1),
    (7, 0, 0),
    (13, 2, 12),
    (10, 3, 4),
])
def test_order(modulus, value, expected):
    assert RingContext(modulus)(value).order() == expected


def test_order_of_non_unit_is_capped():
    # 2 is not a unit mod 8; the search stops once the exponent passes the modulus
    assert RingContext(8)(2).order() == 9
    assert RingContext(6)(3).order() == 7


def test_display():
    ring = RingContext(7)
    assert repr(ring(3)) == "3 (mod 7)"
    assert str(ring(10)) == "3"
    assert int(ring(10)) == 3
    assert not ring(7)
    assert ring(1)
