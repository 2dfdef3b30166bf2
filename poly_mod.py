"""
Polynomials over Z/nZ reduced modulo (x^r - 1).

A Polynomial is a dense vector of exactly r ModElements, coefficient[i] being
the coefficient of x^i. All polynomials combined together must share one
PolyContext (width r and coefficient ring).
"""

from dataclasses import dataclass, field
from typing import Tuple

from int_mod import ModElement, RingContext


@dataclass(frozen=True)
class PolyContext:
    """
    The quotient ring (Z/nZ)[x]/(x^r - 1) for width r and coefficient ring Z/nZ.

    Calling the context builds polynomials from either a sparse
    ``{exponent: coefficient}`` mapping or a dense sequence of r coefficients.
    """
    width: int
    ring: RingContext
    _lazy: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.width <= 0:
            raise ValueError(f"polynomial width must be positive, got {self.width}")
        m = self.ring.modulus
        # every accumulator slot receives at most `width` products below m^2
        object.__setattr__(self, "_lazy", self.width * (m - 1) ** 2 + m <= self.ring.word_max)

    def __call__(self, coefficients):
        if isinstance(coefficients, dict):
            return self.from_mapping(coefficients)
        return self.from_coefficients(coefficients)

    @property
    def lazy_reduction(self):
        """True when products can be summed unreduced without leaving the word range."""
        return self._lazy

    def from_mapping(self, mapping):
        """Sparse construction; unlisted exponents are zero and x^r is identified with 1."""
        values = [0] * self.width
        for exponent, coefficient in mapping.items():
            slot = exponent % self.width
            values[slot] = self.ring.add(values[slot], self._coefficient_value(coefficient))
        return self._from_values(values)

    def from_coefficients(self, coefficients):
        coefficients = list(coefficients)
        if len(coefficients) != self.width:
            raise ValueError(f"expected {self.width} coefficients, got {len(coefficients)}")
        return self._from_values([self._coefficient_value(c) for c in coefficients])

    def monomial(self, exponent, coefficient=1):
        return self.from_mapping({exponent: coefficient})

    @property
    def zero(self):
        return self._from_values([0] * self.width)

    @property
    def one(self):
        return self.from_mapping({0: 1})

    def _coefficient_value(self, coefficient):
        if isinstance(coefficient, ModElement):
            if coefficient.context != self.ring:
                raise TypeError(f"coefficient {coefficient!r} belongs to a different ring")
            return coefficient.value
        return self.ring.reduce(coefficient)

    def _from_values(self, values):
        ring = self.ring
        return Polynomial(self, tuple(ModElement(ring, v) for v in values))


@dataclass(frozen=True, eq=False)
class Polynomial:
    context: PolyContext
    coefficients: Tuple[ModElement, ...]

    def __post_init__(self):
        if len(self.coefficients) != self.context.width:
            raise ValueError(
                f"expected {self.context.width} coefficients, got {len(self.coefficients)}")

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    def __len__(self):
        return self.context.width

    def __getitem__(self, exponent):
        return self.coefficients[exponent]

    def __iter__(self):
        return iter(self.coefficients)

    def values(self):
        """Coefficient representatives as plain integers."""
        return [c.value for c in self.coefficients]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _promote(self, other):
        if isinstance(other, Polynomial):
            if other.context != self.context:
                return None
            return other
        if isinstance(other, (int, ModElement)):
            try:
                return self.context.from_mapping({0: other})
            except TypeError:
                return None
        return None

    def _combine(self, other, op):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return self.context._from_values(
            [op(a.value, b.value) for a, b in zip(self.coefficients, other.coefficients)])

    # ------------------------------------------------------------------
    # Ring operations
    # ------------------------------------------------------------------

    def __add__(self, other):
        return self._combine(other, self.context.ring.add)

    __radd__ = __add__

    def __sub__(self, other):
        return self._combine(other, self.context.ring.subtract)

    def __rsub__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __neg__(self):
        return self.scale(-self.context.ring.one)

    def __pow__(self, exponent):
        if not isinstance(exponent, int):
            return NotImplemented
        return self.power(exponent)

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.context == other.context and self.coefficients == other.coefficients

    def __hash__(self):
        return hash((self.context, self.coefficients))

    def multiply(self, other):
        """Cyclic convolution: p[i] * q[j] lands on x^((i + j) mod r)."""
        if other.context != self.context:
            raise TypeError("cannot multiply polynomials from different quotient rings")
        r = self.context.width
        ring = self.context.ring
        p = self.values()
        q = other.values()
        acc = [0] * r

        if self.context.lazy_reduction:
            for i, a in enumerate(p):
                if not a:
                    continue
                for j, b in enumerate(q):
                    acc[(i + j) % r] += a * b
            return self.context._from_values(acc)

        for i, a in enumerate(p):
            if not a:
                continue
            for j, b in enumerate(q):
                k = (i + j) % r
                acc[k] = ring.add(acc[k], ring.multiply(a, b))
        return self.context._from_values(acc)

    def square(self):
        """
        Square via a rotating accumulator.

        For each coefficient p[i] the whole vector scaled by p[i] is added to the
        accumulator, which is then rotated left by one slot. After r rounds the
        term p[i] * p[j] has been rotated r - i times from slot j, i.e. it sits at
        (i + j) mod r, so the result equals multiply(p, p).
        """
        ring = self.context.ring
        p = self.values()
        acc = [0] * self.context.width
        lazy = self.context.lazy_reduction

        for a in p:
            if a:
                if lazy:
                    acc = [x + a * c for x, c in zip(acc, p)]
                else:
                    acc = [ring.add(x, ring.multiply(a, c)) for x, c in zip(acc, p)]
            acc = acc[1:] + acc[:1]
        return self.context._from_values(acc)

    def power(self, exponent):
        """Binary exponentiation; exponent 0 yields the constant polynomial 1."""
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")
        result = self.context.one
        base = self
        while exponent:
            if exponent & 1:
                result = result.multiply(base)
            exponent >>= 1
            if exponent:
                base = base.square()
        return result

    def scale(self, scalar):
        """Multiply every coefficient by a ring element."""
        ring = self.context.ring
        c = self.context._coefficient_value(scalar)
        return self.context._from_values([ring.multiply(v, c) for v in self.values()])

    def negate(self):
        return -self

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self):
        terms = []
        for exponent, c in enumerate(self.coefficients):
            if not c:
                continue
            if exponent == 0:
                terms.append(str(c))
            else:
                power = "x" if exponent == 1 else f"x^{exponent}"
                terms.append(power if c.value == 1 else f"{c}{power}")
        return " + ".join(terms) if terms else "0"

    def __repr__(self):
        return (f"Polynomial({self}, width={self.context.width}, "
                f"modulus={self.context.ring.modulus})")
