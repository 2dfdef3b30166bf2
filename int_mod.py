"""
Integers modulo m with word-bounded arithmetic.

A RingContext owns the modulus and performs all arithmetic on representatives
in [0, m). ModElement is the immutable value type carrying its context, so two
residues can only be combined when they were built under the same modulus.

Products are computed without ever forming an intermediate value above the
context's word bound: operands below T = isqrt(word_max) are multiplied
directly, anything larger is split and recombined with modular addition.
"""

import math
import sys
from dataclasses import dataclass, field

# Largest value a native machine word holds.
WORD_MAX = sys.maxsize


@dataclass(frozen=True)
class RingContext:
    """
    The ring Z/mZ for a fixed modulus m.

    Calling the context builds elements: ``ctx = RingContext(7); ctx(10) -> 3``.
    ``word_max`` bounds every intermediate value; it defaults to the native word
    and can be lowered to exercise the overflow-safe multiplication.
    """
    modulus: int
    word_max: int = WORD_MAX
    _threshold: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.modulus <= 0:
            raise ValueError(f"modulus must be positive, got {self.modulus}")
        if self.modulus > self.word_max:
            raise ValueError(f"modulus {self.modulus} exceeds the word bound {self.word_max}")
        object.__setattr__(self, "_threshold", math.isqrt(self.word_max))

    def __call__(self, value):
        return ModElement(self, value)

    @property
    def zero(self):
        return ModElement(self, 0)

    @property
    def one(self):
        return ModElement(self, 1)

    @property
    def threshold(self):
        """Operands below this bound can be multiplied without overflow."""
        return self._threshold

    # ------------------------------------------------------------------
    # Arithmetic on representatives
    # ------------------------------------------------------------------

    def reduce(self, value):
        return value % self.modulus

    def add(self, a, b):
        # a + b may exceed word_max when m is close to it
        if a >= self.modulus - b:
            return a - (self.modulus - b)
        return a + b

    def negate(self, a):
        return 0 if a == 0 else self.modulus - a

    def subtract(self, a, b):
        return self.add(a, self.negate(b))

    def multiply(self, a, b):
        """
        Overflow-safe product of two representatives.

        When either operand reaches the threshold, the larger one is halved and
        the partial product doubled back with modular addition, recursing until
        both operands are below the threshold.
        """
        if a < self._threshold and b < self._threshold:
            return (a * b) % self.modulus
        if a < b:
            a, b = b, a
        half = self.multiply(a >> 1, b)
        result = self.add(half, half)
        if a & 1:
            result = self.add(result, b)
        return result

    def power(self, a, exponent):
        """Square-and-multiply; exponent 0 yields the multiplicative identity."""
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")
        result = self.reduce(1)
        base = a
        while exponent:
            if exponent & 1:
                result = self.multiply(result, base)
            base = self.multiply(base, base)
            exponent >>= 1
        return result

    def order(self, a):
        """
        Multiplicative order of a by repeated multiplication.

        Returns 0 for the additive identity. For non-units the loop gives up
        once the exponent passes the modulus and returns modulus + 1; that value
        is a cap, not an order.
        """
        a = self.reduce(a)
        if a == 0:
            return 0
        one = self.reduce(1)
        e = 1
        current = a
        while current != one and e <= self.modulus:
            current = self.multiply(current, a)
            e += 1
        return e


@dataclass(frozen=True, eq=False)
class ModElement:
    """A residue class modulo ``context.modulus``, stored as its least non-negative representative."""
    context: RingContext
    value: int

    def __post_init__(self):
        value = self.value
        if isinstance(value, ModElement) and value.context != self.context:
            raise TypeError(f"cannot move {value!r} into the ring modulo {self.context.modulus}")
        object.__setattr__(self, "value", self.context.reduce(int(value)))

    def _coerce(self, other):
        if isinstance(other, ModElement):
            return other.value if other.context == self.context else None
        if isinstance(other, int):
            return self.context.reduce(other)
        return None

    def _wrap(self, value):
        return ModElement(self.context, value)

    def __add__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._wrap(self.context.add(self.value, value))

    __radd__ = __add__

    def __sub__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._wrap(self.context.subtract(self.value, value))

    def __rsub__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._wrap(self.context.subtract(value, self.value))

    def __mul__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._wrap(self.context.multiply(self.value, value))

    __rmul__ = __mul__

    def __neg__(self):
        return self._wrap(self.context.negate(self.value))

    def __pow__(self, exponent):
        if not isinstance(exponent, int):
            return NotImplemented
        return self.power(exponent)

    def __eq__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        # equal iff the difference is the zero residue
        return self.context.subtract(self.value, value) == 0

    # Hashes like the representative int, so ring(3) and 3 share a dict slot.
    # Other ints in the class (10, -4) compare equal but hash differently.
    def __hash__(self):
        return hash(self.value)

    def __bool__(self):
        return self.value != 0

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"{self.value} (mod {self.context.modulus})"

    def __str__(self):
        return str(self.value)

    def negate(self):
        return -self

    def square(self):
        return self * self

    def power(self, exponent):
        return self._wrap(self.context.power(self.value, exponent))

    def order(self):
        return self.context.order(self.value)
