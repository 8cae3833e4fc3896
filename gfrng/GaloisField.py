"""
Galois Field GF(p^n) Arithmetic

GF(p^n) is realized as Fp[x]/(I), where I is an irreducible polynomial of
degree n over Fp. Each element is a polynomial of degree < n.

In GF(p^n):
- Addition is coefficientwise addition mod p (XOR when p = 2)
- Multiplication is polynomial multiplication followed by reduction mod I
- Every nonzero a satisfies a^(p^n - 1) = 1, so a^(-1) = a^(p^n - 2)

Three binary fields are predefined:
    GF(2^8):  x^8 + x^4 + x^3 + x^2 + 1
    GF(2^16): x^16 + x^9 + x^8 + x^7 + x^6 + x^4 + x^3 + x^2 + 1
    GF(2^32): x^32 + x^22 + x^2 + x + 1

For binary fields the canonical integer encoding maps bit i of an unsigned
integer to the coefficient of x^i.

Irreducibility of a user-supplied modulus is the caller's responsibility.
"""

import numpy as np
from typing import Iterable, List, Optional, Union

from . import MAX_CHARACTERISTIC
from .Polynomial import (
    COEFF_DTYPE, Polynomial, as_coeff_array, poly_eq, poly_sum, poly_mul, poly_mod, poly_powmod,
)
from .Scalar import fastpow


class FieldMismatchError(ValueError):
    """Element used with a field other than its own."""


class GaloisField:
    """
    Finite field GF(p^n) = Fp[x]/(I).

    Two fields are equal when they have the same characteristic and a
    structurally identical modulus polynomial. This is a syntactic test;
    isomorphic fields built from different moduli compare unequal.

    The field definition is immutable, so a single instance may be read
    from several threads at once.

    Attributes:
        p: Characteristic (assumed prime)
        modulus: Irreducible polynomial I (read-only)
        degree: Extension degree n = deg(I)
        order: Number of elements p^n

    Example:
        >>> gf = GaloisField(2, [1, 0, 1, 1, 1, 0, 0, 0, 1])
        >>> a, b = gf.from_int(0x03), gf.from_int(0x07)
        >>> gf.to_int(gf.multiply(a, b))
        9
    """

    def __init__(self, p: int, modulus: Union[Polynomial, Iterable[int]],
                 name: Optional[str] = None):
        """
        Initialize field.

        Args:
            p: Characteristic, 2 <= p < MAX_CHARACTERISTIC
            modulus: Irreducible polynomial of degree >= 2, either a
                     Polynomial or coefficients low degree first.
                     The coefficients are copied.
            name: Display name (default "GF(p^n)")

        Raises:
            ValueError: If p or the modulus is invalid
        """
        if isinstance(p, bool) or not isinstance(p, (int, np.integer)):
            raise ValueError(f"Characteristic must be an integer, got {p!r}")
        if not 2 <= p < MAX_CHARACTERISTIC:
            raise ValueError(f"Characteristic must be 2-{MAX_CHARACTERISTIC - 1}, got {p}")
        if modulus is None:
            raise ValueError("Field needs a modulus polynomial")

        coeffs = modulus.coeffs if isinstance(modulus, Polynomial) else modulus
        poly = Polynomial(as_coeff_array(coeffs, p))
        if poly.degree < 2:
            raise ValueError(f"Modulus must have degree >= 2, got {poly.degree}")

        self._p = int(p)
        self._modulus = poly.resized(poly.degree + 1)
        self._modulus.coeffs.flags.writeable = False
        self._order = fastpow(self._p, self._modulus.degree)
        self.name = name or f"GF({self._p}^{self._modulus.degree})"

    @property
    def p(self) -> int:
        return self._p

    @property
    def modulus(self) -> Polynomial:
        return self._modulus

    @property
    def degree(self) -> int:
        return self._modulus.degree

    @property
    def order(self) -> int:
        return self._order

    @property
    def is_binary(self) -> bool:
        return self._p == 2

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GaloisField):
            return NotImplemented
        return self._p == other._p and poly_eq(self._modulus, other._modulus)

    def __hash__(self) -> int:
        return hash((self._p, self._modulus))

    def __repr__(self) -> str:
        return f"GaloisField(p={self._p}, modulus={self._modulus})"

    def __str__(self) -> str:
        return self.name

    # =========================================================================
    # Element construction
    # =========================================================================

    def element(self, coeffs: Union[Iterable[int], np.ndarray]) -> 'FieldElement':
        """
        Build an element from a coefficient array of any length.

        Coefficients are reduced mod p, the degree is normalized, and a
        polynomial of degree >= n is reduced modulo I.

        Args:
            coeffs: Coefficients, low degree first

        Returns:
            Field element

        Raises:
            ValueError: If coeffs is None, empty or non-integral
        """
        arr = as_coeff_array(coeffs, self._p)
        if arr.size == 0:
            raise ValueError("Element needs at least one coefficient")

        poly = Polynomial(arr)
        if poly.degree >= self.degree:
            poly = poly_mod(poly, self._modulus, self._p)
        return self._wrap(poly)

    def neutral(self) -> 'FieldElement':
        """Additive identity (zero)."""
        return FieldElement(self, Polynomial.zero(self.degree))

    def unity(self) -> 'FieldElement':
        """Multiplicative identity (one)."""
        return FieldElement(self, Polynomial.one(self.degree))

    def from_int(self, x: int) -> 'FieldElement':
        """
        Element from its canonical integer encoding.

        Bit i of x becomes the coefficient of x^i. No reduction is
        applied, so x must fit in n bits.

        Raises:
            ValueError: If the field is not binary or x is out of range
        """
        self._require_binary()
        if not 0 <= x < (1 << self.degree):
            raise ValueError(f"Value must be 0-{(1 << self.degree) - 1}, got {x}")

        bits = np.array([(x >> i) & 1 for i in range(self.degree)], dtype=COEFF_DTYPE)
        return FieldElement(self, Polynomial._wrap(bits, self.degree - 1))

    def to_int(self, a: 'FieldElement') -> int:
        """Canonical integer encoding of a binary-field element."""
        self._require_binary()
        self._check(a)
        result = 0
        for i in range(a.poly.degree, -1, -1):
            result = (result << 1) | int(a.poly.coeffs[i])
        return result

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def add(self, a: 'FieldElement', b: 'FieldElement') -> 'FieldElement':
        """Sum a + b."""
        self._check(a, b)
        return self._wrap(poly_sum(a.poly, b.poly, self._p))

    def subtract(self, a: 'FieldElement', b: 'FieldElement') -> 'FieldElement':
        """Difference a - b = a + complement(b)."""
        return self.add(a, self.complement(b))

    def multiply(self, a: 'FieldElement', b: 'FieldElement') -> 'FieldElement':
        """Product a * b mod I."""
        self._check(a, b)
        product = poly_mul(a.poly, b.poly, self._p)
        return self._wrap(poly_mod(product, self._modulus, self._p))

    def divide(self, a: 'FieldElement', b: 'FieldElement') -> 'FieldElement':
        """
        Quotient a / b = a * inverse(b).

        Raises:
            ZeroDivisionError: If b is zero
        """
        self._check(a, b)
        if b.is_zero():
            raise ZeroDivisionError(f"Division by zero in {self.name}")
        return self.multiply(a, self.inverse(b))

    def complement(self, a: 'FieldElement') -> 'FieldElement':
        """
        Additive inverse -a.

        Complements every stored coefficient and keeps the recorded degree
        of a. Complement maps 0 to 0 and nonzero to nonzero, so the
        result is already normalized.
        """
        self._check(a)
        poly = a.poly.copy()
        poly.coeffs[:] = (self._p - poly.coeffs) % self._p
        return FieldElement(self, poly)

    def inverse(self, a: 'FieldElement') -> 'FieldElement':
        """
        Multiplicative inverse a^(-1) = a^(p^n - 2) mod I.

        Raises:
            ZeroDivisionError: If a is zero
        """
        self._check(a)
        if a.is_zero():
            raise ZeroDivisionError("Zero has no inverse")
        return self._wrap(poly_powmod(a.poly, self._order - 2, self._modulus, self._p))

    def power(self, a: 'FieldElement', exp: int) -> 'FieldElement':
        """
        Raise element to an integer power.

        Negative exponents invert first; a^0 is one.
        """
        self._check(a)
        if exp < 0:
            a = self.inverse(a)
            exp = -exp
        return self._wrap(poly_powmod(a.poly, exp, self._modulus, self._p))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _wrap(self, poly: Polynomial) -> 'FieldElement':
        """Store a reduced polynomial in an n-coefficient buffer."""
        return FieldElement(self, poly.resized(self.degree))

    def _check(self, *elements: 'FieldElement') -> None:
        """All operands must belong to this field."""
        for e in elements:
            if not isinstance(e, FieldElement):
                raise TypeError(f"Expected FieldElement, got {type(e).__name__}")
            if e.field is not self and e.field != self:
                raise FieldMismatchError(f"Element of {e.field} used in {self}")

    def _require_binary(self) -> None:
        if not self.is_binary:
            raise ValueError(f"Integer encoding needs a binary field, {self.name} has p={self._p}")


class FieldElement:
    """
    Element of GF(p^n).

    Holds its field and a polynomial representative of degree < n stored
    in a buffer of exactly n coefficients. Elements are immutable; every
    operation returns a new element. The field reference keeps the field
    alive for as long as any of its elements exist.

    Example:
        >>> a = GF2_8.from_int(0x53)
        >>> b = a.inverse()
        >>> int(a * b)
        1
    """

    __slots__ = ('field', 'poly')

    def __init__(self, field: GaloisField, poly: Polynomial):
        poly.coeffs.flags.writeable = False
        self.field = field
        self.poly = poly

    @property
    def degree(self) -> int:
        return self.poly.degree

    def is_zero(self) -> bool:
        return self.poly.is_zero()

    def is_one(self) -> bool:
        return self.poly.degree == 0 and self.poly.coeffs[0] == 1

    def coefficients(self) -> List[int]:
        """All n stored coefficients, low degree first."""
        return [int(c) for c in self.poly.coeffs]

    def copy(self) -> 'FieldElement':
        return FieldElement(self.field, self.poly.copy())

    def inverse(self) -> 'FieldElement':
        return self.field.inverse(self)

    def __add__(self, other: 'FieldElement') -> 'FieldElement':
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.field.add(self, other)

    def __sub__(self, other: 'FieldElement') -> 'FieldElement':
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.field.subtract(self, other)

    def __mul__(self, other: 'FieldElement') -> 'FieldElement':
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.field.multiply(self, other)

    def __truediv__(self, other: 'FieldElement') -> 'FieldElement':
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.field.divide(self, other)

    def __neg__(self) -> 'FieldElement':
        return self.field.complement(self)

    def __pow__(self, exp: int) -> 'FieldElement':
        return self.field.power(self, exp)

    def __int__(self) -> int:
        return self.field.to_int(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.field == other.field and poly_eq(self.poly, other.poly)

    def __hash__(self) -> int:
        return hash((self.field, self.poly))

    def __repr__(self) -> str:
        if self.field.is_binary:
            width = (self.field.degree + 3) // 4
            return f"{self.field.name}(0x{int(self):0{width}X})"
        return f"{self.field.name}({self.poly.to_list()})"


def _from_exponents(*exponents: int) -> List[int]:
    """Binary polynomial coefficients from the exponents of its terms."""
    coeffs = [0] * (max(exponents) + 1)
    for e in exponents:
        coeffs[e] = 1
    return coeffs


# Predefined binary fields
GF2_8 = GaloisField(2, _from_exponents(8, 4, 3, 2, 0), name='GF(2^8)')
GF2_16 = GaloisField(2, _from_exponents(16, 9, 8, 7, 6, 4, 3, 2, 0), name='GF(2^16)')
GF2_32 = GaloisField(2, _from_exponents(32, 22, 2, 1, 0), name='GF(2^32)')

FIELDS = {
    'GF2_8': GF2_8,
    'GF2_16': GF2_16,
    'GF2_32': GF2_32,
}


def get_field(name: str) -> GaloisField:
    """Look up a predefined field by name ('GF2_8', 'GF2_16', 'GF2_32')."""
    if name not in FIELDS:
        raise ValueError(f"Unknown field: {name}")
    return FIELDS[name]


def from_uint8(x: int) -> FieldElement:
    """GF(2^8) element from an 8-bit unsigned integer."""
    return GF2_8.from_int(x)


def from_uint16(x: int) -> FieldElement:
    """GF(2^16) element from a 16-bit unsigned integer."""
    return GF2_16.from_int(x)


def from_uint32(x: int) -> FieldElement:
    """GF(2^32) element from a 32-bit unsigned integer."""
    return GF2_32.from_int(x)


def to_uint8(a: FieldElement) -> int:
    """8-bit encoding of a GF(2^8) element."""
    return GF2_8.to_int(a)


def to_uint16(a: FieldElement) -> int:
    """16-bit encoding of a GF(2^16) element."""
    return GF2_16.to_int(a)


def to_uint32(a: FieldElement) -> int:
    """32-bit encoding of a GF(2^32) element."""
    return GF2_32.to_int(a)
