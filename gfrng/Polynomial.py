"""
Dense Polynomials over Fp

A polynomial a(x) = a_0 + a_1*x + ... + a_d*x^d is stored as a numpy
coefficient vector indexed by exponent (low degree first). The vector may
be longer than d + 1; that spare room is the polynomial's capacity, which
field elements use to keep a uniform buffer size.

Degree convention:
- degree is the index of the highest nonzero coefficient
- the zero polynomial has degree 0 and coefficient 0

Every operation takes the characteristic p explicitly, so one
representation serves both plain Fp[x] work and the scratch arithmetic
inside GF(p^n). Operations never modify their operands; results are fresh
polynomials, normalized before they are returned.
"""

import numbers
import numpy as np
from typing import Iterable, List, Optional, Union

from .Scalar import inverse


COEFF_DTYPE = np.int64


def as_coeff_array(coeffs: Union[Iterable[int], np.ndarray],
                   p: Optional[int] = None) -> np.ndarray:
    """
    Coefficient sequence as a flat int64 vector.

    With p given, values are reduced mod p while still Python integers,
    so coefficients of any size are accepted.

    Raises:
        ValueError: If coeffs is None or holds non-integral values
    """
    if coeffs is None:
        raise ValueError("Coefficients must not be None")

    if isinstance(coeffs, np.ndarray) and coeffs.dtype.kind == 'O':
        coeffs = coeffs.reshape(-1).tolist()

    if isinstance(coeffs, np.ndarray):
        if coeffs.dtype.kind not in 'biu':
            raise ValueError(f"Coefficients must be integers, got dtype {coeffs.dtype}")
        if p is not None:
            coeffs = np.mod(coeffs, p)
        return coeffs.astype(COEFF_DTYPE).reshape(-1)

    values = list(coeffs)
    for c in values:
        if not isinstance(c, numbers.Integral):
            raise ValueError(f"Coefficients must be integers, got {c!r}")
    if p is not None:
        values = [int(c) % p for c in values]

    try:
        return np.array([int(c) for c in values], dtype=COEFF_DTYPE).reshape(-1)
    except OverflowError:
        raise ValueError("Coefficient does not fit in 64 bits") from None


class Polynomial:
    """
    Polynomial over Fp with explicit degree and capacity.

    Attributes:
        coeffs: Coefficient vector, coeffs[i] is the coefficient of x^i
        degree: Highest index with a nonzero coefficient (0 for zero)

    Example:
        >>> a = Polynomial([1, 1])          # 1 + x
        >>> b = Polynomial([1, 0, 1])       # 1 + x^2
        >>> poly_mul(a, b, 2).to_list()
        [1, 1, 1, 1]
    """

    __slots__ = ('coeffs', 'degree')

    def __init__(self, coeffs: Union[Iterable[int], np.ndarray]):
        """
        Create polynomial from coefficients.

        Args:
            coeffs: Coefficients [a_0, a_1, ..., a_d], non-negative

        Raises:
            ValueError: If coeffs is None, empty, non-integral or has
                negative entries
        """
        arr = as_coeff_array(coeffs)
        if arr.size == 0:
            raise ValueError("Polynomial needs at least one coefficient")
        if np.any(arr < 0):
            raise ValueError("Coefficients must be non-negative")

        self.coeffs = arr
        self.degree = arr.size - 1
        self.normalize()

    @classmethod
    def _wrap(cls, coeffs: np.ndarray, degree: int) -> 'Polynomial':
        """Adopt a coefficient vector without copying, then normalize."""
        poly = cls.__new__(cls)
        poly.coeffs = coeffs
        poly.degree = degree
        poly.normalize()
        return poly

    @classmethod
    def zero(cls, capacity: int = 1) -> 'Polynomial':
        """Zero polynomial with room for `capacity` coefficients."""
        if capacity < 1:
            raise ValueError(f"Capacity must be at least 1, got {capacity}")
        return cls._wrap(np.zeros(capacity, dtype=COEFF_DTYPE), 0)

    @classmethod
    def one(cls, capacity: int = 1) -> 'Polynomial':
        """Constant polynomial 1 with room for `capacity` coefficients."""
        poly = cls.zero(capacity)
        poly.coeffs[0] = 1
        return poly

    @property
    def capacity(self) -> int:
        """Number of stored coefficients."""
        return int(self.coeffs.size)

    @property
    def lead(self) -> int:
        """Leading coefficient."""
        return int(self.coeffs[self.degree])

    def is_zero(self) -> bool:
        """Check for the zero polynomial."""
        return self.degree == 0 and self.coeffs[0] == 0

    def normalize(self) -> None:
        """Lower degree past zero coefficients at the top."""
        nonzero = np.flatnonzero(self.coeffs[:self.degree + 1])
        self.degree = int(nonzero[-1]) if nonzero.size else 0

    def copy(self) -> 'Polynomial':
        """Independent copy with the same capacity."""
        return Polynomial._wrap(self.coeffs.copy(), self.degree)

    def resized(self, capacity: int) -> 'Polynomial':
        """
        Copy into a buffer of exactly `capacity` coefficients.

        Raises:
            ValueError: If the polynomial does not fit
        """
        if capacity <= self.degree:
            raise ValueError(f"Degree {self.degree} does not fit capacity {capacity}")
        out = np.zeros(capacity, dtype=COEFF_DTYPE)
        out[:self.degree + 1] = self.coeffs[:self.degree + 1]
        return Polynomial._wrap(out, self.degree)

    def to_list(self) -> List[int]:
        """Significant coefficients, low degree first."""
        return [int(c) for c in self.coeffs[:self.degree + 1]]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return poly_eq(self, other)

    def __hash__(self) -> int:
        return hash(tuple(self.to_list()))

    def __repr__(self) -> str:
        return f"Polynomial({self.to_list()})"

    def __str__(self) -> str:
        terms = []
        for i in range(self.degree, -1, -1):
            c = int(self.coeffs[i])
            if c == 0:
                continue
            if i == 0:
                terms.append(str(c))
                continue
            prefix = "" if c == 1 else str(c)
            terms.append(f"{prefix}x" if i == 1 else f"{prefix}x^{i}")
        return " + ".join(terms) if terms else "0"


def poly_eq(a: Polynomial, b: Polynomial) -> bool:
    """True if degrees and all significant coefficients match."""
    if a.degree != b.degree:
        return False
    return bool(np.array_equal(a.coeffs[:a.degree + 1], b.coeffs[:b.degree + 1]))


def poly_sum(a: Polynomial, b: Polynomial, p: int) -> Polynomial:
    """
    Sum of two polynomials over Fp.

    Args:
        a: First operand
        b: Second operand
        p: Characteristic

    Returns:
        a + b, with capacity max(a.capacity, b.capacity)
    """
    top = max(a.degree, b.degree)
    out = np.zeros(max(a.capacity, b.capacity), dtype=COEFF_DTYPE)
    out[:a.degree + 1] += a.coeffs[:a.degree + 1]
    out[:b.degree + 1] += b.coeffs[:b.degree + 1]
    out[:top + 1] %= p
    return Polynomial._wrap(out, top)


def poly_mul(a: Polynomial, b: Polynomial, p: int) -> Polynomial:
    """
    Product of two polynomials over Fp.

    Full convolution: result[i + j] += a[i] * b[j] (mod p).

    Args:
        a: First operand
        b: Second operand
        p: Characteristic

    Returns:
        a * b, with capacity deg(a) + deg(b) + 1
    """
    out = np.convolve(a.coeffs[:a.degree + 1], b.coeffs[:b.degree + 1]) % p
    return Polynomial._wrap(out.astype(COEFF_DTYPE, copy=False), a.degree + b.degree)


def poly_mod(a: Polynomial, b: Polynomial, p: int) -> Polynomial:
    """
    Euclidean remainder a mod b over Fp (schoolbook long division).

    If deg(a) < deg(b) the result equals a. Otherwise the top
    deg(a) - deg(b) + 1 terms of a are eliminated by subtracting
    scaled, shifted copies of b, leaving a remainder of degree < deg(b).

    Args:
        a: Dividend
        b: Divisor (nonzero)
        p: Prime characteristic

    Returns:
        Remainder, with the capacity of a

    Raises:
        ZeroDivisionError: If b is the zero polynomial
    """
    u = a.coeffs.copy()
    n, m = a.degree, b.degree

    if n < m:
        return Polynomial._wrap(u, n)

    v = b.coeffs[:m + 1]
    inv_lead = inverse(int(v[m]), p)

    for k in range(n - m, -1, -1):
        q = (int(u[k + m]) * inv_lead) % p
        if q:
            u[k:k + m + 1] = (u[k:k + m + 1] - q * v) % p

    return Polynomial._wrap(u, max(m - 1, 0))


def poly_powmod(a: Polynomial, exp: int, modulus: Polynomial, p: int) -> Polynomial:
    """
    Compute a^exp mod modulus by square-and-multiply.

    Every product is reduced immediately, so no intermediate value
    exceeds degree 2 * (deg(modulus) - 1) and the working buffers never
    need more than 2 * deg(modulus) coefficients.

    Args:
        a: Base
        exp: Exponent (>= 0)
        modulus: Reduction polynomial
        p: Prime characteristic

    Returns:
        a^exp mod modulus; exp == 0 gives the constant polynomial 1
    """
    if exp < 0:
        raise ValueError(f"Exponent must be non-negative, got {exp}")

    base = poly_mod(a, modulus, p)
    result = Polynomial.one(2 * modulus.degree)

    while exp > 0:
        if exp & 1:
            result = poly_mod(poly_mul(result, base, p), modulus, p)
        exp >>= 1
        if exp:
            base = poly_mod(poly_mul(base, base, p), modulus, p)

    return result
