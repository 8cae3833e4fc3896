"""
Scalar Arithmetic in Fp

Helpers for the prime field Fp = Z/pZ used by the polynomial engine:
- complement: additive inverse
- inverse: multiplicative inverse (extended Euclidean algorithm)
- fastpow: integer power by repeated squaring (field orders p^n)

The modulus p is assumed to be prime; this is not checked.
"""


def complement(a: int, p: int) -> int:
    """
    Additive inverse of a in Fp.

    Args:
        a: Element of Fp (0 <= a < p)
        p: Characteristic

    Returns:
        c such that (a + c) mod p == 0
    """
    return (p - a) % p


def inverse(a: int, p: int) -> int:
    """
    Multiplicative inverse of a in Fp.

    Uses the extended Euclidean algorithm, tracking only the
    Bezout coefficient of a.

    Args:
        a: Element of Fp
        p: Prime characteristic

    Returns:
        t such that (a * t) mod p == 1

    Raises:
        ZeroDivisionError: If a is 0 mod p or shares a factor with p
    """
    a %= p
    if a == 0:
        raise ZeroDivisionError(f"0 has no inverse mod {p}")

    t, new_t = 0, 1
    r, new_r = p, a

    while new_r != 0:
        q = r // new_r
        t, new_t = new_t, t - q * new_t
        r, new_r = new_r, r - q * new_r

    # gcd(a, p) != 1 only happens when p is not prime
    if r != 1:
        raise ZeroDivisionError(f"{a} has no inverse mod {p}")

    return t % p


def fastpow(base: int, exp: int) -> int:
    """
    Raise base to a non-negative integer power by squaring.

    Python integers are unbounded, so field orders such as 2^32
    are computed exactly.

    Args:
        base: Base
        exp: Exponent (>= 0)

    Returns:
        base ** exp
    """
    if exp < 0:
        raise ValueError(f"Exponent must be non-negative, got {exp}")

    result = 1
    while exp > 0:
        if exp & 1:
            result *= base
        base *= base
        exp >>= 1
    return result
