"""
gfrng - Finite Field Arithmetic and a GF(2^n) Recurrence Generator

Exact arithmetic in GF(p^n) = Fp[x]/(I), where I is an irreducible
polynomial of degree n, and a linear-recurrence byte generator built on it.

Modules:
    Arithmetic Core:
        - Scalar: Fp complement, inverse and fast power
        - Polynomial: Dense polynomials over Fp (sum, product, remainder,
          modular exponentiation)
        - GaloisField: GF(p^n) fields and elements, predefined binary
          fields GF(2^8), GF(2^16), GF(2^32)

    Generator:
        - Generator: Combined recursive sequence (CRS) over a binary field
        - Device: Exclusive-open stream endpoint around a generator
"""

__version__ = "0.1.0"
__author__ = "gfrng Contributors"

# Largest supported characteristic. Keeps every convolution sum of
# coefficients below 2^63 for the supported extension degrees.
MAX_CHARACTERISTIC = 1 << 16

# Maximum CRS order (length of the history and coefficient arrays)
MAX_ORDER = 80

# Predefined binary fields: name -> (extension degree, output width in bytes)
BINARY_FIELDS = {
    'GF2_8': (8, 1),
    'GF2_16': (16, 2),
    'GF2_32': (32, 4),
}

DEFAULT_FIELD = 'GF2_8'
