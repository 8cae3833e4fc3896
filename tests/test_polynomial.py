"""
Tests for dense polynomials over Fp.
"""

import pytest
import numpy as np
from gfrng.Polynomial import (
    Polynomial, poly_eq, poly_sum, poly_mul, poly_mod, poly_powmod,
)


# x^8 + x^4 + x^3 + x^2 + 1
I8 = Polynomial([1, 0, 1, 1, 1, 0, 0, 0, 1])


class TestPolynomial:
    """Test representation and normalization."""

    def test_degree(self):
        """Test degree is the highest nonzero index."""
        assert Polynomial([1, 2, 3]).degree == 2
        assert Polynomial([5]).degree == 0

    def test_trailing_zeros_normalized(self):
        """Test zeros above the true degree are ignored."""
        poly = Polynomial([1, 2, 0, 0])
        assert poly.degree == 1
        assert poly.capacity == 4
        assert poly.to_list() == [1, 2]

    def test_zero_polynomial(self):
        """Test zero has degree 0 and coefficient 0."""
        poly = Polynomial([0, 0, 0])
        assert poly.degree == 0
        assert poly.is_zero()
        assert Polynomial.zero(5).is_zero()
        assert Polynomial.zero(5).capacity == 5

    def test_one(self):
        """Test constant one."""
        one = Polynomial.one(4)
        assert one.to_list() == [1]
        assert one.capacity == 4

    def test_invalid_input(self):
        """Test None, empty, negative and non-integral coefficients are rejected."""
        with pytest.raises(ValueError):
            Polynomial(None)
        with pytest.raises(ValueError):
            Polynomial([])
        with pytest.raises(ValueError):
            Polynomial([1, -1])
        with pytest.raises(ValueError):
            Polynomial([1.5])
        with pytest.raises(ValueError):
            Polynomial([2**70])
        with pytest.raises(ValueError):
            Polynomial.zero(0)

    def test_resized(self):
        """Test copying into a larger or exact buffer."""
        poly = Polynomial([1, 1])
        assert poly.resized(8).capacity == 8
        assert poly.resized(8) == poly
        with pytest.raises(ValueError):
            poly.resized(1)

    def test_copy_is_independent(self):
        """Test copies do not share storage."""
        poly = Polynomial([1, 2])
        dup = poly.copy()
        dup.coeffs[0] = 0
        assert poly.to_list() == [1, 2]

    def test_str(self):
        """Test human-readable form."""
        assert str(I8) == "x^8 + x^4 + x^3 + x^2 + 1"
        assert str(Polynomial([0, 2, 1])) == "x^2 + 2x"
        assert str(Polynomial([0])) == "0"


class TestEquality:
    """Test structural equality."""

    def test_equal_ignores_capacity(self):
        """Test polynomials with different capacity compare equal."""
        assert poly_eq(Polynomial([1, 1]), Polynomial([1, 1, 0, 0]))

    def test_different_degree(self):
        """Test differing degrees are unequal."""
        assert not poly_eq(Polynomial([1, 1]), Polynomial([1, 1, 1]))

    def test_different_coefficient(self):
        """Test differing coefficients are unequal."""
        assert Polynomial([1, 2]) != Polynomial([1, 1])

    def test_hash_consistent(self):
        """Test equal polynomials hash equally."""
        assert hash(Polynomial([1, 1])) == hash(Polynomial([1, 1, 0]))


class TestSum:
    """Test polynomial addition."""

    def test_binary_sum_is_xor(self):
        """Test addition over F2."""
        a = Polynomial([1, 1, 0, 1])
        b = Polynomial([1, 0, 1, 1])
        assert poly_sum(a, b, 2).to_list() == [0, 1, 1]

    def test_cancellation_normalizes(self):
        """Test a + a = 0 over F2 has degree 0."""
        a = Polynomial([1, 0, 1])
        result = poly_sum(a, a, 2)
        assert result.is_zero()
        assert result.degree == 0

    def test_mod_p(self):
        """Test coefficients wrap mod p."""
        a = Polynomial([4, 3])
        b = Polynomial([3, 2, 1])
        assert poly_sum(a, b, 5).to_list() == [2, 0, 1]

    def test_operands_untouched(self):
        """Test inputs are not modified."""
        a = Polynomial([1, 1])
        b = Polynomial([1])
        poly_sum(a, b, 2)
        assert a.to_list() == [1, 1]
        assert b.to_list() == [1]

    def test_capacity(self):
        """Test result keeps the larger capacity."""
        a = Polynomial.one(8)
        b = Polynomial([0, 1])
        assert poly_sum(a, b, 2).capacity == 8


class TestProduct:
    """Test polynomial multiplication."""

    def test_binary_product(self):
        """Test (1 + x)(1 + x^2) = 1 + x + x^2 + x^3 over F2."""
        a = Polynomial([1, 1])
        b = Polynomial([1, 0, 1])
        assert poly_mul(a, b, 2).to_list() == [1, 1, 1, 1]

    def test_square_over_f2(self):
        """Test (1 + x)^2 = 1 + x^2 over F2."""
        a = Polynomial([1, 1])
        assert poly_mul(a, a, 2).to_list() == [1, 0, 1]

    def test_degree_adds(self):
        """Test deg(a*b) = deg(a) + deg(b) over a field."""
        a = Polynomial([1, 2, 3])
        b = Polynomial([4, 0, 0, 1])
        assert poly_mul(a, b, 7).degree == 5

    def test_by_zero(self):
        """Test product with zero is zero."""
        assert poly_mul(Polynomial([1, 2, 3]), Polynomial([0]), 5).is_zero()

    def test_self_product_unchanged_input(self):
        """Test squaring does not corrupt the operand."""
        a = Polynomial([1, 1, 1])
        poly_mul(a, a, 3)
        assert a.to_list() == [1, 1, 1]

    def test_matches_schoolbook(self):
        """Compare with direct double loop."""
        rng = np.random.default_rng(7)
        p = 13
        for _ in range(20):
            a = [int(c) for c in rng.integers(0, p, size=6)]
            b = [int(c) for c in rng.integers(0, p, size=4)]
            expected = [0] * (len(a) + len(b) - 1)
            for i, x in enumerate(a):
                for j, y in enumerate(b):
                    expected[i + j] = (expected[i + j] + x * y) % p
            assert poly_mul(Polynomial(a), Polynomial(b), p) == Polynomial(expected)


class TestRemainder:
    """Test Euclidean remainder."""

    def test_smaller_degree_unchanged(self):
        """Test a mod b = a when deg(a) < deg(b)."""
        a = Polynomial([1, 1])
        b = Polynomial([1, 0, 1])
        assert poly_mod(a, b, 2) == a

    def test_reduction_of_x8(self):
        """Test x^8 = x^4 + x^3 + x^2 + 1 mod I8."""
        x8 = Polynomial([0] * 8 + [1])
        assert poly_mod(x8, I8, 2).to_list() == [1, 0, 1, 1, 1]

    def test_modulus_reduces_to_zero(self):
        """Test I mod I = 0."""
        assert poly_mod(I8, I8, 2).is_zero()

    def test_mod_5(self):
        """Test (x^2 + 2) mod (x + 1) = 3 over F5."""
        a = Polynomial([2, 0, 1])
        b = Polynomial([1, 1])
        assert poly_mod(a, b, 5).to_list() == [3]

    def test_non_monic_divisor(self):
        """Test x^2 mod (2x + 1) = 4 over F5."""
        a = Polynomial([0, 0, 1])
        b = Polynomial([1, 2])
        assert poly_mod(a, b, 5).to_list() == [4]

    def test_constant_divisor(self):
        """Test division by a nonzero constant leaves no remainder."""
        assert poly_mod(Polynomial([1, 2, 3]), Polynomial([2]), 5).is_zero()

    def test_zero_divisor_raises(self):
        """Test division by the zero polynomial fails."""
        with pytest.raises(ZeroDivisionError):
            poly_mod(Polynomial([1, 1]), Polynomial([0]), 2)

    def test_remainder_degree(self):
        """Test deg(a mod b) < deg(b) for random dividends."""
        rng = np.random.default_rng(11)
        p = 7
        b = Polynomial([3, 1, 0, 2])
        for _ in range(25):
            a = Polynomial([int(c) for c in rng.integers(0, p, size=10)])
            r = poly_mod(a, b, p)
            assert r.degree < b.degree

    def test_division_identity(self):
        """Test (q*b + r) mod b = r."""
        p = 5
        b = Polynomial([1, 0, 2])
        q = Polynomial([3, 4, 1])
        r = Polynomial([2, 1])
        a = poly_sum(poly_mul(q, b, p), r, p)
        assert poly_mod(a, b, p) == r


class TestPowMod:
    """Test modular exponentiation."""

    def test_exponent_zero(self):
        """Test a^0 = 1."""
        a = Polynomial([1, 1, 0, 1])
        assert poly_powmod(a, 0, I8, 2).to_list() == [1]

    def test_exponent_one(self):
        """Test a^1 = a for reduced a."""
        a = Polynomial([1, 1, 0, 1])
        assert poly_powmod(a, 1, I8, 2) == a

    def test_x_to_the_8(self):
        """Test x^8 mod I8 via exponentiation."""
        x = Polynomial([0, 1])
        assert poly_powmod(x, 8, I8, 2).to_list() == [1, 0, 1, 1, 1]

    def test_primitive_order(self):
        """Test x^255 = 1 since x generates GF(2^8)*."""
        x = Polynomial([0, 1])
        assert poly_powmod(x, 255, I8, 2).to_list() == [1]

    def test_matches_repeated_multiplication(self):
        """Compare with naive repeated product."""
        p = 3
        modulus = Polynomial([2, 2, 0, 1])  # x^3 + 2x + 2
        a = Polynomial([1, 2, 1])
        expected = Polynomial([1])
        for exp in range(12):
            assert poly_powmod(a, exp, modulus, p) == expected
            expected = poly_mod(poly_mul(expected, a, p), modulus, p)

    def test_result_degree_bounded(self):
        """Test results stay below deg(I)."""
        a = Polynomial([1, 1, 1, 1, 1, 1, 1, 1])
        for exp in (2, 3, 17, 254):
            assert poly_powmod(a, exp, I8, 2).degree < I8.degree

    def test_negative_exponent_raises(self):
        """Test negative exponents are rejected."""
        with pytest.raises(ValueError):
            poly_powmod(Polynomial([0, 1]), -1, I8, 2)
