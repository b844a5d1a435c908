#!/usr/bin/env python3
#
#   Dense univariate polynomials
#

import functools
import numbers
import random

import numpy as np

from libunipoly import additive, division, evaluation, multiplicative
from libunipoly.basic_types import CoefficientRing, Mod, Rational, ZZ, common_ring, ring_for_coeffs, ring_of
from libunipoly.contracts import MAX_ORDER, assume, check_length
from libunipoly.display import to_display

########################################################################################################################
#   Polynomial Rings
########################################################################################################################

class PolynomialRing(CoefficientRing):
    """
    Univariate polynomials over `coeff_ring`. Polynomials are themselves valid coefficients and evaluation points.
    """

    def __init__(self, coeff_ring : CoefficientRing):
        self.coeff_ring = coeff_ring

    def __eq__(self, other):
        if not isinstance(other, PolynomialRing):
            return False
        return self.coeff_ring == other.coeff_ring

    def __hash__(self):
        return hash(("PolynomialRing", self.coeff_ring))

    def __str__(self):
        return f"Univariate Polynomial Ring over {self.coeff_ring}"

    def __repr__(self):
        return f"PolynomialRing({self.coeff_ring!r})"

    def __call__(self, element):
        if isinstance(element, Polynomial):
            if element.coeff_ring == self.coeff_ring:
                return element
            elif self.coeff_ring.embeds(element.ring):
                # a polynomial that is a coefficient of this ring
                return Polynomial([element], self.coeff_ring)
            else:
                return Polynomial.new_reversed(element.reverse_coeffs(), self.coeff_ring)
        elif isinstance(element, (list, tuple, np.ndarray)):
            return Polynomial(element, self.coeff_ring)
        else:
            return Polynomial([element], self.coeff_ring)

    def zero(self):
        return Polynomial.zero(self.coeff_ring)

    def one(self):
        return Polynomial.one(self.coeff_ring)

    def is_zero(self, a):
        return a.is_zero()

    def is_one(self, a):
        return a.is_one()

    def div(self, a, b):
        q, r = a.div_rem(b)
        if not r.is_zero():
            raise ArithmeticError(f"{b} does not divide {a}")
        return q

    def from_int(self, n : int):
        return self(self.coeff_ring.from_int(n))

    def embeds(self, other):
        if super().embeds(other) or self.coeff_ring == other or self.coeff_ring.embeds(other):
            return True
        return isinstance(other, PolynomialRing) and self.coeff_ring.embeds(other.coeff_ring)

    def rand_elem(self, min : int = 0, max_order : int = 4):
        return Polynomial.new_reversed(self.coeff_ring.rand_elems(random.randint(1, max_order + 1), min),
                                       self.coeff_ring)

########################################################################################################################
#   Polynomial
########################################################################################################################

@functools.total_ordering
class Polynomial:
    """
    Dense univariate polynomial.

    Coefficients are stored lowest power first ("internal order"), while the constructor and `coeffs` use the
    conventional highest-power-first order:

        Polynomial([1, 2, 3, 0])    # x^3 + 2x^2 + 3x

    After every public operation the highest stored coefficient is non-zero, or the polynomial is the single zero
    coefficient [0], and the order fits a signed 32 bit integer.
    """

    # mutable through +=, -= and *=
    __hash__ = None

    def __init__(self, coeffs=(), coeff_ring : CoefficientRing = None):
        if not isinstance(coeffs, np.ndarray):
            coeffs = list(coeffs)
        if coeff_ring is None:
            coeff_ring = ring_for_coeffs(coeffs)
        rev_coeffs = list(coeffs)
        rev_coeffs.reverse()
        self._init_reversed(rev_coeffs, coeff_ring)

    @classmethod
    def new_reversed(cls, rev_coeffs, coeff_ring : CoefficientRing = None):
        """
        Builds a polynomial from coefficients given lowest power first
        """
        if not isinstance(rev_coeffs, np.ndarray):
            rev_coeffs = list(rev_coeffs)
        if coeff_ring is None:
            coeff_ring = ring_for_coeffs(rev_coeffs)
        ret = cls.__new__(cls)
        ret._init_reversed(list(rev_coeffs), coeff_ring)
        return ret

    def _init_reversed(self, rev_coeffs, coeff_ring):
        self.coeff_ring = coeff_ring
        self._rev_coeffs = [coeff_ring(c) for c in rev_coeffs]
        self.normalize()

    @classmethod
    def zero(cls, coeff_ring : CoefficientRing = ZZ):
        return cls.new_reversed([coeff_ring.zero()], coeff_ring)

    @classmethod
    def one(cls, coeff_ring : CoefficientRing = ZZ):
        return cls.new_reversed([coeff_ring.one()], coeff_ring)

    @property
    def ring(self):
        return PolynomialRing(self.coeff_ring)

    def normalize(self):
        """
        Strips zero coefficients from the top, leaving the single zero coefficient of the zero polynomial
        """
        rev = self._rev_coeffs
        while rev and self.coeff_ring.is_zero(rev[-1]):
            rev.pop()
        if len(rev) == 0:
            rev.append(self.coeff_ring.zero())
        check_length(len(rev))

    def order(self) -> int:
        n = len(self._rev_coeffs)
        assume(0 < n <= MAX_ORDER + 1, f"polynomial with {n} coefficients")
        return n - 1

    def degree(self) -> int:
        return self.order()

    def coeffs(self):
        """
        Copy of the coefficients, highest power first
        """
        return list(reversed(self._rev_coeffs))

    def reverse_coeffs(self):
        """
        The coefficients lowest power first
        """
        return tuple(self._rev_coeffs)

    def __getitem__(self, e : int):
        # coefficient of x^e
        if e < 0:
            raise IndexError(f"negative exponent {e}")
        if e >= len(self._rev_coeffs):
            return self.coeff_ring.zero()
        return self._rev_coeffs[e]

    def leading_coeff(self):
        return self._rev_coeffs[-1]

    def is_zero(self):
        return self.order() == 0 and self.coeff_ring.is_zero(self._rev_coeffs[0])

    def is_one(self):
        return self.order() == 0 and self.coeff_ring.is_one(self._rev_coeffs[0])

    def __bool__(self):
        return not self.is_zero()

    def copy(self):
        ret = type(self).__new__(type(self))
        ret.coeff_ring = self.coeff_ring
        ret._rev_coeffs = list(self._rev_coeffs)
        return ret

    __copy__ = copy

    def __repr__(self):
        return f"Polynomial({self.coeffs()!r}, {self.coeff_ring!r})"

    def __str__(self):
        return str(self.to_display("x"))

    def to_display(self, variable : str):
        return to_display(self, variable)

    def __eq__(self, other):
        if not isinstance(other, (Polynomial, numbers.Number, Mod, Rational)):
            return NotImplemented
        try:
            self._join(other)
        except TypeError:
            # e.g. GF(5) against GF(7)
            return False
        if isinstance(other, Polynomial):
            return self._rev_coeffs == other._rev_coeffs
        return self.order() == 0 and bool(self._rev_coeffs[0] == other)

    def __lt__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._rev_coeffs < other._rev_coeffs

    ####################################################################################################################
    #   Coercion
    ####################################################################################################################

    def _join(self, other):
        """
        The polynomial ring both this polynomial and `other` can be brought into
        """
        if isinstance(other, Polynomial):
            if other.coeff_ring == self.coeff_ring:
                return self.ring
            if self.coeff_ring.embeds(other.ring):
                return self.ring
            if other.coeff_ring.embeds(self.ring):
                return other.ring
            return PolynomialRing(common_ring(self.coeff_ring, other.coeff_ring))
        return PolynomialRing(common_ring(self.coeff_ring, ring_of(other)))

    def _coerce(self, other):
        try:
            ring = self._join(other)
        except TypeError:
            return None
        return ring(self), ring(other)

    def _is_scalar(self, other):
        return not isinstance(other, Polynomial) or self.coeff_ring.embeds(other.ring)

    def _promote(self, ring):
        # in-place change of coefficient ring, for the compound assignments
        if ring != self.ring:
            self._rev_coeffs = list(ring(self.copy())._rev_coeffs)
            self.coeff_ring = ring.coeff_ring

    ####################################################################################################################
    #   Arithmetic
    ####################################################################################################################

    def __add__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        return additive.add(*pair)

    def __radd__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        a, b = pair
        return additive.add(b, a)

    def __iadd__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        self._promote(pair[0].ring)
        return additive.add_assign(self, pair[1])

    def __sub__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        return additive.sub(*pair)

    def __rsub__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        a, b = pair
        return additive.sub(b, a)

    def __isub__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        self._promote(pair[0].ring)
        return additive.sub_assign(self, pair[1])

    def __neg__(self):
        return additive.neg(self)

    def __pos__(self):
        return self.copy()

    def __mul__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        a, b = pair
        if self._is_scalar(other):
            return multiplicative.scale(a, a.coeff_ring(other))
        return multiplicative.mul(a, b)

    def __rmul__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        a, _ = pair
        return multiplicative.rscale(a.coeff_ring(other), a)

    def __imul__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        self._promote(pair[0].ring)
        if self._is_scalar(other):
            return multiplicative.scale_assign(self, self.coeff_ring(other))
        return multiplicative.mul_assign(self, pair[1])

    def __pow__(self, n : int):
        return multiplicative.pow(self, n)

    def add_assign(self, other):
        self += other
        return self

    def sub_assign(self, other):
        self -= other
        return self

    def mul_assign(self, other):
        self *= other
        return self

    ####################################################################################################################
    #   Division
    ####################################################################################################################

    def div_rem(self, rhs):
        pair = self._coerce(rhs)
        if pair is None:
            raise TypeError(f"Cannot divide {self!r} by {rhs!r}")
        return division.div_rem(*pair)

    def __divmod__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        return division.div_rem(*pair)

    def __rdivmod__(self, other):
        pair = self._coerce(other)
        if pair is None:
            return NotImplemented
        a, b = pair
        return division.div_rem(b, a)

    def __floordiv__(self, other):
        qr = self.__divmod__(other)
        return qr if qr is NotImplemented else qr[0]

    def __mod__(self, other):
        qr = self.__divmod__(other)
        return qr if qr is NotImplemented else qr[1]

    ####################################################################################################################
    #   Evaluation
    ####################################################################################################################

    def eval(self, x, image : CoefficientRing = None):
        return evaluation.eval_direct(self, x, image)

    def eval_precise(self, x, image : CoefficientRing = None):
        return evaluation.eval_precise(self, x, image)

    def eval_der(self, x, n : int, image : CoefficientRing = None):
        return evaluation.eval_der(self, x, n, image)

    def eval_der_precise(self, x, n : int, image : CoefficientRing = None):
        return evaluation.eval_der_precise(self, x, n, image)

    def __call__(self, x):
        return self.eval(x)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import copy
import unittest
from fractions import Fraction

from libunipoly.basic_types import GF, QQ, RR, NativeRing
from libunipoly.contracts import ContractViolation, unchecked

class TestNormalization(unittest.TestCase):

    def test_new(self):
        p = Polynomial([0.0, 0.0, 1.0, 2.0, 3.0, 0.0])
        self.assertEqual(p.order(), 3)
        self.assertEqual(p.degree(), 3)
        self.assertEqual(p.coeffs(), [1.0, 2.0, 3.0, 0.0])
        self.assertEqual(p.reverse_coeffs(), (0.0, 3.0, 2.0, 1.0))
        self.assertEqual(p.coeff_ring, RR)

    def test_new_reversed(self):
        p = Polynomial.new_reversed([0, 3, 2, 1, 0, 0])
        self.assertEqual(p.coeffs(), [1, 2, 3, 0])
        self.assertEqual(p, Polynomial([1, 2, 3, 0]))

    def test_all_zero(self):
        for coeffs in ([], [0], [0, 0, 0], [0.0, -0.0]):
            p = Polynomial(coeffs)
            self.assertEqual(p.order(), 0)
            self.assertEqual(p.coeffs(), [0])
            self.assertTrue(p.is_zero())
            self.assertFalse(p)

    def test_round_trip(self):
        for _ in range(200):
            n_zeros = random.randint(0, 4)
            rest = [random.randint(-5, 5) for _ in range(random.randint(0, 6))]
            coeffs = [0] * n_zeros + rest
            p = Polynomial(coeffs)
            while rest and rest[0] == 0:
                rest.pop(0)
            self.assertEqual(p.coeffs(), rest or [0])

    def test_coercion(self):
        p = Polynomial([1, 2], RR)
        self.assertTrue(all(type(c) is float for c in p.coeffs()))
        p = Polynomial([1, 2, 10], GF(7))
        self.assertEqual(p.coeffs(), [1, 2, 3])
        p = Polynomial([8, 7], GF(7))
        self.assertEqual(p.coeffs(), [1, 0])
        p = Polynomial([7, 0], GF(7))
        self.assertTrue(p.is_zero())

    def test_inference(self):
        self.assertEqual(Polynomial([1, 2]).coeff_ring, ZZ)
        self.assertEqual(Polynomial([1, Fraction(1, 2)]).coeff_ring, NativeRing(Fraction))
        self.assertEqual(Polynomial([Rational(1, 2), 1]).coeff_ring, QQ)
        self.assertEqual(Polynomial(np.array([1, 2], dtype=np.float32)).coeff_ring, NativeRing(np.float32))
        self.assertEqual(Polynomial(c for c in (1, 2.5)).coeffs(), [1.0, 2.5])

    def test_accessors_are_copies(self):
        p = Polynomial([1, 2, 3])
        c = p.coeffs()
        c[0] = 0
        self.assertEqual(p.coeffs(), [1, 2, 3])
        self.assertIsInstance(p.reverse_coeffs(), tuple)
        q = copy.copy(p)
        q += Polynomial([1, 0, 0])
        self.assertEqual(p.coeffs(), [1, 2, 3])
        self.assertEqual(q.coeffs(), [2, 2, 3])

    def test_getitem(self):
        p = Polynomial([1, 2, 3, 0])
        self.assertEqual(p[0], 0)
        self.assertEqual(p[1], 3)
        self.assertEqual(p[3], 1)
        self.assertEqual(p[10], 0)
        self.assertEqual(p.leading_coeff(), 1)
        with self.assertRaises(IndexError):
            p[-1]

    def test_identities(self):
        self.assertEqual(Polynomial.zero(RR).reverse_coeffs(), (0.0,))
        self.assertEqual(Polynomial.one(GF(5)).coeffs(), [1])
        self.assertTrue(Polynomial.one().is_one())
        self.assertFalse(Polynomial([1, 1]).is_one())

    def test_equality(self):
        self.assertEqual(Polynomial([1, 2]), Polynomial([1.0, 2.0]))
        self.assertNotEqual(Polynomial([1, 2]), Polynomial([1, 2, 0]))
        self.assertEqual(Polynomial([5]), 5)
        self.assertNotEqual(Polynomial([1, 5]), 5)
        self.assertNotEqual(Polynomial([5]), "5")
        # prime fields without a common ring are never equal
        self.assertNotEqual(Polynomial([1], GF(5)), Polynomial([1], GF(7)))
        self.assertFalse(Polynomial([1, 2], GF(5)) == Polynomial([1, 2], GF(7)))
        self.assertNotEqual(Polynomial([1], GF(5)), Mod(1, 7))
        self.assertNotEqual(Polynomial([1], GF(5)), 1.0)
        self.assertEqual(Polynomial([1, 6], GF(5)), Polynomial([1, 1]))
        with self.assertRaises(TypeError):
            hash(Polynomial([5]))

    def test_ordering(self):
        # lexicographic from the constant term up
        self.assertLess(Polynomial([5, 1]), Polynomial([1, 2]))
        self.assertLess(Polynomial([1]), Polynomial([1, 1]))
        self.assertGreater(Polynomial([2, 0]), Polynomial([1, 0]))
        self.assertEqual(sorted([Polynomial([3]), Polynomial([1, 0]), Polynomial([1])]),
                         [Polynomial([1, 0]), Polynomial([1]), Polynomial([3])])

    def test_unchecked_order(self):
        p = Polynomial([1, 2])
        p._rev_coeffs = []
        with self.assertRaises(ContractViolation):
            p.order()
        old = unchecked.value
        try:
            unchecked.value = True
            self.assertEqual(p.order(), -1)
        finally:
            unchecked.value = old

    def test_repr(self):
        self.assertEqual(repr(Polynomial([1, 0])), "Polynomial([1, 0], NativeRing(int))")
        self.assertEqual(str(Polynomial([1, 0])), "x")

class TestPolynomialRing(unittest.TestCase):

    def test_call(self):
        R = PolynomialRing(RR)
        self.assertEqual(R([1, 2]).coeffs(), [1.0, 2.0])
        self.assertEqual(R(3).coeffs(), [3.0])
        p = R([1.0])
        self.assertIs(R(p), p)
        self.assertEqual(R(Polynomial([1, 2])).coeff_ring, RR)

    def test_capabilities(self):
        R = PolynomialRing(ZZ)
        self.assertTrue(R.is_zero(R.zero()))
        self.assertTrue(R.is_one(R.one()))
        self.assertEqual(R.from_int(3), 3)
        self.assertEqual(R.pow(Polynomial([1, 1]), 2).coeffs(), [1, 2, 1])
        self.assertEqual(R.div(Polynomial([1, 2, 1]), Polynomial([1, 1])).coeffs(), [1, 1])
        with self.assertRaises(ArithmeticError):
            R.div(Polynomial([1, 2, 2]), Polynomial([1, 1]))

    def test_embeds(self):
        self.assertTrue(PolynomialRing(RR).embeds(PolynomialRing(ZZ)))
        self.assertTrue(PolynomialRing(RR).embeds(RR))
        self.assertFalse(PolynomialRing(ZZ).embeds(PolynomialRing(RR)))
        self.assertEqual(common_ring(RR, PolynomialRing(RR)), PolynomialRing(RR))
        self.assertEqual(common_ring(PolynomialRing(RR), ZZ), PolynomialRing(RR))

    def test_mixed_rings(self):
        p = Polynomial([1, 2])
        q = Polynomial([0.5, 0.0])
        self.assertEqual((p + q).coeffs(), [1.5, 2.0])
        self.assertEqual((p + q).coeff_ring, RR)
        p += q
        self.assertEqual(p.coeff_ring, RR)
        with self.assertRaises(TypeError):
            Polynomial([1], GF(5)) + Polynomial([1], GF(7))

    def test_polynomial_coefficients(self):
        # (y + 1) z + y, with coefficients in Z[y]
        R = PolynomialRing(ZZ)
        y = Polynomial([1, 0])
        p = Polynomial([y + 1, y], R)
        self.assertEqual(p.coeff_ring, R)
        self.assertEqual(p.order(), 1)
        # scaling by a coefficient
        self.assertEqual((p * y).coeffs(), [y * y + y, y * y])
        # z = 2 gives 3y + 2
        self.assertEqual(p.eval(2), Polynomial([3, 2]))
        # z = y gives y^2 + 2y
        self.assertEqual(p.eval(y), Polynomial([1, 2, 0]))
        self.assertTrue((p - p).is_zero())
