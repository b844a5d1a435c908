#!/usr/bin/env python3
#
#   Evaluation of polynomials and their derivatives
#

"""
The evaluation point may be anything that belongs to a ring, polynomials included: evaluating at a polynomial
substitutes it for the variable.

Results live in the `image` ring, by default the common ring of the coefficients and the point.

The direct variants keep a running power x^n and multiply it by x once per term. The precise variants compute every
x^e on its own with the ring's `pow` and fold the terms in with the ring's fused `mul_add`, which avoids the error a
floating point running power accumulates over many terms.
"""

from libunipoly.basic_types import common_ring, prod, ring_of
from libunipoly.contracts import require

def _rings(p, x, image):
    point_ring = ring_of(x)
    if image is None:
        image = common_ring(p.coeff_ring, point_ring)
    return point_ring, image

def _falling_factorial_terms(p, n : int):
    """
    Yields (coefficient, exponent) of the n-th derivative of p, lowest exponent first.
    """
    ring = p.coeff_ring
    for e_new,a in enumerate(p._rev_coeffs[n:]):
        # e_old * (e_old - 1) * ... * (e_new + 1)
        mul = prod(range(e_new + 1, e_new + n + 1))
        yield ring.mul(a, ring.from_int(mul)), e_new

def _eval_terms(terms, x, point_ring, image):
    xn = point_ring.one()
    y = image.zero()
    for a,e in terms:
        if e > 0:
            xn = point_ring.mul(xn, x)
        y = image.add(y, image.mul(image(a), image(xn)))
    return y

def _eval_terms_precise(terms, x, point_ring, image):
    y = image.zero()
    for a,e in terms:
        y = image.mul_add(image(a), image(point_ring.pow(x, e)), y)
    return y

def eval_direct(p, x, image=None):
    point_ring, image = _rings(p, x, image)
    return _eval_terms(((a, e) for e,a in enumerate(p._rev_coeffs)), x, point_ring, image)

def eval_precise(p, x, image=None):
    point_ring, image = _rings(p, x, image)
    return _eval_terms_precise(((a, e) for e,a in enumerate(p._rev_coeffs)), x, point_ring, image)

def eval_der(p, x, n : int, image=None):
    """
    Value of the n-th derivative (n >= 1) of p at x
    """
    require(n > 0, f"derivative order must be positive, got {n}")
    point_ring, image = _rings(p, x, image)
    return _eval_terms(_falling_factorial_terms(p, n), x, point_ring, image)

def eval_der_precise(p, x, n : int, image=None):
    require(n > 0, f"derivative order must be positive, got {n}")
    point_ring, image = _rings(p, x, image)
    return _eval_terms_precise(_falling_factorial_terms(p, n), x, point_ring, image)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import math
import random
import unittest
from fractions import Fraction

import numpy as np

from libunipoly.basic_types import GF, CC, QQ, Mod, Rational
from libunipoly.contracts import ContractViolation

def P(coeffs, ring=None):
    from libunipoly.polynomial import Polynomial
    return Polynomial(coeffs, ring)

class TestEval(unittest.TestCase):

    def test_eval(self):
        p = P([1, 2, 3, 0])
        self.assertEqual(p.eval(2), 22)
        self.assertEqual(p(2), 22)
        self.assertEqual(p.eval(complex(0, 1)), complex(-2, 2))
        self.assertEqual(p.eval_precise(2), 22)
        self.assertEqual(p.eval_precise(complex(0, 1)), complex(-2, 2))

        p = P([1.0, 2.0, 3.0, 0.0])
        self.assertEqual(p.eval(2.0), 22.0)
        self.assertEqual(p.eval_precise(2.0), 22.0)

    def test_eval_numpy(self):
        p = P(np.array([1, 2, 3, 0], dtype=np.float32))
        y = p.eval(np.float32(2))
        self.assertEqual(y, 22.0)
        self.assertIsInstance(y, np.float32)
        self.assertEqual(p.eval_precise(np.float32(2)), 22.0)
        self.assertEqual(p.eval(np.complex64(1j)), np.complex64(-2 + 2j))

    def test_eval_zero(self):
        z = P([])
        self.assertEqual(z.eval(5), 0)
        self.assertEqual(z.eval_precise(5), 0)
        self.assertEqual(P([7]).eval(5), 7)

    def test_eval_image(self):
        y = P([1, 2, 3, 0]).eval(2, image=CC)
        self.assertEqual(y, 22)
        self.assertIsInstance(y, complex)

    def test_eval_exact_rings(self):
        F = GF(13)
        p = P([1, 2, 3, 0], F)
        self.assertEqual(p.eval(2), Mod(22, 13))
        self.assertEqual(p.eval(F(2)), Mod(22, 13))
        self.assertEqual(p.eval_precise(2), Mod(22, 13))

        p = P([Rational(1, 2), 0, 1], QQ)
        self.assertEqual(p.eval(Rational(2, 3)), Rational(11, 9))
        self.assertEqual(p.eval_precise(2), Rational(3, 1))

    def test_eval_consistency(self):
        for _ in range(100):
            p = P([Fraction(random.randint(-50, 50), random.randint(1, 20)) for _ in range(random.randint(1, 10))])
            x = Fraction(random.randint(-50, 50), random.randint(1, 20))
            self.assertEqual(p.eval(x), p.eval_precise(x))

        for _ in range(100):
            p = P([random.uniform(-1, 1) for _ in range(random.randint(1, 10))])
            x = random.uniform(-1, 1)
            self.assertAlmostEqual(p.eval(x), p.eval_precise(x), places=9)

    def test_eval_overflow(self):
        p = P([1e308, 0.0])
        self.assertEqual(p.eval(10.0), math.inf)
        self.assertEqual(p.eval_precise(10.0), math.inf)
        self.assertEqual(P([1e307, 0.0, 0.0]).eval_der_precise(100.0, 1), math.inf)

    def test_eval_wide_floats(self):
        a = np.longdouble(1) + np.longdouble(2) ** -60
        p = P(np.array([a, 0], dtype=np.longdouble))
        x = np.longdouble(1)
        self.assertEqual(p.eval_precise(x), p.eval(x))

    def test_eval_substitution(self):
        p = P([1.0, 2.0, 3.0, 0.0])
        # x -> x^2
        q = p.eval(P([1.0, 0.0, 0.0]))
        self.assertEqual(q.order(), 6)
        self.assertEqual(q.coeffs(), [1.0, 0.0, 2.0, 0.0, 3.0, 0.0, 0.0])
        # x -> x^2 + 1
        q = p.eval(P([1.0, 0.0, 1.0]))
        self.assertEqual(q.coeffs(), [1.0, 0.0, 5.0, 0.0, 10.0, 0.0, 6.0])
        self.assertEqual(p.eval_precise(P([1.0, 0.0, 1.0])), q)

    def test_substitution_composes(self):
        p = P([1, -2, 0, 5])
        q = P([2, 1])
        for x in range(-5, 6):
            self.assertEqual(p.eval(q).eval(x), p.eval(q.eval(x)))

class TestEvalDer(unittest.TestCase):

    def test_eval_der(self):
        # x^3 + 2x^2 + 3x
        p = P([1.0, 2.0, 3.0, 0.0])
        # 3x^2 + 4x + 3
        for x,y in ((0.0, 3.0), (1.0, 10.0), (2.0, 23.0)):
            self.assertEqual(p.eval_der(x, 1), y)
            self.assertEqual(p.eval_der_precise(x, 1), y)
        # 6x + 4
        for x,y in ((0.0, 4.0), (1.0, 10.0)):
            self.assertEqual(p.eval_der(x, 2), y)
            self.assertEqual(p.eval_der_precise(x, 2), y)
        # 6
        self.assertEqual(p.eval_der(5.0, 3), 6.0)
        self.assertEqual(p.eval_der(5.0, 4), 0.0)
        self.assertEqual(p.eval_der_precise(5.0, 4), 0.0)

    def test_eval_der_integers(self):
        p = P([1, 0, 0, 0, 0, 0])
        # 5! / 2! x^2
        self.assertEqual(p.eval_der(2, 3), 60 * 4)
        self.assertEqual(p.eval_der_precise(2, 3), 60 * 4)

    def test_eval_der_gf(self):
        F = GF(7)
        p = P([1, 0, 0, 0, 0, 0, 0, 0], F)
        # 7 x^6 vanishes in characteristic 7
        self.assertEqual(p.eval_der(3, 1), 0)

    def test_eval_der_substitution(self):
        p = P([1, 2, 3, 0])
        q = p.eval_der(P([1, 0]), 1)
        self.assertEqual(q.coeffs(), [3, 4, 3])

    def test_order_must_be_positive(self):
        p = P([1.0, 2.0, 3.0, 0.0])
        for n in (0, -1):
            with self.assertRaises(ContractViolation):
                p.eval_der(1.0, n)
            with self.assertRaises(ContractViolation):
                p.eval_der_precise(1.0, n)
