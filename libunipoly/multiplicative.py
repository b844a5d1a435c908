#!/usr/bin/env python3
#
#   Polynomial and scalar multiplication
#

from libunipoly.contracts import checked_add_orders, require
from libunipoly.logging import task

def mul(lhs, rhs):
    """
    Discrete convolution of the coefficient sequences, O(n * m) ring multiplications.
    """
    ring = lhs.coeff_ring
    # checked before anything is allocated
    order_o = checked_add_orders(lhs.order(), rhs.order())

    with task("mul", orders=(lhs.order(), rhs.order())):
        rev_coeffs = [ring.zero() for _ in range(order_o + 1)]
        for el,vl in enumerate(lhs._rev_coeffs):
            for er,vr in enumerate(rhs._rev_coeffs):
                rev_coeffs[el + er] = ring.add(rev_coeffs[el + er], ring.mul(vl, vr))

    # the product with a zero polynomial is all zeros
    return type(lhs).new_reversed(rev_coeffs, ring)

def mul_assign(lhs, rhs):
    lhs._rev_coeffs = mul(lhs, rhs)._rev_coeffs
    return lhs

def scale(p, c):
    """
    p * c for an element c of the coefficient ring
    """
    ring = p.coeff_ring
    return type(p).new_reversed([ring.mul(a, c) for a in p._rev_coeffs], ring)

def rscale(c, p):
    """
    c * p for an element c of the coefficient ring
    """
    ring = p.coeff_ring
    return type(p).new_reversed([ring.mul(c, a) for a in p._rev_coeffs], ring)

def scale_assign(p, c):
    ring = p.coeff_ring
    p._rev_coeffs = [ring.mul(a, c) for a in p._rev_coeffs]
    p.normalize()
    return p

def pow(p, n : int):
    require(n >= 0, f"negative power {n} of a polynomial")
    result = type(p).one(p.coeff_ring)
    base = p
    while n > 0:
        if n & 1:
            result = mul(result, base)
        n >>= 1
        if n > 0:
            base = mul(base, base)
    return result

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest
from fractions import Fraction

from libunipoly.contracts import ContractViolation, DegreeOverflow

def P(coeffs, ring=None):
    from libunipoly.polynomial import Polynomial
    return Polynomial(coeffs, ring)

class TestMul(unittest.TestCase):

    def test_mul(self):
        a = P([1.0, 3.0, 3.0, 0.0])
        b = P([1.0, 0.0, 1.0])
        expected = [1.0, 3.0, 4.0, 3.0, 3.0, 0.0]

        for c in (a * b, b * a, mul(a, b)):
            self.assertEqual(c.order(), 5)
            self.assertEqual(c.coeffs(), expected)

    def test_mul_assign(self):
        a = P([1, 3, 3, 0])
        b = P([1, 0, 1])

        c = a.copy()
        alias = c
        c *= b
        self.assertIs(c, alias)
        self.assertEqual(c.coeffs(), [1, 3, 4, 3, 3, 0])

        c = a.copy()
        c *= c
        self.assertEqual(c, a * a)

    def test_mul_zero(self):
        a = P([1, 3, 3, 0])
        z = a.zero(a.coeff_ring)
        self.assertTrue((a * z).is_zero())
        self.assertEqual((z * a).reverse_coeffs(), (0,))

    def test_one(self):
        a = P([Fraction(1, 2), 3, 0])
        one = a.one(a.coeff_ring)
        self.assertEqual(one.coeffs(), [1])
        self.assertEqual(a * one, a)
        self.assertEqual(one * a, a)

    def test_mul_scalar(self):
        a = P([1.0, 3.0, 3.0, 0.0])
        expected = [2.0, 6.0, 6.0, 0.0]

        self.assertEqual((a * 2.0).coeffs(), expected)
        self.assertEqual((2.0 * a).coeffs(), expected)
        self.assertEqual(scale(a, 2.0).coeffs(), expected)
        self.assertEqual(rscale(2.0, a).coeffs(), expected)

        c = a.copy()
        c *= 2
        self.assertEqual(c.coeffs(), expected)

        # multiplying by zero collapses to the zero polynomial
        self.assertEqual((a * 0).reverse_coeffs(), (0.0,))
        self.assertEqual((0 * a).order(), 0)

    def test_scalar_promotes(self):
        a = P([1, 2])
        c = a * 0.5
        self.assertEqual(c.coeffs(), [0.5, 1.0])
        self.assertEqual(c.coeff_ring, P([0.5]).coeff_ring)

        c = P([1, 2])
        c *= 1j
        self.assertEqual(c.coeffs(), [1j, 2j])

    def test_commutative(self):
        for _ in range(100):
            a = P([random.randint(-10, 10) for _ in range(random.randint(1, 8))])
            b = P([random.randint(-10, 10) for _ in range(random.randint(1, 8))])
            self.assertEqual(a * b, b * a)
            self.assertEqual((a * b).order(), 0 if a.is_zero() or b.is_zero() else a.order() + b.order())

    def test_pow(self):
        x1 = P([1, 1])
        self.assertEqual((x1 ** 0).coeffs(), [1])
        self.assertEqual((x1 ** 1).coeffs(), [1, 1])
        self.assertEqual((x1 ** 4).coeffs(), [1, 4, 6, 4, 1])
        self.assertEqual(pow(x1, 5), x1 * x1 * x1 * x1 * x1)
        with self.assertRaises(ContractViolation):
            x1 ** -1

    def test_degree_overflow(self):
        class Huge:
            # stands in for a polynomial of maximal order without allocating it
            coeff_ring = None
            def order(self):
                return 2 ** 31 - 1

        with self.assertRaises(DegreeOverflow):
            mul(Huge(), P([1, 0]))
