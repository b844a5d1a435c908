#!/usr/bin/env python3
#
#   Polynomial long division
#

from libunipoly.contracts import ZeroPolynomialDivision, require
from libunipoly.logging import task

def div_rem(dividend, divisor):
    """
    Schoolbook long division: returns (quotient, remainder) with

        dividend = divisor * quotient + remainder

    and either remainder = 0 or deg(remainder) < deg(divisor).

    The coefficient ring's `div` must be exact. Fields always are; over the integers every step has to divide, which
    holds for monic divisors and raises ArithmeticError otherwise.
    """
    require(not divisor.is_zero(), "division by the zero polynomial", ZeroPolynomialDivision)

    cls = type(dividend)
    ring = dividend.coeff_ring
    order_l = dividend.order()
    order_r = divisor.order()
    if order_l < order_r:
        return cls.zero(ring), dividend.copy()
    order_o = order_l - order_r

    with task("div_rem", orders=(order_l, order_r)):
        rhs = divisor._rev_coeffs
        remainder = list(dividend._rev_coeffs)
        quotient = [ring.zero() for _ in range(order_o + 1)]

        for el in reversed(range(order_r, order_l + 1)):
            v = ring.div(remainder[el], rhs[order_r])
            remainder[el] = ring.zero()
            for k in range(1, order_r + 1):
                remainder[el - k] = ring.sub(remainder[el - k], ring.mul(v, rhs[order_r - k]))
            quotient[el - order_r] = v

    return cls.new_reversed(quotient, ring), cls.new_reversed(remainder, ring)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest
from fractions import Fraction

from libunipoly.basic_types import GF, QQ, Rational

def P(coeffs, ring=None):
    from libunipoly.polynomial import Polynomial
    return Polynomial(coeffs, ring)

class TestDivRem(unittest.TestCase):

    def test_div_rem(self):
        a = P([1.0, 2.0, 3.0, 0.0])

        # (x^3 + 2x^2 + 3x) / x = x^2 + 2x + 3 | 0
        q, r = a.div_rem(P([1.0, 0.0]))
        self.assertEqual(q.coeffs(), [1.0, 2.0, 3.0])
        self.assertTrue(r.is_zero())

        # (x^3 + 2x^2 + 3x) / 2x = 0.5x^2 + x + 1.5 | 0
        q, r = a.div_rem(P([2.0, 0.0]))
        self.assertEqual(q.coeffs(), [0.5, 1.0, 1.5])
        self.assertTrue(r.is_zero())

        # (x^3 + 2x^2 + 3x) / x^2 = x + 2 | 3x
        q, r = a.div_rem(P([1.0, 0.0, 0.0]))
        self.assertEqual(q.coeffs(), [1.0, 2.0])
        self.assertEqual(r.coeffs(), [3.0, 0.0])

        # (x^3 + 2x^2 + 3x) / (x^2 + 1) = x + 2 | 2x - 2
        b = P([1.0, 0.0, 1.0])
        q, r = a.div_rem(b)
        self.assertEqual(q.coeffs(), [1.0, 2.0])
        self.assertEqual(r.coeffs(), [2.0, -2.0])

        # (x^2 + 1) / (x^3 + 2x^2 + 3x) = 0 | x^2 + 1
        q, r = b.div_rem(a)
        self.assertTrue(q.is_zero())
        self.assertEqual(r, b)
        self.assertIsNot(r, b)

    def test_operators(self):
        a = P([1, 2, 3, 0], QQ)
        b = P([1, 0, 1], QQ)
        q, r = divmod(a, b)
        self.assertEqual(q.coeffs(), [1, 2])
        self.assertEqual(r.coeffs(), [2, -2])
        self.assertEqual(a // b, q)
        self.assertEqual(a % b, r)

    def test_div_rem_zero(self):
        a = P([1.0, 2.0, 3.0, 0.0])
        with self.assertRaises(ZeroPolynomialDivision):
            a.div_rem(a.zero(a.coeff_ring))
        # also usable where ZeroDivisionError is expected
        with self.assertRaises(ZeroDivisionError):
            a // P([0.0])

    def test_integers(self):
        # monic divisors stay exact over the integers
        q, r = P([1, 2, 3, 0]).div_rem(P([1, 0, 1]))
        self.assertEqual(q.coeffs(), [1, 2])
        self.assertEqual(r.coeffs(), [2, -2])
        with self.assertRaises(ArithmeticError):
            P([1, 2, 3, 0]).div_rem(P([2, 0, 1]))

    def test_identity(self):
        for F in (GF(509), QQ):
            for _ in range(100):
                a = P(F.rand_elems(random.randint(1, 10)), F)
                b = P(F.rand_elems(random.randint(1, 6), min=1), F)
                q, r = a.div_rem(b)
                self.assertEqual(b * q + r, a)
                self.assertTrue(r.is_zero() or r.order() < b.order())

    def test_fractions(self):
        a = P([Fraction(1), Fraction(0), Fraction(-1)])
        q, r = a.div_rem(P([2, 2]))
        self.assertEqual(q.coeffs(), [Fraction(1, 2), Fraction(-1, 2)])
        self.assertTrue(r.is_zero())
        self.assertEqual(P([Rational(3, 4)], QQ).div_rem(P([3], QQ))[0].coeffs(), [Rational(1, 4)])
