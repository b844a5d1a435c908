#!/usr/bin/env python3
#
#   Additive group of polynomials
#

"""
Addition, subtraction and negation of polynomials over the same coefficient ring. The in-place forms work on the
left operand's coefficient list and normalize it before returning it.
"""

def _pad(rev_coeffs, length, ring):
    if len(rev_coeffs) < length:
        rev_coeffs.extend(ring.zero() for _ in range(length - len(rev_coeffs)))

def add_assign(lhs, rhs):
    ring = lhs.coeff_ring
    rev = lhs._rev_coeffs
    _pad(rev, len(rhs._rev_coeffs), ring)
    for i,r in enumerate(rhs._rev_coeffs):
        rev[i] = ring.add(rev[i], r)
    lhs.normalize()
    return lhs

def sub_assign(lhs, rhs):
    ring = lhs.coeff_ring
    rev = lhs._rev_coeffs
    _pad(rev, len(rhs._rev_coeffs), ring)
    for i,r in enumerate(rhs._rev_coeffs):
        rev[i] = ring.sub(rev[i], r)
    lhs.normalize()
    return lhs

def add(lhs, rhs):
    return add_assign(lhs.copy(), rhs)

def sub(lhs, rhs):
    return sub_assign(lhs.copy(), rhs)

def neg(p):
    ring = p.coeff_ring
    # normalized again for rings whose negation changes the representation of zero
    return type(p).new_reversed([ring.neg(a) for a in p._rev_coeffs], ring)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

def P(coeffs, ring=None):
    from libunipoly.polynomial import Polynomial
    return Polynomial(coeffs, ring)

class TestAdd(unittest.TestCase):

    def test_add(self):
        a = P([1.0, 3.0, 3.0, 0.0])
        b = P([1.0, 0.0, 1.0])
        expected = [1.0, 4.0, 3.0, 1.0]

        for c in (a + b, b + a, add(a, b)):
            self.assertEqual(c.order(), 3)
            self.assertEqual(c.coeffs(), expected)

        # operands are left alone
        self.assertEqual(a.coeffs(), [1.0, 3.0, 3.0, 0.0])
        self.assertEqual(b.coeffs(), [1.0, 0.0, 1.0])

    def test_cancellation(self):
        a = P([1.0, 3.0, 3.0, 0.0])
        c = a + P([-1.0, -3.0, -3.0, 1.0])
        self.assertEqual(c.order(), 0)
        self.assertEqual(c.coeffs(), [1.0])

        c = a + P([-1.0, -3.0, -3.0, 0.0])
        self.assertTrue(c.is_zero())
        self.assertEqual(c.reverse_coeffs(), (0.0,))

    def test_add_assign(self):
        a = P([1, 3, 3, 0])
        b = P([1, 0, 1])

        c = a.copy()
        c += b
        self.assertEqual(c.coeffs(), [1, 4, 3, 1])

        c = b.copy()
        alias = c
        c += a
        self.assertIs(c, alias)
        self.assertEqual(c.coeffs(), [1, 4, 3, 1])

        c = a.copy()
        c += P([-1, -3, -3, 1])
        self.assertEqual(c.coeffs(), [1])

        c = a.copy()
        c += c
        self.assertEqual(c.coeffs(), [2, 6, 6, 0])

    def test_scalar(self):
        a = P([1, 3, 3, 0])
        self.assertEqual((a + 1).coeffs(), [1, 3, 3, 1])
        self.assertEqual((1 + a).coeffs(), [1, 3, 3, 1])
        self.assertEqual((a + 0.5).coeffs(), [1.0, 3.0, 3.0, 0.5])

    def test_identity_and_inverse(self):
        from libunipoly.basic_types import GF
        F = GF(509)
        for _ in range(100):
            p = P(F.rand_elems(random.randint(1, 8)), F)
            zero = p.zero(F)
            self.assertEqual(p + zero, p)
            self.assertTrue((p + (-p)).is_zero())
            self.assertEqual((p + (-p)).reverse_coeffs(), (F.zero(),))

    def test_commutative(self):
        for _ in range(100):
            a = P([random.randint(-10, 10) for _ in range(random.randint(1, 8))])
            b = P([random.randint(-10, 10) for _ in range(random.randint(1, 8))])
            self.assertEqual(a + b, b + a)
            self.assertEqual(a - b, -(b - a))

class TestSub(unittest.TestCase):

    def test_sub(self):
        a = P([1.0, 3.0, 3.0, 0.0])
        b = P([1.0, 0.0, 1.0])
        expected = [1.0, 2.0, 3.0, -1.0]

        for c in (a - b, sub(a, b)):
            self.assertEqual(c.order(), 3)
            self.assertEqual(c.coeffs(), expected)

        c = a - P([1.0, 3.0, 3.0, -1.0])
        self.assertEqual(c.order(), 0)
        self.assertEqual(c.coeffs(), [1.0])

    def test_sub_assign(self):
        a = P([1, 3, 3, 0])
        c = a.copy()
        c -= P([1, 0, 1])
        self.assertEqual(c.coeffs(), [1, 2, 3, -1])

        c = a.copy()
        c -= c
        self.assertTrue(c.is_zero())

    def test_rsub(self):
        a = P([1, 3])
        self.assertEqual((1 - a).coeffs(), [-1, -2])

class TestNeg(unittest.TestCase):

    def test_neg(self):
        a = P([1.0, 3.0, 3.0, 0.0])
        self.assertEqual((-a).coeffs(), [-1.0, -3.0, -3.0, 0.0])
        self.assertEqual(neg(a).coeffs(), [-1.0, -3.0, -3.0, 0.0])
        self.assertEqual(a.coeffs(), [1.0, 3.0, 3.0, 0.0])

    def test_neg_zero(self):
        z = -P([0.0])
        self.assertTrue(z.is_zero())
        self.assertEqual(z.order(), 0)
