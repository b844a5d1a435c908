#!/usr/bin/env python3
#
#   Rendering polynomials as expressions
#

_SUPERSCRIPT = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

def to_superscript(k : int) -> str:
    return str(k).translate(_SUPERSCRIPT)

class DisplayPolynomial:
    """
    A polynomial paired with the name of its variable, rendered highest power first: "x⁵ + 3x⁴ + 2x³ + x"
    """

    def __init__(self, polynomial, variable : str):
        self.polynomial = polynomial
        self.variable = variable

    def __str__(self):
        ring = self.polynomial.coeff_ring
        terms = []
        for k,v in reversed(list(enumerate(self.polynomial.reverse_coeffs()))):
            if ring.is_zero(v):
                continue
            term = ""
            if k == 0 or not ring.is_one(v):
                term += str(v)
            if k > 0:
                term += self.variable
            if k > 1:
                term += to_superscript(k)
            terms.append(term)

        if len(terms) == 0:
            return "0"

        return " + ".join(terms)

    def __repr__(self):
        return f"DisplayPolynomial({self.polynomial!r}, {self.variable!r})"

def to_display(polynomial, variable : str) -> DisplayPolynomial:
    return DisplayPolynomial(polynomial, variable)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

def P(coeffs, ring=None):
    from libunipoly.polynomial import Polynomial
    return Polynomial(coeffs, ring)

class TestDisplay(unittest.TestCase):

    def test_display(self):
        p = P([1, 3, 2, 0, 1, 0])
        self.assertEqual(str(p.to_display("x")), "x⁵ + 3x⁴ + 2x³ + x")

        p = P([1] + [0] * 9 + [1])
        self.assertEqual(str(p.to_display("ω")), "ω¹⁰ + 1")

    def test_constant_one(self):
        self.assertEqual(str(P([1]).to_display("x")), "1")
        self.assertEqual(str(P([2, 1]).to_display("t")), "2t + 1")

    def test_zero(self):
        self.assertEqual(str(P([0, 0]).to_display("x")), "0")

    def test_str(self):
        self.assertEqual(str(P([1, 0, -2])), "x² + -2")

    def test_superscript(self):
        self.assertEqual(to_superscript(1234567890), "¹²³⁴⁵⁶⁷⁸⁹⁰")
