"""
Dense univariate polynomials over pluggable coefficient rings.
"""

from libunipoly.basic_types import CC, GF, QQ, RR, ZZ, CoefficientRing, Mod, NativeRing, Rational
from libunipoly.contracts import ContractViolation, DegreeOverflow, ZeroPolynomialDivision
from libunipoly.polynomial import Polynomial, PolynomialRing
