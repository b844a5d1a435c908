#!/usr/bin/env python3
#
#   Coefficient rings
#

import math
import numbers
import operator
import random
from fractions import Fraction
from functools import reduce
from typing import Union

import numpy as np

def prod(l):
    return reduce(operator.mul, l, 1)

########################################################################################################################
#   Modular Arithmetic
########################################################################################################################

def gcd(a, b):
    while b != 0:
        a %= b
        a,b = b,a
    return abs(a)

def xgcd(a, b):
    prevx, x = 1, 0
    prevy, y = 0, 1
    while b != 0:
        q, r = divmod(a, b)
        x, prevx = prevx - q * x, x
        y, prevy = prevy - q * y, y
        a, b = b, r
    return a, prevx, prevy

class Mod:
    """
    Arithmetic in GF(p)
    """

    def __init__(self, x : int, p : int):
        self.x = x
        self.p = p

        if self.x not in range(self.p):
            self.x %= self.p

        # Init for prime if not done
        if self.p not in Mod.__invert__.cache:
            Mod.__invert__.cache[self.p] = {}

    def __str__(self):
        return str(self.x)

    def __repr__(self):
        return f"Mod({self.x}, {self.p})"

    def __hash__(self):
        return hash((self.x, self.p))

    def cvt_other(self, other):
        if isinstance(other, numbers.Integral):
            other = Mod(int(other), self.p)
        elif isinstance(other, Rational):
            other = other.to_mod(self.p)
        return other

    def __add__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Mod):
            return NotImplemented
        assert self.p == other.p
        r = self.x + other.x
        if r >= self.p:
            r -= self.p
        return Mod(r, self.p)

    __radd__ = __add__

    def __sub__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Mod):
            return NotImplemented
        assert self.p == other.p
        r = self.x - other.x
        if r < 0:
            r += self.p
        return Mod(r, self.p)

    def __rsub__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Mod):
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Mod):
            return NotImplemented
        assert self.p == other.p
        return Mod(self.x * other.x, self.p)

    __rmul__ = __mul__

    def __pow__(self, other):
        assert isinstance(other, numbers.Integral)
        if other < 0:
            return (~self) ** -other
        return Mod(pow(self.x, int(other), self.p), self.p)

    def __invert__(self):
        """
        Multiplicative inverse
        """
        if self.x == 0:
            raise ZeroDivisionError(f"0 has no inverse mod {self.p}")

        cache = Mod.__invert__.cache[self.p]
        if self.x not in cache:
            _,x,_ = xgcd(self.x, self.p)
            # x is only an inverse if gcd(x, p) == 1, always true for p prime
            cache[self.x] = Mod(x, self.p)
        return cache[self.x]

    def __neg__(self):
        """
        Additive inverse
        """
        return Mod(self.p - self.x, self.p)

    def __truediv__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Mod):
            return NotImplemented
        assert self.p == other.p
        return self * ~other

    def __rtruediv__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Mod):
            return NotImplemented
        return other / self

    def __eq__(self, other):
        if isinstance(other, Mod):
            # Same field
            assert self.p == other.p , f"Comparing elements of GF({self.p}) and GF({other.p})"
            return self.x == other.x
        elif isinstance(other, numbers.Integral):
            # Test equality mod p
            return self.x == int(other) % self.p
        elif isinstance(other, Rational):
            return self.x == other.to_mod(self.p).x
        return NotImplemented

    def __lt__(self, other):
        return self.x < self.cvt_other(other).x

    def __gt__(self, other):
        return self.x > self.cvt_other(other).x

Mod.__invert__.cache = {}

########################################################################################################################
#   Rational Numbers
########################################################################################################################

class Rational:
    def __init__(self, num : int, dnm : int = 1):
        self.num = num
        self.dnm = dnm
        self.canonicalise()

    def tup(self):
        return self.num, self.dnm

    def __str__(self):
        if self.dnm == 1:
            return f"{self.num}"
        return f"{self.num}/{self.dnm}"

    def __repr__(self):
        return f"Rational({self.num}, {self.dnm})"

    def __hash__(self):
        return hash(Fraction(self.num, self.dnm))

    def canonicalise(self):
        # For consistency, require denominator 1 when numerator is 0
        if self.num == 0:
            self.dnm = 1
            return
        # Denominator can be 0 only when numerator is 0
        if self.dnm == 0:
            raise ZeroDivisionError(f"Rational({self.num}, 0)")
        # Move sign out of the denominator
        if self.dnm < 0:
            self.dnm = -self.dnm
            self.num = -self.num
        # Remove common factors
        g = gcd(self.num, self.dnm)
        self.num //= g
        self.dnm //= g

    def cvt_other(self, other):
        if isinstance(other, numbers.Integral):
            other = Rational(int(other), 1)
        elif isinstance(other, Fraction):
            other = Rational(other.numerator, other.denominator)
        return other

    def __add__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(self.num * other.dnm + self.dnm * other.num, self.dnm * other.dnm)

    __radd__ = __add__

    def __sub__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(self.num * other.dnm - self.dnm * other.num, self.dnm * other.dnm)

    def __rsub__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(self.dnm * other.num - self.num * other.dnm, self.dnm * other.dnm)

    def __mul__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(self.num * other.num, self.dnm * other.dnm)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(self.num * other.dnm, self.dnm * other.num)

    def __rtruediv__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return Rational(other.num * self.dnm, other.dnm * self.num)

    def __pow__(self, other):
        assert isinstance(other, numbers.Integral)
        if other < 0:
            return Rational(self.dnm ** -other, self.num ** -other)
        return Rational(self.num ** other, self.dnm ** other)

    def __invert__(self):
        return Rational(self.dnm, self.num)

    def __neg__(self):
        return Rational(-self.num, self.dnm)

    def __abs__(self):
        return Rational(abs(self.num), self.dnm)

    def __float__(self):
        return self.num / self.dnm

    def __complex__(self):
        return complex(float(self))

    def cmp(self, other, op):
        other = self.cvt_other(other)
        assert isinstance(other, Rational) , f"Comparing {type(self)} and {type(other)}"
        return op(self.num * other.dnm, other.num * self.dnm)

    def __eq__(self, other):
        other = self.cvt_other(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return self.num == other.num and self.dnm == other.dnm

    def __lt__(self, other):
        return self.cmp(other, operator.lt)

    def __gt__(self, other):
        return self.cmp(other, operator.gt)

    def __le__(self, other):
        return self.cmp(other, operator.le)

    def __ge__(self, other):
        return self.cmp(other, operator.ge)

    def to_mod(self, p):
        return Mod(self.num, p) * ~Mod(self.dnm, p)

########################################################################################################################
#   Coefficient Rings
########################################################################################################################

class CoefficientRing:
    """
    The capabilities polynomial arithmetic asks of its coefficients.

    Calling a ring coerces a value into it. The element operations default to Python's operators, subclasses override
    them where the element type needs something else.
    """

    def __call__(self, arg):
        raise NotImplementedError()

    def zero(self):
        return self(0)

    def one(self):
        return self(1)

    def is_zero(self, a):
        return bool(a == self.zero())

    def is_one(self, a):
        return bool(a == self.one())

    def add(self, a, b):
        return a + b

    def sub(self, a, b):
        return a - b

    def neg(self, a):
        return -a

    def mul(self, a, b):
        return a * b

    def div(self, a, b):
        return a / b

    def pow(self, a, e : int):
        return a ** e

    def mul_add(self, a, b, c):
        """
        a * b + c
        """
        return a * b + c

    def from_int(self, n : int):
        return self(n)

    def embeds(self, other) -> bool:
        """
        Whether every element of `other` can be coerced into this ring
        """
        return other == self or other == ZZ

    def rand_elem(self, min : int = 0):
        raise NotImplementedError()

    def rand_elems(self, num : int, min : int = 0):
        return [self.rand_elem(min) for _ in range(num)]

# Number kinds of the standard library, narrowest first
_TOWER = (int, Fraction, float, complex)

def _is_binary_float(kind):
    # kinds that a double holds exactly
    if issubclass(kind, float):
        return True
    return issubclass(kind, np.floating) and np.finfo(kind).nmant <= np.finfo(np.float64).nmant

def fma(a, b, c):
    """
    a * b + c rounded once.
    """
    if not all(math.isfinite(v) for v in (a, b, c)):
        return a * b + c
    exact = Fraction(float(a)) * Fraction(float(b)) + Fraction(float(c))
    try:
        rounded = float(exact)
    except OverflowError:
        # beyond the largest double, IEEE arithmetic gives the infinity of the right sign
        return a * b + c
    return type(a)(rounded)

def promote_kinds(k1, k2):
    if k1 is k2:
        return k1
    if k1 in _TOWER and k2 in _TOWER:
        return max(k1, k2, key=_TOWER.index)
    if Fraction in (k1, k2):
        other = k2 if k1 is Fraction else k1
        return Fraction if issubclass(other, numbers.Integral) else other
    return np.result_type(k1, k2).type

class NativeRing(CoefficientRing):
    """
    Python and numpy numbers of a single kind, e.g. int, float, complex, Fraction or numpy.float32
    """

    def __init__(self, kind):
        if kind is bool:
            kind = int
        if not issubclass(kind, numbers.Number):
            raise TypeError(f"{kind.__name__} is not a number type")
        self.kind = kind
        self.is_integral = issubclass(kind, numbers.Integral)

    def __repr__(self):
        return f"NativeRing({self.kind.__name__})"

    def __str__(self):
        return f"Native {self.kind.__name__} numbers"

    def __eq__(self, other):
        return isinstance(other, NativeRing) and self.kind is other.kind

    def __hash__(self):
        return hash(self.kind)

    def __call__(self, arg):
        if type(arg) is self.kind:
            return arg
        if isinstance(arg, Rational):
            arg = Fraction(arg.num, arg.dnm)
        if not isinstance(arg, numbers.Number):
            raise ValueError(f"{arg!r} cannot be a member of {self}")
        if self.is_integral and not isinstance(arg, numbers.Integral):
            raise ValueError(f"{arg!r} cannot be a member of {self}")
        return self.kind(arg)

    def zero(self):
        return self.kind(0)

    def one(self):
        return self.kind(1)

    def is_zero(self, a):
        return bool(a == 0)

    def is_one(self, a):
        return bool(a == 1)

    def div(self, a, b):
        if not self.is_integral:
            return a / b
        # Only exact quotients stay in the ring
        q, r = divmod(a, b)
        if r != 0:
            raise ArithmeticError(f"{b} does not divide {a} in {self}")
        return q

    def mul_add(self, a, b, c):
        if _is_binary_float(self.kind):
            return fma(self(a), self(b), self(c))
        return a * b + c

    def embeds(self, other):
        if super().embeds(other):
            return True
        if isinstance(other, NativeRing):
            return promote_kinds(self.kind, other.kind) is self.kind
        if isinstance(other, RationalField):
            return not self.is_integral
        return False

    def rand_elem(self, min : int = 0):
        # Bounds are arbitrary for testing purposes
        if self.is_integral:
            return self.kind(random.randint(min, 100))
        if self.kind is Fraction:
            return Fraction(random.randint(min, 100), random.randint(1, 100))
        if issubclass(self.kind, numbers.Real):
            return self.kind(random.uniform(min, 100))
        return self.kind(complex(random.uniform(min, 100), random.uniform(min, 100)))

ZZ = NativeRing(int)
RR = NativeRing(float)
CC = NativeRing(complex)

class RationalField(CoefficientRing):
    def __call__(self, arg : Union[Rational, int, Fraction]):
        if isinstance(arg, Rational):
            return arg
        elif isinstance(arg, numbers.Integral):
            return Rational(int(arg), 1)
        elif isinstance(arg, Fraction):
            return Rational(arg.numerator, arg.denominator)
        else:
            raise ValueError(f"{arg!r} cannot be a member of a rational field")

    def __repr__(self):
        return "QQ"

    def __str__(self):
        return "The Rational Numbers"

    def __eq__(self, other):
        return isinstance(other, RationalField)

    def __hash__(self):
        return hash(RationalField)

    def embeds(self, other):
        if super().embeds(other):
            return True
        return isinstance(other, NativeRing) and (other.is_integral or other.kind is Fraction)

    def rand_elem(self, min : int = 0):
        # Bounds are arbitrary for testing purposes
        return Rational(random.randint(min, 100), random.randint(1, 100))

QQ = RationalField()

class GF(CoefficientRing):
    def __init__(self, p : int):
        assert p > 0
        self.p = p

    def __repr__(self):
        return f"GF({self.p})"

    def __str__(self):
        return repr(self)

    def __eq__(self, other):
        if isinstance(other, GF):
            return self.p == other.p
        return False

    def __hash__(self):
        return hash(("GF", self.p))

    def __call__(self, arg : Union[Mod, int]):
        if isinstance(arg, Mod):
            if arg.p != self.p:
                raise ValueError(f"{arg!r} is not a member of {self}")
            return arg
        elif isinstance(arg, numbers.Integral):
            return Mod(int(arg), self.p)
        elif isinstance(arg, Rational):
            return Mod(arg.num, self.p) / Mod(arg.dnm, self.p)
        else:
            raise ValueError(f"{arg!r} cannot be a member of a prime field")

    def embeds(self, other):
        if super().embeds(other):
            return True
        return isinstance(other, NativeRing) and other.is_integral

    def rand_elem(self, min : int = 0):
        return Mod(random.randint(min, self.p - 1), self.p)

########################################################################################################################
#   Ring Lookup
########################################################################################################################

def ring_of(value) -> CoefficientRing:
    """
    The ring `value` belongs to. Values that know their ring (polynomials) expose it as `value.ring`.
    """
    ring = getattr(value, "ring", None)
    if isinstance(ring, CoefficientRing):
        return ring
    if isinstance(value, Mod):
        return GF(value.p)
    if isinstance(value, Rational):
        return QQ
    if isinstance(value, numbers.Number):
        return NativeRing(type(value))
    raise TypeError(f"{value!r} is not an element of a known ring")

def common_ring(r1 : CoefficientRing, r2 : CoefficientRing) -> CoefficientRing:
    """
    The ring both `r1` and `r2` can be coerced into. Python integers go into every ring.
    """
    if r1 == r2 or r2 == ZZ:
        return r1
    if r1 == ZZ:
        return r2
    if isinstance(r1, NativeRing) and isinstance(r2, NativeRing):
        return NativeRing(promote_kinds(r1.kind, r2.kind))
    if r1.embeds(r2):
        return r1
    if r2.embeds(r1):
        return r2
    raise TypeError(f"No common ring for {r1} and {r2}")

def ring_for_coeffs(coeffs) -> CoefficientRing:
    """
    Infers a coefficient ring for a sequence of coefficients, ZZ if it is empty.
    """
    if isinstance(coeffs, np.ndarray) and coeffs.dtype != object:
        return NativeRing(coeffs.dtype.type)
    return reduce(common_ring, (ring_of(c) for c in coeffs), ZZ)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

class TestGCD(unittest.TestCase):

    def test_gcd(self):
        self.assertEqual(gcd(4, 3), 1)
        self.assertEqual(gcd(12, 3), 3)
        self.assertEqual(gcd(21, 9), 3)
        self.assertEqual(gcd(1, -2), gcd(1, 2))
        self.assertEqual(gcd(-1, -2), gcd(1, 2))

    def test_xgcd(self):
        self.assertEqual(xgcd(30, 18), (6, -1, 2))
        self.assertEqual(xgcd(18, 30), (6, 2, -1))

class TestMod(unittest.TestCase):

    def test_arith(self):
        for _ in range(1000):
            p = random.randint(2, 65525)
            x1 = random.randint(2, 65525)
            x2 = random.randint(2, 65525)
            self.assertEqual(Mod(x1, p) + Mod(x2, p), (x1 + x2) % p)
            self.assertEqual(Mod(x1, p) - Mod(x2, p), (x1 - x2) % p)
            self.assertEqual(Mod(x1, p) * Mod(x2, p), (x1 * x2) % p)
            self.assertEqual(-Mod(x1, p), (-x1) % p)

    def test_division(self):
        ps = [65413, 65419, 65423, 65437, 65447, 65449, 65479, 65497, 65519, 65521]
        for p in ps:
            x1 = Mod(random.randint(2, p - 1), p)
            x2 = Mod(random.randint(2, p - 1), p)
            self.assertEqual(x2 * ~x2, 1)
            self.assertEqual(x1 / x2, x1 * ~x2)
            self.assertEqual(x2 ** -1, ~x2)

    def test_zero_inverse(self):
        with self.assertRaises(ZeroDivisionError):
            ~Mod(0, 7)

class TestRational(unittest.TestCase):

    def test_conversion(self):
        self.assertEqual(Rational(0, 0).tup(), (0, 1))
        self.assertEqual(Rational(6, 3).tup(), (2, 1))
        self.assertEqual(Rational(2, -4).tup(), (-1, 2))
        self.assertEqual(float(Rational(1, 4)), 0.25)

    def test_arith(self):
        self.assertEqual((Rational(4, 5) + Rational(6, 7)).tup(), (58, 35))
        self.assertEqual((Rational(3, 2) * Rational(-1, 2)).tup(), (-3, 4))
        self.assertEqual((Rational(3, 5) / Rational(8, 7)).tup(), (21, 40))
        self.assertEqual((1 - Rational(1, 3)).tup(), (2, 3))
        self.assertEqual((Rational(2, 3) ** -2).tup(), (9, 4))

    def test_div_zero(self):
        with self.assertRaises(ZeroDivisionError):
            Rational(1, 2) / Rational(0, 1)

class TestRings(unittest.TestCase):

    def test_native(self):
        self.assertEqual(RR(2), 2.0)
        self.assertIs(type(RR(2)), float)
        self.assertEqual(ZZ.zero(), 0)
        self.assertTrue(ZZ.is_zero(0))
        self.assertTrue(RR.is_zero(-0.0))
        self.assertEqual(NativeRing(Fraction)(Rational(1, 3)), Fraction(1, 3))
        with self.assertRaises(ValueError):
            ZZ(2.5)
        with self.assertRaises(ValueError):
            RR(Mod(1, 7))

    def test_integer_division(self):
        self.assertEqual(ZZ.div(6, 3), 2)
        self.assertEqual(ZZ.div(-6, 3), -2)
        with self.assertRaises(ArithmeticError):
            ZZ.div(7, 2)
        self.assertEqual(RR.div(7, 2), 3.5)

    def test_fma(self):
        # a * a - 1 loses everything but the rounding error of a * a when fused
        a = 1.0 + 2.0 ** -30
        self.assertEqual(RR.mul_add(a, a, -1.0), 2.0 ** -29 + 2.0 ** -60)
        self.assertEqual(a * a - 1.0, 2.0 ** -29)
        self.assertEqual(RR.mul_add(2.0, 3.0, 1.0), 7.0)
        self.assertEqual(ZZ.mul_add(2, 3, 1), 7)
        self.assertTrue(math.isinf(RR.mul_add(math.inf, 2.0, 1.0)))

    def test_fma_overflow(self):
        self.assertEqual(fma(1e308, 10.0, 0.0), math.inf)
        self.assertEqual(fma(-1e308, 10.0, 1.0), -math.inf)
        self.assertEqual(RR.mul_add(1e308, 10.0, 0.0), math.inf)
        self.assertEqual(RR.mul_add(1e308, 1.0, 1e308), math.inf)

    def test_wide_floats_not_fused(self):
        self.assertTrue(_is_binary_float(float))
        self.assertTrue(_is_binary_float(np.float32))
        self.assertTrue(_is_binary_float(np.float64))
        wide = np.finfo(np.longdouble).nmant > np.finfo(np.float64).nmant
        self.assertEqual(_is_binary_float(np.longdouble), not wide)
        # operands a double cannot hold keep their full precision
        L = NativeRing(np.longdouble)
        a = np.longdouble(1) + np.longdouble(2) ** -60
        self.assertEqual(L.mul_add(a, L.one(), L.zero()), a)

    def test_prime_field(self):
        F = GF(7)
        self.assertEqual(F(10), Mod(3, 7))
        self.assertEqual(F(Mod(3, 7)), Mod(3, 7))
        self.assertEqual(F(Rational(1, 2)), Mod(4, 7))
        with self.assertRaises(ValueError):
            F(Mod(3, 5))
        with self.assertRaises(ValueError):
            F(1.5)

    def test_numpy_kinds(self):
        F32 = NativeRing(np.float32)
        self.assertIs(type(F32.one()), np.float32)
        self.assertIs(type(F32.mul_add(np.float32(2), np.float32(3), np.float32(1))), np.float32)
        self.assertTrue(NativeRing(np.int64).is_integral)
        self.assertEqual(common_ring(F32, ZZ), F32)
        self.assertEqual(common_ring(NativeRing(np.int8), NativeRing(np.int64)), NativeRing(np.int64))

    def test_common_ring(self):
        self.assertEqual(common_ring(ZZ, RR), RR)
        self.assertEqual(common_ring(RR, CC), CC)
        self.assertEqual(common_ring(ZZ, NativeRing(Fraction)), NativeRing(Fraction))
        self.assertEqual(common_ring(GF(7), ZZ), GF(7))
        self.assertEqual(common_ring(QQ, RR), RR)
        self.assertEqual(common_ring(QQ, NativeRing(Fraction)), QQ)
        with self.assertRaises(TypeError):
            common_ring(GF(7), RR)
        with self.assertRaises(TypeError):
            common_ring(GF(7), GF(11))

    def test_ring_of(self):
        self.assertEqual(ring_of(3), ZZ)
        self.assertEqual(ring_of(True), ZZ)
        self.assertEqual(ring_of(1.5), RR)
        self.assertEqual(ring_of(Mod(3, 7)), GF(7))
        self.assertEqual(ring_of(Rational(1, 2)), QQ)
        self.assertEqual(ring_of(np.float32(1)), NativeRing(np.float32))
        with self.assertRaises(TypeError):
            ring_of("x")

    def test_ring_for_coeffs(self):
        self.assertEqual(ring_for_coeffs([]), ZZ)
        self.assertEqual(ring_for_coeffs([1, 2.0]), RR)
        self.assertEqual(ring_for_coeffs([1, 2j]), CC)
        self.assertEqual(ring_for_coeffs([1, Mod(2, 5)]), GF(5))
        self.assertEqual(ring_for_coeffs(np.array([1, 2], dtype=np.float32)), NativeRing(np.float32))
        self.assertEqual(ring_for_coeffs([np.float32(1), 2]), NativeRing(np.float32))
