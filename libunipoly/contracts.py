#!/usr/bin/env python3
#
#   Contract checks
#

"""
Every failure of the arithmetic core is a broken precondition on the caller's side, never a recoverable condition.
They are raised as ContractViolation subclasses.

`require` always checks. `assume` marks conditions that hold by construction; it checks as well unless the
`unchecked-contracts` option has been switched on explicitly.
"""

import numpy as np

from libunipoly.logging import event
from libunipoly.opts import Option

unchecked = Option("unchecked-contracts", description="skip assumption checks on polynomial invariants")

# Largest representable order (degree) of a polynomial
MAX_ORDER = int(np.iinfo(np.int32).max)

class ContractViolation(AssertionError):
    pass

class DegreeOverflow(ContractViolation, OverflowError):
    pass

class ZeroPolynomialDivision(ContractViolation, ZeroDivisionError):
    pass

def require(cond, msg : str, exc=ContractViolation):
    if not cond:
        event(f"contract violation: {msg}")
        raise exc(msg)

def assume(cond, msg : str):
    if unchecked.value:
        return
    require(cond, msg)

def check_length(length : int):
    """
    Checks that a coefficient sequence of `length` entries has a representable order.
    """
    require(length > 0, "coefficient sequence must not be empty")
    require(length - 1 <= MAX_ORDER, f"order {length - 1} exceeds {MAX_ORDER}", DegreeOverflow)

def checked_add_orders(a : int, b : int) -> int:
    s = a + b
    require(s <= MAX_ORDER, f"order {a} + {b} exceeds {MAX_ORDER}", DegreeOverflow)
    return s

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

class TestContracts(unittest.TestCase):

    def setUp(self):
        self.old_unchecked = unchecked.value

    def tearDown(self):
        unchecked.value = self.old_unchecked

    def test_require(self):
        require(True, "never raised")
        with self.assertRaises(ContractViolation):
            require(False, "raised")
        with self.assertRaises(ZeroDivisionError):
            require(False, "raised", ZeroPolynomialDivision)

    def test_assume(self):
        unchecked.value = False
        with self.assertRaises(ContractViolation):
            assume(False, "checked")
        unchecked.value = True
        assume(False, "skipped")

    def test_lengths(self):
        check_length(1)
        check_length(MAX_ORDER + 1)
        with self.assertRaises(DegreeOverflow):
            check_length(MAX_ORDER + 2)
        with self.assertRaises(ContractViolation):
            check_length(0)

    def test_add_orders(self):
        self.assertEqual(checked_add_orders(3, 2), 5)
        self.assertEqual(checked_add_orders(MAX_ORDER - 1, 1), MAX_ORDER)
        with self.assertRaises(OverflowError):
            checked_add_orders(MAX_ORDER, 1)
        # overflow is a contract violation, not a recoverable error
        with self.assertRaises(AssertionError):
            checked_add_orders(MAX_ORDER, MAX_ORDER)
