#!/usr/bin/env python3
#
#   Module-local switches
#

"""
Each module that has a switchable behaviour declares an Option next to the code that reads it. `setup` adds a
command line flag for every Option declared so far, `read` takes the parsed flags back.
"""

# Every Option declared so far, in declaration order
_OPTS = []

# Values to use for Options declared after a `restore`
_PENDING = {}

class Option:
    """
    An on/off switch. Flags that default to on are turned off with `--no-<name>`.
    """

    def __init__(self, name : str, default : bool = False, description : str = ""):
        self.name = name
        self.default = default
        self.description = description
        self.value = _PENDING.get(name, default)
        _OPTS.append(self)

    def __repr__(self):
        return f"Option({self.name!r}, {self.value!r})"

    def __bool__(self):
        raise TypeError(f"Option {self.name!r} used as a truth value, read `.value` instead")

    @property
    def flag(self):
        return ("no-" + self.name) if self.default else self.name

def setup(parser):
    for o in _OPTS:
        parser.add_argument("--" + o.flag, action="store_true", help=o.description)

def read(args):
    for o in _OPTS:
        given = getattr(args, o.flag.replace("-", "_"))
        o.value = o.default != given

def snapshot():
    return { o.name : o.value for o in _OPTS }

def restore(snap):
    global _PENDING
    for o in _OPTS:
        o.value = snap.get(o.name, o.value)
    _PENDING = dict(snap)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import argparse
import unittest

class TestOptions(unittest.TestCase):

    def setUp(self):
        self.snap = snapshot()
        self.declared = len(_OPTS)

    def tearDown(self):
        del _OPTS[self.declared:]
        restore(self.snap)

    def test_parse(self):
        flag = Option("test-flag", description="a flag")
        parser = argparse.ArgumentParser()
        setup(parser)
        read(parser.parse_args(["--test-flag"]))
        self.assertTrue(flag.value)
        read(parser.parse_args([]))
        self.assertFalse(flag.value)

    def test_default_on(self):
        flag = Option("test-default-on", True)
        self.assertEqual(flag.flag, "no-test-default-on")
        parser = argparse.ArgumentParser()
        setup(parser)
        read(parser.parse_args(["--no-test-default-on"]))
        self.assertFalse(flag.value)
        read(parser.parse_args([]))
        self.assertTrue(flag.value)

    def test_snapshot_restore(self):
        flag = Option("test-snap")
        snap = snapshot()
        flag.value = True
        restore(snap)
        self.assertFalse(flag.value)

    def test_restore_before_declaration(self):
        restore({"test-late": True})
        self.assertTrue(Option("test-late").value)

    def test_no_bool(self):
        flag = Option("test-bool")
        with self.assertRaises(TypeError):
            bool(flag)
