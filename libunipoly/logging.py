#!/usr/bin/env python3
#
#   Indented, timed log messages
#

"""
Progress output for long running arithmetic.

Work is wrapped in `task` blocks, which nest. Messages from `event` are indented by the number of open tasks, and
each finished task reports its duration. The time spent in every chain of nested tasks is accumulated for
`dump_profile`.

Nothing is printed unless the `verbose` option is set.
"""

from collections import Counter
from contextlib import contextmanager
import time

from libunipoly.opts import Option

verbose = Option("verbose", description="print arithmetic tasks and contract violations")

_started = time.perf_counter()
# (name, start time) of every open task, outermost first
_open = []
# seconds spent per chain of nested task names
_profile = Counter()

def _indent(depth : int) -> str:
    return "  " * depth

def log(string):
    if verbose.value:
        print(string)

def task_begin(name, **kwargs):
    if verbose.value:
        details = ", ".join(f"{k}={v}" for k,v in kwargs.items())
        log(_indent(len(_open)) + name + (f" [{details}]" if details else "") + "...")
    _open.append((name, time.perf_counter()))

def task_end():
    chain = tuple(name for name,_ in _open)
    name, start = _open.pop()
    elapsed = time.perf_counter() - start
    _profile[chain] += elapsed
    if verbose.value:
        log(f"{_indent(len(_open))}Finished {name} [duration={elapsed:.3}s]")

@contextmanager
def task(name, **kwargs):
    task_begin(name, **kwargs)
    try:
        yield
    finally:
        task_end()

def event(message):
    if verbose.value:
        log(_indent(len(_open)) + message)

def dump_profile(path : str):
    """
    Writes the accumulated task timings to `path`, slowest first.
    """
    with open(path, "w") as f:
        print(f"Total duration: {time.perf_counter() - _started:.3} seconds", file=f)
        print(f"Currently in: {', '.join(name for name,_ in _open)}", file=f)
        print(file=f)
        for chain,seconds in _profile.most_common():
            print(f"{seconds:16.3} {' > '.join(chain)}", file=f)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import contextlib
import io
import os
import tempfile
import unittest

class TestLogging(unittest.TestCase):

    def setUp(self):
        self.old_verbose = verbose.value

    def tearDown(self):
        verbose.value = self.old_verbose

    def test_quiet(self):
        verbose.value = False
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            with task("outer"):
                event("hidden")
        self.assertEqual(out.getvalue(), "")

    def test_nesting(self):
        verbose.value = True
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            with task("outer", n=2):
                with task("inner"):
                    event("step")
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "outer [n=2]...")
        self.assertEqual(lines[1], "  inner...")
        self.assertEqual(lines[2], "    step")
        self.assertTrue(lines[3].startswith("  Finished inner"))
        self.assertTrue(lines[4].startswith("Finished outer"))
        self.assertEqual(_open, [])

    def test_task_end_on_error(self):
        with self.assertRaises(ValueError):
            with task("failing"):
                raise ValueError()
        self.assertEqual(_open, [])

    def test_dump_profile(self):
        with task("profiled"):
            with task("nested"):
                pass
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "profile.txt")
            dump_profile(path)
            with open(path) as f:
                contents = f.read()
        self.assertTrue(contents.startswith("Total duration:"))
        self.assertIn("profiled > nested", contents)
